# apps/tarefas/views.py

from asgiref.sync import async_to_sync
from django.http import JsonResponse
from django.views.decorators.http import require_http_methods

from apps.core.permissions import requer_login_api, resposta_api
from apps.core.utils import ler_json, serializar_tarefa
from .canal import CanalProjeto
from .tarefa_service import TarefaService


def notificar(request, operacao, tarefa):
    """
    Envia o evento para a sala do projeto via WebSocket

    A sessão WebSocket de quem fez a requisição (header X-Canal-Sessao)
    não recebe o próprio evento. Falhas de envio não afetam a resposta.
    """
    canal = CanalProjeto()
    metodo = getattr(canal, operacao)
    async_to_sync(metodo)(tarefa, excluir=request.headers.get('X-Canal-Sessao'))


@require_http_methods(['POST'])
@requer_login_api
@resposta_api
def tarefas(request):
    """Cria tarefa no projeto informado em 'projeto'"""
    tarefa = TarefaService().criar(request.user, ler_json(request))
    dados = serializar_tarefa(tarefa)

    notificar(request, 'tarefa_criada', dados)
    return JsonResponse(dados, status=201)


@require_http_methods(['GET', 'PUT', 'DELETE'])
@requer_login_api
@resposta_api
def tarefa_detalhe(request, tarefa_id):
    service = TarefaService()

    if request.method == 'GET':
        tarefa = service.obter(tarefa_id, request.user)
        return JsonResponse(serializar_tarefa(tarefa))

    if request.method == 'PUT':
        tarefa = service.editar(tarefa_id, request.user, ler_json(request))
        dados = serializar_tarefa(tarefa)
        notificar(request, 'tarefa_editada', dados)
        return JsonResponse(dados)

    tarefa = service.excluir(tarefa_id, request.user)
    notificar(request, 'tarefa_excluida', serializar_tarefa(tarefa))
    return JsonResponse({'msg': 'Tarefa excluída corretamente'})


@require_http_methods(['POST'])
@requer_login_api
@resposta_api
def alternar_estado(request, tarefa_id):
    tarefa = TarefaService().alternar_estado(tarefa_id, request.user)
    dados = serializar_tarefa(tarefa)

    notificar(request, 'tarefa_completada', dados)
    return JsonResponse(dados)
