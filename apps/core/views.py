# apps/core/views.py

from django.core.cache import cache
from django.http import JsonResponse
from django.middleware.csrf import get_token
from django.utils import timezone
from django.views.decorators.csrf import ensure_csrf_cookie
from django.views.decorators.http import require_http_methods

from .auth_service import AutenticacaoService
from .colaboracao_service import ColaboracaoService
from .models import Usuario
from .permissions import requer_login_api, resposta_api
from .projeto_service import ProjetoService
from .utils import ler_json, serializar_projeto, serializar_usuario


# === USUÁRIOS ===

@require_http_methods(['GET'])
@ensure_csrf_cookie
def csrf(request):
    """
    Entrega o token CSRF ao frontend

    O cookie csrftoken não é legível pelo frontend em outro domínio, então o
    token volta também no corpo; o cliente o reenvia no header X-CSRFToken
    em todo POST, PUT e DELETE. O login troca o token: chame de novo depois.
    """
    return JsonResponse({'csrfToken': get_token(request)})


def falha_csrf(request, reason=''):
    """CSRF_FAILURE_VIEW: responde em JSON como o resto da API"""
    return JsonResponse({'msg': 'Token CSRF ausente ou inválido'}, status=403)


@require_http_methods(['POST'])
@resposta_api
def registrar(request):
    """Cria conta e envia email de confirmação"""
    AutenticacaoService().registrar(ler_json(request))
    return JsonResponse(
        {'msg': 'Usuário criado corretamente, verifique seu email para confirmar a conta'},
        status=201
    )


@require_http_methods(['GET'])
@resposta_api
def confirmar(request, token):
    AutenticacaoService().confirmar(token)
    return JsonResponse({'msg': 'Conta confirmada corretamente'})


@require_http_methods(['POST'])
@resposta_api
def login_view(request):
    dados = ler_json(request)
    usuario = AutenticacaoService().fazer_login(
        request, dados.get('email'), dados.get('password', '')
    )
    return JsonResponse(serializar_usuario(usuario))


@require_http_methods(['POST'])
def logout_view(request):
    AutenticacaoService().fazer_logout(request)
    return JsonResponse({'msg': 'Sessão encerrada'})


@require_http_methods(['POST'])
@resposta_api
def esqueci_senha(request):
    AutenticacaoService().iniciar_recuperacao_senha(ler_json(request).get('email'))
    return JsonResponse({'msg': 'Enviamos um email com as instruções'})


@require_http_methods(['GET', 'POST'])
@resposta_api
def nova_senha(request, token):
    """
    GET: verifica se o token é válido
    POST: grava a nova senha
    """
    service = AutenticacaoService()

    if request.method == 'GET':
        service.validar_token(token)
        return JsonResponse({'msg': 'Token válido e o usuário existe'})

    service.redefinir_senha(token, ler_json(request))
    return JsonResponse({'msg': 'Senha alterada corretamente'})


@require_http_methods(['GET'])
@requer_login_api
def perfil(request):
    return JsonResponse(serializar_usuario(request.user))


# === PROJETOS ===

@require_http_methods(['GET', 'POST'])
@requer_login_api
@resposta_api
def projetos(request):
    """
    GET: projetos onde o usuário é criador ou colaborador (sem tarefas)
    POST: cria projeto com o usuário como criador
    """
    service = ProjetoService()

    if request.method == 'GET':
        lista = service.listar(request.user)
        return JsonResponse([serializar_projeto(p) for p in lista], safe=False)

    projeto = service.criar(request.user, ler_json(request))
    return JsonResponse(serializar_projeto(projeto), status=201)


@require_http_methods(['GET', 'PUT', 'DELETE'])
@requer_login_api
@resposta_api
def projeto_detalhe(request, projeto_id):
    service = ProjetoService()

    if request.method == 'GET':
        projeto = service.obter(projeto_id, request.user)
        return JsonResponse(serializar_projeto(projeto, expandir=True))

    if request.method == 'PUT':
        projeto = service.editar(projeto_id, request.user, ler_json(request))
        return JsonResponse(serializar_projeto(projeto))

    service.excluir(projeto_id, request.user)
    return JsonResponse({'msg': 'Projeto excluído corretamente'})


@require_http_methods(['POST'])
@requer_login_api
@resposta_api
def buscar_colaborador(request):
    candidato = ColaboracaoService().buscar_candidato(ler_json(request).get('email'))
    return JsonResponse(candidato)


@require_http_methods(['POST'])
@requer_login_api
@resposta_api
def adicionar_colaborador(request, projeto_id):
    projeto = ProjetoService().carregar(projeto_id)
    ColaboracaoService().adicionar_colaborador(
        projeto, request.user, ler_json(request).get('email')
    )
    return JsonResponse({'msg': 'Colaborador adicionado corretamente'})


@require_http_methods(['POST'])
@requer_login_api
@resposta_api
def remover_colaborador(request, projeto_id):
    projeto = ProjetoService().carregar(projeto_id)
    ColaboracaoService().remover_colaborador(
        projeto, request.user, ler_json(request).get('id')
    )
    return JsonResponse({'msg': 'Colaborador removido corretamente'})


# === MONITORAMENTO ===

def health_check(request):
    """
    Health check para monitoramento
    """
    try:
        # Verificar conexão com banco
        Usuario.objects.count()

        # Verificar cache (Redis em produção)
        cache.set('health_check', 'ok', 60)
        cache.get('health_check')

        status = {
            'status': 'healthy',
            'database': 'ok',
            'cache': 'ok',
            'timestamp': timezone.now().isoformat(),
            'version': '0.1.0'
        }

        return JsonResponse(status)

    except Exception as e:
        status = {
            'status': 'unhealthy',
            'error': str(e),
            'timestamp': timezone.now().isoformat(),
            'version': '0.1.0'
        }

        return JsonResponse(status, status=500)
