# apps/core/permissions.py

import logging
from functools import wraps

from django.db import DatabaseError
from django.http import JsonResponse

from .exceptions import AcessoNegado, Conflito, DadosInvalidos, ErroDominio

logger = logging.getLogger(__name__)


class PermissoesProjeto:
    """
    Regras de acesso a projetos do UpTask

    Apenas duas regras, recalculadas a cada requisição:
    - gerenciar: somente o criador (editar, excluir, colaboradores, tarefas)
    - visualizar: criador ou colaborador
    """

    @staticmethod
    def ids_colaboradores(projeto):
        """Ids dos colaboradores (usa o prefetch se houver)"""
        return {colaborador.pk for colaborador in projeto.colaboradores.all()}

    @staticmethod
    def pode_gerenciar(projeto, user):
        """Verifica se pode editar/excluir o projeto e gerenciar colaboradores"""
        if not user.is_authenticated:
            return False
        return user.pk == projeto.criador_id

    @staticmethod
    def pode_visualizar(projeto, user):
        """Verifica se pode ver o projeto com tarefas e colaboradores"""
        if not user.is_authenticated:
            return False

        # Criador sempre pode
        if user.pk == projeto.criador_id:
            return True

        return user.pk in PermissoesProjeto.ids_colaboradores(projeto)

    @staticmethod
    def exigir_gerencia(projeto, user):
        if not PermissoesProjeto.pode_gerenciar(projeto, user):
            raise AcessoNegado('Ação não válida')

    @staticmethod
    def exigir_visualizacao(projeto, user):
        if not PermissoesProjeto.pode_visualizar(projeto, user):
            raise AcessoNegado('Você não tem permissão')


# Decoradores para views da API

def requer_login_api(view_func):
    """Decorador que responde 401 em JSON ao invés de redirecionar"""

    @wraps(view_func)
    def wrapped_view(request, *args, **kwargs):
        if not request.user.is_authenticated:
            return JsonResponse({'msg': 'Autenticação necessária'}, status=401)
        return view_func(request, *args, **kwargs)

    return wrapped_view


def resposta_api(view_func):
    """
    Converte erros de domínio em respostas JSON {'msg': ...}

    NaoEncontrado -> 404, AcessoNegado -> 403, Conflito -> 409,
    DadosInvalidos -> 400 (com 'erros'), DatabaseError -> 503.
    """

    @wraps(view_func)
    def wrapped_view(request, *args, **kwargs):
        try:
            return view_func(request, *args, **kwargs)

        except DadosInvalidos as e:
            return JsonResponse({'msg': e.mensagem, 'erros': e.erros}, status=e.status)

        except Conflito as e:
            # Conflito é um resultado normal, não uma anomalia
            logger.debug(f"Conflito em {request.path}: {e.mensagem}")
            return JsonResponse({'msg': e.mensagem}, status=e.status)

        except ErroDominio as e:
            return JsonResponse({'msg': e.mensagem}, status=e.status)

        except DatabaseError:
            logger.exception(f"❌ Falha no banco de dados em {request.method} {request.path}")
            return JsonResponse({'msg': 'Serviço temporariamente indisponível'}, status=503)

    return wrapped_view
