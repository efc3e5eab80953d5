# apps/core/exceptions.py

"""
Erros de domínio do UpTask

Cada erro carrega o status HTTP e a mensagem que a camada de views
devolve ao cliente (ver permissions.resposta_api). NaoEncontrado e
AcessoNegado são sempre distintos.
"""

from django.core.exceptions import PermissionDenied
from django.http import Http404


class ErroDominio(Exception):
    status = 400
    mensagem = 'Ação não válida'

    def __init__(self, mensagem=None):
        self.mensagem = mensagem or self.mensagem
        super().__init__(self.mensagem)


# === NÃO ENCONTRADO (404) ===

class NaoEncontrado(ErroDominio, Http404):
    status = 404
    mensagem = 'Não encontrado'


class ProjetoNaoEncontrado(NaoEncontrado):
    mensagem = 'Projeto não encontrado'


class TarefaNaoEncontrada(NaoEncontrado):
    mensagem = 'Tarefa não encontrada'


class UsuarioNaoEncontrado(NaoEncontrado):
    mensagem = 'Usuário não encontrado'


class TokenInvalido(NaoEncontrado):
    mensagem = 'Token inválido'


# === SEM PERMISSÃO (403) ===

class AcessoNegado(ErroDominio, PermissionDenied):
    status = 403
    mensagem = 'Você não tem permissão para esta ação'


# === CONFLITO (409) ===

class Conflito(ErroDominio):
    """Resultado esperado de uma regra de negócio, não uma anomalia"""

    status = 409
    mensagem = 'Conflito'


class CriadorNaoPodeSerColaborador(Conflito):
    mensagem = 'O criador do projeto não pode ser colaborador'


class ColaboradorDuplicado(Conflito):
    mensagem = 'O usuário já pertence ao projeto'


class UsuarioJaRegistrado(Conflito):
    mensagem = 'Usuário já registrado'


# === DADOS INVÁLIDOS (400) ===

class DadosInvalidos(ErroDominio):
    status = 400
    mensagem = 'Dados inválidos'

    def __init__(self, erros=None, mensagem=None):
        self.erros = dict(erros or {})
        super().__init__(mensagem)
