# apps/core/colaboracao_service.py

"""
Serviço de Colaboração - encapsula a gestão de colaboradores de um projeto

Recebe o projeto já resolvido (ver ProjetoService.carregar) e aplica as
verificações na ordem definida; nenhuma alteração é gravada se alguma falhar.
Não há lock entre chamadas concorrentes para o mesmo projeto: a unicidade
da tabela de colaboradores mantém o conjunto consistente.
"""

import logging
from typing import Dict

from .exceptions import (
    ColaboradorDuplicado,
    CriadorNaoPodeSerColaborador,
    UsuarioNaoEncontrado,
)
from .models import Projeto, Usuario
from .permissions import PermissoesProjeto
from .repositories import ProjetoRepository, UsuarioRepository
from .utils import serializar_usuario

logger = logging.getLogger(__name__)


class ColaboracaoService:

    def __init__(self, projetos: ProjetoRepository = None, usuarios: UsuarioRepository = None):
        self._projetos = projetos or ProjetoRepository()
        self._usuarios = usuarios or UsuarioRepository()

    def buscar_candidato(self, email: str) -> Dict:
        """
        Busca um usuário por email para convidar

        Returns:
            Dict com id, nome e email apenas
        """
        usuario = self._usuarios.buscar_por_email(email)
        if usuario is None:
            raise UsuarioNaoEncontrado()
        return serializar_usuario(usuario)

    def adicionar_colaborador(self, projeto: Projeto, solicitante, email: str) -> Usuario:
        """
        Adiciona o usuário do email como colaborador

        Verificações, nesta ordem:
        1. solicitante é o criador (AcessoNegado)
        2. o email pertence a um usuário (UsuarioNaoEncontrado)
        3. o usuário não é o criador (CriadorNaoPodeSerColaborador)
        4. o usuário ainda não é colaborador (ColaboradorDuplicado)
        """
        PermissoesProjeto.exigir_gerencia(projeto, solicitante)

        usuario = self._usuarios.buscar_por_email(email)
        if usuario is None:
            raise UsuarioNaoEncontrado()

        if usuario.pk == projeto.criador_id:
            raise CriadorNaoPodeSerColaborador()

        if self._projetos.eh_colaborador(projeto, usuario.pk):
            raise ColaboradorDuplicado()

        self._projetos.adicionar_colaborador(projeto, usuario)
        logger.info(f"👥 {usuario.email} adicionado ao projeto {projeto.pk}")
        return usuario

    def remover_colaborador(self, projeto: Projeto, solicitante, usuario_id) -> None:
        """
        Remove o colaborador; remover quem não é colaborador não é erro
        """
        PermissoesProjeto.exigir_gerencia(projeto, solicitante)

        self._projetos.remover_colaborador(projeto, usuario_id)
        logger.info(f"👤 Usuário {usuario_id} removido do projeto {projeto.pk}")
