# apps/core/projeto_service.py

"""
Serviço de Projetos - listar, criar, obter, editar e excluir

Toda operação sobre um projeto existente segue a mesma ordem:
1. resolve o projeto (ProjetoNaoEncontrado se não existir)
2. verifica a permissão (AcessoNegado)
3. altera e persiste
"""

import logging
from typing import Dict, Iterable, List

from .exceptions import DadosInvalidos, ProjetoNaoEncontrado
from .forms import ProjetoForm
from .models import Projeto
from .permissions import PermissoesProjeto
from .repositories import ProjetoRepository
from .utils import erros_formulario

logger = logging.getLogger(__name__)


class ProjetoService:

    CAMPOS_EDITAVEIS = ('nome', 'descricao', 'data_entrega', 'cliente')

    def __init__(self, projetos: ProjetoRepository = None):
        self._projetos = projetos or ProjetoRepository()

    def carregar(self, projeto_id, expandir: Iterable[str] = ()) -> Projeto:
        """Resolve o projeto ou levanta ProjetoNaoEncontrado (sem checar acesso)"""
        projeto = self._projetos.buscar_por_id(projeto_id, expandir=expandir)
        if projeto is None:
            raise ProjetoNaoEncontrado()
        return projeto

    def listar(self, usuario) -> List[Projeto]:
        return self._projetos.listar_para(usuario.pk)

    def criar(self, usuario, dados: Dict) -> Projeto:
        form = ProjetoForm(data=dados)
        if not form.is_valid():
            raise DadosInvalidos(erros_formulario(form))

        projeto = form.save(commit=False)
        projeto.criador = usuario
        projeto = self._projetos.salvar(projeto)

        logger.info(f"📁 Projeto {projeto.pk} criado por {usuario.email}")
        return projeto

    def obter(self, projeto_id, usuario) -> Projeto:
        """Projeto com tarefas e colaboradores, para criador ou colaborador"""
        projeto = self.carregar(projeto_id, expandir=('tarefas', 'colaboradores'))
        PermissoesProjeto.exigir_visualizacao(projeto, usuario)
        return projeto

    def editar(self, projeto_id, usuario, dados: Dict) -> Projeto:
        """
        Edição parcial: campos ausentes ou vazios mantêm o valor atual
        """
        projeto = self.carregar(projeto_id)
        PermissoesProjeto.exigir_gerencia(projeto, usuario)

        atuais = {campo: getattr(projeto, campo) for campo in self.CAMPOS_EDITAVEIS}
        novos = {campo: dados.get(campo) for campo in self.CAMPOS_EDITAVEIS if dados.get(campo)}

        form = ProjetoForm(data={**atuais, **novos}, instance=projeto)
        if not form.is_valid():
            raise DadosInvalidos(erros_formulario(form))

        return self._projetos.salvar(form.save(commit=False))

    def excluir(self, projeto_id, usuario) -> None:
        projeto = self.carregar(projeto_id)
        PermissoesProjeto.exigir_gerencia(projeto, usuario)

        self._projetos.excluir(projeto)
        logger.info(f"🗑️ Projeto {projeto_id} excluído por {usuario.email}")
