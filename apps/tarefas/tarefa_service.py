# apps/tarefas/tarefa_service.py

"""
Serviço de Tarefas - ciclo de vida das tarefas de um projeto

Criar, editar e excluir exigem ser o criador do projeto; ver a tarefa
e alternar seu estado basta ter acesso ao projeto.
"""

import logging
from typing import Dict

from apps.core.exceptions import DadosInvalidos, TarefaNaoEncontrada
from apps.core.forms import TarefaForm
from apps.core.models import Tarefa
from apps.core.permissions import PermissoesProjeto
from apps.core.projeto_service import ProjetoService
from apps.core.repositories import TarefaRepository
from apps.core.utils import erros_formulario

logger = logging.getLogger(__name__)


class TarefaService:

    CAMPOS_EDITAVEIS = ('nome', 'descricao', 'data_entrega', 'prioridade')

    def __init__(self, tarefas: TarefaRepository = None, projetos: ProjetoService = None):
        self._tarefas = tarefas or TarefaRepository()
        self._projetos = projetos or ProjetoService()

    def carregar(self, tarefa_id) -> Tarefa:
        tarefa = self._tarefas.buscar_por_id(tarefa_id)
        if tarefa is None:
            raise TarefaNaoEncontrada()
        return tarefa

    def criar(self, usuario, dados: Dict) -> Tarefa:
        projeto = self._projetos.carregar(dados.get('projeto'))
        PermissoesProjeto.exigir_gerencia(projeto, usuario)

        form = TarefaForm(data=dados)
        if not form.is_valid():
            raise DadosInvalidos(erros_formulario(form))

        tarefa = form.save(commit=False)
        tarefa.projeto = projeto
        tarefa = self._tarefas.salvar(tarefa)

        logger.info(f"📝 Tarefa {tarefa.pk} criada no projeto {projeto.pk}")
        return tarefa

    def obter(self, tarefa_id, usuario) -> Tarefa:
        tarefa = self.carregar(tarefa_id)
        PermissoesProjeto.exigir_visualizacao(tarefa.projeto, usuario)
        return tarefa

    def editar(self, tarefa_id, usuario, dados: Dict) -> Tarefa:
        """Edição parcial: campos ausentes ou vazios mantêm o valor atual"""
        tarefa = self.carregar(tarefa_id)
        PermissoesProjeto.exigir_gerencia(tarefa.projeto, usuario)

        atuais = {campo: getattr(tarefa, campo) for campo in self.CAMPOS_EDITAVEIS}
        novos = {campo: dados.get(campo) for campo in self.CAMPOS_EDITAVEIS if dados.get(campo)}

        form = TarefaForm(data={**atuais, **novos}, instance=tarefa)
        if not form.is_valid():
            raise DadosInvalidos(erros_formulario(form))

        return self._tarefas.salvar(form.save(commit=False))

    def excluir(self, tarefa_id, usuario) -> Tarefa:
        """
        Exclui a tarefa e devolve a instância (sem pk) para notificação
        """
        tarefa = self.carregar(tarefa_id)
        PermissoesProjeto.exigir_gerencia(tarefa.projeto, usuario)

        tarefa_pk = tarefa.pk
        self._tarefas.excluir(tarefa)
        tarefa.pk = tarefa_pk

        logger.info(f"🗑️ Tarefa {tarefa_pk} excluída do projeto {tarefa.projeto_id}")
        return tarefa

    def alternar_estado(self, tarefa_id, usuario) -> Tarefa:
        """
        Marca a tarefa como concluída (por quem pediu) ou reabre
        """
        tarefa = self.carregar(tarefa_id)
        PermissoesProjeto.exigir_visualizacao(tarefa.projeto, usuario)

        tarefa.estado = not tarefa.estado
        tarefa.completado_por = usuario if tarefa.estado else None
        return self._tarefas.salvar(tarefa)
