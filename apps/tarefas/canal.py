# apps/tarefas/canal.py

"""
Canal de tempo real por projeto

Cada projeto tem uma sala (grupo do channel layer) com as sessões
WebSocket que estão com o projeto aberto. As mensagens vão para todas
as sessões da sala menos a que originou o evento.

A entrega é best-effort: não há ligação transacional com a gravação no
banco e falhas de envio são registradas e descartadas.
"""

import logging
from typing import Dict, Optional

from channels.layers import get_channel_layer

logger = logging.getLogger(__name__)


class EventoTarefa:
    """Nomes dos eventos enviados aos clientes"""
    CRIADA = 'tarefa_adicionada'
    EXCLUIDA = 'tarefa_excluida'
    EDITADA = 'tarefa_editada'
    COMPLETADA = 'tarefa_completada'

    TODOS = (CRIADA, EXCLUIDA, EDITADA, COMPLETADA)


class CanalProjeto:
    """
    Publica eventos de tarefa para a sala do projeto

    Não verifica permissões: quem chama entrar() já deve ter validado
    o acesso ao projeto.
    """

    # Handler do consumer que recebe as mensagens (tarefa.evento -> tarefa_evento)
    TIPO_MENSAGEM = 'tarefa.evento'

    def __init__(self, channel_layer=None):
        self._channel_layer = channel_layer

    @property
    def channel_layer(self):
        if self._channel_layer is None:
            self._channel_layer = get_channel_layer()
        return self._channel_layer

    @staticmethod
    def nome_sala(projeto_id) -> str:
        return f'projeto_{projeto_id}'

    @staticmethod
    def projeto_da_tarefa(tarefa: Dict):
        """
        Id do projeto dono da tarefa

        Aceita tanto {'projeto': 1} quanto {'projeto': {'id': 1, ...}}
        """
        projeto = tarefa.get('projeto')
        if isinstance(projeto, dict):
            projeto = projeto.get('id')
        return projeto

    async def entrar(self, sessao: str, projeto_id) -> None:
        await self.channel_layer.group_add(self.nome_sala(projeto_id), sessao)

    async def sair(self, sessao: str, projeto_id) -> None:
        await self.channel_layer.group_discard(self.nome_sala(projeto_id), sessao)

    async def transmitir(self, evento: str, payload: Dict, projeto_id,
                         excluir: Optional[str] = None) -> bool:
        """
        Envia o evento para a sala do projeto, exceto para a sessão `excluir`

        Returns:
            False se o envio falhou (a falha não é propagada)
        """
        try:
            await self.channel_layer.group_send(
                self.nome_sala(projeto_id),
                {
                    'type': self.TIPO_MENSAGEM,
                    'evento': evento,
                    'tarefa': payload,
                    'remetente': excluir,
                }
            )
            return True
        except Exception as e:
            logger.warning(f"⚠️ Falha ao transmitir {evento} para o projeto {projeto_id}: {e}")
            return False

    async def _transmitir_tarefa(self, evento: str, tarefa: Dict, excluir: Optional[str]) -> bool:
        projeto_id = self.projeto_da_tarefa(tarefa)
        if projeto_id is None:
            logger.warning(f"⚠️ Evento {evento} ignorado: tarefa sem projeto")
            return False
        return await self.transmitir(evento, tarefa, projeto_id, excluir=excluir)

    async def tarefa_criada(self, tarefa: Dict, excluir: Optional[str] = None) -> bool:
        return await self._transmitir_tarefa(EventoTarefa.CRIADA, tarefa, excluir)

    async def tarefa_excluida(self, tarefa: Dict, excluir: Optional[str] = None) -> bool:
        return await self._transmitir_tarefa(EventoTarefa.EXCLUIDA, tarefa, excluir)

    async def tarefa_editada(self, tarefa: Dict, excluir: Optional[str] = None) -> bool:
        return await self._transmitir_tarefa(EventoTarefa.EDITADA, tarefa, excluir)

    async def tarefa_completada(self, tarefa: Dict, excluir: Optional[str] = None) -> bool:
        return await self._transmitir_tarefa(EventoTarefa.COMPLETADA, tarefa, excluir)
