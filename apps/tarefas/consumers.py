# apps/tarefas/consumers.py

import json
import logging

from channels.db import database_sync_to_async
from channels.generic.websocket import AsyncWebsocketConsumer
from django.conf import settings
from django.utils import timezone

from apps.core.permissions import PermissoesProjeto
from apps.core.repositories import ProjetoRepository
from apps.core.utils import normalizar_id
from .canal import CanalProjeto

logger = logging.getLogger(__name__)


class ProjetoConsumer(AsyncWebsocketConsumer):
    """
    Consumer WebSocket para atualizações de tarefas em tempo real

    Uma sessão pode abrir e fechar vários projetos ao longo da conexão;
    ao desconectar ela sai de todas as salas.

    Mensagens do cliente:
    - ping
    - abrir_projeto / fechar_projeto {projeto}
    - nova_tarefa / excluir_tarefa / editar_tarefa / completar_tarefa {tarefa}
    """

    # Mensagem do cliente -> método do CanalProjeto
    EVENTOS_TAREFA = {
        'nova_tarefa': 'tarefa_criada',
        'excluir_tarefa': 'tarefa_excluida',
        'editar_tarefa': 'tarefa_editada',
        'completar_tarefa': 'tarefa_completada',
    }

    async def connect(self):
        """
        Aceita apenas usuários autenticados
        """
        self.user = self.scope['user']
        self.salas = set()
        self.canal = CanalProjeto(self.channel_layer)

        if not self.user.is_authenticated:
            logger.warning("❌ Conexão WebSocket rejeitada - usuário não autenticado")
            await self.close()
            return

        await self.accept()

        # O cliente usa a sessão no header X-Canal-Sessao das requisições HTTP
        await self.send(text_data=json.dumps({
            'type': 'conectado',
            'sessao': self.channel_name,
            'heartbeat': settings.UPTASK_WS_HEARTBEAT_INTERVAL,
        }))

        logger.info(f"✅ WebSocket conectado - {self.user.email}")

    async def disconnect(self, close_code):
        """
        Sai de todas as salas abertas
        """
        for projeto_id in list(getattr(self, 'salas', ())):
            await self.canal.sair(self.channel_name, projeto_id)
        self.salas = set()

        logger.info(f"🔌 WebSocket desconectado - {getattr(self.user, 'email', 'anônimo')}")

    async def receive(self, text_data=None, bytes_data=None):
        """
        Recebe mensagens do cliente WebSocket
        """
        try:
            data = json.loads(text_data or '')
        except json.JSONDecodeError:
            logger.warning(f"❌ JSON inválido recebido via WebSocket de {self.user.email}")
            await self.enviar_erro('JSON inválido')
            return

        if not isinstance(data, dict):
            await self.enviar_erro('Mensagem inválida')
            return

        message_type = data.get('type')

        if message_type == 'ping':
            await self.send(text_data=json.dumps({
                'type': 'pong',
                'timestamp': timezone.now().isoformat()
            }))

        elif message_type == 'abrir_projeto':
            await self.abrir_projeto(data.get('projeto'))

        elif message_type == 'fechar_projeto':
            await self.fechar_projeto(data.get('projeto'))

        elif message_type in self.EVENTOS_TAREFA:
            await self.repassar_tarefa(message_type, data.get('tarefa'))

        else:
            await self.enviar_erro(f'Tipo de mensagem desconhecido: {message_type}')

    # === Ações do cliente ===

    async def abrir_projeto(self, projeto_id):
        permitido = await self.verificar_acesso(projeto_id)
        if permitido is None:
            logger.warning(f"❌ {self.user.email} sem acesso ao projeto {projeto_id}")
            await self.enviar_erro('Você não tem acesso a este projeto')
            return

        await self.canal.entrar(self.channel_name, permitido)
        self.salas.add(permitido)

        await self.send(text_data=json.dumps({
            'type': 'projeto_aberto',
            'projeto': permitido
        }))

    async def fechar_projeto(self, projeto_id):
        projeto_id = normalizar_id(projeto_id)
        if projeto_id in self.salas:
            await self.canal.sair(self.channel_name, projeto_id)
            self.salas.discard(projeto_id)

    async def repassar_tarefa(self, message_type, tarefa):
        """
        Repassa o evento de tarefa para os outros membros da sala

        Só repassa para projetos que esta sessão abriu.
        """
        if not isinstance(tarefa, dict):
            await self.enviar_erro('Tarefa inválida')
            return

        projeto_id = normalizar_id(CanalProjeto.projeto_da_tarefa(tarefa))
        if projeto_id not in self.salas:
            logger.warning(f"❌ {self.user.email} enviou {message_type} para projeto não aberto")
            await self.enviar_erro('Projeto não aberto nesta sessão')
            return

        metodo = getattr(self.canal, self.EVENTOS_TAREFA[message_type])
        await metodo(tarefa, excluir=self.channel_name)

    # === Handlers do channel layer ===

    async def tarefa_evento(self, event):
        """
        Entrega evento de tarefa ao cliente
        """
        # Não enviar para a própria sessão
        if event.get('remetente') == self.channel_name:
            return

        await self.send(text_data=json.dumps({
            'type': event['evento'],
            'tarefa': event['tarefa']
        }))

    # === Métodos auxiliares ===

    async def enviar_erro(self, msg):
        await self.send(text_data=json.dumps({'type': 'erro', 'msg': msg}))

    @database_sync_to_async
    def verificar_acesso(self, projeto_id):
        """
        Retorna o id do projeto se o usuário pode visualizá-lo, senão None
        """
        projeto = ProjetoRepository().buscar_por_id(projeto_id, expandir=('colaboradores',))
        if projeto is None or not PermissoesProjeto.pode_visualizar(projeto, self.user):
            return None
        return projeto.pk
