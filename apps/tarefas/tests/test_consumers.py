"""
WebSocket: autenticação, salas e autoexclusão
"""

import pytest
from asgiref.sync import async_to_sync, sync_to_async
from channels.layers import get_channel_layer
from channels.routing import URLRouter
from channels.testing import WebsocketCommunicator
from django.contrib.auth.models import AnonymousUser
from django.urls import reverse

from apps.tarefas.routing import websocket_urlpatterns


pytestmark = [pytest.mark.asyncio, pytest.mark.django_db(transaction=True)]


@pytest.fixture(autouse=True)
def limpar_channel_layer():
    yield
    async_to_sync(get_channel_layer().flush)()


def communicator_de(usuario):
    communicator = WebsocketCommunicator(URLRouter(websocket_urlpatterns), '/ws/projetos/')
    communicator.scope['user'] = usuario
    return communicator


async def conectar(usuario):
    communicator = communicator_de(usuario)
    connected, _ = await communicator.connect()
    assert connected
    boas_vindas = await communicator.receive_json_from()
    return communicator, boas_vindas


async def abrir(communicator, projeto_id):
    await communicator.send_json_to({'type': 'abrir_projeto', 'projeto': projeto_id})
    return await communicator.receive_json_from()


async def test_anonimo_e_rejeitado():
    communicator = communicator_de(AnonymousUser())

    connected, _ = await communicator.connect()

    assert not connected


async def test_boas_vindas_informa_a_sessao(criador):
    communicator, boas_vindas = await conectar(criador)

    assert boas_vindas['type'] == 'conectado'
    assert boas_vindas['sessao']
    assert boas_vindas['heartbeat'] == 25

    await communicator.disconnect()


async def test_ping(criador):
    communicator, _ = await conectar(criador)

    await communicator.send_json_to({'type': 'ping'})

    assert (await communicator.receive_json_from())['type'] == 'pong'
    await communicator.disconnect()


async def test_json_invalido(criador):
    communicator, _ = await conectar(criador)

    await communicator.send_to(text_data='{oops')

    assert (await communicator.receive_json_from())['type'] == 'erro'
    await communicator.disconnect()


async def test_abrir_projeto_com_acesso(projeto, colaborador):
    communicator, _ = await conectar(colaborador)

    resposta = await abrir(communicator, projeto.pk)

    assert resposta == {'type': 'projeto_aberto', 'projeto': projeto.pk}
    await communicator.disconnect()


async def test_abrir_projeto_sem_acesso(projeto, estranho):
    communicator, _ = await conectar(estranho)

    resposta = await abrir(communicator, projeto.pk)

    assert resposta['type'] == 'erro'
    await communicator.disconnect()


async def test_evento_nao_volta_para_quem_enviou(projeto, criador, colaborador):
    autor, _ = await conectar(criador)
    outro, _ = await conectar(colaborador)
    await abrir(autor, projeto.pk)
    await abrir(outro, projeto.pk)

    tarefa = {'id': 1, 'nome': 'Nova', 'projeto': projeto.pk}
    await autor.send_json_to({'type': 'nova_tarefa', 'tarefa': tarefa})

    assert await outro.receive_json_from() == {'type': 'tarefa_adicionada', 'tarefa': tarefa}
    assert await autor.receive_nothing()

    await autor.disconnect()
    await outro.disconnect()


async def test_salas_isoladas_por_projeto(projeto, criador, colaborador):
    outro_projeto = await sync_to_async(criador.projetos_criados.create)(
        nome='Outro', descricao='Outro projeto', cliente='Beta'
    )
    autor, _ = await conectar(criador)
    ouvinte, _ = await conectar(colaborador)
    await abrir(autor, outro_projeto.pk)
    await abrir(ouvinte, projeto.pk)

    await autor.send_json_to({
        'type': 'editar_tarefa',
        'tarefa': {'id': 1, 'projeto': outro_projeto.pk},
    })

    assert await ouvinte.receive_nothing()

    await autor.disconnect()
    await ouvinte.disconnect()


async def test_repassar_exige_projeto_aberto(projeto, criador):
    communicator, _ = await conectar(criador)

    await communicator.send_json_to({
        'type': 'nova_tarefa',
        'tarefa': {'id': 1, 'projeto': projeto.pk},
    })

    assert (await communicator.receive_json_from())['type'] == 'erro'
    await communicator.disconnect()


async def test_fechar_projeto_para_de_receber(projeto, criador, colaborador):
    autor, _ = await conectar(criador)
    ouvinte, _ = await conectar(colaborador)
    await abrir(autor, projeto.pk)
    await abrir(ouvinte, projeto.pk)

    await ouvinte.send_json_to({'type': 'fechar_projeto', 'projeto': projeto.pk})
    assert await ouvinte.receive_nothing()

    await autor.send_json_to({
        'type': 'excluir_tarefa',
        'tarefa': {'id': 1, 'projeto': projeto.pk},
    })

    assert await ouvinte.receive_nothing()

    await autor.disconnect()
    await ouvinte.disconnect()


async def test_requisicao_http_notifica_os_outros(projeto, tarefa, criador, colaborador, cliente_de):
    autor, boas_vindas = await conectar(criador)
    ouvinte, _ = await conectar(colaborador)
    await abrir(autor, projeto.pk)
    await abrir(ouvinte, projeto.pk)

    client = await sync_to_async(cliente_de)(criador)
    response = await sync_to_async(client.post)(
        reverse('tarefas:alternar_estado', args=[tarefa.pk]),
        HTTP_X_CANAL_SESSAO=boas_vindas['sessao'],
    )

    assert response.status_code == 200
    evento = await ouvinte.receive_json_from()
    assert evento['type'] == 'tarefa_completada'
    assert evento['tarefa']['completado_por']['id'] == criador.pk
    assert await autor.receive_nothing()

    await autor.disconnect()
    await ouvinte.disconnect()
