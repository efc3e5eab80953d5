"""
Salas por projeto no channel layer
"""

import asyncio

import pytest
from channels.layers import InMemoryChannelLayer

from apps.tarefas.canal import CanalProjeto, EventoTarefa


class LayerQuebrado(InMemoryChannelLayer):
    async def group_send(self, group, message):
        raise ConnectionError('redis fora do ar')


async def nada_recebido(layer, canal):
    try:
        await asyncio.wait_for(layer.receive(canal), timeout=0.1)
    except asyncio.TimeoutError:
        return True
    return False


def test_nome_sala():
    assert CanalProjeto.nome_sala(7) == 'projeto_7'


@pytest.mark.parametrize('tarefa, esperado', [
    ({'projeto': 3}, 3),
    ({'projeto': {'id': 3, 'nome': 'Site'}}, 3),
    ({'nome': 'sem projeto'}, None),
])
def test_projeto_da_tarefa(tarefa, esperado):
    assert CanalProjeto.projeto_da_tarefa(tarefa) == esperado


@pytest.mark.asyncio
async def test_evento_vai_apenas_para_a_sala_do_projeto():
    layer = InMemoryChannelLayer()
    canal = CanalProjeto(layer)
    sessao_p1 = await layer.new_channel()
    sessao_p2 = await layer.new_channel()
    await canal.entrar(sessao_p1, 1)
    await canal.entrar(sessao_p2, 2)

    enviado = await canal.tarefa_criada({'id': 10, 'projeto': 1}, excluir='outra-sessao')

    assert enviado is True
    assert await layer.receive(sessao_p1) == {
        'type': 'tarefa.evento',
        'evento': EventoTarefa.CRIADA,
        'tarefa': {'id': 10, 'projeto': 1},
        'remetente': 'outra-sessao',
    }
    assert await nada_recebido(layer, sessao_p2)


@pytest.mark.asyncio
async def test_projeto_aninhado_e_aceito():
    layer = InMemoryChannelLayer()
    canal = CanalProjeto(layer)
    sessao = await layer.new_channel()
    await canal.entrar(sessao, 5)

    await canal.tarefa_completada({'id': 1, 'projeto': {'id': 5}})

    mensagem = await layer.receive(sessao)
    assert mensagem['evento'] == EventoTarefa.COMPLETADA


@pytest.mark.asyncio
async def test_sair_da_sala():
    layer = InMemoryChannelLayer()
    canal = CanalProjeto(layer)
    sessao = await layer.new_channel()
    await canal.entrar(sessao, 1)
    await canal.sair(sessao, 1)

    await canal.tarefa_editada({'id': 1, 'projeto': 1})

    assert await nada_recebido(layer, sessao)


@pytest.mark.asyncio
async def test_sala_vazia_nao_e_erro():
    canal = CanalProjeto(InMemoryChannelLayer())

    assert await canal.tarefa_excluida({'id': 1, 'projeto': 99}) is True


@pytest.mark.asyncio
async def test_falha_de_envio_nao_propaga():
    canal = CanalProjeto(LayerQuebrado())

    assert await canal.tarefa_criada({'id': 1, 'projeto': 1}) is False


@pytest.mark.asyncio
async def test_tarefa_sem_projeto_e_ignorada():
    canal = CanalProjeto(InMemoryChannelLayer())

    assert await canal.tarefa_criada({'id': 1}) is False
