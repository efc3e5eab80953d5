"""
Fixtures compartilhadas dos testes do UpTask

Run: pytest -v
"""

import pytest
from django.test import Client

from apps.core.models import Usuario, Projeto, Tarefa


def criar_usuario(email, nome, password='senha-segura-123', confirmado=True):
    return Usuario.objects.create_user(
        email=email,
        password=password,
        nome=nome,
        confirmado=confirmado,
    )


@pytest.fixture
def criador(db):
    return criar_usuario('criador@uptask.com', 'Criador')


@pytest.fixture
def colaborador(db):
    return criar_usuario('colaborador@uptask.com', 'Colaborador')


@pytest.fixture
def estranho(db):
    return criar_usuario('estranho@uptask.com', 'Estranho')


@pytest.fixture
def projeto(criador, colaborador):
    """Projeto do criador com um colaborador"""
    projeto = Projeto.objects.create(
        nome='Site novo',
        descricao='Redesenho do site institucional',
        cliente='ACME',
        criador=criador,
    )
    projeto.colaboradores.add(colaborador)
    return projeto


@pytest.fixture
def tarefa(projeto):
    return Tarefa.objects.create(
        nome='Criar layout',
        descricao='Wireframes da home',
        prioridade='alta',
        projeto=projeto,
    )


@pytest.fixture
def cliente_de():
    """Fábrica de clientes HTTP já autenticados"""

    def _cliente(usuario):
        client = Client()
        client.force_login(usuario)
        return client

    return _cliente
