"""
Serviço de projetos: NaoEncontrado e AcessoNegado nunca se confundem
"""

import datetime

import pytest

from apps.core.exceptions import AcessoNegado, DadosInvalidos, ProjetoNaoEncontrado
from apps.core.models import Projeto
from apps.core.projeto_service import ProjetoService


pytestmark = pytest.mark.django_db


@pytest.fixture
def service():
    return ProjetoService()


def test_criar_define_o_criador(service, criador):
    projeto = service.criar(criador, {
        'nome': 'App mobile',
        'descricao': 'Versão iOS',
        'cliente': 'Beta',
        'data_entrega': '2026-12-01',
    })

    assert projeto.criador == criador
    assert projeto.data_entrega == datetime.date(2026, 12, 1)


def test_criar_sem_data_usa_hoje(service, criador):
    projeto = service.criar(criador, {'nome': 'X', 'descricao': 'Y', 'cliente': 'Z'})

    assert projeto.data_entrega is not None


def test_criar_com_dados_invalidos(service, criador):
    with pytest.raises(DadosInvalidos) as exc:
        service.criar(criador, {'nome': '', 'descricao': 'Y'})

    assert 'nome' in exc.value.erros
    assert 'cliente' in exc.value.erros
    assert not Projeto.objects.exists()


def test_obter_inexistente_e_nao_encontrado(service, criador):
    with pytest.raises(ProjetoNaoEncontrado):
        service.obter('X', criador)


def test_obter_sem_acesso_e_acesso_negado(service, projeto, estranho):
    with pytest.raises(AcessoNegado):
        service.obter(projeto.pk, estranho)


def test_obter_por_colaborador(service, projeto, tarefa, colaborador):
    obtido = service.obter(projeto.pk, colaborador)

    assert obtido == projeto
    assert list(obtido.tarefas.all()) == [tarefa]


def test_editar_parcial_mantem_campos_vazios(service, projeto, criador):
    editado = service.editar(projeto.pk, criador, {'nome': 'Site 2.0', 'cliente': ''})

    assert editado.nome == 'Site 2.0'
    assert editado.cliente == 'ACME'
    assert editado.descricao == 'Redesenho do site institucional'


def test_colaborador_nao_edita(service, projeto, colaborador):
    with pytest.raises(AcessoNegado):
        service.editar(projeto.pk, colaborador, {'nome': 'Hack'})

    projeto.refresh_from_db()
    assert projeto.nome == 'Site novo'


def test_excluir(service, projeto, criador):
    service.excluir(projeto.pk, criador)

    assert not Projeto.objects.filter(pk=projeto.pk).exists()


def test_colaborador_nao_exclui(service, projeto, colaborador):
    with pytest.raises(AcessoNegado):
        service.excluir(projeto.pk, colaborador)

    assert Projeto.objects.filter(pk=projeto.pk).exists()
