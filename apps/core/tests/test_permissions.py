"""
Regras de acesso a projetos: visualizar e gerenciar, nos dois sentidos
"""

import pytest
from django.contrib.auth.models import AnonymousUser

from apps.core.exceptions import AcessoNegado
from apps.core.permissions import PermissoesProjeto
from apps.core.repositories import ProjetoRepository


pytestmark = pytest.mark.django_db


def test_criador_pode_visualizar_e_gerenciar(projeto, criador):
    assert PermissoesProjeto.pode_visualizar(projeto, criador)
    assert PermissoesProjeto.pode_gerenciar(projeto, criador)


def test_colaborador_visualiza_mas_nao_gerencia(projeto, colaborador):
    assert PermissoesProjeto.pode_visualizar(projeto, colaborador)
    assert not PermissoesProjeto.pode_gerenciar(projeto, colaborador)


def test_usuario_sem_relacao_nao_visualiza_nem_gerencia(projeto, estranho):
    assert not PermissoesProjeto.pode_visualizar(projeto, estranho)
    assert not PermissoesProjeto.pode_gerenciar(projeto, estranho)


def test_anonimo_nao_tem_acesso(projeto):
    anonimo = AnonymousUser()
    assert not PermissoesProjeto.pode_visualizar(projeto, anonimo)
    assert not PermissoesProjeto.pode_gerenciar(projeto, anonimo)


def test_acesso_segue_a_lista_de_colaboradores(projeto, colaborador, estranho):
    projeto.colaboradores.add(estranho)
    assert PermissoesProjeto.pode_visualizar(projeto, estranho)

    projeto.colaboradores.remove(colaborador)
    assert not PermissoesProjeto.pode_visualizar(projeto, colaborador)


def test_usa_colaboradores_pre_carregados(projeto, colaborador, estranho, django_assert_num_queries):
    carregado = ProjetoRepository().buscar_por_id(projeto.pk, expandir=('colaboradores',))

    with django_assert_num_queries(0):
        assert PermissoesProjeto.pode_visualizar(carregado, colaborador)
        assert not PermissoesProjeto.pode_visualizar(carregado, estranho)


def test_exigir_levanta_acesso_negado(projeto, colaborador, estranho):
    PermissoesProjeto.exigir_visualizacao(projeto, colaborador)

    with pytest.raises(AcessoNegado):
        PermissoesProjeto.exigir_gerencia(projeto, colaborador)

    with pytest.raises(AcessoNegado):
        PermissoesProjeto.exigir_visualizacao(projeto, estranho)
