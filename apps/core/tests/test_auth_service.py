"""
Registro, confirmação, login e recuperação de senha
"""

import json
from unittest.mock import patch

import pytest
from django.core import mail
from django.urls import reverse

from apps.core.auth_service import AutenticacaoService
from apps.core.exceptions import DadosInvalidos, TokenInvalido, UsuarioJaRegistrado
from apps.core.models import Usuario
from apps.core.repositories import UsuarioRepository


pytestmark = pytest.mark.django_db


def post_json(client, url, dados):
    return client.post(url, data=json.dumps(dados), content_type='application/json')


@pytest.fixture
def service():
    return AutenticacaoService()


@pytest.fixture
def registrado(service):
    return service.registrar({
        'nome': 'Nova Pessoa',
        'email': 'nova@uptask.com',
        'password': 'senha-segura-123',
    })


def test_registrar_cria_usuario_nao_confirmado(registrado):
    assert registrado.confirmado is False
    assert registrado.token
    assert registrado.check_password('senha-segura-123')


def test_registrar_envia_email_com_link(registrado):
    assert len(mail.outbox) == 1
    assert mail.outbox[0].to == ['nova@uptask.com']
    assert f"http://frontend.test/confirmar/{registrado.token}" in mail.outbox[0].body


def test_registrar_email_duplicado(service, registrado):
    with pytest.raises(UsuarioJaRegistrado):
        service.registrar({'nome': 'Outra', 'email': 'nova@uptask.com', 'password': 'outra-senha-123'})


def test_registro_concorrente_com_mesmo_email_e_conflito(service, criador):
    # A verificação prévia não vê o outro registro; a unicidade do banco decide
    with patch.object(UsuarioRepository, 'email_existe', return_value=False):
        with pytest.raises(UsuarioJaRegistrado):
            service.registrar({
                'nome': 'Outra Pessoa',
                'email': criador.email,
                'password': 'senha-segura-123',
            })

    assert Usuario.objects.filter(email=criador.email).count() == 1
    assert mail.outbox == []


def test_registrar_senha_curta(service):
    with pytest.raises(DadosInvalidos) as exc:
        service.registrar({'nome': 'X', 'email': 'x@uptask.com', 'password': '123'})

    assert 'password' in exc.value.erros
    assert not Usuario.objects.filter(email='x@uptask.com').exists()


def test_confirmar_consome_o_token(service, registrado):
    token = registrado.token
    service.confirmar(token)

    registrado.refresh_from_db()
    assert registrado.confirmado is True
    assert registrado.token == ''

    with pytest.raises(TokenInvalido):
        service.confirmar(token)


def test_token_vazio_nunca_e_valido(service, criador):
    with pytest.raises(TokenInvalido):
        service.validar_token('')


def test_redefinir_senha(service, criador):
    service.iniciar_recuperacao_senha(criador.email)
    criador.refresh_from_db()

    assert 'http://frontend.test/esqueci-senha/' in mail.outbox[-1].body

    service.redefinir_senha(criador.token, {'password': 'nova-senha-456'})
    criador.refresh_from_db()

    assert criador.check_password('nova-senha-456')
    assert criador.token == ''


class TestViews:

    def test_registrar(self, client):
        response = post_json(client, reverse('core:registrar'), {
            'nome': 'Pessoa', 'email': 'pessoa@uptask.com', 'password': 'senha-segura-123',
        })
        assert response.status_code == 201

    def test_registrar_duplicado_e_409(self, client, criador):
        response = post_json(client, reverse('core:registrar'), {
            'nome': 'Pessoa', 'email': criador.email, 'password': 'senha-segura-123',
        })
        assert response.status_code == 409

    def test_login_conta_nao_confirmada_e_403(self, client, registrado):
        response = post_json(client, reverse('core:login'), {
            'email': 'nova@uptask.com', 'password': 'senha-segura-123',
        })
        assert response.status_code == 403

    def test_login_usuario_inexistente_e_404(self, client, db):
        response = post_json(client, reverse('core:login'), {
            'email': 'ninguem@uptask.com', 'password': 'qualquer-coisa',
        })
        assert response.status_code == 404

    def test_login_senha_incorreta_e_403(self, client, criador):
        response = post_json(client, reverse('core:login'), {
            'email': criador.email, 'password': 'errada-123456',
        })
        assert response.status_code == 403

    def test_login_e_perfil(self, client, criador):
        response = post_json(client, reverse('core:login'), {
            'email': criador.email, 'password': 'senha-segura-123',
        })

        assert response.status_code == 200
        assert response.json() == {'id': criador.pk, 'nome': 'Criador', 'email': criador.email}

        perfil = client.get(reverse('core:perfil'))
        assert perfil.json()['id'] == criador.pk

    def test_logout(self, cliente_de, criador):
        client = cliente_de(criador)
        client.post(reverse('core:logout'))

        assert client.get(reverse('core:perfil')).status_code == 401

    def test_token_de_nova_senha_invalido(self, client, db):
        response = client.get(reverse('core:nova_senha', args=['nao-existe']))
        assert response.status_code == 404
