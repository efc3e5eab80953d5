# apps/core/auth_service.py

"""
Serviço de Autenticação - registro, confirmação de conta, login e recuperação de senha

O hash de senha fica com o Django (set_password / authenticate) e o envio
de email com django.core.mail; este serviço só orquestra.
"""

import logging
from typing import Dict

from django.conf import settings
from django.contrib.auth import authenticate, login, logout
from django.core.mail import send_mail
from django.db import IntegrityError, transaction

from .exceptions import (
    AcessoNegado,
    DadosInvalidos,
    TokenInvalido,
    UsuarioJaRegistrado,
    UsuarioNaoEncontrado,
)
from .forms import NovaSenhaForm, RegistroForm
from .models import Usuario
from .repositories import UsuarioRepository
from .utils import erros_formulario, gerar_token

logger = logging.getLogger(__name__)


class AutenticacaoService:
    """
    Serviço encapsulado para gerenciar autenticação

    O token guardado no usuário é de uso único: serve para confirmar
    a conta e, depois, para cada pedido de nova senha.
    """

    def __init__(self, usuarios: UsuarioRepository = None):
        self._usuarios = usuarios or UsuarioRepository()

    def registrar(self, dados: Dict) -> Usuario:
        """
        Cria usuário não confirmado e envia email de confirmação
        """
        form = RegistroForm(data=dados)
        if not form.is_valid():
            raise DadosInvalidos(erros_formulario(form))

        if self._usuarios.email_existe(form.cleaned_data['email']):
            raise UsuarioJaRegistrado()

        try:
            with transaction.atomic():
                usuario = Usuario.objects.create_user(
                    email=form.cleaned_data['email'],
                    password=form.cleaned_data['password'],
                    nome=form.cleaned_data['nome'],
                    token=gerar_token(),
                )
        except IntegrityError:
            # Outro registro com o mesmo email gravou primeiro
            raise UsuarioJaRegistrado()

        self._enviar_email_registro(usuario)
        logger.info(f"🆕 Usuário registrado: {usuario.email}")
        return usuario

    def confirmar(self, token: str) -> Usuario:
        usuario = self._usuarios.buscar_por_token(token)
        if usuario is None:
            raise TokenInvalido()

        usuario.confirmado = True
        usuario.token = ''
        return self._usuarios.salvar(usuario)

    def fazer_login(self, request, email: str, password: str) -> Usuario:
        """
        Abre sessão para o usuário

        Usuário inexistente -> UsuarioNaoEncontrado
        Conta não confirmada ou senha incorreta -> AcessoNegado
        """
        usuario = self._usuarios.buscar_por_email(email)
        if usuario is None:
            raise UsuarioNaoEncontrado('O usuário não existe')

        if not usuario.confirmado:
            raise AcessoNegado('Sua conta não foi confirmada')

        autenticado = authenticate(request, username=usuario.email, password=password)
        if autenticado is None:
            raise AcessoNegado('Senha incorreta')

        login(request, autenticado)
        return autenticado

    def fazer_logout(self, request) -> None:
        logout(request)

    def iniciar_recuperacao_senha(self, email: str) -> None:
        usuario = self._usuarios.buscar_por_email(email)
        if usuario is None:
            raise UsuarioNaoEncontrado('O usuário não existe')

        usuario.token = gerar_token()
        self._usuarios.salvar(usuario)
        self._enviar_email_recuperacao(usuario)

    def validar_token(self, token: str) -> Usuario:
        usuario = self._usuarios.buscar_por_token(token)
        if usuario is None:
            raise TokenInvalido()
        return usuario

    def redefinir_senha(self, token: str, dados: Dict) -> Usuario:
        usuario = self.validar_token(token)

        form = NovaSenhaForm(data=dados)
        if not form.is_valid():
            raise DadosInvalidos(erros_formulario(form))

        usuario.set_password(form.cleaned_data['password'])
        usuario.token = ''
        return self._usuarios.salvar(usuario)

    # =================== MÉTODOS PRIVADOS ===================

    def _enviar_email_registro(self, usuario: Usuario):
        link = f"{settings.FRONTEND_URL}/confirmar/{usuario.token}"
        message = f"""
Olá {usuario.nome}, confirme sua conta no UpTask.

Sua conta está quase pronta, basta confirmá-la no link abaixo:
{link}

Se você não criou esta conta, ignore esta mensagem.
        """
        self._enviar(usuario, 'UpTask - Confirme sua conta', message)

    def _enviar_email_recuperacao(self, usuario: Usuario):
        link = f"{settings.FRONTEND_URL}/esqueci-senha/{usuario.token}"
        message = f"""
Olá {usuario.nome}, você pediu para redefinir sua senha no UpTask.

Abra o link abaixo para criar uma nova senha:
{link}

Se você não pediu esta alteração, ignore esta mensagem.
        """
        self._enviar(usuario, 'UpTask - Redefina sua senha', message)

    def _enviar(self, usuario: Usuario, subject: str, message: str):
        try:
            send_mail(
                subject=subject,
                message=message,
                from_email=settings.DEFAULT_FROM_EMAIL,
                recipient_list=[usuario.email],
                fail_silently=False
            )
        except Exception as e:
            # Falha de email não desfaz o registro; o usuário pode pedir de novo
            logger.warning(f"⚠️ Erro ao enviar email para {usuario.email}: {e}")
