# apps/core/models.py

from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.db import models
from django.utils import timezone


class UsuarioManager(BaseUserManager):
    """Manager para usuários identificados por email"""

    use_in_migrations = True

    def _criar_usuario(self, email, password, **extra_fields):
        if not email:
            raise ValueError('O email é obrigatório')

        email = self.normalize_email(email.strip())
        usuario = self.model(email=email, **extra_fields)
        usuario.set_password(password)
        usuario.save(using=self._db)
        return usuario

    def create_user(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', False)
        extra_fields.setdefault('is_superuser', False)
        return self._criar_usuario(email, password, **extra_fields)

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('confirmado', True)

        if not extra_fields['is_staff'] or not extra_fields['is_superuser']:
            raise ValueError('Superusuário precisa de is_staff e is_superuser')

        return self._criar_usuario(email, password, **extra_fields)


class Usuario(AbstractUser):
    """
    Modelo de usuário customizado

    O login é feito por email. Apenas id, nome e email são expostos
    para outros usuários (ver utils.serializar_usuario).
    """

    username = None
    email = models.EmailField('email', unique=True)
    nome = models.CharField(max_length=150)

    # Token de uso único para confirmação de conta e recuperação de senha
    token = models.CharField(max_length=64, blank=True, db_index=True)
    confirmado = models.BooleanField(default=False)

    criado_em = models.DateTimeField(auto_now_add=True)
    atualizado_em = models.DateTimeField(auto_now=True)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['nome']

    objects = UsuarioManager()

    class Meta:
        db_table = 'usuario'

    def __str__(self):
        return f"{self.nome} <{self.email}>"


class Projeto(models.Model):
    """
    Projeto com um criador e zero ou mais colaboradores

    Invariantes (garantidas em signals.py):
    - o criador nunca faz parte de colaboradores
    - o criador não muda depois da criação
    """

    nome = models.CharField(max_length=200)
    descricao = models.TextField()
    data_entrega = models.DateField(default=timezone.localdate)
    cliente = models.CharField(max_length=200)
    criador = models.ForeignKey(
        Usuario,
        on_delete=models.PROTECT,
        related_name='projetos_criados'
    )
    colaboradores = models.ManyToManyField(
        Usuario,
        related_name='projetos_colaborador',
        blank=True
    )
    criado_em = models.DateTimeField(auto_now_add=True)
    atualizado_em = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'projeto'
        ordering = ['-criado_em']

    def __str__(self):
        return f"{self.nome} - {self.cliente}"


class Tarefa(models.Model):
    """Tarefa de um projeto, na ordem em que foi criada"""

    PRIORIDADE_CHOICES = [
        ('baixa', 'Baixa'),
        ('media', 'Média'),
        ('alta', 'Alta'),
    ]

    nome = models.CharField(max_length=200)
    descricao = models.TextField()
    data_entrega = models.DateField(default=timezone.localdate)
    prioridade = models.CharField(
        max_length=10,
        choices=PRIORIDADE_CHOICES,
        default='media'
    )
    estado = models.BooleanField(default=False, help_text="True = concluída")
    projeto = models.ForeignKey(
        Projeto,
        on_delete=models.CASCADE,
        related_name='tarefas'
    )
    completado_por = models.ForeignKey(
        Usuario,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='tarefas_completadas'
    )
    criado_em = models.DateTimeField(auto_now_add=True)
    atualizado_em = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'tarefa'
        ordering = ['criado_em', 'id']

    def __str__(self):
        return f"{self.nome} ({self.projeto.nome})"
