# apps/core/forms.py

from django import forms
from django.contrib.auth.forms import UserChangeForm, UserCreationForm
from django.utils import timezone

from .models import Usuario, Projeto, Tarefa


class RegistroForm(forms.ModelForm):
    """Formulário de registro de novo usuário"""

    password = forms.CharField(min_length=8, strip=False)

    class Meta:
        model = Usuario
        fields = ['nome', 'email']

    def validate_unique(self):
        # Email duplicado é tratado pelo serviço como Conflito
        pass


class NovaSenhaForm(forms.Form):
    password = forms.CharField(min_length=8, strip=False)


class ProjetoForm(forms.ModelForm):
    """Criação e edição de projetos"""

    data_entrega = forms.DateField(required=False)

    class Meta:
        model = Projeto
        fields = ['nome', 'descricao', 'data_entrega', 'cliente']

    def clean_data_entrega(self):
        return self.cleaned_data.get('data_entrega') or timezone.localdate()


class TarefaForm(forms.ModelForm):
    """Criação e edição de tarefas (o projeto é definido pelo serviço)"""

    data_entrega = forms.DateField(required=False)

    class Meta:
        model = Tarefa
        fields = ['nome', 'descricao', 'data_entrega', 'prioridade']

    def clean_data_entrega(self):
        return self.cleaned_data.get('data_entrega') or timezone.localdate()


# Formulários do admin para o usuário identificado por email

class UsuarioCreationForm(UserCreationForm):

    class Meta:
        model = Usuario
        fields = ('email', 'nome')


class UsuarioChangeForm(UserChangeForm):

    class Meta:
        model = Usuario
        fields = ('email', 'nome', 'confirmado', 'is_active', 'is_staff', 'is_superuser')
