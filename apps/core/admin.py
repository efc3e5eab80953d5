# apps/core/admin.py

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.db.models import Count

from .forms import UsuarioChangeForm, UsuarioCreationForm
from .models import Usuario, Projeto, Tarefa


@admin.register(Usuario)
class UsuarioAdmin(BaseUserAdmin):
    """Admin customizado para o modelo Usuario (login por email)"""

    form = UsuarioChangeForm
    add_form = UsuarioCreationForm

    list_display = ['email', 'nome', 'confirmado', 'is_active', 'date_joined']
    list_filter = ['confirmado', 'is_staff', 'is_active', 'date_joined']
    search_fields = ['email', 'nome']
    ordering = ['-date_joined']

    fieldsets = (
        (None, {'fields': ('email', 'password')}),
        ('Informações Pessoais', {'fields': ('nome', 'confirmado')}),
        ('Permissões', {'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions')}),
        ('Datas', {'fields': ('last_login', 'date_joined')}),
    )

    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'nome', 'password1', 'password2'),
        }),
    )


class TarefaInline(admin.TabularInline):
    model = Tarefa
    extra = 0
    fields = ['nome', 'prioridade', 'data_entrega', 'estado', 'completado_por']
    raw_id_fields = ['completado_por']


@admin.register(Projeto)
class ProjetoAdmin(admin.ModelAdmin):
    """Admin para gerenciamento de projetos"""

    list_display = ['nome', 'cliente', 'criador', 'total_colaboradores', 'data_entrega', 'criado_em']
    search_fields = ['nome', 'cliente', 'criador__email']
    list_filter = ['data_entrega', 'criado_em']
    filter_horizontal = ['colaboradores']
    inlines = [TarefaInline]

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('criador').annotate(
            _total_colaboradores=Count('colaboradores', distinct=True)
        )

    def get_readonly_fields(self, request, obj=None):
        # Criador não muda depois da criação
        if obj is not None:
            return ['criador']
        return []

    def total_colaboradores(self, obj):
        return obj._total_colaboradores

    total_colaboradores.short_description = 'Colaboradores'


@admin.register(Tarefa)
class TarefaAdmin(admin.ModelAdmin):
    list_display = ['nome', 'projeto', 'prioridade', 'estado', 'completado_por', 'data_entrega']
    list_filter = ['prioridade', 'estado']
    search_fields = ['nome', 'projeto__nome']
    raw_id_fields = ['projeto', 'completado_por']
