# apps/core/urls.py

from django.urls import path
from . import views

app_name = 'core'

urlpatterns = [
    # === USUÁRIOS ===
    path('api/usuarios/csrf/', views.csrf, name='csrf'),
    path('api/usuarios/', views.registrar, name='registrar'),
    path('api/usuarios/confirmar/<str:token>/', views.confirmar, name='confirmar'),
    path('api/usuarios/login/', views.login_view, name='login'),
    path('api/usuarios/logout/', views.logout_view, name='logout'),
    path('api/usuarios/esqueci-senha/', views.esqueci_senha, name='esqueci_senha'),
    path('api/usuarios/esqueci-senha/<str:token>/', views.nova_senha, name='nova_senha'),
    path('api/usuarios/perfil/', views.perfil, name='perfil'),

    # === PROJETOS ===
    path('api/projetos/', views.projetos, name='projetos'),
    path('api/projetos/colaboradores/', views.buscar_colaborador, name='buscar_colaborador'),
    # projeto_id como str: ids malformados viram 404 do domínio, não do roteador
    path('api/projetos/<str:projeto_id>/', views.projeto_detalhe, name='projeto_detalhe'),
    path('api/projetos/<str:projeto_id>/colaboradores/', views.adicionar_colaborador, name='adicionar_colaborador'),
    path('api/projetos/<str:projeto_id>/colaboradores/remover/', views.remover_colaborador, name='remover_colaborador'),

    # === MONITORAMENTO ===
    path('health/', views.health_check, name='health'),
]
