# apps/tarefas/urls.py

from django.urls import path
from . import views

app_name = 'tarefas'

urlpatterns = [
    path('', views.tarefas, name='tarefas'),
    path('<str:tarefa_id>/', views.tarefa_detalhe, name='tarefa_detalhe'),
    path('<str:tarefa_id>/estado/', views.alternar_estado, name='alternar_estado'),
]
