# apps/tarefas/routing.py

from django.urls import re_path
from . import consumers

# Rotas WebSocket da aplicação tarefas
websocket_urlpatterns = [
    # Uma conexão por cliente; os projetos são abertos por mensagem
    re_path(r'ws/projetos/$', consumers.ProjetoConsumer.as_asgi()),
]
