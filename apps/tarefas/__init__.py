# apps/tarefas/__init__.py

"""
Tarefas - ciclo de vida das tarefas e sincronização em tempo real

Funcionalidades:
- API JSON de tarefas (criar, editar, excluir, concluir)
- Salas WebSocket por projeto (Django Channels)
- Repasse de eventos de tarefa para as outras sessões da sala
"""
