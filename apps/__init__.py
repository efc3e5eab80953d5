# apps/__init__.py

"""
UpTask - Aplicações Django

Este pacote contém todas as aplicações do sistema:
- core: Usuários, projetos, permissões e colaboradores
- tarefas: Tarefas e WebSockets
"""

__version__ = '0.1.0'
