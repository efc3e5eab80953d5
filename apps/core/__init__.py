# apps/core/__init__.py

"""
Core - Aplicação principal do UpTask

Contém:
- Models (Usuario, Projeto, Tarefa) e repositórios
- Regras de acesso a projetos (permissions.py)
- Gestão de colaboradores e de projetos (serviços)
- API JSON de usuários e projetos
"""
