# apps/core/repositories.py

"""
Acesso a dados de usuários, projetos e tarefas

Os serviços falam apenas com estes repositórios. Buscas por id devolvem
o objeto completo ou None; ids malformados equivalem a inexistentes.
Erros do banco (DatabaseError) não são tratados aqui e sobem para quem chamou.
"""

from typing import Iterable, List, Optional

from django.db.models import Prefetch, Q

from .models import Usuario, Projeto, Tarefa
from .utils import normalizar_id


class UsuarioRepository:

    def buscar_por_email(self, email) -> Optional[Usuario]:
        if not email or not isinstance(email, str):
            return None

        email = Usuario.objects.normalize_email(email.strip())
        return Usuario.objects.filter(email=email, is_active=True).first()

    def buscar_por_id(self, usuario_id) -> Optional[Usuario]:
        usuario_id = normalizar_id(usuario_id)
        if usuario_id is None:
            return None
        return Usuario.objects.filter(pk=usuario_id, is_active=True).first()

    def buscar_por_token(self, token) -> Optional[Usuario]:
        if not token:
            return None
        return Usuario.objects.filter(token=token).first()

    def email_existe(self, email) -> bool:
        email = Usuario.objects.normalize_email((email or '').strip())
        return Usuario.objects.filter(email=email).exists()

    def salvar(self, usuario: Usuario) -> Usuario:
        usuario.save()
        return usuario


class ProjetoRepository:
    """
    Repositório de projetos

    expandir aceita 'tarefas' e/ou 'colaboradores' e carrega as
    relações de uma vez (equivalente a um populate).
    """

    EXPANSOES = ('tarefas', 'colaboradores')

    def buscar_por_id(self, projeto_id, expandir: Iterable[str] = ()) -> Optional[Projeto]:
        projeto_id = normalizar_id(projeto_id)
        if projeto_id is None:
            return None

        queryset = Projeto.objects.all()
        expandir = set(expandir)

        invalidas = expandir - set(self.EXPANSOES)
        if invalidas:
            raise ValueError(f"Expansões desconhecidas: {sorted(invalidas)}")

        if 'tarefas' in expandir:
            queryset = queryset.prefetch_related(
                Prefetch('tarefas', queryset=Tarefa.objects.select_related('completado_por'))
            )
        if 'colaboradores' in expandir:
            queryset = queryset.prefetch_related('colaboradores')

        return queryset.filter(pk=projeto_id).first()

    def listar_para(self, usuario_id) -> List[Projeto]:
        """Projetos onde o usuário é criador OU colaborador"""
        return list(
            Projeto.objects.filter(
                Q(criador_id=usuario_id) | Q(colaboradores__id=usuario_id)
            ).distinct()
        )

    def salvar(self, projeto: Projeto) -> Projeto:
        projeto.save()
        return projeto

    def excluir(self, projeto: Projeto) -> None:
        projeto.delete()

    def eh_colaborador(self, projeto: Projeto, usuario_id) -> bool:
        return projeto.colaboradores.filter(pk=usuario_id).exists()

    def adicionar_colaborador(self, projeto: Projeto, usuario: Usuario) -> None:
        projeto.colaboradores.add(usuario)

    def remover_colaborador(self, projeto: Projeto, usuario_id) -> None:
        usuario_id = normalizar_id(usuario_id)
        if usuario_id is None:
            return
        projeto.colaboradores.remove(usuario_id)


class TarefaRepository:

    def buscar_por_id(self, tarefa_id) -> Optional[Tarefa]:
        tarefa_id = normalizar_id(tarefa_id)
        if tarefa_id is None:
            return None
        return (
            Tarefa.objects
            .select_related('projeto', 'completado_por')
            .filter(pk=tarefa_id)
            .first()
        )

    def salvar(self, tarefa: Tarefa) -> Tarefa:
        tarefa.save()
        return tarefa

    def excluir(self, tarefa: Tarefa) -> None:
        tarefa.delete()
