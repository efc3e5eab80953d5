# apps/core/signals.py

from django.core.exceptions import ValidationError
from django.db.models.signals import m2m_changed, pre_save
from django.dispatch import receiver

from .exceptions import CriadorNaoPodeSerColaborador
from .models import Projeto


@receiver(pre_save, sender=Projeto)
def impedir_troca_de_criador(sender, instance, **kwargs):
    """
    O criador de um projeto não muda depois da criação
    """
    if not instance.pk:
        return

    criador_anterior = (
        sender.objects.filter(pk=instance.pk)
        .values_list('criador_id', flat=True)
        .first()
    )
    if criador_anterior is not None and criador_anterior != instance.criador_id:
        raise ValidationError("O criador do projeto não pode ser alterado")


@receiver(m2m_changed, sender=Projeto.colaboradores.through)
def impedir_criador_como_colaborador(sender, instance, action, reverse, pk_set, **kwargs):
    """
    Barra o criador na lista de colaboradores, pelos dois lados da relação:
    projeto.colaboradores.add(usuario) e usuario.projetos_colaborador.add(projeto)
    """
    if action != 'pre_add' or not pk_set:
        return

    if not reverse:
        if instance.criador_id in pk_set:
            raise CriadorNaoPodeSerColaborador()
    elif Projeto.objects.filter(pk__in=pk_set, criador_id=instance.pk).exists():
        raise CriadorNaoPodeSerColaborador()
