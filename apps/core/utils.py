# apps/core/utils.py

import json
import secrets
from typing import Dict, List, Optional

from .exceptions import DadosInvalidos


def gerar_token() -> str:
    """Gera token aleatório para confirmação de conta e recuperação de senha"""
    return secrets.token_urlsafe(32)


def normalizar_id(valor) -> Optional[int]:
    """
    Converte um id vindo do cliente em int

    Aceita apenas inteiros e strings de dígitos; bool, float e o resto
    equivalem a id inexistente (None).
    """
    if isinstance(valor, bool):
        return None
    if isinstance(valor, int):
        return valor
    if isinstance(valor, str):
        valor = valor.strip()
        if valor.isascii() and valor.isdigit():
            return int(valor)
    return None


def ler_json(request) -> Dict:
    """
    Lê o corpo JSON de uma requisição
    Corpo vazio equivale a {}
    """
    if not request.body:
        return {}

    try:
        dados = json.loads(request.body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise DadosInvalidos(mensagem='JSON inválido')

    if not isinstance(dados, dict):
        raise DadosInvalidos(mensagem='O corpo deve ser um objeto JSON')

    return dados


def erros_formulario(form) -> Dict[str, List[str]]:
    """Converte os erros de um form Django em dict serializável"""
    return {campo: [str(erro) for erro in erros] for campo, erros in form.errors.items()}


def _data_iso(valor) -> Optional[str]:
    return valor.isoformat() if valor else None


# === SERIALIZAÇÃO ===
# Datas saem como string ISO para que o payload possa trafegar pelo
# channel layer (o backend Redis usa msgpack).

def serializar_usuario(usuario) -> Optional[Dict]:
    """
    Visão pública de um usuário: apenas id, nome e email
    Senha, token e campos internos nunca são expostos
    """
    if usuario is None:
        return None

    return {
        'id': usuario.pk,
        'nome': usuario.nome,
        'email': usuario.email,
    }


def serializar_tarefa(tarefa) -> Dict:
    return {
        'id': tarefa.pk,
        'nome': tarefa.nome,
        'descricao': tarefa.descricao,
        'data_entrega': _data_iso(tarefa.data_entrega),
        'prioridade': tarefa.prioridade,
        'estado': tarefa.estado,
        'projeto': tarefa.projeto_id,
        'completado_por': serializar_usuario(tarefa.completado_por) if tarefa.completado_por_id else None,
        'criado_em': _data_iso(tarefa.criado_em),
    }


def serializar_projeto(projeto, expandir: bool = False) -> Dict:
    """
    Serializa um projeto

    Com expandir=True inclui tarefas (com quem as completou) e
    colaboradores; a listagem usa expandir=False.
    """
    dados = {
        'id': projeto.pk,
        'nome': projeto.nome,
        'descricao': projeto.descricao,
        'data_entrega': _data_iso(projeto.data_entrega),
        'cliente': projeto.cliente,
        'criador': projeto.criador_id,
        'criado_em': _data_iso(projeto.criado_em),
    }

    if expandir:
        dados['colaboradores'] = [serializar_usuario(c) for c in projeto.colaboradores.all()]
        dados['tarefas'] = [serializar_tarefa(t) for t in projeto.tarefas.all()]

    return dados
