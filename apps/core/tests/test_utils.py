"""
Conversão de ids vindos do cliente
"""

import pytest

from apps.core.utils import normalizar_id


@pytest.mark.parametrize('valor, esperado', [
    (7, 7),
    ('7', 7),
    (' 12 ', 12),
    (True, None),
    (False, None),
    (1.9, None),
    ('1.9', None),
    ('-3', None),
    ('²', None),
    ('', None),
    (None, None),
    ({'id': 1}, None),
])
def test_normalizar_id(valor, esperado):
    assert normalizar_id(valor) == esperado
