"""Mascaramento de dados sensíveis antes de logar ou persistir.

Telefones só aparecem mascarados nos logs; metadados de request gravados
junto do evento têm todos os dígitos mascarados.
"""

from __future__ import annotations

import re
from re import Pattern
from typing import Final

_DIGIT_RE: Final[Pattern[str]] = re.compile(r"\d")


def mask_digits(text: str | None) -> str | None:
    """Substitui todo dígito por ``*`` (determinístico).

    Exemplos:
        >>> mask_digits("/api/argus-webhook/5511988887777")
        '/api/argus-webhook/*************'
    """
    if text is None:
        return None
    return _DIGIT_RE.sub("*", text)


def mask_phone(phone: str | None, visible: int = 4) -> str:
    """Mantém apenas os últimos `visible` dígitos de um telefone.

    Exemplos:
        >>> mask_phone("+5511988887777")
        '+*********7777'
    """
    if not phone:
        return ""
    digit_positions = [i for i, ch in enumerate(phone) if ch.isdigit()]
    keep = set(digit_positions[-visible:]) if visible > 0 else set()
    return "".join(
        "*" if ch.isdigit() and i not in keep else ch for i, ch in enumerate(phone)
    )


def mask_key(key: str, visible: int = 8) -> str:
    """Trunca chaves/ids para logs (ex.: external_id)."""
    return key[:visible] + "..." if len(key) > visible else key
