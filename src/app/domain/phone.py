"""Normalização de telefones brasileiros para a forma canônica +55.

Forma canônica: ``+55`` seguido de DDD + assinante, 10 dígitos (fixo) ou
11 dígitos (celular). Um número sem DDD (8-9 dígitos) é rejeitado: discar
para ele exigiria adivinhar a área.

A ordem das regras importa. Formas com prefixo (00 55, 55, 0) são testadas
antes do fallback de 10/11 dígitos puros, senão um número prefixado seria
lido como nacional.
"""

from __future__ import annotations

import re
from enum import StrEnum
from typing import Final

COUNTRY_CODE: Final[str] = "55"
INTERNATIONAL_PREFIX: Final[str] = "00"
TRUNK_PREFIX: Final[str] = "0"
NATIONAL_LENGTHS: Final[frozenset[int]] = frozenset({10, 11})

_COSMETIC_RE: Final[re.Pattern[str]] = re.compile(r"[()\-\s]")
_CANONICAL_RE: Final[re.Pattern[str]] = re.compile(rf"^\+{COUNTRY_CODE}\d{{10,11}}$")
_NON_DIGIT_RE: Final[re.Pattern[str]] = re.compile(r"\D")


class PhoneFormat(StrEnum):
    """Formato do número enviado à API de chamadas."""

    INTERNATIONAL = "international"  # +5511988887777
    NATIONAL = "national"  # 011988887777 (tronco 0)
    DIGITS = "digits"  # 5511988887777


def _canonical(national: str) -> str | None:
    if len(national) not in NATIONAL_LENGTHS:
        return None
    return f"+{COUNTRY_CODE}{national}"


def normalize_phone(raw: object) -> str | None:
    """Converte uma string com cara de telefone em ``+55<DDD><número>``.

    Args:
        raw: Valor bruto (qualquer tipo; não-strings retornam None)

    Returns:
        Telefone canônico ou None quando não há DDD + número válidos.

    Exemplos:
        >>> normalize_phone("(11) 98888-7777")
        '+5511988887777'
        >>> normalize_phone("0055 11 98888 7777")
        '+5511988887777'
        >>> normalize_phone("98888-7777") is None
        True
    """
    if not isinstance(raw, str) or not raw.strip():
        return None

    compact = _COSMETIC_RE.sub("", raw.strip())
    if _CANONICAL_RE.match(compact):
        return compact

    digits = _NON_DIGIT_RE.sub("", compact)
    length = len(digits)

    if digits.startswith(INTERNATIONAL_PREFIX + COUNTRY_CODE) and length in (14, 15):
        return _canonical(digits[len(INTERNATIONAL_PREFIX) + len(COUNTRY_CODE):])

    if digits.startswith(COUNTRY_CODE) and length in (12, 13):
        return _canonical(digits[len(COUNTRY_CODE):])

    if digits.startswith(TRUNK_PREFIX) and length in (11, 12):
        return _canonical(digits.lstrip(TRUNK_PREFIX))

    if length in NATIONAL_LENGTHS:
        return f"+{COUNTRY_CODE}{digits}"

    return None


def format_phone(normalized: str, phone_format: PhoneFormat | str) -> str:
    """Renderiza um telefone canônico no formato de saída configurado.

    Raises:
        ValueError: Se `normalized` não estiver na forma canônica.
    """
    if not _CANONICAL_RE.match(normalized):
        raise ValueError("telefone não está na forma canônica +55")

    national = normalized[1 + len(COUNTRY_CODE):]
    fmt = PhoneFormat(phone_format)
    if fmt is PhoneFormat.NATIONAL:
        return f"{TRUNK_PREFIX}{national}"
    if fmt is PhoneFormat.DIGITS:
        return f"{COUNTRY_CODE}{national}"
    return normalized


def looks_like_phone(value: str) -> bool:
    """Heurística barata: só caracteres de telefone e 8-15 dígitos."""
    if not value or not re.fullmatch(r"[\d\s()+\-.]+", value):
        return False
    return 8 <= len(_NON_DIGIT_RE.sub("", value)) <= 15
