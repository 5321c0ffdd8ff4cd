"""Autenticação do webhook Argus por secret compartilhado.

O Argus não assina o corpo; envia um secret em header. Formatos aceitos,
em ordem de leitura:
- header dedicado (padrão `x-argus-secret`), depois `Authorization`;
- prefixo `Bearer `/`Token ` opcional;
- secret empacotado com telefone: `secret|5511988887777`, `5511...;secret`
  ou `secret,5511...`. O telefone vira dica de destino.

A comparação é em tempo constante e acontece antes de qualquer gravação.
"""

from __future__ import annotations

import hmac
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from app.domain.phone import looks_like_phone

if TYPE_CHECKING:
    from collections.abc import Mapping

AUTHORIZATION_HEADER: Final[str] = "authorization"

_SCHEME_RE: Final[re.Pattern[str]] = re.compile(r"^(?:bearer|token)\s+", re.IGNORECASE)
_DELIMITER_RE: Final[re.Pattern[str]] = re.compile(r"[|;,]")


class WebhookRequestError(ValueError):
    """Erro base para requests de webhook recusados."""


class InvalidCredentialsError(WebhookRequestError):
    """Secret ausente ou diferente do configurado."""


@dataclass(frozen=True, slots=True)
class AuthResult:
    """Resultado da verificação de credencial.

    Attributes:
        valid: Credencial aceita (ou verificação desativada)
        skipped: Nenhum secret configurado
        header: Header de onde a credencial foi lida
        phone: Telefone empacotado junto do secret, se houver
        error: Motivo da recusa
    """

    valid: bool
    skipped: bool = False
    header: str | None = None
    phone: str | None = None
    error: str | None = None


def _secure_equals(candidate: str, expected: str) -> bool:
    return hmac.compare_digest(candidate.encode("utf-8"), expected.encode("utf-8"))


def _split_credential(value: str) -> tuple[str, list[str]]:
    """Remove o esquema e separa as partes empacotadas."""
    token = _SCHEME_RE.sub("", value.strip()).strip()
    parts = [part.strip() for part in _DELIMITER_RE.split(token) if part.strip()]
    return token, parts


def _packed_phone(parts: list[str], secret_part: str | None) -> str | None:
    for part in parts:
        if part is secret_part:
            continue
        if looks_like_phone(part):
            return part
    return None


def authenticate_request(
    headers: Mapping[str, str],
    expected_secret: str | None,
    secret_header: str = "x-argus-secret",
) -> AuthResult:
    """Confere o secret enviado pelo Argus.

    Args:
        headers: Headers do request (chaves em minúsculas)
        expected_secret: Secret configurado; vazio desativa a verificação
        secret_header: Header dedicado ao secret

    Returns:
        AuthResult (nunca levanta; veja `verify_credentials`)
    """
    names = [secret_header.lower()]
    if AUTHORIZATION_HEADER not in names:
        names.append(AUTHORIZATION_HEADER)

    present: str | None = None
    phone: str | None = None

    for name in names:
        raw = headers.get(name)
        if not raw or not raw.strip():
            continue
        present = present or name
        token, parts = _split_credential(raw)

        if not expected_secret:
            # Sem secret configurado só há telefone quando vier empacotado
            if len(parts) > 1:
                phone = phone or _packed_phone(parts, None)
            continue

        if _secure_equals(token, expected_secret):
            return AuthResult(valid=True, header=name, phone=phone)

        secret_part = next((p for p in parts if _secure_equals(p, expected_secret)), None)
        if secret_part is not None:
            return AuthResult(
                valid=True,
                header=name,
                phone=phone or _packed_phone(parts, secret_part),
            )

    if not expected_secret:
        return AuthResult(valid=True, skipped=True, header=present, phone=phone)

    return AuthResult(
        valid=False,
        header=present,
        error="secret_mismatch" if present else "secret_missing",
    )


def verify_credentials(
    headers: Mapping[str, str],
    expected_secret: str | None,
    secret_header: str = "x-argus-secret",
) -> AuthResult:
    """Como `authenticate_request`, mas levanta em credencial inválida.

    Raises:
        InvalidCredentialsError: Se o secret estiver ausente ou incorreto
    """
    result = authenticate_request(headers, expected_secret, secret_header)
    if not result.valid:
        raise InvalidCredentialsError(result.error or "invalid_credentials")
    return result
