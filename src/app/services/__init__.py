"""Serviços de aplicação.

Unidades reutilizáveis sem IO direto.
Implementações concretas de IO ficam em app/infra/.
"""

from app.services.phone_locator import (
    PhoneCandidate,
    PhoneHints,
    PhoneMatch,
    is_placeholder,
    locate_phone,
)

__all__ = [
    "PhoneCandidate",
    "PhoneHints",
    "PhoneMatch",
    "is_placeholder",
    "locate_phone",
]
