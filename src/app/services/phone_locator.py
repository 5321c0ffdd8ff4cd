"""Localiza o telefone de destino em um payload Argus sem schema.

Ordem de busca (o primeiro candidato que normaliza vence):
1. Dicas de alta confiança vindas do transporte: header, query, path
2. Campos conhecidos do payload (diretos e aninhados em customer/lead/contact/call;
   `caller`, que é a origem da chamada, por último)
3. Varredura recursiva de todas as strings do payload
4. Regex no corpo bruto do request (+55, 55, qualquer sequência de 10-13 dígitos)

Placeholders de template (`{{phone}}`) são descartados em todas as etapas:
indicam que o remetente não substituiu a variável, e discar para os dígitos
restantes seria discar errado.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, Final

from app.domain.payload import InboundPayload, RawTextPayload, StructuredPayload
from app.domain.phone import normalize_phone

logger = logging.getLogger(__name__)

MAX_SCAN_DEPTH: Final[int] = 32

_PLACEHOLDER_SPAN_RE: Final[re.Pattern[str]] = re.compile(r"\{\{.*?\}\}", re.DOTALL)

DIRECT_FIELDS: Final[tuple[str, ...]] = (
    "callee",
    "phoneNumber",
    "phone_number",
    "phone",
    "telefone",
    "celular",
    "mobile",
    "destination",
    "to",
    "number",
    "ani",
    "customerNumber",
    "customer_number",
)

NESTED_FIELDS: Final[tuple[tuple[str, tuple[str, ...]], ...]] = (
    ("customer", ("number", "phone", "phoneNumber", "phone_number", "telefone")),
    ("lead", ("phone", "phoneNumber", "phone_number", "telefone", "celular", "number")),
    ("contact", ("phone", "phoneNumber", "number", "telefone")),
    ("call", ("to", "callee", "phoneNumber", "number")),
)

# Origem da chamada no Argus; só vale quando nenhum campo de destino existe
CALLER_FIELD: Final[str] = "caller"
CALLER_NESTED_FIELDS: Final[tuple[str, ...]] = ("number", "phone", "phoneNumber", "phone_number")

RAW_BODY_PATTERNS: Final[tuple[re.Pattern[str], ...]] = (
    re.compile(r"\+55\d{10,11}(?!\d)"),
    re.compile(r"(?<![\d+])55\d{10,11}(?!\d)"),
    re.compile(r"(?<![\d+])\d{10,13}(?!\d)"),
)


def is_placeholder(value: object) -> bool:
    """True para strings com sintaxe de interpolação `{{ }}` não expandida."""
    return isinstance(value, str) and ("{{" in value or "}}" in value)


@dataclass(frozen=True, slots=True)
class PhoneHints:
    """Candidatos auxiliares extraídos do transporte."""

    header: tuple[str, ...] = ()
    query: tuple[str, ...] = ()
    path: tuple[str, ...] = ()
    raw_body: str = ""

    def as_dict(self) -> dict[str, list[str]]:
        """Dicas não vazias (sem o corpo bruto), para enriquecer o payload."""
        sources = {"header": self.header, "query": self.query, "path": self.path}
        return {name: list(values) for name, values in sources.items() if values}


@dataclass(frozen=True, slots=True)
class PhoneCandidate:
    source: str
    raw: str
    normalized: str


@dataclass(frozen=True, slots=True)
class PhoneMatch:
    """Telefone escolhido e todos os candidatos válidos (diagnóstico)."""

    raw: str
    normalized: str
    source: str
    candidates: tuple[PhoneCandidate, ...] = field(default_factory=tuple)

    @property
    def is_ambiguous(self) -> bool:
        return len(self.candidates) > 1


def locate_phone(
    payload: InboundPayload,
    hints: PhoneHints | None = None,
) -> PhoneMatch | None:
    """Retorna o primeiro candidato aceito pelo normalizador, ou None.

    Todos os candidatos válidos e distintos ficam em `PhoneMatch.candidates`
    na ordem de busca.
    """
    valid: list[PhoneCandidate] = []
    seen: set[str] = set()

    for source, raw in iter_candidates(payload, hints or PhoneHints()):
        if is_placeholder(raw):
            continue
        normalized = normalize_phone(raw)
        if normalized is None or normalized in seen:
            continue
        seen.add(normalized)
        valid.append(PhoneCandidate(source=source, raw=raw, normalized=normalized))

    if not valid:
        return None

    first = valid[0]
    if len(valid) > 1:
        logger.debug(
            "phone_candidates_ambiguous",
            extra={
                "candidate_count": len(valid),
                "sources": [candidate.source for candidate in valid],
                "chosen_source": first.source,
            },
        )
    return PhoneMatch(
        raw=first.raw,
        normalized=first.normalized,
        source=first.source,
        candidates=tuple(valid),
    )


def iter_candidates(
    payload: InboundPayload,
    hints: PhoneHints,
) -> Iterator[tuple[str, str]]:
    """Gera pares (origem, valor bruto) na ordem de confiança."""
    for source, values in (("header", hints.header), ("query", hints.query), ("path", hints.path)):
        for value in values:
            yield source, value

    yield from _iter_known_fields(payload.fields)

    if isinstance(payload, StructuredPayload):
        for value in _iter_strings(payload.data):
            yield "scan", value

    raw_text = hints.raw_body
    if not raw_text and isinstance(payload, RawTextPayload):
        raw_text = payload.text
    for value in _scan_raw_text(raw_text):
        yield "raw_body", value


def _iter_known_fields(fields: Mapping[str, Any]) -> Iterator[tuple[str, str]]:
    for name in DIRECT_FIELDS:
        value = _scalar_text(fields.get(name))
        if value is not None:
            yield "field", value

    for parent, names in NESTED_FIELDS:
        obj = fields.get(parent)
        if not isinstance(obj, Mapping):
            continue
        for name in names:
            value = _scalar_text(obj.get(name))
            if value is not None:
                yield "field", value

    value = _scalar_text(fields.get(CALLER_FIELD))
    if value is not None:
        yield "field", value
    caller = fields.get(CALLER_FIELD)
    if isinstance(caller, Mapping):
        for name in CALLER_NESTED_FIELDS:
            value = _scalar_text(caller.get(name))
            if value is not None:
                yield "field", value


def _scalar_text(value: object) -> str | None:
    # bool é subclasse de int
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    return None


def _iter_strings(root: object) -> Iterator[str]:
    """Strings do payload em ordem de documento, com guarda de ciclo e profundidade."""
    stack: list[tuple[object, int]] = [(root, 0)]
    visited: set[int] = set()

    while stack:
        node, depth = stack.pop()
        if isinstance(node, str):
            yield node
            continue
        if not isinstance(node, (dict, list, tuple)) or depth >= MAX_SCAN_DEPTH:
            continue
        if id(node) in visited:
            continue
        visited.add(id(node))

        children = list(node.values()) if isinstance(node, dict) else list(node)
        stack.extend((child, depth + 1) for child in reversed(children))


def _scan_raw_text(text: str) -> Iterator[str]:
    if not text:
        return
    cleaned = _PLACEHOLDER_SPAN_RE.sub(" ", text)
    for pattern in RAW_BODY_PATTERNS:
        for match in pattern.finditer(cleaned):
            yield match.group(0)
