"""Testes da chave de idempotência dos eventos Argus."""

from __future__ import annotations

import re

from api.connectors.argus.event_id import canonical_json, derive_event_id
from app.domain.payload import RawTextPayload, StructuredPayload
from app.services.phone_locator import PhoneHints

DERIVED_RE = re.compile(r"^argus:[0-9a-f]{32}$")


def test_uses_caller_id_verbatim() -> None:
    assert derive_event_id({"id": "evt1", "phone": "11988887777"}) == "evt1"


def test_uses_alternative_id_fields() -> None:
    assert derive_event_id({"call_id": "c-1"}) == "c-1"
    assert derive_event_id({"callId": "c-2"}) == "c-2"
    assert derive_event_id({"call": {"id": "c-3"}}) == "c-3"


def test_numeric_id_is_stringified() -> None:
    assert derive_event_id({"id": 12345}) == "12345"


def test_placeholder_id_falls_back_to_hash() -> None:
    event_id = derive_event_id({"id": "{{call_id}}", "phone": "11988887777"})

    assert DERIVED_RE.match(event_id)


def test_hash_is_independent_of_key_order() -> None:
    first = derive_event_id({"phone": "11988887777", "name": "Ana"})
    second = derive_event_id({"name": "Ana", "phone": "11988887777"})

    assert first == second
    assert DERIVED_RE.match(first)


def test_different_payloads_differ() -> None:
    assert derive_event_id({"phone": "11988887777"}) != derive_event_id({"phone": "11988887778"})


def test_accepts_resolved_payload_types() -> None:
    structured = derive_event_id(StructuredPayload({"id": "evt9"}))
    raw = derive_event_id(RawTextPayload("phone=11988887777"))

    assert structured == "evt9"
    assert DERIVED_RE.match(raw)
    assert raw == derive_event_id(RawTextPayload("phone=11988887777"))


def test_url_hints_change_the_hash() -> None:
    payload = {"name": "Ana"}
    plain = derive_event_id(payload)
    with_path = derive_event_id(payload, PhoneHints(path=("5511988887777",)))
    other_path = derive_event_id(payload, PhoneHints(path=("5521977776666",)))

    assert len({plain, with_path, other_path}) == 3


def test_raw_body_hint_alone_does_not_change_the_hash() -> None:
    payload = {"name": "Ana"}

    assert derive_event_id(payload) == derive_event_id(payload, PhoneHints(raw_body="x"))


def test_caller_id_ignores_hints() -> None:
    assert derive_event_id({"id": "evt1"}, PhoneHints(query=("11988887777",))) == "evt1"


def test_canonical_json_is_compact_and_sorted() -> None:
    assert canonical_json({"b": 1, "a": "ç"}) == '{"a":"ç","b":1}'
