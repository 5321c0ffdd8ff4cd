"""Testes do PhoneLocator (busca de telefone em payload sem schema)."""

from __future__ import annotations

from app.domain.payload import RawTextPayload, StructuredPayload
from app.services.phone_locator import (
    MAX_SCAN_DEPTH,
    PhoneHints,
    is_placeholder,
    locate_phone,
)


def test_direct_field_is_found() -> None:
    match = locate_phone(StructuredPayload({"id": "evt1", "phone": "(11) 98888-7777"}))

    assert match is not None
    assert match.normalized == "+5511988887777"
    assert match.source == "field"
    assert match.raw == "(11) 98888-7777"


def test_nested_known_field_is_found() -> None:
    payload = StructuredPayload({"customer": {"number": "5521977776666"}})

    match = locate_phone(payload)

    assert match is not None
    assert match.normalized == "+5521977776666"


def test_integer_field_value_is_accepted() -> None:
    match = locate_phone(StructuredPayload({"telefone": 11988887777}))

    assert match is not None
    assert match.normalized == "+5511988887777"


def test_boolean_field_is_ignored() -> None:
    assert locate_phone(StructuredPayload({"phone": True})) is None


def test_placeholder_field_is_skipped() -> None:
    assert locate_phone(StructuredPayload({"id": "evt2", "phone": "{{phone}}"})) is None


def test_placeholder_skipped_then_next_field_wins() -> None:
    payload = StructuredPayload({"phone": "{{lead.phone}}", "celular": "11988887777"})

    match = locate_phone(payload)

    assert match is not None
    assert match.normalized == "+5511988887777"


def test_hints_take_priority_over_payload_fields() -> None:
    payload = StructuredPayload({"phone": "11988887777"})
    hints = PhoneHints(query=("21977776666",))

    match = locate_phone(payload, hints)

    assert match is not None
    assert match.normalized == "+5521977776666"
    assert match.source == "query"
    assert match.is_ambiguous is True
    assert [c.normalized for c in match.candidates] == ["+5521977776666", "+5511988887777"]


def test_header_hint_beats_query_and_path() -> None:
    hints = PhoneHints(
        header=("31966665555",),
        query=("21977776666",),
        path=("11988887777",),
    )

    match = locate_phone(StructuredPayload({}), hints)

    assert match is not None
    assert match.source == "header"
    assert match.normalized == "+5531966665555"


def test_recursive_scan_finds_unknown_field() -> None:
    payload = StructuredPayload({"data": {"attributes": [{"contato_principal": "011 98888 7777"}]}})

    match = locate_phone(payload)

    assert match is not None
    assert match.source == "scan"
    assert match.normalized == "+5511988887777"


def test_scan_survives_cycles() -> None:
    data: dict[str, object] = {"name": "x"}
    data["self"] = data
    data["deep"] = {"loop": data, "value": "11988887777"}

    match = locate_phone(StructuredPayload(data))

    assert match is not None
    assert match.normalized == "+5511988887777"


def test_scan_stops_at_depth_limit() -> None:
    node: dict[str, object] = {"value": "11988887777"}
    for _ in range(MAX_SCAN_DEPTH + 5):
        node = {"child": node}

    assert locate_phone(StructuredPayload(node)) is None


def test_raw_text_payload_is_scanned_with_regex() -> None:
    payload = RawTextPayload("ligar para +5511988887777 amanha")

    match = locate_phone(payload)

    assert match is not None
    assert match.source == "raw_body"
    assert match.normalized == "+5511988887777"


def test_raw_body_placeholder_span_is_blanked() -> None:
    payload = RawTextPayload("phone={{11988887777}}")

    assert locate_phone(payload) is None


def test_raw_body_hint_used_for_structured_payload() -> None:
    payload = StructuredPayload({"note": "sem telefone"})
    hints = PhoneHints(raw_body='{"note": "sem telefone"} 5511988887777')

    match = locate_phone(payload, hints)

    assert match is not None
    assert match.source == "raw_body"


def test_nothing_found_returns_none() -> None:
    assert locate_phone(StructuredPayload({"id": "evt", "type": "call.ended"})) is None


def test_duplicate_candidates_are_collapsed() -> None:
    payload = StructuredPayload({"phone": "11988887777", "to": "+55 11 98888-7777"})

    match = locate_phone(payload)

    assert match is not None
    assert match.is_ambiguous is False
    assert len(match.candidates) == 1


def test_hints_as_dict_omits_empty_sources() -> None:
    hints = PhoneHints(header=("a",), raw_body="ignored")

    assert hints.as_dict() == {"header": ["a"]}


def test_is_placeholder() -> None:
    assert is_placeholder("{{phone}}") is True
    assert is_placeholder("abc}}") is True
    assert is_placeholder("11988887777") is False
    assert is_placeholder(None) is False


def test_caller_loses_to_destination_fields() -> None:
    payload = StructuredPayload(
        {
            "caller": "11911112222",
            "to": "21977776666",
            "call": {"number": "31955554444"},
        }
    )

    match = locate_phone(payload)

    assert match is not None
    assert match.normalized == "+5521977776666"
    assert [c.normalized for c in match.candidates][-1] == "+5511911112222"


def test_caller_is_used_when_nothing_else_exists() -> None:
    match = locate_phone(StructuredPayload({"caller": {"number": "11911112222"}}))

    assert match is not None
    assert match.normalized == "+5511911112222"
    assert match.source == "field"
