"""Testes da normalização e formatação de telefones."""

from __future__ import annotations

import pytest

from app.domain.phone import PhoneFormat, format_phone, looks_like_phone, normalize_phone


class TestNormalizePhone:
    """Testes de normalize_phone."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("(11) 98888-7777", "+5511988887777"),
            ("+55 11 98888-7777", "+5511988887777"),
            ("+5511988887777", "+5511988887777"),
            ("0055 11 98888 7777", "+5511988887777"),
            ("5511988887777", "+5511988887777"),
            ("011988887777", "+5511988887777"),
            ("11988887777", "+5511988887777"),
            ("(11) 3333-4444", "+551133334444"),
            ("551133334444", "+551133334444"),
            ("+55.11.98888.7777", "+5511988887777"),
        ],
    )
    def test_accepts_brazilian_forms(self, raw: str, expected: str) -> None:
        assert normalize_phone(raw) == expected

    @pytest.mark.parametrize(
        "raw",
        ["98888-7777", "8888-7777", "", "   ", "{{phone}}", "abc", "123456789012345678"],
    )
    def test_rejects_numbers_without_area_code_or_garbage(self, raw: str) -> None:
        assert normalize_phone(raw) is None

    def test_rejects_non_string_input(self) -> None:
        assert normalize_phone(11988887777) is None
        assert normalize_phone(None) is None
        assert normalize_phone(["11988887777"]) is None

    def test_is_idempotent(self) -> None:
        for raw in ("(11) 98888-7777", "0055 11 3333 4444", "011988887777"):
            once = normalize_phone(raw)
            assert once is not None
            assert normalize_phone(once) == once

    def test_output_always_matches_canonical_shape(self) -> None:
        for raw in ("11988887777", "1133334444", "5511988887777", "00551133334444"):
            result = normalize_phone(raw)
            assert result is not None
            assert result.startswith("+55")
            assert len(result[3:]) in (10, 11)
            assert result[1:].isdigit()


class TestFormatPhone:
    """Testes de format_phone."""

    def test_international_keeps_canonical(self) -> None:
        assert format_phone("+5511988887777", PhoneFormat.INTERNATIONAL) == "+5511988887777"

    def test_national_uses_trunk_zero(self) -> None:
        assert format_phone("+5511988887777", PhoneFormat.NATIONAL) == "011988887777"

    def test_digits_drops_plus(self) -> None:
        assert format_phone("+5511988887777", "digits") == "5511988887777"

    def test_national_output_normalizes_back(self) -> None:
        national = format_phone("+551133334444", PhoneFormat.NATIONAL)
        assert normalize_phone(national) == "+551133334444"

    def test_rejects_non_canonical_input(self) -> None:
        with pytest.raises(ValueError):
            format_phone("11988887777", PhoneFormat.INTERNATIONAL)

    def test_rejects_unknown_format(self) -> None:
        with pytest.raises(ValueError):
            format_phone("+5511988887777", "e164-ish")


def test_looks_like_phone() -> None:
    assert looks_like_phone("5511988887777") is True
    assert looks_like_phone("(11) 98888-7777") is True
    assert looks_like_phone("argus-webhook") is False
    assert looks_like_phone("1234") is False
    assert looks_like_phone("") is False
