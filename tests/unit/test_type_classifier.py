"""Tests for raw type tag classification."""

from __future__ import annotations

import pytest

from dynaform.core.ir import FieldDefinition, FieldKind
from dynaform.core.type_classifier import classify_type, normalize_type


class TestClassifyType:
    @pytest.mark.parametrize(
        ("raw", "kind"),
        [
            ("text", FieldKind.TEXT),
            ("string", FieldKind.TEXT),
            ("textarea", FieldKind.TEXTAREA),
            ("longtext", FieldKind.TEXTAREA),
            ("number", FieldKind.NUMBER),
            ("double", FieldKind.NUMBER),
            ("currency", FieldKind.NUMBER),
            ("percent", FieldKind.NUMBER),
            ("date", FieldKind.DATE),
            ("datetime", FieldKind.DATETIME),
            ("checkbox", FieldKind.CHECKBOX),
            ("boolean", FieldKind.CHECKBOX),
            ("picklist", FieldKind.PICKLIST),
        ],
    )
    def test_known_tags(self, raw: str, kind: FieldKind) -> None:
        assert classify_type(raw) == kind

    def test_case_and_whitespace_insensitive(self) -> None:
        assert classify_type("  PickList ") == FieldKind.PICKLIST
        assert normalize_type("  DateTime ") == "datetime"

    @pytest.mark.parametrize("raw", ["", None, "lookup", "geolocation", "date time"])
    def test_unknown_degrades_to_other(self, raw: str | None) -> None:
        assert classify_type(raw) == FieldKind.OTHER


class TestKindFlags:
    """Exactly one kind flag is true for every kind."""

    @pytest.mark.parametrize("raw", ["text", "longtext", "percent", "date", "datetime",
                                     "boolean", "picklist", "unknown"])
    def test_exactly_one_flag(self, raw: str) -> None:
        field = FieldDefinition(field_api_name="f", kind=classify_type(raw))
        flags = field.kind_flags()
        assert len(flags) == 8
        assert sum(flags.values()) == 1
