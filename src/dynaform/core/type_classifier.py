"""
Map raw metadata type tags to semantic field kinds.

Total function: unknown tags degrade to FieldKind.OTHER.
"""

from __future__ import annotations

from dynaform.core.ir import FieldKind

_TYPE_MAP: dict[str, FieldKind] = {
    "text": FieldKind.TEXT,
    "string": FieldKind.TEXT,
    "textarea": FieldKind.TEXTAREA,
    "longtext": FieldKind.TEXTAREA,
    "number": FieldKind.NUMBER,
    "double": FieldKind.NUMBER,
    "currency": FieldKind.NUMBER,
    "percent": FieldKind.NUMBER,
    "date": FieldKind.DATE,
    "datetime": FieldKind.DATETIME,
    "checkbox": FieldKind.CHECKBOX,
    "boolean": FieldKind.CHECKBOX,
    "picklist": FieldKind.PICKLIST,
}


def normalize_type(raw_type: str | None) -> str:
    """Lower-case and trim a raw type tag (None -> "")."""
    return (raw_type or "").strip().lower()


def classify_type(raw_type: str | None) -> FieldKind:
    """Return the field kind for a raw type tag."""
    return _TYPE_MAP.get(normalize_type(raw_type), FieldKind.OTHER)
