"""
Field definitions for dynaform IR.

This module contains the semantic field kinds, picklist options and the
per-field definition owned by a section.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class FieldKind(StrEnum):
    """Semantic kind of a form field, derived from the raw type tag."""

    TEXT = "text"
    TEXTAREA = "textarea"
    NUMBER = "number"
    DATE = "date"
    DATETIME = "datetime"
    CHECKBOX = "checkbox"
    PICKLIST = "picklist"
    OTHER = "other"


class PickOption(BaseModel):
    """One picklist choice. Builder-produced options have label == value."""

    label: str
    value: str

    model_config = ConfigDict(frozen=True)


class FieldDefinition(BaseModel):
    """
    One editable form field within a section.

    Attributes:
        field_api_name: Attribute name, used as display label and edit key
        field_type: Raw type tag as lower-cased from the metadata row
        kind: Semantic kind (exactly one per field)
        order: Explicit display order, None when absent (sorts last)
        pick_options: Choices for picklist fields, empty otherwise
        value: Current user-entered value (None until edited)
        raw_criteria: Unparsed visibility rule text
        source_index: 1-based position within the section in record order,
            used by positional criteria
        is_visible: Derived by the visibility pass
        criteria_satisfied: Whether the field's own rule passed
        visibility_detail: Diagnostic explaining a hidden field
    """

    field_api_name: str
    field_type: str = ""
    kind: FieldKind = FieldKind.OTHER
    order: int | None = None
    pick_options: list[PickOption] = Field(default_factory=list)
    value: bool | str | None = None
    raw_criteria: str = ""
    source_index: int = 0

    is_visible: bool = True
    criteria_satisfied: bool = True
    visibility_detail: str | None = None

    @property
    def is_text(self) -> bool:
        return self.kind == FieldKind.TEXT

    @property
    def is_textarea(self) -> bool:
        return self.kind == FieldKind.TEXTAREA

    @property
    def is_number(self) -> bool:
        return self.kind == FieldKind.NUMBER

    @property
    def is_date(self) -> bool:
        return self.kind == FieldKind.DATE

    @property
    def is_datetime(self) -> bool:
        return self.kind == FieldKind.DATETIME

    @property
    def is_checkbox(self) -> bool:
        return self.kind == FieldKind.CHECKBOX

    @property
    def is_picklist(self) -> bool:
        return self.kind == FieldKind.PICKLIST

    @property
    def is_other(self) -> bool:
        return self.kind == FieldKind.OTHER

    def kind_flags(self) -> dict[str, bool]:
        """Return the per-kind boolean flags, exactly one of which is True."""
        return {
            "isText": self.is_text,
            "isTextArea": self.is_textarea,
            "isNumber": self.is_number,
            "isDate": self.is_date,
            "isDateTime": self.is_datetime,
            "isCheckbox": self.is_checkbox,
            "isPicklist": self.is_picklist,
            "isOther": self.is_other,
        }
