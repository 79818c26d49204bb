"""
Review payload: a flat, serializable snapshot of a FormSchema.

The payload carries every section and field with its current value and
visibility diagnostics. It can be edited out-of-band (see ReviewSession)
and applied back onto a schema by matching fieldApiName.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from dynaform.core.errors import ReviewSessionError
from dynaform.core.ir import FormSchema, PickOption

logger = logging.getLogger(__name__)


class ReviewField(BaseModel):
    field_api_name: str = Field(alias="fieldApiName")
    field_type: str = Field(default="", alias="fieldType")
    value: bool | str | None = None
    criteria: str = ""
    is_visible: bool = Field(default=True, alias="isVisible")
    criteria_satisfied: bool = Field(default=True, alias="criteriaSatisfied")
    detail: str | None = None

    is_text: bool = Field(default=False, alias="isText")
    is_textarea: bool = Field(default=False, alias="isTextArea")
    is_number: bool = Field(default=False, alias="isNumber")
    is_date: bool = Field(default=False, alias="isDate")
    is_datetime: bool = Field(default=False, alias="isDateTime")
    is_checkbox: bool = Field(default=False, alias="isCheckbox")
    is_picklist: bool = Field(default=False, alias="isPicklist")
    is_other: bool = Field(default=False, alias="isOther")
    combobox_options: list[PickOption] = Field(default_factory=list, alias="comboboxOptions")

    model_config = ConfigDict(populate_by_name=True)


class ReviewSection(BaseModel):
    name: str
    order: int | None = None
    criteria: str = ""
    is_visible: bool = Field(default=True, alias="isVisible")
    criteria_satisfied: bool = Field(default=True, alias="criteriaSatisfied")
    detail: str | None = None
    fields: list[ReviewField] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)


class ReviewPayload(BaseModel):
    sections: list[ReviewSection] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)

    def to_dict(self) -> dict[str, Any]:
        """Plain JSON-ready dict with camelCase keys."""
        return self.model_dump(by_alias=True, mode="json")


def build_review_payload(schema: FormSchema) -> ReviewPayload:
    """Snapshot a schema into a review payload."""
    sections = []
    for section in schema.sections:
        fields = [
            ReviewField(
                field_api_name=f.field_api_name,
                field_type=f.field_type,
                value=f.value,
                criteria=f.raw_criteria,
                is_visible=f.is_visible,
                criteria_satisfied=f.criteria_satisfied,
                detail=f.visibility_detail,
                is_text=f.is_text,
                is_textarea=f.is_textarea,
                is_number=f.is_number,
                is_date=f.is_date,
                is_datetime=f.is_datetime,
                is_checkbox=f.is_checkbox,
                is_picklist=f.is_picklist,
                is_other=f.is_other,
                combobox_options=list(f.pick_options),
            )
            for f in section.fields
        ]
        sections.append(
            ReviewSection(
                name=section.name,
                order=section.order,
                criteria=section.raw_criteria,
                is_visible=section.is_visible,
                criteria_satisfied=section.criteria_satisfied,
                detail=section.visibility_detail,
                fields=fields,
            )
        )
    return ReviewPayload(sections=sections)


def apply_review_payload(schema: FormSchema, payload: ReviewPayload | dict[str, Any]) -> int:
    """
    Copy values from a payload onto the schema.

    A payload field is matched by fieldApiName within the schema section of
    the same name, so fields sharing an API name in different sections keep
    their own values. When the payload section has no counterpart in the
    schema, its fields match by fieldApiName across the whole schema.

    Fields absent from the payload are left untouched; payload fields with
    no match in the schema are ignored. Visibility is not recomputed here.

    Returns:
        Number of schema fields whose value was set
    """
    if not isinstance(payload, ReviewPayload):
        payload = ReviewPayload.model_validate(payload)

    updated: set[int] = set()
    for section in payload.sections:
        target = schema.get_section(section.name)
        for f in section.fields:
            if target is not None:
                matches = [fld for fld in target.fields if fld.field_api_name == f.field_api_name]
            else:
                matches = schema.find_fields(f.field_api_name)
            for fld in matches:
                fld.value = f.value
                updated.add(id(fld))

    logger.info("Applied review payload: %d fields updated", len(updated))
    return len(updated)


class ReviewSession:
    """
    Editable review panel over a private copy of a payload.

    Edits stay local until overwrite() hands back a clean copy; keep()
    discards them. Either one closes the session.
    """

    def __init__(self) -> None:
        self._payload: ReviewPayload | None = None

    @property
    def is_open(self) -> bool:
        return self._payload is not None

    @property
    def payload(self) -> ReviewPayload:
        return self._require_open()

    def open(self, payload: ReviewPayload | dict[str, Any] | None) -> ReviewPayload:
        """Start a session on a deep copy of the payload (None opens an empty one)."""
        if payload is None:
            self._payload = ReviewPayload()
        elif isinstance(payload, ReviewPayload):
            self._payload = payload.model_copy(deep=True)
        else:
            self._payload = ReviewPayload.model_validate(payload)
        logger.debug("Review session opened with %d sections", len(self._payload.sections))
        return self._payload

    def set_value(self, section_name: str, field_api_name: str, value: bool | str | None) -> bool:
        """Set one field value; False if the section or field is unknown."""
        payload = self._require_open()
        for section in payload.sections:
            if section.name != section_name:
                continue
            for f in section.fields:
                if f.field_api_name == field_api_name:
                    f.value = value
                    return True
            return False
        return False

    def overwrite(self) -> ReviewPayload:
        """Close the session and return a clean copy of the edited payload."""
        payload = self._require_open()
        self._payload = None
        logger.info("Review session submitted")
        return payload.model_copy(deep=True)

    def keep(self) -> None:
        """Close the session, discarding local edits."""
        self._require_open()
        self._payload = None
        logger.info("Review session closed without changes")

    def _require_open(self) -> ReviewPayload:
        if self._payload is None:
            raise ReviewSessionError("Review session is not open")
        return self._payload
