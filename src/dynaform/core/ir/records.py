"""
Raw metadata record type for dynaform IR.

One record describes one form field plus the section it belongs to. Records
accept either snake_case names or the metadata object's API names
(``Section__c``, ``Asset_Attribute__c``, ...).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

OrderValue = int | float | str | None


class MetadataRecord(BaseModel):
    """
    One raw metadata row, exactly as supplied upstream.

    Nothing is normalized here; the schema builder applies defaults.
    """

    section: str | None = Field(default=None, alias="Section__c")
    section_order: OrderValue = Field(default=None, alias="Section_Order__c")
    section_criteria: str | None = Field(default=None, alias="Section_Criteria__c")
    field_name: str | None = Field(default=None, alias="Asset_Attribute__c")
    field_type: str | None = Field(default=None, alias="Asset_Type__c")
    field_order: OrderValue = Field(default=None, alias="Field_Order__c")
    field_criteria: str | None = Field(default=None, alias="Field_Criteria__c")
    picklist_values: str | None = Field(default=None, alias="Picklist_Values__c")

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @field_validator(
        "section",
        "section_criteria",
        "field_name",
        "field_type",
        "field_criteria",
        "picklist_values",
        mode="before",
    )
    @classmethod
    def _stringify(cls, v: Any) -> Any:
        """Upstream sometimes sends numbers or booleans for text columns."""
        if v is None or isinstance(v, str):
            return v
        return str(v)

    @field_validator("section_order", "field_order", mode="before")
    @classmethod
    def _keep_scalar(cls, v: Any) -> Any:
        """Non-scalar orders are unparseable; the builder treats None as last."""
        if isinstance(v, bool) or not isinstance(v, int | float | str):
            return None
        return v
