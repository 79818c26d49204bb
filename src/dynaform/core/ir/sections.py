"""
Section and schema types for dynaform IR.

A FormSchema is the ordered list of sections produced by one load. Its
shape is fixed once built; only field values and derived visibility
flags change afterwards.
"""

from __future__ import annotations

from collections.abc import Iterator

from pydantic import BaseModel, Field

from .fields import FieldDefinition

DEFAULT_SECTION_NAME = "Other"


class SectionDefinition(BaseModel):
    """
    Named, ordered group of fields with an optional visibility rule.

    Attributes:
        name: Section name ("Other" when the metadata row had none)
        order: Minimum explicit order across its rows, None when absent
        raw_criteria: Unparsed section-level rule text
        fields: Fields owned by this section, in display order
        source_index: 1-based position of first appearance in record order
        is_visible: Derived by the visibility pass
        criteria_satisfied: Whether the section rule passed
        visibility_detail: Diagnostic explaining a hidden section
    """

    name: str = DEFAULT_SECTION_NAME
    order: int | None = None
    raw_criteria: str = ""
    fields: list[FieldDefinition] = Field(default_factory=list)
    source_index: int = 0

    is_visible: bool = True
    criteria_satisfied: bool = True
    visibility_detail: str | None = None

    @property
    def render_key(self) -> str:
        """Key that changes whenever the section flips visibility."""
        return f"{self.name}-{str(self.is_visible).lower()}"

    def get_field(self, field_api_name: str) -> FieldDefinition | None:
        """Get the first field with the given API name."""
        for field in self.fields:
            if field.field_api_name == field_api_name:
                return field
        return None

    def field_at(self, source_index: int) -> FieldDefinition | None:
        """Get a field by its 1-based position in record order."""
        for field in self.fields:
            if field.source_index == source_index:
                return field
        return None


class FormSchema(BaseModel):
    """
    Ordered sections produced by one schema load.

    Attributes:
        sections: Sections in display order
        error: Upstream error message; when set, sections is empty
    """

    sections: list[SectionDefinition] = Field(default_factory=list)
    error: str | None = None

    @property
    def has_sections(self) -> bool:
        return len(self.sections) > 0

    def get_section(self, name: str) -> SectionDefinition | None:
        """Get a section by exact name."""
        for section in self.sections:
            if section.name == name:
                return section
        return None

    def section_at(self, source_index: int) -> SectionDefinition | None:
        """Get a section by its 1-based position in record order."""
        for section in self.sections:
            if section.source_index == source_index:
                return section
        return None

    def iter_fields(self) -> Iterator[tuple[SectionDefinition, FieldDefinition]]:
        """Yield (section, field) pairs in display order."""
        for section in self.sections:
            for field in section.fields:
                yield section, field

    def find_fields(self, field_api_name: str) -> list[FieldDefinition]:
        """Get every field with the given API name, across all sections."""
        return [f for _, f in self.iter_fields() if f.field_api_name == field_api_name]

    def visibility_flags(self) -> list[tuple[str, bool, list[tuple[str, bool]]]]:
        """Snapshot of (section, visible, [(field, visible), ...]) for comparison."""
        return [
            (s.name, s.is_visible, [(f.field_api_name, f.is_visible) for f in s.fields])
            for s in self.sections
        ]
