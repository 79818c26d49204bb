"""
Schema builder: group raw metadata records into an ordered FormSchema.

Grouping is a single pass over the records. Ordering is recomputed after
grouping, so record order only matters for the duplicate-section merge
policy and for positional criteria (source_index).

Duplicate-section merge policy:
    - order: the minimum explicit order across all rows wins
    - criteria: the first non-empty criteria text wins; later rows never
      overwrite it

The builder never fails; malformed rows degrade to defaults.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from typing import Any

from dynaform.core.ir import (
    DEFAULT_SECTION_NAME,
    FieldDefinition,
    FieldKind,
    FormSchema,
    MetadataRecord,
    PickOption,
    SectionDefinition,
)
from dynaform.core.type_classifier import classify_type, normalize_type

logger = logging.getLogger(__name__)

RecordLike = MetadataRecord | Mapping[str, Any]


def parse_order(raw: Any) -> int | None:
    """
    Parse a display order value.

    Returns None (sorts after every explicit order) for missing, blank or
    unparseable values. Non-integral numbers are floored.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str):
        text = raw.strip()
        if not text:
            return None
        try:
            return int(text)
        except ValueError:
            try:
                raw = float(text)
            except ValueError:
                return None
    if isinstance(raw, float):
        if math.isnan(raw) or math.isinf(raw):
            return None
        return math.floor(raw)
    return None


def parse_pick_options(raw: str | None) -> list[PickOption]:
    """Split a comma-separated picklist string into trimmed, non-empty options."""
    options = []
    for piece in (raw or "").split(","):
        value = piece.strip()
        if value:
            options.append(PickOption(label=value, value=value))
    return options


def sort_key(order: int | None, name: str) -> tuple[bool, int, str]:
    """Total order: explicit order ascending, missing last, then name (case-insensitive)."""
    return (order is None, order if order is not None else 0, name.casefold())


def _min_order(current: int | None, candidate: int | None) -> int | None:
    if current is None:
        return candidate
    if candidate is None:
        return current
    return min(current, candidate)


def _coerce_record(record: RecordLike) -> MetadataRecord:
    if isinstance(record, MetadataRecord):
        return record
    return MetadataRecord.model_validate(dict(record))


class SchemaBuilder:
    """
    Builds FormSchema instances from raw metadata records.

    Attributes:
        default_section: Name given to rows that carry no section name
    """

    def __init__(self, default_section: str = DEFAULT_SECTION_NAME) -> None:
        self.default_section = default_section

    def build(self, records: Iterable[RecordLike]) -> FormSchema:
        """Group, merge and order records into a schema with every flag visible."""
        grouped: dict[str, SectionDefinition] = {}
        row_count = 0

        for record in records:
            row = _coerce_record(record)
            row_count += 1
            section = self._section_for(grouped, row)
            section.fields.append(self._build_field(row, len(section.fields) + 1))

        sections = list(grouped.values())
        for section in sections:
            section.fields.sort(key=lambda f: sort_key(f.order, f.field_api_name))
        sections.sort(key=lambda s: sort_key(s.order, s.name))

        logger.info(
            "Built form schema: %d sections, %d fields",
            len(sections),
            row_count,
            extra={"context": {"sections": [s.name for s in sections]}},
        )
        return FormSchema(sections=sections)

    def _section_for(
        self, grouped: dict[str, SectionDefinition], row: MetadataRecord
    ) -> SectionDefinition:
        name = (row.section or "").strip() or self.default_section
        order = parse_order(row.section_order)
        criteria = row.section_criteria or ""

        section = grouped.get(name)
        if section is None:
            section = SectionDefinition(
                name=name,
                order=order,
                raw_criteria=criteria,
                source_index=len(grouped) + 1,
            )
            grouped[name] = section
            return section

        merged_order = _min_order(section.order, order)
        if merged_order != section.order:
            logger.debug("Section %r order lowered %s -> %s", name, section.order, merged_order)
            section.order = merged_order
        if not section.raw_criteria.strip() and criteria.strip():
            section.raw_criteria = criteria
        return section

    def _build_field(self, row: MetadataRecord, source_index: int) -> FieldDefinition:
        kind = classify_type(row.field_type)
        return FieldDefinition(
            field_api_name=row.field_name or "",
            field_type=normalize_type(row.field_type),
            kind=kind,
            order=parse_order(row.field_order),
            pick_options=(
                parse_pick_options(row.picklist_values) if kind == FieldKind.PICKLIST else []
            ),
            raw_criteria=row.field_criteria or "",
            source_index=source_index,
        )


def build_schema(
    records: Iterable[RecordLike], default_section: str = DEFAULT_SECTION_NAME
) -> FormSchema:
    """Convenience wrapper around SchemaBuilder.build()."""
    return SchemaBuilder(default_section=default_section).build(records)
