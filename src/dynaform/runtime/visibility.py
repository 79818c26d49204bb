"""
Visibility engine: recompute section and field visibility from current values.

Each pass is a full re-walk of the schema, linear in the number of fields;
there is no incremental or dependency-tracked recompute. Criteria read only
field values, never visibility flags, so a pass is idempotent: running it
twice without an intervening edit reproduces identical flags.

Cascade: a field is visible only if its section is visible and its own
criteria are empty or satisfied.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from dynaform.core.criteria import evaluate_criteria, parse_criteria
from dynaform.core.ir import CriteriaDialect, CriteriaResult, FormSchema

logger = logging.getLogger(__name__)


@dataclass
class VisibilityReport:
    """Summary of one visibility pass."""

    visible_sections: int = 0
    visible_fields: int = 0
    hidden_sections: list[str] = field(default_factory=list)
    hidden_fields: list[str] = field(default_factory=list)  # "Section.Field"
    details: dict[str, str] = field(default_factory=dict)  # hidden item -> reason

    @property
    def hidden_count(self) -> int:
        return len(self.hidden_sections) + len(self.hidden_fields)


class VisibilityEngine:
    """
    Recomputes every is_visible flag in a FormSchema.

    Attributes:
        dialect: Criteria addressing dialect used to parse rule strings
    """

    def __init__(self, dialect: CriteriaDialect | str = CriteriaDialect.NAME) -> None:
        self.dialect = CriteriaDialect(dialect)

    def evaluate(self, raw_criteria: str | None, schema: FormSchema) -> CriteriaResult:
        """Parse and evaluate one criteria string against the schema."""
        return evaluate_criteria(parse_criteria(raw_criteria, self.dialect), schema)

    def recompute(self, schema: FormSchema) -> VisibilityReport:
        """Run a full visibility pass, mutating flags in place."""
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Schema before visibility pass: %s", schema.model_dump_json())

        report = VisibilityReport()
        for section in schema.sections:
            section_result = self.evaluate(section.raw_criteria, schema)
            section.criteria_satisfied = section_result.satisfied
            section.is_visible = section_result.satisfied
            section.visibility_detail = section_result.detail

            if section.is_visible:
                report.visible_sections += 1
            else:
                report.hidden_sections.append(section.name)
                report.details[section.name] = section_result.detail or "criteria not satisfied"

            for fld in section.fields:
                field_result = self.evaluate(fld.raw_criteria, schema)
                fld.criteria_satisfied = field_result.satisfied
                fld.is_visible = section.is_visible and field_result.satisfied
                if section.is_visible:
                    fld.visibility_detail = field_result.detail
                else:
                    fld.visibility_detail = f"section {section.name!r} hidden"

                key = f"{section.name}.{fld.field_api_name}"
                if fld.is_visible:
                    report.visible_fields += 1
                else:
                    report.hidden_fields.append(key)
                    report.details[key] = fld.visibility_detail or "criteria not satisfied"

        logger.info(
            "Visibility pass: %d/%d sections, %d fields visible",
            report.visible_sections,
            len(schema.sections),
            report.visible_fields,
            extra={
                "context": {
                    "dialect": self.dialect.value,
                    "hidden_sections": report.hidden_sections,
                    "hidden_fields": report.hidden_fields,
                }
            },
        )
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Schema after visibility pass: %s", schema.model_dump_json())
        return report


def recompute_visibility(
    schema: FormSchema, dialect: CriteriaDialect | str = CriteriaDialect.NAME
) -> VisibilityReport:
    """Convenience wrapper around VisibilityEngine.recompute()."""
    return VisibilityEngine(dialect).recompute(schema)
