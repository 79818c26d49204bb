"""
Criteria evaluator for dynaform visibility rules.

Evaluates parsed atoms against the live values held in a FormSchema.
Every failure mode is fail-closed: unresolvable targets, null values and
non-numeric operands under numeric operators all evaluate to False, with
a diagnostic detail attached to the result rather than an exception.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from typing import Any

from dynaform.core.ir import (
    EQUALITY_OPERATORS,
    NUMERIC_OPERATORS,
    CriteriaAtom,
    CriteriaOperator,
    CriteriaResult,
    FieldDefinition,
    FormSchema,
)

logger = logging.getLogger(__name__)

SATISFIED = CriteriaResult(satisfied=True)


def as_text(value: Any) -> str:
    """String form used for equality and containment checks."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def coerce_number(value: Any) -> float | None:
    """Coerce a value to float, or None when it is not numeric."""
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number):
        return None
    return number


def compare(actual: Any, operator: str, expected: str) -> bool:
    """
    Compare an actual field value with an expected literal.

    Args:
        actual: Current field value (None always fails)
        operator: One of = == != > >= < <= ~ (anything else: strict equality)
        expected: Literal from the criteria string

    Returns:
        True if the comparison holds
    """
    if actual is None:
        return False

    if operator in NUMERIC_OPERATORS:
        a = coerce_number(actual)
        e = coerce_number(expected)
        if a is None or e is None:
            return False
        if operator == CriteriaOperator.GREATER_THAN:
            return a > e
        if operator == CriteriaOperator.GREATER_EQUAL:
            return a >= e
        if operator == CriteriaOperator.LESS_THAN:
            return a < e
        return a <= e

    text = as_text(actual)
    if operator in EQUALITY_OPERATORS:
        return text.casefold() == expected.casefold()
    if operator == CriteriaOperator.NOT_EQUALS:
        return text.casefold() != expected.casefold()
    if operator == CriteriaOperator.CONTAINS:
        return expected.casefold() in text.casefold()
    return text == expected


def resolve_target(
    atom: CriteriaAtom, schema: FormSchema
) -> tuple[FieldDefinition | None, str | None]:
    """
    Locate the field an atom refers to.

    Positional atoms resolve by 1-based record order (source_index); named
    atoms by exact section name and field API name.

    Returns:
        (field, None) on success, (None, detail) on failure
    """
    if atom.is_positional:
        section = schema.section_at(atom.section_index or 0)
        if section is None:
            return None, f"section {atom.section_index} not found"
        field = section.field_at(atom.field_index or 0)
        if field is None:
            return None, f"field {atom.field_index} not found in section {atom.section_index}"
        return field, None

    section = schema.get_section(atom.section_name or "")
    if section is None:
        return None, f"section {atom.section_name!r} not found"
    field = section.get_field(atom.field_name or "")
    if field is None:
        return None, f"field {atom.field_name!r} not found in section {atom.section_name!r}"
    return field, None


def evaluate_atom(atom: CriteriaAtom, schema: FormSchema) -> CriteriaResult:
    """Evaluate one atom against the schema's current values."""
    field, detail = resolve_target(atom, schema)
    if field is None:
        logger.debug("Criteria %s unresolved: %s", atom.raw or atom.target, detail)
        return CriteriaResult(satisfied=False, detail=f"{atom.target}: {detail}")

    actual = field.value
    if actual is None:
        return CriteriaResult(satisfied=False, detail=f"{atom.target}: actual value is null")

    if atom.operator in NUMERIC_OPERATORS and (
        coerce_number(actual) is None or coerce_number(atom.expected) is None
    ):
        return CriteriaResult(
            satisfied=False,
            detail=f"{atom.target}: non-numeric operand for {atom.operator} "
            f"(actual={as_text(actual)!r}, expected={atom.expected!r})",
        )

    result = compare(actual, atom.operator, atom.expected)
    logger.debug(
        "Criteria %s %s %r against %r -> %s",
        atom.target,
        atom.operator,
        atom.expected,
        actual,
        result,
    )
    if result:
        return SATISFIED
    return CriteriaResult(
        satisfied=False,
        detail=f"{atom.target}: {as_text(actual)!r} {atom.operator} {atom.expected!r} is false",
    )


def evaluate_criteria(atoms: Sequence[CriteriaAtom], schema: FormSchema) -> CriteriaResult:
    """
    Evaluate the logical AND of atoms.

    An empty sequence is satisfied ("no criteria"). On failure the detail
    of the first failing atom is returned.
    """
    for atom in atoms:
        result = evaluate_atom(atom, schema)
        if not result.satisfied:
            return result
    return SATISFIED
