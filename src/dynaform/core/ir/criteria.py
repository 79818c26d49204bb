"""
Criteria rule types for dynaform IR.

A raw criteria string parses into zero or more atoms. Each atom names a
target field (by 1-based position or by section/field name, depending on
the dialect), an operator and an expected literal.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class CriteriaDialect(StrEnum):
    """How criteria strings address their target field."""

    NAME = "name"  # [Section].[Field]{op expected}
    POSITIONAL = "positional"  # legacy: 1-2{op expected}; 2-1{...}


class CriteriaOperator(StrEnum):
    """Operator symbols understood by the evaluator."""

    EQUALS = "="
    DOUBLE_EQUALS = "=="
    NOT_EQUALS = "!="
    GREATER_THAN = ">"
    GREATER_EQUAL = ">="
    LESS_THAN = "<"
    LESS_EQUAL = "<="
    CONTAINS = "~"


NUMERIC_OPERATORS = frozenset(
    op.value
    for op in (
        CriteriaOperator.GREATER_THAN,
        CriteriaOperator.GREATER_EQUAL,
        CriteriaOperator.LESS_THAN,
        CriteriaOperator.LESS_EQUAL,
    )
)

EQUALITY_OPERATORS = frozenset(
    {CriteriaOperator.EQUALS.value, CriteriaOperator.DOUBLE_EQUALS.value}
)


class CriteriaAtom(BaseModel):
    """
    One (target, operator, expected) unit of a criteria string.

    Positional atoms set section_index/field_index; named atoms set
    section_name/field_name.

    Examples:
        - 1-1{Yes}: CriteriaAtom(section_index=1, field_index=1, operator="=", expected="Yes")
        - [Details].[Amount]{>=10}: CriteriaAtom(section_name="Details",
          field_name="Amount", operator=">=", expected="10")
    """

    section_index: int | None = None
    field_index: int | None = None
    section_name: str | None = None
    field_name: str | None = None
    operator: str = CriteriaOperator.EQUALS.value
    expected: str = ""
    raw: str = ""

    model_config = ConfigDict(frozen=True)

    @property
    def is_positional(self) -> bool:
        return self.section_index is not None

    @property
    def target(self) -> str:
        """Human-readable target reference."""
        if self.is_positional:
            return f"{self.section_index}-{self.field_index}"
        return f"[{self.section_name}].[{self.field_name}]"


class CriteriaResult(BaseModel):
    """
    Outcome of evaluating criteria.

    The detail is attached alongside the boolean so callers can explain why
    something is hidden; it is None when the criteria passed.
    """

    satisfied: bool
    detail: str | None = None

    model_config = ConfigDict(frozen=True)
