"""
dynaform criteria rule language.

Parser and evaluator for the small visibility-rule grammar attached to
sections and fields.

Usage:
    from dynaform.core.criteria import parse_criteria, evaluate_criteria

    atoms = parse_criteria("[Details].[Amount]{>=10}")
    result = evaluate_criteria(atoms, schema)
    # result.satisfied, result.detail
"""

from dynaform.core.criteria.evaluator import (
    compare,
    evaluate_atom,
    evaluate_criteria,
    resolve_target,
)
from dynaform.core.criteria.parser import parse_criteria, parse_named, parse_positional

__all__ = [
    "compare",
    "evaluate_atom",
    "evaluate_criteria",
    "parse_criteria",
    "parse_named",
    "parse_positional",
    "resolve_target",
]
