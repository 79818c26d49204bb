"""
Criteria parser for dynaform visibility rules.

Two addressing dialects share one entry point, parse_criteria():

    name (default)
        [Section].[Field]{op expected}
        The whole string is a single rule. A non-match yields no atoms.

    positional (legacy)
        sec-fld{op expected}; sec-fld{op expected}
        Pieces split on newline or semicolon, implicitly AND-ed. Indices
        are 1-based. Pieces that do not match are dropped.

In both dialects an empty operator means "=" and one layer of matching
quotes around the expected literal is stripped. Parsing never raises;
dropped rules are logged at WARNING.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable

from dynaform.core.ir import CriteriaAtom, CriteriaDialect, CriteriaOperator

logger = logging.getLogger(__name__)

NAMED_CRITERIA_RE = re.compile(
    r"^\s*\[([^\]]+)\]\.\[([^\]]+)\]"  # [Section].[Field]
    r"\s*\{\s*([!<>=~]*)([^{}]*?)\s*\}\s*$"  # {op expected}
)

POSITIONAL_CRITERIA_RE = re.compile(
    r"^(\d+)\s*-\s*(\d+)"  # sec-fld
    r"\s*\{\s*(==|!=|>=|<=|=|>|<|~)?([^{}]*?)\s*\}$"  # {op expected}
)

_PIECE_SEPARATOR_RE = re.compile(r"[\n;]")

_QUOTES = ('"', "'")


def strip_quotes(text: str) -> str:
    """Strip a single layer of matching quotes."""
    text = text.strip()
    if len(text) >= 2 and text[0] == text[-1] and text[0] in _QUOTES:
        return text[1:-1]
    return text


def parse_named(raw: str | None) -> list[CriteriaAtom]:
    """Parse a [Section].[Field]{...} rule into zero or one atom."""
    text = (raw or "").strip()
    if not text:
        return []

    m = NAMED_CRITERIA_RE.match(text)
    if not m:
        logger.warning("Criteria did not match [Section].[Field]{...}: %r", text)
        return []

    section_name, field_name, operator, expected = m.groups()
    return [
        CriteriaAtom(
            section_name=section_name,
            field_name=field_name,
            operator=operator or CriteriaOperator.EQUALS.value,
            expected=strip_quotes(expected),
            raw=text,
        )
    ]


def parse_positional(raw: str | None) -> list[CriteriaAtom]:
    """Parse newline/semicolon separated sec-fld{...} pieces."""
    atoms: list[CriteriaAtom] = []
    for piece in _PIECE_SEPARATOR_RE.split(raw or ""):
        piece = piece.strip()
        if not piece:
            continue

        m = POSITIONAL_CRITERIA_RE.match(piece)
        if not m:
            logger.warning("Dropping criteria piece, expected sec-fld{...}: %r", piece)
            continue

        section_index, field_index = int(m.group(1)), int(m.group(2))
        if section_index < 1 or field_index < 1:
            logger.warning("Dropping criteria piece with non-positive index: %r", piece)
            continue

        atoms.append(
            CriteriaAtom(
                section_index=section_index,
                field_index=field_index,
                operator=m.group(3) or CriteriaOperator.EQUALS.value,
                expected=strip_quotes(m.group(4)),
                raw=piece,
            )
        )
    return atoms


_DIALECT_PARSERS: dict[CriteriaDialect, Callable[[str | None], list[CriteriaAtom]]] = {
    CriteriaDialect.NAME: parse_named,
    CriteriaDialect.POSITIONAL: parse_positional,
}


def parse_criteria(
    raw: str | None, dialect: CriteriaDialect | str = CriteriaDialect.NAME
) -> list[CriteriaAtom]:
    """
    Parse a raw criteria string.

    Args:
        raw: Criteria text (None or blank means "always visible")
        dialect: Addressing dialect in effect

    Returns:
        Atoms to be AND-ed; empty when there is no (valid) rule.
    """
    return _DIALECT_PARSERS[CriteriaDialect(dialect)](raw)
