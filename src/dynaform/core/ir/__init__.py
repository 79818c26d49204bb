"""
dynaform Intermediate Representation (IR) types.

Types are organized into submodules and re-exported from this package.
"""

# Criteria
from .criteria import (
    EQUALITY_OPERATORS,
    NUMERIC_OPERATORS,
    CriteriaAtom,
    CriteriaDialect,
    CriteriaOperator,
    CriteriaResult,
)

# Fields
from .fields import (
    FieldDefinition,
    FieldKind,
    PickOption,
)

# Raw records
from .records import (
    MetadataRecord,
)

# Sections / schema
from .sections import (
    DEFAULT_SECTION_NAME,
    FormSchema,
    SectionDefinition,
)

__all__ = [
    # Criteria
    "CriteriaAtom",
    "CriteriaDialect",
    "CriteriaOperator",
    "CriteriaResult",
    "EQUALITY_OPERATORS",
    "NUMERIC_OPERATORS",
    # Fields
    "FieldDefinition",
    "FieldKind",
    "PickOption",
    # Raw records
    "MetadataRecord",
    # Sections / schema
    "DEFAULT_SECTION_NAME",
    "FormSchema",
    "SectionDefinition",
]
