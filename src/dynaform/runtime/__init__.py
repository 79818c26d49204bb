"""
dynaform runtime: visibility engine, form controller, review payloads and
logging setup.
"""

from dynaform.runtime.controller import FormController
from dynaform.runtime.review import (
    ReviewPayload,
    ReviewSession,
    apply_review_payload,
    build_review_payload,
)
from dynaform.runtime.visibility import VisibilityEngine, VisibilityReport, recompute_visibility

__all__ = [
    "FormController",
    "ReviewPayload",
    "ReviewSession",
    "VisibilityEngine",
    "VisibilityReport",
    "apply_review_payload",
    "build_review_payload",
    "recompute_visibility",
]
