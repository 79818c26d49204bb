"""
Form controller: sole owner of the live FormSchema.

The schema is mutated only through two entry points:

    rebuild   load() / load_response() replace the schema wholesale and
              run the first visibility pass
    recompute edit() writes a value, then runs a full visibility pass

Everything is synchronous; an edit and its recompute complete before the
call returns, so a pass always observes the value that triggered it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from dynaform.core.ir import FormSchema
from dynaform.core.manifest import FormConfig
from dynaform.core.records import error_messages, records_from_graphql
from dynaform.core.schema_builder import RecordLike, SchemaBuilder
from dynaform.runtime.review import ReviewPayload, apply_review_payload, build_review_payload
from dynaform.runtime.visibility import VisibilityEngine, VisibilityReport

logger = logging.getLogger(__name__)


class FormController:
    """Owns one dynamic form's schema and keeps its visibility current."""

    def __init__(self, config: FormConfig | None = None) -> None:
        self.config = config or FormConfig()
        self.builder = SchemaBuilder(default_section=self.config.schema.default_section)
        self.engine = VisibilityEngine(self.config.criteria.dialect)
        self._schema = FormSchema()
        self.last_report: VisibilityReport | None = None

    @property
    def schema(self) -> FormSchema:
        return self._schema

    @property
    def schema_error(self) -> str | None:
        return self._schema.error

    @property
    def has_sections(self) -> bool:
        return self._schema.has_sections

    # -- rebuild --

    def load(self, records: Iterable[RecordLike]) -> FormSchema:
        """Replace the schema from raw records and run the first pass."""
        self._schema = self.builder.build(records)
        self.recompute()
        return self._schema

    def load_response(self, data: dict[str, Any] | None, errors: Any = None) -> FormSchema:
        """
        Load from a GraphQL UI API response.

        Upstream errors clear the schema and are joined into schema_error;
        no partial schema is kept.
        """
        messages = error_messages(errors)
        if messages:
            return self.fail(messages)
        return self.load(records_from_graphql(data, self.config.schema.metadata_object))

    def fail(self, errors: Iterable[str] | str) -> FormSchema:
        """Clear the schema and record an upstream error."""
        messages = [errors] if isinstance(errors, str) else list(errors)
        self._schema = FormSchema(error="; ".join(messages))
        self.last_report = None
        logger.error("Form schema load failed: %s", self._schema.error)
        return self._schema

    # -- recompute --

    def recompute(self) -> VisibilityReport:
        """Run a full visibility pass over the current schema."""
        self.last_report = self.engine.recompute(self._schema)
        return self.last_report

    def edit(self, field_api_name: str, value: bool | str | None) -> VisibilityReport:
        """
        Set a field value and recompute visibility.

        Every field sharing the API name receives the value. Unknown names
        still trigger a pass so flags stay a function of current values.
        """
        matches = self._schema.find_fields(field_api_name)
        if not matches:
            logger.warning("Edit for unknown field %r", field_api_name)
        for fld in matches:
            fld.value = value
        logger.debug("Field %r set to %r (%d matches)", field_api_name, value, len(matches))
        return self.recompute()

    # -- review --

    def review_payload(self) -> ReviewPayload:
        return build_review_payload(self._schema)

    def apply_review(self, payload: ReviewPayload | dict[str, Any]) -> VisibilityReport:
        """Apply reviewed values by section and fieldApiName, then recompute."""
        apply_review_payload(self._schema, payload)
        return self.recompute()
