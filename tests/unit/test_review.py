"""Tests for review payloads and the review session lifecycle."""

from __future__ import annotations

import pytest

from dynaform.core.errors import ReviewSessionError
from dynaform.core.ir import FormSchema, MetadataRecord
from dynaform.core.schema_builder import build_schema
from dynaform.runtime.review import (
    ReviewPayload,
    ReviewSession,
    apply_review_payload,
    build_review_payload,
)
from dynaform.runtime.visibility import recompute_visibility


@pytest.fixture
def schema(named_records: list[MetadataRecord]) -> FormSchema:
    schema = build_schema(named_records)
    recompute_visibility(schema)
    return schema


@pytest.fixture
def payload(schema: FormSchema) -> ReviewPayload:
    return build_review_payload(schema)


# =============================================================================
# Payload snapshot
# =============================================================================


class TestBuildPayload:
    def test_sections_and_fields_in_display_order(self, payload: ReviewPayload) -> None:
        assert [s.name for s in payload.sections] == ["General", "Damage", "Service"]
        assert [f.field_api_name for f in payload.sections[1].fields] == [
            "Damage Notes",
            "Replacement Required",
            "Replacement Cost",
        ]

    def test_camel_case_keys(self, payload: ReviewPayload) -> None:
        data = payload.to_dict()
        damage = data["sections"][1]
        assert damage["isVisible"] is False
        assert damage["criteria"] == "[General].[Asset Condition]{Damaged}"
        assert "actual value is null" in damage["detail"]

        field = data["sections"][0]["fields"][0]
        assert field["fieldApiName"] == "Asset Condition"
        assert field["fieldType"] == "picklist"
        assert field["isPicklist"] is True
        assert field["isText"] is False
        assert field["comboboxOptions"][1] == {"label": "Damaged", "value": "Damaged"}

    def test_kind_flags_carried(self, payload: ReviewPayload) -> None:
        notes, required, cost = payload.sections[1].fields
        assert notes.is_textarea
        assert required.is_checkbox
        assert cost.is_number

    def test_snapshot_is_detached(self, schema: FormSchema, payload: ReviewPayload) -> None:
        payload.sections[0].fields[0].value = "Good"
        assert schema.sections[0].fields[0].value is None


# =============================================================================
# Applying a payload
# =============================================================================


class TestApplyPayload:
    def test_values_applied_by_api_name(self, schema: FormSchema, payload: ReviewPayload) -> None:
        payload.sections[0].fields[1].value = "900"
        updated = apply_review_payload(schema, payload)
        assert updated == 6
        assert schema.find_fields("Operating Hours")[0].value == "900"

    def test_does_not_recompute(self, schema: FormSchema, payload: ReviewPayload) -> None:
        payload.sections[0].fields[0].value = "Damaged"
        apply_review_payload(schema, payload)
        assert schema.get_section("Damage").is_visible is False

        recompute_visibility(schema)
        assert schema.get_section("Damage").is_visible is True

    def test_fields_missing_from_payload_untouched(self, schema: FormSchema) -> None:
        schema.find_fields("Damage Notes")[0].value = "scratched"
        partial = {
            "sections": [
                {
                    "name": "General",
                    "fields": [{"fieldApiName": "Asset Condition", "value": "Good"}],
                }
            ]
        }
        assert apply_review_payload(schema, partial) == 1
        assert schema.find_fields("Damage Notes")[0].value == "scratched"
        assert schema.find_fields("Asset Condition")[0].value == "Good"

    def test_unknown_payload_fields_ignored(self, schema: FormSchema) -> None:
        ghost = {"fieldApiName": "Ghost", "value": "1"}
        partial = {"sections": [{"name": "X", "fields": [ghost]}]}
        assert apply_review_payload(schema, partial) == 0

    def test_shared_api_name_matched_within_section(self) -> None:
        schema = build_schema(
            [
                {"section": "A", "field_name": "Notes"},
                {"section": "B", "field_name": "Notes"},
            ]
        )
        payload = build_review_payload(schema)
        payload.sections[0].fields[0].value = "typed in review"

        assert apply_review_payload(schema, payload) == 2
        assert [f.value for f in schema.find_fields("Notes")] == ["typed in review", None]

    def test_unknown_section_falls_back_to_api_name(self) -> None:
        schema = build_schema(
            [
                {"section": "A", "field_name": "Notes"},
                {"section": "B", "field_name": "Notes"},
            ]
        )
        notes = {"fieldApiName": "Notes", "value": "x"}
        legacy = {"sections": [{"name": "Old", "fields": [notes]}]}

        assert apply_review_payload(schema, legacy) == 2
        assert [f.value for f in schema.find_fields("Notes")] == ["x", "x"]

    def test_round_trip_keeps_kind_and_options(self, schema: FormSchema) -> None:
        data = build_review_payload(schema).to_dict()
        apply_review_payload(schema, ReviewPayload.model_validate(data))
        condition = schema.find_fields("Asset Condition")[0]
        assert condition.is_picklist
        assert [o.value for o in condition.pick_options] == ["Good", "Damaged", "Missing"]


# =============================================================================
# Review session
# =============================================================================


class TestReviewSession:
    def test_open_takes_private_copy(self, payload: ReviewPayload) -> None:
        session = ReviewSession()
        session.open(payload)
        assert session.is_open
        assert session.set_value("General", "Asset Condition", "Missing") is True
        assert payload.sections[0].fields[0].value is None

    def test_overwrite_returns_edits_and_closes(self, payload: ReviewPayload) -> None:
        session = ReviewSession()
        session.open(payload)
        session.set_value("Damage", "Replacement Required", True)

        result = session.overwrite()
        assert not session.is_open
        assert result.sections[1].fields[1].value is True
        assert result is not payload

    def test_keep_discards(self, payload: ReviewPayload) -> None:
        session = ReviewSession()
        session.open(payload)
        session.set_value("General", "Operating Hours", "3")
        session.keep()
        assert not session.is_open
        assert payload.sections[0].fields[1].value is None

    def test_set_value_unknown_target(self, payload: ReviewPayload) -> None:
        session = ReviewSession()
        session.open(payload)
        assert session.set_value("Nope", "Asset Condition", "x") is False
        assert session.set_value("General", "Nope", "x") is False

    def test_open_from_dict_and_none(self, payload: ReviewPayload) -> None:
        session = ReviewSession()
        opened = session.open(payload.to_dict())
        assert [s.name for s in opened.sections] == ["General", "Damage", "Service"]
        session.keep()

        assert session.open(None).sections == []

    @pytest.mark.parametrize(
        "action",
        [
            lambda s: s.set_value("General", "Asset Condition", "x"),
            lambda s: s.overwrite(),
            lambda s: s.keep(),
            lambda s: s.payload,
        ],
    )
    def test_closed_session_raises(self, action) -> None:
        session = ReviewSession()
        with pytest.raises(ReviewSessionError):
            action(session)
