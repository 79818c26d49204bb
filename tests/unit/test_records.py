"""Tests for upstream record adapters (GraphQL flattening, records files)."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from dynaform.core.errors import RecordsError
from dynaform.core.ir import MetadataRecord
from dynaform.core.records import error_messages, load_records_file, records_from_graphql
from dynaform.runtime import FormController


def _response(object_name: str = "Generic_Form__mdt") -> dict:
    return {
        "uiapi": {
            "query": {
                object_name: {
                    "edges": [
                        {
                            "node": {
                                "Section__c": {"value": "Main"},
                                "Section_Order__c": {"value": 1},
                                "Asset_Attribute__c": {"value": "Serial"},
                                "Asset_Type__c": {"value": "String"},
                                "Id": "m00000000000001",
                            }
                        },
                        {"node": {"Asset_Attribute__c": {"value": "Loose"}}},
                        {"node": None},
                        None,
                    ]
                }
            }
        }
    }


class TestRecordsFromGraphql:
    def test_flattens_value_cells(self) -> None:
        records = records_from_graphql(_response())
        assert len(records) == 2
        assert records[0] == MetadataRecord(
            section="Main", section_order=1, field_name="Serial", field_type="String"
        )
        assert records[1].field_name == "Loose"
        assert records[1].section is None

    def test_custom_object_name(self) -> None:
        assert records_from_graphql(_response("Inspection__mdt")) == []
        assert len(records_from_graphql(_response("Inspection__mdt"), "Inspection__mdt")) == 2

    @pytest.mark.parametrize(
        "data",
        [
            None,
            {},
            {"uiapi": None},
            {"uiapi": {"query": {}}},
            {"uiapi": {"query": {"Generic_Form__mdt": {}}}},
        ],
    )
    def test_missing_paths_yield_nothing(self, data) -> None:
        assert records_from_graphql(data) == []


class TestErrorMessages:
    def test_graphql_error_list(self) -> None:
        errors = [{"message": "INVALID_FIELD"}, {"path": ["x"]}, "plain"]
        assert error_messages(errors) == ["INVALID_FIELD", "{'path': ['x']}", "plain"]

    def test_bare_string(self) -> None:
        assert error_messages("network down") == ["network down"]

    @pytest.mark.parametrize("errors", [None, [], ""])
    def test_empty(self, errors) -> None:
        assert error_messages(errors) == []


class TestLoadRecordsFile:
    def test_record_list(self, tmp_path: Path) -> None:
        path = tmp_path / "records.json"
        path.write_text(
            json.dumps(
                [
                    {"section": "A", "field_name": "x", "field_type": "Number"},
                    {"Section__c": "B", "Asset_Attribute__c": "y"},
                ]
            )
        )
        records, errors = load_records_file(path)
        assert errors == []
        assert [r.field_name for r in records] == ["x", "y"]
        assert records[1].section == "B"

    def test_response_object(self, tmp_path: Path) -> None:
        path = tmp_path / "response.json"
        path.write_text(json.dumps({"data": _response(), "errors": [{"message": "partial"}]}))
        records, errors = load_records_file(path)
        assert len(records) == 2
        assert errors == ["partial"]

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(RecordsError) as exc_info:
            load_records_file(tmp_path / "nope.json")
        assert "Cannot read records file" in str(exc_info.value)

    def test_invalid_json_reports_position(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text('[{"section": }]')
        with pytest.raises(RecordsError) as exc_info:
            load_records_file(path)
        assert exc_info.value.context.detail.startswith("line 1, column")
        assert "Invalid JSON" in exc_info.value.message

    def test_non_object_item(self, tmp_path: Path) -> None:
        path = tmp_path / "rows.json"
        path.write_text('[{"field_name": "a"}, 3]')
        with pytest.raises(RecordsError) as exc_info:
            load_records_file(path)
        assert exc_info.value.context.detail == "index 1"

    def test_wrong_top_level(self, tmp_path: Path) -> None:
        path = tmp_path / "scalar.json"
        path.write_text('"hello"')
        with pytest.raises(RecordsError, match="Expected a list of records"):
            load_records_file(path)


class TestFixtureResponse:
    def test_loads_and_drives_controller(self, fixtures_dir: Path) -> None:
        records, errors = load_records_file(fixtures_dir / "graphql_response.json")
        assert errors == []
        assert len(records) == 4

        controller = FormController()
        controller.load(records)
        assert [s.name for s in controller.schema.sections] == ["Details", "Repair", "Other"]
        assert controller.schema.get_section("Repair").is_visible is False

        controller.edit("Status", "in repair")
        assert controller.schema.get_section("Repair").is_visible is True
