"""Shared pytest fixtures for dynaform tests."""

from pathlib import Path

import pytest

from dynaform.core.ir import MetadataRecord


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def positional_rows() -> list[dict]:
    """Two-section form from the end-to-end scenario (positional criteria)."""
    return [
        {
            "section": "A",
            "section_order": 2,
            "field_name": "X",
            "field_type": "number",
            "field_criteria": "",
        },
        {
            "section": "B",
            "section_order": 1,
            "field_name": "Y",
            "field_type": "checkbox",
            "field_criteria": "1-1{>5}",
        },
    ]


@pytest.fixture
def named_records() -> list[MetadataRecord]:
    """Inspection form using the [Section].[Field] dialect."""
    return [
        MetadataRecord(
            section="General",
            section_order="1",
            field_name="Asset Condition",
            field_type="Picklist",
            field_order="1",
            picklist_values="Good, Damaged, ,Missing",
        ),
        MetadataRecord(
            section="General",
            section_order="1",
            field_name="Operating Hours",
            field_type="Number",
            field_order="2",
        ),
        MetadataRecord(
            section="Damage",
            section_order="2",
            section_criteria="[General].[Asset Condition]{Damaged}",
            field_name="Damage Notes",
            field_type="TextArea",
            field_order="1",
        ),
        MetadataRecord(
            section="Damage",
            section_order="2",
            field_name="Replacement Required",
            field_type="Checkbox",
            field_order="2",
        ),
        MetadataRecord(
            section="Damage",
            section_order="2",
            field_name="Replacement Cost",
            field_type="Currency",
            field_order="3",
            field_criteria="[Damage].[Replacement Required]{=true}",
        ),
        MetadataRecord(
            section="Service",
            section_order="3",
            field_name="Service Due",
            field_type="Date",
            field_order="1",
            field_criteria="[General].[Operating Hours]{>=500}",
        ),
    ]
