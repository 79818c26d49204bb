"""
Adapters from upstream payloads to MetadataRecord lists.

The metadata source is a GraphQL UI API response shaped like:

    {"uiapi": {"query": {"Generic_Form__mdt": {"edges": [
        {"node": {"Section__c": {"value": "Details"}, ...}},
    ]}}}}

Fetching it is someone else's job; this module only flattens it.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from dynaform.core.errors import make_records_error
from dynaform.core.ir import MetadataRecord

logger = logging.getLogger(__name__)

DEFAULT_METADATA_OBJECT = "Generic_Form__mdt"


def _unwrap(node: dict[str, Any]) -> dict[str, Any]:
    """Turn {"Field__c": {"value": v}} into {"Field__c": v}."""
    flat: dict[str, Any] = {}
    for key, cell in node.items():
        if isinstance(cell, dict):
            flat[key] = cell.get("value")
        else:
            flat[key] = cell
    return flat


def records_from_graphql(
    data: dict[str, Any] | None, object_name: str = DEFAULT_METADATA_OBJECT
) -> list[MetadataRecord]:
    """
    Flatten a GraphQL UI API response into metadata records.

    Args:
        data: The response "data" object (None yields no records)
        object_name: Metadata object queried (e.g. "Generic_Form__mdt")

    Returns:
        One record per edge, in edge order
    """
    query = ((data or {}).get("uiapi") or {}).get("query") or {}
    edges = (query.get(object_name) or {}).get("edges") or []

    records = []
    for edge in edges:
        node = (edge or {}).get("node")
        if not isinstance(node, dict):
            continue
        records.append(MetadataRecord.model_validate(_unwrap(node)))

    logger.debug("Flattened %d %s edges into records", len(records), object_name)
    return records


def error_messages(errors: Any) -> list[str]:
    """Extract messages from a GraphQL "errors" list (or a bare string)."""
    if not errors:
        return []
    if isinstance(errors, str):
        return [errors]
    messages = []
    for err in errors:
        if isinstance(err, dict):
            messages.append(str(err.get("message", err)))
        else:
            messages.append(str(err))
    return messages


def load_records_file(
    path: Path, object_name: str = DEFAULT_METADATA_OBJECT
) -> tuple[list[MetadataRecord], list[str]]:
    """
    Read a JSON records file.

    The file holds either a list of record objects, or a GraphQL response
    object with "data" and/or "errors" keys.

    Returns:
        (records, error messages)

    Raises:
        RecordsError: If the file cannot be read or has the wrong shape
    """
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise make_records_error(f"Cannot read records file: {e}", path) from e
    except json.JSONDecodeError as e:
        raise make_records_error(
            f"Invalid JSON: {e.msg}", path, detail=f"line {e.lineno}, column {e.colno}"
        ) from e

    if isinstance(payload, list):
        records = []
        for i, item in enumerate(payload):
            if not isinstance(item, dict):
                raise make_records_error("Record must be an object", path, detail=f"index {i}")
            records.append(MetadataRecord.model_validate(item))
        return records, []

    if isinstance(payload, dict):
        records = records_from_graphql(payload.get("data"), object_name)
        return records, error_messages(payload.get("errors"))

    raise make_records_error("Expected a list of records or a response object", path)
