"""Validates a raw extraction result and splits it into base and enrichment rows."""

from typing import Any

from linelist.documents.models import EnrichmentRole
from linelist.merge.exceptions import ResultPayloadError
from linelist.merge.fields import (
    BASE_FIELD_ALIASES,
    BASE_FIELDS,
    ENRICHMENT_FIELDS_BY_ROLE,
    IDENTIFIER_FIELD,
)
from linelist.merge.models import EnrichmentSource, Row

_BASE_ROW_KEYS = ("extracted_lines", "data", "lines")
_ROLE_ALIASES: dict[EnrichmentRole, tuple[str, ...]] = {
    EnrichmentRole.SECONDARY_PROCESS: ("secondary_process", "hmb"),
    EnrichmentRole.MATERIAL: ("material", "pms"),
    EnrichmentRole.CORROSION: ("corrosion", "nace"),
}


def parse_result_payload(
    payload: dict[str, Any],
    requested_roles: tuple[EnrichmentRole, ...],
) -> tuple[list[Row], dict[EnrichmentRole, EnrichmentSource]]:
    """Split a backend result into base rows and per-role enrichment sources.

    A broken enrichment section only fails that role; a broken base section
    fails the whole result.

    Raises:
        ResultPayloadError: if the base rows are missing or malformed.
    """
    base_rows = _parse_base_rows(payload)
    section = payload.get("enrichment", {})
    enrichments: dict[EnrichmentRole, EnrichmentSource] = {}
    for role in EnrichmentRole:
        if role not in requested_roles:
            enrichments[role] = EnrichmentSource.absent()
        elif not isinstance(section, dict):
            enrichments[role] = EnrichmentSource.failed("Malformed enrichment section")
        else:
            enrichments[role] = _parse_enrichment(role, _lookup_role(section, role))
    return base_rows, enrichments


def _parse_base_rows(payload: Any) -> list[Row]:
    if not isinstance(payload, dict):
        raise ResultPayloadError("Extraction result must be an object")
    raw_rows = None
    for key in _BASE_ROW_KEYS:
        if key in payload:
            raw_rows = payload[key]
            break
    if raw_rows is None:
        raise ResultPayloadError(
            f"Extraction result has no line rows (expected one of {list(_BASE_ROW_KEYS)})"
        )
    if not isinstance(raw_rows, list):
        raise ResultPayloadError("Extraction line rows must be a list")
    rows: list[Row] = []
    for index, raw in enumerate(raw_rows):
        if not isinstance(raw, dict):
            raise ResultPayloadError(f"Line row at index {index} must be an object")
        rows.append({name: _field_value(raw, name) for name in BASE_FIELDS})
    return rows


def _lookup_role(section: dict[str, Any], role: EnrichmentRole) -> Any:
    for key in _ROLE_ALIASES[role]:
        if key in section:
            return section[key]
    return None


def _parse_enrichment(role: EnrichmentRole, raw: Any) -> EnrichmentSource:
    if raw is None:
        return EnrichmentSource.failed("no data returned")
    if isinstance(raw, dict):
        if raw.get("error"):
            return EnrichmentSource.failed(str(raw["error"]))
        raw = raw.get("rows")
    if not isinstance(raw, list):
        return EnrichmentSource.failed("unrecognized enrichment shape")
    fields = (IDENTIFIER_FIELD, *ENRICHMENT_FIELDS_BY_ROLE[role])
    rows: list[Row] = []
    for index, item in enumerate(raw):
        if not isinstance(item, dict):
            return EnrichmentSource.failed(f"row at index {index} is not an object")
        rows.append({name: _field_value(item, name) for name in fields})
    return EnrichmentSource.succeeded(rows)


def _field_value(raw: dict[str, Any], name: str) -> str:
    for key in (name, *BASE_FIELD_ALIASES.get(name, ())):
        value = raw.get(key)
        if value is not None and value != "":
            return _to_text(value)
    return ""


def _to_text(value: Any) -> str:
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()
