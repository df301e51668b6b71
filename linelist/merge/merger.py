"""Joins base line rows with enrichment rows into column-stable records."""

from linelist.documents.models import EnrichmentRole
from linelist.grammar.compiler import CompositeMatcher
from linelist.logging.logger import Log
from linelist.merge.fields import (
    BASE_FIELDS,
    COMPONENT_FIELDS,
    ENRICHMENT_FIELDS,
    ENRICHMENT_FIELDS_BY_ROLE,
    IDENTIFIER_FIELD,
)
from linelist.merge.models import (
    PRIMARY_SOURCE,
    TOTAL_ENRICHMENT_SOURCES,
    EnrichmentSource,
    ExtractedRecord,
    MergeResult,
    MergeSummary,
    MergeWarning,
    Row,
    SourceStatus,
)


def merge(
    base_rows: list[Row],
    enrichments: dict[EnrichmentRole, EnrichmentSource],
    matcher: CompositeMatcher | None = None,
) -> MergeResult:
    """Merge base rows with up to three enrichment sources.

    Records are joined on the exact identifier. When an identifier repeats in
    the base rows, the later row replaces the earlier one but keeps its
    position. Rows with an empty identifier are kept as they are.
    """
    bases, duplicates = _dedupe(base_rows, matcher)
    lookups = _build_lookups(enrichments)

    records: list[ExtractedRecord] = []
    for base in bases:
        enrichment_fields = dict.fromkeys(ENRICHMENT_FIELDS, "")
        provenance = {PRIMARY_SOURCE}
        identifier = base[IDENTIFIER_FIELD]
        for role, lookup in lookups.items():
            match = lookup.get(identifier) if identifier else None
            if match is None:
                continue
            for name in ENRICHMENT_FIELDS_BY_ROLE[role]:
                enrichment_fields[name] = match.get(name, "")
            provenance.add(role.value)
        records.append(
            ExtractedRecord(
                base_fields=base,
                enrichment_fields=enrichment_fields,
                provenance=frozenset(provenance),
            )
        )

    summary = _summarize(enrichments, duplicates)
    warning = _warning(summary)
    Log.info(
        f"Merged {len(records)} line(s) from {len(base_rows)} base row(s), "
        f"{summary.describe()}"
    )
    if duplicates:
        Log.warning(f"{duplicates} duplicate line identifier(s) replaced by later rows")
    return MergeResult(records=records, summary=summary, warning=warning)


def _dedupe(
    base_rows: list[Row], matcher: CompositeMatcher | None
) -> tuple[list[Row], int]:
    bases: list[Row] = []
    positions: dict[str, int] = {}
    duplicates = 0
    for row in base_rows:
        base = _complete_base(row, matcher)
        identifier = base[IDENTIFIER_FIELD]
        if identifier and identifier in positions:
            bases[positions[identifier]] = base
            duplicates += 1
            continue
        if identifier:
            positions[identifier] = len(bases)
        bases.append(base)
    return bases, duplicates


def _complete_base(row: Row, matcher: CompositeMatcher | None) -> Row:
    base = {name: (row.get(name) or "").strip() for name in BASE_FIELDS}
    if matcher is None or not base[IDENTIFIER_FIELD]:
        return base
    segments = matcher.segment(base[IDENTIFIER_FIELD])
    if segments is None:
        return base
    for component_id, value in segments.items():
        name = COMPONENT_FIELDS.get(component_id)
        if name is not None and not base[name]:
            base[name] = value
    return base


def _build_lookups(
    enrichments: dict[EnrichmentRole, EnrichmentSource],
) -> dict[EnrichmentRole, dict[str, Row]]:
    lookups: dict[EnrichmentRole, dict[str, Row]] = {}
    for role in EnrichmentRole:
        source = enrichments.get(role)
        if source is None or source.status is not SourceStatus.SUCCEEDED:
            continue
        lookup: dict[str, Row] = {}
        for row in source.rows:
            identifier = (row.get(IDENTIFIER_FIELD) or "").strip()
            if identifier:
                lookup[identifier] = row
        lookups[role] = lookup
    return lookups


def _summarize(
    enrichments: dict[EnrichmentRole, EnrichmentSource], duplicates: int
) -> MergeSummary:
    succeeded: list[EnrichmentRole] = []
    failed: dict[EnrichmentRole, str] = {}
    absent: list[EnrichmentRole] = []
    for role in EnrichmentRole:
        source = enrichments.get(role, EnrichmentSource.absent())
        if source.status is SourceStatus.SUCCEEDED:
            succeeded.append(role)
        elif source.status is SourceStatus.FAILED:
            failed[role] = source.reason
            Log.warning(f"Enrichment source '{role.value}' failed: {source.reason}")
        else:
            absent.append(role)
    return MergeSummary(
        succeeded=tuple(succeeded),
        failed=failed,
        absent=tuple(absent),
        duplicates_replaced=duplicates,
    )


def _warning(summary: MergeSummary) -> MergeWarning | None:
    missing = TOTAL_ENRICHMENT_SOURCES - summary.enriched_count
    if missing == 0:
        return None
    details = []
    if summary.failed:
        details.append("failed: " + ", ".join(role.value for role in summary.failed))
    if summary.absent:
        details.append("not supplied: " + ", ".join(role.value for role in summary.absent))
    return MergeWarning(
        message=f"Table {summary.describe()} ({'; '.join(details)})",
        missing_sources=missing,
    )
