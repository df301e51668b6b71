"""Fixed column order and header labels for merged line records."""

from linelist.export.exceptions import RecordShapeError
from linelist.merge.fields import BASE_FIELDS, ENRICHMENT_FIELDS
from linelist.merge.models import ExtractedRecord

OrderedRecord = dict[str, str]

COLUMNS: tuple[str, ...] = BASE_FIELDS + ENRICHMENT_FIELDS

_BASE_HEADERS: dict[str, str] = {
    "original_detection": "Original Detection",
    "fluid_code": "Fluid Code",
    "size": "Size",
    "area": "Area",
    "sequence_no": "Sequence No",
    "pipr_class": "PIPR Class",
    "insulation": "Insulation",
    "from": "From",
    "to": "To",
}

_HEADER_WORDS = {"h2s": "H2S", "nace": "NACE", "pwht": "PWHT"}

_BASE_WIDTHS: dict[str, int] = {
    "original_detection": 20,
    "fluid_code": 12,
    "size": 8,
    "area": 10,
    "sequence_no": 15,
    "pipr_class": 15,
    "insulation": 12,
    "from": 20,
    "to": 20,
}
ENRICHMENT_COLUMN_WIDTH = 18


def _header(column: str) -> str:
    if column in _BASE_HEADERS:
        return _BASE_HEADERS[column]
    return " ".join(_HEADER_WORDS.get(word, word.capitalize()) for word in column.split("_"))


HEADERS: tuple[str, ...] = tuple(_header(column) for column in COLUMNS)
COLUMN_WIDTHS: tuple[int, ...] = tuple(
    _BASE_WIDTHS.get(column, ENRICHMENT_COLUMN_WIDTH) for column in COLUMNS
)


def normalize(records: list[ExtractedRecord]) -> list[OrderedRecord]:
    """Return each record as a dict keyed in the fixed column order.

    Raises:
        RecordShapeError: if a record is missing a column or carries an unknown one.
    """
    ordered: list[OrderedRecord] = []
    for record in records:
        values = {**record.base_fields, **record.enrichment_fields}
        missing = [column for column in COLUMNS if column not in values]
        unknown = sorted(key for key in values if key not in COLUMNS)
        if missing or unknown:
            raise RecordShapeError(record.identifier, missing, unknown)
        ordered.append({column: values[column] for column in COLUMNS})
    return ordered


def to_flat_rows(records: list[ExtractedRecord]) -> list[list[str]]:
    """Header row of display names followed by one row per record."""
    rows = [list(HEADERS)]
    rows.extend([record[column] for column in COLUMNS] for record in normalize(records))
    return rows
