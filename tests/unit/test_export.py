from datetime import date
from io import BytesIO
from pathlib import Path

import openpyxl
import pytest

from linelist.export.exceptions import RecordShapeError
from linelist.export.normalizer import COLUMN_WIDTHS, COLUMNS, HEADERS, normalize, to_flat_rows
from linelist.export.xlsx_exporter import SHEET_TITLE, XlsxExporter
from linelist.merge.fields import BASE_FIELDS, ENRICHMENT_FIELDS
from linelist.merge.models import ExtractedRecord


def _record(identifier: str, **fields: str) -> ExtractedRecord:
    base = dict.fromkeys(BASE_FIELDS, "")
    enrichment = dict.fromkeys(ENRICHMENT_FIELDS, "")
    base["original_detection"] = identifier
    for name, value in fields.items():
        (base if name in base else enrichment)[name] = value
    return ExtractedRecord(base_fields=base, enrichment_fields=enrichment)


class TestColumns:
    def test_base_columns_come_first(self) -> None:
        assert COLUMNS[: len(BASE_FIELDS)] == BASE_FIELDS
        assert len(COLUMNS) == 35

    def test_headers_and_widths_are_parallel(self) -> None:
        assert len(HEADERS) == len(COLUMNS) == len(COLUMN_WIDTHS)
        assert HEADERS[:9] == (
            "Original Detection",
            "Fluid Code",
            "Size",
            "Area",
            "Sequence No",
            "PIPR Class",
            "Insulation",
            "From",
            "To",
        )
        assert COLUMN_WIDTHS[:9] == (20, 12, 8, 10, 15, 15, 12, 20, 20)

    def test_enrichment_headers_are_readable(self) -> None:
        assert HEADERS[COLUMNS.index("h2s_partial_pressure")] == "H2S Partial Pressure"
        assert HEADERS[COLUMNS.index("design_temperature")] == "Design Temperature"


class TestNormalize:
    def test_orders_fields(self) -> None:
        ordered = normalize([_record("A", material_grade="A106-B")])
        assert tuple(ordered[0]) == COLUMNS
        assert ordered[0]["material_grade"] == "A106-B"

    def test_missing_column_raises(self) -> None:
        record = _record("A")
        del record.enrichment_fields["phase"]
        with pytest.raises(RecordShapeError, match="phase"):
            normalize([record])

    def test_unknown_column_raises(self) -> None:
        record = _record("A")
        record.base_fields["colour"] = "red"
        with pytest.raises(RecordShapeError) as exc_info:
            normalize([record])
        assert exc_info.value.unknown == ["colour"]

    def test_flat_rows_start_with_header(self) -> None:
        rows = to_flat_rows([_record("A", size="2")])
        assert rows[0] == list(HEADERS)
        assert rows[1][:3] == ["A", "", "2"]
        assert len(rows) == 2


class TestXlsxExporter:
    def test_filename_uses_count_and_date(self, tmp_path: Path) -> None:
        exporter = XlsxExporter(tmp_path, today=lambda: date(2026, 3, 1))
        assert exporter.filename_for(12) == "line_list_12_records_2026-03-01.xlsx"

    def test_export_writes_text_cells(self, tmp_path: Path) -> None:
        exporter = XlsxExporter(tmp_path / "out", today=lambda: date(2026, 3, 1))

        path = exporter.export([_record("2-D-5777-033842", pipr_class="033842")])

        assert path == tmp_path / "out" / "line_list_1_records_2026-03-01.xlsx"
        sheet = openpyxl.load_workbook(path).active
        assert sheet.title == SHEET_TITLE
        assert sheet.cell(row=1, column=1).value == "Original Detection"
        assert sheet.cell(row=2, column=1).value == "2-D-5777-033842"
        pipr = sheet.cell(row=2, column=COLUMNS.index("pipr_class") + 1)
        assert pipr.value == "033842"
        assert pipr.number_format == "@"
        assert sheet.max_column == len(COLUMNS)

    def test_export_applies_column_widths(self, tmp_path: Path) -> None:
        exporter = XlsxExporter(tmp_path)
        sheet = openpyxl.load_workbook(BytesIO(exporter.to_bytes([_record("A")]))).active
        assert sheet.column_dimensions["A"].width == 20
        assert sheet.column_dimensions["C"].width == 8

    def test_export_strips_worksheet_illegal_characters(self, tmp_path: Path) -> None:
        exporter = XlsxExporter(tmp_path, today=lambda: date(2026, 3, 1))
        record = _record("2-D-5777\x00", **{"from": "V-\x01100", "to": "Tank\x1f 7"})

        sheet = openpyxl.load_workbook(exporter.export([record])).active

        assert sheet.cell(row=2, column=1).value == "2-D-5777"
        assert sheet.cell(row=2, column=COLUMNS.index("from") + 1).value == "V-100"
        assert sheet.cell(row=2, column=COLUMNS.index("to") + 1).value == "Tank 7"

    def test_empty_export_has_only_header(self, tmp_path: Path) -> None:
        exporter = XlsxExporter(tmp_path, today=lambda: date(2026, 3, 1))
        path = exporter.export([])
        sheet = openpyxl.load_workbook(path).active
        assert path.name == "line_list_0_records_2026-03-01.xlsx"
        assert sheet.max_row == 1
