from collections.abc import Callable
from datetime import date
from io import BytesIO
from pathlib import Path

import openpyxl
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.utils import get_column_letter

from linelist.export.exceptions import ExportError
from linelist.export.normalizer import COLUMN_WIDTHS, to_flat_rows
from linelist.logging.logger import Log
from linelist.merge.models import ExtractedRecord

SHEET_TITLE = "Line List"
TEXT_FORMAT = "@"


class XlsxExporter:
    """Writes merged line records to a single-sheet Excel workbook.

    Every cell is written as text so identifiers such as ``033842`` keep
    their leading zeros. Control characters that worksheets cannot hold are stripped.
    """

    def __init__(
        self,
        export_dir: Path,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._export_dir = export_dir
        self._today = today

    def filename_for(self, count: int) -> str:
        return f"line_list_{count}_records_{self._today().isoformat()}.xlsx"

    def export(self, records: list[ExtractedRecord]) -> Path:
        """Save the workbook under the export directory and return its path."""
        path = self._export_dir / self.filename_for(len(records))
        workbook = self._build_workbook(records)
        try:
            self._export_dir.mkdir(parents=True, exist_ok=True)
            workbook.save(path)
        except OSError as exc:
            raise ExportError(f"Cannot write workbook to {path}: {exc}") from exc
        Log.info(f"Exported {len(records)} line record(s) to {path}")
        return path

    def to_bytes(self, records: list[ExtractedRecord]) -> bytes:
        buffer = BytesIO()
        self._build_workbook(records).save(buffer)
        return buffer.getvalue()

    def _build_workbook(self, records: list[ExtractedRecord]) -> openpyxl.Workbook:
        workbook = openpyxl.Workbook()
        sheet = workbook.active
        sheet.title = SHEET_TITLE

        for row_index, values in enumerate(to_flat_rows(records), start=1):
            for column_index, value in enumerate(values, start=1):
                cell = sheet.cell(
                    row=row_index,
                    column=column_index,
                    value=ILLEGAL_CHARACTERS_RE.sub("", value),
                )
                cell.number_format = TEXT_FORMAT

        for column_index, width in enumerate(COLUMN_WIDTHS, start=1):
            sheet.column_dimensions[get_column_letter(column_index)].width = width
        return workbook
