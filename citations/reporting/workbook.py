"""Correspondence spreadsheet export and append-to-template merging."""
from __future__ import annotations

import io
import logging
import zipfile
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from openpyxl import Workbook, load_workbook
from openpyxl.utils import get_column_letter
from openpyxl.utils.exceptions import InvalidFileException
from openpyxl.worksheet.worksheet import Worksheet

from citations.core.errors import TemplateFileUnreadable, TemplateSheetNotFound
from citations.core.models import CORRESPONDENCE_HEADERS, CorrespondenceRow
from citations.processing.formatting import leading_int

logger = logging.getLogger(__name__)

EXPORT_FILE_NAME = "correspondencia_citaciones.xlsx"
EXPORT_SHEET_TITLE = "Correspondencia"
UPDATED_FILE_NAME = "correspondencia_actualizada.xlsx"
COLUMN_WIDTHS = [5, 15, 8, 8, 20, 12, 40, 40, 20]


@dataclass
class ExternalWorkbook:
    """An uploaded correspondence workbook, kept in memory between appends."""

    workbook: Workbook
    file_name: str = ""

    @property
    def sheet_names(self) -> List[str]:
        return list(self.workbook.sheetnames)

    @property
    def default_sheet(self) -> str:
        return self.workbook.sheetnames[0]


def _apply_column_widths(sheet: Worksheet) -> None:
    for index, width in enumerate(COLUMN_WIDTHS, start=1):
        sheet.column_dimensions[get_column_letter(index)].width = width


def _to_bytes(workbook: Workbook) -> bytes:
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def export_new(rows: Iterable[CorrespondenceRow]) -> bytes:
    """Write header plus rows to a fresh single-sheet workbook and return its bytes."""

    workbook = Workbook()
    sheet = workbook.active
    sheet.title = EXPORT_SHEET_TITLE
    sheet.append(CORRESPONDENCE_HEADERS)
    count = 0
    for row in rows:
        sheet.append(row.values())
        count += 1
    _apply_column_widths(sheet)
    logger.info("Exported %d correspondence rows to %s", count, EXPORT_FILE_NAME)
    return _to_bytes(workbook)


def load_workbook_file(data: bytes, file_name: str = "") -> ExternalWorkbook:
    """Parse an uploaded spreadsheet, raising ``TemplateFileUnreadable`` on bad input."""

    try:
        workbook = load_workbook(io.BytesIO(data))
    except (InvalidFileException, zipfile.BadZipFile, KeyError, TypeError, ValueError, OSError) as exc:
        logger.error("Could not read workbook %s: %s", file_name or "<upload>", exc)
        raise TemplateFileUnreadable() from exc
    return ExternalWorkbook(workbook=workbook, file_name=file_name)


def last_sequence_number(sheet: Worksheet) -> int:
    """First-column value of the last row, or 0 for a header-only sheet or non-numeric cell."""

    if sheet.max_row <= 1:
        return 0
    return leading_int(sheet.cell(row=sheet.max_row, column=1).value) or 0


def append_to_template(
    external: ExternalWorkbook, sheet_name: str, rows: Iterable[CorrespondenceRow]
) -> Tuple[str, bytes]:
    """Append renumbered rows after the last row of ``sheet_name``.

    Returns the output file name (the uploaded name, or a default) and the
    updated workbook bytes.
    """

    if sheet_name not in external.workbook.sheetnames:
        raise TemplateSheetNotFound(sheet_name)

    sheet = external.workbook[sheet_name]
    counter = last_sequence_number(sheet)
    appended = 0
    for offset, row in enumerate(rows, start=1):
        values = row.values()
        values[0] = counter + offset
        sheet.append(values)
        appended += 1
    _apply_column_widths(sheet)

    output_name = external.file_name or UPDATED_FILE_NAME
    logger.info(
        "Appended %d rows to sheet %s of %s continuing after %d",
        appended,
        sheet_name,
        output_name,
        counter,
    )
    return output_name, _to_bytes(external.workbook)
