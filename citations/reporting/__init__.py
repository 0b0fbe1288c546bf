"""Correspondence spreadsheet exports."""
from citations.reporting.workbook import (
    EXPORT_FILE_NAME,
    ExternalWorkbook,
    append_to_template,
    export_new,
    last_sequence_number,
    load_workbook_file,
)

__all__ = [
    "EXPORT_FILE_NAME",
    "ExternalWorkbook",
    "append_to_template",
    "export_new",
    "last_sequence_number",
    "load_workbook_file",
]
