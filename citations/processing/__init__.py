"""Normalization and display formatting of extracted records."""
from citations.processing.formatting import (
    default_date_line,
    format_hearing_date,
    format_infraction_date,
    format_plate,
    format_time_with_period,
)
from citations.processing.normalizer import (
    correspondence_rows,
    hearing_year,
    normalize,
    parse_start_number,
)

__all__ = [
    "correspondence_rows",
    "default_date_line",
    "format_hearing_date",
    "format_infraction_date",
    "format_plate",
    "format_time_with_period",
    "hearing_year",
    "normalize",
    "parse_start_number",
]
