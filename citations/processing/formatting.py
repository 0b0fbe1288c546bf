"""Display formatting for plates, dates, and times printed on citations."""
from __future__ import annotations

import re
from datetime import date

SPANISH_MONTHS = [
    "enero",
    "febrero",
    "marzo",
    "abril",
    "mayo",
    "junio",
    "julio",
    "agosto",
    "septiembre",
    "octubre",
    "noviembre",
    "diciembre",
]

_PLATE_PATTERN = re.compile(r"^[A-Z]{4}\d{2}$")
_ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_DMY_DATE_PATTERN = re.compile(r"^\d{2}-\d{2}-\d{4}$")
_TIME_PATTERN = re.compile(r"^\d{2}:\d{2}$")
_LEADING_INT_PATTERN = re.compile(r"^\s*([+-]?\d+)")


def leading_int(value: object) -> int | None:
    """Parse the integer prefix of ``value`` the way spreadsheet users type it."""

    if value is None:
        return None
    match = _LEADING_INT_PATTERN.match(str(value))
    return int(match.group(1)) if match else None


def format_plate(plate: str | None) -> str:
    """Format a four-letter, two-digit plate as ``XXXX-NN``; upper-case anything else."""

    if not plate:
        return ""
    cleaned = plate.replace("-", "").upper()
    if _PLATE_PATTERN.match(cleaned):
        return f"{cleaned[:4]}-{cleaned[4:]}"
    return plate.upper()


def format_infraction_date(value: str) -> str:
    """``05-03-2025`` becomes ``5 DE MARZO DEL 2025``."""

    if not value or not _DMY_DATE_PATTERN.match(value):
        return value
    day, month, year = (int(part) for part in value.split("-"))
    try:
        parsed = date(year, month, day)
    except ValueError:
        return value
    return f"{parsed.day} DE {SPANISH_MONTHS[parsed.month - 1].upper()} DEL {parsed.year}"


def format_time_with_period(value: str) -> str:
    if not value or not _TIME_PATTERN.match(value):
        return value
    period = "P.M" if int(value.split(":")[0]) >= 12 else "A.M"
    return f"{value} {period}"


def format_hearing_date(value: str) -> str:
    """``2025-03-01`` becomes ``1 de marzo de 2025``."""

    if not value or not _ISO_DATE_PATTERN.match(value):
        return value
    try:
        parsed = date.fromisoformat(value)
    except ValueError:
        return value
    return f"{parsed.day} de {SPANISH_MONTHS[parsed.month - 1]} de {parsed.year}"


def default_date_line(today: date | None = None) -> str:
    """Return the free-text date printed after the city, e.g. ``a 07 de marzo de 2025.``"""

    today = today or date.today()
    return f"a {today.day:02d} de {SPANISH_MONTHS[today.month - 1]} de {today.year}."
