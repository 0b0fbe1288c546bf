"""Tests for oficio numbering, correspondence rows, and display formatting."""
from datetime import date

import pytest

from citations.core.models import CORRESPONDENCE_HEADERS
from citations.processing.formatting import (
    default_date_line,
    format_hearing_date,
    format_infraction_date,
    format_plate,
    format_time_with_period,
)
from citations.processing.normalizer import normalize, parse_start_number

from conftest import make_record


def test_normalize_scenario_numbers_and_document_codes(sample_records):
    batch = normalize(sample_records, "100", "2025-03-01")

    assert [c.oficio_number for c in batch.citations] == ["100", "101", "102"]
    assert [row.document_code for row in batch.correspondence] == ["10-2025", "11-2025", "12-2025"]
    assert [row.sequence for row in batch.correspondence] == [1, 2, 3]


@pytest.mark.parametrize("count", [0, 1, 5])
def test_normalize_assigns_consecutive_numbers_in_input_order(count):
    records = [make_record(str(n), plate=f"ABCD{n:02d}") for n in range(count)]

    batch = normalize(records, 7, date(2025, 1, 1))

    assert [c.oficio_number for c in batch.citations] == [str(7 + i) for i in range(count)]
    assert [c.plate for c in batch.citations] == [r.plate for r in records]


@pytest.mark.parametrize("raw", ["", "abc", "0", "-4", None])
def test_invalid_start_number_defaults_to_one(raw):
    assert parse_start_number(raw) == 1


def test_start_number_uses_leading_integer():
    assert parse_start_number("25abc") == 25


def test_changing_hearing_year_only_changes_year_component(sample_records):
    first = normalize(sample_records, "100", "2025-03-01")
    second = normalize(sample_records, "100", "2026-01-15")

    for before, after in zip(first.correspondence, second.correspondence):
        assert before.document_code.rsplit("-", 1)[0] == after.document_code.rsplit("-", 1)[0]
        assert after.document_code.endswith("-2026")
    assert [c.oficio_number for c in first.citations] == [c.oficio_number for c in second.citations]


def test_correspondence_row_fields_are_uppercased(sample_records):
    row = normalize(sample_records[:1], "1", "2025-03-01").correspondence[0]

    assert row.to_dict() == {
        "N°": 1,
        "NUMERO GUIA": "",
        "CERT.": "CERT",
        "DEPTO.": "JPL",
        "TIPO DCTO": "2º CITACIÓN-ROL",
        "DCTO.": "10-2025",
        "DESTINATARIO": "JUAN PÉREZ",
        "DIRECCIÓN": "LOS AROMOS 45",
        "CIUDAD/COMUNA": "EL QUISCO",
    }
    assert list(row.to_dict()) == CORRESPONDENCE_HEADERS


def test_normalize_does_not_mutate_inputs(sample_records):
    snapshot = list(sample_records)

    normalize(sample_records, "100", "2025-03-01")

    assert sample_records == snapshot


def test_format_plate():
    assert format_plate("rhpt14") == "RHPT-14"
    assert format_plate("RHPT-14") == "RHPT-14"
    assert format_plate("AB-12") == "AB-12"
    assert format_plate("ab12") == "AB12"
    assert format_plate("") == ""


def test_format_dates_and_times():
    assert format_infraction_date("05-03-2025") == "5 DE MARZO DEL 2025"
    assert format_infraction_date("2025/03/05") == "2025/03/05"
    assert format_time_with_period("14:30") == "14:30 P.M"
    assert format_time_with_period("09:05") == "09:05 A.M"
    assert format_time_with_period("9.05") == "9.05"
    assert format_hearing_date("2025-03-01") == "1 de marzo de 2025"
    assert format_hearing_date("pronto") == "pronto"
    assert default_date_line(date(2025, 3, 7)) == "a 07 de marzo de 2025."
