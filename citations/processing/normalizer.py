"""Turn provider records into numbered citations and correspondence rows."""
from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, List, Sequence

from citations.core.models import (
    CitationRecord,
    CorrespondenceRow,
    ExtractedRecord,
    NormalizedBatch,
)
from citations.processing.formatting import leading_int

logger = logging.getLogger(__name__)


def parse_start_number(value: object) -> int:
    """Return the configured first oficio number, falling back to 1."""

    parsed = leading_int(value)
    if parsed is None or parsed <= 0:
        return 1
    return parsed


def hearing_year(hearing_date: date | str) -> int:
    if isinstance(hearing_date, date):
        return hearing_date.year
    return date.fromisoformat(hearing_date).year


def correspondence_rows(
    citations: Iterable[CitationRecord], hearing_date: date | str
) -> List[CorrespondenceRow]:
    """Derive one certified-mail row per citation, numbered from 1."""

    year = hearing_year(hearing_date)
    return [
        CorrespondenceRow(
            sequence=index + 1,
            document_code=f"{citation.process_number}-{year}",
            addressee=citation.owner_name.upper(),
            address=citation.address.upper(),
            municipality=citation.municipality.upper(),
        )
        for index, citation in enumerate(citations)
    ]


def normalize(
    records: Sequence[ExtractedRecord],
    start_number: object,
    hearing_date: date | str,
) -> NormalizedBatch:
    """Assign oficio numbers in input order and build the correspondence log."""

    start = parse_start_number(start_number)
    citations = [
        CitationRecord.from_extracted(record, str(start + index))
        for index, record in enumerate(records)
    ]
    rows = correspondence_rows(citations, hearing_date)
    logger.info("Normalized %d records starting at oficio %d", len(citations), start)
    return NormalizedBatch(citations=citations, correspondence=rows)
