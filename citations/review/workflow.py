"""Session workflow behind the dashboard's "generate citations" action."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from citations.core.config import TemplateConfig
from citations.core.errors import CitationsError
from citations.core.models import (
    CitationRecord,
    CorrespondenceRow,
    Failure,
    ProcessingOutcome,
    Success,
    successful_citations,
)
from citations.extraction.gateway import ExtractionGateway, SourceDocument
from citations.processing.normalizer import correspondence_rows, normalize

logger = logging.getLogger(__name__)

NO_ENTRIES_MESSAGE = "No se encontraron denuncias en los documentos. Revisa los archivos e intenta nuevamente."
EMPTY_EXTRACTION_MESSAGE = "La IA no pudo extraer datos. Revisa los archivos e intenta nuevamente."


@dataclass
class RunResult:
    """Outcomes, correspondence rows, and the single message to show the clerk."""

    outcomes: List[ProcessingOutcome] = field(default_factory=list)
    correspondence: List[CorrespondenceRow] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def citations(self) -> List[CitationRecord]:
        return successful_citations(self.outcomes)


def generate_citations(
    gateway: ExtractionGateway,
    complaints: SourceDocument,
    certificates: SourceDocument,
    config: TemplateConfig,
    progress_callback: Optional[Callable[[str], None]] = None,
) -> RunResult:
    """Count, extract, and number the citations found in the two documents."""

    def _report(message: str) -> None:
        logger.info(message)
        if progress_callback:
            progress_callback(message)

    _report("Contando denuncias en los documentos...")
    total = gateway.count_entries(complaints, certificates)
    if total == 0:
        logger.warning("Count pre-check returned zero for %s / %s", complaints.name, certificates.name)
        return RunResult(error=NO_ENTRIES_MESSAGE)

    _report(f"Se encontraron {total} denuncias. La IA está extrayendo los datos...")
    try:
        records = gateway.extract(complaints, certificates)
    except CitationsError as exc:
        logger.error("Extraction failed for %s / %s: %s", complaints.name, certificates.name, exc)
        failure = Failure(exc.user_message, (complaints.name, certificates.name))
        return RunResult(outcomes=[failure], error=f"Error al procesar los archivos: {exc.user_message}")

    if not records:
        return RunResult(error=EMPTY_EXTRACTION_MESSAGE)

    batch = normalize(records, config.start_oficio_number, config.hearing_date)
    logger.info("Generated %d citations (pre-check counted %d)", len(batch.citations), total)
    return RunResult(
        outcomes=[Success(citation) for citation in batch.citations],
        correspondence=batch.correspondence,
    )


def refresh_correspondence(outcomes: List[ProcessingOutcome], config: TemplateConfig) -> List[CorrespondenceRow]:
    """Rebuild the correspondence rows after the hearing date changes."""

    return correspondence_rows(successful_citations(outcomes), config.hearing_date)
