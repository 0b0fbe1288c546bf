"""Sequential capture of every successful citation into one PDF or print document."""
from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from citations.core.errors import BatchCaptureFailure
from citations.core.models import ProcessingOutcome
from citations.rendering.markup import print_document
from citations.rendering.surface import CitationSurface, RenderedCitation

logger = logging.getLogger(__name__)

BATCH_PDF_NAME = "todas-las-citaciones.pdf"
PRINT_FAILURE_MESSAGE = "Ocurrió un error al preparar la impresión masiva."
SINGLE_PDF_FAILURE_MESSAGE = "Ocurrió un error al generar el PDF."
SINGLE_PRINT_FAILURE_MESSAGE = "Ocurrió un error al preparar la impresión."
PREVIEW_FAILURE_MESSAGE = "No se pudo dibujar la vista previa de la citación."


@dataclass
class RenderedBatch:
    """Captured pages, in the order their citations appear among the outcomes."""

    pages: List[RenderedCitation] = field(default_factory=list)
    dpi: int = 150

    @property
    def oficio_numbers(self) -> List[str]:
        return [page.citation.oficio_number for page in self.pages]

    def to_pdf_bytes(self) -> bytes:
        """Assemble the pages into one PDF; each page is 8.5in x 13in at ``dpi``."""

        if not self.pages:
            raise ValueError("Cannot build a PDF without pages")
        images = [page.image.convert("RGB") for page in self.pages]
        buffer = io.BytesIO()
        images[0].save(
            buffer,
            format="PDF",
            save_all=True,
            append_images=images[1:],
            resolution=float(self.dpi),
        )
        return buffer.getvalue()


def pdf_file_name(oficio_text: str) -> str:
    """File name for a single citation download, e.g. ``citacion-oficio-100-2025.pdf``."""

    return f"citacion-oficio-{oficio_text.replace('/', '-')}.pdf"


class BatchRenderer:
    """Drives the shared surface through every successful outcome, one at a time."""

    def __init__(self, surface: CitationSurface) -> None:
        self.surface = surface

    def render_all_to_pdf(self, outcomes: Optional[Sequence[ProcessingOutcome]] = None) -> RenderedBatch:
        pages = self._capture_all(outcomes, BatchCaptureFailure.default_message)
        logger.info("Captured %d citation pages for the batch PDF", len(pages))
        return RenderedBatch(pages=pages, dpi=self.surface.dpi)

    def render_all_to_print(self, outcomes: Optional[Sequence[ProcessingOutcome]] = None) -> str:
        pages = self._capture_all(outcomes, PRINT_FAILURE_MESSAGE)
        logger.info("Prepared %d citations for printing", len(pages))
        return print_document(page.markup for page in pages)

    def render_current_to_pdf(self) -> Tuple[str, bytes]:
        """Capture only the selected citation, returning its file name and PDF bytes."""

        page = self._capture_current(SINGLE_PDF_FAILURE_MESSAGE)
        batch = RenderedBatch(pages=[page], dpi=self.surface.dpi)
        return pdf_file_name(page.fields.oficio_text), batch.to_pdf_bytes()

    def render_current_to_print(self) -> str:
        page = self._capture_current(SINGLE_PRINT_FAILURE_MESSAGE)
        return print_document([page.markup], title=f"Imprimir Citación {page.fields.oficio_text}")

    def preview(self) -> RenderedCitation:
        """Decorated on-screen frame of the selected citation."""

        return self._capture_current(PREVIEW_FAILURE_MESSAGE, decorated=True)

    def _capture_current(self, failure_message: str, decorated: bool = False) -> RenderedCitation:
        """Commit the selected citation; ``LookupError`` passes through when none is selected."""

        citation = self.surface.selection.current
        if citation is None:
            raise LookupError("No citation is selected on the rendering surface")
        try:
            if decorated:
                return self.surface.commit()
            with self.surface.undecorated():
                return self.surface.commit()
        except Exception as exc:
            logger.exception("Capture failed for oficio %s", citation.oficio_number)
            raise BatchCaptureFailure(failure_message) from exc

    def _capture_all(
        self, outcomes: Optional[Sequence[ProcessingOutcome]], failure_message: str
    ) -> List[RenderedCitation]:
        selection = self.surface.selection
        pages: List[RenderedCitation] = []
        with selection.preserved():
            if outcomes is not None:
                selection.outcomes = list(outcomes)
            for index in selection.success_indexes():
                selection.select(index)
                try:
                    with self.surface.undecorated():
                        pages.append(self.surface.commit())
                except Exception as exc:
                    logger.exception("Capture failed for outcome %d", index)
                    raise BatchCaptureFailure(failure_message) from exc
        return pages
