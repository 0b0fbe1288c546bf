"""The single rendering surface that shows the selected citation."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

from PIL import Image

from citations.core.config import TemplateConfig
from citations.core.models import CitationRecord
from citations.rendering.assets import AssetStore
from citations.rendering.layout import build_content
from citations.rendering.markup import citation_markup
from citations.rendering.raster import draw_citation
from citations.review.selection import DisplayFields, SelectionState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderedCitation:
    """A committed frame of the surface: raster page plus print markup."""

    citation: CitationRecord
    fields: DisplayFields
    image: Image.Image
    markup: str


class CitationSurface:
    """Draws whatever ``selection`` currently points at.

    ``commit`` returns only once the frame for the current selection is fully
    built, so callers never need to wait for the layout to settle.
    """

    def __init__(
        self,
        selection: SelectionState,
        config: TemplateConfig,
        assets: Optional[AssetStore] = None,
        dpi: int = 150,
    ) -> None:
        self.selection = selection
        self.config = config
        self.assets = assets or AssetStore()
        self.dpi = dpi
        self.decorated = True

    @contextmanager
    def undecorated(self) -> Iterator["CitationSurface"]:
        """Drop the preview border and shadow while capturing."""

        previous = self.decorated
        self.decorated = False
        try:
            yield self
        finally:
            self.decorated = previous

    def current_fields(self) -> Optional[DisplayFields]:
        citation = self.selection.current
        if citation is None:
            return None
        return self.selection.edits.fields_for(citation, self.config.hearing_year)

    def commit(self) -> RenderedCitation:
        """Render the selected citation, raising ``LookupError`` without one."""

        citation = self.selection.current
        if citation is None:
            raise LookupError("No citation is selected on the rendering surface")
        fields = self.selection.edits.fields_for(citation, self.config.hearing_year)
        content = build_content(citation, fields, self.config)
        logo = self.assets.logo.handle
        signature = self.assets.signature.handle
        image = draw_citation(content, self.dpi, self.decorated, logo, signature)
        markup = citation_markup(content, self.decorated, logo, signature)
        logger.debug("Committed frame for oficio %s", citation.oficio_number)
        return RenderedCitation(citation=citation, fields=fields, image=image, markup=markup)
