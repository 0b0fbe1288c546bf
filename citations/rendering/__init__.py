"""Citation page rendering: raster pages for PDF, markup for printing."""
from citations.rendering.assets import AssetHandle, AssetSlot, AssetStore
from citations.rendering.batch import (
    BATCH_PDF_NAME,
    BatchRenderer,
    RenderedBatch,
    pdf_file_name,
)
from citations.rendering.markup import citation_markup, print_document
from citations.rendering.surface import CitationSurface, RenderedCitation

__all__ = [
    "AssetHandle",
    "AssetSlot",
    "AssetStore",
    "BATCH_PDF_NAME",
    "BatchRenderer",
    "CitationSurface",
    "RenderedBatch",
    "RenderedCitation",
    "citation_markup",
    "pdf_file_name",
    "print_document",
]
