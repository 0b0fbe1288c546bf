"""Citation desk: pair traffic complaints with registration certificates and issue citations."""
from citations.core import (
    CORRESPONDENCE_HEADERS,
    CitationRecord,
    CorrespondenceRow,
    ExtractedRecord,
    Failure,
    Success,
    TemplateConfig,
    configure_logging,
    load_template_config,
    successful_citations,
)
from citations.extraction import ExtractionGateway, GeminiGateway, SourceDocument, gateway_from_config
from citations.processing import format_plate, normalize
from citations.rendering import AssetStore, BatchRenderer, CitationSurface
from citations.reporting import append_to_template, export_new, load_workbook_file
from citations.review import SelectionState, generate_citations

__all__ = [
    "CORRESPONDENCE_HEADERS",
    "AssetStore",
    "BatchRenderer",
    "CitationRecord",
    "CitationSurface",
    "CorrespondenceRow",
    "ExtractedRecord",
    "ExtractionGateway",
    "Failure",
    "GeminiGateway",
    "SelectionState",
    "SourceDocument",
    "Success",
    "TemplateConfig",
    "append_to_template",
    "configure_logging",
    "export_new",
    "format_plate",
    "gateway_from_config",
    "generate_citations",
    "load_template_config",
    "load_workbook_file",
    "normalize",
    "successful_citations",
]
