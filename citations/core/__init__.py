"""Core building blocks for the citations package."""
from citations.core.config import TemplateConfig, load_template_config
from citations.core.errors import (
    BatchCaptureFailure,
    CitationsError,
    ConfigurationError,
    ExtractionError,
    ProviderEmptyResponse,
    ProviderMalformedResponse,
    ProviderPolicyBlocked,
    TemplateFileUnreadable,
    TemplateSheetNotFound,
    WorkbookError,
)
from citations.core.logging import configure_logging
from citations.core.models import (
    CORRESPONDENCE_HEADERS,
    CitationRecord,
    CorrespondenceRow,
    ExtractedRecord,
    Failure,
    NormalizedBatch,
    ProcessingOutcome,
    Success,
    successful_citations,
)

__all__ = [
    "BatchCaptureFailure",
    "CORRESPONDENCE_HEADERS",
    "CitationRecord",
    "CitationsError",
    "ConfigurationError",
    "CorrespondenceRow",
    "ExtractedRecord",
    "ExtractionError",
    "Failure",
    "NormalizedBatch",
    "ProcessingOutcome",
    "ProviderEmptyResponse",
    "ProviderMalformedResponse",
    "ProviderPolicyBlocked",
    "Success",
    "TemplateConfig",
    "TemplateFileUnreadable",
    "TemplateSheetNotFound",
    "WorkbookError",
    "configure_logging",
    "load_template_config",
    "successful_citations",
]
