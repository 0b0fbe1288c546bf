"""Provider access for pairing complaints with registration certificates."""
from citations.extraction.gateway import (
    ExtractionGateway,
    GeminiGateway,
    SourceDocument,
    gateway_from_config,
    strip_code_fences,
)

__all__ = [
    "ExtractionGateway",
    "GeminiGateway",
    "SourceDocument",
    "gateway_from_config",
    "strip_code_fences",
]
