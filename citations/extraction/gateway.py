"""Client for the AI provider that pairs complaints with registration certificates."""
from __future__ import annotations

import base64
import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol

import requests

from citations.core.errors import (
    ConfigurationError,
    ExtractionError,
    ProviderEmptyResponse,
    ProviderMalformedResponse,
    ProviderPolicyBlocked,
)
from citations.core.models import ExtractedRecord
from citations.core.utils import get_config_value
from citations.extraction.prompts import (
    CITATION_SCHEMA,
    COUNT_PROMPT,
    COUNT_SCHEMA,
    EXTRACTION_PROMPT,
)

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"
DEFAULT_TIMEOUT = 300.0
BLOCKED_FINISH_REASONS = {"SAFETY", "PROHIBITED_CONTENT", "BLOCKLIST", "SPII"}

_FENCE_PATTERN = re.compile(r"^```(?:json)?\s*|\s*```$")


@dataclass(frozen=True)
class SourceDocument:
    """An uploaded file sent to the provider as an inline part."""

    name: str
    data: bytes
    mime_type: str = "application/pdf"

    def to_part(self) -> Dict[str, Any]:
        encoded = base64.b64encode(self.data).decode("ascii")
        return {"inline_data": {"mime_type": self.mime_type, "data": encoded}}


class ExtractionGateway(Protocol):
    """Anything able to count and extract citation records from the two documents."""

    def count_entries(self, complaints: SourceDocument, certificates: SourceDocument) -> int:
        ...

    def extract(self, complaints: SourceDocument, certificates: SourceDocument) -> List[ExtractedRecord]:
        ...


def strip_code_fences(text: str) -> str:
    """Remove a surrounding ```json fence the provider sometimes adds."""

    return _FENCE_PATTERN.sub("", text.strip()).strip()


class GeminiGateway:
    """Gemini ``generateContent`` client with the API key injected by the caller."""

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        if not api_key:
            raise ConfigurationError()
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def count_entries(self, complaints: SourceDocument, certificates: SourceDocument) -> int:
        """Ask only for the number of complaints; any failure counts as zero."""

        try:
            text = self._generate(COUNT_PROMPT, complaints, certificates, COUNT_SCHEMA)
            if not text:
                return 0
            parsed = json.loads(strip_code_fences(text))
        except Exception:
            logger.exception("Counting entries with the provider failed")
            return 0

        count = parsed.get("count") if isinstance(parsed, dict) else None
        if isinstance(count, bool):
            return 0
        if isinstance(count, int):
            return count
        if isinstance(count, float) and count.is_integer():
            return int(count)
        return 0

    def extract(self, complaints: SourceDocument, certificates: SourceDocument) -> List[ExtractedRecord]:
        """Return one record per complaint, in the order the provider lists them."""

        try:
            text = self._generate(EXTRACTION_PROMPT, complaints, certificates, CITATION_SCHEMA)
            if not text:
                raise ProviderEmptyResponse()
            try:
                parsed = json.loads(strip_code_fences(text))
            except json.JSONDecodeError as exc:
                raise ProviderMalformedResponse() from exc
            if not isinstance(parsed, list) or not all(isinstance(item, dict) for item in parsed):
                raise ProviderMalformedResponse()
        except ExtractionError:
            logger.exception("Extraction with the provider failed")
            raise
        except Exception as exc:
            logger.exception("Extraction with the provider failed")
            if "SAFETY" in str(exc):
                raise ProviderPolicyBlocked() from exc
            raise ExtractionError() from exc

        records = [ExtractedRecord.from_wire(item) for item in parsed]
        logger.info("Provider returned %d paired records", len(records))
        return records

    def _generate(
        self,
        prompt: str,
        complaints: SourceDocument,
        certificates: SourceDocument,
        schema: Dict[str, Any],
    ) -> str:
        payload = {
            "contents": [
                {
                    "role": "user",
                    "parts": [{"text": prompt}, complaints.to_part(), certificates.to_part()],
                }
            ],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": schema,
            },
        }
        response = self.session.post(
            f"{self.base_url}/{self.model}:generateContent",
            headers={"x-goog-api-key": self.api_key, "Content-Type": "application/json"},
            json=payload,
            timeout=self.timeout,
        )
        response.raise_for_status()
        return self._extract_content(response.json())

    def _extract_content(self, data: Dict[str, Any]) -> str:
        """Return the first text part, raising when the provider blocked the request."""

        candidates = data.get("candidates") or []
        if not candidates:
            block_reason = (data.get("promptFeedback") or {}).get("blockReason")
            if block_reason:
                logger.warning("Provider blocked the prompt: blockReason=%s", block_reason)
                raise ProviderPolicyBlocked()
            return ""

        finish_reason = candidates[0].get("finishReason", "")
        if finish_reason in BLOCKED_FINISH_REASONS:
            logger.warning("Provider blocked the response: finishReason=%s", finish_reason)
            raise ProviderPolicyBlocked()

        for part in (candidates[0].get("content") or {}).get("parts") or []:
            text = (part.get("text") or "").strip()
            if text:
                return text
        return ""


def gateway_from_config(session: Optional[requests.Session] = None) -> GeminiGateway:
    """Build a gateway from secrets/environment, raising ``ConfigurationError`` without a key."""

    api_key = get_config_value("GEMINI_API_KEY") or get_config_value("API_KEY")
    timeout_value = get_config_value("GEMINI_TIMEOUT", "")
    try:
        timeout = float(timeout_value) if timeout_value else DEFAULT_TIMEOUT
    except ValueError:
        logger.warning("Ignoring invalid GEMINI_TIMEOUT %r", timeout_value)
        timeout = DEFAULT_TIMEOUT
    return GeminiGateway(
        api_key=api_key,
        model=get_config_value("GEMINI_MODEL", DEFAULT_MODEL),
        base_url=get_config_value("GEMINI_BASE_URL", DEFAULT_BASE_URL),
        timeout=timeout,
        session=session,
    )
