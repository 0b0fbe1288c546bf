"""Pytest configuration to make the local package importable without installation."""
import io
import json
import sys
from datetime import date
from pathlib import Path
from typing import Any, Dict, List

import pytest
from PIL import Image

# Ensure repository root is on sys.path for module resolution
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from citations.core.config import TemplateConfig
from citations.core.models import ExtractedRecord
from citations.extraction.gateway import SourceDocument


def make_record(process_number: str, plate: str = "RHPT14", owner: str = "Juan Pérez") -> ExtractedRecord:
    """Build a fully populated record that differs by process number and plate."""

    return ExtractedRecord(
        plate=plate,
        infraction="Estacionar en lugar prohibido",
        location="Av. Isidoro Dubournais 123",
        date="05-03-2025",
        time="14:30",
        process_number=process_number,
        owner_name=owner,
        tax_id="12.345.678-9",
        make="Toyota",
        model="Yaris",
        color="Rojo",
        year="2018",
        vehicle_type="Automóvil",
        chassis_number="JTDBT923X71234567",
        engine_number="2NZ1234567",
        street="Los Aromos",
        street_number="45",
        municipality="El Quisco",
    )


@pytest.fixture
def sample_records() -> List[ExtractedRecord]:
    return [
        make_record("10", plate="RHPT14", owner="Juan Pérez"),
        make_record("11", plate="BBCL22", owner="María Soto"),
        make_record("12", plate="KLXZ90", owner="Pedro Rojas"),
    ]


@pytest.fixture
def template_config() -> TemplateConfig:
    return TemplateConfig(hearing_date="2025-03-01", start_oficio_number="100")


@pytest.fixture
def documents() -> tuple[SourceDocument, SourceDocument]:
    return (
        SourceDocument("denuncias.pdf", b"%PDF-1.4 denuncias"),
        SourceDocument("ciav.pdf", b"%PDF-1.4 ciav"),
    )


@pytest.fixture
def today() -> date:
    return date(2025, 2, 7)


@pytest.fixture
def png_bytes() -> bytes:
    """A small opaque PNG used as logo or signature upload."""

    buffer = io.BytesIO()
    Image.new("RGB", (40, 20), (20, 40, 160)).save(buffer, format="PNG")
    return buffer.getvalue()


class FakeResponse:
    """Minimal stand-in for ``requests.Response``."""

    def __init__(self, payload: Dict[str, Any], status_code: int = 200) -> None:
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            import requests

            raise requests.HTTPError(f"{self.status_code} Client Error")

    def json(self) -> Dict[str, Any]:
        return self._payload


class FakeSession:
    """Records posted payloads and replays canned responses in order."""

    def __init__(self, responses: List[Any]) -> None:
        self.responses = list(responses)
        self.calls: List[Dict[str, Any]] = []

    def post(self, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"url": url, **kwargs})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def text_response(text: str) -> FakeResponse:
    """Wrap ``text`` the way ``generateContent`` returns it."""

    return FakeResponse({"candidates": [{"content": {"parts": [{"text": text}]}, "finishReason": "STOP"}]})


def wire_payload(records: List[ExtractedRecord]) -> str:
    from citations.core.models import WIRE_FIELDS

    return json.dumps(
        [{wire: getattr(record, name) for name, wire in WIRE_FIELDS.items()} for record in records],
        ensure_ascii=False,
    )
