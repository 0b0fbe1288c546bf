"""Tests for the provider client using a stubbed HTTP session."""
import json

import pytest
import requests

from citations.core.errors import (
    ConfigurationError,
    ExtractionError,
    ProviderEmptyResponse,
    ProviderMalformedResponse,
    ProviderPolicyBlocked,
)
from citations.extraction.gateway import GeminiGateway, gateway_from_config, strip_code_fences

from conftest import FakeResponse, FakeSession, text_response, wire_payload


def _gateway(responses) -> GeminiGateway:
    return GeminiGateway(api_key="test-key", session=FakeSession(responses))


def test_missing_api_key_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        GeminiGateway(api_key="")


def test_gateway_from_config_reports_missing_key(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("API_KEY", raising=False)
    monkeypatch.setenv("CITATIONS_SECRET_FILE", "/nonexistent/citations.env")

    with pytest.raises(ConfigurationError):
        gateway_from_config()


def test_gateway_from_config_accepts_legacy_key_name(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.setenv("API_KEY", "legacy")
    monkeypatch.setenv("GEMINI_MODEL", "gemini-test")

    gateway = gateway_from_config(session=FakeSession([]))

    assert gateway.api_key == "legacy"
    assert gateway.model == "gemini-test"


def test_strip_code_fences():
    assert strip_code_fences('```json\n[{"a": 1}]\n```') == '[{"a": 1}]'
    assert strip_code_fences('{"count": 2}') == '{"count": 2}'


def test_count_entries_reads_count(documents):
    gateway = _gateway([text_response('```json {"count": 3} ```')])

    assert gateway.count_entries(*documents) == 3


def test_count_entries_sends_prompt_and_both_documents(documents):
    session = FakeSession([text_response('{"count": 1}')])
    gateway = GeminiGateway(api_key="k", model="gemini-2.5-flash", session=session)

    gateway.count_entries(*documents)

    call = session.calls[0]
    assert call["url"].endswith("/gemini-2.5-flash:generateContent")
    assert call["headers"]["x-goog-api-key"] == "k"
    parts = call["json"]["contents"][0]["parts"]
    assert "count" in parts[0]["text"]
    assert [part["inline_data"]["mime_type"] for part in parts[1:]] == ["application/pdf"] * 2
    assert call["json"]["generationConfig"]["responseMimeType"] == "application/json"


@pytest.mark.parametrize(
    "response",
    [
        requests.ConnectionError("offline"),
        FakeResponse({}, status_code=500),
        text_response("not json"),
        text_response('{"count": "3"}'),
        text_response('{"count": true}'),
        text_response('{"count": 2.5}'),
        text_response("[]"),
        FakeResponse({"candidates": []}),
    ],
)
def test_count_entries_returns_zero_on_any_failure(documents, response):
    assert _gateway([response]).count_entries(*documents) == 0


def test_count_entries_accepts_whole_number_floats(documents):
    assert _gateway([text_response('{"count": 3.0}')]).count_entries(*documents) == 3


def test_count_entries_reports_zero_when_provider_finds_nothing(documents):
    assert _gateway([text_response('{"count": 0}')]).count_entries(*documents) == 0


def test_extract_preserves_provider_order(documents, sample_records):
    payload = "```json\n" + wire_payload(list(reversed(sample_records))) + "\n```"
    gateway = _gateway([text_response(payload)])

    records = gateway.extract(*documents)

    assert [r.process_number for r in records] == ["12", "11", "10"]
    assert records[0].owner_name == "Pedro Rojas"
    assert records[0].municipality == "El Quisco"


def test_extract_coerces_missing_and_numeric_fields(documents):
    gateway = _gateway([text_response(json.dumps([{"placaPatenteUnica": "RHPT-14", "ano": 2018}]))])

    record = gateway.extract(*documents)[0]

    assert record.plate == "RHPT-14"
    assert record.year == "2018"
    assert record.owner_name == ""


def test_extract_empty_text_raises(documents):
    with pytest.raises(ProviderEmptyResponse):
        _gateway([text_response("   ")]).extract(*documents)


@pytest.mark.parametrize("text", ['{"placaPatenteUnica": "X"}', "[1, 2]", "{broken"])
def test_extract_malformed_payload_raises(documents, text):
    with pytest.raises(ProviderMalformedResponse):
        _gateway([text_response(text)]).extract(*documents)


def test_extract_safety_finish_reason_is_policy_blocked(documents):
    blocked = FakeResponse({"candidates": [{"finishReason": "SAFETY", "content": {"parts": []}}]})

    with pytest.raises(ProviderPolicyBlocked) as excinfo:
        _gateway([blocked]).extract(*documents)

    assert "bloqueado" in excinfo.value.user_message


def test_extract_blocked_prompt_is_policy_blocked(documents):
    blocked = FakeResponse({"promptFeedback": {"blockReason": "SAFETY"}})

    with pytest.raises(ProviderPolicyBlocked):
        _gateway([blocked]).extract(*documents)


def test_extract_wraps_transport_errors(documents):
    with pytest.raises(ExtractionError) as excinfo:
        _gateway([requests.Timeout("slow")]).extract(*documents)

    assert type(excinfo.value) is ExtractionError
    assert isinstance(excinfo.value.__cause__, requests.Timeout)
