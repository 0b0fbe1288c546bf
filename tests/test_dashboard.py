"""Tests for the dashboard's session-state helpers, with Streamlit swapped for a plain dict."""
from types import SimpleNamespace

import pytest

import citations.ui.dashboard as dashboard
from citations.core.models import CitationRecord, Success
from citations.review.selection import SelectionState


@pytest.fixture
def session_state(monkeypatch):
    state = {}
    monkeypatch.setattr(dashboard, "st", SimpleNamespace(session_state=state))
    return state


def test_reset_moves_uploaders_to_a_new_round(session_state, sample_records):
    selection = SelectionState([Success(CitationRecord.from_extracted(sample_records[0], "100"))])
    selection.select(0)
    session_state.update(
        {
            "error": "Error al procesar los archivos",
            "template": object(),
            "complaints_upload_0": "denuncias.pdf",
            "template_upload_0": "libro.xlsx",
            "logo_file_id": "logo-1",
        }
    )
    assert dashboard._upload_key("complaints_upload") == "complaints_upload_0"

    dashboard._reset(selection)

    assert dashboard._upload_key("complaints_upload") == "complaints_upload_1"
    assert dashboard._upload_key("template_upload") == "template_upload_1"
    for key in ("error", "template", "complaints_upload_0", "template_upload_0"):
        assert key not in session_state
    assert session_state["logo_file_id"] == "logo-1"
    assert selection.outcomes == []
    assert selection.current is None


def test_repeated_resets_keep_rotating(session_state):
    selection = SelectionState()

    dashboard._reset(selection)
    dashboard._reset(selection)

    assert dashboard._upload_key("certificates_upload") == "certificates_upload_2"
