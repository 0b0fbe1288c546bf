"""Tests for the shared rendering surface and batch PDF/print capture."""
import pytest

from citations.core.errors import BatchCaptureFailure
from citations.core.models import Failure, Success
from citations.processing.normalizer import normalize
from citations.rendering.assets import AssetStore
from citations.rendering.batch import (
    PREVIEW_FAILURE_MESSAGE,
    SINGLE_PDF_FAILURE_MESSAGE,
    SINGLE_PRINT_FAILURE_MESSAGE,
    BatchRenderer,
    RenderedBatch,
    pdf_file_name,
)
from citations.rendering.surface import CitationSurface
from citations.review.selection import SelectionState

DPI = 20


@pytest.fixture
def citations(sample_records):
    return normalize(sample_records, "100", "2025-03-01").citations


@pytest.fixture
def surface(citations, template_config):
    outcomes = [
        Failure("first failed", ("a.pdf", "b.pdf")),
        Success(citations[0]),
        Success(citations[1]),
        Failure("second failed", ("a.pdf", "b.pdf")),
        Success(citations[2]),
    ]
    return CitationSurface(SelectionState(outcomes), template_config, AssetStore(), dpi=DPI)


def test_commit_requires_a_selected_citation(surface):
    with pytest.raises(LookupError):
        surface.commit()

    surface.selection.select(0)
    with pytest.raises(LookupError):
        surface.commit()


def test_commit_renders_page_with_fixed_physical_size(surface):
    surface.selection.select(1)

    frame = surface.commit()

    assert frame.image.size == (int(8.5 * DPI), int(13 * DPI))
    assert "100/2025" in frame.markup
    assert "RHPT-14" in frame.markup
    assert "1 de marzo de 2025 a las 09:00 horas" in frame.markup


def test_batch_pdf_has_one_page_per_success_in_order(surface):
    batch = BatchRenderer(surface).render_all_to_pdf()

    assert batch.oficio_numbers == ["100", "101", "102"]
    assert batch.to_pdf_bytes().startswith(b"%PDF")


def test_batch_accepts_explicit_outcomes_and_keeps_state(surface, citations):
    surface.selection.select(2)

    batch = BatchRenderer(surface).render_all_to_pdf([Success(citations[2]), Failure("x")])

    assert batch.oficio_numbers == ["102"]
    assert len(surface.selection.outcomes) == 5
    assert surface.selection.selected_index == 2


def test_batch_restores_selection_and_decoration(surface):
    surface.selection.select(4)
    surface.selection.edits.edit(surface.selection.current, 2025, oficio_text="manual")

    BatchRenderer(surface).render_all_to_pdf()

    assert surface.selection.selected_index == 4
    assert surface.decorated is True
    assert surface.current_fields().oficio_text == "manual"


def test_batch_captures_undecorated_frames(surface, monkeypatch):
    seen = []
    original_commit = surface.commit

    def spying_commit():
        seen.append(surface.decorated)
        return original_commit()

    monkeypatch.setattr(surface, "commit", spying_commit)

    BatchRenderer(surface).render_all_to_pdf()

    assert seen == [False, False, False]


def test_capture_failure_aborts_batch_and_restores_selection(surface, monkeypatch):
    surface.selection.select(1)
    original_commit = surface.commit
    calls = {"count": 0}

    def failing_commit():
        calls["count"] += 1
        if calls["count"] == 2:
            raise OSError("renderer crashed")
        return original_commit()

    monkeypatch.setattr(surface, "commit", failing_commit)

    with pytest.raises(BatchCaptureFailure):
        BatchRenderer(surface).render_all_to_pdf()

    assert calls["count"] == 2
    assert surface.selection.selected_index == 1
    assert surface.decorated is True


def test_print_document_wraps_each_success_with_page_break(surface):
    document = BatchRenderer(surface).render_all_to_print()

    assert document.count('class="citation-page-wrapper"') == 3
    assert "@page { size: 8.5in 13in; margin: 0.4in; }" in document
    assert "page-break-after: always" in document
    assert "window.print()" in document
    assert document.index("100/2025") < document.index("101/2025") < document.index("102/2025")
    assert "citation-page decorated" not in document


def test_single_citation_pdf_uses_oficio_in_file_name(surface):
    surface.selection.select(2)

    file_name, data = BatchRenderer(surface).render_current_to_pdf()

    assert file_name == "citacion-oficio-101-2025.pdf"
    assert data.startswith(b"%PDF")


def test_logo_and_signature_are_embedded(surface, png_bytes):
    surface.assets.logo.replace(png_bytes, "logo.png")
    surface.assets.signature.replace(png_bytes, "firma.png")
    surface.selection.select(1)
    try:
        frame = surface.commit()
    finally:
        surface.assets.close()

    assert frame.markup.count("data:image/png;base64,") == 2


def test_empty_batch_cannot_build_pdf():
    with pytest.raises(ValueError):
        RenderedBatch().to_pdf_bytes()


def test_pdf_file_name_replaces_slashes():
    assert pdf_file_name("100/2025") == "citacion-oficio-100-2025.pdf"


@pytest.mark.parametrize(
    "action, message",
    [
        ("render_current_to_pdf", SINGLE_PDF_FAILURE_MESSAGE),
        ("render_current_to_print", SINGLE_PRINT_FAILURE_MESSAGE),
        ("preview", PREVIEW_FAILURE_MESSAGE),
    ],
)
def test_unreadable_logo_fails_single_capture_with_user_message(surface, action, message):
    surface.assets.logo.replace(b"not an image", "logo.png")
    surface.selection.select(1)
    try:
        with pytest.raises(BatchCaptureFailure) as excinfo:
            getattr(BatchRenderer(surface), action)()
    finally:
        surface.assets.close()

    assert excinfo.value.user_message == message
    assert surface.decorated is True
    assert surface.selection.selected_index == 1


def test_single_capture_without_selection_raises_lookup_error(surface):
    with pytest.raises(LookupError):
        BatchRenderer(surface).render_current_to_pdf()
