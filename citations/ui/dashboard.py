"""Streamlit app to generate, review, print, and export court citations."""
from datetime import date
from pathlib import Path
from typing import List, Optional

import streamlit as st
import streamlit.components.v1 as components

# Allow running via "streamlit run citations/ui/dashboard.py" without installing the package
# by ensuring the repository root is on ``sys.path``.
if __package__ in {None, ""}:
    import sys

    sys.path.append(str(Path(__file__).resolve().parents[2]))

from citations.core.config import TemplateConfig, load_template_config
from citations.core.errors import CitationsError
from citations.core.logging import configure_logging
from citations.core.models import CORRESPONDENCE_HEADERS, Failure, ProcessingOutcome, Success
from citations.core.utils import get_config_value
from citations.extraction.gateway import SourceDocument, gateway_from_config
from citations.processing.formatting import format_plate
from citations.rendering.assets import AssetSlot, AssetStore
from citations.rendering.batch import BATCH_PDF_NAME, BatchRenderer
from citations.rendering.surface import CitationSurface
from citations.reporting.workbook import (
    EXPORT_FILE_NAME,
    append_to_template,
    export_new,
    load_workbook_file,
)
from citations.review.selection import SelectionState
from citations.review.workflow import generate_citations, refresh_correspondence

XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _rerun_app() -> None:
    """Trigger a Streamlit rerun, compatible with newer and older APIs."""

    rerun = getattr(st, "rerun", None) or getattr(st, "experimental_rerun", None)
    if not rerun:
        raise RuntimeError("Streamlit does not expose a rerun helper.")
    rerun()


def _session_objects() -> tuple[SelectionState, TemplateConfig, AssetStore]:
    """Create the per-session selection, configuration, and asset store once."""

    if "selection" not in st.session_state:
        st.session_state.selection = SelectionState()
        st.session_state.config = load_template_config()
        st.session_state.assets = AssetStore()
    return st.session_state.selection, st.session_state.config, st.session_state.assets


def _access_granted() -> bool:
    """Ask for the configured access code; no code configured means open access."""

    access_code = get_config_value("ACCESS_CODE")
    if not access_code or st.session_state.get("authenticated"):
        return True

    st.title("Acceso Restringido")
    st.caption("Ingresa el código para continuar")
    with st.form("login"):
        entered = st.text_input("Código de acceso", type="password")
        submitted = st.form_submit_button("Ingresar")
    if submitted:
        if entered == access_code:
            st.session_state.authenticated = True
            _rerun_app()
        st.error("Código de acceso incorrecto.")
    return False


def _sync_asset(slot: AssetSlot, upload) -> None:
    """Replace the slot's handle when the uploaded file changes; release it when cleared."""

    marker = f"{slot.label}_file_id"
    upload_id = getattr(upload, "file_id", None) if upload is not None else None
    if upload_id == st.session_state.get(marker):
        return
    st.session_state[marker] = upload_id
    if upload is None:
        slot.release()
    else:
        slot.replace(upload.getvalue(), upload.name)


def _config_sidebar(config: TemplateConfig, assets: AssetStore) -> None:
    """Edit the template configuration in place."""

    with st.sidebar:
        st.subheader("Configuración de plantilla")
        config.municipality = st.text_input("Municipalidad", config.municipality)
        config.court = st.text_input("Juzgado", config.court)
        config.city = st.text_input("Ciudad", config.city)
        config.secretary_name = st.text_input("Nombre secretario(a)", config.secretary_name)
        config.secretary_title = st.text_input("Cargo secretario(a)", config.secretary_title)
        hearing = st.date_input("Fecha de audiencia", date.fromisoformat(config.hearing_date))
        config.hearing_date = hearing.isoformat()
        config.hearing_time = st.text_input("Hora de audiencia (HH:MM)", config.hearing_time)
        config.hearing_address = st.text_input("Dirección de audiencia", config.hearing_address)
        config.start_oficio_number = st.text_input("N° de oficio inicial", config.start_oficio_number)
        config.footer_contact_info = st.text_area("Pie de página", config.footer_contact_info)

        st.subheader("Imágenes")
        _sync_asset(assets.logo, st.file_uploader("Logo", type=["png", "jpg", "jpeg"], key="logo_upload"))
        _sync_asset(
            assets.signature, st.file_uploader("Firma", type=["png", "jpg", "jpeg"], key="signature_upload")
        )


def _outcome_label(index: int, outcome: ProcessingOutcome) -> str:
    if isinstance(outcome, Success):
        citation = outcome.citation
        return f"Oficio {citation.oficio_number} · {format_plate(citation.plate)} · {citation.owner_name}"
    return f"⚠️ Error: {outcome.error_message}"


def _run_generation(complaints_upload, certificates_upload, selection: SelectionState, config: TemplateConfig) -> None:
    """Run count + extraction and store outcomes, reporting one message on failure."""

    st.session_state.pop("error", None)
    st.session_state.pop("batch_pdf", None)
    selection.reset()
    if complaints_upload is None or certificates_upload is None:
        st.session_state.error = "Por favor, sube los archivos de Denuncias y CIAV."
        return

    try:
        gateway = gateway_from_config()
    except CitationsError as exc:
        st.session_state.error = exc.user_message
        return

    complaints = SourceDocument(complaints_upload.name, complaints_upload.getvalue())
    certificates = SourceDocument(certificates_upload.name, certificates_upload.getvalue())
    with st.status("Procesando documentos...", expanded=True) as status:
        result = generate_citations(gateway, complaints, certificates, config, progress_callback=status.write)
        status.update(label="Proceso finalizado", state="error" if result.error else "complete")

    selection.replace(result.outcomes)
    if result.error:
        st.session_state.error = result.error


UPLOAD_WIDGETS = ("complaints_upload", "certificates_upload", "template_upload")


def _upload_key(name: str) -> str:
    """Key of a file uploader for the current upload round."""

    return f"{name}_{st.session_state.get('upload_round', 0)}"


def _reset(selection: SelectionState) -> None:
    """Forget uploads and results; logo and signature stay for the next run.

    Starting a new upload round gives every document uploader a fresh key, so
    the browser shows them empty.
    """

    selection.reset()
    for key in ("error", "batch_pdf", "template", "template_file_id", "template_output"):
        st.session_state.pop(key, None)
    for name in UPLOAD_WIDGETS:
        st.session_state.pop(_upload_key(name), None)
    st.session_state["upload_round"] = st.session_state.get("upload_round", 0) + 1


def _detail_view(surface: CitationSurface, renderer: BatchRenderer) -> None:
    """Show the selected citation with its editable header fields."""

    selection = surface.selection
    citation = selection.current
    if citation is None:
        st.info("Selecciona una citación de la lista para verla.")
        return

    year = surface.config.hearing_year
    fields = selection.edits.fields_for(citation, year)
    key_suffix = f"{citation.oficio_number}_{citation.process_number}_{year}"
    cols = st.columns(3)
    oficio_text = cols[0].text_input("OFICIO N°", fields.oficio_text, key=f"oficio_{key_suffix}")
    process_text = cols[1].text_input("PROCESO N°", fields.process_text, key=f"proceso_{key_suffix}")
    date_line = cols[2].text_input(
        f"{surface.config.city.upper()},", fields.date_line, key=f"fecha_{key_suffix}"
    )
    selection.edits.edit(citation, year, oficio_text=oficio_text, process_text=process_text, date_line=date_line)

    try:
        frame = renderer.preview()
    except CitationsError as exc:
        st.error(f"{exc.user_message} Revisa el logo y la firma cargados.")
        return

    action_cols = st.columns(2)
    with action_cols[0]:
        if st.button("🖨️ Imprimir", key=f"print_{key_suffix}"):
            try:
                components.html(renderer.render_current_to_print(), height=0)
            except CitationsError as exc:
                st.error(exc.user_message)
    with action_cols[1]:
        try:
            file_name, pdf_bytes = renderer.render_current_to_pdf()
        except CitationsError as exc:
            st.error(exc.user_message)
        else:
            st.download_button("⬇️ Descargar PDF", pdf_bytes, file_name=file_name, mime="application/pdf")

    st.image(frame.image, use_container_width=True)


def _citations_tab(surface: CitationSurface, renderer: BatchRenderer) -> None:
    selection = surface.selection
    outcomes = selection.outcomes
    if not outcomes:
        st.info("Sube los documentos y genera las citaciones para comenzar.")
        return

    has_citations = bool(selection.success_indexes())
    batch_cols = st.columns(2)
    with batch_cols[0]:
        if st.button("📄 Generar PDF con todas", disabled=not has_citations):
            try:
                st.session_state.batch_pdf = renderer.render_all_to_pdf().to_pdf_bytes()
            except CitationsError as exc:
                st.error(exc.user_message)
        if st.session_state.get("batch_pdf"):
            st.download_button(
                "⬇️ Descargar todas las citaciones",
                st.session_state.batch_pdf,
                file_name=BATCH_PDF_NAME,
                mime="application/pdf",
            )
    with batch_cols[1]:
        if st.button("🖨️ Imprimir todas", disabled=not has_citations):
            try:
                components.html(renderer.render_all_to_print(), height=0)
            except CitationsError as exc:
                st.error(exc.user_message)

    list_col, detail_col = st.columns([1, 2])
    with list_col:
        st.caption(f"{len(selection.success_indexes())} citación(es) generadas")
        options: List[Optional[int]] = [None, *range(len(outcomes))]
        chosen = st.radio(
            "Resultados",
            options=options,
            index=options.index(selection.selected_index) if selection.selected_index in options else 0,
            format_func=lambda value: "(ninguna)" if value is None else _outcome_label(value, outcomes[value]),
        )
        selection.select(chosen)
        for outcome in outcomes:
            if isinstance(outcome, Failure):
                st.caption(f"Archivos: {', '.join(outcome.source_files)}")
    with detail_col:
        _detail_view(surface, renderer)


def _correspondence_tab(selection: SelectionState, config: TemplateConfig) -> None:
    rows = refresh_correspondence(selection.outcomes, config)
    if not rows:
        st.info("No hay datos de correspondencia para mostrar.")
        return

    st.dataframe([row.to_dict() for row in rows], use_container_width=True, hide_index=True,
                 column_order=CORRESPONDENCE_HEADERS)
    st.download_button("📊 Exportar a Excel", export_new(rows), file_name=EXPORT_FILE_NAME, mime=XLSX_MIME)

    st.markdown("#### Agregar a planilla existente")
    upload = st.file_uploader("Planilla de correspondencia", type=["xlsx"], key=_upload_key("template_upload"))
    if upload is None:
        st.session_state.pop("template", None)
        st.session_state.pop("template_file_id", None)
        return
    if st.session_state.get("template_file_id") != upload.file_id:
        st.session_state.template_file_id = upload.file_id
        st.session_state.pop("template_output", None)
        try:
            st.session_state.template = load_workbook_file(upload.getvalue(), upload.name)
        except CitationsError as exc:
            st.session_state.pop("template", None)
            st.error(exc.user_message)
            return

    template = st.session_state.get("template")
    if template is None:
        return
    sheet_name = st.selectbox("Hoja", template.sheet_names, index=0)
    if st.button("➕ Agregar a plantilla"):
        try:
            st.session_state.template_output = append_to_template(template, sheet_name, rows)
        except CitationsError as exc:
            st.error(exc.user_message)
    if st.session_state.get("template_output"):
        file_name, data = st.session_state.template_output
        st.download_button("⬇️ Descargar planilla actualizada", data, file_name=file_name, mime=XLSX_MIME)


def main() -> None:
    """Launch the citation desk."""

    configure_logging()
    st.set_page_config(page_title="Citaciones JPL", layout="wide", initial_sidebar_state="expanded")
    if not _access_granted():
        return

    selection, config, assets = _session_objects()
    _config_sidebar(config, assets)

    st.title("Generador de Citaciones")
    upload_cols = st.columns(2)
    with upload_cols[0]:
        complaints_upload = st.file_uploader("Denuncias (PDF)", type=["pdf"], key=_upload_key("complaints_upload"))
    with upload_cols[1]:
        certificates_upload = st.file_uploader(
            "Certificados CIAV (PDF)", type=["pdf"], key=_upload_key("certificates_upload")
        )

    action_cols = st.columns([1, 1, 4])
    with action_cols[0]:
        if st.button("✨ Generar citaciones", type="primary"):
            _run_generation(complaints_upload, certificates_upload, selection, config)
    with action_cols[1]:
        if st.button("Reiniciar"):
            _reset(selection)
            _rerun_app()

    if st.session_state.get("error"):
        st.error(st.session_state.error)

    surface = CitationSurface(selection, config, assets)
    renderer = BatchRenderer(surface)
    citations_tab, correspondence_tab = st.tabs(["Citaciones", "Correspondencia"])
    with citations_tab:
        _citations_tab(surface, renderer)
    with correspondence_tab:
        _correspondence_tab(selection, config)


if __name__ == "__main__":
    main()
