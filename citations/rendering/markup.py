"""HTML markup of a citation page and the multi-citation print document."""
from __future__ import annotations

import html
from typing import Iterable, Optional

from citations.rendering.assets import AssetHandle
from citations.rendering.layout import (
    INFRACTION_SECTION,
    OWNER_SECTION,
    TITLE,
    CitationContent,
    Items,
    Paragraph,
)

PRINT_STYLES = """
@page { size: 8.5in 13in; margin: 0.4in; }
body { -webkit-font-smoothing: antialiased; -moz-osx-font-smoothing: grayscale; margin: 0; }
.citation-page { width: 8.5in; min-height: 13in; background: #fff; color: #000; margin: 0 auto;
  display: flex; flex-direction: column; font-family: Candara, Calibri, Segoe, "Segoe UI", Optima, Arial, sans-serif; }
.citation-page.decorated { box-shadow: 0 10px 15px rgba(0, 0, 0, 0.1); border: 1px solid #e2e8f0; }
.citation-page-wrapper { page-break-after: always; }
.citation-header { display: flex; justify-content: space-between; padding: 1.5rem 2rem 0; font-size: 12pt; }
.citation-logo { width: 6rem; height: 6rem; }
.citation-logo img { width: 100%; height: 100%; object-fit: contain; }
.citation-titles { text-align: center; font-size: 13pt; margin: 1rem 0; }
.citation-titles p { margin: 0.2rem 0; }
.citation-body { font-size: 13pt; padding: 0 2rem; flex-grow: 1; }
.citation-body h4 { text-decoration: underline; margin: 1rem 0 0.5rem; }
.citation-body p { margin: 0.2rem 0; }
.citation-columns { display: grid; grid-template-columns: 1fr 1fr; column-gap: 3rem; }
.citation-legal p { text-align: justify; margin-top: 0.75rem; }
.citation-signature { text-align: center; font-size: 13pt; margin-bottom: 4rem; }
.citation-signature .image { height: 6rem; display: flex; align-items: center; justify-content: center; }
.citation-signature .image img { max-height: 100%; max-width: 20rem; }
.citation-signature .rule { border-top: 1px solid #cbd5e1; width: 24rem; margin: 0 auto; padding-top: 0.5rem; }
.citation-footer { font-size: 10pt; text-align: center; padding: 0.25rem 2rem 1.5rem; }
"""


def _e(value: str) -> str:
    return html.escape(value or "")


def _items(items: Items) -> str:
    return "".join(f"<p><b>{_e(label)}</b> {_e(value)}</p>" for label, value in items)


def _paragraph(runs: Paragraph) -> str:
    parts = [f"<b><u>{_e(text)}</u></b>" if emphasized else _e(text) for text, emphasized in runs]
    return f"<p>{''.join(parts)}</p>"


def _image(handle: Optional[AssetHandle], alt: str) -> str:
    if handle is None:
        return ""
    return f'<img src="{handle.data_uri()}" alt="{_e(alt)}">'


def citation_markup(
    content: CitationContent,
    decorated: bool = False,
    logo: Optional[AssetHandle] = None,
    signature: Optional[AssetHandle] = None,
) -> str:
    """Return the self-contained ``<div class="citation-page">`` fragment."""

    css_class = "citation-page decorated" if decorated else "citation-page"
    return (
        f'<div class="{css_class}">'
        '<header class="citation-header">'
        f'<div class="citation-logo">{_image(logo, "Logo Municipalidad")}</div>'
        "<div>"
        f"<p><b>OFICIO N°:</b> {_e(content.oficio_text)}</p>"
        f"<p><b>PROCESO N°:</b> {_e(content.process_text)}</p>"
        f"<p><b>{_e(content.city_label)}</b> {_e(content.date_line)}</p>"
        "</div></header>"
        '<div class="citation-titles">'
        f"<p>{_e(content.municipality)}</p>"
        f"<p><b>{_e(content.court)}</b></p>"
        f"<p><b><u>{_e(TITLE)}</u></b></p>"
        "</div>"
        '<main class="citation-body">'
        f"<section><h4>{_e(OWNER_SECTION)}</h4>"
        f'<div class="citation-columns"><div>{_items(content.left_column)}</div>'
        f"<div>{_items(content.right_column)}</div></div></section>"
        f"<section><h4>{_e(INFRACTION_SECTION)}</h4>{_items(content.infraction_items)}</section>"
        '<div class="citation-legal">'
        + "".join(_paragraph(runs) for runs in content.legal_paragraphs)
        + "</div></main>"
        '<div class="citation-signature">'
        f'<div class="image">{_image(signature, "Firma")}</div>'
        f'<div class="rule"><p>{_e(content.secretary_name)}</p>'
        f"<p><b>{_e(content.secretary_title)}</b></p></div>"
        "</div>"
        f'<footer class="citation-footer">{_e(content.footer)}</footer>'
        "</div>"
    )


def print_document(fragments: Iterable[str], title: str = "Imprimir Todas las Citaciones") -> str:
    """Wrap captured fragments in one page-broken document that opens the print dialog."""

    body = "".join(f'<div class="citation-page-wrapper">{fragment}</div>' for fragment in fragments)
    return (
        "<!DOCTYPE html><html><head>"
        f'<meta charset="utf-8"><title>{_e(title)}</title>'
        f"<style>{PRINT_STYLES}</style>"
        "</head><body>"
        f"{body}"
        "<script>window.addEventListener('load', function () { window.focus(); window.print(); });</script>"
        "</body></html>"
    )
