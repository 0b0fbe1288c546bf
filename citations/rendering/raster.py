"""Draw a citation page onto a Pillow image sized 8.5in x 13in."""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import List, Optional, Tuple

from PIL import Image, ImageDraw, ImageFont

from citations.rendering.assets import AssetHandle
from citations.rendering.layout import (
    INFRACTION_SECTION,
    OWNER_SECTION,
    PAGE_HEIGHT_IN,
    PAGE_WIDTH_IN,
    TITLE,
    CitationContent,
    Items,
    Paragraph,
)

logger = logging.getLogger(__name__)

REGULAR_FONTS = ("DejaVuSans.ttf", "Arial.ttf", "LiberationSans-Regular.ttf")
BOLD_FONTS = ("DejaVuSans-Bold.ttf", "Arial Bold.ttf", "LiberationSans-Bold.ttf")


@lru_cache(maxsize=32)
def _font(size_px: int, bold: bool = False) -> ImageFont.ImageFont:
    for candidate in BOLD_FONTS if bold else REGULAR_FONTS:
        try:
            return ImageFont.truetype(candidate, size_px)
        except OSError:
            continue
    return ImageFont.load_default(size=size_px)


class PageCanvas:
    """Cursor-based drawing helper; ``y`` advances as blocks are written."""

    def __init__(self, dpi: int, decorated: bool) -> None:
        self.dpi = dpi
        self.width = int(PAGE_WIDTH_IN * dpi)
        self.height = int(PAGE_HEIGHT_IN * dpi)
        self.image = Image.new("RGB", (self.width, self.height), "white")
        self.draw = ImageDraw.Draw(self.image)
        self.margin = int(0.45 * dpi)
        self.y = int(0.35 * dpi)
        if decorated:
            self._decorate()

    def px(self, points: float) -> int:
        return max(1, int(round(points * self.dpi / 72)))

    def line_height(self, size_pt: float) -> int:
        return int(self.px(size_pt) * 1.45)

    def text_width(self, text: str, font: ImageFont.ImageFont) -> float:
        return self.draw.textlength(text, font=font)

    def write(self, x: float, text: str, size_pt: float, bold: bool = False, underline: bool = False) -> float:
        """Draw ``text`` at the cursor row and return the x position after it."""

        font = _font(self.px(size_pt), bold)
        self.draw.text((x, self.y), text, font=font, fill="black")
        end = x + self.text_width(text, font)
        if underline:
            base = self.y + self.px(size_pt) + 2
            self.draw.line((x, base, end, base), fill="black", width=max(1, self.dpi // 100))
        return end

    def centered(self, text: str, size_pt: float, bold: bool = False, underline: bool = False) -> None:
        font = _font(self.px(size_pt), bold)
        x = (self.width - self.text_width(text, font)) / 2
        self.write(x, text, size_pt, bold, underline)
        self.y += self.line_height(size_pt)

    def labelled(self, x: float, label: str, value: str, size_pt: float) -> None:
        end = self.write(x, label, size_pt, bold=True)
        self.write(end + self.px(size_pt) / 3, value, size_pt)

    def paragraph(self, runs: Paragraph, size_pt: float) -> None:
        """Word-wrap styled runs across the text block width."""

        words: List[Tuple[str, bool]] = []
        for text, emphasized in runs:
            words.extend((word, emphasized) for word in text.split())
        right = self.width - self.margin
        space = self.text_width(" ", _font(self.px(size_pt)))
        x = float(self.margin)
        for word, emphasized in words:
            font = _font(self.px(size_pt), emphasized)
            width = self.text_width(word, font)
            if x > self.margin and x + width > right:
                self.y += self.line_height(size_pt)
                x = float(self.margin)
            self.write(x, word, size_pt, bold=emphasized, underline=emphasized)
            x += width + space
        self.y += self.line_height(size_pt)

    def paste(self, image: Image.Image, box: Tuple[int, int, int, int]) -> None:
        """Fit ``image`` inside ``box`` (left, top, width, height), centered."""

        left, top, width, height = box
        fitted = image.copy()
        fitted.thumbnail((width, height))
        offset = (left + (width - fitted.width) // 2, top + (height - fitted.height) // 2)
        self.image.paste(fitted, offset, fitted if fitted.mode == "RGBA" else None)

    def _decorate(self) -> None:
        shadow = max(2, self.dpi // 40)
        self.draw.rectangle(
            (shadow, shadow, self.width - 1, self.height - 1), outline=(203, 213, 225), width=shadow
        )
        self.draw.rectangle((0, 0, self.width - shadow, self.height - shadow), outline=(226, 232, 240))


def _column(canvas: PageCanvas, x: float, items: Items, size_pt: float) -> int:
    top = canvas.y
    for label, value in items:
        canvas.labelled(x, label, value, size_pt)
        canvas.y += canvas.line_height(size_pt)
    bottom = canvas.y
    canvas.y = top
    return bottom


def draw_citation(
    content: CitationContent,
    dpi: int = 150,
    decorated: bool = False,
    logo: Optional[AssetHandle] = None,
    signature: Optional[AssetHandle] = None,
) -> Image.Image:
    """Render the full citation page and return it as an RGB image."""

    canvas = PageCanvas(dpi, decorated)
    margin = canvas.margin

    logo_size = int(1.0 * dpi)
    if logo is not None:
        canvas.paste(logo.open_image(), (margin, canvas.y, logo_size, logo_size))
    header_x = canvas.width - margin - int(3.2 * dpi)
    header_top = canvas.y
    canvas.labelled(header_x, "OFICIO N°:", content.oficio_text, 12)
    canvas.y += canvas.line_height(12)
    canvas.labelled(header_x, "PROCESO N°:", content.process_text, 12)
    canvas.y += int(canvas.line_height(12) * 1.4)
    canvas.labelled(header_x, content.city_label, content.date_line, 12)
    canvas.y = max(canvas.y + canvas.line_height(12), header_top + logo_size) + canvas.px(12)

    canvas.centered(content.municipality, 13)
    canvas.centered(content.court, 13, bold=True)
    canvas.y += canvas.px(6)
    canvas.centered(TITLE, 13, bold=True, underline=True)
    canvas.y += canvas.px(14)

    canvas.write(margin, OWNER_SECTION, 13, bold=True, underline=True)
    canvas.y += canvas.line_height(13) + canvas.px(4)
    left_bottom = _column(canvas, margin, content.left_column, 13)
    right_bottom = _column(canvas, canvas.width / 2 + canvas.px(12), content.right_column, 13)
    canvas.y = max(left_bottom, right_bottom) + canvas.px(14)

    canvas.write(margin, INFRACTION_SECTION, 13, bold=True, underline=True)
    canvas.y += canvas.line_height(13) + canvas.px(4)
    canvas.y = _column(canvas, margin, content.infraction_items, 13) + canvas.px(16)

    for runs in content.legal_paragraphs:
        canvas.paragraph(runs, 13)
        canvas.y += canvas.px(9)

    signature_height = int(1.0 * dpi)
    signature_top = max(canvas.y + canvas.px(12), canvas.height - int(3.1 * dpi))
    canvas.y = signature_top
    if signature is not None:
        canvas.paste(
            signature.open_image(),
            ((canvas.width - int(3.3 * dpi)) // 2, signature_top, int(3.3 * dpi), signature_height),
        )
    canvas.y = signature_top + signature_height + canvas.px(4)
    rule_half = int(2.0 * dpi)
    canvas.draw.line(
        (canvas.width // 2 - rule_half, canvas.y, canvas.width // 2 + rule_half, canvas.y),
        fill=(203, 213, 225),
        width=max(1, dpi // 100),
    )
    canvas.y += canvas.px(8)
    canvas.centered(content.secretary_name, 13)
    canvas.centered(content.secretary_title, 13, bold=True)

    canvas.y = canvas.height - int(0.6 * dpi)
    canvas.centered(content.footer, 10)
    return canvas.image
