from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

from PIL import Image as PILImage
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas as pdf_canvas

from fieldreport.errors import ImageDecodeError, LayoutError
from fieldreport.report.geometry import BLACK, TEXT_GRAY, LayoutConfig
from fieldreport.report.text_metrics import ReportFonts, line_height_mm, points_to_mm, resolve_fonts


logger = logging.getLogger(__name__)

RGB = tuple[int, int, int]


@dataclass
class PageContext:
    """Mutable cursor state for one document generation."""

    page_width: float
    page_height: float
    margin_left: float
    margin_right: float
    margin_top: float
    margin_bottom: float
    cursor: float
    page_index: int = 0

    @property
    def content_width(self) -> float:
        return self.page_width - self.margin_left - self.margin_right

    @property
    def bottom_limit(self) -> float:
        return self.page_height - self.margin_bottom

    @property
    def remaining(self) -> float:
        return self.bottom_limit - self.cursor


@dataclass(frozen=True)
class DrawOp:
    kind: str
    page: int
    x: float
    y: float
    width: float
    height: float
    text: tuple[str, ...] = ()
    chrome: bool = False

    @property
    def bottom(self) -> float:
        return self.y + self.height


@dataclass(frozen=True)
class LoadedImage:
    reader: ImageReader
    format: str
    size: tuple[int, int]


def _rgb(color: RGB) -> tuple[float, float, float]:
    return (color[0] / 255.0, color[1] / 255.0, color[2] / 255.0)


def _flatten_to_rgb(image: PILImage.Image) -> PILImage.Image:
    if image.mode in ('RGBA', 'LA') or (image.mode == 'P' and 'transparency' in image.info):
        rgba = image.convert('RGBA')
        background = PILImage.new('RGBA', rgba.size, (255, 255, 255, 255))
        background.alpha_composite(rgba)
        return background.convert('RGB')
    if image.mode != 'RGB':
        return image.convert('RGB')
    return image.copy()


class PageCanvas:
    """Top-down millimetre drawing surface over a reportlab canvas.

    ``y`` grows downwards from the top edge of the page, matching how the
    layout components reason about the cursor. Every content primitive is
    also appended to ``ops`` so callers can inspect the produced geometry.
    """

    def __init__(
        self,
        config: LayoutConfig,
        *,
        title: str = '',
        fonts: ReportFonts | None = None,
        footer: bool = True,
    ):
        self.config = config
        self.title = title
        self.fonts = fonts or resolve_fonts()
        self.footer = footer
        self.ctx = PageContext(
            page_width=config.page_width,
            page_height=config.page_height,
            margin_left=config.margin_left,
            margin_right=config.margin_right,
            margin_top=config.margin_top,
            margin_bottom=config.margin_bottom,
            cursor=config.margin_top,
        )
        self.ops: list[DrawOp] = []
        self._buffer = io.BytesIO()
        self._canvas = pdf_canvas.Canvas(
            self._buffer,
            pagesize=(config.page_width * mm, config.page_height * mm),
            pageCompression=1,
        )
        self._canvas.setTitle(title or 'Service Report')
        self._canvas.setProducer('fieldreport')
        self._page_has_content = False
        self._finished = False

    # ------------------------------------------------------------------ #
    # Geometry
    # ------------------------------------------------------------------ #

    @property
    def page_width(self) -> float:
        return self.ctx.page_width

    @property
    def page_height(self) -> float:
        return self.ctx.page_height

    @property
    def left(self) -> float:
        return self.ctx.margin_left

    @property
    def content_width(self) -> float:
        return self.ctx.content_width

    @property
    def bottom_limit(self) -> float:
        return self.ctx.bottom_limit

    @property
    def cursor(self) -> float:
        return self.ctx.cursor

    @cursor.setter
    def cursor(self, value: float) -> None:
        self.ctx.cursor = float(value)

    @property
    def page_index(self) -> int:
        return self.ctx.page_index

    @property
    def page_count(self) -> int:
        return self.ctx.page_index + 1

    @property
    def at_page_top(self) -> bool:
        return not self._page_has_content and self.ctx.cursor <= self.ctx.margin_top

    def fits(self, height: float) -> bool:
        return self.ctx.cursor + height <= self.ctx.bottom_limit

    def ensure_space(self, height: float) -> bool:
        """Break to a new page when ``height`` does not fit below the cursor.

        Returns True when a page break was issued. A fresh, empty page is
        never broken again.
        """
        if self.fits(height) or self.at_page_top:
            return False
        self.new_page()
        return True

    def advance(self, delta: float) -> None:
        # Trailing gaps may run past the bottom edge; the cursor stops there and the next element breaks.
        self.ctx.cursor = min(self.ctx.cursor + delta, self.ctx.bottom_limit)

    # ------------------------------------------------------------------ #
    # Pages
    # ------------------------------------------------------------------ #

    def new_page(self) -> None:
        if self._finished:
            raise LayoutError('cannot add a page to a finished document')
        self._draw_footer()
        self._canvas.showPage()
        self.ctx.page_index += 1
        self.ctx.cursor = self.ctx.margin_top
        self._page_has_content = False

    def finish(self) -> bytes:
        if not self._finished:
            self._draw_footer()
            self._canvas.showPage()
            self._canvas.save()
            self._finished = True
        return self._buffer.getvalue()

    def _draw_footer(self) -> None:
        if not self.footer:
            return
        c = self._canvas
        size = self.config.footer_font_size
        baseline = self.ctx.page_height - self.ctx.margin_bottom / 2
        c.saveState()
        c.setFillColorRGB(*_rgb(TEXT_GRAY))
        c.setFont(self.fonts.regular, size)
        if self.title:
            c.drawString(self.left * mm, self._flip(baseline), self.title)
        c.drawRightString(
            (self.ctx.page_width - self.ctx.margin_right) * mm,
            self._flip(baseline),
            f'Page {self.ctx.page_index + 1}',
        )
        c.restoreState()

    # ------------------------------------------------------------------ #
    # Primitives
    # ------------------------------------------------------------------ #

    def _flip(self, y: float) -> float:
        return (self.ctx.page_height - y) * mm

    def _record(self, op: DrawOp) -> None:
        self.ops.append(op)
        if not op.chrome:
            self._page_has_content = True

    def rect(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        *,
        fill: RGB | None = None,
        stroke: RGB | None = None,
        line_width: float = 0.1,
        chrome: bool = False,
    ) -> None:
        c = self._canvas
        c.saveState()
        if fill is not None:
            c.setFillColorRGB(*_rgb(fill))
        if stroke is not None:
            c.setStrokeColorRGB(*_rgb(stroke))
            c.setLineWidth(line_width * mm)
        c.rect(
            x * mm,
            self._flip(y + height),
            width * mm,
            height * mm,
            stroke=1 if stroke is not None else 0,
            fill=1 if fill is not None else 0,
        )
        c.restoreState()
        self._record(DrawOp('rect', self.page_index, x, y, width, height, chrome=chrome))

    def line(
        self,
        x1: float,
        y1: float,
        x2: float,
        y2: float,
        *,
        color: RGB = BLACK,
        line_width: float = 0.3,
        chrome: bool = False,
    ) -> None:
        c = self._canvas
        c.saveState()
        c.setStrokeColorRGB(*_rgb(color))
        c.setLineWidth(line_width * mm)
        c.line(x1 * mm, self._flip(y1), x2 * mm, self._flip(y2))
        c.restoreState()
        top = min(y1, y2)
        self._record(
            DrawOp('line', self.page_index, min(x1, x2), top, abs(x2 - x1), abs(y2 - y1), chrome=chrome)
        )

    def text(
        self,
        lines: str | Sequence[str],
        x: float,
        y: float,
        *,
        font_size: float,
        bold: bool = False,
        color: RGB = BLACK,
        align: str = 'left',
        line_height: float | None = None,
        chrome: bool = False,
    ) -> None:
        """Draw one or more lines; ``y`` is the baseline of the first line."""
        rows: tuple[str, ...] = (lines,) if isinstance(lines, str) else tuple(lines)
        if not rows:
            return
        leading = line_height if line_height is not None else line_height_mm(font_size)
        font_name = self.fonts.bold if bold else self.fonts.regular

        c = self._canvas
        c.saveState()
        c.setFillColorRGB(*_rgb(color))
        c.setFont(font_name, font_size)
        for index, row in enumerate(rows):
            baseline = self._flip(y + index * leading)
            if align == 'center':
                c.drawCentredString(x * mm, baseline, row)
            elif align == 'right':
                c.drawRightString(x * mm, baseline, row)
            else:
                c.drawString(x * mm, baseline, row)
        c.restoreState()

        size_mm = points_to_mm(font_size)
        top = y - size_mm * 0.75
        bottom = y + (len(rows) - 1) * leading + size_mm * 0.25
        self._record(DrawOp('text', self.page_index, x, top, 0.0, bottom - top, text=rows, chrome=chrome))

    def load_image(self, data: bytes, image_format: str) -> LoadedImage:
        """Decode ``data``; raises ImageDecodeError before anything is drawn."""
        try:
            with PILImage.open(io.BytesIO(data)) as source:
                source.load()
                detected = str(source.format or image_format).upper()
                flattened = _flatten_to_rgb(source)
                flattened.load()
        except Exception as exc:
            raise ImageDecodeError(f'cannot decode {image_format} image', str(exc)) from exc
        if detected != image_format.upper():
            logger.debug('Image declared as %s decoded as %s', image_format, detected)
        return LoadedImage(reader=ImageReader(flattened), format=detected, size=flattened.size)

    def image(self, image: LoadedImage, x: float, y: float, width: float, height: float) -> None:
        self._canvas.drawImage(
            image.reader,
            x * mm,
            self._flip(y + height),
            width=width * mm,
            height=height * mm,
        )
        self._record(DrawOp('image', self.page_index, x, y, width, height))

    # ------------------------------------------------------------------ #
    # Introspection
    # ------------------------------------------------------------------ #

    def content_ops(self) -> list[DrawOp]:
        return [op for op in self.ops if not op.chrome]

    def ops_on_page(self, page: int) -> list[DrawOp]:
        return [op for op in self.ops if op.page == page]

    def texts(self) -> Iterable[str]:
        for op in self.ops:
            if op.kind == 'text':
                yield from op.text
