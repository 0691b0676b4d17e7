from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from reportlab.lib.units import mm
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont


logger = logging.getLogger(__name__)

FONT_REGULAR_NAME = 'FR-Sans'
FONT_BOLD_NAME = 'FR-Sans-Bold'

FONT_REGULAR_CANDIDATES = (
    Path('/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf'),
    Path('/usr/share/fonts/dejavu/DejaVuSans.ttf'),
)
FONT_BOLD_CANDIDATES = (
    Path('/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf'),
    Path('/usr/share/fonts/dejavu/DejaVuSans-Bold.ttf'),
)

# jsPDF-compatible default leading for multi-line text.
LINE_HEIGHT_FACTOR = 1.15


@dataclass(frozen=True)
class ReportFonts:
    regular: str
    bold: str


_FONTS_CACHE: dict[tuple[str | None, str | None], ReportFonts] = {}


def _safe_file(path: Path | None) -> Path | None:
    if path is None:
        return None
    if path.exists() and path.is_file():
        return path
    return None


def _register_ttf_font(font_name: str, font_path: Path) -> bool:
    if font_name in pdfmetrics.getRegisteredFontNames():
        return True

    try:
        pdfmetrics.registerFont(TTFont(font_name, str(font_path)))
        return True
    except Exception as exc:
        logger.warning('Failed to register PDF font %s from %s: %s', font_name, font_path, exc)
        return False


def _first_registered(font_name: str, explicit: str | None, candidates: tuple[Path, ...]) -> bool:
    paths = [Path(explicit)] if explicit else list(candidates)
    for path in paths:
        resolved = _safe_file(path)
        if resolved is None:
            continue
        if _register_ttf_font(font_name, resolved):
            return True
    return False


def resolve_fonts(regular_path: str | None = None, bold_path: str | None = None) -> ReportFonts:
    """Register a Unicode TTF pair when available, else fall back to Helvetica."""
    key = (regular_path, bold_path)
    cached = _FONTS_CACHE.get(key)
    if cached is not None:
        return cached

    regular = 'Helvetica'
    bold = 'Helvetica-Bold'
    if _first_registered(FONT_REGULAR_NAME, regular_path, FONT_REGULAR_CANDIDATES):
        regular = FONT_REGULAR_NAME
        bold = FONT_REGULAR_NAME
        if _first_registered(FONT_BOLD_NAME, bold_path, FONT_BOLD_CANDIDATES):
            bold = FONT_BOLD_NAME

    fonts = ReportFonts(regular=regular, bold=bold)
    _FONTS_CACHE[key] = fonts
    return fonts


def points_to_mm(value: float) -> float:
    return float(value) / mm


def line_height_mm(font_size: float) -> float:
    return points_to_mm(font_size * LINE_HEIGHT_FACTOR)


def text_width_mm(text: str, font_name: str, font_size: float) -> float:
    if not text:
        return 0.0
    return points_to_mm(pdfmetrics.stringWidth(text, font_name, font_size))


def _split_token_by_width(token: str, *, max_width: float, font_name: str, font_size: float) -> list[str]:
    chunks: list[str] = []
    current = ''
    for char in token:
        candidate = f'{current}{char}'
        if text_width_mm(candidate, font_name, font_size) <= max_width:
            current = candidate
            continue
        if current:
            chunks.append(current)
            current = char
            continue
        chunks.append(char)
        current = ''
    if current:
        chunks.append(current)
    return chunks


def _wrap_paragraph(paragraph: str, *, max_width: float, font_name: str, font_size: float) -> list[str]:
    if not paragraph.strip():
        return ['']

    tokens = re.findall(r'\s+|\S+', paragraph)
    wrapped: list[str] = []
    current = ''

    for token in tokens:
        candidate = f'{current}{token}'
        if text_width_mm(candidate.rstrip(), font_name, font_size) <= max_width:
            current = candidate
            continue

        if current.strip():
            wrapped.append(current.rstrip())
            current = ''
        if token.isspace():
            continue

        if text_width_mm(token, font_name, font_size) <= max_width:
            current = token
            continue

        chunks = _split_token_by_width(token, max_width=max_width, font_name=font_name, font_size=font_size)
        wrapped.extend(chunks[:-1])
        current = chunks[-1] if chunks else ''

    if current.strip():
        wrapped.append(current.rstrip())

    return wrapped or ['']


@lru_cache(maxsize=4096)
def wrap_text(text: str, max_width: float, font_size: float, font_name: str = 'Helvetica') -> tuple[str, ...]:
    """Split ``text`` into lines no wider than ``max_width`` millimetres.

    Explicit newlines always break. Words wider than a line are broken by
    character. The result is cached and immutable, so measuring a box and
    drawing it later see the exact same lines.
    """
    normalized = str(text or '').replace('\r\n', '\n').replace('\r', '\n').replace('\t', '    ')
    width = max(float(max_width), 0.0)
    lines: list[str] = []
    for paragraph in normalized.split('\n'):
        lines.extend(_wrap_paragraph(paragraph, max_width=width, font_name=font_name, font_size=font_size))
    return tuple(lines) or ('',)


def clip_lines(
    lines: tuple[str, ...],
    *,
    first_baseline: float,
    line_height: float,
    font_size: float,
    bottom: float,
) -> tuple[str, ...]:
    """Keep the leading lines whose glyphs end above ``bottom``; at least one line survives."""
    descent = points_to_mm(font_size) * 0.25
    kept: list[str] = []
    for index, line in enumerate(lines):
        if kept and first_baseline + index * line_height + descent > bottom:
            break
        kept.append(line)
    return tuple(kept)
