"""Single-box layout elements: letterhead, section headers, text blocks, checkbox grids and tables."""

from __future__ import annotations

import logging
import math
from typing import Any, Sequence

from fieldreport.report.elements import CheckboxGrid, CheckboxItem, Letterhead, SectionHeader, Table, TextBlock
from fieldreport.report.formatting import display_value
from fieldreport.report.geometry import (
    ACCENT_BLUE,
    BORDER_GRAY,
    CHECK_GREEN,
    LIGHT_GRAY,
    PRIMARY_BLUE,
    TABLE_HEADER_GRAY,
    TEXT_GRAY,
    WHITE,
)
from fieldreport.report.page import PageCanvas
from fieldreport.report.text_metrics import wrap_text


logger = logging.getLogger(__name__)

LETTERHEAD_NAME_BASELINE = 15.0
LETTERHEAD_FIRST_ADDRESS_BASELINE = 22.0
LETTERHEAD_ADDRESS_STEP = 5.0
LETTERHEAD_TITLE_BOX_WIDTH = 120.0
LETTERHEAD_TITLE_BOX_HEIGHT = 12.0
LETTERHEAD_SUBTITLED_BOX_HEIGHT = 16.0


def render_letterhead(page: PageCanvas, element: Letterhead) -> None:
    """Full-bleed company band followed by the boxed report title.

    The band is drawn from the physical top of the page, so a letterhead
    placed after other content starts a new page first.
    """
    if not page.at_page_top:
        page.new_page()

    width = page.page_width
    center = width / 2

    address_baselines = [
        LETTERHEAD_FIRST_ADDRESS_BASELINE + index * LETTERHEAD_ADDRESS_STEP
        for index in range(len(element.address_lines))
    ]
    last_line = address_baselines[-1] if address_baselines else LETTERHEAD_NAME_BASELINE
    separator_y = last_line + 4
    branches_baseline = separator_y + 6
    band_height = branches_baseline + 8 if element.branches else separator_y + 6

    page.rect(0, 0, width, band_height, fill=PRIMARY_BLUE)
    page.text(
        element.company_name,
        center,
        LETTERHEAD_NAME_BASELINE,
        font_size=18,
        bold=True,
        color=WHITE,
        align='center',
    )
    for baseline, line in zip(address_baselines, element.address_lines):
        page.text(line, center, baseline, font_size=9, color=WHITE, align='center')
    page.line(page.left + 5, separator_y, width - page.left - 5, separator_y, color=WHITE, line_width=0.5)
    if element.branches:
        page.text(element.branches, center, branches_baseline, font_size=7, color=WHITE, align='center')

    title_top = band_height + 5
    box_height = LETTERHEAD_SUBTITLED_BOX_HEIGHT if element.subtitle else LETTERHEAD_TITLE_BOX_HEIGHT
    page.rect(
        center - LETTERHEAD_TITLE_BOX_WIDTH / 2,
        title_top,
        LETTERHEAD_TITLE_BOX_WIDTH,
        box_height,
        stroke=PRIMARY_BLUE,
        line_width=0.5,
    )
    page.text(
        element.title.upper(),
        center,
        title_top + (6 if element.subtitle else 8),
        font_size=12,
        bold=True,
        color=PRIMARY_BLUE,
        align='center',
    )
    if element.subtitle:
        page.text(f'({element.subtitle})', center, title_top + 12, font_size=9, color=PRIMARY_BLUE, align='center')
    page.cursor = title_top + box_height + 8


def render_section_header(page: PageCanvas, element: SectionHeader) -> None:
    cfg = page.config
    # The band must not be stranded at the bottom of a page without room for a row beneath it.
    needed = cfg.section_band_height + cfg.section_keep_with_next
    if not page.at_page_top:
        if page.fits(cfg.section_top_gap + needed):
            page.advance(cfg.section_top_gap)
        else:
            page.new_page()

    top = page.cursor
    page.rect(page.left, top, page.content_width, cfg.section_band_height, fill=LIGHT_GRAY)
    page.rect(page.left, top, cfg.section_accent_width, cfg.section_band_height, fill=ACCENT_BLUE)

    title = element.title.upper()
    if element.subtitle:
        title = f'{title} ({element.subtitle.upper()})'
    page.text(
        title,
        page.left + 5,
        top + cfg.section_band_height * 0.7,
        font_size=cfg.section_font_size,
        bold=True,
        color=PRIMARY_BLUE,
    )
    page.advance(cfg.section_band_height + cfg.section_after_gap)


def text_block_lines(page: PageCanvas, element: TextBlock) -> tuple[str, ...]:
    cfg = page.config
    max_width = page.content_width - 2 * cfg.box_inset
    return wrap_text(display_value(element.value), max_width, cfg.value_font_size, page.fonts.regular)


def text_block_height(line_count: int, page: PageCanvas) -> float:
    cfg = page.config
    return max(line_count * cfg.text_line_height + cfg.text_padding, cfg.text_min_height)


def render_text_block(page: PageCanvas, element: TextBlock) -> None:
    """Label plus wrapped paragraph in one bordered box; never split across pages."""
    cfg = page.config
    lines = text_block_lines(page, element)

    max_lines = max(1, math.floor((cfg.usable_height - cfg.text_padding) / cfg.text_line_height))
    if len(lines) > max_lines:
        logger.warning(
            'Text block %r has %d lines, more than one page holds; truncating to %d',
            element.label,
            len(lines),
            max_lines,
        )
        lines = lines[:max_lines]

    height = text_block_height(len(lines), page)
    page.ensure_space(height)

    top = page.cursor
    x = page.left + cfg.box_inset
    page.rect(page.left, top, page.content_width, height, fill=LIGHT_GRAY, stroke=BORDER_GRAY)
    page.text(element.label, x, top + 5, font_size=cfg.label_font_size, bold=True, color=TEXT_GRAY)
    page.text(lines, x, top + 10, font_size=cfg.value_font_size, line_height=cfg.text_line_height)
    page.advance(height + cfg.block_gap)


def _draw_checkbox(page: PageCanvas, x: float, baseline: float, checked: bool) -> None:
    size = page.config.checkbox_size
    page.rect(
        x,
        baseline - size + 0.5,
        size,
        size,
        fill=WHITE,
        stroke=CHECK_GREEN if checked else BORDER_GRAY,
        line_width=0.3,
    )
    if checked:
        page.line(x + 0.5, baseline - 1, x + 1.2, baseline + 0.2, color=CHECK_GREEN, line_width=0.5)
        page.line(x + 1.2, baseline + 0.2, x + 2.5, baseline - 2, color=CHECK_GREEN, line_width=0.5)


def _draw_checkbox_box(page: PageCanvas, items: Sequence[CheckboxItem], columns: int) -> float:
    cfg = page.config
    rows = math.ceil(len(items) / columns)
    height = rows * cfg.checkbox_row_height + cfg.grid_padding
    top = page.cursor
    page.rect(page.left, top, page.content_width, height, fill=LIGHT_GRAY, stroke=BORDER_GRAY)

    column_width = (page.content_width - 2 * cfg.box_inset) / columns
    for index, item in enumerate(items):
        row, column = divmod(index, columns)
        x = page.left + cfg.box_inset + column * column_width
        baseline = top + 5 + row * cfg.checkbox_row_height
        _draw_checkbox(page, x, baseline, item.checked)
        label_width = column_width - cfg.checkbox_size - 3
        label = wrap_text(item.label, label_width, cfg.label_font_size + 1, page.fonts.regular)[0]
        page.text(label, x + cfg.checkbox_size + 2, baseline, font_size=cfg.label_font_size + 1)
    return height


def render_checkbox_grid(page: PageCanvas, element: CheckboxGrid) -> None:
    cfg = page.config
    columns = max(1, element.columns)
    items = tuple(element.items)
    if not items:
        return

    def box_height(count: int) -> float:
        return math.ceil(count / columns) * cfg.checkbox_row_height + cfg.grid_padding

    if box_height(len(items)) <= cfg.usable_height:
        page.ensure_space(box_height(len(items)))
        height = _draw_checkbox_box(page, items, columns)
        page.advance(height + cfg.block_gap)
        return

    # Longer than a page: split on row boundaries.
    while items:
        fit_rows = math.floor((page.bottom_limit - page.cursor - cfg.grid_padding) / cfg.checkbox_row_height)
        if fit_rows < 1:
            page.new_page()
            continue
        head, items = items[: fit_rows * columns], items[fit_rows * columns :]
        height = _draw_checkbox_box(page, head, columns)
        page.advance(height)
        if items:
            page.new_page()
    page.advance(cfg.block_gap)


def _column_widths(element: Table, content_width: float) -> list[float]:
    count = len(element.headers)
    if element.column_widths and len(element.column_widths) == count:
        total = sum(element.column_widths)
        if total > content_width:
            scale = content_width / total
            return [width * scale for width in element.column_widths]
        return list(element.column_widths)
    return [content_width / count] * count


def _draw_table_row(
    page: PageCanvas,
    cells: Sequence[Any],
    widths: Sequence[float],
    *,
    header: bool,
) -> None:
    cfg = page.config
    top = page.cursor
    page.rect(
        page.left,
        top,
        page.content_width,
        cfg.table_row_height,
        fill=TABLE_HEADER_GRAY if header else WHITE,
        stroke=BORDER_GRAY,
    )
    x = page.left
    font_name = page.fonts.bold if header else page.fonts.regular
    for index, width in enumerate(widths):
        raw = cells[index] if index < len(cells) else None
        value = str(raw) if header else display_value(raw)
        # Fixed-height rows show only the first wrapped line of a cell.
        line = wrap_text(value, max(width - 2, 1.0), cfg.table_font_size, font_name)[0]
        page.text(line, x + 1, top + 3.5, font_size=cfg.table_font_size, bold=header)
        x += width
    page.advance(cfg.table_row_height)


def render_table(page: PageCanvas, element: Table) -> None:
    """Header plus fixed-height rows; long tables break on row boundaries and repeat the header."""
    cfg = page.config
    if not element.headers:
        return
    widths = _column_widths(element, page.content_width)
    rows = list(element.rows)
    row_h = cfg.table_row_height

    full_height = (len(rows) + 1) * row_h
    if full_height <= cfg.usable_height:
        page.ensure_space(full_height)
    else:
        page.ensure_space(2 * row_h)

    _draw_table_row(page, element.headers, widths, header=True)
    for row in rows:
        if not page.fits(row_h):
            page.new_page()
            _draw_table_row(page, element.headers, widths, header=True)
        _draw_table_row(page, row, widths, header=False)
    page.advance(cfg.block_gap)
