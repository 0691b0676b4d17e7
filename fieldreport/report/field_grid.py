from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Sequence

from fieldreport.report.elements import Field, FieldGrid
from fieldreport.report.formatting import display_value
from fieldreport.report.geometry import BORDER_GRAY, LIGHT_GRAY, TEXT_GRAY, LayoutConfig
from fieldreport.report.page import PageCanvas
from fieldreport.report.text_metrics import clip_lines, line_height_mm, wrap_text


@dataclass(frozen=True)
class GridSlot:
    row: int
    column: int


@dataclass(frozen=True)
class GridChunk:
    """A run of fields drawn as one bordered box on one page."""

    fields: tuple[Field, ...]
    rows: int
    new_page_before: bool


def assign_rows(fields: Sequence[Field], columns: int = 2) -> tuple[list[GridSlot], int]:
    """Place each field in the grid and return the slots plus the total row count.

    A full-width field always opens a fresh row, closing any partly filled
    one. Half-width fields fill ``columns`` slots per row. A trailing partly
    filled row still counts as a whole row.
    """
    columns = max(1, int(columns))
    slots: list[GridSlot] = []
    row = 0
    column = 0
    for item in fields:
        if item.full_width:
            if column > 0:
                row += 1
                column = 0
            slots.append(GridSlot(row=row, column=0))
            row += 1
            continue
        slots.append(GridSlot(row=row, column=column))
        column += 1
        if column == columns:
            row += 1
            column = 0
    total_rows = row + 1 if column > 0 else row
    return slots, total_rows


def grid_height(rows: int, config: LayoutConfig) -> float:
    return rows * config.grid_row_height + config.grid_padding


def plan_grid(
    fields: Sequence[Field],
    *,
    cursor: float,
    at_page_top: bool,
    config: LayoutConfig,
    columns: int = 2,
) -> Iterator[GridChunk]:
    """Split ``fields`` into page-sized chunks, breaking only on row boundaries.

    The first chunk starts at ``cursor``; every later chunk starts at the top
    of a new page.
    """
    remaining = tuple(fields)
    new_page = False
    top_of_page = at_page_top
    limit = config.bottom_limit

    while True:
        slots, total_rows = assign_rows(remaining, columns)
        if cursor + grid_height(total_rows, config) <= limit:
            yield GridChunk(fields=remaining, rows=total_rows, new_page_before=new_page)
            return

        max_fit_rows = math.floor((limit - cursor - config.grid_padding) / config.grid_row_height)
        if max_fit_rows < 1:
            if not top_of_page:
                new_page = True
                cursor = config.margin_top
                top_of_page = True
                continue
            max_fit_rows = 1

        split_index = next(index for index, slot in enumerate(slots) if slot.row >= max_fit_rows)
        head = remaining[:split_index]
        yield GridChunk(fields=head, rows=assign_rows(head, columns)[1], new_page_before=new_page)

        remaining = remaining[split_index:]
        new_page = True
        cursor = config.margin_top
        top_of_page = True


def draw_grid_box(page: PageCanvas, fields: Sequence[Field], *, top: float, columns: int = 2) -> float:
    cfg = page.config
    slots, total_rows = assign_rows(fields, columns)
    height = grid_height(total_rows, cfg)

    page.rect(page.left, top, page.content_width, height, fill=LIGHT_GRAY, stroke=BORDER_GRAY, line_width=0.1)

    inner_width = page.content_width - 2 * cfg.box_inset
    column_width = inner_width / max(1, columns)
    value_leading = line_height_mm(cfg.value_font_size)

    for item, slot in zip(fields, slots):
        row_top = top + cfg.box_inset + slot.row * cfg.grid_row_height
        x = page.left + cfg.box_inset + slot.column * column_width
        page.text(
            item.label,
            x,
            row_top + cfg.grid_label_offset,
            font_size=cfg.label_font_size,
            bold=True,
            color=TEXT_GRAY,
        )

        max_width = inner_width if item.full_width else column_width - cfg.box_inset
        lines = wrap_text(display_value(item.value), max_width, cfg.value_font_size, page.fonts.regular)
        # Rows have a fixed height; value lines that would spill into the next row are dropped.
        visible = clip_lines(
            lines,
            first_baseline=row_top + cfg.grid_value_offset,
            line_height=value_leading,
            font_size=cfg.value_font_size,
            bottom=row_top + cfg.grid_row_height,
        )
        page.text(visible, x, row_top + cfg.grid_value_offset, font_size=cfg.value_font_size)

    return height


def render_field_grid(page: PageCanvas, element: FieldGrid) -> int:
    """Draw the grid, paginating as needed; returns the number of page breaks issued."""
    cfg = page.config
    breaks = 0
    chunks = plan_grid(
        element.fields,
        cursor=page.cursor,
        at_page_top=page.at_page_top,
        config=cfg,
        columns=element.columns,
    )
    for chunk in chunks:
        if chunk.new_page_before:
            page.new_page()
            breaks += 1
        height = draw_grid_box(page, chunk.fields, top=page.cursor, columns=element.columns)
        page.advance(height + cfg.block_gap)
    return breaks
