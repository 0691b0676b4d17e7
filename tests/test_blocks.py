"""Tests for single-box elements: section headers, text blocks, checkbox grids, tables, letterhead."""

from __future__ import annotations

import pytest

from fieldreport.report.blocks import (
    render_checkbox_grid,
    render_letterhead,
    render_section_header,
    render_table,
    render_text_block,
    text_block_height,
    text_block_lines,
)
from fieldreport.report.elements import CheckboxItem, Letterhead, SectionHeader, Table, TextBlock, checkboxes
from fieldreport.report.geometry import LayoutConfig
from fieldreport.report.page import PageCanvas

LONG_TEXT = (
    'The unit was inspected after the customer reported intermittent loss of power under load. '
    'Fuel filters were found partially clogged and the water separator bowl contained sediment. '
    'Both filters were replaced, the fuel system was bled, and the engine was run at full load for '
    'forty minutes with stable oil pressure and coolant temperature. Recommend shortening the fuel '
    'filter service interval and sampling the storage tank before the next scheduled visit. '
    'Customer was advised to keep maintenance logs at the site.'
)


class TestSectionHeader:
    def test_no_gap_at_page_top(self, page):
        render_section_header(page, SectionHeader('General Information'))
        band = page.content_ops()[0]
        assert band.y == pytest.approx(page.config.margin_top)
        assert 'GENERAL INFORMATION' in page.texts()

    def test_gap_after_content(self, page):
        page.cursor = 100
        render_section_header(page, SectionHeader('Cylinder'))
        band = page.content_ops()[0]
        assert band.y == pytest.approx(100 + page.config.section_top_gap)

    def test_subtitle_is_appended(self, page):
        render_section_header(page, SectionHeader('Main Bearings', 'Cause'))
        assert 'MAIN BEARINGS (CAUSE)' in page.texts()

    def test_header_is_not_stranded_at_page_bottom(self, page):
        page.cursor = page.config.bottom_limit - 15
        render_section_header(page, SectionHeader('Signatures'))
        assert page.page_count == 2
        assert page.content_ops()[0].page == 1


class TestTextBlock:
    def test_long_value_wraps_and_moves_to_new_page(self, fonts, overflowing_ops):
        cfg = LayoutConfig(margin_left=75, margin_right=75)
        page = PageCanvas(cfg, fonts=fonts)
        block = TextBlock('Findings', LONG_TEXT)

        lines = text_block_lines(page, block)
        assert len(LONG_TEXT) >= 500
        assert len(lines) > 10

        height = text_block_height(len(lines), page)
        page.cursor = cfg.bottom_limit - height + 1
        render_text_block(page, block)

        assert page.page_count == 2
        box = [op for op in page.content_ops() if op.kind == 'rect'][0]
        assert box.page == 1
        assert box.y == pytest.approx(cfg.margin_top)
        assert box.height == pytest.approx(height)
        assert overflowing_ops(page) == []

    def test_block_is_never_split(self, page):
        render_text_block(page, TextBlock('Remarks', LONG_TEXT))
        pages = {op.page for op in page.content_ops()}
        assert pages == {0}

    def test_minimum_height_and_dash(self, page):
        render_text_block(page, TextBlock('Remarks', None))
        box = [op for op in page.content_ops() if op.kind == 'rect'][0]
        assert box.height == pytest.approx(page.config.text_min_height)
        assert '-' in page.texts()

    def test_text_taller_than_a_page_is_truncated(self, page, overflowing_ops):
        render_text_block(page, TextBlock('Log', '\n'.join(f'line {n}' for n in range(200))))
        assert page.page_count == 1
        assert overflowing_ops(page) == []


class TestCheckboxGrid:
    def test_checked_items_get_a_tick(self, page):
        render_checkbox_grid(
            page,
            checkboxes([CheckboxItem('Cracked', True), CheckboxItem('Bending'), CheckboxItem('Others')]),
        )
        ticks = [op for op in page.content_ops() if op.kind == 'line']
        assert len(ticks) == 2
        box = [op for op in page.content_ops() if op.kind == 'rect'][0]
        assert box.height == pytest.approx(page.config.checkbox_row_height + page.config.grid_padding)

    def test_moves_whole_grid_when_it_does_not_fit(self, page):
        page.cursor = page.config.bottom_limit - 10
        render_checkbox_grid(page, checkboxes([CheckboxItem(f'Item {n}') for n in range(9)]))
        assert {op.page for op in page.content_ops()} == {1}

    def test_grid_longer_than_a_page_splits_on_rows(self, page, overflowing_ops):
        items = [CheckboxItem(f'Item {n}') for n in range(300)]
        render_checkbox_grid(page, checkboxes(items))
        labels = [op.text[0] for op in page.content_ops() if op.kind == 'text']
        assert labels == [f'Item {n}' for n in range(300)]
        assert page.page_count >= 2
        assert overflowing_ops(page) == []


class TestTable:
    def test_header_repeats_on_each_page(self, page, overflowing_ops):
        rows = tuple((f'2024-01-{n % 28 + 1:02d}', '08:00', '17:00', '8.00', f'Job {n}') for n in range(120))
        render_table(page, Table(headers=('DATE', 'START', 'STOP', 'TOTAL', 'JOB'), rows=rows))

        header_pages = [op.page for op in page.content_ops() if op.kind == 'text' and op.text == ('DATE',)]
        assert page.page_count >= 2
        assert header_pages == list(range(page.page_count))
        jobs = [op.text[0] for op in page.content_ops() if op.kind == 'text' and op.text[0].startswith('Job ')]
        assert jobs == [f'Job {n}' for n in range(120)]
        assert overflowing_ops(page) == []

    def test_short_table_moves_to_new_page_whole(self, page):
        page.cursor = page.config.bottom_limit - 12
        render_table(page, Table(headers=('A', 'B'), rows=(('1', '2'), ('3', '4'), ('5', '6'))))
        assert {op.page for op in page.content_ops()} == {1}

    def test_missing_cells_render_dash(self, page):
        render_table(page, Table(headers=('A', 'B', 'C'), rows=(('x', None),)))
        texts = list(page.texts())
        assert texts[-3:] == ['x', '-', '-']


class TestLetterhead:
    def test_band_and_title_place_cursor_below(self, page):
        render_letterhead(
            page,
            Letterhead(
                title='Deutz Service Report',
                company_name='POWER SYSTEMS, INCORPORATED',
                address_lines=('Line 1', 'Line 2', 'Line 3', 'Line 4'),
                branches='NAVOTAS • CEBU',
            ),
        )
        band = page.content_ops()[0]
        assert (band.y, band.height) == (0, pytest.approx(55))
        assert page.cursor == pytest.approx(80)
        assert 'DEUTZ SERVICE REPORT' in page.texts()

    def test_letterhead_after_content_starts_new_page(self, page):
        page.cursor = 120
        render_letterhead(page, Letterhead(title='Report', company_name='ACME'))
        assert page.page_count == 2

    def test_subtitle_grows_the_title_box(self, page):
        render_letterhead(
            page,
            Letterhead(
                title='Commissioning Report',
                company_name='ACME',
                address_lines=('Line 1', 'Line 2', 'Line 3', 'Line 4'),
                branches='NAVOTAS',
                subtitle='Electric Driven Surface Pump',
            ),
        )
        assert '(Electric Driven Surface Pump)' in page.texts()
        assert page.cursor == pytest.approx(84)
