"""Tests for the two-column field grid: row assignment and pagination."""

from __future__ import annotations

import itertools

import pytest

from fieldreport.report.elements import Field, FieldGrid, grid
from fieldreport.report.field_grid import assign_rows, grid_height, plan_grid, render_field_grid


def _fields(spans):
    return [Field(f'Label {index + 1}', f'Value {index + 1}', span=span) for index, span in enumerate(spans)]


def _labels_by_page(page):
    pages: dict[int, list[str]] = {}
    for op in page.content_ops():
        if op.kind == 'text' and op.text and op.text[0].startswith('Label '):
            pages.setdefault(op.page, []).append(op.text[0])
    return pages


class TestAssignRows:
    def test_pairs_half_width_fields(self):
        slots, rows = assign_rows(_fields([1, 1, 1, 1]))
        assert rows == 2
        assert [(slot.row, slot.column) for slot in slots] == [(0, 0), (0, 1), (1, 0), (1, 1)]

    def test_full_width_flushes_half_filled_row(self):
        slots, rows = assign_rows(_fields([1, 2, 1]))
        assert [slot.row for slot in slots] == [0, 1, 2]
        assert rows == 3

    def test_dangling_half_width_field_counts_as_row(self):
        _, rows = assign_rows(_fields([1, 1, 1]))
        assert rows == 2

    def test_empty_list_has_no_rows(self):
        assert assign_rows([]) == ([], 0)

    def test_three_columns(self):
        slots, rows = assign_rows(_fields([1] * 7), columns=3)
        assert rows == 3
        assert [slot.column for slot in slots] == [0, 1, 2, 0, 1, 2, 0]

    @pytest.mark.parametrize('length', range(1, 7))
    def test_rows_never_mix_full_and_half_width(self, length):
        for spans in itertools.product((1, 2), repeat=length):
            fields = _fields(spans)
            slots, _ = assign_rows(fields)
            rows: dict[int, list[Field]] = {}
            for item, slot in zip(fields, slots):
                rows.setdefault(slot.row, []).append(item)

            for members in rows.values():
                if any(member.full_width for member in members):
                    assert len(members) == 1
                assert len(members) <= 2

            # Adjacent half-width fields share a row unless the first one closed a full pair.
            for index in range(len(fields) - 1):
                a, b = fields[index], fields[index + 1]
                if not a.full_width and not b.full_width and slots[index].column == 0:
                    assert slots[index].row == slots[index + 1].row


class TestPlanGrid:
    def test_whole_grid_when_it_fits(self, layout_config):
        chunks = list(plan_grid(_fields([1] * 4), cursor=50, at_page_top=False, config=layout_config))
        assert len(chunks) == 1
        assert chunks[0].rows == 2
        assert chunks[0].new_page_before is False

    def test_moves_to_new_page_when_no_row_fits(self, layout_config):
        cursor = layout_config.bottom_limit - 10
        chunks = list(plan_grid(_fields([1] * 4), cursor=cursor, at_page_top=False, config=layout_config))
        assert len(chunks) == 1
        assert chunks[0].new_page_before is True
        assert len(chunks[0].fields) == 4

    def test_thousands_of_fields_split_without_recursion(self, layout_config):
        fields = _fields([1] * 3000)
        chunks = list(plan_grid(fields, cursor=layout_config.margin_top, at_page_top=True, config=layout_config))
        assert sum(len(chunk.fields) for chunk in chunks) == 3000
        assert all(chunk.new_page_before for chunk in chunks[1:])
        for chunk in chunks:
            assert layout_config.margin_top + grid_height(chunk.rows, layout_config) <= layout_config.bottom_limit


class TestRenderFieldGrid:
    def test_split_near_page_bottom_happens_on_row_boundary(self, page, overflowing_ops):
        # Seven half-width and two full-width fields, six rows in total.
        spans = [1, 1, 2, 1, 1, 1, 2, 1, 1]
        cfg = page.config
        page.cursor = cfg.bottom_limit - cfg.grid_padding - 2 * cfg.grid_row_height - 2

        breaks = render_field_grid(page, grid(_fields(spans)))

        assert breaks == 1
        assert page.page_count == 2
        labels = _labels_by_page(page)
        assert labels[0] == ['Label 1', 'Label 2', 'Label 3']
        assert labels[1] == [f'Label {n}' for n in range(4, 10)]
        assert overflowing_ops(page) == []

    def test_long_list_keeps_every_field_exactly_once(self, page, overflowing_ops):
        render_field_grid(page, grid(_fields([1] * 60)))

        labels = _labels_by_page(page)
        assert len(labels) >= 2
        drawn = [label for page_labels in labels.values() for label in page_labels]
        assert drawn == [f'Label {n}' for n in range(1, 61)]
        assert overflowing_ops(page) == []

    def test_grid_exactly_filling_the_page_does_not_break(self, page):
        cfg = page.config
        page.cursor = cfg.bottom_limit - grid_height(4, cfg)

        breaks = render_field_grid(page, grid(_fields([1] * 8)))

        assert breaks == 0
        assert page.page_count == 1
        assert page.cursor == pytest.approx(cfg.bottom_limit)

    def test_empty_field_list_renders_degenerate_box(self, page):
        render_field_grid(page, FieldGrid(fields=()))

        rects = [op for op in page.content_ops() if op.kind == 'rect']
        assert len(rects) == 1
        assert rects[0].height == pytest.approx(page.config.grid_padding)
        assert page.page_count == 1

    def test_missing_values_render_dash(self, page):
        render_field_grid(
            page,
            grid([Field('A', None), Field('B', ''), Field('C', '   '), Field('D', 'undefined')]),
        )
        values = [op.text for op in page.content_ops() if op.kind == 'text' and op.text[0] not in 'ABCD']
        assert values == [('-',)] * 4
        assert 'None' not in page.texts()

    def test_overflowing_value_is_clipped_to_its_row(self, page):
        cfg = page.config
        render_field_grid(page, grid([Field('Notes', 'word ' * 200, span=2)]))

        value_op = [op for op in page.content_ops() if op.kind == 'text' and op.text[0] != 'Notes'][0]
        box_top = cfg.margin_top
        assert 1 <= len(value_op.text) <= 2
        assert value_op.bottom <= box_top + cfg.box_inset + cfg.grid_row_height
