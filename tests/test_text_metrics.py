"""Tests for text wrapping and clipping."""

from __future__ import annotations

from fieldreport.report.text_metrics import clip_lines, line_height_mm, text_width_mm, wrap_text


class TestWrapText:
    def test_same_arguments_same_lines(self):
        text = 'Replaced injector nozzles on cylinders 2 and 5 and re-torqued the head bolts. ' * 6
        first = wrap_text(text, 80.0, 9, 'Helvetica')
        wrap_text.cache_clear()
        second = wrap_text(text, 80.0, 9, 'Helvetica')
        assert first == second
        assert isinstance(first, tuple)

    def test_lines_fit_width(self):
        text = 'alpha beta gamma delta epsilon zeta eta theta iota kappa lambda mu ' * 4
        for line in wrap_text(text, 40.0, 9, 'Helvetica'):
            assert text_width_mm(line, 'Helvetica', 9) <= 40.0

    def test_explicit_newlines_break(self):
        assert wrap_text('one\ntwo\r\nthree', 100.0, 9, 'Helvetica') == ('one', 'two', 'three')

    def test_long_token_is_split_by_character(self):
        token = 'X' * 200
        lines = wrap_text(token, 30.0, 9, 'Helvetica')
        assert len(lines) > 1
        assert ''.join(lines) == token

    def test_empty_text_yields_single_empty_line(self):
        assert wrap_text('', 50.0, 9, 'Helvetica') == ('',)


class TestClipLines:
    def test_keeps_lines_above_bottom(self):
        leading = line_height_mm(9)
        lines = ('a', 'b', 'c', 'd')
        kept = clip_lines(lines, first_baseline=10.0, line_height=leading, font_size=9, bottom=17.0)
        assert kept == ('a', 'b')

    def test_first_line_always_survives(self):
        kept = clip_lines(('only',), first_baseline=10.0, line_height=4.0, font_size=9, bottom=5.0)
        assert kept == ('only',)
