"""Tests for value formatters."""

from __future__ import annotations

from datetime import date

import pytest

from fieldreport.report.formatting import (
    display_value,
    format_boolean,
    format_currency,
    format_date,
    format_hours,
    format_status,
    format_time,
)


@pytest.mark.parametrize('value', [None, '', '   ', 'undefined'])
def test_missing_values_become_dash(value):
    assert display_value(value) == '-'


def test_display_value_keeps_zero_and_text():
    assert display_value(0) == '0'
    assert display_value(' 12 bar ') == '12 bar'
    assert display_value(True) == 'Yes'


@pytest.mark.parametrize('value', ['None', 'null', 'NULL'])
def test_recorded_none_is_real_data(value):
    assert display_value(value) == value


def test_format_date():
    assert format_date('2024-03-05') == 'Mar 05, 2024'
    assert format_date('2024-03-05T08:30:00Z') == 'Mar 05, 2024'
    assert format_date(date(2023, 12, 1)) == 'Dec 01, 2023'
    assert format_date('next week') == 'next week'
    assert format_date(None) == '-'


def test_format_time():
    assert format_time('08:30:00') == '08:30'
    assert format_time('8:30 AM') == '8:30 AM'
    assert format_time('') == '-'


def test_format_currency():
    assert format_currency(1234.5) == '₱1,234.50'
    assert format_currency('2500') == '₱2,500.00'
    assert format_currency(None) == '₱0.00'
    assert format_currency('n/a') == 'n/a'
    assert format_currency(10, symbol='$') == '$10.00'


def test_format_boolean():
    assert format_boolean(True) == 'Yes'
    assert format_boolean('false') == 'No'
    assert format_boolean(None) == '-'


def test_format_status():
    assert format_status('needs_repair') == 'Needs Repair'
    assert format_status(None) == '-'


def test_format_hours():
    assert format_hours(8) == '8.00'
    assert format_hours(None) == ''
