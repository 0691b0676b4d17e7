from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

PLACEHOLDER = '-'


def display_value(value: Any) -> str:
    """Printable form of a record value; missing or blank values become a dash."""
    if value is None:
        return PLACEHOLDER
    if isinstance(value, bool):
        return 'Yes' if value else 'No'
    text = str(value).strip()
    if not text or text.lower() == 'undefined':
        return PLACEHOLDER
    return text


def format_date(value: Any) -> str:
    if value is None or not str(value).strip():
        return PLACEHOLDER
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    else:
        raw = str(value).strip()
        try:
            parsed = datetime.fromisoformat(raw.replace('Z', '+00:00'))
        except ValueError:
            return raw
    return parsed.strftime('%b %d, %Y')


def format_time(value: Any) -> str:
    if value is None or not str(value).strip():
        return PLACEHOLDER
    raw = str(value).strip()
    # HH:MM:SS -> HH:MM
    parts = raw.split(':')
    if len(parts) == 3 and all(part.isdigit() for part in parts):
        return f'{parts[0]}:{parts[1]}'
    return raw


def format_currency(value: Any, symbol: str = '₱') -> str:
    if value is None or not str(value).strip():
        return f'{symbol}0.00'
    try:
        amount = Decimal(str(value).replace(',', '').strip())
    except InvalidOperation:
        return display_value(value)
    return f'{symbol}{amount:,.2f}'


def format_boolean(value: Any) -> str:
    if value is None:
        return PLACEHOLDER
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {'true', 'yes', 'y', '1'}:
            return 'Yes'
        if lowered in {'false', 'no', 'n', '0'}:
            return 'No'
        return display_value(value)
    return 'Yes' if value else 'No'


def format_status(value: Any) -> str:
    text = display_value(value)
    if text == PLACEHOLDER:
        return text
    return text.replace('_', ' ').title()


def format_hours(value: Any) -> str:
    if value is None or not str(value).strip():
        return ''
    try:
        return f'{float(value):.2f}'
    except (TypeError, ValueError):
        return str(value)
