"""Pieces shared by the report builders: letterhead, galleries, embedded rows and the usual signature row."""

from __future__ import annotations

from typing import Any, Callable, Mapping, Sequence

from fieldreport.config import Settings
from fieldreport.report.elements import (
    Attachment,
    Element,
    Field,
    Letterhead,
    SectionHeader,
    SignatureEntry,
    Table,
    gallery,
    grid,
    signatures,
)
from fieldreport.report.formatting import format_date


Record = Mapping[str, Any]
Builder = Callable[[Record, Sequence[Record], Settings], list[Element]]


def letterhead(title: str, settings: Settings, subtitle: str | None = None) -> Letterhead:
    return Letterhead(
        title=title,
        company_name=settings.company_name,
        address_lines=tuple(settings.company_address_lines),
        branches=settings.company_branches,
        subtitle=subtitle,
    )


def attachments_gallery(
    section_title: str,
    attachments: Sequence[Record],
    caption_key: str,
    *,
    category: str | None = None,
) -> list[Element]:
    """Section plus two-up gallery, or nothing when no attachment has a file URL.

    With ``category`` only attachments whose ``attachment_category`` matches
    are shown.
    """
    items = [
        Attachment(remote_url=str(row.get('file_url') or ''), display_name=row.get(caption_key))
        for row in attachments
        if row.get('file_url') and (category is None or row.get('attachment_category') == category)
    ]
    if not items:
        return []
    return [SectionHeader(section_title), gallery(items)]


def first_row(rows: Any) -> Record:
    if isinstance(rows, list) and rows and isinstance(rows[0], Mapping):
        return rows[0]
    if isinstance(rows, Mapping):
        return rows
    return {}


def bank_row(rows: Any, bank: str) -> Record:
    if isinstance(rows, list):
        for row in rows:
            if isinstance(row, Mapping) and row.get('bank') == bank:
                return row
    return {}


def mapping_rows(rows: Any) -> list[Record]:
    if not isinstance(rows, list):
        return []
    return [row for row in rows if isinstance(row, Mapping)]


def humanize(key: str) -> str:
    return ' '.join(part.capitalize() for part in key.split('_'))


def basic_information(record: Record, date_label: str | None = None, date_key: str | None = None) -> list[Element]:
    """Reporting person and customer block common to the pump reports."""
    r = record.get
    fields = [
        Field('Reporting Person', r('reporting_person_name')),
        Field('Contact Number', r('reporting_person_contact')),
        Field('Equipment Manufacturer', r('equipment_manufacturer')),
    ]
    if date_label and date_key:
        fields.append(Field(date_label, format_date(r(date_key))))
    fields += [
        Field('Customer', r('customer'), span=2),
        Field('Contact Person', r('contact_person')),
        Field('Email/Contact', r('email_or_contact')),
        Field('Address', r('address'), span=2),
    ]
    return [SectionHeader('Basic Information'), grid(fields)]


def service_signatures(record: Record, first_title: str, first_prefix: str, second_title: str) -> list[Element]:
    """Technician, supervisor, manager and customer signatures used by the pump reports."""
    r = record.get
    return [
        SectionHeader('Signatures'),
        signatures([
            SignatureEntry(
                'Svc Engineer/Technician',
                first_title,
                r(f'{first_prefix}_name'),
                r(f'{first_prefix}_signature'),
            ),
            SignatureEntry(
                'Svc. Supvr. / Supt.',
                second_title,
                r('checked_approved_by_name'),
                r('checked_approved_by_signature'),
            ),
            SignatureEntry('Svc. Manager', 'Noted By', r('noted_by_name'), r('noted_by_signature')),
            SignatureEntry(
                'Customer Representative',
                'Acknowledged By',
                r('acknowledged_by_name'),
                r('acknowledged_by_signature'),
            ),
        ]),
    ]


def two_column_table(headers: tuple[str, str], rows: Sequence[tuple[Any, Any]], first_width: float = 60.0) -> Table:
    return Table(headers=headers, rows=tuple(rows), column_widths=(first_width, 180.0 - first_width))
