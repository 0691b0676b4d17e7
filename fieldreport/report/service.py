from __future__ import annotations

import logging
import time

from fieldreport.adapters.images import ImageFetcher
from fieldreport.adapters.store import MemoryStore, SupabaseStore
from fieldreport.config import Settings
from fieldreport.errors import RecordNotFoundError
from fieldreport.report.assembler import DocumentAssembler
from fieldreport.report.elements import iter_image_urls
from fieldreport.report.forms import get_form
from fieldreport.report.text_metrics import resolve_fonts
from fieldreport.types import RenderedReport


logger = logging.getLogger(__name__)

ReportStore = SupabaseStore | MemoryStore


def generate_report(
    form_slug: str,
    record_id: str,
    *,
    store: ReportStore,
    fetcher: ImageFetcher,
    settings: Settings,
) -> RenderedReport:
    """Load one record, prefetch its images and lay out the PDF.

    Raises ValueError for a blank id, plus UnknownFormError,
    RecordNotFoundError and StoreError. Image problems never escape; they
    only leave blank slots.
    """
    started = time.monotonic()
    form = get_form(form_slug)
    record_id = str(record_id or '').strip()
    if not record_id:
        raise ValueError('Record ID is required')

    record = store.fetch_record(form.table, record_id, select=form.select)
    if form.soft_delete and record.get('deleted_at'):
        raise RecordNotFoundError('Record not found', f'{form.table}/{record_id}')
    attachments: list[dict] = []
    if form.attachments_table and form.attachments_fk:
        attachments = store.list_rows(form.attachments_table, filters={form.attachments_fk: record_id})

    elements = form.build(record, attachments, settings)
    images = fetcher.prefetch(iter_image_urls(elements))

    assembler = DocumentAssembler(
        settings.layout_config(),
        images=images,
        title=form.title,
        fonts=resolve_fonts(settings.pdf_font_path, settings.pdf_bold_font_path),
    )
    result = assembler.render(elements)

    report = RenderedReport(
        form_slug=form.slug,
        record_id=record_id,
        filename=form.filename(record, record_id),
        content=result.content,
        page_count=result.page_count,
        images_embedded=result.images_embedded,
        images_skipped=result.images_skipped,
    )
    logger.info(
        'Rendered %s/%s: %d pages, %d bytes, images embedded=%d skipped=%d (%.2fs)',
        form.slug,
        record_id,
        report.page_count,
        report.size_bytes,
        report.images_embedded,
        report.images_skipped,
        time.monotonic() - started,
    )
    return report
