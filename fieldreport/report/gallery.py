"""Image-bearing elements: the two-up attachment gallery and the signature row."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping

from fieldreport.adapters.images import FetchedImage, ImageResult
from fieldreport.errors import ImageDecodeError
from fieldreport.report.elements import Attachment, ImageGallery, SignatureBlock, SignatureEntry
from fieldreport.report.formatting import display_value
from fieldreport.report.geometry import BORDER_GRAY, LIGHT_GRAY, TEXT_GRAY
from fieldreport.report.page import LoadedImage, PageCanvas
from fieldreport.report.text_metrics import clip_lines, line_height_mm, wrap_text


logger = logging.getLogger(__name__)

SIGNATURE_IMAGE_HEIGHT = 20.0
SIGNATURE_NAME_OFFSET = 32.0
SIGNATURE_LABEL_OFFSET = 38.0


@dataclass
class ImageStats:
    embedded: int = 0
    skipped: int = 0


def _load(
    page: PageCanvas,
    url: str | None,
    images: Mapping[str, ImageResult],
    stats: ImageStats,
    *,
    kind: str,
) -> LoadedImage | None:
    """Decoded image for ``url`` or None; every failure is logged and counted, never raised."""
    key = str(url or '').strip()
    if not key:
        return None
    result = images.get(key)
    if result is None:
        logger.warning('No prefetched %s image for %s', kind, key[:120])
        stats.skipped += 1
        return None
    if not isinstance(result, FetchedImage):
        logger.warning('Skipping %s image %s: %s', kind, key[:120], result.reason)
        stats.skipped += 1
        return None
    try:
        return page.load_image(result.data, result.format)
    except ImageDecodeError as exc:
        logger.warning('Skipping %s image %s: %s', kind, key[:120], exc)
        stats.skipped += 1
        return None


def _draw_attachment(
    page: PageCanvas,
    attachment: Attachment,
    x: float,
    images: Mapping[str, ImageResult],
    stats: ImageStats,
) -> float:
    """Draw one gallery slot at the cursor; returns its height, 0 when the slot stays blank."""
    loaded = _load(page, attachment.remote_url, images, stats, kind='attachment')
    if loaded is None:
        return 0.0

    cfg = page.config
    top = page.cursor
    slot_width = cfg.gallery_slot_width
    box_height = cfg.gallery_box_height
    image_height = cfg.gallery_image_height - 4

    page.rect(x, top, slot_width, box_height, stroke=BORDER_GRAY, line_width=0.3)
    # Fixed box regardless of source aspect ratio.
    page.image(loaded, x + 2, top + 2, slot_width - 4, image_height)
    stats.embedded += 1

    caption = str(attachment.display_name or '').strip()
    if caption:
        band_top = top + image_height + 2
        page.rect(x, band_top, slot_width, cfg.gallery_caption_height - 2, fill=LIGHT_GRAY)
        lines = wrap_text(caption, slot_width - 4, cfg.caption_font_size, page.fonts.bold)
        page.text(lines[0], x + 2, band_top + 6, font_size=cfg.caption_font_size, bold=True)
    return box_height


def render_gallery(
    page: PageCanvas,
    element: ImageGallery,
    images: Mapping[str, ImageResult],
    stats: ImageStats,
) -> None:
    cfg = page.config
    attachments = [item for item in element.attachments if str(item.remote_url or '').strip()]
    if not attachments:
        return

    for start in range(0, len(attachments), 2):
        page.ensure_space(cfg.gallery_box_height)
        row_height = 0.0
        for column, attachment in enumerate(attachments[start : start + 2]):
            x = page.left + column * (cfg.gallery_slot_width + cfg.gallery_gap)
            row_height = max(row_height, _draw_attachment(page, attachment, x, images, stats))
        page.advance(row_height + cfg.gallery_gap)
    page.advance(cfg.block_gap)


def render_signatures(
    page: PageCanvas,
    element: SignatureBlock,
    images: Mapping[str, ImageResult],
    stats: ImageStats,
) -> None:
    """Bordered bands of equal-width signature columns; a band is never split.

    Entries that do not fit one band at the minimum column width wrap onto
    further bands.
    """
    entries = element.entries
    if not entries:
        return
    titled = any(str(entry.title or '').strip() for entry in entries)
    per_band = page.config.signatures_per_band
    for start in range(0, len(entries), per_band):
        _draw_signature_band(page, entries[start : start + per_band], titled, images, stats)


def _draw_signature_band(
    page: PageCanvas,
    entries: tuple[SignatureEntry, ...],
    titled: bool,
    images: Mapping[str, ImageResult],
    stats: ImageStats,
) -> None:
    cfg = page.config
    shift = cfg.signature_title_extra if titled else 0.0
    band_height = cfg.signature_band_height + shift
    page.ensure_space(band_height)

    top = page.cursor
    count = len(entries)
    gap = cfg.signature_gap
    column_width = min((page.content_width - 2 * gap) / count, cfg.signature_max_column_width)
    box_width = max(column_width - gap, 1.0)
    group_width = count * column_width - gap
    start_x = page.left + max((page.content_width - group_width) / 2, 0.0)
    name_leading = line_height_mm(cfg.value_font_size)

    page.rect(page.left, top, page.content_width, band_height, fill=LIGHT_GRAY, stroke=BORDER_GRAY)

    for index, entry in enumerate(entries):
        x = start_x + index * column_width
        center = x + box_width / 2

        if titled and entry.title:
            title = wrap_text(entry.title.upper(), box_width, cfg.label_font_size, page.fonts.bold)[0]
            page.text(title, center, top + 4, font_size=cfg.label_font_size, bold=True, align='center')

        box_top = top + 2 + shift
        page.rect(x, box_top, box_width, cfg.signature_box_height, stroke=BORDER_GRAY, line_width=0.3)

        loaded = _load(page, entry.image_url, images, stats, kind='signature')
        if loaded is not None:
            if box_width > 4:
                page.image(loaded, x + 2, box_top + 2, box_width - 4, SIGNATURE_IMAGE_HEIGHT)
                stats.embedded += 1
            else:
                logger.warning('Signature column too narrow for image: %s', entry.image_url)
                stats.skipped += 1

        name_lines = wrap_text(
            display_value(entry.person_name),
            max(box_width - 3, 1.0),
            cfg.value_font_size,
            page.fonts.bold,
        )
        label_baseline = top + SIGNATURE_LABEL_OFFSET + shift
        name_lines = clip_lines(
            name_lines,
            first_baseline=top + SIGNATURE_NAME_OFFSET + shift,
            line_height=name_leading,
            font_size=cfg.value_font_size,
            bottom=label_baseline - 1,
        )
        page.text(
            name_lines,
            center,
            top + SIGNATURE_NAME_OFFSET + shift,
            font_size=cfg.value_font_size,
            bold=True,
            align='center',
        )
        page.text(
            entry.role_label,
            center,
            label_baseline,
            font_size=cfg.label_font_size,
            color=TEXT_GRAY,
            align='center',
        )

    page.advance(band_height + cfg.block_gap)
