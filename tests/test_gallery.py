"""Tests for the attachment gallery and signature row, including per-image failure isolation."""

from __future__ import annotations

import base64
import math

import pytest

from fieldreport.adapters.images import FetchedImage, FetchFailure
from fieldreport.report.elements import Attachment, SignatureEntry, gallery, signatures
from fieldreport.report.gallery import ImageStats, render_gallery, render_signatures
from fieldreport.report.geometry import LayoutConfig
from fieldreport.report.page import PageCanvas

BASE = 'https://files.test'


def _image_ops(page):
    return [op for op in page.content_ops() if op.kind == 'image']


class TestGallery:
    def test_failed_attachment_leaves_blank_slot(self, page, fetcher, overflowing_ops):
        attachments = [
            Attachment(f'{BASE}/photos/one.png', 'Engine bay'),
            Attachment(f'{BASE}/photos/missing.png', 'Missing'),
            Attachment(f'{BASE}/photos/two.jpg', 'Panel'),
        ]
        images = fetcher.prefetch(item.remote_url for item in attachments)
        stats = ImageStats()

        render_gallery(page, gallery(attachments), images, stats)

        placed = _image_ops(page)
        assert len(placed) == 2
        first, third = placed
        cfg = page.config
        assert first.x == pytest.approx(cfg.margin_left + 2)
        assert third.x == pytest.approx(cfg.margin_left + 2)
        assert third.y == pytest.approx(first.y + cfg.gallery_box_height + cfg.gallery_gap)
        texts = list(page.texts())
        assert 'Engine bay' in texts and 'Panel' in texts
        assert 'Missing' not in texts
        assert (stats.embedded, stats.skipped) == (2, 1)
        assert overflowing_ops(page) == []

    def test_undecodable_image_is_skipped(self, page, fetcher):
        urls = [f'{BASE}/photos/corrupt.png', f'{BASE}/photos/one.png']
        images = fetcher.prefetch(urls)
        assert isinstance(images[urls[0]], FetchedImage)

        stats = ImageStats()
        render_gallery(page, gallery([Attachment(url) for url in urls]), images, stats)

        placed = _image_ops(page)
        assert len(placed) == 1
        assert placed[0].x == pytest.approx(page.config.margin_left + page.config.gallery_slot_width + 7)
        assert stats.skipped == 1

    def test_rows_paginate(self, page, png_bytes, overflowing_ops):
        urls = [f'{BASE}/photos/{n}.png' for n in range(7)]
        images = {url: FetchedImage(url=url, data=png_bytes, format='PNG') for url in urls}

        render_gallery(page, gallery([Attachment(url, f'Photo {n}') for n, url in enumerate(urls)]), images, ImageStats())

        placed = _image_ops(page)
        assert len(placed) == 7
        assert page.page_count == 2
        # Both slots of a row always land on the same page.
        for left, right in zip(placed[0::2], placed[1::2]):
            assert left.page == right.page and left.y == right.y
        assert overflowing_ops(page) == []

    def test_image_missing_from_prefetch_map_is_skipped(self, page):
        stats = ImageStats()
        render_gallery(page, gallery([Attachment(f'{BASE}/never-fetched.png')]), {}, stats)
        assert _image_ops(page) == []
        assert stats.skipped == 1


class TestSignatures:
    def test_four_entries_two_with_images(self, page, fetcher):
        entries = [
            SignatureEntry('Attending Technician', None, 'R. Santos', f'{BASE}/signatures/tech.png'),
            SignatureEntry('Noted By', None, None, None),
            SignatureEntry('Approved By', None, 'M. Cruz', f'{BASE}/signatures/manager.png'),
            SignatureEntry('Acknowledged By', None, '', None),
        ]
        images = fetcher.prefetch(entry.image_url for entry in entries if entry.image_url)
        stats = ImageStats()

        render_signatures(page, signatures(entries), images, stats)

        cfg = page.config
        placeholders = [
            op for op in page.content_ops()
            if op.kind == 'rect' and op.height == pytest.approx(cfg.signature_box_height)
        ]
        assert len(placeholders) == 4
        assert len(_image_ops(page)) == 2
        texts = list(page.texts())
        for label in ('Attending Technician', 'Noted By', 'Approved By', 'Acknowledged By'):
            assert label in texts
        assert 'R. Santos' in texts and 'M. Cruz' in texts
        assert texts.count('-') == 2
        assert stats.embedded == 2

    def test_failed_signature_image_does_not_abort(self, page, fetcher):
        entries = [
            SignatureEntry('Verified By', None, 'A. Reyes', f'{BASE}/photos/unreachable.png'),
            SignatureEntry('Approved By', None, 'B. Lim', f'{BASE}/signatures/tech.png'),
        ]
        images = fetcher.prefetch(entry.image_url for entry in entries)
        assert isinstance(images[entries[0].image_url], FetchFailure)

        render_signatures(page, signatures(entries), images, ImageStats())

        assert len(_image_ops(page)) == 1
        assert 'A. Reyes' in page.texts()

    def test_band_moves_to_new_page_whole(self, page):
        page.cursor = page.config.bottom_limit - 30
        render_signatures(page, signatures([SignatureEntry('Approved By')]), {}, ImageStats())
        assert {op.page for op in page.content_ops()} == {1}

    def test_titles_widen_the_band(self, page):
        render_signatures(
            page,
            signatures([SignatureEntry('Department Head', 'Approved By', 'J. Dela Cruz')]),
            {},
            ImageStats(),
        )
        cfg = page.config
        band = page.content_ops()[0]
        assert band.height == pytest.approx(cfg.signature_band_height + cfg.signature_title_extra)
        assert 'APPROVED BY' in page.texts()

    def test_inline_data_url_signature(self, page, fetcher, png_bytes):
        url = 'data:image/png;base64,' + base64.b64encode(png_bytes).decode('ascii')
        images = fetcher.prefetch([url])
        render_signatures(page, signatures([SignatureEntry('Performed By', None, 'T. Go', url)]), images, ImageStats())
        assert len(_image_ops(page)) == 1

    def test_many_entries_wrap_onto_extra_bands(self, page):
        cfg = page.config
        entries = [SignatureEntry(f'Witness {n}', None, f'Person {n}') for n in range(30)]

        render_signatures(page, signatures(entries), {}, ImageStats())

        ops = page.content_ops()
        boxes = [op for op in ops if op.kind == 'rect' and op.height == pytest.approx(cfg.signature_box_height)]
        bands = [op for op in ops if op.kind == 'rect' and op.height == pytest.approx(cfg.signature_band_height)]
        assert len(boxes) == 30
        assert min(op.width for op in boxes) >= cfg.signature_min_column_width - cfg.signature_gap
        assert len(bands) == math.ceil(30 / cfg.signatures_per_band)
        assert all(op.bottom <= cfg.bottom_limit + 1e-6 for op in ops)
        assert 'Witness 29' in page.texts()

    def test_narrow_page_keeps_positive_box_width(self, fonts, png_bytes):
        narrow = PageCanvas(LayoutConfig(page_width=20.0, margin_left=5.0, margin_right=5.0), fonts=fonts)
        url = f'{BASE}/signatures/tech.png'
        images = {url: FetchedImage(url=url, data=png_bytes, format='PNG')}
        stats = ImageStats()

        render_signatures(narrow, signatures([SignatureEntry('Approved By', None, 'A', url)]), images, stats)

        boxes = [op for op in narrow.content_ops() if op.kind == 'rect' and op.height == pytest.approx(25.0)]
        assert boxes and all(op.width > 0 for op in boxes)
        assert _image_ops(narrow) == []
        assert stats.skipped == 1
