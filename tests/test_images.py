"""Tests for image format sniffing and the prefetch stage."""

from __future__ import annotations

import base64

import httpx
import pytest

from fieldreport.adapters.images import (
    FetchedImage,
    FetchFailure,
    ImageFetchConfig,
    ImageFetcher,
    sniff_image_format,
)
from fieldreport.errors import ImageFetchError

BASE = 'https://files.test'


class TestSniffImageFormat:
    @pytest.mark.parametrize(
        'url, content_type, expected',
        [
            ('https://x.test/a/photo.png', 'image/jpeg', 'PNG'),
            ('https://x.test/a/photo.PNG', None, 'PNG'),
            ('https://x.test/a/anim.gif', None, 'GIF'),
            ('https://x.test/a/pic.webp', None, 'WEBP'),
            ('https://x.test/a/pic.jpeg', 'image/png', 'JPEG'),
            ('https://x.test/a/blob', 'image/png', 'PNG'),
            ('https://x.test/a/blob', 'image/webp; charset=binary', 'WEBP'),
            ('https://x.test/a/blob', 'application/octet-stream', 'JPEG'),
            ('https://x.test/a/blob', None, 'JPEG'),
        ],
    )
    def test_extension_then_content_type_then_jpeg(self, url, content_type, expected):
        assert sniff_image_format(url, content_type) == expected

    def test_query_string_is_ignored(self):
        assert sniff_image_format('https://x.test/object/sign/abc?token=x.png', 'image/gif') == 'GIF'
        assert sniff_image_format('https://x.test/photo.jpg?download=file.png') == 'JPEG'


class TestImageFetcher:
    def test_fetch_reports_format_from_url(self, fetcher, png_bytes):
        image = fetcher.fetch(f'{BASE}/photos/one.png')
        assert image == FetchedImage(url=f'{BASE}/photos/one.png', data=png_bytes, format='PNG')

    def test_fetch_uses_content_type_without_extension(self, fetcher):
        assert fetcher.fetch(f'{BASE}/photos/no-extension').format == 'PNG'

    def test_http_error_raises(self, fetcher):
        with pytest.raises(ImageFetchError) as excinfo:
            fetcher.fetch(f'{BASE}/photos/missing.png')
        assert 'HTTP 404' in str(excinfo.value)

    def test_transport_error_raises(self, fetcher):
        with pytest.raises(ImageFetchError):
            fetcher.fetch(f'{BASE}/photos/unreachable.png')

    def test_timeout_raises(self):
        def handler(request):
            raise httpx.ReadTimeout('slow', request=request)

        fetcher = ImageFetcher(
            ImageFetchConfig(timeout_seconds=1, max_workers=1, max_bytes=1000),
            transport=httpx.MockTransport(handler),
        )
        with pytest.raises(ImageFetchError) as excinfo:
            fetcher.fetch(f'{BASE}/slow.png')
        assert excinfo.value.message == 'timed out'

    def test_oversize_body_raises(self, image_transport):
        fetcher = ImageFetcher(ImageFetchConfig(timeout_seconds=5, max_workers=1, max_bytes=10), transport=image_transport)
        with pytest.raises(ImageFetchError):
            fetcher.fetch(f'{BASE}/photos/one.png')

    def test_empty_body_raises(self):
        fetcher = ImageFetcher(
            ImageFetchConfig(timeout_seconds=1, max_workers=1, max_bytes=1000),
            transport=httpx.MockTransport(lambda request: httpx.Response(200, content=b'')),
        )
        with pytest.raises(ImageFetchError):
            fetcher.fetch(f'{BASE}/empty.png')

    def test_data_url_is_decoded_locally(self, fetcher, jpeg_bytes):
        url = 'data:image/jpeg;base64,' + base64.b64encode(jpeg_bytes).decode('ascii')
        image = fetcher.fetch(url)
        assert image.data == jpeg_bytes
        assert image.format == 'JPEG'

    def test_prefetch_covers_every_url_once(self, fetcher):
        urls = [
            f'{BASE}/photos/one.png',
            f'{BASE}/photos/missing.png',
            f'{BASE}/photos/one.png',
            '',
            f'{BASE}/photos/two.jpg',
        ]
        results = fetcher.prefetch(urls)

        assert list(results) == [f'{BASE}/photos/one.png', f'{BASE}/photos/missing.png', f'{BASE}/photos/two.jpg']
        assert isinstance(results[f'{BASE}/photos/one.png'], FetchedImage)
        failure = results[f'{BASE}/photos/missing.png']
        assert isinstance(failure, FetchFailure)
        assert failure.reason == 'HTTP 404'

    def test_prefetch_of_nothing(self, fetcher):
        assert fetcher.prefetch([]) == {}
