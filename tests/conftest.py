"""
Pytest configuration for fieldreport
"""

from __future__ import annotations

import io
import logging
import sys

import httpx
import pytest
from PIL import Image

from fieldreport.adapters.images import ImageFetchConfig, ImageFetcher
from fieldreport.adapters.store import MemoryStore
from fieldreport.config import Settings
from fieldreport.report.geometry import LayoutConfig
from fieldreport.report.page import PageCanvas
from fieldreport.report.text_metrics import ReportFonts


@pytest.fixture(autouse=True)
def configure_logging():
    """Console-only logging at WARNING while tests run."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter('%(name)s - %(levelname)s - %(message)s'))
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)
    yield
    root_logger.handlers.clear()


def _encode(mode: str, color, fmt: str) -> bytes:
    buffer = io.BytesIO()
    Image.new(mode, (24, 16), color).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture(scope='session')
def png_bytes() -> bytes:
    return _encode('RGBA', (200, 30, 30, 128), 'PNG')


@pytest.fixture(scope='session')
def jpeg_bytes() -> bytes:
    return _encode('RGB', (30, 30, 200), 'JPEG')


@pytest.fixture
def layout_config() -> LayoutConfig:
    return LayoutConfig()


@pytest.fixture
def fonts() -> ReportFonts:
    # Built-in fonts keep measurements identical on every machine.
    return ReportFonts(regular='Helvetica', bold='Helvetica-Bold')


@pytest.fixture
def page(layout_config, fonts) -> PageCanvas:
    """Real reportlab canvas writing to memory; ``page.ops`` records the geometry."""
    return PageCanvas(layout_config, title='Test Report', fonts=fonts)


@pytest.fixture
def image_routes(png_bytes, jpeg_bytes) -> dict[str, tuple[int, bytes, str]]:
    return {
        '/photos/one.png': (200, png_bytes, 'image/png'),
        '/photos/two.jpg': (200, jpeg_bytes, 'image/jpeg'),
        '/photos/three.png': (200, png_bytes, 'image/png'),
        '/photos/no-extension': (200, png_bytes, 'image/png'),
        '/photos/corrupt.png': (200, b'definitely not an image', 'image/png'),
        '/signatures/tech.png': (200, png_bytes, 'image/png'),
        '/signatures/manager.png': (200, png_bytes, 'image/png'),
    }


@pytest.fixture
def image_transport(image_routes) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == '/photos/unreachable.png':
            raise httpx.ConnectError('connection refused', request=request)
        route = image_routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, content=b'not found')
        status, body, content_type = route
        return httpx.Response(status, content=body, headers={'content-type': content_type})

    return httpx.MockTransport(handler)


@pytest.fixture
def fetcher(image_transport) -> ImageFetcher:
    return ImageFetcher(
        ImageFetchConfig(timeout_seconds=5, max_workers=3, max_bytes=1_000_000),
        transport=image_transport,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore(
        {
            'deutz_commissioning_report': [
                {
                    'id': 'rec-1',
                    'job_order_no': 'JO-2024-001',
                    'commissioning_date': '2024-03-05',
                    'customer_name': 'Acme Water District',
                    'engine_model': 'BF6M1013',
                    'remarks': 'Unit commissioned without issues.',
                    'attending_technician': 'R. Santos',
                    'attending_technician_signature': 'https://files.test/signatures/tech.png',
                    'noted_by': None,
                },
            ],
            'deutz_commission_attachments': [
                {
                    'id': 'a-2',
                    'form_id': 'rec-1',
                    'file_url': 'https://files.test/photos/two.jpg',
                    'file_title': 'Control panel',
                    'created_at': '2024-03-05T10:00:00Z',
                },
                {
                    'id': 'a-1',
                    'form_id': 'rec-1',
                    'file_url': 'https://files.test/photos/one.png',
                    'file_title': 'Engine bay',
                    'created_at': '2024-03-05T09:00:00Z',
                },
                {
                    'id': 'a-9',
                    'form_id': 'other',
                    'file_url': 'https://files.test/photos/three.png',
                    'file_title': 'Unrelated',
                    'created_at': '2024-03-05T08:00:00Z',
                },
            ],
            'deutz_service_report': [{'id': 'svc-1', 'job_order': 'JO 77/B', 'within_coverage_period': True}],
        }
    )


@pytest.fixture
def overflowing_ops():
    """Content draw ops that end below the bottom margin of their page."""

    def collect(page: PageCanvas) -> list:
        limit = page.bottom_limit + 1e-6
        return [op for op in page.content_ops() if op.bottom > limit]

    return collect
