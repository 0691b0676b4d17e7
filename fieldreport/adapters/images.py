from __future__ import annotations

import base64
import binascii
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterable
from urllib.parse import unquote_to_bytes, urlsplit

import httpx

from fieldreport.errors import ImageFetchError


logger = logging.getLogger(__name__)

# Checked in order against the URL path; the first hit wins.
IMAGE_EXTENSIONS: tuple[tuple[str, str], ...] = (
    ('.png', 'PNG'),
    ('.gif', 'GIF'),
    ('.webp', 'WEBP'),
    ('.jpg', 'JPEG'),
    ('.jpeg', 'JPEG'),
)

CONTENT_TYPE_FORMATS: tuple[tuple[str, str], ...] = (
    ('png', 'PNG'),
    ('gif', 'GIF'),
    ('webp', 'WEBP'),
    ('jpeg', 'JPEG'),
    ('jpg', 'JPEG'),
)

DEFAULT_IMAGE_FORMAT = 'JPEG'


def sniff_image_format(url: str, content_type: str | None = None) -> str:
    """Image format from the URL path extension, then the content type, else JPEG.

    Only the path is inspected, so ``photo.png?token=.jpg`` is PNG and a
    signed URL without an extension falls through to the content type.
    """
    path = urlsplit(str(url or '')).path.lower() if not str(url or '').startswith('data:') else ''
    for extension, image_format in IMAGE_EXTENSIONS:
        if extension in path:
            return image_format

    declared = str(content_type or '').lower()
    for marker, image_format in CONTENT_TYPE_FORMATS:
        if marker in declared:
            return image_format
    return DEFAULT_IMAGE_FORMAT


@dataclass(frozen=True)
class FetchedImage:
    url: str
    data: bytes
    format: str


@dataclass(frozen=True)
class FetchFailure:
    url: str
    reason: str


ImageResult = FetchedImage | FetchFailure


@dataclass
class ImageFetchConfig:
    timeout_seconds: float
    max_workers: int
    max_bytes: int


def _decode_data_url(url: str) -> FetchedImage:
    header, sep, payload = url.partition(',')
    if not sep:
        raise ImageFetchError('malformed data URL', url[:64])
    meta = header[len('data:') :]
    content_type = meta.split(';', 1)[0]
    try:
        if ';base64' in meta:
            data = base64.b64decode(payload, validate=False)
        else:
            data = unquote_to_bytes(payload)
    except (binascii.Error, ValueError) as exc:
        raise ImageFetchError('malformed data URL', str(exc)) from exc
    if not data:
        raise ImageFetchError('empty data URL')
    return FetchedImage(url=url, data=data, format=sniff_image_format('', content_type))


class ImageFetcher:
    """Downloads attachment and signature images ahead of layout."""

    def __init__(self, cfg: ImageFetchConfig, *, transport: httpx.BaseTransport | None = None):
        self.cfg = cfg
        self._transport = transport

    def _client(self) -> httpx.Client:
        return httpx.Client(
            timeout=max(1.0, float(self.cfg.timeout_seconds)),
            follow_redirects=True,
            transport=self._transport,
        )

    def fetch(self, url: str, *, client: httpx.Client | None = None) -> FetchedImage:
        """Fetch one image; raises ImageFetchError on any failure."""
        url = str(url or '').strip()
        if not url:
            raise ImageFetchError('empty image URL')
        if url.startswith('data:'):
            return _decode_data_url(url)
        if client is None:
            with self._client() as own_client:
                return self._fetch_remote(own_client, url)
        return self._fetch_remote(client, url)

    def _fetch_remote(self, client: httpx.Client, url: str) -> FetchedImage:
        try:
            with client.stream('GET', url) as response:
                if response.status_code >= 400:
                    raise ImageFetchError(f'HTTP {response.status_code}', url)
                chunks: list[bytes] = []
                size = 0
                for chunk in response.iter_bytes():
                    size += len(chunk)
                    if size > self.cfg.max_bytes:
                        raise ImageFetchError(f'image larger than {self.cfg.max_bytes} bytes', url)
                    chunks.append(chunk)
                content_type = response.headers.get('content-type', '')
        except httpx.TimeoutException as exc:
            raise ImageFetchError('timed out', url) from exc
        except httpx.HTTPError as exc:
            raise ImageFetchError(f'transport error: {exc}', url) from exc

        data = b''.join(chunks)
        if not data:
            raise ImageFetchError('empty response body', url)
        return FetchedImage(url=url, data=data, format=sniff_image_format(url, content_type))

    def prefetch(self, urls: Iterable[str]) -> dict[str, ImageResult]:
        """Fetch every distinct URL with bounded concurrency.

        Every requested URL gets an entry; failures are logged and recorded as
        FetchFailure rather than raised.
        """
        unique: list[str] = []
        seen: set[str] = set()
        for url in urls:
            key = str(url or '').strip()
            if not key or key in seen:
                continue
            seen.add(key)
            unique.append(key)

        results: dict[str, ImageResult] = {}
        if not unique:
            return results

        workers = max(1, min(int(self.cfg.max_workers), len(unique)))
        with self._client() as client:

            def run(url: str) -> ImageResult:
                try:
                    return self.fetch(url, client=client)
                except ImageFetchError as exc:
                    logger.warning('Image fetch failed for %s: %s', _short(url), exc.message)
                    return FetchFailure(url=url, reason=exc.message)

            with ThreadPoolExecutor(max_workers=workers) as pool:
                for url, result in zip(unique, pool.map(run, unique)):
                    results[url] = result

        fetched = sum(1 for item in results.values() if isinstance(item, FetchedImage))
        logger.info('Prefetched %d/%d images', fetched, len(results))
        return results


def _short(url: str) -> str:
    if url.startswith('data:'):
        return url[:32] + '...'
    return url
