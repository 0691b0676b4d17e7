from __future__ import annotations

from fieldreport.adapters.images import ImageFetchConfig, ImageFetcher
from fieldreport.adapters.store import StoreConfig, SupabaseStore
from fieldreport.config import Settings


def build_store(settings: Settings) -> SupabaseStore:
    return SupabaseStore(
        StoreConfig(
            base_url=settings.supabase_url,
            api_key=settings.supabase_service_key,
            timeout_seconds=settings.store_timeout_seconds,
        )
    )


def build_fetcher(settings: Settings) -> ImageFetcher:
    return ImageFetcher(
        ImageFetchConfig(
            timeout_seconds=settings.image_fetch_timeout_seconds,
            max_workers=settings.image_fetch_max_workers,
            max_bytes=settings.image_max_bytes,
        )
    )
