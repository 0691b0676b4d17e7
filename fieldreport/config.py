from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from fieldreport.report.geometry import LayoutConfig


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore',
    )

    app_name: str = 'Field Service Report Generator'

    # Relational store (PostgREST / Supabase REST)
    supabase_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices('SUPABASE_URL', 'NEXT_PUBLIC_SUPABASE_URL'),
    )
    supabase_service_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices('SUPABASE_SERVICE_ROLE_KEY', 'SUPABASE_SERVICE_KEY'),
    )
    store_timeout_seconds: float = 20.0

    # Attachment / signature image fetch
    image_fetch_timeout_seconds: float = 15.0
    image_fetch_max_workers: int = 4
    image_max_bytes: int = 15 * 1024 * 1024

    # Page geometry, millimetres
    page_width: float = 210.0
    page_height: float = 297.0
    margin_left: float = 15.0
    margin_right: float = 15.0
    margin_top: float = 15.0
    margin_bottom: float = 20.0

    # Optional TTF fonts; built-in Helvetica when unset and no system font is found
    pdf_font_path: str | None = None
    pdf_bold_font_path: str | None = None

    # Letterhead
    company_name: str = 'POWER SYSTEMS, INCORPORATED'
    company_address_lines: list[str] = Field(
        default_factory=lambda: [
            "2nd Floor TOPY's Place #3 Calle Industria cor. Economia Street,",
            'Bagumbayan, Libis, Quezon City',
            'Tel: (+63-2) 687-9275 to 78  |  Fax: (+63-2) 687-9279',
            'Email: sales@psi-deutz.com',
        ]
    )
    company_branches: str = (
        'NAVOTAS • BACOLOD • CEBU • CAGAYAN • DAVAO • GEN SAN • ZAMBOANGA • ILO-ILO • SURIGAO'
    )
    currency_symbol: str = '₱'

    # HTTP server
    server_host: str = '0.0.0.0'
    server_port: int = 8010
    cors_origins: str = '*'
    log_level: str = 'INFO'

    @property
    def store_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_service_key)

    def cors_origin_list(self) -> list[str]:
        origins: list[str] = []
        for item in self.cors_origins.split(','):
            normalized = item.strip()
            if not normalized:
                continue
            origins.append(normalized)
        return origins or ['*']

    def layout_config(self) -> LayoutConfig:
        return LayoutConfig(
            page_width=self.page_width,
            page_height=self.page_height,
            margin_left=self.margin_left,
            margin_right=self.margin_right,
            margin_top=self.margin_top,
            margin_bottom=self.margin_bottom,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
