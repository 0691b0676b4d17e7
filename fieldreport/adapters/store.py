from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

import httpx

from fieldreport.errors import RecordNotFoundError, StoreError


logger = logging.getLogger(__name__)


@dataclass
class StoreConfig:
    base_url: str | None
    api_key: str | None
    timeout_seconds: float


class SupabaseStore:
    """Read-only PostgREST client for report records and their attachment rows."""

    def __init__(self, cfg: StoreConfig, *, transport: httpx.BaseTransport | None = None):
        self.cfg = cfg
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.cfg.base_url and self.cfg.api_key)

    def _headers(self) -> dict[str, str]:
        api_key = str(self.cfg.api_key or '').strip()
        headers = {'Accept': 'application/json'}
        if api_key:
            headers['apikey'] = api_key
            headers['Authorization'] = f'Bearer {api_key}'
        return headers

    def _get(self, table: str, params: dict[str, str]) -> httpx.Response:
        if not self.configured:
            raise StoreError('data store is not configured', 'set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY')
        base_url = self.cfg.base_url or ''

        url = f"{base_url.rstrip('/')}/rest/v1/{table}"
        try:
            with httpx.Client(timeout=max(1.0, float(self.cfg.timeout_seconds)), transport=self._transport) as client:
                return client.get(url, headers=self._headers(), params=params)
        except httpx.HTTPError as exc:
            raise StoreError(f'request to {table} failed', str(exc)) from exc

    def fetch_record(self, table: str, record_id: str, *, select: str = '*') -> dict[str, Any]:
        response = self._get(table, {'select': select, 'id': f'eq.{record_id}', 'limit': '1'})
        # PostgREST answers 400 for ids that do not parse as the column type.
        if response.status_code in (400, 404):
            raise RecordNotFoundError('Record not found', f'{table}/{record_id}')
        if response.status_code >= 400:
            raise StoreError(f'{table} lookup failed with HTTP {response.status_code}', response.text[:300])

        rows = _json_rows(response, table)
        if not rows:
            raise RecordNotFoundError('Record not found', f'{table}/{record_id}')
        return rows[0]

    def list_rows(
        self,
        table: str,
        *,
        filters: Mapping[str, Any],
        order: str | None = 'created_at.asc',
    ) -> list[dict[str, Any]]:
        params = {'select': '*'}
        for column, value in filters.items():
            params[column] = f'eq.{value}'
        if order:
            params['order'] = order
        response = self._get(table, params)
        if response.status_code >= 400:
            raise StoreError(f'{table} query failed with HTTP {response.status_code}', response.text[:300])
        return _json_rows(response, table)


def _json_rows(response: httpx.Response, table: str) -> list[dict[str, Any]]:
    try:
        data = response.json()
    except ValueError as exc:
        raise StoreError(f'{table} returned invalid JSON', str(exc)) from exc
    if not isinstance(data, list):
        raise StoreError(f'{table} returned an unexpected payload', type(data).__name__)
    return [row for row in data if isinstance(row, dict)]


class MemoryStore:
    """Dict-backed store with the same read interface, for tests and local rendering."""

    def __init__(self, tables: Mapping[str, list[dict[str, Any]]] | None = None):
        self.tables: dict[str, list[dict[str, Any]]] = {name: list(rows) for name, rows in (tables or {}).items()}

    @property
    def configured(self) -> bool:
        return True

    def fetch_record(self, table: str, record_id: str, *, select: str = '*') -> dict[str, Any]:
        for row in self.tables.get(table, []):
            if str(row.get('id')) == str(record_id):
                return dict(row)
        raise RecordNotFoundError('Record not found', f'{table}/{record_id}')

    def list_rows(
        self,
        table: str,
        *,
        filters: Mapping[str, Any],
        order: str | None = 'created_at.asc',
    ) -> list[dict[str, Any]]:
        rows = [
            dict(row)
            for row in self.tables.get(table, [])
            if all(str(row.get(column)) == str(value) for column, value in filters.items())
        ]
        if order:
            column, _, direction = order.partition('.')
            rows.sort(key=lambda row: str(row.get(column) or ''), reverse=direction == 'desc')
        return rows
