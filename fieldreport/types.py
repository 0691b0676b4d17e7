from __future__ import annotations

from pydantic import BaseModel, Field


class RenderedReport(BaseModel):
    form_slug: str
    record_id: str
    filename: str
    content: bytes = Field(repr=False)
    page_count: int
    images_embedded: int = 0
    images_skipped: int = 0

    @property
    def size_bytes(self) -> int:
        return len(self.content)


class FormSummary(BaseModel):
    slug: str
    title: str
    table: str
    attachments_table: str | None = None
