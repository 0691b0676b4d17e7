from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Mapping

from fieldreport.adapters.images import ImageResult
from fieldreport.errors import LayoutError
from fieldreport.report.blocks import (
    render_checkbox_grid,
    render_letterhead,
    render_section_header,
    render_table,
    render_text_block,
)
from fieldreport.report.elements import (
    CheckboxGrid,
    Element,
    FieldGrid,
    ImageGallery,
    Letterhead,
    SectionHeader,
    SignatureBlock,
    Table,
    TextBlock,
)
from fieldreport.report.field_grid import render_field_grid
from fieldreport.report.gallery import ImageStats, render_gallery, render_signatures
from fieldreport.report.geometry import LayoutConfig
from fieldreport.report.page import PageCanvas
from fieldreport.report.text_metrics import ReportFonts


logger = logging.getLogger(__name__)


class AssemblerState(str, Enum):
    awaiting_section = 'awaiting_section'
    in_section_body = 'in_section_body'
    done = 'done'


@dataclass(frozen=True)
class AssemblyResult:
    content: bytes
    page_count: int
    images_embedded: int
    images_skipped: int


class DocumentAssembler:
    """Feeds elements onto a PageCanvas in order and tracks the section state.

    A section header opens a section body. Body elements (grids, text
    blocks, checkbox grids, tables, galleries) need an open section. A
    signature block closes the current section. ``finish`` serializes the
    document; nothing can be added afterwards.
    """

    def __init__(
        self,
        config: LayoutConfig,
        *,
        images: Mapping[str, ImageResult] | None = None,
        title: str = '',
        fonts: ReportFonts | None = None,
        footer: bool = True,
    ):
        self.config = config
        self.images: Mapping[str, ImageResult] = images or {}
        self.page = PageCanvas(config, title=title, fonts=fonts, footer=footer)
        self.stats = ImageStats()
        self.state = AssemblerState.awaiting_section
        self._result: AssemblyResult | None = None

    def add(self, element: Element) -> None:
        if self.state is AssemblerState.done:
            raise LayoutError('document is already finished', type(element).__name__)

        if isinstance(element, Letterhead):
            if self.state is not AssemblerState.awaiting_section:
                raise LayoutError('letterhead must come before any section body')
            render_letterhead(self.page, element)
        elif isinstance(element, SectionHeader):
            render_section_header(self.page, element)
            self.state = AssemblerState.in_section_body
        elif isinstance(element, SignatureBlock):
            self._require_section(element)
            render_signatures(self.page, element, self.images, self.stats)
            self.state = AssemblerState.awaiting_section
        elif isinstance(element, FieldGrid):
            self._require_section(element)
            render_field_grid(self.page, element)
        elif isinstance(element, TextBlock):
            self._require_section(element)
            render_text_block(self.page, element)
        elif isinstance(element, CheckboxGrid):
            self._require_section(element)
            render_checkbox_grid(self.page, element)
        elif isinstance(element, Table):
            self._require_section(element)
            render_table(self.page, element)
        elif isinstance(element, ImageGallery):
            self._require_section(element)
            render_gallery(self.page, element, self.images, self.stats)
        else:
            raise LayoutError('unsupported layout element', type(element).__name__)

    def _require_section(self, element: Element) -> None:
        if self.state is not AssemblerState.in_section_body:
            raise LayoutError(f'{type(element).__name__} must follow a section header')

    def finish(self) -> AssemblyResult:
        if self._result is not None:
            return self._result
        content = self.page.finish()
        self.state = AssemblerState.done
        self._result = AssemblyResult(
            content=content,
            page_count=self.page.page_count,
            images_embedded=self.stats.embedded,
            images_skipped=self.stats.skipped,
        )
        return self._result

    def render(self, elements: Iterable[Element]) -> AssemblyResult:
        for element in elements:
            self.add(element)
        return self.finish()
