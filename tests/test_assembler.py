"""Tests for the document assembler state machine and whole-document layout."""

from __future__ import annotations

import pytest

from fieldreport.errors import LayoutError
from fieldreport.report.assembler import AssemblerState, DocumentAssembler
from fieldreport.report.elements import (
    Attachment,
    CheckboxItem,
    Field,
    Letterhead,
    SectionHeader,
    SignatureEntry,
    Table,
    TextBlock,
    checkboxes,
    gallery,
    grid,
    iter_image_urls,
    signatures,
)

BASE = 'https://files.test'


def _document():
    return [
        Letterhead(title='Deutz Commissioning Report', company_name='ACME POWER', address_lines=('Somewhere',)),
        SectionHeader('General Information'),
        grid([Field(f'Field {n}', f'value {n}', span=2 if n % 5 == 0 else 1) for n in range(40)]),
        TextBlock('Remarks', 'Long remark. ' * 80),
        SectionHeader('Checks'),
        checkboxes([CheckboxItem(f'Check {n}', n % 2 == 0) for n in range(12)]),
        Table(headers=('A', 'B'), rows=tuple((str(n), str(n * 2)) for n in range(30))),
        SectionHeader('Image Attachments'),
        gallery([
            Attachment(f'{BASE}/photos/one.png', 'One'),
            Attachment(f'{BASE}/photos/missing.png', 'Missing'),
            Attachment(f'{BASE}/photos/two.jpg', 'Two'),
            Attachment(f'{BASE}/photos/three.png', 'Three'),
        ]),
        SectionHeader('Signatures'),
        signatures([
            SignatureEntry('Attending Technician', None, 'R. Santos', f'{BASE}/signatures/tech.png'),
            SignatureEntry('Noted By'),
            SignatureEntry('Approved By', None, 'M. Cruz', f'{BASE}/signatures/manager.png'),
            SignatureEntry('Acknowledged By'),
        ]),
    ]


class TestDocumentAssembler:
    def test_full_document_respects_bottom_margin(self, layout_config, fonts, fetcher, overflowing_ops):
        elements = _document()
        images = fetcher.prefetch(iter_image_urls(elements))
        assembler = DocumentAssembler(layout_config, images=images, title='Test', fonts=fonts)

        result = assembler.render(elements)

        assert result.content.startswith(b'%PDF')
        assert result.page_count >= 2
        assert result.page_count == assembler.page.page_count
        assert (result.images_embedded, result.images_skipped) == (5, 1)
        assert overflowing_ops(assembler.page) == []
        assert assembler.state is AssemblerState.done

    def test_every_break_resets_cursor_to_top_margin(self, layout_config, fonts, fetcher):
        elements = _document()
        assembler = DocumentAssembler(layout_config, images=fetcher.prefetch(iter_image_urls(elements)), fonts=fonts)
        assembler.render(elements)

        for index in range(1, assembler.page.page_count):
            ops = assembler.page.ops_on_page(index)
            assert ops
            assert min(op.y for op in ops if not op.chrome) >= layout_config.margin_top - 3

    def test_body_element_before_section_raises(self, layout_config, fonts):
        assembler = DocumentAssembler(layout_config, fonts=fonts)
        with pytest.raises(LayoutError):
            assembler.add(grid([Field('A', 'B')]))

    def test_signature_closes_section(self, layout_config, fonts):
        assembler = DocumentAssembler(layout_config, fonts=fonts)
        assembler.add(SectionHeader('Request and Approval'))
        assembler.add(signatures([SignatureEntry('Requested By')]))
        assert assembler.state is AssemblerState.awaiting_section

        with pytest.raises(LayoutError):
            assembler.add(TextBlock('Remarks', 'x'))

        assembler.add(SectionHeader('Remarks'))
        assembler.add(TextBlock('Remarks', 'x'))
        assert assembler.state is AssemblerState.in_section_body

    def test_nothing_can_follow_finish(self, layout_config, fonts):
        assembler = DocumentAssembler(layout_config, fonts=fonts)
        assembler.add(SectionHeader('Only'))
        first = assembler.finish()
        assert assembler.finish() is first
        with pytest.raises(LayoutError):
            assembler.add(SectionHeader('Late'))

    def test_letterhead_only_before_a_section_body(self, layout_config, fonts):
        assembler = DocumentAssembler(layout_config, fonts=fonts)
        assembler.add(SectionHeader('First'))
        with pytest.raises(LayoutError):
            assembler.add(Letterhead(title='Late', company_name='ACME'))

    def test_unknown_element_raises(self, layout_config, fonts):
        assembler = DocumentAssembler(layout_config, fonts=fonts)
        with pytest.raises(LayoutError):
            assembler.add('not an element')
