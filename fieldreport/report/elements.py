"""Immutable building blocks a report definition hands to the assembler."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Sequence


@dataclass(frozen=True)
class Field:
    label: str
    value: Any = None
    span: int = 1

    @property
    def full_width(self) -> bool:
        return self.span >= 2


@dataclass(frozen=True)
class Attachment:
    remote_url: str
    display_name: str | None = None


@dataclass(frozen=True)
class SignatureEntry:
    role_label: str
    title: str | None = None
    person_name: str | None = None
    image_url: str | None = None


@dataclass(frozen=True)
class CheckboxItem:
    label: str
    checked: bool = False


@dataclass(frozen=True)
class Letterhead:
    title: str
    company_name: str
    address_lines: tuple[str, ...] = ()
    branches: str = ''
    subtitle: str | None = None


@dataclass(frozen=True)
class SectionHeader:
    title: str
    subtitle: str | None = None


@dataclass(frozen=True)
class FieldGrid:
    fields: tuple[Field, ...]
    columns: int = 2


@dataclass(frozen=True)
class TextBlock:
    label: str
    value: Any = None


@dataclass(frozen=True)
class CheckboxGrid:
    items: tuple[CheckboxItem, ...]
    columns: int = 3


@dataclass(frozen=True)
class Table:
    headers: tuple[str, ...]
    rows: tuple[tuple[Any, ...], ...]
    column_widths: tuple[float, ...] | None = None


@dataclass(frozen=True)
class ImageGallery:
    attachments: tuple[Attachment, ...]


@dataclass(frozen=True)
class SignatureBlock:
    entries: tuple[SignatureEntry, ...]


Element = Letterhead | SectionHeader | FieldGrid | TextBlock | CheckboxGrid | Table | ImageGallery | SignatureBlock


def grid(fields: Sequence[Field], columns: int = 2) -> FieldGrid:
    return FieldGrid(fields=tuple(fields), columns=columns)


def checkboxes(items: Sequence[CheckboxItem], columns: int = 3) -> CheckboxGrid:
    return CheckboxGrid(items=tuple(items), columns=columns)


def gallery(attachments: Sequence[Attachment]) -> ImageGallery:
    return ImageGallery(attachments=tuple(attachments))


def signatures(entries: Sequence[SignatureEntry]) -> SignatureBlock:
    return SignatureBlock(entries=tuple(entries))


def iter_image_urls(elements: Sequence[Any]) -> Iterator[str]:
    """Every remote image URL the elements will embed, in document order."""
    for element in elements:
        if isinstance(element, ImageGallery):
            for attachment in element.attachments:
                if attachment.remote_url:
                    yield attachment.remote_url
        elif isinstance(element, SignatureBlock):
            for entry in element.entries:
                if entry.image_url:
                    yield entry.image_url
