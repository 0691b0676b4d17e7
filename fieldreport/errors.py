"""Exceptions raised while loading records and rendering reports."""

from __future__ import annotations


class FieldReportError(Exception):
    """Base exception for report generation errors."""

    def __init__(self, message: str, details: str | None = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f'{self.message}: {self.details}'
        return self.message


class RecordNotFoundError(FieldReportError):
    """The requested record id does not resolve to a row."""


class UnknownFormError(FieldReportError):
    """No report definition is registered under the requested form slug."""


class StoreError(FieldReportError):
    """The data store could not be reached or answered with an error."""


class ImageFetchError(FieldReportError):
    """A remote image could not be downloaded."""


class ImageDecodeError(FieldReportError):
    """Downloaded bytes could not be decoded as an image."""


class LayoutError(FieldReportError):
    """The document assembler was driven out of order or a page could not be produced."""
