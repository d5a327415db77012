"""Custom exceptions raised by :mod:`pdfrulingx`."""

from __future__ import annotations

from typing import Iterable


class PdfRulingError(Exception):
    """Base exception for all errors raised by :mod:`pdfrulingx`."""


class PdfValidationError(PdfRulingError):
    """Raised when validation of a PDF file fails."""


class InvalidPageSelectionError(PdfRulingError):
    """Raised when the requested page numbers cannot be used."""

    def __init__(self, pages: Iterable[object]) -> None:
        self.pages = list(pages)
        message = f"Invalid or empty page selection provided: {self.pages!r}"
        super().__init__(message)


__all__ = ["PdfRulingError", "PdfValidationError", "InvalidPageSelectionError"]
