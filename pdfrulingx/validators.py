"""Validation utilities for :mod:`pdfrulingx`."""

from __future__ import annotations

import logging

from pypdf import PdfReader

from .exceptions import PdfValidationError
from .utils import PathLike, ensure_path

LOGGER = logging.getLogger("pdfrulingx.validators")


def validate_pdf(path: PathLike) -> PdfReader:
    """Open *path* and return its reader if it is a readable, non-empty PDF.

    ``PdfValidationError`` is raised if the file is missing, cannot be
    parsed, cannot be decrypted with an empty password, or has no pages.
    """

    pdf_path = ensure_path(path)
    LOGGER.debug("Validating PDF at %s", pdf_path)
    if not pdf_path.is_file():
        raise PdfValidationError(f"PDF file not found: {pdf_path}")
    try:
        reader = PdfReader(str(pdf_path))
    except Exception as exc:  # pragma: no cover - dependency exceptions vary
        LOGGER.error("Failed to read PDF %s: %s", pdf_path, exc)
        raise PdfValidationError(f"Unable to read PDF: {pdf_path}") from exc

    if reader.is_encrypted:
        try:
            reader.decrypt("")
        except Exception as exc:  # pragma: no cover
            LOGGER.error("Encrypted PDF %s cannot be decrypted: %s", pdf_path, exc)
            raise PdfValidationError("Encrypted PDF cannot be decrypted") from exc

    try:
        page_count = len(reader.pages)
    except Exception as exc:
        LOGGER.error("Failed to read page tree of %s: %s", pdf_path, exc)
        raise PdfValidationError(f"Unable to read pages of PDF: {pdf_path}") from exc
    if page_count == 0:
        LOGGER.error("PDF %s contains no pages", pdf_path)
        raise PdfValidationError("PDF contains no pages")

    LOGGER.info("Validated PDF %s with %s pages", pdf_path, page_count)
    return reader


__all__ = ["validate_pdf"]
