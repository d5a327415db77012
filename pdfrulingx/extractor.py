"""Document-level helpers returning the rulings of each selected page."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from pypdf import PdfReader
from pypdf.generic import DictionaryObject

from .interpreter import ContentStreamInterpreter
from .options import ExtractionOptions
from .rulings import Ruling
from .utils import PathLike, ensure_path, normalize_pages
from .validators import validate_pdf

LOGGER = logging.getLogger("pdfrulingx.extractor")

__all__ = ["PageRulings", "extract_page_rulings", "extract_rulings"]


@dataclass(frozen=True, slots=True)
class PageRulings:
    """Rulings found on one page, in the order they were painted."""

    page_number: int
    width: float
    height: float
    rotation: int
    rulings: tuple[Ruling, ...] = field(default_factory=tuple)

    @property
    def horizontal(self) -> tuple[Ruling, ...]:
        return tuple(ruling for ruling in self.rulings if ruling.is_horizontal)

    @property
    def vertical(self) -> tuple[Ruling, ...]:
        return tuple(ruling for ruling in self.rulings if ruling.is_vertical)


def extract_page_rulings(
    page: DictionaryObject,
    *,
    page_number: int = 1,
    reader: PdfReader | None = None,
    options: ExtractionOptions | None = None,
) -> PageRulings:
    """Interpret a single pypdf page and return its rulings."""

    interpreter = ContentStreamInterpreter(page, reader=reader, options=options)
    rulings = interpreter.run()
    geometry = interpreter.geometry
    LOGGER.debug("Page %s produced %s rulings", page_number, len(rulings))
    return PageRulings(
        page_number=page_number,
        width=geometry.width,
        height=geometry.height,
        rotation=geometry.rotation,
        rulings=rulings,
    )


def extract_rulings(
    input: PathLike,
    pages: Sequence[int | str] | None = None,
    *,
    options: ExtractionOptions | None = None,
) -> list[PageRulings]:
    """Extract rulings from the selected 1-based ``pages`` of a PDF file.

    Every page is interpreted by its own extractor instance, so results do
    not depend on which other pages were selected.
    """

    input_path = ensure_path(input)
    reader = validate_pdf(input_path)
    total_pages = len(reader.pages)
    page_numbers = (
        normalize_pages(pages, total_pages=total_pages)
        if pages is not None
        else list(range(1, total_pages + 1))
    )

    results = [
        extract_page_rulings(
            reader.pages[number - 1],
            page_number=number,
            reader=reader,
            options=options,
        )
        for number in page_numbers
    ]
    LOGGER.info(
        "Extracted %s rulings from %s pages of %s",
        sum(len(result.rulings) for result in results),
        len(results),
        input_path,
    )
    return results
