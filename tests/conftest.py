from __future__ import annotations

from pathlib import Path
from typing import Callable, Mapping, Sequence
import sys

import pytest
from pypdf import PdfWriter
from pypdf.generic import (
    ArrayObject,
    DecodedStreamObject,
    DictionaryObject,
    FloatObject,
    NameObject,
    NumberObject,
    RectangleObject,
)

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from pdfrulingx import PageGeometry, Rect, RulingExtractor  # noqa: E402

PdfFactory = Callable[..., Path]


def _numbers(values: Sequence[float]) -> ArrayObject:
    return ArrayObject([FloatObject(value) for value in values])


def _form_xobject(
    writer: PdfWriter,
    content: bytes,
    bbox: Sequence[float],
    matrix: Sequence[float] | None,
):
    form = DecodedStreamObject()
    form.set_data(content)
    form[NameObject("/Type")] = NameObject("/XObject")
    form[NameObject("/Subtype")] = NameObject("/Form")
    form[NameObject("/BBox")] = _numbers(bbox)
    if matrix is not None:
        form[NameObject("/Matrix")] = _numbers(matrix)
    return writer._add_object(form)


@pytest.fixture()
def pdf_factory(tmp_path: Path) -> PdfFactory:
    """Write a PDF whose pages carry the given raw content streams."""

    def _create(
        *contents: bytes,
        filename: str = "rulings.pdf",
        width: float = 200,
        height: float = 200,
        rotate: int | None = None,
        crop_box: Sequence[float] | None = None,
        forms: Mapping[str, tuple[bytes, Sequence[float], Sequence[float] | None]] | None = None,
    ) -> Path:
        path = tmp_path / filename
        writer = PdfWriter()
        for content in contents:
            page = writer.add_blank_page(width=width, height=height)
            stream = DecodedStreamObject()
            stream.set_data(content)
            page[NameObject("/Contents")] = writer._add_object(stream)
            resources = DictionaryObject()
            if forms:
                xobjects = DictionaryObject()
                for name, (form_content, bbox, matrix) in forms.items():
                    xobjects[NameObject(f"/{name}")] = _form_xobject(writer, form_content, bbox, matrix)
                resources[NameObject("/XObject")] = xobjects
            page[NameObject("/Resources")] = resources
            if rotate is not None:
                page[NameObject("/Rotate")] = NumberObject(rotate)
            if crop_box is not None:
                page[NameObject("/CropBox")] = RectangleObject(list(crop_box))
        with path.open("wb") as handle:
            writer.write(handle)
        return path

    return _create


@pytest.fixture()
def empty_pdf(tmp_path: Path) -> Path:
    pdf_path = tmp_path / "empty.pdf"
    writer = PdfWriter()
    with pdf_path.open("wb") as stream:
        writer.write(stream)
    return pdf_path


@pytest.fixture()
def page_geometry() -> PageGeometry:
    return PageGeometry(crop_box=Rect(0.0, 0.0, 200.0, 200.0), rotation=0)


@pytest.fixture()
def extractor(page_geometry: PageGeometry) -> RulingExtractor:
    return RulingExtractor(page_geometry)
