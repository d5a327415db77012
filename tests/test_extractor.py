from __future__ import annotations

from pathlib import Path

import pytest

from pdfrulingx import (
    ExtractionOptions,
    InvalidPageSelectionError,
    PdfValidationError,
    Point,
    Ruling,
    extract_rulings,
    validate_pdf,
)
from pdfrulingx.options import EXTRACT_RULINGS_ENV_VAR
from pdfrulingx.utils import normalize_pages

GRID = b"\n".join(
    [
        b"0 0 0 RG 1 w",
        b"20 20 m 180 20 l S",
        b"20 100 m 180 100 l S",
        b"20 20 m 20 100 l S",
        b"180 20 m 180 100 l S",
    ]
)


def test_extract_rulings_returns_one_result_per_page(pdf_factory) -> None:
    path = pdf_factory(GRID, b"10 10 100 50 re f")

    results = extract_rulings(path)

    assert [result.page_number for result in results] == [1, 2]
    first, second = results
    assert first.width == 200.0 and first.height == 200.0
    assert len(first.rulings) == 4
    assert len(first.horizontal) == 2
    assert len(first.vertical) == 2
    assert first.rulings[0] == Ruling(Point(20.0, 180.0), Point(180.0, 180.0))
    assert len(second.rulings) == 4


def test_extract_rulings_selected_pages(pdf_factory) -> None:
    path = pdf_factory(GRID, b"10 10 100 50 re f", b"")

    results = extract_rulings(path, pages=["3", 2, 2])

    assert [result.page_number for result in results] == [2, 3]
    assert results[1].rulings == ()


def test_extract_rulings_is_repeatable(pdf_factory) -> None:
    path = pdf_factory(GRID)

    assert extract_rulings(path) == extract_rulings(path)


def test_extract_rulings_can_be_disabled(pdf_factory) -> None:
    path = pdf_factory(GRID)

    results = extract_rulings(path, options=ExtractionOptions(extract_rulings=False))

    assert results[0].rulings == ()


@pytest.mark.parametrize("pages", [[0], [4], [], ["x"]])
def test_invalid_page_selection(pdf_factory, pages) -> None:
    path = pdf_factory(GRID)

    with pytest.raises(InvalidPageSelectionError):
        extract_rulings(path, pages=pages)


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(PdfValidationError):
        extract_rulings(tmp_path / "missing.pdf")


def test_empty_pdf_is_rejected(empty_pdf: Path) -> None:
    with pytest.raises(PdfValidationError):
        validate_pdf(empty_pdf)


def test_validate_pdf_returns_reader(pdf_factory) -> None:
    reader = validate_pdf(pdf_factory(GRID))

    assert len(reader.pages) == 1


def test_normalize_pages_sorts_and_deduplicates() -> None:
    assert normalize_pages([3, "1", " ", 3], total_pages=3) == [1, 3]


def test_normalize_pages_expands_ranges() -> None:
    assert normalize_pages(["2-4", "1, 6"], total_pages=6) == [1, 2, 3, 4, 6]


@pytest.mark.parametrize("raw", ["4-2", "0-3", "5-7", "2-"])
def test_normalize_pages_rejects_bad_ranges(raw: str) -> None:
    with pytest.raises(InvalidPageSelectionError) as excinfo:
        normalize_pages([raw], total_pages=6)

    assert excinfo.value.pages == [raw]


def test_normalize_pages_reports_consumed_generator_selection() -> None:
    assert normalize_pages((number for number in [2, 1]), total_pages=2) == [1, 2]

    with pytest.raises(InvalidPageSelectionError) as excinfo:
        normalize_pages((entry for entry in [" ", ""]), total_pages=2)

    assert excinfo.value.pages == [" ", ""]


@pytest.mark.parametrize(("raw", "expected"), [("1", True), ("off", False), ("YES", True), ("0", False)])
def test_options_from_env(monkeypatch: pytest.MonkeyPatch, raw: str, expected: bool) -> None:
    monkeypatch.setenv(EXTRACT_RULINGS_ENV_VAR, raw)

    assert ExtractionOptions.from_env().extract_rulings is expected


def test_options_from_env_defaults_and_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(EXTRACT_RULINGS_ENV_VAR, raising=False)

    options = ExtractionOptions.from_env(max_form_depth=2)

    assert options.extract_rulings is True
    assert options.max_form_depth == 2


def test_negative_form_depth_is_rejected() -> None:
    with pytest.raises(ValueError):
        ExtractionOptions(max_form_depth=-1)
