"""Per-instance configuration for ruling extraction."""

from __future__ import annotations

import os
from dataclasses import dataclass

__all__ = ["ExtractionOptions", "EXTRACT_RULINGS_ENV_VAR"]

EXTRACT_RULINGS_ENV_VAR = "PDFRULINGX_EXTRACT_RULINGS"
_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True, slots=True)
class ExtractionOptions:
    """Settings that control a single page's ruling extraction.

    Attributes:
        extract_rulings: When ``False`` every painting operator is a no-op,
            useful for callers that only need other page data.
        max_form_depth: How deeply nested form XObjects are replayed.
    """

    extract_rulings: bool = True
    max_form_depth: int = 8

    def __post_init__(self) -> None:
        if self.max_form_depth < 0:
            raise ValueError("max_form_depth must not be negative")

    @classmethod
    def from_env(cls, **overrides: object) -> "ExtractionOptions":
        """Build options, reading the extraction toggle from the environment."""

        values: dict[str, object] = {}
        raw = os.getenv(EXTRACT_RULINGS_ENV_VAR)
        if raw is not None:
            values["extract_rulings"] = raw.strip().lower() in _TRUE_VALUES
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)  # type: ignore[arg-type]
