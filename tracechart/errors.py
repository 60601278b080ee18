from __future__ import annotations


class ChartError(Exception):
    """Base class for chart engine failures."""


class ChartDataError(ChartError, ValueError):
    """Raised when chart samples cannot be read as numeric series."""


class ChartShapeError(ChartDataError):
    """Raised when a sample disagrees with the record's series shape."""

    def __init__(self, message: str, *, sample_index: int | None = None) -> None:
        super().__init__(message)
        self.sample_index = sample_index


class ChartHostError(ChartError, RuntimeError):
    """Raised on renderer host lifecycle misuse (update before mount, after close)."""
