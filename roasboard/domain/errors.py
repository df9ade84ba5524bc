"""Domain errors raised when an uploaded dataset cannot be loaded."""

from __future__ import annotations

from typing import Sequence


class DatasetLoadError(ValueError):
    """Base class for wholesale dataset load failures."""


class EmptyInputError(DatasetLoadError):
    def __init__(self, message: str = "No rows found.") -> None:
        super().__init__(message)


class MissingColumnsError(DatasetLoadError):
    def __init__(self, missing: Sequence[str]) -> None:
        self.missing = list(missing)
        super().__init__(f"Missing columns: {', '.join(self.missing)}")
