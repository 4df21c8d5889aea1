"""Error types raised by the aggregation layer."""

from __future__ import annotations


class SourceError(RuntimeError):
    """A data source failed to return its records."""

    def __init__(self, message: str, source: str | None = None):
        super().__init__(message)
        self.source = source

    def __str__(self) -> str:
        message = super().__str__()
        if self.source:
            return f"{self.source}: {message}"
        return message
