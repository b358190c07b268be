from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class DateInferencePort(Protocol):
    def infer_date(self, text: str) -> str | None:
        """Return the document date as YYYY-MM-DD, or None when no date can be found."""
