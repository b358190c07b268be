from __future__ import annotations

from enum import Enum
from typing import Protocol


class ThumbnailStyle(str, Enum):
    PLAIN = "plain"
    UNIFORM = "uniform"


class ThumbnailRendererPort(Protocol):
    def render(
        self, source_path: str, dest_path: str, width: int, style: ThumbnailStyle
    ) -> None:
        """Render a PNG preview of source_path into dest_path; raise ThumbnailError on failure."""
