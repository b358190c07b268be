from __future__ import annotations

from enum import Enum


class Stage(str, Enum):
    """Processing phase of the enrichment pipeline for one document."""

    IDLE = "idle"
    OCR = "ocr"
    DATE_INFERENCE = "llm"
