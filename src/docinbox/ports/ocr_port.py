from __future__ import annotations

from typing import Protocol


class OCRPort(Protocol):
    def extract_text(self, path: str, document_type: str) -> str:
        """Extract text from the file at path; raise UnsupportedDocumentTypeError for unknown types."""
