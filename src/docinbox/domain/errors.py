from __future__ import annotations


class StoreError(RuntimeError):
    """Remote document store unreachable or returned an error status."""


class OCRError(RuntimeError):
    """OCR engine failed on a supported document."""


class UnsupportedDocumentTypeError(OCRError):
    def __init__(self, document_type: str) -> None:
        super().__init__(f"Unsupported document type for OCR: {document_type}")
        self.document_type = document_type


class DateInferenceError(RuntimeError):
    pass


class ThumbnailError(RuntimeError):
    pass


class TriageActionError(RuntimeError):
    """A user-initiated mutation failed; shown to the user."""


class TagSetApplyError(TriageActionError):
    pass


class UndoError(TriageActionError):
    pass
