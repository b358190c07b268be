from __future__ import annotations

import re

from docinbox.domain.errors import OCRError, UnsupportedDocumentTypeError
from docinbox.ports.ocr_port import OCRPort
from docinbox.settings import OCR_LANG, OCR_TIMEOUT_SECONDS

IMAGE_TYPES = {".png", ".jpg", ".jpeg", ".tiff", ".bmp"}
PDF_TYPE = ".pdf"


class TesseractOCRAdapter(OCRPort):
    """OCR via Tesseract. PDFs contribute only their first page, as a scan cover sheet would."""

    def __init__(self, language: str | None = None, timeout: int | None = None) -> None:
        self._language = language or OCR_LANG
        self._timeout = timeout if timeout is not None else OCR_TIMEOUT_SECONDS

    def extract_text(self, path: str, document_type: str) -> str:
        document_type = (document_type or "").lower()
        if document_type == PDF_TYPE:
            return self._extract_from_pdf(path)
        if document_type in IMAGE_TYPES:
            return self._extract_from_image_path(path)
        raise UnsupportedDocumentTypeError(document_type)

    def _extract_from_pdf(self, path: str) -> str:
        pdf_text = self._extract_pdf_text(path)
        if self._looks_like_text(pdf_text):
            return pdf_text.strip()
        try:
            from pdf2image import convert_from_path
        except ImportError as exc:
            raise RuntimeError(
                "pdf2image is required to OCR PDF files. Install with: pip install pdf2image. "
                "Poppler is also required on your system."
            ) from exc
        try:
            pages = convert_from_path(
                path, dpi=300, first_page=1, last_page=1, timeout=self._timeout
            )
        except Exception as exc:
            raise OCRError(f"Failed to render first PDF page: {exc}") from exc
        if not pages:
            return ""
        return self._ocr_image(pages[0])

    def _extract_from_image_path(self, path: str) -> str:
        try:
            from PIL import Image
        except ImportError as exc:
            raise RuntimeError(
                "Pillow is required for OCR. Install with: pip install pillow"
            ) from exc
        try:
            image = Image.open(path)
            image.load()
        except Exception as exc:
            raise OCRError(f"Failed to load image for OCR: {exc}") from exc
        return self._ocr_image(image)

    def _ocr_image(self, image: object) -> str:
        try:
            import pytesseract
        except ImportError as exc:
            raise RuntimeError(
                "pytesseract is required for OCR. Install with: pip install pytesseract"
            ) from exc
        try:
            rotated = self._auto_rotate(image, pytesseract)
            text = pytesseract.image_to_string(
                rotated,
                lang=self._language,
                timeout=self._timeout,
            )
        except pytesseract.TesseractNotFoundError as exc:
            raise OCRError(
                "Tesseract OCR engine not found. Install tesseract-ocr and ensure it is on PATH."
            ) from exc
        except Exception as exc:
            # includes pytesseract's timeout, which is a bare RuntimeError
            raise OCRError(f"Tesseract failed: {exc}") from exc
        return (text or "").strip()

    def _extract_pdf_text(self, path: str) -> str:
        try:
            from pdfminer.high_level import extract_text
        except ImportError:
            return ""
        try:
            return extract_text(path, maxpages=1) or ""
        except Exception:
            return ""

    def _looks_like_text(self, text: str) -> bool:
        if not text:
            return False
        stripped = text.strip()
        if len(stripped) < 20:
            return False
        meaningful = sum(ch.isalnum() for ch in stripped)
        return meaningful >= 10

    def _auto_rotate(self, image: object, pytesseract: object) -> object:
        try:
            osd = pytesseract.image_to_osd(image, timeout=self._timeout)
        except Exception:
            return image
        match = re.search(r"Rotate:\s*(\d+)", osd)
        if not match:
            return image
        rotate = int(match.group(1))
        if rotate == 0:
            return image
        return image.rotate(-rotate, expand=True)
