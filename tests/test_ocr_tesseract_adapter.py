import pytest

from docinbox.adapters.ocr_tesseract_adapter import TesseractOCRAdapter
from docinbox.domain.errors import OCRError, UnsupportedDocumentTypeError


def _adapter(monkeypatch) -> tuple[TesseractOCRAdapter, list]:
    adapter = TesseractOCRAdapter(language="eng", timeout=5)
    calls: list = []
    monkeypatch.setattr(adapter, "_extract_from_pdf", lambda path: calls.append(("pdf", path)) or "pdf text")
    monkeypatch.setattr(
        adapter, "_extract_from_image_path", lambda path: calls.append(("image", path)) or "image text"
    )
    return adapter, calls


@pytest.mark.parametrize("document_type", [".docx", ".txt", "", None])
def test_unsupported_types_raise(monkeypatch, document_type) -> None:
    adapter, calls = _adapter(monkeypatch)

    with pytest.raises(UnsupportedDocumentTypeError):
        adapter.extract_text("/tmp/doc", document_type)
    assert calls == []


def test_unsupported_type_is_an_ocr_error(monkeypatch) -> None:
    adapter, _ = _adapter(monkeypatch)

    with pytest.raises(OCRError):
        adapter.extract_text("/tmp/doc.docx", ".docx")


@pytest.mark.parametrize("document_type", [".pdf", ".PDF"])
def test_pdf_routed_case_insensitively(monkeypatch, document_type) -> None:
    adapter, calls = _adapter(monkeypatch)

    assert adapter.extract_text("/tmp/doc.pdf", document_type) == "pdf text"
    assert calls == [("pdf", "/tmp/doc.pdf")]


@pytest.mark.parametrize("document_type", [".png", ".jpg", ".JPEG", ".tiff", ".bmp"])
def test_images_routed_to_direct_ocr(monkeypatch, document_type) -> None:
    adapter, calls = _adapter(monkeypatch)

    assert adapter.extract_text("/tmp/scan", document_type) == "image text"
    assert calls == [("image", "/tmp/scan")]


def test_pdf_text_layer_skips_rasterising(monkeypatch) -> None:
    adapter = TesseractOCRAdapter(language="eng", timeout=5)
    monkeypatch.setattr(
        adapter, "_extract_pdf_text", lambda path: "  Invoice 2024-03-01 total 120 EUR  \n"
    )

    def fail_ocr(image):
        raise AssertionError("OCR should not run for a PDF with a text layer")

    monkeypatch.setattr(adapter, "_ocr_image", fail_ocr)

    assert adapter.extract_text("/tmp/doc.pdf", ".pdf") == "Invoice 2024-03-01 total 120 EUR"


def test_looks_like_text_thresholds() -> None:
    adapter = TesseractOCRAdapter()

    assert adapter._looks_like_text("") is False
    assert adapter._looks_like_text("short") is False
    assert adapter._looks_like_text(". , ; : - _ ! ? . , ; : - _ !") is False
    assert adapter._looks_like_text("Statement for March 2024") is True
