from .godocs_client import GodocsClient
from .llm_mock import NullDateInferenceAdapter
from .llm_ollama import OllamaDateInferenceAdapter
from .ocr_tesseract_adapter import TesseractOCRAdapter
from .thumbnails_pillow import PillowThumbnailRenderer

__all__ = [
    "GodocsClient",
    "NullDateInferenceAdapter",
    "OllamaDateInferenceAdapter",
    "PillowThumbnailRenderer",
    "TesseractOCRAdapter",
]
