from .date_inference_port import DateInferencePort
from .ocr_port import OCRPort
from .store_port import DocumentStorePort
from .thumbnail_port import ThumbnailRendererPort, ThumbnailStyle

__all__ = [
    "DateInferencePort",
    "DocumentStorePort",
    "OCRPort",
    "ThumbnailRendererPort",
    "ThumbnailStyle",
]
