from __future__ import annotations

from pathlib import Path

from docinbox.domain.errors import ThumbnailError
from docinbox.ports.thumbnail_port import ThumbnailRendererPort, ThumbnailStyle

# A-series portrait ratio; uniform thumbnails all share it.
UNIFORM_ASPECT = 1.414
_BORDER_COLOR = (210, 210, 210)
_BACKGROUND = (255, 255, 255)
_PADDING_RATIO = 0.03


class PillowThumbnailRenderer(ThumbnailRendererPort):
    def __init__(self, pdf_dpi: int = 150, timeout: int = 120) -> None:
        self._pdf_dpi = pdf_dpi
        self._timeout = timeout

    def render(
        self, source_path: str, dest_path: str, width: int, style: ThumbnailStyle
    ) -> None:
        image = self._load_first_page(source_path)
        try:
            image = image.convert("RGB")
            if style == ThumbnailStyle.UNIFORM:
                output = self._uniform(image, width)
            else:
                output = self._scaled(image, width)
            output.save(dest_path, format="PNG")
        except Exception as exc:
            raise ThumbnailError(f"Failed to render thumbnail: {exc}") from exc

    def _load_first_page(self, source_path: str) -> object:
        if Path(source_path).suffix.lower() == ".pdf":
            try:
                from pdf2image import convert_from_path
            except ImportError as exc:
                raise RuntimeError(
                    "pdf2image is required to render PDF thumbnails. "
                    "Install with: pip install pdf2image"
                ) from exc
            try:
                pages = convert_from_path(
                    source_path,
                    dpi=self._pdf_dpi,
                    first_page=1,
                    last_page=1,
                    timeout=self._timeout,
                )
            except Exception as exc:
                raise ThumbnailError(f"Failed to rasterise PDF: {exc}") from exc
            if not pages:
                raise ThumbnailError("PDF has no pages.")
            return pages[0]
        try:
            from PIL import Image
        except ImportError as exc:
            raise RuntimeError(
                "Pillow is required for thumbnails. Install with: pip install pillow"
            ) from exc
        try:
            image = Image.open(source_path)
            image.load()
        except Exception as exc:
            raise ThumbnailError(f"Failed to open image: {exc}") from exc
        return image

    @staticmethod
    def _scaled(image: object, width: int) -> object:
        from PIL import Image

        ratio = width / float(image.size[0])
        height = max(1, int(image.size[1] * ratio))
        return image.resize((width, height), resample=Image.LANCZOS)

    @staticmethod
    def _uniform(image: object, width: int) -> object:
        from PIL import Image, ImageOps

        height = int(width * UNIFORM_ASPECT)
        padding = max(1, int(width * _PADDING_RATIO))
        inner = (width - 2 * padding, height - 2 * padding)
        fitted = ImageOps.contain(image, inner, method=Image.LANCZOS)
        canvas = Image.new("RGB", (width, height), _BACKGROUND)
        offset = ((width - fitted.size[0]) // 2, (height - fitted.size[1]) // 2)
        canvas.paste(fitted, offset)
        return ImageOps.expand(
            ImageOps.crop(canvas, border=1), border=1, fill=_BORDER_COLOR
        )
