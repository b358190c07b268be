from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from docinbox.ports.store_port import DocumentStorePort
from docinbox.ports.thumbnail_port import ThumbnailRendererPort, ThumbnailStyle
from docinbox.services.background import BackgroundRunner

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 600


class ThumbnailCache:
    """
    Hi-res previews stored as `<cache_dir>/<doc_id>.png`; the file is the record.

    The renderer writes to a temporary name inside the cache directory which is
    then atomically renamed into place, so `exists` only ever sees complete
    files. Concurrent generations for the same document are not prevented:
    both write their own temp file and the last rename wins.
    """

    def __init__(
        self,
        cache_dir: str,
        store: DocumentStorePort,
        renderer: ThumbnailRendererPort,
        runner: BackgroundRunner | None = None,
        width: int = DEFAULT_WIDTH,
        style: ThumbnailStyle = ThumbnailStyle.UNIFORM,
    ) -> None:
        self._cache_dir = Path(cache_dir)
        self._cache_dir.mkdir(parents=True, exist_ok=True)
        self._store = store
        self._renderer = renderer
        self._runner = runner
        self._width = width
        self._style = style

    def path_for(self, doc_id: str) -> Path:
        return self._cache_dir / f"{doc_id}.png"

    def exists(self, doc_id: str) -> bool:
        return self.path_for(doc_id).is_file()

    def ready(self, doc_id: str) -> bool:
        return self.exists(doc_id)

    def trigger(self, doc_id: str, doc_type: str) -> bool:
        if self._runner is None or self.exists(doc_id):
            return False
        return self._runner.submit(f"thumb:{doc_id}", self.generate, doc_id, doc_type) is not None

    def generate(self, doc_id: str, doc_type: str) -> bool:
        if self.exists(doc_id):
            return True
        try:
            data, _ = self._store.download_document(doc_id)
        except Exception as exc:
            logger.warning("hires-thumb: download failed for %s: %s", doc_id, exc)
            return False

        source_path = self._write_scratch(doc_id, doc_type, data)
        if source_path is None:
            return False
        final_path = self.path_for(doc_id)
        tmp_dest = None
        try:
            # the cache dir may have been cleared while running
            self._cache_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_dest = tempfile.mkstemp(
                prefix=f".{doc_id}-", suffix=".png.tmp", dir=self._cache_dir
            )
            os.close(fd)
            self._renderer.render(source_path, tmp_dest, self._width, self._style)
            os.replace(tmp_dest, final_path)
        except Exception as exc:
            logger.warning("hires-thumb: generation failed for %s: %s", doc_id, exc)
            return False
        finally:
            if tmp_dest is not None:
                _remove_quietly(tmp_dest)
            _remove_quietly(source_path)
        logger.info("hires-thumb: generated %s", doc_id)
        return True

    @staticmethod
    def _write_scratch(doc_id: str, doc_type: str, data: bytes) -> str | None:
        try:
            with tempfile.NamedTemporaryFile(
                prefix="docinbox-thumb-", suffix=doc_type or "", delete=False
            ) as handle:
                handle.write(data)
                return handle.name
        except OSError as exc:
            logger.warning("hires-thumb: temp file failed for %s: %s", doc_id, exc)
            return None


def _remove_quietly(path: str) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
    except OSError as exc:
        logger.warning("could not remove temp file %s: %s", path, exc)
