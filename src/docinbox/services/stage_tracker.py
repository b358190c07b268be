from __future__ import annotations

import logging
import threading

from docinbox.domain.stages import Stage

logger = logging.getLogger(__name__)


class StageTracker:
    """Per-document pipeline stage; claim/advance/release are the only mutators."""

    def __init__(self) -> None:
        self._stages: dict[str, Stage] = {}
        self._lock = threading.Lock()

    def try_claim(self, doc_id: str) -> bool:
        with self._lock:
            if doc_id in self._stages:
                return False
            self._stages[doc_id] = Stage.OCR
            return True

    def advance(self, doc_id: str, stage: Stage) -> None:
        if stage == Stage.IDLE:
            raise ValueError("Use release() to return a document to idle.")
        with self._lock:
            if doc_id not in self._stages:
                logger.debug("advance ignored for unclaimed document %s", doc_id)
                return
            self._stages[doc_id] = stage

    def release(self, doc_id: str) -> None:
        with self._lock:
            self._stages.pop(doc_id, None)

    def current_stage(self, doc_id: str) -> Stage:
        with self._lock:
            return self._stages.get(doc_id, Stage.IDLE)

    def snapshot(self) -> dict[str, Stage]:
        with self._lock:
            return dict(self._stages)
