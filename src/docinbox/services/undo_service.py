from __future__ import annotations

import logging
import os

from docinbox.domain.errors import UndoError
from docinbox.domain.models import ItemMoveAction, TagAddAction, UndoAction
from docinbox.ports.store_port import DocumentStorePort
from docinbox.services.triage_state import TriageState

logger = logging.getLogger(__name__)


class UndoService:
    """Single-slot undo. Each new record replaces the previous one."""

    def __init__(self, store: DocumentStorePort, state: TriageState) -> None:
        self._store = store
        self._state = state
        self._last: UndoAction | None = None

    def record(self, action: UndoAction) -> None:
        with self._state.lock:
            self._last = action

    @property
    def available(self) -> bool:
        with self._state.lock:
            return self._last is not None

    @property
    def description(self) -> str:
        with self._state.lock:
            return self._last.description if self._last is not None else ""

    def undo(self) -> bool:
        with self._state.lock:
            action = self._last
            self._last = None
        if action is None:
            return False
        try:
            self._reverse(action)
        except Exception as exc:
            logger.warning("undo failed for %s: %s", action.description, exc)
            raise UndoError(f"Undo failed for {action.description}: {exc}") from exc
        return True

    def _reverse(self, action: UndoAction) -> None:
        if isinstance(action, TagAddAction):
            self._store.remove_tag(action.doc_id, action.tag_id)
        elif isinstance(action, ItemMoveAction):
            src = os.path.join(action.to_dir, action.file_name)
            dst = os.path.join(action.from_dir, action.file_name)
            os.replace(src, dst)
        else:
            raise TypeError(f"Unknown undo action: {action!r}")
