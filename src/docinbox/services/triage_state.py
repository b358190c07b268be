from __future__ import annotations

import threading


class TriageState:
    """Lock shared by tag history, the undo record and date provenance."""

    def __init__(self) -> None:
        self.lock = threading.RLock()


class ProvenanceRegistry:
    """Documents whose date was last set by inference. Entries are never cleared."""

    def __init__(self, state: TriageState) -> None:
        self._state = state
        self._inferred: set[str] = set()

    def mark(self, doc_id: str) -> None:
        with self._state.lock:
            self._inferred.add(doc_id)

    def is_inferred(self, doc_id: str) -> bool:
        with self._state.lock:
            return doc_id in self._inferred
