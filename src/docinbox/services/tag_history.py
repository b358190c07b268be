from __future__ import annotations

import logging

from docinbox.domain.errors import TagSetApplyError
from docinbox.domain.models import RecentTagSet
from docinbox.domain.tag_sets import RECENT_SET_CAPACITY, build_recent_set, push_recent
from docinbox.ports.store_port import DocumentStorePort
from docinbox.services.triage_state import TriageState

logger = logging.getLogger(__name__)


class TagHistory:
    def __init__(
        self,
        store: DocumentStorePort,
        state: TriageState,
        capacity: int = RECENT_SET_CAPACITY,
    ) -> None:
        self._store = store
        self._state = state
        self._capacity = capacity
        self._sets: list[RecentTagSet] = []

    def capture(self, doc_id: str) -> RecentTagSet | None:
        try:
            tags = self._store.fetch_document_tags(doc_id)
        except Exception as exc:
            logger.warning("tag-history: fetch tags failed for %s: %s", doc_id, exc)
            return None
        if not tags:
            return None
        new_set = build_recent_set(tags)
        with self._state.lock:
            self._sets = push_recent(self._sets, new_set, self._capacity)
        return new_set

    def apply(self, index: int, doc_id: str) -> RecentTagSet | None:
        with self._state.lock:
            if index < 0 or index >= len(self._sets):
                return None
            chosen = self._sets[index]

        failures: list[str] = []
        for tag in chosen.tags:
            try:
                self._store.add_tag(doc_id, tag.tag_id)
            except Exception as exc:
                logger.warning(
                    "apply-tagset: error adding tag %s to %s: %s", tag.tag_id, doc_id, exc
                )
                failures.append(tag.name)
        self.capture(doc_id)
        if failures:
            raise TagSetApplyError(
                f"Could not apply {', '.join(failures)} to {doc_id}"
            )
        return chosen

    def snapshot(self) -> list[RecentTagSet]:
        with self._state.lock:
            return list(self._sets)

    def __len__(self) -> int:
        with self._state.lock:
            return len(self._sets)
