from __future__ import annotations

import logging

from docinbox.domain.errors import StoreError, TriageActionError
from docinbox.domain.models import (
    EditTagGroup,
    EditTagItem,
    InboxItem,
    InboxView,
    Shortcut,
    Tag,
    TagAddAction,
)
from docinbox.domain.stages import Stage
from docinbox.ports.store_port import DocumentStorePort
from docinbox.services.enrichment_service import EnrichmentService
from docinbox.services.stage_tracker import StageTracker
from docinbox.services.tag_history import TagHistory
from docinbox.services.thumbnail_cache import ThumbnailCache
from docinbox.services.triage_state import ProvenanceRegistry
from docinbox.services.undo_service import UndoService
from docinbox.settings import DEFAULT_TAG_COLOR

logger = logging.getLogger(__name__)

TEXT_PREVIEW_CHARS = 2000
OTHER_GROUP = "Other"


class TriageService:
    def __init__(
        self,
        store: DocumentStorePort,
        shortcuts: list[Shortcut],
        tracker: StageTracker,
        enrichment: EnrichmentService,
        thumbnails: ThumbnailCache,
        history: TagHistory,
        undo: UndoService,
        provenance: ProvenanceRegistry,
        server_url: str = "",
    ) -> None:
        self._store = store
        self._shortcuts = list(shortcuts)
        self._tracker = tracker
        self._enrichment = enrichment
        self._thumbnails = thumbnails
        self._history = history
        self._undo = undo
        self._provenance = provenance
        self._server_url = server_url.rstrip("/")

    @property
    def shortcuts(self) -> list[Shortcut]:
        return list(self._shortcuts)

    def current_view(self) -> InboxView:
        page = self._store.fetch_untagged(1, 1)
        view = InboxView(
            remaining=page.total_count,
            done=page.total_count == 0 or not page.documents,
            undoable=self._undo.available,
            undo_info=self._undo.description,
        )
        if view.done:
            return view

        doc = page.documents[0]
        item = InboxItem(
            ulid=doc.ulid,
            name=doc.name,
            document_type=doc.document_type,
            folder=doc.folder,
        )
        self._annotate_status(item)
        item.text_preview = self._text_preview(doc.ulid)
        view.item = item
        view.groups, view.tag_groups = self._build_tag_groups(doc.ulid)
        view.recent_sets = self._history.snapshot()
        return view

    def _annotate_status(self, item: InboxItem) -> None:
        try:
            status = self._store.fetch_document_status(item.ulid)
        except StoreError as exc:
            logger.warning("status unavailable for %s: %s", item.ulid, exc)
            return
        doc_type = status.document_type or item.document_type
        item.has_thumbnail = status.has_thumbnail
        if status.has_thumbnail:
            item.thumbnail_url = self._server_url + status.thumbnail_url
        item.view_url = self._server_url + status.view_url
        item.ingress_time = status.ingress_time
        item.document_date = status.document_date
        item.date_is_inferred = self._provenance.is_inferred(item.ulid)

        stage = self._tracker.current_stage(item.ulid)
        item.processing = stage == Stage.OCR
        item.llm_working = stage == Stage.DATE_INFERENCE

        if not status.has_text and stage == Stage.IDLE:
            if self._enrichment.trigger(item.ulid, doc_type):
                item.processing = True

        if status.has_thumbnail:
            if self._thumbnails.exists(item.ulid):
                item.has_hires_thumb = True
            else:
                self._thumbnails.trigger(item.ulid, doc_type)

    def _text_preview(self, ulid: str) -> str:
        try:
            text = self._store.fetch_document_text(ulid)
        except StoreError as exc:
            logger.warning("text preview unavailable for %s: %s", ulid, exc)
            return ""
        if len(text) > TEXT_PREVIEW_CHARS:
            return text[:TEXT_PREVIEW_CHARS] + "..."
        return text

    def _build_tag_groups(self, ulid: str) -> tuple[list[EditTagGroup], list[str]]:
        try:
            active = {tag.tag_id for tag in self._store.fetch_document_tags(ulid)}
        except StoreError as exc:
            logger.warning("document tags unavailable for %s: %s", ulid, exc)
            active = set()
        ordered = sorted(
            self._store.known_tags().values(),
            key=lambda tag: (tag.tag_group, tag.sort_order, tag.name),
        )
        groups: dict[str, EditTagGroup] = {}
        for tag in ordered:
            group_name = tag.tag_group or OTHER_GROUP
            group = groups.setdefault(group_name, EditTagGroup(name=group_name))
            group.tags.append(
                EditTagItem(
                    tag_id=tag.tag_id,
                    name=tag.name,
                    color=tag.color,
                    group=group_name,
                    active=tag.tag_id in active,
                )
            )
        try:
            tag_groups = self._store.fetch_tag_groups()
        except StoreError as exc:
            logger.warning("tag groups unavailable: %s", exc)
            tag_groups = []
        return list(groups.values()), tag_groups

    def tag_with_shortcut(self, key: str, doc_id: str, doc_name: str) -> str | None:
        shortcut = self._find_shortcut(key)
        if shortcut is None or not doc_id:
            return None
        try:
            self._store.add_tag(doc_id, shortcut.tag_id)
        except StoreError as exc:
            logger.warning("error tagging %s with %s: %s", doc_id, shortcut.name, exc)
            raise TriageActionError(f"Error: {exc}") from exc
        self._history.capture(doc_id)
        self._undo.record(
            TagAddAction(
                doc_id=doc_id,
                doc_name=doc_name,
                tag_id=shortcut.tag_id,
                tag_name=shortcut.name,
            )
        )
        return f"{shortcut.key}:{shortcut.name} ← {doc_name}"

    def done(self, doc_id: str) -> None:
        if doc_id:
            self._history.capture(doc_id)

    def apply_recent(self, index: int, doc_id: str, doc_name: str) -> str | None:
        # Intentionally leaves the undo record untouched.
        if not doc_id:
            return None
        applied = self._history.apply(index, doc_id)
        if applied is None:
            return None
        return f"{applied.label} ← {doc_name}"

    def undo(self) -> str | None:
        description = self._undo.description
        if not self._undo.undo():
            return None
        return f"undo ← {description}"

    def toggle_tag(self, doc_id: str, tag_id: int, active: bool) -> bool:
        try:
            if active:
                self._store.remove_tag(doc_id, tag_id)
            else:
                self._store.add_tag(doc_id, tag_id)
        except StoreError as exc:
            logger.warning("toggle-tag error: %s", exc)
            raise TriageActionError(str(exc)) from exc
        return not active

    def create_tag(
        self,
        name: str,
        color: str = "",
        group: str = "",
        doc_id: str = "",
    ) -> tuple[Tag, bool]:
        name = name.strip()
        if not name:
            raise ValueError("name is required")
        try:
            tag = self._store.create_tag(name, color or DEFAULT_TAG_COLOR, group)
        except StoreError as exc:
            logger.warning("create-tag error: %s", exc)
            raise TriageActionError(str(exc)) from exc
        applied = False
        if doc_id:
            try:
                self._store.add_tag(doc_id, tag.tag_id)
                applied = True
            except StoreError as exc:
                logger.warning("auto-apply tag %s to %s failed: %s", tag.tag_id, doc_id, exc)
        return tag, applied

    def thumbnail_ready(self, doc_id: str) -> bool:
        return self._thumbnails.ready(doc_id)

    def _find_shortcut(self, key: str) -> Shortcut | None:
        for shortcut in self._shortcuts:
            if shortcut.key == key:
                return shortcut
        return None
