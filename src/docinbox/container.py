from __future__ import annotations

import logging
from typing import Any

from docinbox.adapters.godocs_client import GodocsClient
from docinbox.adapters.llm_mock import NullDateInferenceAdapter
from docinbox.adapters.llm_ollama import OllamaDateInferenceAdapter
from docinbox.adapters.ocr_tesseract_adapter import TesseractOCRAdapter
from docinbox.adapters.thumbnails_pillow import PillowThumbnailRenderer
from docinbox.domain.shortcuts import parse_shortcuts, reserved_key_collisions, resolve_shortcuts
from docinbox.ports.date_inference_port import DateInferencePort
from docinbox.services.background import BackgroundRunner
from docinbox.services.enrichment_service import EnrichmentService
from docinbox.services.stage_tracker import StageTracker
from docinbox.services.tag_history import TagHistory
from docinbox.services.thumbnail_cache import ThumbnailCache
from docinbox.services.triage_service import TriageService
from docinbox.services.triage_state import ProvenanceRegistry, TriageState
from docinbox.services.undo_service import UndoService
from docinbox.settings import (
    BACKGROUND_MAX_PENDING,
    BACKGROUND_WORKERS,
    DATE_INFERENCE_PROVIDER,
    GODOCS_SERVER,
    INBOX_SHORTCUTS,
    LLM_TIMEOUT_SECONDS,
    OLLAMA_MODEL,
    OLLAMA_URL,
    RESERVED_KEYS,
    STORE_TIMEOUT_SECONDS,
    THUMB_DIR,
    THUMB_WIDTH,
)

logger = logging.getLogger(__name__)


def build_services(
    server_url: str | None = None,
    shortcuts_config: str | None = None,
    thumb_dir: str | None = None,
) -> dict[str, Any]:
    server_url = server_url if server_url is not None else GODOCS_SERVER
    if not server_url:
        raise RuntimeError("GODOCS_SERVER must be set.")
    shortcuts = parse_shortcuts(shortcuts_config if shortcuts_config is not None else INBOX_SHORTCUTS)
    if not shortcuts:
        raise RuntimeError("At least one tag shortcut must be configured in INBOX_SHORTCUTS.")

    store = GodocsClient(server_url, timeout=STORE_TIMEOUT_SECONDS)
    server_tags = store.fetch_tags()
    logger.info("Connected to godocs at %s (%d tags available)", server_url, len(server_tags))
    shortcuts = resolve_shortcuts(shortcuts, store.known_tags())
    for warning in reserved_key_collisions(shortcuts, RESERVED_KEYS):
        logger.warning(warning)

    date_inference: DateInferencePort = OllamaDateInferenceAdapter(
        base_url=OLLAMA_URL,
        model=OLLAMA_MODEL,
        timeout=LLM_TIMEOUT_SECONDS,
    )
    if DATE_INFERENCE_PROVIDER in {"none", "off", "mock"}:
        date_inference = NullDateInferenceAdapter()

    runner = BackgroundRunner(max_workers=BACKGROUND_WORKERS, max_pending=BACKGROUND_MAX_PENDING)
    state = TriageState()
    tracker = StageTracker()
    provenance = ProvenanceRegistry(state)
    ocr = TesseractOCRAdapter()
    enrichment = EnrichmentService(store, ocr, date_inference, tracker, provenance, runner)
    thumbnails = ThumbnailCache(
        thumb_dir or THUMB_DIR,
        store,
        PillowThumbnailRenderer(),
        runner=runner,
        width=THUMB_WIDTH,
    )
    history = TagHistory(store, state)
    undo = UndoService(store, state)
    triage = TriageService(
        store,
        shortcuts,
        tracker,
        enrichment,
        thumbnails,
        history,
        undo,
        provenance,
        server_url=server_url,
    )
    return {
        "triage_service": triage,
        "enrichment_service": enrichment,
        "thumbnail_cache": thumbnails,
        "tag_history": history,
        "undo_service": undo,
        "stage_tracker": tracker,
        "runner": runner,
        "store": store,
        "shortcuts": shortcuts,
    }
