from __future__ import annotations

import argparse
from pathlib import Path

from dotenv import load_dotenv

_REPO_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(_REPO_ROOT / ".env", override=False)

from docinbox.adapters.godocs_client import GodocsClient
from docinbox.adapters.llm_ollama import OllamaDateInferenceAdapter
from docinbox.adapters.ocr_tesseract_adapter import TesseractOCRAdapter
from docinbox.logging_ import setup_logging
from docinbox.services.enrichment_service import EnrichmentService
from docinbox.services.stage_tracker import StageTracker
from docinbox.services.triage_state import ProvenanceRegistry, TriageState
from docinbox.settings import (
    GODOCS_SERVER,
    LLM_TIMEOUT_SECONDS,
    LOG_LEVEL,
    OLLAMA_MODEL,
    OLLAMA_URL,
    STORE_TIMEOUT_SECONDS,
)


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Run OCR and date inference for one document in the foreground."
    )
    parser.add_argument("ulid")
    parser.add_argument("--force", action="store_true", help="Run even if the document has text.")
    args = parser.parse_args()

    setup_logging(LOG_LEVEL)
    if not GODOCS_SERVER:
        raise SystemExit("Missing GODOCS_SERVER in .env or environment.")
    store = GodocsClient(GODOCS_SERVER, timeout=STORE_TIMEOUT_SECONDS)
    status = store.fetch_document_status(args.ulid)
    if status.has_text and not args.force:
        print(f"{args.ulid} already has text; use --force to re-run.")
        return

    service = EnrichmentService(
        store,
        TesseractOCRAdapter(),
        OllamaDateInferenceAdapter(OLLAMA_URL, OLLAMA_MODEL, timeout=LLM_TIMEOUT_SECONDS),
        StageTracker(),
        ProvenanceRegistry(TriageState()),
    )
    outcome = service.process(args.ulid, status.document_type)
    print(f"{args.ulid}: {outcome.value if outcome else 'already running'}")


if __name__ == "__main__":
    main()
