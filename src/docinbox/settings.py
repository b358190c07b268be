from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

_REPO_ROOT = Path(__file__).resolve().parents[2]
load_dotenv(_REPO_ROOT / ".env", override=False)

DEFAULT_OLLAMA_URL = "http://localhost:11434"
DEFAULT_OLLAMA_MODEL = "gemma3:4b"
DEFAULT_TAG_COLOR = "#3498db"
RESERVED_KEYS = {
    "1": "recent tag set 1",
    "2": "recent tag set 2",
    "3": "recent tag set 3",
    "d": "done/next",
    "u": "undo",
}


def _default_thumb_dir() -> str:
    cache_root = os.getenv("XDG_CACHE_HOME") or str(Path.home() / ".cache")
    return str(Path(cache_root) / "docinbox" / "thumbs")


GODOCS_SERVER = os.getenv("GODOCS_SERVER", "").strip()
INBOX_SHORTCUTS = os.getenv("INBOX_SHORTCUTS", "")
OLLAMA_URL = os.getenv("OLLAMA_URL", "").strip()
OLLAMA_MODEL = os.getenv("OLLAMA_MODEL", "").strip()
DATE_INFERENCE_PROVIDER = os.getenv("DATE_INFERENCE_PROVIDER", "ollama").strip().lower()
THUMB_DIR = os.getenv("THUMB_DIR", "").strip() or _default_thumb_dir()
THUMB_WIDTH = int(os.getenv("THUMB_WIDTH", "600"))
OCR_LANG = os.getenv("OCR_LANG", "eng")
OCR_TIMEOUT_SECONDS = int(os.getenv("OCR_TIMEOUT_SECONDS", "120"))
STORE_TIMEOUT_SECONDS = float(os.getenv("STORE_TIMEOUT_SECONDS", "10"))
LLM_TIMEOUT_SECONDS = float(os.getenv("LLM_TIMEOUT_SECONDS", "60"))
BACKGROUND_WORKERS = int(os.getenv("BACKGROUND_WORKERS", "2"))
BACKGROUND_MAX_PENDING = int(os.getenv("BACKGROUND_MAX_PENDING", "16"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
