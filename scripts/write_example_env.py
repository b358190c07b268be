from __future__ import annotations

import argparse
from pathlib import Path

_REPO_ROOT = Path(__file__).resolve().parents[1]

EXAMPLE_ENV = """\
# docinbox configuration
# Tag IDs come from your godocs server: python scripts/list_tags.py

GODOCS_SERVER=http://test:8000
INBOX_SHORTCUTS=l:18,m:20,h:13,c:10

# Date inference (Ollama). Leave blank for http://localhost:11434 and gemma3:4b.
OLLAMA_URL=
OLLAMA_MODEL=
DATE_INFERENCE_PROVIDER=ollama

OCR_LANG=eng
LOG_LEVEL=INFO
"""


def main() -> None:
    parser = argparse.ArgumentParser(description="Write an example .env for docinbox.")
    parser.add_argument("--path", default=str(_REPO_ROOT / ".env"))
    parser.add_argument("--force", action="store_true", help="Overwrite an existing file.")
    args = parser.parse_args()

    target = Path(args.path)
    if target.exists() and not args.force:
        raise SystemExit(f"{target} already exists; pass --force to overwrite.")
    target.write_text(EXAMPLE_ENV, encoding="utf-8")
    print(f"Wrote {target}")


if __name__ == "__main__":
    main()
