from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

_REPO_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(_REPO_ROOT / ".env", override=False)

from docinbox.adapters.godocs_client import GodocsClient


def main() -> None:
    server = os.getenv("GODOCS_SERVER", "").strip()
    if not server:
        raise SystemExit("Missing GODOCS_SERVER in .env or environment.")
    client = GodocsClient(server)
    tags = client.fetch_tags()
    print(f"{len(tags)} tags on {server}")
    for tag in sorted(tags, key=lambda item: (item.tag_group, item.sort_order, item.name)):
        print(f"  id={tag.tag_id:<4} name={tag.name:<24} group={tag.tag_group or '-'}")
    print("\nUse these ids in INBOX_SHORTCUTS, e.g. INBOX_SHORTCUTS=l:18,m:20")


if __name__ == "__main__":
    main()
