from __future__ import annotations

from .models import Shortcut, Tag


def parse_shortcuts(raw: str) -> list[Shortcut]:
    """
    Parse `key:tag_id` pairs separated by commas.

    Example:
        >>> parse_shortcuts("l:18, m:20")
        [Shortcut(key='l', tag_id=18, name='', color=''), Shortcut(key='m', tag_id=20, name='', color='')]
    """
    shortcuts: list[Shortcut] = []
    for chunk in (raw or "").split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        key, sep, tag_id = chunk.partition(":")
        key = key.strip()
        if not sep or not key or not tag_id.strip().isdigit():
            raise ValueError(f"Invalid shortcut {chunk!r}; expected key:tag_id")
        shortcuts.append(Shortcut(key=key, tag_id=int(tag_id.strip())))
    return shortcuts


def resolve_shortcuts(shortcuts: list[Shortcut], tags: dict[int, Tag]) -> list[Shortcut]:
    """Fill name and color from server tags; unknown tag ids raise."""
    resolved: list[Shortcut] = []
    for shortcut in shortcuts:
        tag = tags.get(shortcut.tag_id)
        if tag is None:
            ordered = sorted(tags.values(), key=lambda t: t.tag_id)
            available = ", ".join(f"id={item.tag_id} name={item.name}" for item in ordered)
            raise RuntimeError(
                f"tag_id {shortcut.tag_id} (key '{shortcut.key}') not found on server. "
                f"Available tags: {available}"
            )
        resolved.append(
            Shortcut(key=shortcut.key, tag_id=shortcut.tag_id, name=tag.name, color=tag.color)
        )
    return resolved


def reserved_key_collisions(shortcuts: list[Shortcut], reserved: dict[str, str]) -> list[str]:
    return [
        f"shortcut key '{shortcut.key}' ({shortcut.name}) collides with reserved key for "
        f"{reserved[shortcut.key]}"
        for shortcut in shortcuts
        if shortcut.key in reserved
    ]
