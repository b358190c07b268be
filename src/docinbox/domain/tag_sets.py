from __future__ import annotations

from typing import Iterable

from .models import RecentTagSet, Tag, TagSetEntry

RECENT_SET_CAPACITY = 3


def tag_set_label(names: Iterable[str]) -> str:
    """
    Build the display label for a tag set: names sorted and comma-joined.

    Example:
        >>> tag_set_label(["tax", "bank"])
        'bank, tax'
    """
    return ", ".join(sorted(names))


def build_recent_set(tags: list[Tag]) -> RecentTagSet:
    entries = tuple(TagSetEntry(tag_id=tag.tag_id, name=tag.name, color=tag.color) for tag in tags)
    return RecentTagSet(tags=entries, label=tag_set_label(entry.name for entry in entries))


def push_recent(
    history: list[RecentTagSet],
    new_set: RecentTagSet,
    capacity: int = RECENT_SET_CAPACITY,
) -> list[RecentTagSet]:
    """
    Return a new history with `new_set` at the front, dropping any entry with
    the same label and truncating to `capacity`.

    Example:
        history = [RecentTagSet((...), "a"), RecentTagSet((...), "b")]
        push_recent(history, RecentTagSet((...), "b"))
        # labels: ['b', 'a']
    """
    filtered = [entry for entry in history if entry.label != new_set.label]
    return [new_set, *filtered][:capacity]
