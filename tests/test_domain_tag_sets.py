from docinbox.domain.models import RecentTagSet, Tag
from docinbox.domain.tag_sets import build_recent_set, push_recent, tag_set_label


def _set(label: str) -> RecentTagSet:
    return RecentTagSet(tags=(), label=label)


def test_tag_set_label_sorted_and_joined() -> None:
    assert tag_set_label(["tax", "bank"]) == "bank, tax"
    assert tag_set_label([]) == ""


def test_build_recent_set_keeps_tag_details() -> None:
    recent = build_recent_set([Tag(7, "tax", "#f00"), Tag(5, "bank")])

    assert recent.label == "bank, tax"
    assert [(entry.tag_id, entry.color) for entry in recent.tags] == [(7, "#f00"), (5, "")]


def test_push_recent_moves_duplicate_to_front() -> None:
    history = [_set("a"), _set("b")]

    updated = push_recent(history, _set("b"))

    assert [entry.label for entry in updated] == ["b", "a"]
    assert [entry.label for entry in history] == ["a", "b"]


def test_push_recent_truncates_to_capacity() -> None:
    history = [_set("c"), _set("b"), _set("a")]

    updated = push_recent(history, _set("d"), capacity=3)

    assert [entry.label for entry in updated] == ["d", "c", "b"]
