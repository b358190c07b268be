import pytest

from docinbox.domain.models import Shortcut, Tag
from docinbox.domain.shortcuts import (
    parse_shortcuts,
    reserved_key_collisions,
    resolve_shortcuts,
)


def test_parse_shortcuts_skips_blank_chunks() -> None:
    shortcuts = parse_shortcuts(" l:18, ,m:20 ")

    assert [(item.key, item.tag_id) for item in shortcuts] == [("l", 18), ("m", 20)]


@pytest.mark.parametrize("raw", ["l18", ":18", "l:abc"])
def test_parse_shortcuts_rejects_malformed_pairs(raw) -> None:
    with pytest.raises(ValueError, match="expected key:tag_id"):
        parse_shortcuts(raw)


def test_resolve_shortcuts_fills_name_and_color() -> None:
    resolved = resolve_shortcuts(
        [Shortcut(key="l", tag_id=18)],
        {18: Tag(18, "letters", "#00f")},
    )

    assert resolved == [Shortcut(key="l", tag_id=18, name="letters", color="#00f")]


def test_resolve_shortcuts_unknown_tag_lists_available() -> None:
    with pytest.raises(RuntimeError, match="id=3 name=bank"):
        resolve_shortcuts([Shortcut(key="x", tag_id=99)], {3: Tag(3, "bank")})


def test_reserved_key_collisions() -> None:
    warnings = reserved_key_collisions(
        [Shortcut(key="d", tag_id=1, name="docs"), Shortcut(key="l", tag_id=2, name="letters")],
        {"d": "done"},
    )

    assert len(warnings) == 1
    assert "'d' (docs)" in warnings[0]
