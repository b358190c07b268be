from unittest.mock import Mock

import pytest

from docinbox.domain.errors import StoreError, UndoError
from docinbox.domain.models import ItemMoveAction, TagAddAction
from docinbox.services.triage_state import TriageState
from docinbox.services.undo_service import UndoService


def _undo() -> tuple[UndoService, Mock]:
    store = Mock()
    return UndoService(store, TriageState()), store


def test_undo_removes_added_tag_exactly_once() -> None:
    service, store = _undo()
    service.record(TagAddAction(doc_id="D3", doc_name="scan.pdf", tag_id=18, tag_name="letters"))

    assert service.undo() is True
    store.remove_tag.assert_called_once_with("D3", 18)

    store.reset_mock()
    assert service.undo() is False
    assert store.mock_calls == []


def test_undo_without_record_returns_false() -> None:
    service, store = _undo()

    assert service.available is False
    assert service.undo() is False
    store.remove_tag.assert_not_called()


def test_record_replaces_previous_action() -> None:
    service, store = _undo()
    service.record(TagAddAction("D1", "one.pdf", 1, "a"))
    service.record(TagAddAction("D2", "two.pdf", 2, "b"))

    assert service.description == "two.pdf"
    service.undo()

    store.remove_tag.assert_called_once_with("D2", 2)


def test_description_falls_back_to_doc_id() -> None:
    service, _ = _undo()
    service.record(TagAddAction("D1", "", 1, "a"))

    assert service.available is True
    assert service.description == "D1"


def test_undo_item_move_restores_file(tmp_path) -> None:
    inbox = tmp_path / "inbox"
    tagged = tmp_path / "tagged" / "reference"
    inbox.mkdir()
    tagged.mkdir(parents=True)
    (tagged / "notes.md").write_text("hello")
    service, store = _undo()
    service.record(ItemMoveAction("notes.md", str(inbox), str(tagged)))

    assert service.undo() is True

    assert (inbox / "notes.md").read_text() == "hello"
    assert not (tagged / "notes.md").exists()
    store.remove_tag.assert_not_called()


def test_failed_undo_is_cleared_and_raises() -> None:
    service, store = _undo()
    store.remove_tag.side_effect = StoreError("500")
    service.record(TagAddAction("D1", "one.pdf", 1, "a"))

    with pytest.raises(UndoError, match="one.pdf"):
        service.undo()

    assert service.available is False
    assert service.undo() is False
