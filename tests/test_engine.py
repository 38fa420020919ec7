from __future__ import annotations

import random
from typing import List, Optional

import pytest

from edit_engine.buffer import Direction, load
from edit_engine.collaborators import (
    CollaboratorError,
    MemoryClipboard,
    MemoryDocumentStore,
)
from edit_engine.commands import (
    BeginSelection,
    ClearSelection,
    Commit,
    Copy,
    Cut,
    DeleteBackward,
    Escape,
    ExtendSelection,
    InsertChar,
    MoveCursor,
    NewLine,
    Paste,
    Redo,
    Save,
    Undo,
)
from edit_engine.config import EngineSettings
from edit_engine.engine import EditEngine, EditResult, EditSession


class FailingClipboard:
    name = "failing_clipboard"

    def get_text(self) -> str:
        raise CollaboratorError(self.name, "clipboard unavailable")

    def set_text(self, text: str) -> None:
        raise CollaboratorError(self.name, "clipboard unavailable")


class FailingStore:
    def __init__(self, text: Optional[str] = None) -> None:
        self.text = text

    def read(self) -> Optional[str]:
        return self.text

    def write(self, text: str) -> None:
        raise CollaboratorError("failing_store", "disk full")


def make_engine(text: str = "", **kwargs) -> EditEngine:
    return EditEngine(EditSession(buffer=load(text), **kwargs))


def type_text(engine: EditEngine, text: str) -> List[EditResult]:
    results = []
    for ch in text:
        if ch == "\n":
            results.append(engine.dispatch(NewLine()))
        else:
            results.append(engine.dispatch(InsertChar(ch)))
    return results


def select_right(engine: EditEngine, count: int) -> None:
    engine.dispatch(BeginSelection())
    for _ in range(count):
        engine.dispatch(ExtendSelection(Direction.RIGHT))


def test_each_edit_commits_one_snapshot() -> None:
    engine = make_engine()

    results = type_text(engine, "hi")

    session = engine.session
    assert [result.status for result in results] == ["inserted", "inserted"]
    assert session.buffer.snapshot() == ("hi",)
    assert len(session.history) == 3


def test_navigation_does_not_commit() -> None:
    engine = make_engine("abc")

    result = engine.dispatch(MoveCursor(Direction.RIGHT))
    blocked = engine.dispatch(MoveCursor(Direction.UP))

    assert result.status == "moved"
    assert blocked.status == "noop"
    assert len(engine.session.history) == 1


def test_delete_backward_at_origin_does_not_commit() -> None:
    engine = make_engine("abc")

    result = engine.dispatch(DeleteBackward())

    assert result.status == "noop"
    assert result.changed is False
    assert len(engine.session.history) == 1


def test_new_line_splits_at_cursor() -> None:
    engine = make_engine("ab\ncd")
    engine.session.buffer.set_cursor(0, 2)

    result = engine.dispatch(NewLine())

    assert result.status == "split"
    assert engine.session.buffer.snapshot() == ("ab", "", "cd")
    assert engine.session.buffer.cursor == (1, 0)


def test_invalid_insert_char_is_rejected() -> None:
    engine = make_engine("abc")

    for ch in ("", "ab", "\n"):
        result = engine.dispatch(InsertChar(ch))
        assert result.consumed is False
        assert result.status == "invalid"

    assert engine.session.buffer.snapshot() == ("abc",)
    assert len(engine.session.history) == 1


def test_unknown_command_raises_type_error() -> None:
    engine = make_engine()

    with pytest.raises(TypeError):
        engine.dispatch(object())  # type: ignore[arg-type]


def test_undo_redo_restore_committed_snapshots() -> None:
    engine = make_engine()
    type_text(engine, "ab")

    undone = engine.dispatch(Undo())
    assert undone.status == "undone"
    assert engine.session.buffer.snapshot() == ("a",)
    assert engine.session.buffer.cursor == (0, 1)

    redone = engine.dispatch(Redo())
    assert redone.status == "redone"
    assert engine.session.buffer.snapshot() == ("ab",)


def test_undo_and_redo_at_history_ends_report_noop() -> None:
    engine = make_engine("x")

    undo = engine.dispatch(Undo())
    redo = engine.dispatch(Redo())

    assert (undo.status, undo.message) == ("noop", "oldest_snapshot")
    assert (redo.status, redo.message) == ("noop", "newest_snapshot")


def test_edit_after_undo_discards_redo_branch() -> None:
    engine = make_engine()
    type_text(engine, "ab")
    engine.dispatch(Undo())

    engine.dispatch(InsertChar("c"))

    session = engine.session
    assert session.buffer.snapshot() == ("ac",)
    assert len(session.history) == 3
    assert not session.history.can_redo()
    assert engine.dispatch(Redo()).status == "noop"


def test_undo_does_not_alias_history() -> None:
    engine = make_engine()
    type_text(engine, "a")
    engine.dispatch(Undo())

    engine.session.buffer.insert_char(0, 0, "z")

    assert engine.session.history.current.snapshot() == ("",)


def test_cut_moves_selection_to_clipboard() -> None:
    clipboard = MemoryClipboard()
    engine = make_engine("hello world", clipboard=clipboard)
    select_right(engine, 5)

    result = engine.dispatch(Cut())

    session = engine.session
    assert result.status == "cut"
    assert result.payload == "hello"
    assert clipboard.get_text() == "hello"
    assert session.buffer.snapshot() == (" world",)
    assert session.buffer.cursor == (0, 0)
    assert session.selection.active is False
    assert len(session.history) == 2


def test_cut_without_selection_is_not_consumed() -> None:
    engine = make_engine("abc")

    result = engine.dispatch(Cut())

    assert result.consumed is False
    assert result.status == "no_selection"


def test_copy_keeps_buffer_and_selection() -> None:
    clipboard = MemoryClipboard()
    engine = make_engine("one\ntwo", clipboard=clipboard)
    engine.session.buffer.set_cursor(0, 1)
    engine.dispatch(BeginSelection())
    engine.dispatch(ExtendSelection(Direction.DOWN))

    result = engine.dispatch(Copy())

    assert result.status == "copied"
    assert clipboard.get_text() == "ne\nt"
    assert engine.session.buffer.snapshot() == ("one", "two")
    assert engine.session.selection.active is True
    assert len(engine.session.history) == 1


def test_extend_selection_requires_active_selection() -> None:
    engine = make_engine("abc")

    plain = engine.dispatch(ExtendSelection(Direction.RIGHT))
    keyed = engine.dispatch(ExtendSelection(Direction.RIGHT, begin_if_inactive=True))

    assert (plain.consumed, plain.status) == (False, "no_selection")
    assert keyed.status == "selection_extended"
    assert engine.session.selection.bounds() == ((0, 0), (0, 1))


def test_paste_inserts_multi_line_text_at_cursor() -> None:
    engine = make_engine("ad")
    engine.session.buffer.set_cursor(0, 1)

    result = engine.dispatch(Paste("b\nc"))

    assert result.status == "pasted"
    assert result.payload == 2
    assert engine.session.buffer.snapshot() == ("ab", "cd")
    assert engine.session.buffer.cursor == (1, 1)
    assert len(engine.session.history) == 2


def test_paste_reads_clipboard_when_no_text_given() -> None:
    engine = make_engine(clipboard=MemoryClipboard("xyz"))

    engine.dispatch(Paste())

    assert engine.session.buffer.snapshot() == ("xyz",)


def test_paste_of_empty_clipboard_is_noop() -> None:
    engine = make_engine("abc")

    result = engine.dispatch(Paste())

    assert result.status == "noop"
    assert len(engine.session.history) == 1


def test_cut_then_paste_restores_text() -> None:
    engine = make_engine("abc\ndef")
    engine.session.buffer.set_cursor(0, 1)
    engine.dispatch(BeginSelection())
    engine.dispatch(ExtendSelection(Direction.DOWN))
    engine.dispatch(Cut())
    assert engine.session.buffer.snapshot() == ("aef",)

    engine.dispatch(Paste())

    assert engine.session.buffer.snapshot() == ("abc", "def")


def test_clipboard_failure_leaves_state_untouched() -> None:
    engine = make_engine("hello", clipboard=FailingClipboard())
    select_right(engine, 2)

    result = engine.dispatch(Cut())

    session = engine.session
    assert result.status == "cut_failed"
    assert "clipboard unavailable" in (result.message or "")
    assert session.buffer.snapshot() == ("hello",)
    assert session.selection.active is True
    assert len(session.history) == 1


def test_paste_clipboard_failure_leaves_state_untouched() -> None:
    engine = make_engine("abc", clipboard=FailingClipboard())
    engine.session.buffer.set_cursor(0, 1)

    result = engine.dispatch(Paste())

    session = engine.session
    assert result.consumed is True
    assert result.status == "paste_failed"
    assert session.buffer.snapshot() == ("abc",)
    assert session.buffer.cursor == (0, 1)
    assert len(session.history) == 1
    assert session.history.index == 0


def test_copy_clipboard_failure_keeps_selection() -> None:
    engine = make_engine("hello", clipboard=FailingClipboard())
    select_right(engine, 3)

    result = engine.dispatch(Copy())

    session = engine.session
    assert result.status == "copy_failed"
    assert session.selection.active is True
    assert session.selection.bounds() == ((0, 0), (0, 3))
    assert session.buffer.snapshot() == ("hello",)
    assert len(session.history) == 1


def test_text_edits_and_undo_clear_selection() -> None:
    engine = make_engine("abc")
    select_right(engine, 1)
    cleared: List[object] = []
    engine.session.bus.subscribe("selection.cleared", cleared.append)

    engine.dispatch(InsertChar("x"))
    assert engine.session.selection.active is False

    select_right(engine, 1)
    engine.dispatch(Undo())
    assert engine.session.selection.active is False
    assert len(cleared) == 2


def test_escape_and_clear_selection() -> None:
    engine = make_engine("abc")
    select_right(engine, 1)

    escaped = engine.dispatch(Escape())
    assert escaped.status == "escape"
    assert engine.session.selection.active is False

    select_right(engine, 1)
    cleared = engine.dispatch(ClearSelection())
    assert cleared.status == "selection_cleared"
    assert engine.session.selection.bounds() is None


def test_save_writes_tip_and_resets_pointer() -> None:
    store = MemoryDocumentStore("one")
    engine = EditEngine(EditSession.open(store))
    engine.dispatch(InsertChar("!"))
    engine.dispatch(Undo())
    assert engine.session.buffer.snapshot() == ("one",)

    result = engine.dispatch(Save())

    session = engine.session
    assert result.status == "saved"
    assert store.text == "!one"
    assert store.writes == 1
    assert session.history.index == len(session.history) - 1
    assert session.buffer.snapshot() == ("!one",)


def test_save_at_tip_keeps_cursor() -> None:
    store = MemoryDocumentStore("ab\ncd")
    engine = EditEngine(EditSession.open(store))
    engine.dispatch(MoveCursor(Direction.DOWN))
    engine.dispatch(MoveCursor(Direction.RIGHT))

    engine.dispatch(Save())

    assert store.text == "ab\ncd"
    assert engine.session.buffer.cursor == (1, 1)


def test_save_failure_keeps_history_pointer() -> None:
    engine = EditEngine(EditSession.open(FailingStore("one")))
    engine.dispatch(InsertChar("!"))
    engine.dispatch(Undo())

    result = engine.dispatch(Save())

    session = engine.session
    assert result.status == "save_failed"
    assert session.history.index == 0
    assert session.buffer.snapshot() == ("one",)


def test_save_without_store() -> None:
    engine = make_engine("abc")

    result = engine.dispatch(Save())

    assert (result.consumed, result.status) == (False, "no_store")


def test_manual_commit_when_auto_commit_disabled() -> None:
    engine = make_engine(settings=EngineSettings(auto_commit=False))
    type_text(engine, "ab")
    assert len(engine.session.history) == 1

    engine.dispatch(Commit())

    assert len(engine.session.history) == 2
    assert engine.session.history.tip.snapshot() == ("ab",)


def test_bus_reports_results_and_changes() -> None:
    engine = make_engine()
    results: List[object] = []
    changes: List[object] = []
    engine.session.bus.subscribe("engine.result", results.append)
    engine.session.bus.subscribe("buffer.changed", changes.append)

    engine.dispatch_many([InsertChar("a"), MoveCursor(Direction.LEFT)])

    assert len(results) == 2
    assert changes == [(0, 1)]


def test_mirror_reports_selection_and_history() -> None:
    engine = make_engine("abc")
    type_text(engine, "x")
    select_right(engine, 1)

    mirror = engine.session.mirror()

    assert mirror.text == "xabc"
    assert mirror.selection == ((0, 1), (0, 2))
    assert mirror.attributes["history"] == "2/2"


def test_random_commands_preserve_buffer_invariants() -> None:
    rng = random.Random(42)
    engine = make_engine(
        "first line\n\nthird", settings=EngineSettings(validate_after_dispatch=True)
    )
    directions = list(Direction)
    factories = [
        lambda: InsertChar(rng.choice("ab ")),
        DeleteBackward,
        NewLine,
        lambda: MoveCursor(rng.choice(directions)),
        BeginSelection,
        lambda: ExtendSelection(rng.choice(directions), begin_if_inactive=True),
        Cut,
        Copy,
        Paste,
        Undo,
        Redo,
    ]

    for _ in range(400):
        engine.dispatch(rng.choice(factories)())

    engine.session.buffer.validate()
    session = engine.session
    assert 0 <= session.history.index < len(session.history)
