from __future__ import annotations

from pathlib import Path

import pyperclip
import pytest

from edit_engine.collaborators import (
    CollaboratorError,
    FileDocumentStore,
    MemoryClipboard,
    MemoryDocumentStore,
    SystemClipboard,
    make_clipboard,
)
from edit_engine.commands import InsertChar, Save
from edit_engine.config import EngineSettings
from edit_engine.engine import EditEngine, EditSession


def test_file_store_missing_file_reads_none(tmp_path: Path) -> None:
    store = FileDocumentStore(tmp_path / "missing.txt")

    assert store.read() is None


def test_file_store_write_replaces_contents(tmp_path: Path) -> None:
    path = tmp_path / "notes.txt"
    path.write_text("old contents that are longer", encoding="utf-8")
    store = FileDocumentStore(path)

    store.write("new\ntext")

    assert store.read() == "new\ntext"
    assert [p.name for p in tmp_path.iterdir()] == ["notes.txt"]


def test_file_store_preserves_line_endings(tmp_path: Path) -> None:
    path = tmp_path / "crlf.txt"
    path.write_bytes(b"one\r\ntwo\r\n")
    store = FileDocumentStore(path)

    text = store.read()
    assert text == "one\r\ntwo\r\n"
    store.write(text)

    assert path.read_bytes() == b"one\r\ntwo\r\n"


def test_file_store_write_failure_raises_collaborator_error(tmp_path: Path) -> None:
    store = FileDocumentStore(tmp_path / "absent" / "file.txt")

    with pytest.raises(CollaboratorError) as excinfo:
        store.write("text")

    assert excinfo.value.collaborator == "file_store"


def test_file_store_undecodable_file_raises_collaborator_error(tmp_path: Path) -> None:
    path = tmp_path / "latin1.txt"
    path.write_bytes(b"caf\xe9 \xff\xfe")
    store = FileDocumentStore(path)

    with pytest.raises(CollaboratorError) as excinfo:
        store.read()

    assert excinfo.value.collaborator == "file_store"
    assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)


def test_file_store_directory_path_raises_collaborator_error(tmp_path: Path) -> None:
    store = FileDocumentStore(tmp_path)

    with pytest.raises(CollaboratorError) as excinfo:
        store.read()

    assert isinstance(excinfo.value.__cause__, OSError)


def test_session_open_propagates_read_failure(tmp_path: Path) -> None:
    path = tmp_path / "broken.txt"
    path.write_bytes(b"\xff")

    with pytest.raises(CollaboratorError):
        EditSession.open(FileDocumentStore(path))


def test_session_round_trips_file_through_save(tmp_path: Path) -> None:
    path = tmp_path / "doc.txt"
    path.write_text("alpha\nbeta\n", encoding="utf-8")
    engine = EditEngine(EditSession.open(FileDocumentStore(path)))

    assert engine.session.buffer.snapshot() == ("alpha", "beta", "")
    engine.dispatch(InsertChar(">"))
    result = engine.dispatch(Save())

    assert result.status == "saved"
    assert path.read_text(encoding="utf-8") == ">alpha\nbeta\n"


def test_memory_store_counts_writes() -> None:
    store = MemoryDocumentStore()
    assert store.read() is None

    store.write("a")
    store.write("b")

    assert (store.text, store.writes) == ("b", 2)


def test_memory_clipboard_holds_last_text() -> None:
    clipboard = MemoryClipboard()
    assert clipboard.get_text() == ""

    clipboard.set_text("copied")

    assert clipboard.get_text() == "copied"


def test_system_clipboard_wraps_pyperclip_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    def fail(*_args: object) -> None:
        raise pyperclip.PyperclipException("no clipboard mechanism")

    monkeypatch.setattr(pyperclip, "copy", fail)
    monkeypatch.setattr(pyperclip, "paste", fail)
    clipboard = SystemClipboard()

    with pytest.raises(CollaboratorError):
        clipboard.set_text("x")
    with pytest.raises(CollaboratorError):
        clipboard.get_text()


def test_system_clipboard_delegates_to_pyperclip(monkeypatch: pytest.MonkeyPatch) -> None:
    stored: list[str] = []
    monkeypatch.setattr(pyperclip, "copy", stored.append)
    monkeypatch.setattr(pyperclip, "paste", lambda: "pasted")
    clipboard = SystemClipboard()

    clipboard.set_text("hello")

    assert stored == ["hello"]
    assert clipboard.get_text() == "pasted"


def test_make_clipboard_selects_backend() -> None:
    assert isinstance(make_clipboard("memory"), MemoryClipboard)
    assert isinstance(make_clipboard("system"), SystemClipboard)
    with pytest.raises(ValueError):
        make_clipboard("bogus")


def test_settings_defaults() -> None:
    settings = EngineSettings.from_env({})

    assert settings == EngineSettings()
    assert settings.auto_commit is True
    assert settings.validate_after_dispatch is False
    assert settings.clipboard == "memory"


def test_settings_read_environment() -> None:
    settings = EngineSettings.from_env(
        {
            "EDIT_ENGINE_AUTO_COMMIT": "0",
            "EDIT_ENGINE_VALIDATE": "yes",
            "EDIT_ENGINE_CLIPBOARD": " System ",
        }
    )

    assert settings.auto_commit is False
    assert settings.validate_after_dispatch is True
    assert settings.clipboard == "system"


def test_settings_reject_unknown_clipboard() -> None:
    with pytest.raises(ValueError):
        EngineSettings(clipboard="x11")
