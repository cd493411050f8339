import os

import pytest

from xgedit.options import Options
from xgedit.session import (
    Session,
    session_name,
    trim_recent_files,
    update_recent_files,
)


def test_session_name_untitled():
    assert session_name("", 3, True) == "Untitled3"
    assert session_name("", 0, False) == "Untitled0"


def test_session_name_base_name():
    path = os.path.join("tmp", "dir", "song.syx")
    assert session_name(path, 1, False) == "song"
    assert session_name(os.path.join("a", "x.tar.syx"), 1, False) == "x"


def test_session_name_complete_path():
    path = os.path.join("tmp", "dir", "song.syx")
    assert session_name(path, 1, True) == path


def test_update_recent_files_moves_to_front():
    recent = ["a.syx", "b.syx", "c.syx"]
    result = update_recent_files(recent, "b.syx")
    assert result == ["b.syx", "a.syx", "c.syx"]
    assert recent == ["a.syx", "b.syx", "c.syx"]


def test_update_recent_files_new_entry():
    assert update_recent_files(["a.syx"], "z.syx") == ["z.syx", "a.syx"]


def test_trim_recent_files():
    recent = ["a", "b", "c", "d"]
    assert trim_recent_files(recent, 2) == ["a", "b"]
    assert trim_recent_files(recent, 10) == recent
    assert trim_recent_files(recent, -1) == []


def test_new_session_increments_untitled():
    resets = []
    session = Session(reset=lambda: resets.append(True))
    assert session.new()
    assert session.new()
    assert session.untitled == 2
    assert session.name() == "Untitled2"
    assert len(resets) == 2


def test_mark_changed_and_title():
    session = Session()
    session.new()
    assert not session.is_dirty()
    assert session.title() == session.name()
    session.mark_changed()
    assert session.is_dirty()
    assert session.title() == session.name() + " [modified]"


def test_close_clean_does_not_ask():
    asked = []
    session = Session(confirm=lambda name: asked.append(name) or "cancel")
    assert session.close()
    assert asked == []


@pytest.mark.parametrize("choice", ["cancel", "bogus"])
def test_close_dirty_cancelled(choice):
    session = Session()
    session.mark_changed()
    assert not session.close(lambda name: choice)
    assert session.is_dirty()


def test_close_dirty_discard():
    session = Session()
    session.mark_changed()
    assert session.close(lambda name: "discard")
    assert not session.is_dirty()


def test_close_dirty_without_confirm_refuses():
    session = Session()
    session.mark_changed()
    assert not session.close()
    assert session.is_dirty()


@pytest.mark.parametrize("saved", [True, False])
def test_close_dirty_save(saved):
    calls = []

    def saver(s):
        calls.append(s)
        return saved

    session = Session(save=saver)
    session.mark_changed()
    assert session.close(lambda name: "save") is saved
    assert calls == [session]
    assert session.is_dirty() is not saved


def test_new_refused_when_dirty_and_cancelled():
    session = Session(confirm=lambda name: "cancel")
    session.new()
    session.mark_changed()
    assert not session.new()
    assert session.untitled == 1


def test_opened_updates_options(tmp_path):
    options = Options(complete_path=False, recent_files=["other.syx"])
    session = Session(options=options)
    session.mark_changed()
    path = str(tmp_path / "bank.syx")
    session.opened(path)
    assert session.filename == path
    assert not session.is_dirty()
    assert options.recent_files == [path, "other.syx"]
    assert options.session_dir == str(tmp_path)
    assert session.name() == "bank"


def test_opened_twice_keeps_single_entry(tmp_path):
    options = Options()
    session = Session(options=options)
    path = str(tmp_path / "bank.syx")
    session.opened(path)
    session.opened(path)
    assert options.recent_files == [path]
    assert session.name() == path