"""Session bookkeeping: file name, untitled numbering, dirty state and recent files."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, Sequence

from xgedit.options import Options

UNTITLED = "Untitled"
MODIFIED = "[modified]"

SAVE = "save"
DISCARD = "discard"
CANCEL = "cancel"

Confirm = Callable[[str], str]
Saver = Callable[["Session"], bool]
Resetter = Callable[[], None]


def session_name(filename: str, untitled: int, complete_path: bool) -> str:
    """Format a session file name for display.

    An empty name gives "Untitled<n>"; otherwise the full path is kept when
    *complete_path* is set, or else only the base name up to its first dot.
    """
    if not filename:
        return f"{UNTITLED}{untitled}"
    if complete_path:
        return filename
    return Path(filename).name.split(".", 1)[0]


def update_recent_files(recent: Sequence[str], filename: str) -> list[str]:
    """Return the recent-file list with *filename* moved to the front."""
    return [filename, *(item for item in recent if item != filename)]


def trim_recent_files(recent: Sequence[str], limit: int) -> list[str]:
    """Return the recent-file list cut down to at most *limit* entries."""
    return list(recent[: max(limit, 0)])


class Session:
    """State of the currently edited session.

    *confirm* is asked, with the session name, what to do with unsaved
    changes and answers "save", "discard" or anything else to cancel.
    *save* stores the session and reports success; *reset* brings the
    device model back to its defaults when a new session starts.
    """

    def __init__(
        self,
        options: Options | None = None,
        confirm: Confirm | None = None,
        save: Saver | None = None,
        reset: Resetter | None = None,
    ) -> None:
        self.options = options
        self.confirm = confirm
        self.save = save
        self.reset = reset
        self.filename = ""
        self.untitled = 0
        self.dirty_count = 0

    def name(self) -> str:
        """Display name of the current session."""
        complete = bool(self.options and self.options.complete_path)
        return session_name(self.filename, self.untitled, complete)

    def title(self) -> str:
        """Window title: the session name, flagged when modified."""
        text = self.name()
        if self.is_dirty():
            text += " " + MODIFIED
        return text

    def is_dirty(self) -> bool:
        """Whether there are unsaved changes."""
        return self.dirty_count > 0

    def mark_changed(self) -> None:
        """Record one more unsaved change."""
        self.dirty_count += 1

    def close(self, confirm: Confirm | None = None) -> bool:
        """Try to close the session, asking about unsaved changes.

        Returns True when the session may be closed; it is then clean.
        """
        if self.is_dirty():
            ask = confirm if confirm is not None else self.confirm
            choice = ask(self.name()) if ask is not None else CANCEL
            if choice == SAVE:
                if self.save is None or not self.save(self):
                    return False
            elif choice != DISCARD:
                return False
        self.dirty_count = 0
        return True

    def new(self) -> bool:
        """Start a fresh untitled session, if the current one may be closed."""
        if not self.close():
            return False
        if self.reset is not None:
            self.reset()
        self.untitled += 1
        self.filename = ""
        self.dirty_count = 0
        return True

    def opened(self, path: str | os.PathLike[str]) -> None:
        """Adopt *path* as the session file after loading or saving it."""
        filename = os.fspath(path)
        self.filename = filename
        self.dirty_count = 0
        if self.options is not None:
            self.options.recent_files = update_recent_files(
                self.options.recent_files, filename
            )
            self.options.session_dir = os.path.dirname(os.path.abspath(filename))