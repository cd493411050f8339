"""Persistent editor settings and command-line handling."""

from __future__ import annotations

import configparser
import json
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Callable, Sequence

APP_TITLE = "xgedit"
APP_SUBTITLE = "An XG MIDI device editor"
APP_VERSION = "1.0.0"

_PROGRAM = "Program"
_MIDI = "Options/Midi"
_DISPLAY = "Options/Display"
_VIEW = "Options/View"
_DEFAULT = "Default"
_USERVOICE = "Uservoice"


class UsageExit(Exception):
    """Raised when the command line asks for help or version output only."""

    def __init__(self, message: str, status: int = 0) -> None:
        super().__init__(message)
        self.message = message
        self.status = status


# (section, key, attribute) for every persisted setting.
_LAYOUT: tuple[tuple[str, str, str], ...] = (
    (_MIDI, "Inputs", "midi_inputs"),
    (_MIDI, "Outputs", "midi_outputs"),
    (_DISPLAY, "ConfirmReset", "confirm_reset"),
    (_DISPLAY, "ConfirmRemove", "confirm_remove"),
    (_DISPLAY, "CompletePath", "complete_path"),
    (_DISPLAY, "MaxRecentFiles", "max_recent_files"),
    (_DISPLAY, "RandomizePercent", "randomize_percent"),
    (_DISPLAY, "BaseFontSize", "base_font_size"),
    (_DISPLAY, "StyleTheme", "style_theme"),
    (_DISPLAY, "ColorTheme", "color_theme"),
    (_VIEW, "Menubar", "menubar"),
    (_VIEW, "Statusbar", "statusbar"),
    (_VIEW, "Toolbar", "toolbar"),
    (_DEFAULT, "SessionDir", "session_dir"),
    (_DEFAULT, "PresetDir", "preset_dir"),
    (_DEFAULT, "RecentFiles", "recent_files"),
    (_USERVOICE, "AutoSend", "uservoice_auto_send"),
)

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _to_bool(text: str) -> bool:
    lowered = text.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ValueError(text)


def _to_list(text: str) -> list[str]:
    value = json.loads(text)
    if not isinstance(value, list):
        raise ValueError(text)
    return [str(item) for item in value]


def _encode(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, list):
        return json.dumps(value)
    return str(value)


@dataclass
class Options:
    """Editor settings, with the defaults used when nothing is stored."""

    session_files: list[str] = field(default_factory=list)

    confirm_reset: bool = True
    confirm_remove: bool = True
    complete_path: bool = True
    randomize_percent: float = 20.0
    base_font_size: int = 0
    style_theme: str = "Skulpture"
    color_theme: str = ""

    menubar: bool = True
    statusbar: bool = True
    toolbar: bool = True

    session_dir: str = ""
    preset_dir: str = ""

    max_recent_files: int = 5
    recent_files: list[str] = field(default_factory=list)

    midi_inputs: list[str] = field(default_factory=list)
    midi_outputs: list[str] = field(default_factory=list)

    uservoice_auto_send: bool = False

    def _converter(self, attr: str) -> Callable[[str], object]:
        default = getattr(type(self)(), attr)
        if isinstance(default, bool):
            return _to_bool
        if isinstance(default, int):
            return int
        if isinstance(default, float):
            return float
        if isinstance(default, list):
            return _to_list
        return str

    def load(self, path: str | os.PathLike[str]) -> None:
        """Read settings from *path*; missing or unreadable values keep defaults."""
        defaults = type(self)()
        for f in fields(self):
            if f.name != "session_files":
                setattr(self, f.name, getattr(defaults, f.name))

        parser = configparser.ConfigParser(interpolation=None)
        parser.optionxform = str  # type: ignore[assignment]
        parser.read(Path(path), encoding="utf-8")

        for section, key, attr in _LAYOUT:
            if not parser.has_option(section, key):
                continue
            raw = parser.get(section, key)
            try:
                setattr(self, attr, self._converter(attr)(raw))
            except (ValueError, json.JSONDecodeError):
                continue

    def save(self, path: str | os.PathLike[str]) -> None:
        """Write every setting, plus the program version, to *path*."""
        parser = configparser.ConfigParser(interpolation=None)
        parser.optionxform = str  # type: ignore[assignment]
        parser[_PROGRAM] = {"Version": APP_VERSION}
        for section, key, attr in _LAYOUT:
            if not parser.has_section(section):
                parser.add_section(section)
            parser.set(section, key, _encode(getattr(self, attr)))

        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("w", encoding="utf-8") as stream:
            parser.write(stream)

    def usage(self, prog: str) -> str:
        """Return the command-line help text."""
        eot = "\n\t"
        eol = "\n\n"
        return (
            f"Usage: {prog} [options] [session-file]{eol}"
            f"{APP_TITLE} - {APP_SUBTITLE}{eol}"
            f"Options:{eol}"
            f"  -h, --help{eot}Show help about command line options.{eol}"
            f"  -v, --version{eot}Show version information{eol}"
        )

    def parse_args(self, args: Sequence[str]) -> list[str]:
        """Parse a full argument list (program name first).

        Session files are appended to :attr:`session_files` as absolute
        paths and the updated list is returned. Help and version requests
        raise :class:`UsageExit` carrying the text to show.
        """
        if not args:
            return self.session_files
        prog = args[0]
        positional = False
        for arg in args[1:]:
            if positional:
                self.session_files.append(os.path.abspath(arg))
                continue
            if arg in ("-h", "--help"):
                raise UsageExit(self.usage(prog))
            if arg in ("-v", "--version"):
                raise UsageExit(f"{APP_TITLE}: {APP_VERSION}\n")
            self.session_files.append(os.path.abspath(arg))
            positional = True
        return self.session_files