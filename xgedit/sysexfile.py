"""Reading and writing of SysEx session files and QS300 user voice presets."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Iterator

SYSEX_START = 0xF0
SYSEX_END = 0xF7

YAMAHA_ID = 0x43
QS300_MODEL = 0x4B
USER_VOICE_ADDRESS = 0x11

PRESET_SIZE = 0x188  # 392 bytes: one QS300 user voice bulk dump.
USER_VOICES = 32


class SysexFileError(Exception):
    """Raised when a SysEx file cannot be read, written or understood."""


def _iter_sysex(data: bytes) -> Iterator[bytes]:
    start = 0
    while True:
        end = data.find(SYSEX_END, start)
        if end < 0:
            return
        yield bytes(data[start : end + 1])
        start = end + 1


def split_sysex(data: bytes) -> list[bytes]:
    """Split raw bytes into messages, each ending with its 0xF7 terminator.

    Bytes after the last terminator belong to no complete message and are
    dropped.
    """
    return list(_iter_sysex(bytes(data)))


def read_sysex_file(path: str | os.PathLike[str]) -> list[bytes]:
    """Read every complete SysEx message stored in the file at *path*."""
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise SysexFileError(f"cannot read {os.fspath(path)!r}: {exc}") from exc
    return split_sysex(data)


def write_sysex_file(path: str | os.PathLike[str], messages: Iterable[bytes]) -> int:
    """Write *messages* one after another to *path*, replacing its contents.

    Returns the number of bytes written.
    """
    payload = b"".join(bytes(message) for message in messages)
    try:
        with Path(path).open("wb") as stream:
            stream.write(payload)
    except OSError as exc:
        raise SysexFileError(f"cannot write {os.fspath(path)!r}: {exc}") from exc
    return len(payload)


def is_user_voice_dump(data: bytes) -> bool:
    """Whether *data* starts like a QS300 user voice bulk dump."""
    return (
        len(data) > 6
        and data[1] == YAMAHA_ID
        and data[3] == QS300_MODEL
        and data[6] == USER_VOICE_ADDRESS
    )


def fix_preset_checksum(data: bytes, user: int) -> bytes:
    """Retarget a user voice dump to voice *user* and recompute its checksum."""
    if len(data) != PRESET_SIZE:
        raise SysexFileError(
            f"user voice dump must be {PRESET_SIZE} bytes, got {len(data)}"
        )
    if not 0 <= user < USER_VOICES:
        raise ValueError(f"user voice out of range: {user}")
    fixed = bytearray(data)
    fixed[7] = user
    cksum = 0
    for byte in fixed[4 : PRESET_SIZE - 2]:
        cksum = (cksum + byte) & 0x7F
    fixed[PRESET_SIZE - 2] = (0x80 - cksum) & 0xFF
    return bytes(fixed)


def read_preset_file(path: str | os.PathLike[str], user: int) -> bytes:
    """Load a user voice preset file, retargeted to voice *user*."""
    try:
        with Path(path).open("rb") as stream:
            data = stream.read(PRESET_SIZE)
    except OSError as exc:
        raise SysexFileError(f"cannot read {os.fspath(path)!r}: {exc}") from exc
    if len(data) < PRESET_SIZE or not is_user_voice_dump(data):
        raise SysexFileError(f"not a user voice preset: {os.fspath(path)!r}")
    return fix_preset_checksum(data, user)