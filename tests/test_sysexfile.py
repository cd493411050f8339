import pytest

from xgedit.sysexfile import (
    PRESET_SIZE,
    SysexFileError,
    fix_preset_checksum,
    is_user_voice_dump,
    read_preset_file,
    read_sysex_file,
    split_sysex,
    write_sysex_file,
)


def _preset(fill: int = 0x11) -> bytes:
    data = bytearray([fill] * PRESET_SIZE)
    data[0] = 0xF0
    data[1] = 0x43
    data[2] = 0x00
    data[3] = 0x4B
    data[6] = 0x11
    data[-1] = 0xF7
    return bytes(data)


def test_split_sysex_keeps_terminators_and_drops_tail():
    data = b"\xf0\x43\x10\x4c\x00\x00\x7e\x00\xf7\xf0\x01\xf7\x99\x98"
    messages = split_sysex(data)
    assert messages == [b"\xf0\x43\x10\x4c\x00\x00\x7e\x00\xf7", b"\xf0\x01\xf7"]


def test_split_sysex_empty_and_unterminated():
    assert split_sysex(b"") == []
    assert split_sysex(b"\xf0\x43\x10") == []


def test_split_sysex_rejoins_to_prefix():
    data = b"\xf0\x01\x02\xf7\xf0\x03\xf7"
    assert b"".join(split_sysex(data)) == data


def test_write_then_read_round_trip(tmp_path):
    messages = [b"\xf0\x43\x10\x4c\x02\x01\x00\x01\xf7", b"\xf0\x7e\x7f\x09\x01\xf7"]
    path = tmp_path / "session.syx"
    written = write_sysex_file(path, messages)
    assert written == sum(len(m) for m in messages)
    assert read_sysex_file(path) == messages


def test_write_truncates_existing(tmp_path):
    path = tmp_path / "s.syx"
    write_sysex_file(path, [b"\xf0\x01\x02\x03\x04\xf7"])
    write_sysex_file(path, [b"\xf0\xf7"])
    assert path.read_bytes() == b"\xf0\xf7"


def test_read_missing_file_raises(tmp_path):
    with pytest.raises(SysexFileError):
        read_sysex_file(tmp_path / "missing.syx")


def test_is_user_voice_dump():
    assert is_user_voice_dump(_preset()) is True
    assert is_user_voice_dump(b"\xf0\x43\x10\x4c\x00\x00\x7e\x00\xf7") is False
    assert is_user_voice_dump(b"\xf0\x43") is False


def test_fix_preset_checksum_sets_user_and_checksum():
    fixed = fix_preset_checksum(_preset(), 5)
    assert len(fixed) == PRESET_SIZE
    assert fixed[7] == 5
    assert sum(fixed[4 : PRESET_SIZE - 1]) & 0x7F == 0
    assert fixed[:7] == _preset()[:7]
    assert fixed[-1] == 0xF7


@pytest.mark.parametrize("user", [0, 1, 17, 31])
def test_fix_preset_checksum_invariant(user):
    fixed = fix_preset_checksum(_preset(0x23), user)
    assert fixed[7] == user
    assert sum(fixed[4 : PRESET_SIZE - 1]) & 0x7F == 0


def test_fix_preset_checksum_is_idempotent():
    once = fix_preset_checksum(_preset(), 3)
    assert fix_preset_checksum(once, 3) == once


def test_fix_preset_checksum_wrong_size():
    with pytest.raises(SysexFileError):
        fix_preset_checksum(_preset()[:-1], 0)


def test_fix_preset_checksum_bad_user():
    with pytest.raises(ValueError):
        fix_preset_checksum(_preset(), 32)


def test_read_preset_file(tmp_path):
    path = tmp_path / "voice.syx"
    path.write_bytes(_preset())
    data = read_preset_file(path, 9)
    assert data == fix_preset_checksum(_preset(), 9)


def test_read_preset_file_rejects_other_sysex(tmp_path):
    path = tmp_path / "other.syx"
    data = bytearray(_preset())
    data[3] = 0x4C
    path.write_bytes(bytes(data))
    with pytest.raises(SysexFileError):
        read_preset_file(path, 0)


def test_read_preset_file_rejects_short(tmp_path):
    path = tmp_path / "short.syx"
    path.write_bytes(_preset()[:100])
    with pytest.raises(SysexFileError):
        read_preset_file(path, 0)


def test_read_preset_file_missing(tmp_path):
    with pytest.raises(SysexFileError):
        read_preset_file(tmp_path / "nope.syx", 0)