# xgedit

Building blocks for editing Yamaha XG synthesizers and their QS300 user
voices from Python. Only the standard library is needed.

- **`xgedit.midirpn`** – turns a stream of MIDI control changes into
  RPN, NRPN and 14-bit controller events (`MidiRpn`, `MidiEvent`,
  `RpnType`). Controllers that end up not forming a complete message
  are handed back as plain CC events.
- **`xgedit.options`** – the editor settings (`Options`): MIDI
  connections, display and view options, recent files, default
  directories and the user voice auto-send flag. They are stored in an
  INI file. Command-line arguments are parsed here too.
- **`xgedit.session`** – session bookkeeping (`Session`): the displayed
  name, untitled numbering, the "modified" state, closing with a
  save/discard/cancel choice, and the recent-files list
  (`session_name`, `update_recent_files`, `trim_recent_files`).
- **`xgedit.sysexfile`** – reads and writes `.syx` session files,
  splits raw bytes into SysEx messages, and loads QS300 user voice
  preset dumps with their checksum recomputed.
- **`xgedit.parts`** – helpers for the editor pages (`Page`,
  `EffectSection`): bank numbers, drum setup keys and notes, user voice
  element selection, whether a page can be randomized, and the
  reset/randomize confirmation texts.

## Decoding RPN / NRPN

```python
from xgedit.midirpn import MidiEvent, MidiRpn, RpnType

decoder = MidiRpn()
channel = 0
for param, value in [(0x63, 0x01), (0x62, 0x08), (0x06, 0x40), (0x26, 0x00)]:
    decoder.process(MidiEvent(time=0, port=0,
                              status=RpnType.CC | channel,
                              param=param, value=value))

decoder.flush()
for event in decoder.drain():
    print(event.type, event.channel, event.param, event.value)
```

`process` returns `True` when the decoder has taken the controller in.
It returns `False` when the event is not part of a parameter message;
the caller then handles that event as it is. `flush` pushes out whatever
is still being assembled. `dequeue` returns the next event, or `None`
when there is none. `drain` yields every pending event. `is_pending`
tells whether any events are waiting.

## Session files and presets

```python
from xgedit.sysexfile import read_sysex_file, write_sysex_file, read_preset_file

messages = read_sysex_file("song.syx")   # complete messages, each ending in 0xF7
write_sysex_file("copy.syx", messages)   # returns the number of bytes written

preset = read_preset_file("voice.syx", user=0)
```

`split_sysex` does the splitting on bytes already in memory. Bytes after
the last 0xF7 are dropped. `read_preset_file(path, user)` reads a 392-byte
QS300 user voice bulk dump, retargets it to user voice `user` (0–31) and
recomputes its checksum. `fix_preset_checksum` does the same on bytes in
memory. A file that cannot be read, or is not such a dump, raises
`SysexFileError`.

## Settings

```python
from xgedit.options import Options, UsageExit

options = Options()
options.load("xgedit.ini")
try:
    options.parse_args(["xgedit", "session.syx"])
except UsageExit as request:
    print(request.message)
options.save("xgedit.ini")
```

`load` resets every setting to its default and then reads what the file
holds. A missing file or a bad value leaves the default in place.
Session files given on the command line are collected in
`session_files` as absolute paths. `-h/--help` and `-v/--version` raise
`UsageExit`, which carries the text to show.

## Session state

```python
from xgedit.session import Session, SAVE, DISCARD

session = Session(options, confirm=lambda name: DISCARD)
session.new()           # "Untitled1"
session.mark_changed()
print(session.title())  # "Untitled1 [modified]"
session.close()         # asks confirm, which discards
session.opened("song.syx")
```

When a `Session` is closed with unsaved changes, it calls `confirm` with
the session name. The answer `"save"` calls the `save` callback,
`"discard"` drops the changes, and any other answer cancels. `opened`
moves the file to the front of `options.recent_files` and records its
directory as `options.session_dir`.

## What this package does not do

There is no graphical editor and no command to run. The package does
not open MIDI ports or send anything to a device. It also holds no
database of XG parameters, instruments or drum kits. It provides the
decoding, file handling, settings and state described above; talking to
hardware and presenting the parameters is left to the application that
uses it.

## Running the tests

The test suite uses pytest, which is declared in the `test` extra:

```
pip install -e .[test]
pytest
```