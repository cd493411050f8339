"""Editor page model: bank numbers, drum keys, user voice elements and prompts."""

from __future__ import annotations

from enum import IntEnum

USER_BANK_MSB = 63

DRUM_NOTE_LOW = 13
DRUM_NOTE_HIGH = 84

_PROMPTS = {
    "reset": "About to reset all parameters to default:\n\n{}.\n\nAre you sure?",
    "randomize": "About to randomize current parameter values:\n\n{}.\n\nAre you sure?",
}


class Page(IntEnum):
    """Main editor pages, in tab order."""

    SYSTEM = 0
    MULTIPART = 1
    DRUMSETUP = 2
    USERVOICE = 3


class EffectSection(IntEnum):
    """Sections of the system/effect page, in tool-box order."""

    SYSTEM = 0
    REVERB = 1
    CHORUS = 2
    VARIATION = 3


def join_bank(msb: int, lsb: int) -> int:
    """Combine 7-bit bank select MSB and LSB into one 14-bit bank number."""
    return ((msb & 0x7F) << 7) | (lsb & 0x7F)


def split_bank(bank: int) -> tuple[int, int]:
    """Split a 14-bit bank number into its (MSB, LSB) halves."""
    return bank >> 7, bank & 0x7F


def is_user_bank(bank: int) -> bool:
    """Whether *bank* selects the QS300 user voices."""
    return bank == USER_BANK_MSB << 7


def drum_key(drumset: int, note: int) -> int:
    """Key of a drum setup parameter set: drum set number and note."""
    return (drumset << 7) + note


def drum_notes() -> list[int]:
    """Notes that a drum setup can edit, lowest first."""
    return list(range(DRUM_NOTE_LOW, DRUM_NOTE_HIGH + 1))


def element_enabled(elements: int, element: int) -> bool:
    """Whether user voice *element* (0 or 1) is on in the *elements* switch."""
    return bool(elements & (element + 1))


def select_element(elements: int, current: int) -> int:
    """Element to show after the element switch changes to *elements*.

    The current element stays when it is still on; otherwise the choice
    follows the switch value.
    """
    if element_enabled(elements, current):
        return current
    return elements - 1


def is_randomizable(page: int, section: int) -> bool:
    """Whether the parameters shown on *page* / *section* can be randomized."""
    try:
        page = Page(page)
    except ValueError:
        return False
    if page is Page.SYSTEM:
        return section in (
            EffectSection.REVERB,
            EffectSection.CHORUS,
            EffectSection.VARIATION,
        )
    return True


def confirm_text(action: str, label: str) -> str:
    """Confirmation prompt for a "reset" or "randomize" of *label*."""
    try:
        template = _PROMPTS[action]
    except KeyError:
        raise ValueError(f"unknown action: {action!r}") from None
    return template.format(label)