"""Assembly of RPN, NRPN and 14-bit controller messages from MIDI CC streams."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterator

RPN_MSB = 0x65
RPN_LSB = 0x64
NRPN_MSB = 0x63
NRPN_LSB = 0x62
DATA_MSB = 0x06
DATA_LSB = 0x26

CC14_MSB_MIN = 0x00
CC14_MSB_MAX = 0x20
CC14_LSB_MIN = CC14_MSB_MAX
CC14_LSB_MAX = CC14_MSB_MAX << 1


class RpnType(IntEnum):
    """Kind of event, as carried in bits 4-6 of the event status."""

    NONE = 0x00
    CC = 0x10
    RPN = 0x20
    NRPN = 0x30
    CC14 = 0x40


@dataclass(frozen=True)
class MidiEvent:
    """A controller-like event: plain CC, RPN, NRPN or 14-bit CC."""

    time: int = 0
    port: int = 0
    status: int = 0
    param: int = 0
    value: int = 0

    @property
    def type(self) -> RpnType:
        try:
            return RpnType(self.status & 0x70)
        except ValueError:
            return RpnType.NONE

    @property
    def channel(self) -> int:
        return self.status & 0x0F


@dataclass(slots=True)
class _Data14:
    """A 14-bit quantity whose two 7-bit halves may each be missing."""

    msb: int | None = None
    lsb: int | None = None

    def clear(self) -> None:
        self.msb = None
        self.lsb = None

    def set_msb(self, msb: int) -> None:
        self.msb = msb & 0x7F

    def set_lsb(self, lsb: int) -> None:
        self.lsb = lsb & 0x7F

    @property
    def is_msb(self) -> bool:
        return self.msb is not None

    @property
    def is_lsb(self) -> bool:
        return self.lsb is not None

    @property
    def data(self) -> int:
        if self.lsb is not None:
            if self.msb is not None:
                return (self.msb << 7) + self.lsb
            return self.lsb
        if self.msb is not None:
            return self.msb
        return 0

    @property
    def is_any(self) -> bool:
        return self.is_msb or self.is_lsb

    @property
    def is_14bit(self) -> bool:
        return self.is_msb and self.is_lsb


@dataclass(slots=True)
class _Item:
    """Partial message being assembled for one port/channel pair."""

    time: int = 0
    port: int = 0
    status: int = 0
    status_set: bool = False
    param: _Data14 = field(default_factory=_Data14)
    value: _Data14 = field(default_factory=_Data14)

    def clear(self) -> None:
        self.time = 0
        self.port = 0
        self.status = 0
        self.status_set = False
        self.param.clear()
        self.value.clear()

    @property
    def is_status(self) -> bool:
        return self.status_set and bool(self.status & 0x70)

    def set_status(self, status: int) -> None:
        self.status = status & 0x7F
        self.status_set = True

    @property
    def type(self) -> int:
        return self.status & 0x70

    @property
    def channel(self) -> int:
        return self.status & 0x0F

    @property
    def is_any(self) -> bool:
        return self.param.is_any or self.value.is_any

    @property
    def is_14bit(self) -> bool:
        return self.param.is_any and self.value.is_14bit

    def clear_value(self) -> None:
        self.status_set = False
        self.value.clear()


class MidiRpn:
    """Stateful parser turning controller events into (N)RPN and CC14 events.

    Events fed to :meth:`process` that are taken up by the parser are later
    made available, possibly combined, through :meth:`dequeue`.
    """

    def __init__(self) -> None:
        self._count = 0
        self._cache: dict[int, _Item] = {}
        self._queue: deque[MidiEvent] = deque()

    def is_pending(self) -> bool:
        """Whether assembled events are waiting to be dequeued."""
        return bool(self._queue)

    def dequeue(self) -> MidiEvent | None:
        """Take the next assembled event, or None when there is none."""
        return self._queue.popleft() if self._queue else None

    def drain(self) -> Iterator[MidiEvent]:
        """Yield every assembled event until the queue is empty."""
        while self._queue:
            yield self._queue.popleft()

    def flush(self) -> None:
        """Push out every partially assembled message."""
        if self._count != 0:
            for item in self._cache.values():
                self._enqueue(item)
            self._cache.clear()

    def process(self, event: MidiEvent) -> bool:
        """Feed one CC event; return True if the parser took it up."""
        channel = event.status & 0x0F
        param = event.param

        if param in (RPN_MSB, RPN_LSB):
            return self._process_rpn(event, channel, param == RPN_MSB)
        if param in (NRPN_MSB, NRPN_LSB):
            return self._process_nrpn(event, channel, param == NRPN_MSB)
        if param in (DATA_MSB, DATA_LSB):
            return self._process_data(event, channel, param == DATA_MSB)
        if CC14_MSB_MIN < param < CC14_MSB_MAX:
            return self._process_cc14_msb(event, channel)
        if CC14_LSB_MIN < param < CC14_LSB_MAX:
            return self._process_cc14_lsb(event, channel)
        return False

    def _get_item(self, port: int, channel: int) -> _Item:
        return self._cache.setdefault((port << 4) | channel, _Item())

    @staticmethod
    def _stamp(item: _Item, event: MidiEvent) -> None:
        if item.time < event.time:
            item.time = event.time
        if item.port != event.port:
            item.port = event.port

    def _process_rpn(self, event: MidiEvent, channel: int, msb: bool) -> bool:
        item = self._get_item(event.port, channel)
        if item.is_any and item.type != RpnType.RPN:
            self._enqueue(item)
        # RPN null: 0x7f in both parameter halves resets the item.
        other_is_null = (
            item.param.is_lsb and item.param.lsb == 0x7F
            if msb
            else item.param.is_msb and item.param.msb == 0x7F
        )
        if (
            item.is_status
            and item.type == RpnType.RPN
            and other_is_null
            and event.value == 0x7F
        ):
            item.clear()
            self._count -= 1
            return True
        if item.type == RpnType.NRPN:
            item.clear()
            item.set_status(RpnType.RPN | channel)
        elif not item.is_status:
            item.set_status(RpnType.RPN | channel)
            self._count += 1
        self._stamp(item, event)
        if msb:
            item.param.set_msb(event.value)
        else:
            item.param.set_lsb(event.value)
        return True

    def _process_nrpn(self, event: MidiEvent, channel: int, msb: bool) -> bool:
        item = self._get_item(event.port, channel)
        if item.is_any and item.type != RpnType.NRPN:
            self._enqueue(item)
        if item.type == RpnType.RPN:
            item.clear()
            item.set_status(RpnType.NRPN | channel)
        elif not item.is_status:
            item.set_status(RpnType.NRPN | channel)
            self._count += 1
        self._stamp(item, event)
        if msb:
            item.param.set_msb(event.value)
        else:
            item.param.set_lsb(event.value)
        return True

    def _process_data(self, event: MidiEvent, channel: int, msb: bool) -> bool:
        item = self._get_item(event.port, channel)
        if item.type not in (RpnType.RPN, RpnType.NRPN):
            self._enqueue(item)
            return False
        if not item.is_status:
            item.set_status(item.type | channel)
        self._stamp(item, event)
        if msb:
            item.value.set_msb(event.value)
        else:
            item.value.set_lsb(event.value)
        if item.is_14bit:
            self._enqueue(item)
        return True

    def _process_cc14_msb(self, event: MidiEvent, channel: int) -> bool:
        item = self._get_item(event.port, channel)
        if item.is_any and item.type != RpnType.CC14:
            self._enqueue(item)
            item.clear()
            self._count -= 1
        elif (item.param.is_msb and item.value.is_msb) or (
            item.type == RpnType.CC14
            and item.param.is_lsb
            and item.param.lsb != event.param + CC14_LSB_MIN
        ):
            self._enqueue(item)
        if not item.is_status:
            item.set_status(RpnType.CC14 | channel)
            self._count += 1
        self._stamp(item, event)
        item.param.set_lsb(event.param + CC14_LSB_MIN)
        item.param.set_msb(event.param)
        item.value.set_msb(event.value)
        if item.is_14bit:
            self._enqueue(item)
        return True

    def _process_cc14_lsb(self, event: MidiEvent, channel: int) -> bool:
        item = self._get_item(event.port, channel)
        if item.is_any and item.type != RpnType.CC14:
            self._enqueue(item)
            item.clear()
            self._count -= 1
        elif (item.param.is_lsb and item.value.is_lsb) or (
            item.type == RpnType.CC14
            and item.param.is_msb
            and item.param.msb != event.param - CC14_LSB_MIN
        ):
            self._enqueue(item)
        if not item.is_status:
            item.set_status(RpnType.CC14 | channel)
            self._count += 1
        self._stamp(item, event)
        item.param.set_msb(event.param - CC14_LSB_MIN)
        item.param.set_lsb(event.param)
        item.value.set_lsb(event.value)
        if item.is_14bit:
            self._enqueue(item)
        return True

    def _push(self, time: int, port: int, status: int, param: int, value: int) -> None:
        self._queue.append(MidiEvent(time, port, status, param, value))

    def _enqueue(self, item: _Item) -> None:
        if not item.is_status:
            return

        time = item.time
        port = item.port

        if item.type == RpnType.CC14:
            if item.is_14bit:
                self._push(time, port, item.status, item.param.msb, item.value.data)
                value_msb = item.value.msb
                item.clear_value()
                item.value.set_msb(value_msb)
                item.time = 0
            else:
                status = RpnType.CC | item.channel
                if item.param.is_msb and item.value.is_msb:
                    self._push(time, port, status, item.param.msb, item.value.msb)
                if item.param.is_lsb and item.value.is_lsb:
                    self._push(time, port, status, item.param.lsb, item.value.lsb)
                item.clear()
                self._count -= 1
        elif item.is_14bit:
            self._push(time, port, item.status, item.param.data, item.value.data)
            item.clear_value()
            item.time = 0
        else:
            status = RpnType.CC | item.channel
            if item.type == RpnType.RPN:
                if item.param.is_msb:
                    self._push(time, port, status, RPN_MSB, item.param.msb)
                if item.param.is_lsb:
                    self._push(time, port, status, RPN_LSB, item.param.lsb)
            elif item.type == RpnType.NRPN:
                if item.param.is_msb:
                    self._push(time, port, status, NRPN_MSB, item.param.msb)
                if item.param.is_lsb:
                    self._push(time, port, status, NRPN_LSB, item.param.lsb)
            if item.value.is_msb:
                self._push(time, port, status, DATA_MSB, item.value.msb)
            if item.value.is_lsb:
                self._push(time, port, status, DATA_LSB, item.value.lsb)
            item.clear()
            self._count -= 1