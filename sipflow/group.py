"""Calls, their messages and streams, and groups of calls shown together."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class CallState(IntEnum):
    """State of a dialog that is a call; NONE for dialogs that are not calls."""

    NONE = 0
    CALLSETUP = 1
    INCALL = 2
    CANCELLED = 3
    REJECTED = 4
    DIVERTED = 5
    BUSY = 6
    COMPLETED = 7


@dataclass(eq=False)
class Message:
    """A SIP message captured at a given time."""

    timestamp: float
    payload: str = ""
    has_sdp: bool = False
    reqresp: int = 0
    packet: Any = None
    attributes: dict[str, str] = field(default_factory=dict)
    call: Call | None = None

    def is_older(self, other: Message | None) -> bool:
        """True if this message was captured after other, or other is None."""
        if other is None:
            return True
        return other.timestamp < self.timestamp


@dataclass(eq=False)
class RtpStream:
    """A media stream seen during a call."""

    time: float
    packet_count: int = 0
    is_rtp: bool = True

    def is_older(self, other: RtpStream | None) -> bool:
        """True if this stream started after other, or other is None."""
        if other is None:
            return True
        return other.time < self.time


@dataclass(eq=False)
class Call:
    """A SIP dialog: its messages, streams and related dialogs."""

    callid: str
    msgs: list[Message] = field(default_factory=list)
    streams: list[RtpStream] = field(default_factory=list)
    xcalls: list[Call] = field(default_factory=list)
    state: CallState = CallState.NONE
    changed: bool = False
    locked: bool = False
    filtered: int = -1
    attributes: dict[str, str] = field(default_factory=dict)

    def add_message(self, msg: Message) -> None:
        """Append a message to this call and mark the call as changed."""
        msg.call = self
        self.msgs.append(msg)
        self.changed = True

    def attribute(self, name: str) -> str:
        """Return the value of a call attribute, or an empty string."""
        return self.attributes.get(name, "")


def _index(seq: Sequence[Any], item: Any) -> int:
    return next((i for i, x in enumerate(seq) if x is item), -1)


class CallGroup:
    """A set of calls whose messages are displayed together in one flow."""

    def __init__(self, callid: str | None = None) -> None:
        self.callid = callid
        self.calls: list[Call] = []
        self.color_index = 0
        self.sdp_only = False

    def __len__(self) -> int:
        return len(self.calls)

    def __contains__(self, call: object) -> bool:
        return _index(self.calls, call) >= 0

    def has_changed(self) -> bool:
        """Report whether any call changed, clearing every changed flag."""
        changed = False
        call = self.next_call(None)
        while call is not None:
            if call.changed:
                call.changed = False
                changed = True
                if self.callid and self.callid == call.callid:
                    self.add_calls(call.xcalls)
            call = self.next_call(call)
        return changed

    def clone(self) -> CallGroup:
        """Return a new group holding the same call objects."""
        copy = CallGroup()
        copy.calls = list(self.calls)
        return copy

    def add(self, call: Call | None) -> None:
        """Add a call to the group, locking it, unless it is already there."""
        if call is None:
            return
        if call not in self:
            call.locked = True
            self.calls.append(call)

    def add_calls(self, calls: Iterable[Call]) -> None:
        """Lock every given call and add those not yet in the group."""
        for call in calls:
            call.locked = True
            if call not in self:
                self.calls.append(call)

    def remove(self, call: Call | None) -> None:
        """Unlock a call and take it out of the group."""
        if call is None:
            return
        call.locked = False
        idx = _index(self.calls, call)
        if idx >= 0:
            del self.calls[idx]

    def color(self, call: Call) -> int:
        """Return the colour pair number of a call from its position; 0 if absent."""
        idx = _index(self.calls, call)
        if idx < 0:
            return 0
        return idx % 7 + 1

    def next_call(self, call: Call | None) -> Call | None:
        """Return the call following the given one, or the first call for None."""
        if call is None:
            first = self.next_msg(None)
            return first.call if first is not None else None
        if not call.msgs:
            return None
        reference = call.msgs[0]
        for candidate in self.calls:
            if candidate is call or not candidate.msgs:
                continue
            first = candidate.msgs[0]
            if first.is_older(reference):
                return first.call
        return None

    def msg_count(self) -> int:
        """Return how many messages the calls hold (SDP ones only if sdp_only)."""
        return sum(
            1
            for call in self.calls
            for msg in call.msgs
            if not self.sdp_only or msg.has_sdp
        )

    def msg_number(self, msg: Message) -> int:
        """Return how many group messages precede msg chronologically; 0 if absent."""
        number = 0
        cur = self.next_msg(None)
        while cur is not None:
            if not (self.sdp_only and not msg.has_sdp):
                if cur is msg:
                    return number
                number += 1
            cur = self.next_msg(cur)
        return 0

    def sorted_messages(self) -> list[Message]:
        """Return all messages of the group ordered by capture time.

        Messages with equal times end up in reverse order of insertion.
        """
        entries = [msg for call in self.calls for msg in call.msgs]
        ordered = sorted(enumerate(entries), key=lambda pair: (pair[1].timestamp, -pair[0]))
        return [msg for _, msg in ordered]

    def _sequence(self) -> list[Message]:
        if len(self.calls) == 1:
            return self.calls[0].msgs
        return self.sorted_messages()

    def next_msg(self, msg: Message | None) -> Message | None:
        """Return the message after msg, or the first one for None."""
        cur = msg
        while True:
            seq = self._sequence()
            idx = _index(seq, cur) if cur is not None else -1
            nxt = seq[idx + 1] if idx + 1 < len(seq) else None
            if nxt is None or not self.sdp_only or nxt.has_sdp:
                return nxt
            cur = nxt

    def prev_msg(self, msg: Message | None) -> Message | None:
        """Return the message before msg; for None, the last one of a multi-call group."""
        cur = msg
        while True:
            seq = self._sequence()
            if cur is None:
                if len(self.calls) == 1 or not seq:
                    return None
                prev = seq[-1]
            else:
                idx = _index(seq, cur)
                prev = seq[idx - 1] if idx >= 1 else None
            if prev is None or not self.sdp_only or prev.has_sdp:
                return prev
            cur = prev

    def next_stream(self, stream: RtpStream | None) -> RtpStream | None:
        """Return the earliest RTP stream with packets that started after stream."""
        best: RtpStream | None = None
        for call in self.calls:
            for cand in call.streams:
                if not cand.packet_count or not cand.is_rtp:
                    continue
                if cand.is_older(stream) and (best is None or best.is_older(cand)):
                    best = cand
        return best