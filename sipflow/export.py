"""Saving captured dialogs: file naming, text export and packet ordering."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from typing import Any, TextIO

from sipflow.group import Call, Message


class SaveMode(Enum):
    """Which dialogs are saved."""

    ALL = "all"
    SELECTED = "selected"
    DISPLAYED = "displayed"
    MESSAGE = "message"


class SaveFormat(Enum):
    """Format of the saved file."""

    PCAP = "pcap"
    PCAP_RTP = "pcap_rtp"
    TXT = "txt"


def default_save_mode(total: int, displayed: int) -> SaveMode:
    """Save everything when nothing is filtered out, otherwise the displayed dialogs."""
    return SaveMode.ALL if displayed == total else SaveMode.DISPLAYED


def output_filename(path: str | None, filename: str | None, fmt: SaveFormat) -> str:
    """Build the full name of the file to save to.

    Surrounding spaces of path and filename are dropped, and the extension
    of the format is appended unless the filename already contains it.
    Raises ValueError when the filename is empty.
    """
    directory = (path or "").strip()
    name = (filename or "").strip()
    if not name:
        raise ValueError("Please enter a valid filename")

    extension = ".txt" if fmt is SaveFormat.TXT else ".pcap"
    if extension not in name:
        name += extension

    return f"{directory}/{name}" if directory else name


def format_message_txt(msg: Message) -> str:
    """Return the text export of one message: a header line, then its payload."""
    attrs = msg.attributes
    return (
        f"{attrs.get('date', '')} {attrs.get('time', '')} "
        f"{attrs.get('src', '')} -> {attrs.get('dst', '')}\n"
        f"{msg.payload}\n\n"
    )


def save_messages_txt(stream: TextIO, messages: Iterable[Message]) -> int:
    """Write the text export of every message to stream; return how many were written."""
    count = 0
    for msg in messages:
        stream.write(format_message_txt(msg))
        count += 1
    return count


def _packet_time(packet: Any, fallback: float) -> float:
    return getattr(packet, "timestamp", fallback)


def sorted_packets(calls: Iterable[Call], include_rtp: bool = False) -> list[Any]:
    """Return the packets of the calls' messages ordered by capture time.

    With include_rtp, the RTP packets kept in each call's ``rtp_packets``
    are merged in as well. Packets with equal times keep the order in which
    they were collected. Messages without a packet are left out.
    """
    timed: list[tuple[float, Any]] = []
    for call in calls:
        for msg in call.msgs:
            if msg.packet is not None:
                timed.append((_packet_time(msg.packet, msg.timestamp), msg.packet))
        if include_rtp:
            for packet in getattr(call, "rtp_packets", ()):
                timed.append((_packet_time(packet, 0.0), packet))
    timed.sort(key=lambda pair: pair[0])
    return [packet for _, packet in timed]