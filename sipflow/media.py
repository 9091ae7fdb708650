"""Media descriptions announced in a message's SDP body."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

#: Room for a media type name, terminator included
MEDIATYPELEN = 15


@dataclass
class MediaFormat:
    """A payload type code and the format name the SDP gives it."""

    id: int
    format: str


class Media:
    """One media line of an SDP body with its address and formats."""

    def __init__(self, msg: Any = None) -> None:
        self.msg = msg
        self.address: Any = None
        self.type = ""
        self.fmtcode = 0
        self.formats: list[MediaFormat] = []

    def set_type(self, media_type: str) -> None:
        """Set the media type, keeping at most MEDIATYPELEN - 1 characters."""
        self.type = media_type[: MEDIATYPELEN - 1]

    def add_format(self, code: int, fmt: str) -> None:
        """Record the format name described for a payload code."""
        self.formats.append(MediaFormat(code, fmt))

    def get_format(self, code: int) -> str:
        """Return the format name of a payload code, or "Unassigned"."""
        return next((f.format for f in self.formats if f.id == code), "Unassigned")

    def prefered_format(self, standard: Mapping[int, str] | None = None) -> str:
        """Return the name of the preferred format.

        A standard name for the code, looked up in ``standard``, wins over
        the one described in the SDP.
        """
        if standard is not None:
            name = standard.get(self.fmtcode)
            if name:
                return name
        return self.get_format(self.fmtcode)