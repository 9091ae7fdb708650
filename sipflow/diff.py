"""Line based comparison of two SIP message payloads."""

from __future__ import annotations


def _complete_lines(payload: str) -> list[tuple[int, str]]:
    """Return (offset, line) for every newline-terminated line of payload."""
    result = []
    offset = 0
    for part in payload.split("\n")[:-1]:
        line = part + "\n"
        result.append((offset, line))
        offset += len(line)
    return result


def line_highlight(payload: str, other: str) -> list[bool]:
    """Mark each character of payload that belongs to a line absent from other.

    A line, with its terminating newline, counts as present when it occurs
    anywhere in other. A trailing line without newline is never marked.
    """
    marks = [False] * len(payload)
    for offset, line in _complete_lines(payload):
        if line not in other:
            marks[offset:offset + len(line)] = [True] * len(line)
    return marks


def differing_lines(payload: str, other: str) -> list[str]:
    """Return the newline-terminated lines of payload that are absent from other."""
    return [line for _, line in _complete_lines(payload) if line not in other]