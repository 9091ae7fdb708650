"""Display filters that decide which calls are shown to the user.

Several filters may be enabled at once; a call is displayed only when it
matches every enabled filter. Each filter is a case-insensitive regular
expression searched in one field of the call.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from enum import IntEnum

from sipflow.group import Call


class FilterType(IntEnum):
    """Fields of a call that a display filter can be applied to."""

    SIPFROM = 0
    SIPTO = 1
    SOURCE = 2
    DESTINATION = 3
    METHOD = 4
    PAYLOAD = 5
    CALL_LIST = 6


#: Call attribute checked by each attribute based filter
_ATTRIBUTES = {
    FilterType.SIPFROM: "sipfrom",
    FilterType.SIPTO: "sipto",
    FilterType.SOURCE: "src",
    FilterType.DESTINATION: "dst",
    FilterType.METHOD: "method",
}

LineText = Callable[[Call], str] | str | None


class Filters:
    """The set of display filters, one optional expression per filter type."""

    def __init__(self) -> None:
        self._exprs: dict[FilterType, str] = {}
        self._regex: dict[FilterType, re.Pattern[str]] = {}

    def set(self, filter_type: int, expr: str | None) -> None:
        """Set the expression of a filter, or remove the filter when expr is None.

        Raises ValueError, leaving the filter unchanged, if expr does not compile.
        """
        ftype = FilterType(filter_type)
        if expr is None:
            self._exprs.pop(ftype, None)
            self._regex.pop(ftype, None)
            return
        try:
            compiled = re.compile(expr, re.IGNORECASE)
        except re.error as exc:
            raise ValueError(f"invalid filter expression {expr!r}: {exc}") from exc
        self._exprs[ftype] = expr
        self._regex[ftype] = compiled

    def get(self, filter_type: int) -> str | None:
        """Return the expression text of a filter, or None if it is not set."""
        return self._exprs.get(FilterType(filter_type))

    def check_expr(self, filter_type: int, data: str) -> bool:
        """Return True if data matches the filter; an unset filter matches anything."""
        regex = self._regex.get(FilterType(filter_type))
        if regex is None:
            return True
        return regex.search(data) is not None

    def check_call(self, call: Call, line_text: LineText = None) -> bool:
        """Return True if the call matches every enabled filter.

        Calls without messages never match. The result is cached in the
        call's ``filtered`` flag until the flag is reset. ``line_text`` gives
        the call list line checked by the CALL_LIST filter, either as a
        string or as a function of the call.
        """
        if not call.msgs:
            return False
        if call.filtered != -1:
            return call.filtered == 0

        call.filtered = 0
        for ftype in FilterType:
            if ftype not in self._exprs:
                continue
            if ftype is FilterType.PAYLOAD:
                if not any(self.check_expr(ftype, msg.payload) for msg in call.msgs):
                    call.filtered = 1
                    break
                continue
            if ftype is FilterType.CALL_LIST:
                data = self._line_text(call, line_text)
            else:
                data = call.attribute(_ATTRIBUTES[ftype])
            if not self.check_expr(ftype, data):
                call.filtered = 1
                break

        return call.filtered == 0

    @staticmethod
    def _line_text(call: Call, line_text: LineText) -> str:
        if line_text is None:
            return ""
        if callable(line_text):
            return line_text(call)
        return line_text


def reset_calls(calls: Iterable[Call]) -> None:
    """Clear the cached filter result of every call, forcing re-evaluation."""
    for call in calls:
        call.filtered = -1