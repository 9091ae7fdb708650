"""The filter form: editing display filters from text fields and method checkboxes."""

from __future__ import annotations

from collections.abc import Iterable
from enum import IntEnum

from sipflow.filter import Filters, FilterType, reset_calls
from sipflow.group import Call

#: Room for the comma separated list of methods in a method expression
_METHODS_LEN = 250
#: Room for the whole method expression, terminator included
_METHOD_EXPR_LEN = 256


class FilterField(IntEnum):
    """Fields of the filter form, in form order."""

    SIPFROM = 0
    SIPTO = 1
    SRC = 2
    DST = 3
    PAYLOAD = 4
    REGISTER = 5
    INVITE = 6
    SUBSCRIBE = 7
    NOTIFY = 8
    INFO = 9
    KDMQ = 10
    OPTIONS = 11
    PUBLISH = 12
    MESSAGE = 13
    REFER = 14
    UPDATE = 15
    FILTER = 16
    CANCEL = 17


#: Text fields and the display filter each of them sets
_TEXT_FIELDS = {
    FilterField.SIPFROM: FilterType.SIPFROM,
    FilterField.SIPTO: FilterType.SIPTO,
    FilterField.SRC: FilterType.SOURCE,
    FilterField.DST: FilterType.DESTINATION,
    FilterField.PAYLOAD: FilterType.PAYLOAD,
}

#: Checkbox fields and the SIP method each of them stands for
_METHOD_FIELDS = {
    FilterField.REGISTER: "REGISTER",
    FilterField.INVITE: "INVITE",
    FilterField.SUBSCRIBE: "SUBSCRIBE",
    FilterField.NOTIFY: "NOTIFY",
    FilterField.INFO: "INFO",
    FilterField.KDMQ: "KDMQ",
    FilterField.OPTIONS: "OPTIONS",
    FilterField.PUBLISH: "PUBLISH",
    FilterField.MESSAGE: "MESSAGE",
    FilterField.REFER: "REFER",
    FilterField.UPDATE: "UPDATE",
}


def field_method(field: int) -> str:
    """Return the SIP method name of a method checkbox field.

    Raises ValueError for fields that are not method checkboxes.
    """
    try:
        return _METHOD_FIELDS[FilterField(field)]
    except (KeyError, ValueError):
        raise ValueError(f"field {field!r} is not a method field") from None


def method_expression(methods: str | None) -> str:
    """Turn a comma separated method list into a regular expression.

    An empty list gives a single space.
    """
    if not methods:
        return " "
    alternatives = methods[:_METHODS_LEN].replace(",", "|")
    return f"({alternatives})"[: _METHOD_EXPR_LEN - 1]


def method_from_setting(filters: Filters, value: str | None) -> None:
    """Set the method filter from a comma separated method list."""
    filters.set(FilterType.METHOD, method_expression(value))


def payload_from_setting(filters: Filters, value: str | None) -> None:
    """Set the payload filter from a setting value, if there is one."""
    if value is not None:
        filters.set(FilterType.PAYLOAD, value)


class FilterForm:
    """The values of the filter form, initialised from the current filters."""

    def __init__(
        self,
        filters: Filters,
        default_methods: str | None = None,
        default_payload: str | None = None,
    ) -> None:
        self.filters = filters
        methods = filters.get(FilterType.METHOD) or default_methods or ""
        self.text: dict[FilterField, str] = {
            field: filters.get(ftype) or "" for field, ftype in _TEXT_FIELDS.items()
        }
        if not self.text[FilterField.PAYLOAD] and default_payload:
            self.text[FilterField.PAYLOAD] = default_payload
        lowered = methods.lower()
        self.checked: set[FilterField] = {
            field for field, name in _METHOD_FIELDS.items() if name.lower() in lowered
        }

    def toggle_method(self, field: int) -> bool:
        """Toggle a method checkbox and return whether it is now checked."""
        field_method(field)
        fld = FilterField(field)
        if fld in self.checked:
            self.checked.discard(fld)
            return False
        self.checked.add(fld)
        return True

    def method_expr(self) -> str:
        """Return the checked methods as a comma separated list, in form order."""
        return ",".join(
            name for field, name in _METHOD_FIELDS.items() if field in self.checked
        )

    def save(self, calls: Iterable[Call] = ()) -> list[FilterField]:
        """Apply the form to the filters and force re-evaluation of the calls.

        Returns the text fields whose expression did not compile; those
        filters keep their previous value.
        """
        invalid: list[FilterField] = []
        for field, ftype in _TEXT_FIELDS.items():
            value = self.text.get(field, "").strip()
            try:
                self.filters.set(ftype, value or None)
            except ValueError:
                invalid.append(field)
        method_from_setting(self.filters, self.method_expr())
        reset_calls(calls)
        return invalid