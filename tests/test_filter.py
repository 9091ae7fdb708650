import pytest

from sipflow.filter import Filters, FilterType, reset_calls
from sipflow.group import Call, Message


def make_call(payloads=("INVITE sip:alice SIP/2.0",), **attributes):
    call = Call(callid="abc", attributes=dict(attributes))
    for i, payload in enumerate(payloads):
        call.add_message(Message(timestamp=float(i), payload=payload))
    return call


def test_set_and_get_round_trip():
    filters = Filters()
    filters.set(FilterType.SIPFROM, "alice")
    assert filters.get(FilterType.SIPFROM) == "alice"
    assert filters.get(FilterType.SIPTO) is None


def test_set_none_removes_filter():
    filters = Filters()
    filters.set(FilterType.METHOD, "INVITE")
    filters.set(FilterType.METHOD, None)
    assert filters.get(FilterType.METHOD) is None
    assert filters.check_expr(FilterType.METHOD, "BYE") is True


def test_invalid_expression_raises_and_keeps_previous():
    filters = Filters()
    filters.set(FilterType.SIPTO, "bob")
    with pytest.raises(ValueError):
        filters.set(FilterType.SIPTO, "(unclosed")
    assert filters.get(FilterType.SIPTO) == "bob"


def test_check_expr_is_case_insensitive_search():
    filters = Filters()
    filters.set(FilterType.PAYLOAD, "invite")
    assert filters.check_expr(FilterType.PAYLOAD, "xx INVITE yy") is True
    assert filters.check_expr(FilterType.PAYLOAD, "BYE") is False


def test_call_without_messages_does_not_match():
    filters = Filters()
    call = Call(callid="empty")
    assert filters.check_call(call) is False


def test_call_matches_with_no_filters():
    filters = Filters()
    call = make_call()
    assert filters.check_call(call) is True
    assert call.filtered == 0


def test_attribute_filter():
    filters = Filters()
    filters.set(FilterType.SIPFROM, "^alice")
    assert filters.check_call(make_call(sipfrom="Alice@example.com")) is True
    assert filters.check_call(make_call(sipfrom="bob@example.com")) is False


def test_all_filters_must_match():
    filters = Filters()
    filters.set(FilterType.SIPFROM, "alice")
    filters.set(FilterType.METHOD, "(INVITE|BYE)")
    assert filters.check_call(make_call(sipfrom="alice", method="INVITE")) is True
    assert filters.check_call(make_call(sipfrom="alice", method="OPTIONS")) is False


def test_result_is_cached_until_reset():
    filters = Filters()
    call = make_call(sipto="bob")
    filters.set(FilterType.SIPTO, "carol")
    assert filters.check_call(call) is False
    filters.set(FilterType.SIPTO, "bob")
    assert filters.check_call(call) is False
    reset_calls([call])
    assert call.filtered == -1
    assert filters.check_call(call) is True


def test_payload_filter_matches_any_message():
    filters = Filters()
    filters.set(FilterType.PAYLOAD, "m=audio")
    call = make_call(payloads=("INVITE sip:a", "SIP/2.0 200 OK\r\nm=audio 4000"))
    assert filters.check_call(call) is True
    other = make_call(payloads=("OPTIONS sip:a", "SIP/2.0 200 OK"))
    assert filters.check_call(other) is False
    assert other.filtered == 1


def test_call_list_filter_uses_line_text():
    filters = Filters()
    filters.set(FilterType.CALL_LIST, "abc")
    assert filters.check_call(make_call(), lambda c: c.callid) is True
    assert filters.check_call(make_call(), "nothing here") is False