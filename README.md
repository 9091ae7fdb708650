# sipflow

`sipflow` holds the non-visual core of a SIP message flow viewer. It
models captured dialogs and their messages and provides the pieces a
front end builds on:

- `sipflow.keybinding` — user interface actions (`Action`), their default
  keys, and a `KeyBindings` table with `bind`, `unbind`, `find_action`,
  `action_id`, `action_key`, `action_key_str` and `dump`. The helpers
  `key_ctrl`, `key_f`, `key_is_printable`, `key_to_str` and `key_from_str`
  turn key names such as `"^U"`, `"Ctrl-W"`, `"F5"`, `"Esc"` or `"Enter"`
  into key codes and back.
- `sipflow.group` — `Message`, `RtpStream`, `Call` (with its `CallState`)
  and `CallGroup`, which walks the messages of several dialogs in capture
  order (`next_msg`, `prev_msg`, `sorted_messages`, `msg_number`), picks
  the next RTP stream, assigns colours and tracks changed calls.
- `sipflow.media` — SDP media descriptions: `Media` and `MediaFormat`,
  with format lookup by payload code.
- `sipflow.filter` — display filters (`Filters`, `FilterType`): regular
  expressions matched case-insensitively against a call's From, To,
  source, destination, method, message payloads or its call-list line.
  An invalid expression raises `ValueError`. `reset_calls` clears the
  cached result of each call.
- `sipflow.filterform` — the state of a filter form (`FilterForm`,
  `FilterField`): text fields plus method checkboxes combined into the
  method filter expression (`method_expression`, `method_from_setting`,
  `payload_from_setting`).
- `sipflow.diff` — line-by-line comparison of two message payloads
  (`line_highlight`, `differing_lines`).
- `sipflow.export` — helpers for saving captures: `SaveMode`,
  `SaveFormat`, `default_save_mode`, `output_filename`,
  `format_message_txt`, `save_messages_txt` and `sorted_packets`.

The package has no dependencies outside the standard library.

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Examples

```python
from sipflow.keybinding import Action, KeyBindings, key_from_str, key_to_str

bindings = KeyBindings()
print(bindings.find_action(key_from_str("Esc"), -1))   # Action.PREV_SCREEN
print(bindings.action_id("help"))                      # Action.SHOW_HELP
print(key_to_str(key_from_str("F5")))                  # F5
```

```python
from sipflow.filter import Filters, FilterType
from sipflow.group import Call, Message

filters = Filters()
filters.set(FilterType.SIPFROM, "alice")

call = Call("abc123", attributes={"sipfrom": "Alice <sip:alice@example.com>"})
call.add_message(Message(1.0, payload="INVITE sip:bob@example.com SIP/2.0\n"))
print(filters.check_call(call))   # True
```

```python
from sipflow.diff import differing_lines

old = "INVITE sip:bob SIP/2.0\nCSeq: 1 INVITE\n"
new = "INVITE sip:bob SIP/2.0\nCSeq: 2 INVITE\n"
print(differing_lines(old, new))   # ['CSeq: 1 INVITE\n']
```

```python
from sipflow.export import SaveFormat, output_filename

print(output_filename("/tmp", "capture", SaveFormat.PCAP))   # /tmp/capture.pcap
```

## What it does not do

`sipflow` is a library only. It does not capture packets, parse SIP or
SDP from the wire, or write pcap files; `sorted_packets` only orders the
packet objects it is given. There is no terminal interface and no
command to run. It does not compute capture statistics, and it does not
read or write a settings file.