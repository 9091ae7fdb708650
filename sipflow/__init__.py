"""Core model for a SIP message flow viewer: key bindings, call groups, media, filters, diffs and export helpers."""

__version__ = "0.1.0"