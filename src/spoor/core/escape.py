"""Escaping for values interpolated into generated XML.

Apply exactly once per value: escaping is not idempotent.
"""


def escape_text(value: str) -> str:
    """Escape a value for use as element text content."""
    return value.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def escape_attr(value: str) -> str:
    """Escape a value for use inside a double-quoted attribute."""
    return escape_text(value).replace('"', "&quot;")
