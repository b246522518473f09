"""XML escaping helpers for prompt fragments."""

from typing import Any

_XML_ESCAPES = {
    "<": "&lt;",
    ">": "&gt;",
    "&": "&amp;",
    "'": "&apos;",
    '"': "&quot;",
}


def escape_xml(unsafe: Any) -> str:
    """
    Escape text for use in XML content or attribute values.

    Anything that is not a string (e.g. a missing description) becomes "".
    Backslashes are left alone.
    """
    if not isinstance(unsafe, str):
        return ""
    return "".join(_XML_ESCAPES.get(char, char) for char in unsafe)


def to_posix(path: str) -> str:
    """Convert a Windows-style path to forward slashes."""
    return path.replace("\\", "/")
