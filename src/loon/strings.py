"""Lexical rules for LOON: identifiers, string quoting and escaping.

Two quoting policies exist and must stay separate:

- Standalone strings are quoted when empty or when they contain one of
  ``{ } [ ] : "``.
- Strings inside schema-array cells are quoted only when they contain one
  of ``, ; [ ] { }``. A cell's boundaries are fixed by those separators,
  so a colon or a double quote alone is unambiguous there.
"""

import re
from typing import Any

# ASCII only; "$" and "_" are allowed anywhere, digits everywhere but first.
_IDENTIFIER_RE = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")

_STANDALONE_RESERVED = frozenset('{}[]:"')
_SCHEMA_CELL_RESERVED = frozenset(",;[]{}")

_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def is_valid_identifier(key: Any) -> bool:
    """
    Check whether a key can be written unquoted as an object key.

    Args:
        key: Candidate key (non-str keys are never valid)

    Returns:
        True if key matches ``[A-Za-z_$][A-Za-z0-9_$]*``
    """
    if not isinstance(key, str):
        return False
    return _IDENTIFIER_RE.fullmatch(key) is not None


def needs_quoting(s: str) -> bool:
    """Return True if a standalone string must be quoted."""
    if not s:
        return True
    return any(ch in _STANDALONE_RESERVED for ch in s)


def needs_schema_quoting(s: str) -> bool:
    """Return True if a schema-cell string must be quoted."""
    return any(ch in _SCHEMA_CELL_RESERVED for ch in s)


def escape_string(s: str) -> str:
    """
    Escape a string for use between double quotes.

    Quote, backslash and the common control characters get their short
    escapes; any other code point below 0x20 becomes ``\\u`` plus four
    lowercase hex digits. Everything else passes through.

    Args:
        s: Raw string

    Returns:
        Escaped string (without surrounding quotes)
    """
    parts = []
    for ch in s:
        escaped = _ESCAPES.get(ch)
        if escaped is not None:
            parts.append(escaped)
        elif ord(ch) < 0x20:
            parts.append(f"\\u{ord(ch):04x}")
        else:
            parts.append(ch)
    return "".join(parts)


def _quote(s: str) -> str:
    return '"' + escape_string(s) + '"'


def encode_string(s: str) -> str:
    """Encode a standalone string, quoting only when required."""
    if needs_quoting(s):
        return _quote(s)
    return s


def encode_schema_string(s: str) -> str:
    """Encode a string in a schema-array cell, quoting only when required."""
    if needs_schema_quoting(s):
        return _quote(s)
    return s
