"""Error types raised by the LOON encoder."""

from enum import Enum
from typing import Any, Optional


class EncodingErrorKind(str, Enum):
    """Reason an encode was aborted."""

    UNSUPPORTED_TYPE = "unsupported_type"
    NON_FINITE_NUMBER = "non_finite_number"
    CIRCULAR_REFERENCE = "circular_reference"
    INVALID_KEY = "invalid_key"


class LoonEncodingError(Exception):
    """
    Raised when a value cannot be represented in LOON.

    Any failure aborts the whole top-level encode; no partial output is
    produced.

    Attributes:
        kind: Which rule was violated
        value: The offending value (the containing object or array for
            INVALID_KEY, the container itself for CIRCULAR_REFERENCE)
        key: The offending key, only set for INVALID_KEY
    """

    def __init__(
        self,
        kind: EncodingErrorKind,
        message: str,
        value: Any = None,
        key: Optional[Any] = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.value = value
        self.key = key

    def __repr__(self) -> str:
        return f"LoonEncodingError(kind={self.kind.value!r}, message={str(self)!r})"


class LoonTypeError(TypeError):
    """Raised when an encoder option or setting has the wrong type."""

    def __init__(self, message: str, expected: str, actual: str):
        super().__init__(f"{message}. Expected {expected}, but received {actual}")
        self.expected = expected
        self.actual = actual
