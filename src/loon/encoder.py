"""LOON encoder.

Converts a JSON-compatible Python value into LOON text. Arrays of two or
more dicts sharing the same key set are written once as a column header
followed by positional rows:

    >>> encode([{"a": 1, "b": 2}, {"a": 3, "b": 4}])
    '[{a,b}:1,2;3,4]'

Everything else follows the bracketed grammar:

    >>> encode({"a": 1, "b": "x"})
    '{a:1;b:x}'
"""

import math
from typing import Any, Dict, List, Sequence, Set, Union

from loguru import logger

from .config import Config
from .errors import EncodingErrorKind, LoonEncodingError, LoonTypeError
from .strings import encode_schema_string, encode_string, is_valid_identifier

_KEY_RULES = (
    "Keys must start with a letter, underscore, or dollar sign, "
    "and contain only letters, digits, underscores, or dollar signs."
)

Array = Union[List[Any], tuple]


class Encoder:
    """
    Reusable LOON encoder.

    The visiting set used for cycle detection is cleared at the start of
    every ``encode`` call, so one instance may be reused for sequential
    calls. Overlapping calls on the same instance are not supported; use
    one instance per thread or the module-level ``encode``.
    """

    def __init__(self, schema_arrays: bool = True, schema_min_rows: int = 2):
        """
        Initialize the encoder.

        Args:
            schema_arrays: Use the schema form for homogeneous object arrays
            schema_min_rows: Minimum number of rows before the schema form
                is used (must be >= 2)

        Raises:
            LoonTypeError: If schema_min_rows is not an int
            ValueError: If schema_min_rows < 2
        """
        if isinstance(schema_min_rows, bool) or not isinstance(schema_min_rows, int):
            raise LoonTypeError(
                "schema_min_rows must be an integer", "int", type(schema_min_rows).__name__
            )
        if schema_min_rows < 2:
            raise ValueError(f"schema_min_rows must be >= 2, got {schema_min_rows}")

        self.schema_arrays = bool(schema_arrays)
        self.schema_min_rows = schema_min_rows
        self._visiting: Set[int] = set()

    @classmethod
    def from_config(cls) -> "Encoder":
        """Build an encoder from the current Config values."""
        return cls(
            schema_arrays=Config.ENABLE_SCHEMA_ARRAYS,
            schema_min_rows=Config.SCHEMA_MIN_ROWS,
        )

    def encode(self, value: Any) -> str:
        """
        Encode a value to LOON.

        Args:
            value: None, bool, int, float, str, list/tuple or dict, nested
                arbitrarily

        Returns:
            LOON string

        Raises:
            LoonEncodingError: If any part of the value cannot be encoded
        """
        self._visiting.clear()
        try:
            return self._encode_value(value)
        except LoonEncodingError as e:
            logger.debug(f"LOON encode aborted ({e.kind.value}): {e}")
            raise

    # ========================================================================
    # Dispatch
    # ========================================================================

    def _encode_value(self, value: Any) -> str:
        if value is None:
            return "null"
        # bool before int: bool is an int subclass
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, int):
            return _encode_int(value)
        if isinstance(value, float):
            return _encode_number(value)
        if isinstance(value, str):
            return encode_string(value)
        if isinstance(value, (dict, list, tuple)):
            return self._encode_container(value)

        raise LoonEncodingError(
            EncodingErrorKind.UNSUPPORTED_TYPE,
            f"Cannot encode value of type {type(value).__name__}",
            value,
        )

    def _encode_container(self, value: Union[Dict[Any, Any], Array]) -> str:
        container_id = id(value)
        if container_id in self._visiting:
            raise LoonEncodingError(
                EncodingErrorKind.CIRCULAR_REFERENCE, "Circular reference detected", value
            )

        self._visiting.add(container_id)
        try:
            if isinstance(value, dict):
                return self._encode_object(value)
            return self._encode_array(value)
        finally:
            self._visiting.discard(container_id)

    # ========================================================================
    # Objects
    # ========================================================================

    def _encode_object(self, obj: Dict[Any, Any]) -> str:
        pairs = []
        for key, value in obj.items():
            _check_key(key, obj)
            pairs.append(f"{key}:{self._encode_value(value)}")
        return "{" + ";".join(pairs) + "}"

    # ========================================================================
    # Arrays
    # ========================================================================

    def _encode_array(self, arr: Array) -> str:
        if self._is_schema_array(arr):
            return self._encode_schema_array(arr)
        return "[" + ",".join(self._encode_value(item) for item in arr) + "]"

    def _is_schema_array(self, arr: Array) -> bool:
        """
        Check whether an array qualifies for the schema form.

        Every element must be a dict, the first must have at least one key,
        and all elements must share exactly the first element's key set
        (order-insensitive).
        """
        if not self.schema_arrays or len(arr) < self.schema_min_rows:
            return False
        if not all(isinstance(item, dict) for item in arr):
            return False

        first_keys = arr[0].keys()
        if not first_keys:
            return False
        return all(item.keys() == first_keys for item in arr[1:])

    def _encode_schema_array(self, rows: Sequence[Dict[Any, Any]]) -> str:
        """
        Encode homogeneous dicts as ``[{k1,k2}:v1,v2;v1,v2]``.

        Column order comes from the first row's insertion order. String
        cells use the relaxed schema-cell quoting; every other cell value
        is encoded normally.
        """
        keys = list(rows[0])
        for key in keys:
            _check_key(key, rows)

        logger.debug(f"Using schema form for {len(rows)} rows x {len(keys)} columns")

        encoded_rows = []
        for row in rows:
            cells = []
            for key in keys:
                cell = row[key]
                if isinstance(cell, str):
                    cells.append(encode_schema_string(cell))
                else:
                    cells.append(self._encode_value(cell))
            encoded_rows.append(",".join(cells))

        return "[{" + ",".join(keys) + "}:" + ";".join(encoded_rows) + "]"


def _encode_int(value: int) -> str:
    # str(int) is capped by sys.get_int_max_str_digits() on 3.11+
    try:
        return int.__repr__(value)
    except ValueError as e:
        raise LoonEncodingError(
            EncodingErrorKind.UNSUPPORTED_TYPE,
            f"Cannot encode integer as decimal text: {e}",
            value,
        ) from e


def _encode_number(value: float) -> str:
    """
    Encode a float.

    Integral values below 1e21 are written without a fractional part
    (``-0.0`` becomes ``0``); everything else uses the shortest
    round-trippable repr.
    """
    if math.isnan(value) or math.isinf(value):
        raise LoonEncodingError(
            EncodingErrorKind.NON_FINITE_NUMBER,
            f"Cannot encode non-finite number: {value}",
            value,
        )
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return float.__repr__(value)


def _check_key(key: Any, container: Any) -> None:
    if not is_valid_identifier(key):
        raise LoonEncodingError(
            EncodingErrorKind.INVALID_KEY,
            f'Object key "{key}" is not a valid identifier. {_KEY_RULES}',
            container,
            key=key,
        )


def encode(value: Any) -> str:
    """
    Encode a value to LOON with a fresh Encoder.

    Safe to call from several threads at once since no state is shared
    between calls.

    Args:
        value: Value to encode

    Returns:
        LOON string

    Raises:
        LoonEncodingError: If the value cannot be encoded
    """
    return Encoder().encode(value)
