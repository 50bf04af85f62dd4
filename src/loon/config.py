"""Centralized configuration for LOON."""

import os

from .errors import LoonTypeError

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}
LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class Config:
    """
    LOON configuration with environment variable overrides.

    All configuration values are centralized here with sensible defaults.
    Values can be overridden via environment variables.
    """

    @staticmethod
    def _parse_bool(name: str, default: str) -> bool:
        """Parse a boolean flag from the environment."""
        raw = os.getenv(name, default).strip().lower()
        if raw in _TRUTHY:
            return True
        if raw in _FALSY:
            return False
        raise ValueError(f"Invalid {name} environment variable: expected a boolean, got {raw!r}")

    @staticmethod
    def _parse_int(name: str, default: str) -> int:
        """Parse an integer setting from the environment."""
        raw = os.getenv(name, default)
        try:
            return int(raw)
        except ValueError as e:
            raise ValueError(f"Invalid {name} environment variable: {e}")

    # ========================================================================
    # Logging
    # ========================================================================
    LOG_LEVEL: str = os.getenv("LOON_LOG_LEVEL", "WARNING").upper()

    # ========================================================================
    # Encoding
    # ========================================================================
    ENABLE_SCHEMA_ARRAYS: bool = _parse_bool.__func__("LOON_ENABLE_SCHEMA_ARRAYS", "true")
    SCHEMA_MIN_ROWS: int = _parse_int.__func__("LOON_SCHEMA_MIN_ROWS", "2")

    # ========================================================================
    # Tool output wrapping
    # ========================================================================
    ENABLE_LOON_OUTPUTS: bool = _parse_bool.__func__("LOON_ENABLE_OUTPUTS", "true")

    # ========================================================================
    # Token accounting
    # ========================================================================
    TOKEN_ENCODING: str = os.getenv("LOON_TOKEN_ENCODING", "cl100k_base")

    @classmethod
    def validate(cls) -> bool:
        """
        Validate configuration consistency.

        Checks:
        - SCHEMA_MIN_ROWS is an integer >= 2
        - LOG_LEVEL is a known loguru level
        - TOKEN_ENCODING is not empty

        Returns:
            True if validation passes

        Raises:
            LoonTypeError: If SCHEMA_MIN_ROWS is not an integer
            ValueError: If validation fails
        """
        errors = []

        if isinstance(cls.SCHEMA_MIN_ROWS, bool) or not isinstance(cls.SCHEMA_MIN_ROWS, int):
            raise LoonTypeError(
                "SCHEMA_MIN_ROWS must be an integer",
                "int",
                type(cls.SCHEMA_MIN_ROWS).__name__,
            )
        if cls.SCHEMA_MIN_ROWS < 2:
            errors.append(f"SCHEMA_MIN_ROWS must be >= 2, got {cls.SCHEMA_MIN_ROWS}")

        if cls.LOG_LEVEL not in LOG_LEVELS:
            errors.append(
                f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {cls.LOG_LEVEL!r}"
            )

        if not cls.TOKEN_ENCODING or not cls.TOKEN_ENCODING.strip():
            errors.append("TOKEN_ENCODING must not be empty")

        if errors:
            raise ValueError(f"Config validation failed: {'; '.join(errors)}")

        return True
