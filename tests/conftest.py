"""Pytest fixtures for the LOON test suite."""

from typing import List

import pytest
from loguru import logger

from loon import stats as stats_module


# ============================================================================
# LOGGING FIXTURES
# ============================================================================


@pytest.fixture
def loon_logs():
    """
    Capture loguru messages emitted by the loon package.

    The package is disabled by default, so it is enabled for the duration
    of the test and disabled again afterwards.

    Yields:
        List of formatted "LEVEL message" strings
    """
    messages: List[str] = []
    logger.enable("loon")
    handler_id = logger.add(
        lambda msg: messages.append(msg.rstrip("\n")),
        format="{level} {message}",
        level="DEBUG",
    )
    try:
        yield messages
    finally:
        logger.remove(handler_id)
        logger.disable("loon")


# ============================================================================
# TOKENIZER FIXTURES
# ============================================================================


class CharEncoding:
    """Stand-in for a tiktoken Encoding: one token per character."""

    def __init__(self, name: str):
        self.name = name

    def encode(self, text: str) -> List[int]:
        return [ord(ch) for ch in text]


@pytest.fixture
def char_tokenizer(monkeypatch):
    """
    Replace tiktoken lookups with a one-token-per-character encoding.

    Yields:
        List of encoding names that were requested
    """
    requested: List[str] = []

    def _fake_get_encoding(name: str) -> CharEncoding:
        requested.append(name)
        return CharEncoding(name)

    monkeypatch.setattr(stats_module, "_get_encoding", _fake_get_encoding)
    yield requested
