"""Token accounting: how much LOON saves over compact JSON."""

import json
from dataclasses import asdict, dataclass
from functools import lru_cache
from typing import Any, Dict, Optional

import tiktoken

from .config import Config
from .encoder import Encoder


@lru_cache(maxsize=None)
def _get_encoding(encoding_name: str) -> "tiktoken.Encoding":
    return tiktoken.get_encoding(encoding_name)


def count_tokens(text: str, encoding_name: Optional[str] = None) -> int:
    """
    Count tokens in text with tiktoken.

    Args:
        text: Text to count tokens for
        encoding_name: tiktoken encoding (default: Config.TOKEN_ENCODING)

    Returns:
        Token count
    """
    if not text:
        return 0
    encoding = _get_encoding(encoding_name or Config.TOKEN_ENCODING)
    return len(encoding.encode(text))


@dataclass(frozen=True)
class EncodingStats:
    """Size of one value as compact JSON and as LOON."""

    json_chars: int
    loon_chars: int
    json_tokens: int
    loon_tokens: int

    @property
    def token_savings(self) -> float:
        """Fraction of JSON tokens saved by LOON (negative if LOON is larger)."""
        if self.json_tokens == 0:
            return 0.0
        return 1.0 - self.loon_tokens / self.json_tokens

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["token_savings"] = round(self.token_savings, 4)
        return data


def compare(
    value: Any,
    encoder: Optional[Encoder] = None,
    encoding_name: Optional[str] = None,
) -> EncodingStats:
    """
    Measure a value as compact JSON and as LOON.

    Args:
        value: Value to measure
        encoder: Encoder to use (default: Encoder.from_config())
        encoding_name: tiktoken encoding (default: Config.TOKEN_ENCODING)

    Returns:
        EncodingStats for the value

    Raises:
        LoonEncodingError: If the value cannot be encoded as LOON
    """
    encoder = encoder or Encoder.from_config()
    loon_text = encoder.encode(value)
    json_text = json.dumps(value, separators=(",", ":"), ensure_ascii=False)

    return EncodingStats(
        json_chars=len(json_text),
        loon_chars=len(loon_text),
        json_tokens=count_tokens(json_text, encoding_name),
        loon_tokens=count_tokens(loon_text, encoding_name),
    )
