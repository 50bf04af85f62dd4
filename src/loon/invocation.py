"""Fail-safe LOON encoding for tool results headed to an LLM."""

from typing import Any, Awaitable, Callable, Optional

from loguru import logger

from .config import Config
from .encoder import Encoder
from .errors import LoonEncodingError


def apply_loon_encoding(result: Any, encoder: Optional[Encoder] = None) -> Any:
    """
    Apply LOON encoding to a tool result if enabled.

    Unlike ``encode``, this never raises for unencodable input: the
    original result is returned so the calling pipeline keeps going.

    Args:
        result: Tool execution result
        encoder: Encoder to use (default: Encoder.from_config())

    Returns:
        LOON string if enabled and encodable, otherwise unchanged result
    """
    if not Config.ENABLE_LOON_OUTPUTS:
        return result

    encoder = encoder or Encoder.from_config()
    try:
        return encoder.encode(result)
    except LoonEncodingError as e:
        logger.warning(f"LOON encoding failed ({e.kind.value}): {e}, returning original result")
        return result


async def invoke_tool(call_next: Callable[[], Awaitable[Any]]) -> Any:
    """
    Await the next handler and apply LOON encoding to its result.

    Args:
        call_next: Coroutine function producing the tool result

    Returns:
        Tool result with LOON encoding applied when enabled
    """
    result = await call_next()
    return apply_loon_encoding(result)
