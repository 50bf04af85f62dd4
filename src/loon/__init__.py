"""LOON - LLM Optimised Object Notation.

A compact, one-way text encoding of JSON-compatible values that spends
fewer tokens than JSON when handing data to a language model.
"""

__version__ = "0.1.0"

from loguru import logger

from .encoder import Encoder, encode
from .errors import EncodingErrorKind, LoonEncodingError, LoonTypeError

# Silent unless the host application opts in with logger.enable("loon")
logger.disable("loon")

__all__ = [
    "Encoder",
    "encode",
    "EncodingErrorKind",
    "LoonEncodingError",
    "LoonTypeError",
    "__version__",
]
