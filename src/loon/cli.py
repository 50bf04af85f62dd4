"""LOON command line interface.

Reads JSON from a file (or stdin) and writes LOON to stdout:

    loon data.json
    cat data.json | loon --stats
    python -m loon data.json --output data.loon
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger

from . import __version__
from .config import LOG_LEVELS, Config
from .encoder import Encoder
from .errors import LoonEncodingError, LoonTypeError
from .stats import compare

EXIT_OK = 0
EXIT_ENCODING_ERROR = 1
EXIT_BAD_INPUT = 2


def configure_logging(level: str) -> None:
    """Route loon's loguru output to stderr at the given level."""
    logger.remove()
    logger.add(
        sys.stderr,
        format="<level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> | <level>{message}</level>",
        level=level,
    )
    logger.enable("loon")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="loon",
        description="Encode JSON as LOON, a compact notation for LLM prompts",
    )
    parser.add_argument(
        "input",
        nargs="?",
        default="-",
        help="JSON file to encode, or - for stdin (default: -)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Write LOON to this file instead of stdout",
    )
    parser.add_argument(
        "--no-schema",
        action="store_true",
        help="Disable the schema form for arrays of uniform objects",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Print JSON vs LOON token counts to stderr",
    )
    parser.add_argument(
        "--log-level",
        default=Config.LOG_LEVEL,
        help=f"Log level (default: {Config.LOG_LEVEL})",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the CLI.

    Returns:
        Exit code: 0 on success, 1 if the value cannot be encoded,
        2 if the configuration is invalid or the input cannot be read
        or is not valid JSON
    """
    args = build_parser().parse_args(argv)
    level = args.log_level.upper()

    try:
        Config.validate()
        if level not in LOG_LEVELS:
            raise ValueError(f"--log-level must be one of {', '.join(LOG_LEVELS)}, got {level!r}")
    except (ValueError, LoonTypeError) as e:
        configure_logging("ERROR")
        logger.error(f"Invalid configuration: {e}")
        return EXIT_BAD_INPUT

    configure_logging(level)

    try:
        value = json.loads(_read_input(args.input))
    except OSError as e:
        logger.error(f"Cannot read {args.input}: {e}")
        return EXIT_BAD_INPUT
    except UnicodeDecodeError as e:
        logger.error(f"Input {args.input} is not valid UTF-8: {e}")
        return EXIT_BAD_INPUT
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in {args.input}: {e}")
        return EXIT_BAD_INPUT

    encoder = Encoder(
        schema_arrays=Config.ENABLE_SCHEMA_ARRAYS and not args.no_schema,
        schema_min_rows=Config.SCHEMA_MIN_ROWS,
    )

    try:
        text = encoder.encode(value)
    except LoonEncodingError as e:
        logger.error(f"Encoding failed ({e.kind.value}): {e}")
        return EXIT_ENCODING_ERROR

    if args.output:
        args.output.write_text(text + "\n", encoding="utf-8")
        logger.info(f"Wrote {len(text)} characters to {args.output}")
    else:
        sys.stdout.write(text + "\n")

    if args.stats:
        stats = compare(value, encoder=encoder)
        sys.stderr.write(json.dumps(stats.to_dict()) + "\n")

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
