"""
Command-line entry point.

    koedo --today
    koedo --week
    koedo -m curry -m tofu --week
    koedo --order
"""

import logging
import sys
from typing import Optional, Sequence

import structlog

from src.koedo.arguments import parse_arguments, usage_text
from src.koedo.config import ConfigError, get_config, init_config
from src.koedo.dispatch import Dispatcher
from src.koedo.errors import KoedoError, QueryError
from src.koedo.validation import validate_query


def configure_logging(log_level: str = "WARNING") -> None:
    """Configure structured logging. Logs go to stderr, results to stdout."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer() if log_level != "DEBUG" else structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, log_level.upper(), logging.WARNING),
    )


logger = structlog.get_logger(__name__)


def main(argv: Optional[Sequence[str]] = None, *, dispatcher: Optional[Dispatcher] = None) -> int:
    tokens = list(sys.argv[1:] if argv is None else argv)

    configure_logging(get_config().log_level)
    try:
        config = init_config()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    items = parse_arguments(tokens)
    try:
        validate_query(items)
    except QueryError as e:
        logger.info("Query rejected", tokens=tokens, error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        print(usage_text(), file=sys.stderr)
        return 1

    if dispatcher is None:
        dispatcher = Dispatcher(config)

    try:
        dispatcher.run(items)
    except KoedoError as e:
        logger.info("Query failed", tokens=tokens, error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


def run() -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    run()
