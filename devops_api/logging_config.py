"""structlog configuration shared by the whole service."""

import logging
import os
import sys

import structlog

LOG_LEVEL = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)


class ConsoleLogger:
    """Print rendered events to stdout, and error-level events to stderr.

    Streams are looked up on every call so redirected ``sys.stdout`` and
    ``sys.stderr`` are honoured.
    """

    def __init__(self, *args):
        pass

    def msg(self, message: str) -> None:
        print(message, file=sys.stdout, flush=True)

    def err(self, message: str) -> None:
        print(message, file=sys.stderr, flush=True)

    debug = info = warning = warn = msg
    error = critical = fatal = exception = err


structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.dev.ConsoleRenderer(colors=False),
    ],
    wrapper_class=structlog.make_filtering_bound_logger(LOG_LEVEL),
    logger_factory=ConsoleLogger,
    cache_logger_on_first_use=False,
)

logger = structlog.get_logger("devops_api")
