"""structlog setup for the gamecat CLI.

Library modules log through stdlib ``logging`` and the validate service
emits structlog events; both go to one stderr handler, rendered for a
terminal or as JSON lines with ``--log-json``. Anything logged inside
:func:`record_scope` carries the source and position of the record being
validated.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import IO, Any

import structlog

# Third-party loggers that stay at WARNING even under --verbose.
_NOISY_LOGGERS = ("pluggy",)


def log_level(*, verbose: bool = False, quiet: bool = False) -> int:
    """Level for the ``gamecat`` logger. ``--verbose`` beats ``--quiet``."""
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.ERROR
    return logging.WARNING


@contextmanager
def record_scope(**fields: Any) -> Iterator[None]:
    """Bind record context (``source``, ``index``, ``game``) for nested log events.

    ``None`` values are left out so a single record from stdin does not
    log ``index=None``.
    """
    bound = {key: value for key, value in fields.items() if value is not None}
    with structlog.contextvars.bound_contextvars(**bound):
        yield


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_json: bool = False,
    stream: IO[str] | None = None,
) -> None:
    """Route gamecat's stdlib and structlog events to *stream* (stderr).

    Calling it again replaces the previous handler.
    """
    out = stream if stream is not None else sys.stderr

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    renderer: structlog.types.Processor
    if log_json:
        # Plugin failures are logged with exc_info; keep them parseable.
        shared_processors.append(structlog.processors.dict_tracebacks)
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=out.isatty())

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(out)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("gamecat").setLevel(log_level(verbose=verbose, quiet=quiet))
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
