"""structlog configuration for dtutil.

dtutil modules log through stdlib ``logging.getLogger(__name__)``; this
module routes those records through structlog to stderr. What shows up
with ``-v``:
- ``dtutil.domain.utilities``: an unrecognized diff unit falling back
  to hours.
- ``dtutil.services.*``: each operation that rejected its arguments,
  and each successful format.

Without ``-v`` only warnings and errors are shown. ``--log-json``
switches the console renderer for JSON lines. Babel is held at WARNING
even with ``-v``.
"""

from __future__ import annotations

import logging
import sys

import structlog

# Applied to structlog events and to stdlib records alike.
_SHARED_PROCESSORS: tuple[structlog.types.Processor, ...] = (
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
)


def _stderr_handler(*, log_json: bool) -> logging.Handler:
    """Build the single stderr handler rendering every record."""
    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=list(_SHARED_PROCESSORS),
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )
    return handler


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """Configure structlog and route all logging to stderr.

    Safe to call more than once: the root logger keeps exactly one
    handler.

    Args:
        verbose: Show dtutil's DEBUG records. When False, only WARNING+.
        log_json: Use JSON renderer instead of console renderer.
    """
    structlog.configure(
        processors=[
            *_SHARED_PROCESSORS,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(_stderr_handler(log_json=log_json))
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("dtutil").setLevel(logging.DEBUG if verbose else logging.WARNING)
    logging.getLogger("babel").setLevel(logging.WARNING)
