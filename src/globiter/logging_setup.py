"""
Console logging for the CLI. The library itself only emits structlog events
and leaves configuration to the application.
"""

import logging
import sys

import structlog


def configure_logging(log_level_str: str = "warning") -> None:
    log_level = getattr(logging, log_level_str.upper(), logging.WARNING)

    structlog.configure(
        processors=[
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Diagnostics go to stderr so listed paths on stdout stay machine-readable.
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        )
    )

    globiter_logger = logging.getLogger("globiter")
    globiter_logger.handlers.clear()
    globiter_logger.addHandler(handler)
    globiter_logger.setLevel(log_level)

    structlog.get_logger(__name__).debug("logging_configured", level=log_level_str)
