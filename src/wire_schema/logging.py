"""
Verbose output for wire-schema.

Modules log through ``logging.getLogger(__name__)``, so every record passes
the ``wire_schema`` logger. Nothing is printed unless the application
configures logging itself or calls :func:`enable_verbose`; ``wire-schema -v``
does the latter at DEBUG.
"""

import logging
import sys

DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"

_logger = logging.getLogger("wire_schema")
_logger.addHandler(logging.NullHandler())

# Handler installed by enable_verbose, if any
_verbose_handler: logging.Handler | None = None


def enable_verbose(level: str = "INFO", format: str | None = None, stream=None) -> None:
    """Print wire-schema log records.

    Calling again replaces the earlier handler, so records never print twice.

    Args:
        level: "DEBUG", "INFO", "WARNING" or "ERROR", any case
        format: Optional logging format string
        stream: Destination (default: the current ``sys.stderr``)

    Raises:
        ValueError: If ``level`` is not a logging level name

    Example:
        enable_verbose("DEBUG")
        result = import_layout(text)  # Logs the round-trip diff on mismatch
        disable_verbose()
    """
    global _verbose_handler

    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level}")

    disable_verbose()
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(format or DEFAULT_FORMAT))
    _logger.addHandler(handler)
    _logger.setLevel(numeric)
    _verbose_handler = handler


def disable_verbose() -> None:
    """Remove the enable_verbose handler and put the level back to WARNING."""
    global _verbose_handler

    if _verbose_handler is not None:
        _logger.removeHandler(_verbose_handler)
        _verbose_handler = None
    _logger.setLevel(logging.WARNING)
