"""Logging setup for the command line entry point."""

from __future__ import annotations

import logging

# httpx logs every request at INFO, which drowns the per-resource apply lines.
_TRANSPORT_LOGGERS = ("httpx", "httpcore")


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Set up root logging for a deploy run.

    Transport libraries stay at WARNING unless ``level`` asks for DEBUG output.
    ``force=True`` replaces handlers installed earlier, e.g. by a test harness.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    transport_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in _TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(transport_level)
