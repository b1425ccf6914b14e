"""Logger hierarchy for phpgen.

Every component logs under ``phpgen.<component>``. Nothing is emitted until
``configure_logging`` runs (the CLI does this), so embedding the generator in
another program stays silent unless that program opts in.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, Optional

ROOT_LOGGER = "phpgen"

logging.getLogger(ROOT_LOGGER).addHandler(logging.NullHandler())


def get_logger(component: str | None = None) -> logging.Logger:
    return logging.getLogger(f"{ROOT_LOGGER}.{component}" if component else ROOT_LOGGER)


class _ComponentFormatter(logging.Formatter):
    """Prefixes console lines with the emitting component (`[phpgen:writer]`)."""

    def format(self, record: logging.LogRecord) -> str:
        component = record.name[len(ROOT_LOGGER) + 1:] if record.name != ROOT_LOGGER else ""
        record.component = f"{ROOT_LOGGER}:{component}" if component else ROOT_LOGGER
        return super().format(record)


def configure_logging(
    *,
    verbose: bool = False,
    log_file: Optional[Path] = None,
    stream: Optional[IO[str]] = None,
) -> logging.Logger:
    """Send phpgen records to stderr (or `stream`) and optionally append them to `log_file`.

    Console output is INFO by default and DEBUG with `verbose`; the file sink
    always records DEBUG so a failed run can be inspected afterwards.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(logging.DEBUG if verbose or log_file is not None else logging.INFO)
    logger.propagate = False

    # Repeated CLI invocations in one process must not stack handlers.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(stream)
    console.setLevel(logging.DEBUG if verbose else logging.INFO)
    console.setFormatter(_ComponentFormatter("[%(component)s] %(levelname)s %(message)s"))
    logger.addHandler(console)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        logger.addHandler(file_handler)

    return logger


__all__ = ["ROOT_LOGGER", "configure_logging", "get_logger"]
