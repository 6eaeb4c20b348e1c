"""Logging setup for the command-line interface."""

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(
    level: str,
    log_file: Path | None = None,
    console: Console | None = None,
) -> None:
    """Install a rich stderr handler and an optional file handler.

    Raises:
        ValueError: If ``level`` is not a logging level name
    """
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level}")

    handlers: list[logging.Handler] = [
        RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
    ]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=numeric_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=handlers,
        force=True,
    )
    logging.getLogger("spoor").setLevel(numeric_level)
