"""Logging setup on top of loguru.

Modules log a static message plus keyword context, e.g.
``logger.warning("Connector failed", source="Wikipedia", query="space")``.
Loguru stores the keywords in ``record["extra"]``; a patcher renders them as
``key=value`` pairs after the message so console and plain-text file output
keep the context. JSON file output carries them natively.
"""

import sys
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from loguru import Logger, Record

from reading_recs.models.config import LoggingConfig

# Bound by get_logger, already shown as {name}
_HIDDEN_EXTRA = frozenset({"name", "context"})

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level> <dim>{extra[context]}</dim>"
)
FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | "
    "{message} {extra[context]}"
)


def _render_context(record: "Record") -> None:
    extra = record["extra"]
    extra["context"] = " ".join(
        f"{key}={value}" for key, value in extra.items() if key not in _HIDDEN_EXTRA
    )


def setup_logging(config: LoggingConfig) -> None:
    """
    Replace loguru's default sink with the configured console and file sinks.

    Args:
        config: Logging configuration; ``file_path=None`` disables the file sink
    """
    logger.remove()
    logger.configure(patcher=_render_context)

    logger.add(sys.stderr, level=config.level, format=CONSOLE_FORMAT, colorize=config.colorize)

    if config.file_path:
        Path(config.file_path).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            config.file_path,
            level=config.level,
            format=FILE_FORMAT,
            rotation=config.rotation,
            retention=config.retention,
            compression=config.compression,
            serialize=config.serialize,
            enqueue=True,
        )

    logger.debug("Logging configured", level=config.level, file=config.file_path)


def get_logger(name: str) -> "Logger":
    """Logger bound to a module name (pass ``__name__``)."""
    return logger.bind(name=name)
