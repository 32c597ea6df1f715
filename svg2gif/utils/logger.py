"""
Logging utilities for svg2gif.

Every component logs below the ``svg2gif`` logger: ``svg2gif.batch.s3_client``
for listing and transfer, ``svg2gif.batch.pool`` for unexpected task errors,
``svg2gif.batch.task`` for the per-item progress and failure records. The
CLI configures the ``svg2gif`` logger once and hands it to BatchProcessor,
which passes it on to ConversionTask and ConversionWorkerPool.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union


def setup_logger(
    name: str = "svg2gif",
    log_file: Optional[Path] = None,
    level: Union[int, str] = logging.INFO,
    console: bool = True
) -> logging.Logger:
    """
    Set up a logger with file and console handlers.

    Calling it again replaces the handlers instead of stacking new ones,
    so a run never prints each record twice.

    Args:
        name: Logger name (default: the package logger)
        log_file: Optional path to log file
        level: Logging level, as a number or a name such as ``"DEBUG"``
        console: Whether to log to console (default: True)

    Returns:
        Configured logger instance
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        level = resolved

    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
