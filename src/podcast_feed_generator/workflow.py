"""Run orchestration: load the feed description, generate, write the document."""

from __future__ import annotations

import logging
import os
import sys
import time
from pathlib import Path
from typing import Optional, TextIO, Tuple

from . import assembler, config, feed_input
from .diagnostics import Diagnostics
from .exceptions import InputFileError, StrictModeError

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _has_file_handler(root_logger: logging.Logger, log_file: str) -> bool:
    target = os.path.abspath(log_file)
    return any(
        isinstance(handler, logging.FileHandler) and handler.baseFilename == target
        for handler in root_logger.handlers
    )


def apply_log_level(level: str, log_file: Optional[str] = None) -> None:
    """Configure the root logger for a CLI run.

    Console output goes to stderr; stdout carries only the RSS document. If
    handlers already exist (pytest, an embedding application) only their
    levels are changed.

    Args:
        level: Log level name (e.g., 'DEBUG', 'WARNING'), case-insensitive
        log_file: Optional path of a UTF-8 log file to append to as well

    Raises:
        ValueError: If the level name is unknown
        OSError: If the log file cannot be created
    """
    numeric_level = getattr(logging, str(level).upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level}")

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    if root_logger.handlers:
        for handler in root_logger.handlers:
            handler.setLevel(numeric_level)
    else:
        console = logging.StreamHandler(sys.stderr)
        console.setLevel(numeric_level)
        console.setFormatter(logging.Formatter(LOG_FORMAT))
        root_logger.addHandler(console)

    if not log_file or _has_file_handler(root_logger, log_file):
        return
    Path(log_file).parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    file_handler.setLevel(numeric_level)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(file_handler)


def write_document(
    document: str, output_path: Optional[str], stream: Optional[TextIO] = None
) -> None:
    """Write the document to ``output_path``, or to ``stream``/stdout when no path is set."""
    if output_path is None:
        target = stream or sys.stdout
        target.write(document)
        return
    path = Path(output_path).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(document, encoding="utf-8")
    logger.info(f"Feed written to: {path}")


def run_pipeline(cfg: config.Config, stream: Optional[TextIO] = None) -> Tuple[int, str]:
    """Generate the feed described by ``cfg.input_path`` and write it out.

    Args:
        cfg: Run configuration
        stream: Destination when ``cfg.output_path`` is None (defaults to stdout)

    Returns:
        Tuple of (episode_count, human-readable summary)

    Raises:
        InputFileError: If no input path is configured or the file cannot be loaded
        FeedStructureError: If the input is not shaped like a feed description
        StrictModeError: If ``cfg.strict`` is set and diagnostics were reported;
            raised after the document has been written
    """
    if cfg.input_path is None:
        raise InputFileError(
            "No input file configured",
            suggestion="Pass the feed description path or set 'input' in the config file",
        )

    start = time.time()
    raw = feed_input.load_input_file(cfg.input_path)
    feed = feed_input.parse_input_feed(raw)

    diagnostics = Diagnostics()
    document = assembler.generate(feed, diagnostics, pretty_print=cfg.pretty_print)
    write_document(document, cfg.output_path, stream)

    episode_count = len(feed.episodes)
    elapsed = time.time() - start
    summary = (
        f"Generated feed with {episode_count} episode(s) in {elapsed:.2f}s; "
        f"{diagnostics.summary()}"
    )
    logger.debug(summary)

    if cfg.strict and diagnostics:
        raise StrictModeError(len(diagnostics))
    return episode_count, summary
