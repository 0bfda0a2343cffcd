"""Command-line interface for podcast_feed_generator."""

from __future__ import annotations

import argparse
import logging
from typing import Any, Callable, cast, Dict, List, Optional, Sequence, Tuple

from pydantic import ValidationError

from . import __version__, config, workflow
from .exceptions import FeedGeneratorError, StrictModeError

_LOGGER = logging.getLogger(__name__)


def _add_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "input",
        nargs="?",
        default=None,
        help="Path to the podcast description (JSON or YAML)",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Write the RSS document to this file instead of stdout",
    )
    parser.add_argument("--config", default=None, help="Config file (JSON or YAML)")
    parser.add_argument(
        "--log-level",
        dest="log_level",
        default=config.DEFAULT_LOG_LEVEL,
        help="Logging level (default: %(default)s)",
    )
    parser.add_argument("--log-file", dest="log_file", default=None, help="Also log to this file")
    parser.add_argument(
        "--no-pretty",
        dest="pretty_print",
        action="store_false",
        help="Write the document without indentation",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with an error if any warnings are reported (the feed is still written)",
    )
    parser.add_argument("--version", action="store_true", help="Show version and exit")


def validate_args(args: argparse.Namespace) -> None:
    """Validate parsed CLI arguments.

    Raises:
        ValueError: If any argument is invalid; all problems are reported together
    """
    errors: List[str] = []
    if not args.input:
        errors.append("Input file is required (provide it as an argument or 'input' in config)")
    if str(args.log_level).upper() not in config.VALID_LOG_LEVELS:
        errors.append(f"--log-level must be one of {config.VALID_LOG_LEVELS}, got: {args.log_level}")
    if errors:
        raise ValueError("; ".join(errors))


def _load_and_merge_config(
    parser: argparse.ArgumentParser, config_path: str, argv: Optional[Sequence[str]]
) -> argparse.Namespace:
    """Load configuration file and merge with CLI arguments (CLI wins).

    Raises:
        ValueError: If the config file is missing or invalid
    """
    config_data = config.load_config_file(config_path)
    try:
        config_model = config.Config.model_validate(config_data)
    except ValidationError as exc:
        raise ValueError(f"Invalid configuration: {exc}") from exc

    # Aliases match the argparse dests ("input", "output")
    defaults_updates: Dict[str, Any] = config_model.model_dump(exclude_none=True, by_alias=True)
    parser.set_defaults(**defaults_updates)
    return parser.parse_args(argv)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse CLI arguments, optionally merging configuration file defaults."""
    parser = argparse.ArgumentParser(
        description="Generate a podcast RSS feed (iTunes, Dublin Core, Media RSS) from JSON."
    )
    _add_arguments(parser)

    initial_args, _ = parser.parse_known_args(argv)

    if initial_args.version:
        print(f"podcast_feed_generator {__version__}")
        raise SystemExit(0)

    if initial_args.config:
        args = _load_and_merge_config(parser, initial_args.config, argv)
    else:
        args = parser.parse_args(argv)

    validate_args(args)
    return args


def _build_config(args: argparse.Namespace) -> config.Config:
    """Materialize a Config object from already-validated CLI arguments."""
    payload: Dict[str, Any] = {
        "input": args.input,
        "output": args.output,
        "log_level": args.log_level,
        "log_file": args.log_file,
        "pretty_print": args.pretty_print,
        "strict": args.strict,
    }
    return cast(config.Config, config.Config.model_validate(payload))


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    apply_log_level_fn: Optional[Callable[[str, Optional[str]], None]] = None,
    run_pipeline_fn: Optional[Callable[[config.Config], Tuple[int, str]]] = None,
    logger: Optional[logging.Logger] = None,
) -> int:
    """Entry point for the CLI; returns an exit status code."""
    log = logger or _LOGGER
    if apply_log_level_fn is None:
        apply_log_level_fn = workflow.apply_log_level
    if run_pipeline_fn is None:
        run_pipeline_fn = workflow.run_pipeline

    try:
        args = parse_args(argv)
    except ValueError as exc:
        log.error(f"Error: {exc}")
        return 1

    try:
        cfg = _build_config(args)
    except ValidationError as exc:
        log.error(f"Invalid configuration: {exc}")
        return 1

    apply_log_level_fn(cfg.log_level, cfg.log_file)
    log.debug(
        f"Input: {cfg.input_path}, output: {cfg.output_path or 'stdout'}, "
        f"strict: {cfg.strict}, pretty: {cfg.pretty_print}"
    )

    try:
        _, summary = run_pipeline_fn(cfg)
    except StrictModeError as exc:
        log.error(str(exc))
        return 1
    except FeedGeneratorError as exc:
        log.error(f"Error: {exc}")
        return 1

    log.info(summary)
    return 0


if __name__ == "__main__":  # pragma: no cover - script entry
    raise SystemExit(main())
