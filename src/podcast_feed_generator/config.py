from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from . import config_constants


def _is_test_environment() -> bool:
    """Check if we're running in a test environment."""
    import sys

    if "pytest" in sys.modules or "PYTEST_CURRENT_TEST" in os.environ:
        return True
    if os.environ.get("TESTING", "").lower() in ("1", "true", "yes"):
        return True
    return False


# Tests configure through Config objects and explicit env vars, never a .env file
if not _is_test_environment():
    try:
        load_dotenv(override=False)
    except (PermissionError, OSError):
        pass

# Re-exported for convenience
DEFAULT_LOG_LEVEL = config_constants.DEFAULT_LOG_LEVEL
VALID_LOG_LEVELS = config_constants.VALID_LOG_LEVELS


def _env_fallback(value: Any, env_var: str) -> Optional[str]:
    """Prefer an explicit value; otherwise read ``env_var`` from the environment."""
    if value is not None:
        value_str = str(value).strip()
        if value_str:
            return value_str
    env_value = os.getenv(env_var, "").strip()
    return env_value or None


class Config(BaseModel):
    """Configuration model for a feed generation run.

    Can be built programmatically, from CLI arguments, or from a JSON/YAML file
    loaded with `load_config_file()`. The model is immutable after creation.

    Attributes:
        input_path: Path to the JSON/YAML feed description.
        output_path: Where to write the RSS document. None writes to stdout.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Falls back to the LOG_LEVEL environment variable.
        log_file: Optional log file path. Falls back to LOG_FILE.
        pretty_print: Indent the generated XML.
        strict: Treat any diagnostic as a failure (the document is still written).

    Example:
        >>> cfg = Config(input="feed.json", output="feed.xml", strict=True)
        >>> cfg.input_path
        'feed.json'
    """

    input_path: Optional[str] = Field(default=None, alias="input")
    output_path: Optional[str] = Field(default=None, alias="output")
    log_level: str = Field(default=DEFAULT_LOG_LEVEL, alias="log_level", validate_default=True)
    log_file: Optional[str] = Field(default=None, alias="log_file", validate_default=True)
    pretty_print: bool = Field(default=True, alias="pretty_print")
    strict: bool = Field(default=False, alias="strict")

    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)

    @field_validator("input_path", "output_path", mode="before")
    @classmethod
    def _strip_path(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: Any) -> str:
        """Normalize log level value, falling back to LOG_LEVEL."""
        resolved = _env_fallback(value, "LOG_LEVEL")
        if resolved is None:
            return DEFAULT_LOG_LEVEL
        return resolved.upper()

    @field_validator("log_level", mode="after")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        if value not in VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {VALID_LOG_LEVELS}, got: {value}")
        return value

    @field_validator("log_file", mode="before")
    @classmethod
    def _load_log_file_from_env(cls, value: Any) -> Optional[str]:
        return _env_fallback(value, "LOG_FILE")


def load_config_file(path: str) -> Dict[str, Any]:
    """Load configuration from a JSON or YAML file.

    The format is auto-detected from the extension (`.json`, `.yaml`, `.yml`).
    The returned dictionary can be unpacked into `Config`.

    Args:
        path: Path to configuration file. Supports tilde expansion.

    Returns:
        Dict[str, Any]: Configuration values keyed by `Config` field names or aliases.

    Raises:
        ValueError: If the path is empty, the file does not exist, the format is
            unsupported, parsing fails, or the top-level value is not a mapping.

    Example:
        >>> cfg = Config(**load_config_file("feedgen.yaml"))

    Supported Formats:
        **JSON** (`.json`):

            {"input": "podcast.json", "output": "feed.xml", "strict": true}

        **YAML** (`.yaml`, `.yml`):

            input: podcast.json
            output: feed.xml
            strict: true
    """
    if not path or not str(path).strip():
        raise ValueError("Config path cannot be empty")

    cfg_path = Path(path).expanduser()
    if not cfg_path.is_file():
        raise ValueError(f"Config file not found: {path}")

    suffix = cfg_path.suffix.lower()
    text = cfg_path.read_text(encoding="utf-8")
    if suffix in config_constants.JSON_EXTENSIONS:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON config file: {exc}") from exc
    elif suffix in config_constants.YAML_EXTENSIONS:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML config file: {exc}") from exc
    else:
        raise ValueError(f"Unsupported config file type: {suffix or '(none)'}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError("Config file must contain a mapping at the top level")
    return data
