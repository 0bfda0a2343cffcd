"""Input loading and mapping of raw feed descriptions onto typed records."""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, List, Mapping, Optional, Tuple

import yaml

from . import config_constants, defaults, models
from .exceptions import FeedStructureError, InputFileError

logger = logging.getLogger(__name__)

# Input key -> PodcastInfo attribute
PODCAST_FIELDS: Dict[str, str] = {
    "title": "title",
    "description": "description",
    "link": "link",
    "language": "language",
    "copyright": "copyright",
    "podcastArtworkUrl": "artwork_url",
    "ownerName": "owner_name",
    "ownerEmail": "owner_email",
    "explicit": "explicit",
    "podcastType": "podcast_type",
    "author": "author",
    "subtitle": "subtitle",
    "summary": "summary",
    "generator": "generator",
    "lastBuildDate": "last_build_date",
}

# Input key -> EpisodeInfo attribute
EPISODE_FIELDS: Dict[str, str] = {
    "title": "title",
    "description": "description",
    "htmlDescription": "html_description",
    "creator": "creator",
    "pubDate": "pub_date",
    "link": "link",
    "guid": "guid",
    "guidIsPermalink": "guid_is_permalink",
    "author": "author",
    "subtitle": "subtitle",
    "summary": "summary",
    "explicit": "explicit",
    "duration": "duration",
    "episodeArtUrl": "artwork_url",
    "episodeNumber": "episode_number",
    "seasonNumber": "season_number",
    "itunesTitle": "itunes_title",
    "episodeType": "episode_type",
    "mediaFileUrl": "media_url",
    "mediaMimeType": "media_mime_type",
    "mediaFileSizeBytes": "media_size_bytes",
    "mediaIsDefault": "media_is_default",
    "medium": "medium",
}

# Attributes kept as given (numbers/booleans are not turned into strings)
SCALAR_ATTRIBUTES = frozenset(
    {
        "explicit",
        "guid",
        "guid_is_permalink",
        "duration",
        "episode_number",
        "season_number",
        "media_size_bytes",
        "media_is_default",
    }
)


def _describe(value: Any) -> str:
    return type(value).__name__


def _coerce_field(attr: str, value: Any, path: str) -> Any:
    """Check a single field value and normalize plain-text fields to str."""
    if value is None:
        return None
    if isinstance(value, (list, tuple, dict)):
        raise FeedStructureError(
            f"Expected a single value, got {_describe(value)}",
            path=path,
        )
    if attr in SCALAR_ATTRIBUTES or isinstance(value, str):
        return value
    return defaults.to_text(value)


def _map_fields(
    data: Mapping[str, Any], field_map: Dict[str, str], path: str
) -> Dict[str, Any]:
    kwargs: Dict[str, Any] = {}
    for key, value in data.items():
        attr = field_map.get(key)
        if attr is None:
            continue
        kwargs[attr] = _coerce_field(attr, value, f"{path}.{key}")
    unknown = sorted(str(k) for k in data.keys() if k not in field_map)
    if unknown:
        logger.debug(f"Ignoring unknown keys in {path}: {', '.join(unknown)}")
    return kwargs


def _parse_categories(value: Any, path: str) -> Optional[Tuple[str, ...]]:
    if value is None:
        return None
    if not isinstance(value, (list, tuple)):
        raise FeedStructureError(
            f"Categories must be a list, got {_describe(value)}",
            path=path,
            suggestion='Use a list of names, e.g. "categories": ["Technology"]',
        )
    names: List[str] = []
    for idx, item in enumerate(value):
        if isinstance(item, (list, tuple, dict)):
            raise FeedStructureError(
                f"Category must be a name, got {_describe(item)}",
                path=f"{path}[{idx}]",
            )
        names.append(defaults.to_text(item))
    return tuple(names)


def parse_podcast(data: Any, path: str = "podcast") -> models.PodcastInfo:
    """Build a PodcastInfo from the raw ``podcast`` mapping.

    Args:
        data: Raw channel mapping, or None for an empty channel
        path: Location of the mapping, used in error messages

    Returns:
        PodcastInfo with every recognized key populated

    Raises:
        FeedStructureError: If data is not a mapping or holds malformed values
    """
    if data is None:
        return models.PodcastInfo()
    if not isinstance(data, Mapping):
        raise FeedStructureError(
            f"Podcast details must be a mapping, got {_describe(data)}", path=path
        )
    kwargs = _map_fields(data, PODCAST_FIELDS, path)
    kwargs["categories"] = _parse_categories(data.get("categories"), f"{path}.categories")
    return models.PodcastInfo(**kwargs)


def parse_episode(data: Any, path: str) -> models.EpisodeInfo:
    """Build an EpisodeInfo from one raw episode mapping.

    Raises:
        FeedStructureError: If data is not a mapping or holds malformed values
    """
    if not isinstance(data, Mapping):
        raise FeedStructureError(
            f"Episode entry must be a mapping, got {_describe(data)}",
            path=path,
        )
    return models.EpisodeInfo(**_map_fields(data, EPISODE_FIELDS, path))


def parse_input_feed(data: Any) -> models.InputFeed:
    """Convert a parsed JSON/YAML feed description into an InputFeed.

    A missing ``podcast`` object is treated as empty channel metadata and a
    missing ``episodes`` list as an empty sequence. Episode order is kept.

    Args:
        data: Parsed feed description (typically ``json.load`` output)

    Returns:
        InputFeed with typed channel and episode records

    Raises:
        FeedStructureError: If the input is not shaped like a feed description

    Example:
        >>> feed = parse_input_feed({"podcast": {"title": "Show"}, "episodes": []})
        >>> feed.podcast.title
        'Show'
    """
    if isinstance(data, models.InputFeed):
        return data
    if not isinstance(data, Mapping):
        raise FeedStructureError(
            f"Feed description must be a mapping, got {_describe(data)}",
            suggestion='Provide an object with "podcast" and "episodes" keys',
        )

    podcast = parse_podcast(data.get("podcast"))

    raw_episodes = data.get("episodes")
    if raw_episodes is None:
        raw_episodes = []
    if not isinstance(raw_episodes, (list, tuple)):
        raise FeedStructureError(
            f"Episodes must be a list, got {_describe(raw_episodes)}", path="episodes"
        )
    episodes = tuple(
        parse_episode(raw, f"episodes[{idx}]") for idx, raw in enumerate(raw_episodes)
    )
    logger.debug(f"Parsed feed description with {len(episodes)} episode(s)")
    return models.InputFeed(podcast=podcast, episodes=episodes)


def load_input_file(path: str) -> Any:
    """Load a feed description from a JSON or YAML file.

    The format is picked from the file extension; anything other than
    ``.yaml``/``.yml`` is read as JSON.

    Args:
        path: Path to the feed description. Supports tilde expansion.

    Returns:
        The parsed document (usually a dict)

    Raises:
        InputFileError: If the file is missing, unreadable or not valid JSON/YAML
    """
    if not path or not str(path).strip():
        raise InputFileError("Input path is empty")

    expanded = os.path.expanduser(str(path))
    if not os.path.isfile(expanded):
        raise InputFileError("Input file not found", path=str(path))

    ext = os.path.splitext(expanded)[1].lower()
    try:
        with open(expanded, "r", encoding="utf-8") as handle:
            if ext in config_constants.YAML_EXTENSIONS:
                return yaml.safe_load(handle)
            return json.load(handle)
    except json.JSONDecodeError as exc:
        raise InputFileError(f"Invalid JSON in {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise InputFileError(f"Invalid YAML in {path}: {exc}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise InputFileError(f"Could not read {path}: {exc}") from exc
