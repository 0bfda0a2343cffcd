"""Advisory checks for conditions that make directories or players reject a feed.

Every check inspects the input only and returns a (possibly empty) list of
diagnostics. Nothing here raises or changes the generated document.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any, List, Sequence
from urllib.parse import urlparse

from pydantic import AnyHttpUrl, TypeAdapter, ValidationError

from . import config_constants, defaults, models
from .diagnostics import Diagnostic, DiagnosticCode

logger = logging.getLogger(__name__)

_HTTP_URL = TypeAdapter(AnyHttpUrl)

DUPLICATE_GUID_MESSAGE = (
    "Multiple episodes are using the same GUID: {guids}. "
    "GUIDs should be unique; some podcast players may reject your feed."
)
NO_ARTWORK_MESSAGE = (
    "No podcast artwork has been set. "
    "The iTunes podcast directory will not accept podcasts that lack channel art."
)
NO_CATEGORIES_MESSAGE = (
    "Your feed has no categories defined. "
    "The iTunes podcast directory requires categories to be present in your feed."
)
NO_DURATION_MESSAGE = (
    "Episode #{number}: '{title}' is missing a duration. "
    "Some podcast players may reject your feed."
)
NO_MEDIA_URL_MESSAGE = (
    "Episode #{number}: '{title}' has no media file URL defined (got: {url!r}). "
    "The episode will be unplayable and some podcast players may reject your feed."
)
INVALID_MEDIA_URL_MESSAGE = (
    "Episode #{number}: '{title}' has an invalid media file URL: {url}. "
    "The episode will be unplayable and some podcast players may reject your feed."
)
NO_FILE_SIZE_MESSAGE = (
    "Episode #{number}: '{title}' is missing its media file size "
    "(got: {size!r}, key: mediaFileSizeBytes). Some podcast players may reject your feed."
)


def is_valid_url(value: Any) -> bool:
    """Return True if value parses as an absolute http(s) URL with a host.

    Whitespace anywhere in the value, a non-numeric port or a host with
    forbidden characters all count as parse failures.
    """
    if not isinstance(value, str) or any(ch.isspace() for ch in value):
        return False
    try:
        parsed = urlparse(value)
        _HTTP_URL.validate_python(value)
    except (ValueError, ValidationError):
        return False
    return parsed.scheme.lower() in config_constants.VALID_URL_SCHEMES and bool(parsed.netloc)


def check_duplicate_guids(episodes: Sequence[models.EpisodeInfo]) -> List[Diagnostic]:
    """Report GUIDs shared by two or more episodes.

    Values are compared exactly as supplied, so the number 1234 and the
    string "1234" are different GUIDs. Absent GUIDs are ignored; they get
    fresh generated values at assembly time. Produces at most one
    diagnostic listing every duplicated value.
    """
    counts = Counter(
        (type(e.guid), e.guid) for e in episodes if not defaults.is_blank(e.guid)
    )
    duplicated = [guid for (_, guid), count in counts.items() if count > 1]
    if not duplicated:
        return []
    return [
        Diagnostic(
            code=DiagnosticCode.DUPLICATE_GUID,
            message=DUPLICATE_GUID_MESSAGE.format(
                guids=", ".join(f"`{guid}`" for guid in duplicated)
            ),
            value=tuple(duplicated),
        )
    ]


def check_artwork(podcast: models.PodcastInfo) -> List[Diagnostic]:
    if defaults.is_blank(podcast.artwork_url):
        return [Diagnostic(code=DiagnosticCode.MISSING_ARTWORK, message=NO_ARTWORK_MESSAGE)]
    return []


def check_categories(podcast: models.PodcastInfo) -> List[Diagnostic]:
    if not podcast.categories:
        return [Diagnostic(code=DiagnosticCode.MISSING_CATEGORIES, message=NO_CATEGORIES_MESSAGE)]
    return []


def check_duration(episode: models.EpisodeInfo, number: Any) -> List[Diagnostic]:
    """Report an episode without a duration (only a truly absent value counts)."""
    if episode.duration is not None:
        return []
    return [
        Diagnostic(
            code=DiagnosticCode.MISSING_DURATION,
            message=NO_DURATION_MESSAGE.format(
                number=defaults.to_text(number), title=defaults.to_text(episode.title)
            ),
            episode_number=defaults.to_text(number),
            episode_title=episode.title,
        )
    ]


def check_media_url(episode: models.EpisodeInfo, number: Any) -> List[Diagnostic]:
    """Report a missing or syntactically invalid media URL.

    The two findings are mutually exclusive: an absent URL is reported as
    missing and never as invalid.
    """
    url = episode.media_url
    number_text = defaults.to_text(number)
    title = defaults.to_text(episode.title)
    if defaults.is_blank(url):
        return [
            Diagnostic(
                code=DiagnosticCode.MISSING_MEDIA_URL,
                message=NO_MEDIA_URL_MESSAGE.format(number=number_text, title=title, url=url),
                episode_number=number_text,
                episode_title=episode.title,
                value=url,
            )
        ]
    if not is_valid_url(url):
        return [
            Diagnostic(
                code=DiagnosticCode.INVALID_MEDIA_URL,
                message=INVALID_MEDIA_URL_MESSAGE.format(number=number_text, title=title, url=url),
                episode_number=number_text,
                episode_title=episode.title,
                value=url,
            )
        ]
    return []


def check_file_size(episode: models.EpisodeInfo, number: Any) -> List[Diagnostic]:
    size = episode.media_size_bytes
    if not defaults.is_blank(size):
        return []
    number_text = defaults.to_text(number)
    return [
        Diagnostic(
            code=DiagnosticCode.MISSING_FILE_SIZE,
            message=NO_FILE_SIZE_MESSAGE.format(
                number=number_text, title=defaults.to_text(episode.title), size=size
            ),
            episode_number=number_text,
            episode_title=episode.title,
            value=size,
        )
    ]


def validate_channel(feed: models.InputFeed) -> List[Diagnostic]:
    """Run the feed-wide checks: duplicate GUIDs, artwork, categories."""
    return [
        *check_duplicate_guids(feed.episodes),
        *check_artwork(feed.podcast),
        *check_categories(feed.podcast),
    ]


def validate_episode(episode: models.EpisodeInfo, number: Any) -> List[Diagnostic]:
    """Run the per-episode checks: duration, media URL, file size."""
    return [
        *check_duration(episode, number),
        *check_media_url(episode, number),
        *check_file_size(episode, number),
    ]


def validate_feed(feed: models.InputFeed) -> List[Diagnostic]:
    """Run every check once over the whole feed.

    Episode numbers in messages are the explicit or derived numbers the
    assembler writes into the document.

    Args:
        feed: Typed input feed

    Returns:
        Diagnostics in check order: channel findings first, then per episode
    """
    numbers = defaults.derive_episode_numbers(feed.episodes)
    found = validate_channel(feed)
    for episode, number in zip(feed.episodes, numbers):
        found.extend(validate_episode(episode, number))
    logger.debug(f"Validation produced {len(found)} diagnostic(s)")
    return found
