"""Default-value policy and derived fields for feed assembly.

Each rule is a small pure function from the raw optional value(s) to the value
written into the document, so it can be tested without building XML. A value
counts as absent when it is None or an empty string; other falsy values such
as ``0`` or ``False`` are kept as given.
"""

from __future__ import annotations

import logging
import random
import secrets
from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Any, Callable, List, Optional, Sequence

from . import config_constants, models

logger = logging.getLogger(__name__)

GuidFactory = Callable[[], str]


def is_blank(value: Any) -> bool:
    """Return True when a field should be treated as absent."""
    return value is None or value == ""


def to_text(value: Any) -> str:
    """Render an opaque input value as document text.

    Booleans become "true"/"false" (the spelling RSS consumers expect),
    None becomes an empty string, everything else goes through ``str``.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def with_default(value: Any, default: Any) -> str:
    """Return ``value`` as text, or ``default`` if the value is blank."""
    return to_text(default if is_blank(value) else value)


def format_build_date(now: Optional[datetime] = None) -> str:
    """Format a timestamp per RFC 2822 (e.g., "Mon, 19 Oct 2026 08:00:00 +0000").

    Naive datetimes are taken to be UTC.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return format_datetime(now)


def generate_guid(rng: Optional[random.Random] = None) -> str:
    """Generate a random episode GUID.

    Args:
        rng: Optional seeded Random for reproducible output; ``secrets`` is
            used when omitted.

    Returns:
        A GUID_LENGTH string drawn from GUID_ALPHABET
    """
    alphabet = config_constants.GUID_ALPHABET
    if rng is None:
        return "".join(secrets.choice(alphabet) for _ in range(config_constants.GUID_LENGTH))
    return "".join(rng.choice(alphabet) for _ in range(config_constants.GUID_LENGTH))


def derive_episode_numbers(episodes: Sequence[models.EpisodeInfo]) -> List[Any]:
    """Compute the episode number for every position in the list.

    An explicit number is kept as given. Otherwise the episode at 0-based
    position ``i`` of ``N`` episodes gets ``N - i``, so a newest-first list is
    numbered N, N-1, ..., 1.
    """
    total = len(episodes)
    return [
        episode.episode_number if not is_blank(episode.episode_number) else total - idx
        for idx, episode in enumerate(episodes)
    ]


# Channel rules


def resolve_last_build_date(value: Optional[str], now: Optional[datetime] = None) -> str:
    if is_blank(value):
        return format_build_date(now)
    return to_text(value)


def resolve_generator(value: Optional[str]) -> str:
    return with_default(value, config_constants.DEFAULT_GENERATOR)


def resolve_language(value: Optional[str]) -> str:
    return with_default(value, config_constants.DEFAULT_LANGUAGE)


def resolve_explicit(value: Any) -> str:
    return with_default(value, config_constants.DEFAULT_EXPLICIT)


def resolve_podcast_type(value: Optional[str]) -> str:
    return with_default(value, config_constants.DEFAULT_PODCAST_TYPE)


def resolve_copyright(value: Optional[str]) -> str:
    return with_default(value, config_constants.DEFAULT_COPYRIGHT)


def resolve_description_fallback(value: Optional[str], description: Optional[str]) -> str:
    """Subtitle/summary rule shared by channel and episodes."""
    return with_default(value, description)


# Episode rules


def resolve_creator(value: Optional[str], channel_author: Optional[str]) -> str:
    return with_default(value, channel_author)


def resolve_episode_artwork(value: Optional[str], channel_artwork: Optional[str]) -> str:
    return with_default(value, channel_artwork)


def resolve_itunes_title(value: Optional[str], title: Optional[str]) -> str:
    return with_default(value, title)


def resolve_episode_type(value: Optional[str]) -> str:
    return with_default(value, config_constants.DEFAULT_EPISODE_TYPE)


def resolve_mime_type(value: Optional[str]) -> str:
    return with_default(value, config_constants.DEFAULT_MIME_TYPE)


def resolve_media_is_default(value: Any) -> str:
    return with_default(value, config_constants.DEFAULT_MEDIA_IS_DEFAULT)


def resolve_medium(value: Optional[str]) -> str:
    return with_default(value, config_constants.DEFAULT_MEDIUM)


def resolve_channel(
    podcast: models.PodcastInfo, now: Optional[datetime] = None
) -> models.ResolvedChannel:
    """Apply the channel default-value rules.

    Args:
        podcast: Channel metadata as supplied
        now: Timestamp used when lastBuildDate is absent (defaults to current UTC time)

    Returns:
        ResolvedChannel holding the text of every channel element
    """
    return models.ResolvedChannel(
        title=to_text(podcast.title),
        description=to_text(podcast.description),
        link=to_text(podcast.link),
        last_build_date=resolve_last_build_date(podcast.last_build_date, now),
        generator=resolve_generator(podcast.generator),
        language=resolve_language(podcast.language),
        copyright=resolve_copyright(podcast.copyright),
        author=to_text(podcast.author),
        subtitle=resolve_description_fallback(podcast.subtitle, podcast.description),
        summary=resolve_description_fallback(podcast.summary, podcast.description),
        explicit=resolve_explicit(podcast.explicit),
        podcast_type=resolve_podcast_type(podcast.podcast_type),
        owner_name=to_text(podcast.owner_name),
        owner_email=to_text(podcast.owner_email),
        artwork_url=to_text(podcast.artwork_url),
        categories=tuple(podcast.categories or ()),
    )


def resolve_episode(
    episode: models.EpisodeInfo,
    episode_number: Any,
    podcast: models.PodcastInfo,
    guid_factory: Optional[GuidFactory] = None,
) -> models.ResolvedEpisode:
    """Apply the episode default-value rules to a single episode.

    Args:
        episode: Episode as supplied
        episode_number: Number from ``derive_episode_numbers``
        podcast: Channel metadata, source of creator and artwork fallbacks
        guid_factory: Callable producing a GUID when the episode has none

    Returns:
        ResolvedEpisode holding the text of every item element and attribute
    """
    if is_blank(episode.guid):
        guid = (guid_factory or generate_guid)()
        # A random token is never a permalink
        guid_is_permalink: Optional[str] = "false"
        logger.debug(f"Generated GUID for episode #{episode_number}: {guid}")
    else:
        guid = to_text(episode.guid)
        guid_is_permalink = (
            None if is_blank(episode.guid_is_permalink) else to_text(episode.guid_is_permalink)
        )

    return models.ResolvedEpisode(
        title=to_text(episode.title),
        creator=resolve_creator(episode.creator, podcast.author),
        pub_date=to_text(episode.pub_date),
        link=to_text(episode.link),
        guid=guid,
        guid_is_permalink=guid_is_permalink,
        description=to_text(episode.description),
        html_description=to_text(episode.html_description),
        author=to_text(episode.author),
        subtitle=resolve_description_fallback(episode.subtitle, episode.description),
        summary=resolve_description_fallback(episode.summary, episode.description),
        explicit=resolve_explicit(episode.explicit),
        duration=to_text(episode.duration),
        artwork_url=resolve_episode_artwork(episode.artwork_url, podcast.artwork_url),
        episode_number=to_text(episode_number),
        season_number=to_text(episode.season_number),
        itunes_title=resolve_itunes_title(episode.itunes_title, episode.title),
        episode_type=resolve_episode_type(episode.episode_type),
        media_url=to_text(episode.media_url),
        media_mime_type=resolve_mime_type(episode.media_mime_type),
        media_size_bytes=to_text(episode.media_size_bytes),
        media_is_default=resolve_media_is_default(episode.media_is_default),
        medium=resolve_medium(episode.medium),
    )


def resolve_episodes(
    feed: models.InputFeed, guid_factory: Optional[GuidFactory] = None
) -> List[models.ResolvedEpisode]:
    """Resolve every episode of a feed, numbering them once for the whole list."""
    numbers = derive_episode_numbers(feed.episodes)
    return [
        resolve_episode(episode, number, feed.podcast, guid_factory)
        for episode, number in zip(feed.episodes, numbers)
    ]
