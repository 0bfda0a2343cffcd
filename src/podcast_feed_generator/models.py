from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

# Values the input may carry as numbers or booleans; passed through opaquely
Scalar = Union[str, int, float, bool]


@dataclass(frozen=True)
class PodcastInfo:
    """Channel-level metadata for a podcast feed.

    Every field is optional; omitted values are filled in by ``defaults``
    when the feed is assembled.

    Attributes:
        title: Podcast title.
        description: Podcast description, also the fallback for subtitle and summary.
        link: Website URL of the podcast.
        language: Language code (e.g., "en-US").
        copyright: Copyright notice.
        artwork_url: URL of the channel artwork (``podcastArtworkUrl``).
        owner_name: iTunes owner name.
        owner_email: iTunes owner email.
        categories: iTunes category names, in output order.
        explicit: Content advisory flag ("yes", "no", "clean").
        podcast_type: iTunes show type ("episodic" or "serial").
        author: iTunes author, also the fallback episode creator.
        subtitle: iTunes subtitle.
        summary: iTunes summary.
        generator: Generator identification string.
        last_build_date: Pre-formatted last build date.
    """

    title: Optional[str] = None
    description: Optional[str] = None
    link: Optional[str] = None
    language: Optional[str] = None
    copyright: Optional[str] = None
    artwork_url: Optional[str] = None
    owner_name: Optional[str] = None
    owner_email: Optional[str] = None
    categories: Optional[Tuple[str, ...]] = None
    explicit: Optional[Scalar] = None
    podcast_type: Optional[str] = None
    author: Optional[str] = None
    subtitle: Optional[str] = None
    summary: Optional[str] = None
    generator: Optional[str] = None
    last_build_date: Optional[str] = None


@dataclass(frozen=True)
class EpisodeInfo:
    """A single episode as supplied by the caller.

    Attributes:
        title: Episode title.
        description: Plain-text description, fallback for subtitle and summary.
        html_description: Rich-text description, emitted verbatim in content:encoded.
        creator: Dublin Core creator.
        pub_date: Pre-formatted publication date.
        link: Episode web page.
        guid: Globally unique identifier within the feed.
        guid_is_permalink: Whether ``guid`` is a permalink.
        author: iTunes author.
        subtitle: iTunes subtitle.
        summary: iTunes summary.
        explicit: Content advisory flag.
        duration: iTunes duration (e.g., "01:02:03" or seconds).
        artwork_url: Episode artwork URL (``episodeArtUrl``).
        episode_number: iTunes episode number.
        season_number: iTunes season number.
        itunes_title: iTunes display title.
        episode_type: iTunes episode type ("full", "trailer", "bonus").
        media_url: Media file URL (``mediaFileUrl``).
        media_mime_type: Media MIME type.
        media_size_bytes: Media file size in bytes.
        media_is_default: Media RSS ``isDefault`` flag.
        medium: Media RSS ``medium`` tag.
    """

    title: Optional[str] = None
    description: Optional[str] = None
    html_description: Optional[str] = None
    creator: Optional[str] = None
    pub_date: Optional[str] = None
    link: Optional[str] = None
    guid: Optional[Scalar] = None
    guid_is_permalink: Optional[Scalar] = None
    author: Optional[str] = None
    subtitle: Optional[str] = None
    summary: Optional[str] = None
    explicit: Optional[Scalar] = None
    duration: Optional[Scalar] = None
    artwork_url: Optional[str] = None
    episode_number: Optional[Scalar] = None
    season_number: Optional[Scalar] = None
    itunes_title: Optional[str] = None
    episode_type: Optional[str] = None
    media_url: Optional[str] = None
    media_mime_type: Optional[str] = None
    media_size_bytes: Optional[Scalar] = None
    media_is_default: Optional[Scalar] = None
    medium: Optional[str] = None


@dataclass(frozen=True)
class InputFeed:
    """Root input structure: channel metadata plus ordered episodes."""

    podcast: PodcastInfo = field(default_factory=PodcastInfo)
    episodes: Tuple[EpisodeInfo, ...] = ()


@dataclass(frozen=True)
class ResolvedChannel:
    """Channel values after defaulting, as written to the document."""

    title: str
    description: str
    link: str
    last_build_date: str
    generator: str
    language: str
    copyright: str
    author: str
    subtitle: str
    summary: str
    explicit: str
    podcast_type: str
    owner_name: str
    owner_email: str
    artwork_url: str
    categories: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ResolvedEpisode:
    """Episode values after defaulting and numbering, as written to the document.

    ``guid_is_permalink`` is None when the attribute should be omitted.
    """

    title: str
    creator: str
    pub_date: str
    link: str
    guid: str
    guid_is_permalink: Optional[str]
    description: str
    html_description: str
    author: str
    subtitle: str
    summary: str
    explicit: str
    duration: str
    artwork_url: str
    episode_number: str
    season_number: str
    itunes_title: str
    episode_type: str
    media_url: str
    media_mime_type: str
    media_size_bytes: str
    media_is_default: str
    medium: str
