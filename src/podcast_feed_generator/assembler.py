"""RSS 2.0 podcast document assembly with iTunes, Dublin Core and Media RSS tags."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Mapping, Optional, Union

from lxml import etree

from . import config_constants, defaults, feed_input, models, validator
from .diagnostics import Diagnostics
from .exceptions import FeedStructureError

logger = logging.getLogger(__name__)

CDATA_TERMINATOR = "]]>"

FeedSource = Union[models.InputFeed, Mapping[str, Any]]


def _qname(prefix: str, tag: str) -> str:
    return f"{{{config_constants.NAMESPACES[prefix]}}}{tag}"


def _sub(
    parent: etree._Element,
    tag: str,
    value: Optional[str] = None,
    prefix: Optional[str] = None,
    **attrs: str,
) -> etree._Element:
    """Append a child element with optional text and attributes.

    lxml rejects control characters with ValueError; that is reported as a
    FeedStructureError naming the element.
    """
    name = _qname(prefix, tag) if prefix else tag
    label = f"{prefix}:{tag}" if prefix else tag
    element = etree.SubElement(parent, name)
    try:
        for attr_name, attr_value in attrs.items():
            element.set(attr_name, attr_value)
        if value is not None:
            element.text = value
    except ValueError as exc:
        raise FeedStructureError(
            f"Value for <{label}> cannot be represented in XML: {exc}",
            path=label,
        ) from exc
    return element


def _set_cdata(element: etree._Element, html: str) -> None:
    """Store rich text verbatim in a CDATA section."""
    if not html:
        return
    if CDATA_TERMINATOR in html:
        logger.warning(
            f"htmlDescription contains {CDATA_TERMINATOR!r}; writing it as escaped text instead"
        )
        element.text = html
        return
    try:
        element.text = etree.CDATA(html)
    except ValueError as exc:
        raise FeedStructureError(
            f"Value for <content:encoded> cannot be represented in XML: {exc}",
            path="content:encoded",
        ) from exc


def _build_channel(rss: etree._Element, channel: models.ResolvedChannel) -> etree._Element:
    node = _sub(rss, "channel")
    _sub(node, "title", channel.title)
    _sub(node, "description", channel.description)
    _sub(node, "link", channel.link)
    _sub(node, "lastBuildDate", channel.last_build_date)
    _sub(node, "generator", channel.generator)
    _sub(node, "language", channel.language)
    _sub(node, "copyright", channel.copyright)

    _sub(node, "author", channel.author, prefix="itunes")
    _sub(node, "subtitle", channel.subtitle, prefix="itunes")
    _sub(node, "summary", channel.summary, prefix="itunes")
    _sub(node, "explicit", channel.explicit, prefix="itunes")
    _sub(node, "type", channel.podcast_type, prefix="itunes")

    owner = _sub(node, "owner", prefix="itunes")
    _sub(owner, "name", channel.owner_name, prefix="itunes")
    _sub(owner, "email", channel.owner_email, prefix="itunes")

    _sub(node, "image", prefix="itunes", href=channel.artwork_url)
    for category in channel.categories:
        _sub(node, "category", prefix="itunes", text=category)
    return node


def _build_item(channel_node: etree._Element, episode: models.ResolvedEpisode) -> etree._Element:
    item = _sub(channel_node, "item")
    _sub(item, "title", episode.title)
    _sub(item, "creator", episode.creator, prefix="dc")
    _sub(item, "pubDate", episode.pub_date)
    _sub(item, "link", episode.link)

    if episode.guid_is_permalink is None:
        _sub(item, "guid", episode.guid)
    else:
        _sub(item, "guid", episode.guid, isPermaLink=episode.guid_is_permalink)

    _sub(item, "description", episode.description)
    _set_cdata(_sub(item, "encoded", prefix="content"), episode.html_description)

    _sub(item, "author", episode.author, prefix="itunes")
    _sub(item, "subtitle", episode.subtitle, prefix="itunes")
    _sub(item, "summary", episode.summary, prefix="itunes")
    _sub(item, "explicit", episode.explicit, prefix="itunes")
    _sub(item, "duration", episode.duration, prefix="itunes")
    _sub(item, "image", prefix="itunes", href=episode.artwork_url)
    _sub(item, "episode", episode.episode_number, prefix="itunes")
    _sub(item, "season", episode.season_number, prefix="itunes")
    _sub(item, "title", episode.itunes_title, prefix="itunes")
    _sub(item, "episodeType", episode.episode_type, prefix="itunes")

    # enclosure and media:content must describe the same file
    _sub(
        item,
        "enclosure",
        url=episode.media_url,
        type=episode.media_mime_type,
        length=episode.media_size_bytes,
    )
    media = _sub(
        item,
        "content",
        prefix="media",
        url=episode.media_url,
        type=episode.media_mime_type,
        length=episode.media_size_bytes,
        isDefault=episode.media_is_default,
        medium=episode.medium,
    )
    _sub(media, "title", episode.title, prefix="media", type=config_constants.MEDIA_TITLE_TYPE)
    return item


def build_feed_tree(
    feed: FeedSource,
    diagnostics: Diagnostics,
    *,
    now: Optional[datetime] = None,
    guid_factory: Optional[defaults.GuidFactory] = None,
) -> etree._Element:
    """Build the ``<rss>`` element tree for a feed.

    Every validator check runs exactly once: the feed-wide checks before the
    channel is built and the episode checks as each item is added. Findings
    go to ``diagnostics`` and never change the tree.

    Args:
        feed: InputFeed or raw feed mapping
        diagnostics: Collector receiving validator findings
        now: Timestamp for a missing lastBuildDate
        guid_factory: Producer of GUIDs for episodes without one

    Returns:
        The root ``<rss>`` element

    Raises:
        FeedStructureError: If the input is structurally malformed
    """
    input_feed = feed_input.parse_input_feed(feed)

    diagnostics.extend(validator.validate_channel(input_feed))

    rss = etree.Element("rss", nsmap=config_constants.NAMESPACES)
    rss.set("version", config_constants.RSS_VERSION)
    channel_node = _build_channel(rss, defaults.resolve_channel(input_feed.podcast, now))

    for resolved, episode in zip(
        defaults.resolve_episodes(input_feed, guid_factory), input_feed.episodes
    ):
        diagnostics.extend(validator.validate_episode(episode, resolved.episode_number))
        _build_item(channel_node, resolved)

    logger.debug(f"Built feed with {len(input_feed.episodes)} item(s)")
    return rss


def generate(
    feed: FeedSource,
    diagnostics: Optional[Diagnostics] = None,
    *,
    now: Optional[datetime] = None,
    guid_factory: Optional[defaults.GuidFactory] = None,
    pretty_print: bool = True,
) -> str:
    """Generate a podcast RSS document from a feed description.

    Args:
        feed: InputFeed or parsed JSON mapping with "podcast" and "episodes"
        diagnostics: Collector to append findings to; a fresh one is used if omitted
        now: Timestamp for a missing lastBuildDate (defaults to current UTC time)
        guid_factory: Producer of GUIDs for episodes without one
        pretty_print: Indent the output

    Returns:
        The complete XML document, including the XML declaration

    Raises:
        FeedStructureError: If the input is structurally malformed

    Example:
        >>> from podcast_feed_generator import Diagnostics, generate
        >>> found = Diagnostics()
        >>> xml = generate({"podcast": {"title": "Show"}, "episodes": []}, found)
        >>> found.summary()
        '2 warning(s): missing_artwork x1, missing_categories x1'
    """
    if diagnostics is None:
        diagnostics = Diagnostics()
    rss = build_feed_tree(feed, diagnostics, now=now, guid_factory=guid_factory)
    document = etree.tostring(
        rss, xml_declaration=True, encoding="UTF-8", pretty_print=pretty_print
    )
    return document.decode("utf-8")
