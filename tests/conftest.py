"""Shared fixtures and test utilities for podcast_feed_generator tests.

This module contains:
- Test constants
- Builders for raw feed descriptions and typed records
- Helpers for parsing generated documents
- Fixture file access

All test files can import from this module (``from conftest import ...``).
"""

import json
import os
import sys
from datetime import datetime, timezone

# Parse generated documents safely (Bandit B405/B314)
import defusedxml.ElementTree as SafeET

TESTS_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.dirname(TESTS_DIR)
SRC_DIR = os.path.join(PROJECT_ROOT, "src")
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

from podcast_feed_generator import config_constants, models  # noqa: E402

FIXTURES_DIR = os.path.join(TESTS_DIR, "fixtures")

# Test constants
TEST_PODCAST_TITLE = "The Test Show"
TEST_PODCAST_DESCRIPTION = "A show about testing feed generators."
TEST_PODCAST_LINK = "https://example.com/show"
TEST_ARTWORK_URL = "https://example.com/artwork.jpg"
TEST_EPISODE_ARTWORK_URL = "https://example.com/episode-art.jpg"
TEST_OWNER_NAME = "Jane Host"
TEST_OWNER_EMAIL = "jane@example.com"
TEST_AUTHOR = "Jane Host"
TEST_CATEGORIES = ["Technology", "Education"]
TEST_MEDIA_URL = "https://example.com/episodes/ep1.mp3"
TEST_MEDIA_SIZE = 12345678
TEST_DURATION = "00:42:17"
TEST_PUB_DATE = "Mon, 05 Oct 2026 08:00:00 +0000"
TEST_BUILD_DATE = "Tue, 06 Oct 2026 09:30:00 +0000"
TEST_HTML_DESCRIPTION = "<p>Show notes with <a href='https://example.com'>a link</a> &amp; more</p>"
TEST_DUPLICATE_GUID = "1234"
TEST_INVALID_URL = "7891aghjkhv,..ahj19"
TEST_NOW = datetime(2026, 10, 19, 8, 0, 0, tzinfo=timezone.utc)
TEST_NOW_RFC2822 = "Mon, 19 Oct 2026 08:00:00 +0000"

# Namespace map for ElementTree finds
NS = dict(config_constants.NAMESPACES)


def build_full_feed_data(episode_count=1):
    """Create a raw feed description where every channel and episode field is set.

    Args:
        episode_count: Number of episodes (numbered and given distinct GUIDs)

    Returns:
        Dict shaped like parsed JSON input
    """
    episodes = []
    for idx in range(episode_count):
        number = episode_count - idx
        episodes.append(
            {
                "title": f"Episode {number}",
                "description": f"Plain description {number}",
                "htmlDescription": TEST_HTML_DESCRIPTION,
                "creator": "Guest Creator",
                "pubDate": TEST_PUB_DATE,
                "link": f"https://example.com/episodes/{number}",
                "guid": f"https://example.com/episodes/{number}",
                "guidIsPermalink": "true",
                "author": "Episode Author",
                "subtitle": f"Subtitle {number}",
                "summary": f"Summary {number}",
                "explicit": "clean",
                "duration": TEST_DURATION,
                "episodeArtUrl": TEST_EPISODE_ARTWORK_URL,
                "episodeNumber": number,
                "seasonNumber": 2,
                "itunesTitle": f"iTunes Episode {number}",
                "episodeType": "bonus",
                "mediaFileUrl": f"https://example.com/episodes/ep{number}.mp3",
                "mediaMimeType": "audio/x-m4a",
                "mediaFileSizeBytes": TEST_MEDIA_SIZE,
                "mediaIsDefault": "false",
                "medium": "video",
            }
        )
    return {
        "podcast": {
            "title": TEST_PODCAST_TITLE,
            "description": TEST_PODCAST_DESCRIPTION,
            "link": TEST_PODCAST_LINK,
            "language": "de-DE",
            "copyright": "(c) 2026 Jane Host",
            "podcastArtworkUrl": TEST_ARTWORK_URL,
            "ownerName": TEST_OWNER_NAME,
            "ownerEmail": TEST_OWNER_EMAIL,
            "categories": list(TEST_CATEGORIES),
            "explicit": "yes",
            "podcastType": "serial",
            "author": TEST_AUTHOR,
            "subtitle": "Channel subtitle",
            "summary": "Channel summary",
            "generator": "Custom Generator 2.0",
            "lastBuildDate": TEST_BUILD_DATE,
        },
        "episodes": episodes,
    }


def build_minimal_feed_data(episode_count=3):
    """Create a raw feed description with only the fields the validator needs.

    Channel artwork and categories are present and every episode has a
    duration, a valid media URL and a size, so the feed produces no
    diagnostics. Episode numbers and GUIDs are left out.
    """
    episodes = [
        {
            "title": f"Episode {idx}",
            "description": f"Description {idx}",
            "duration": 600 + idx,
            "mediaFileUrl": f"https://example.com/ep{idx}.mp3",
            "mediaFileSizeBytes": 1000 + idx,
        }
        for idx in range(episode_count)
    ]
    return {
        "podcast": {
            "title": TEST_PODCAST_TITLE,
            "description": TEST_PODCAST_DESCRIPTION,
            "podcastArtworkUrl": TEST_ARTWORK_URL,
            "categories": ["Technology"],
            "author": TEST_AUTHOR,
        },
        "episodes": episodes,
    }


def build_episode(**overrides):
    """Create a valid EpisodeInfo, overriding any field."""
    fields = {
        "title": "Episode",
        "description": "Description",
        "duration": TEST_DURATION,
        "media_url": TEST_MEDIA_URL,
        "media_size_bytes": TEST_MEDIA_SIZE,
    }
    fields.update(overrides)
    return models.EpisodeInfo(**fields)


def build_podcast(**overrides):
    """Create a PodcastInfo with artwork and categories, overriding any field."""
    fields = {
        "title": TEST_PODCAST_TITLE,
        "description": TEST_PODCAST_DESCRIPTION,
        "artwork_url": TEST_ARTWORK_URL,
        "categories": tuple(TEST_CATEGORIES),
        "author": TEST_AUTHOR,
    }
    fields.update(overrides)
    return models.PodcastInfo(**fields)


def counting_guid_factory(prefix="GEN"):
    """Return a deterministic GUID factory producing PREFIX-1, PREFIX-2, ..."""
    state = {"count": 0}

    def factory():
        state["count"] += 1
        return f"{prefix}-{state['count']}"

    return factory


def parse_document(document):
    """Parse a generated XML string and return the root element."""
    return SafeET.fromstring(document.encode("utf-8"))


def channel_of(document):
    """Return the <channel> element of a generated document."""
    return parse_document(document).find("channel")


def items_of(document):
    """Return the <item> elements of a generated document, in order."""
    return channel_of(document).findall("item")


def load_fixture(name):
    """Load a JSON fixture from tests/fixtures as a fresh dict."""
    with open(os.path.join(FIXTURES_DIR, name), "r", encoding="utf-8") as handle:
        return json.load(handle)


def fixture_path(name):
    return os.path.join(FIXTURES_DIR, name)

