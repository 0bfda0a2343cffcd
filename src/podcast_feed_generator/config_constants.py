"""Configuration constants for podcast_feed_generator.

Default values applied to omitted feed fields, namespace declarations for the
generated document, and the validation ranges used by ``config.Config``.

All constants are re-exported from config.py for convenience.
"""

# Identification string written to <generator> when the input has none
DEFAULT_GENERATOR = "Python PodcastFeedGenerator (podcast-feed-generator)"

# Channel defaults
DEFAULT_LANGUAGE = "en-US"
DEFAULT_EXPLICIT = "no"
DEFAULT_PODCAST_TYPE = "episodic"
DEFAULT_COPYRIGHT = ""

# Episode defaults
DEFAULT_EPISODE_TYPE = "full"
DEFAULT_MIME_TYPE = "audio/mpeg"
DEFAULT_MEDIA_IS_DEFAULT = "true"
DEFAULT_MEDIUM = "audio"
MEDIA_TITLE_TYPE = "plain"

# Generated GUIDs: fixed length, no look-alike characters (0/O, 1/I/L)
GUID_LENGTH = 32
GUID_ALPHABET = "ABCDEFGHJKMNPQRSTUVWXYZ23456789"

# Namespaces declared on <rss>
CONTENT_NS = "http://purl.org/rss/1.0/modules/content/"
WFW_NS = "http://wellformedweb.org/CommentAPI/"
ITUNES_NS = "http://www.itunes.com/dtds/podcast-1.0.dtd"
DC_NS = "http://purl.org/dc/elements/1.1/"
MEDIA_NS = "http://search.yahoo.com/mrss/"

NAMESPACES = {
    "content": CONTENT_NS,
    "wfw": WFW_NS,
    "itunes": ITUNES_NS,
    "dc": DC_NS,
    "media": MEDIA_NS,
}

RSS_VERSION = "2.0"

# Media URL validation
VALID_URL_SCHEMES = ("http", "https")

# Logging
DEFAULT_LOG_LEVEL = "INFO"
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Input file formats accepted by the CLI and config loader
JSON_EXTENSIONS = (".json",)
YAML_EXTENSIONS = (".yaml", ".yml")
