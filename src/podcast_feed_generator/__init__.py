# Released under the MIT License.
# See README for details.

"""Podcast Feed Generator - Build podcast RSS 2.0 feeds from JSON descriptions.

The generated document carries the iTunes, Dublin Core, Media RSS, content
and wfw namespaces. Conditions that commonly make directories or players
reject a feed (missing artwork, duplicate GUIDs, missing file sizes, ...)
are reported as diagnostics; they never stop generation.

Programmatic API Example:
    >>> import podcast_feed_generator
    >>>
    >>> found = podcast_feed_generator.Diagnostics()
    >>> xml = podcast_feed_generator.generate(
    ...     {"podcast": {"title": "My Show"}, "episodes": []},
    ...     found,
    ... )
    >>> for diagnostic in found:
    ...     print(diagnostic.message)

Pipeline Example:
    >>> config = podcast_feed_generator.Config(input="podcast.json", output="feed.xml")
    >>> count, summary = podcast_feed_generator.run_pipeline(config)

CLI Usage:
    $ podcast-feed-generator podcast.json -o feed.xml
    $ python -m podcast_feed_generator --config feedgen.yaml
"""

from __future__ import annotations

__version__ = "1.0.0"

from .assembler import generate
from .config import Config, load_config_file
from .diagnostics import Diagnostic, DiagnosticCode, Diagnostics
from .exceptions import FeedGeneratorError, FeedStructureError, InputFileError, StrictModeError
from .feed_input import load_input_file, parse_input_feed
from .models import EpisodeInfo, InputFeed, PodcastInfo
from .validator import validate_feed
from .workflow import run_pipeline

__all__ = [
    "Config",
    "Diagnostic",
    "DiagnosticCode",
    "Diagnostics",
    "EpisodeInfo",
    "FeedGeneratorError",
    "FeedStructureError",
    "InputFeed",
    "InputFileError",
    "PodcastInfo",
    "StrictModeError",
    "generate",
    "load_config_file",
    "load_input_file",
    "parse_input_feed",
    "run_pipeline",
    "validate_feed",
    "__version__",
]
