"""Allow ``python -m podcast_feed_generator``."""

from .cli import main

raise SystemExit(main())
