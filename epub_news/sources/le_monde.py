"""
Le Monde source.

https://www.lemonde.fr

Member-only articles are served in full only to a logged-in session, so
the LE_MONDE_COOKIE session cookie is sent with every article request when
configured. Live coverage pages ("En direct ...") are skipped.
"""

from __future__ import annotations

import logging
import re

from ..core.types import FailureKind, FeedItem, TrimResult
from .base import ExtractionStrategy, SourceOptions, first_container, parse_html, remove_nodes


logger = logging.getLogger(__name__)

# Matches all kinds of feeds from Le Monde
RSS_MATCHING_RE = re.compile(r"^https://www\.lemonde\.fr/[a-z/_-]*(rss)+[a-z/_]*\.xml$")

LIVE_TITLE_PREFIX = "En direct"

NOISE_SELECTORS = [
    ".meta.meta__social",
    ".inread.js-services-inread",
    ".aside__iso",
    ".services-carousel",
    ".services.services--footer",
    ".article__reactions",
    ".article__siblings",
    ".article__status",
    ".meta__article-en-fr-url-link",
    ".catcher__favorite",
    "picture",
]

CONTAINER_SELECTORS = [
    ".zone.zone--article",
    ".article--longform.article--content",
]

# Le Monde's image service embeds the picture size in the URL
FEED_IMAGE_SIZE = "644/322"
COVER_IMAGE_SIZE = "1410/2250"

CUSTOM_CSS = """
.zone--article img, .article--content img {
  min-width: 80%;
  padding: 8px 10%;
}
.zone--article figcaption, .article--content figcaption {
  opacity: 0.75;
  font-style: italic;
  font-size: 80%;
  text-align: center;
  padding: 0;
}

.breadcrumb {
  list-style-type: none;
  padding: 0;
  margin: 0;
}
.breadcrumb li {
  display: inline;
  margin: 0;
  padding: 0;
}
.breadcrumb li:before {
  content: "/";
  padding: 0 8px;
}
"""


class LeMondeSource(ExtractionStrategy):
    """Extraction rules for Le Monde RSS feeds."""

    name = "le_monde"

    def __init__(self, feed_url: str, options: SourceOptions):
        super().__init__(feed_url, options)
        self._cookie = options.cookies.get(self.name)
        if not self._cookie:
            logger.warning(
                "Missing environment variable LE_MONDE_COOKIE. "
                "Members exclusive articles may be fetched incompletely."
            )

    @staticmethod
    def matches(feed_url: str) -> bool:
        return RSS_MATCHING_RE.match(feed_url) is not None

    def fetch_options(self) -> dict[str, str] | None:
        if not self._cookie:
            return None
        return {"Cookie": self._cookie}

    def trim(self, item: FeedItem, raw_html: str) -> TrimResult:
        if item.title and item.title.startswith(LIVE_TITLE_PREFIX):
            return TrimResult.fail(FailureKind.LIVE_STREAM)

        if self.options.details:
            logger.info("trimming %s", item.link)

        root = parse_html(raw_html)
        remove_nodes(root, NOISE_SELECTORS)

        # Lazy-loading placeholders are inline SVGs with nothing to show offline
        for img in root.find_all("img"):
            src = img.get("src")
            if src and "data:image/svg+xml" in src:
                img.decompose()

        container = first_container(root, CONTAINER_SELECTORS)
        if container is None:
            return TrimResult.fail(FailureKind.EMPTY)
        return TrimResult.ok(str(container))

    def extract_cover(self, item: FeedItem, raw_html: str) -> str | None:
        if not item.media_url:
            return None
        return item.media_url.replace(FEED_IMAGE_SIZE, COVER_IMAGE_SIZE)

    def custom_css(self) -> str | None:
        return CUSTOM_CSS
