"""
Gamekult source.

https://www.gamekult.com

Pages lazy-load their pictures, serve small renditions by default and
reference the CDN with protocol-relative URLs; all three are repaired so
the pictures show up in the ebook. Reviews and regular news use different
article containers.
"""

from __future__ import annotations

import logging
import re

from ..core.types import FailureKind, FeedItem, TrimResult
from .base import ExtractionStrategy, first_container, parse_html, remove_nodes


logger = logging.getLogger(__name__)

GAMEKULT_FEED_URL = "https://www.gamekult.com/feed.xml"

# Size token embedded in picture file names, e.g. "cover__w600.jpg"
IMAGE_SIZE_RE = re.compile(r"__[hw][0-9]+\.")
LARGE_IMAGE_SIZE = "__w1440."

CDN_RELATIVE_SRC = 'src="//cdn.gamekult.com'
CDN_ABSOLUTE_SRC = 'src="https://cdn.gamekult.com'

NOISE_SELECTORS = [
    "script",
    ".gk__button__comment",
    ".ed__review__article__footer__infos",
    ".ed__editorial__footer",
    ".ed__news__details",
    ".gk__text__video",
    ".gk__text__container--full",
    ".ed__news__footer__share",
    ".g2__list--12",
    ".ed__review__article__header__infos",
    ".ed__review__article__header__price",
    ".gk__text__container.gk__text__content.gk__text__row",
]

CONTAINER_SELECTORS = [
    # Game reviews
    ".ed__review__article",
    # Regular news
    "article.js-start-progression-bar",
]

CUSTOM_CSS = """
img {
  display: block;
  min-width: 100%;
  padding: 8px 0;
}

figcaption {
  padding: 0;
  opacity: 0.75;
  font-style: italic;
  font-size: 80%;
  text-align: center;
}
"""


class GamekultSource(ExtractionStrategy):
    """Extraction rules for the Gamekult feed."""

    name = "gamekult"

    @staticmethod
    def matches(feed_url: str) -> bool:
        return feed_url == GAMEKULT_FEED_URL

    def trim(self, item: FeedItem, raw_html: str) -> TrimResult:
        if self.options.details:
            logger.info("trimming %s", item.link)

        root = parse_html(raw_html)
        remove_nodes(root, NOISE_SELECTORS)

        for img in root.find_all("img"):
            data_src = img.get("data-src")
            if data_src:
                img["src"] = data_src
            src = img.get("src")
            if src and IMAGE_SIZE_RE.search(src):
                img["src"] = IMAGE_SIZE_RE.sub(LARGE_IMAGE_SIZE, src, count=1)

        container = first_container(root, CONTAINER_SELECTORS)
        if container is None:
            return TrimResult.fail(FailureKind.EMPTY)
        return TrimResult.ok(str(container).replace(CDN_RELATIVE_SRC, CDN_ABSOLUTE_SRC))

    def extract_cover(self, item: FeedItem, raw_html: str) -> str | None:
        return item.media_url

    def custom_css(self) -> str | None:
        return CUSTOM_CSS
