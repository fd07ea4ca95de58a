"""Tests for the Le Monde and Gamekult extraction rules."""

from __future__ import annotations

import logging

from epub_news.core.types import FailureKind, FeedItem
from epub_news.sources.base import SourceOptions
from epub_news.sources.gamekult import GAMEKULT_FEED_URL, GamekultSource
from epub_news.sources.le_monde import LeMondeSource


LE_MONDE_FEED = "https://www.lemonde.fr/rss/une.xml"

LE_MONDE_PAGE = """
<html><body>
  <header>Menu</header>
  <section class="zone zone--article">
    <h1>Titre</h1>
    <div class="meta meta__social">Partager</div>
    <picture><source srcset="x.webp" /></picture>
    <img src="data:image/svg+xml;base64,AAAA" />
    <img src="https://img.lemde.fr/photo.jpg" />
    <p>Le contenu.</p>
    <section class="article__reactions">Réactions</section>
  </section>
  <footer class="services services--footer">Services</footer>
</body></html>
"""

GAMEKULT_NEWS_PAGE = """
<html><body>
  <script>track()</script>
  <article class="js-start-progression-bar">
    <h1>News</h1>
    <img data-src="//cdn.gamekult.com/images/photo__w600.jpg" src="placeholder.gif" />
    <img src="//cdn.gamekult.com/images/other__h300.png" />
    <div class="ed__news__details">Détails</div>
    <p>Texte.</p>
  </article>
</body></html>
"""

GAMEKULT_REVIEW_PAGE = """
<html><body>
  <article class="js-start-progression-bar"><p>Teaser</p></article>
  <div class="ed__review__article">
    <div class="ed__review__article__header__price">59,99 EUR</div>
    <p>Test complet.</p>
  </div>
</body></html>
"""


def _le_monde(cookie: str | None = "session=abc") -> LeMondeSource:
    cookies = {"le_monde": cookie} if cookie else {}
    return LeMondeSource(LE_MONDE_FEED, SourceOptions(cookies=cookies))


def test_le_monde_matches_feed_urls():
    assert LeMondeSource.matches("https://www.lemonde.fr/rss/une.xml")
    assert LeMondeSource.matches("https://www.lemonde.fr/international/rss_full.xml")
    assert not LeMondeSource.matches("https://www.lemonde.fr/international/")
    assert not LeMondeSource.matches("https://www.gamekult.com/feed.xml")


def test_le_monde_fetch_options_carry_cookie():
    assert _le_monde().fetch_options() == {"Cookie": "session=abc"}


def test_le_monde_missing_cookie_only_warns(caplog):
    with caplog.at_level(logging.WARNING):
        source = _le_monde(cookie=None)

    assert source.fetch_options() is None
    assert "LE_MONDE_COOKIE" in caplog.text


def test_le_monde_trim_removes_noise_and_placeholders():
    item = FeedItem(title="Un article", link="https://www.lemonde.fr/a.html")

    result = _le_monde().trim(item, LE_MONDE_PAGE)

    assert result.failure is None
    assert result.body.startswith('<section class="zone zone--article">')
    assert "Le contenu." in result.body
    assert "Partager" not in result.body
    assert "Réactions" not in result.body
    assert "<picture" not in result.body
    assert "data:image/svg+xml" not in result.body
    assert "https://img.lemde.fr/photo.jpg" in result.body
    assert "Menu" not in result.body


def test_le_monde_trim_falls_back_to_longform_container():
    page = '<div class="article article--longform article--content"><p>Long format</p></div>'
    item = FeedItem(title="Long", link="https://www.lemonde.fr/long.html")

    result = _le_monde().trim(item, page)

    assert "Long format" in result.body


def test_le_monde_live_stream_fails_fast():
    item = FeedItem(title="En direct, guerre en Ukraine", link="https://www.lemonde.fr/live.html")

    result = _le_monde().trim(item, LE_MONDE_PAGE)

    assert result.body is None
    assert result.failure is FailureKind.LIVE_STREAM
    assert result.reason == "LiveStream"


def test_le_monde_without_container_is_empty():
    item = FeedItem(title="Vide", link="https://www.lemonde.fr/vide.html")

    result = _le_monde().trim(item, "<html><body><p>Abonnez-vous</p></body></html>")

    assert result.failure is FailureKind.EMPTY


def test_le_monde_cover_uses_large_rendition():
    item = FeedItem(media_url="https://img.lemde.fr/2026/10/17/0/0/644/322/photo.jpg")

    cover = _le_monde().extract_cover(item, "")

    assert cover == "https://img.lemde.fr/2026/10/17/0/0/1410/2250/photo.jpg"
    assert _le_monde().extract_cover(FeedItem(), "") is None


def test_gamekult_matches_only_its_feed():
    assert GamekultSource.matches(GAMEKULT_FEED_URL)
    assert not GamekultSource.matches("https://www.gamekult.com/feed.xml?page=2")


def test_gamekult_repairs_images_in_news():
    source = GamekultSource(GAMEKULT_FEED_URL, SourceOptions())
    item = FeedItem(title="News", link="https://www.gamekult.com/news.html")

    result = source.trim(item, GAMEKULT_NEWS_PAGE)

    assert result.failure is None
    assert 'src="https://cdn.gamekult.com/images/photo__w1440.jpg"' in result.body
    assert 'src="https://cdn.gamekult.com/images/other__w1440.png"' in result.body
    assert "placeholder.gif" not in result.body
    assert "Détails" not in result.body
    assert "track()" not in result.body


def test_gamekult_prefers_review_container():
    source = GamekultSource(GAMEKULT_FEED_URL, SourceOptions())
    item = FeedItem(title="Test", link="https://www.gamekult.com/test.html")

    result = source.trim(item, GAMEKULT_REVIEW_PAGE)

    assert "Test complet." in result.body
    assert "Teaser" not in result.body
    assert "59,99" not in result.body


def test_gamekult_without_container_is_empty():
    source = GamekultSource(GAMEKULT_FEED_URL, SourceOptions())

    result = source.trim(FeedItem(title="x", link="y"), "<div>rien</div>")

    assert result.failure is FailureKind.EMPTY


def test_sources_provide_custom_css():
    assert "figcaption" in GamekultSource(GAMEKULT_FEED_URL, SourceOptions()).custom_css()
    assert ".breadcrumb" in _le_monde().custom_css()
