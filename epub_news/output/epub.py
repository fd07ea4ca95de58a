"""
EPUB assembly.

Packages the articles of a run into a single EPUB file with ebooklib:
- one chapter per article, rendered through the article.xhtml template
- a "Liste des articles" contents page
- the bundled epub.css followed by the CSS contributed by the sources
- an optional cover picture downloaded from the run's cover URL

The file is written to a temporary name and moved into place only once
complete, so a failed assembly never leaves a partial ebook behind.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
import logging
import os
from pathlib import Path, PurePosixPath
import uuid
from urllib.parse import urlparse

from ebooklib import epub
import httpx
from jinja2 import Environment, PackageLoader, select_autoescape

from ..config import FetchConfig, OutputConfig
from ..core.types import RunAggregate
from ..errors import AssemblyError
from ..fetch.fetcher import build_client


logger = logging.getLogger(__name__)

TOC_TITLE = "Liste des articles"
BASE_CSS_PATH = Path(__file__).resolve().parent.parent / "epub.css"

_FR_MONTHS = (
    "janvier",
    "février",
    "mars",
    "avril",
    "mai",
    "juin",
    "juillet",
    "août",
    "septembre",
    "octobre",
    "novembre",
    "décembre",
)


def format_long_date(day: date) -> str:
    """Format a date the French way, e.g. "17 octobre 2026"."""
    return f"{day.day} {_FR_MONTHS[day.month - 1]} {day.year}"


@dataclass
class DocumentMetadata:
    """Ebook metadata.

    Attributes:
        title: Book title, also used as the file name
        description: Book description
        language: Language code
        author: Author metadata
    """
    title: str
    description: str
    language: str = "fr"
    author: str = "Le Monde"

    @classmethod
    def from_config(cls, cfg: OutputConfig, today: date | None = None) -> DocumentMetadata:
        long_date = format_long_date(today or date.today())
        return cls(
            title=cfg.title or long_date,
            description=cfg.description or f"Les titres du {long_date}",
            language=cfg.language,
            author=cfg.author,
        )


def epub_path_for(output_dir: Path, title: str) -> Path:
    safe = title.replace(os.sep, "-").replace("/", "-").strip() or "news"
    return output_dir / f"{safe}.epub"


async def assemble_epub(
    aggregate: RunAggregate,
    metadata: DocumentMetadata,
    output_dir: Path,
    fetch_cfg: FetchConfig | None = None,
) -> Path:
    """Write the run's articles as an EPUB file.

    Args:
        aggregate: Articles, cover URL and merged style of the run
        metadata: Book metadata
        output_dir: Directory to write the ebook into
        fetch_cfg: HTTP settings used to download the cover

    Returns:
        Path of the written ebook

    Raises:
        AssemblyError: If the ebook cannot be built or written
    """
    cover = None
    if aggregate.cover:
        cover = await _download_cover(aggregate.cover, fetch_cfg or FetchConfig())

    target = epub_path_for(output_dir, metadata.title)
    partial = target.with_name(f".{target.name}.part")
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        book = build_book(aggregate, metadata, cover)
        epub.write_epub(str(partial), book)
        os.replace(partial, target)
    except Exception as exc:  # noqa: BLE001
        partial.unlink(missing_ok=True)
        raise AssemblyError(f"Failed to generate ebook: {type(exc).__name__}: {exc}") from exc
    return target


def build_book(
    aggregate: RunAggregate,
    metadata: DocumentMetadata,
    cover: tuple[str, bytes] | None = None,
) -> epub.EpubBook:
    """Build the in-memory EpubBook.

    Args:
        aggregate: Articles and merged style of the run
        metadata: Book metadata
        cover: Optional (file name, image bytes) of the cover picture

    Returns:
        The EpubBook, ready for epub.write_epub
    """
    env = Environment(
        loader=PackageLoader("epub_news", "templates"),
        autoescape=select_autoescape(["html", "xhtml"]),
    )
    article_template = env.get_template("article.xhtml")
    toc_template = env.get_template("toc.xhtml")

    book = epub.EpubBook()
    book.set_identifier(str(uuid.uuid4()))
    book.set_title(metadata.title)
    book.set_language(metadata.language)
    book.add_author(metadata.author)
    book.add_metadata("DC", "description", metadata.description)

    style = epub.EpubItem(
        uid="style",
        file_name="style/epub.css",
        media_type="text/css",
        content=(BASE_CSS_PATH.read_text(encoding="utf-8") + aggregate.style).encode("utf-8"),
    )
    book.add_item(style)

    if cover is not None:
        file_name, content = cover
        book.set_cover(file_name, content)

    chapters: list[epub.EpubHtml] = []
    for index, article in enumerate(aggregate.articles, start=1):
        chapter = epub.EpubHtml(
            uid=f"article_{index}",
            title=article.title,
            file_name=f"article_{index:03d}.xhtml",
            lang=metadata.language,
        )
        chapter.content = article_template.render(
            title=article.title,
            author=article.author,
            body=article.body,
            language=metadata.language,
        )
        chapter.add_item(style)
        chapters.append(chapter)

    toc_page = epub.EpubHtml(uid="toc_page", title=TOC_TITLE, file_name="toc.xhtml", lang=metadata.language)
    toc_page.content = toc_template.render(
        toc_title=TOC_TITLE,
        title=metadata.title,
        description=metadata.description,
        chapters=[{"title": ch.title, "href": ch.file_name} for ch in chapters],
        language=metadata.language,
    )
    toc_page.add_item(style)

    book.add_item(toc_page)
    for chapter in chapters:
        book.add_item(chapter)

    book.toc = chapters
    book.add_item(epub.EpubNcx())
    book.add_item(epub.EpubNav())

    spine: list = ["cover"] if cover is not None else []
    book.spine = spine + [toc_page] + chapters
    return book


async def _download_cover(url: str, cfg: FetchConfig) -> tuple[str, bytes] | None:
    """Download the cover picture. A failure only costs the cover."""
    suffix = PurePosixPath(urlparse(url).path).suffix or ".jpg"
    try:
        async with build_client(cfg) as client:
            resp = await client.get(url)
            resp.raise_for_status()
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        logger.warning("Cannot download cover %s: %s", url, exc)
        return None
    return f"cover{suffix}", resp.content
