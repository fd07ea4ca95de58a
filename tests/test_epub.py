"""Tests for EPUB assembly."""

from __future__ import annotations

import asyncio
from datetime import date
import logging
import zipfile

import pytest

from epub_news.config import OutputConfig
from epub_news.core.types import ExtractedArticle, RunAggregate
from epub_news.errors import AssemblyError
from epub_news.output import epub as epub_output
from epub_news.output.epub import DocumentMetadata, assemble_epub, format_long_date


def _aggregate() -> RunAggregate:
    return RunAggregate(
        articles=[
            ExtractedArticle(title="Premier", body="<article><h1>Premier</h1><p>Un.</p></article>", author="Jeanne"),
            ExtractedArticle(title="Second <b>", body="<article><p>Deux.</p></article>"),
        ],
        style=".custom { color: red; }",
    )


def test_metadata_defaults_to_french_date():
    metadata = DocumentMetadata.from_config(OutputConfig(), today=date(2026, 10, 17))

    assert metadata.title == "17 octobre 2026"
    assert metadata.description == "Les titres du 17 octobre 2026"
    assert metadata.language == "fr"
    assert metadata.author == "Le Monde"
    assert format_long_date(date(2026, 8, 1)) == "1 août 2026"


def test_assemble_epub_writes_chapters_and_style(tmp_path):
    metadata = DocumentMetadata(title="Revue", description="Les titres")

    path = asyncio.run(assemble_epub(_aggregate(), metadata, tmp_path))

    assert path == tmp_path / "Revue.epub"
    with zipfile.ZipFile(path) as archive:
        names = archive.namelist()
        assert "mimetype" in names
        chapter = archive.read("EPUB/article_001.xhtml").decode("utf-8")
        second = archive.read("EPUB/article_002.xhtml").decode("utf-8")
        toc = archive.read("EPUB/toc.xhtml").decode("utf-8")
        css = archive.read("EPUB/style/epub.css").decode("utf-8")

    assert "<p>Un.</p>" in chapter
    assert "Jeanne" in chapter
    assert "Second &lt;b&gt;" in toc
    assert "Liste des articles" in toc
    assert "<p>Deux.</p>" in second
    assert css.endswith(".custom { color: red; }")
    assert list(tmp_path.iterdir()) == [path]


def test_cover_download_failure_still_writes_book(tmp_path, monkeypatch):
    async def no_cover(url, cfg):
        return None

    monkeypatch.setattr(epub_output, "_download_cover", no_cover)
    aggregate = _aggregate()
    aggregate.cover = "https://img.example.com/cover.jpg"

    path = asyncio.run(assemble_epub(aggregate, DocumentMetadata(title="Sans couverture", description="d"), tmp_path))

    assert path.exists()


def test_invalid_cover_url_is_only_a_warning(tmp_path, caplog):
    aggregate = _aggregate()
    aggregate.cover = "https://img.example.com/cover\x7f.jpg"

    with caplog.at_level(logging.WARNING):
        path = asyncio.run(assemble_epub(aggregate, DocumentMetadata(title="Lien invalide", description="d"), tmp_path))

    assert path.exists()
    assert "Cannot download cover" in caplog.text
    with zipfile.ZipFile(path) as archive:
        assert not any(name.startswith("EPUB/cover") for name in archive.namelist())


def test_cover_is_embedded(tmp_path, monkeypatch):
    async def fake_cover(url, cfg):
        return "cover.jpg", b"\xff\xd8\xff\xe0fake-jpeg"

    monkeypatch.setattr(epub_output, "_download_cover", fake_cover)
    aggregate = _aggregate()
    aggregate.cover = "https://img.example.com/cover.jpg"

    path = asyncio.run(assemble_epub(aggregate, DocumentMetadata(title="Couverture", description="d"), tmp_path))

    with zipfile.ZipFile(path) as archive:
        assert archive.read("EPUB/cover.jpg") == b"\xff\xd8\xff\xe0fake-jpeg"


def test_assembly_failure_leaves_nothing_behind(tmp_path, monkeypatch):
    def broken_write(name, book, options=None):
        with open(name, "wb") as f:
            f.write(b"partial")
        raise OSError("disk full")

    monkeypatch.setattr(epub_output.epub, "write_epub", broken_write)

    with pytest.raises(AssemblyError, match="disk full"):
        asyncio.run(assemble_epub(_aggregate(), DocumentMetadata(title="Cassé", description="d"), tmp_path))

    assert list(tmp_path.iterdir()) == []
