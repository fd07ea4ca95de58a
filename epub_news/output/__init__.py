"""
Output generation.

This package writes the EPUB file and prints the run report.
"""

from .epub import DocumentMetadata, assemble_epub, build_book
from .report import render_run_report

__all__ = [
    "DocumentMetadata",
    "assemble_epub",
    "build_book",
    "render_run_report",
]
