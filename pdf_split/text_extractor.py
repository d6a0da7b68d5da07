"""PDF to plain-text extraction.

Building Block: TextExtractor / PdfPlumberExtractor
    Input Data:  Path to a PDF file
    Output Data: Path to a sibling UTF-8 .txt file with the same base name
    Setup Data:  pdfplumber library

The driver only depends on the abstract ``TextExtractor`` interface, so a
stub can replace pdfplumber in tests or a different backend can be plugged in.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path

import pdfplumber

logger = logging.getLogger(__name__)


def text_path_for(pdf_path: Path) -> Path:
    """Sibling text file for a PDF: same base name, ``.txt`` extension."""
    return Path(pdf_path).with_suffix(".txt")


class TextExtractor(ABC):
    """Converts one PDF file into one UTF-8 text file."""

    @abstractmethod
    def extract(self, pdf_path: Path) -> Path:
        """Write the text of ``pdf_path`` to a sibling file and return its path."""


class PdfPlumberExtractor(TextExtractor):
    """Default extractor backed by pdfplumber.

    Page texts are split into lines and written in page order, each line
    ending with ``newline``. Pages without a text layer add nothing. The text
    file is only created once the whole PDF has been read.
    """

    def __init__(self, newline: str = "\n") -> None:
        self._newline = newline

    def extract(self, pdf_path: Path) -> Path:
        pdf_path = Path(pdf_path)
        out_path = text_path_for(pdf_path)

        lines: list[str] = []
        with pdfplumber.open(pdf_path) as pdf:
            n_pages = len(pdf.pages)
            for page in pdf.pages:
                lines.extend((page.extract_text() or "").splitlines())

        with open(out_path, "w", encoding="utf-8", newline="") as f:
            for line in lines:
                f.write(line + self._newline)
        logger.debug("Extracted %d lines from %d pages of %s to %s",
                     len(lines), n_pages, pdf_path.name, out_path.name)
        return out_path
