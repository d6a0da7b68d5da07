"""Directory pipeline: PDFs -> text files -> split parts.

Processes the PDFs of one flat directory strictly one at a time, in name
order. Each PDF is converted to a sibling .txt file by the extractor, and
that text file is split into named parts beside it.

Input:  directory holding *.pdf files
Output: <capture>.txt parts written into the same directory
"""

import logging
import os
from pathlib import Path
from typing import Optional

from pdf_split.line_splitter import (
    DEFAULT_CAPTURE_PREFIX,
    DEFAULT_DELIMITER,
    DEFAULT_NEWLINE,
    compile_patterns,
    split_text,
)
from pdf_split.text_extractor import PdfPlumberExtractor, TextExtractor, text_path_for

logger = logging.getLogger(__name__)

__all__ = ["find_pdfs", "split_directory", "text_path_for"]


def find_pdfs(directory: Path) -> list[Path]:
    """Files in ``directory`` whose name ends in ``.pdf`` (case-sensitive), sorted."""
    directory = Path(directory)
    if not directory.is_dir():
        if directory.exists():
            raise NotADirectoryError(f"Not a directory: {directory}")
        raise FileNotFoundError(f"Directory not found: {directory}")
    return sorted(directory / name for name in os.listdir(directory)
                  if name.endswith(".pdf") and (directory / name).is_file())


def split_directory(
    directory: Path = Path("."),
    capture_prefix: str = DEFAULT_CAPTURE_PREFIX,
    delimiter: str = DEFAULT_DELIMITER,
    extractor: Optional[TextExtractor] = None,
    newline: str = DEFAULT_NEWLINE,
    keep_going: bool = False,
) -> dict:
    """Extract and split every PDF in ``directory``.

    Patterns are compiled before any file is touched, so a malformed
    expression fails the run up front. By default the first failing PDF
    aborts the run; with ``keep_going`` the error is logged, recorded under
    ``failed`` and the next PDF is processed.

    Returns a summary dict with ``pdf_files``, ``outputs`` (PDF name -> written
    paths) and ``failed`` (PDF name -> error message).
    """
    patterns = compile_patterns(capture_prefix, delimiter)
    extractor = extractor or PdfPlumberExtractor(newline=newline)

    pdf_files = find_pdfs(directory)
    logger.info("Found %d PDFs in %s", len(pdf_files), directory)

    outputs: dict[str, list[Path]] = {}
    failed: dict[str, str] = {}

    for pdf_path in pdf_files:
        logger.info("Reading: %s", pdf_path.name)
        try:
            text_file = extractor.extract(pdf_path)
            outputs[pdf_path.name] = split_text(text_file, patterns, newline=newline)
        except Exception as exc:
            if not keep_going:
                raise
            logger.error("Failed to process %s: %s", pdf_path.name, exc)
            failed[pdf_path.name] = str(exc)

    logger.info("Done.")
    return {
        "pdf_files": pdf_files,
        "outputs": outputs,
        "failed": failed,
    }
