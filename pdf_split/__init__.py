"""pdf_split — extract text from PDFs and split it into named text files."""

__version__ = "0.1.0"

from pdf_split.line_splitter import (
    DEFAULT_CAPTURE_PREFIX,
    DEFAULT_DELIMITER,
    LineSplitter,
    PatternError,
    SplitPatterns,
    compile_patterns,
    normalize_capture,
    output_name,
    split_lines,
    split_text,
)
from pdf_split.text_extractor import (
    PdfPlumberExtractor,
    TextExtractor,
    text_path_for,
)
from pdf_split.driver import find_pdfs, split_directory
from pdf_split.config import ConfigError, SplitConfig, load_config

__all__ = [
    "DEFAULT_CAPTURE_PREFIX", "DEFAULT_DELIMITER",
    "LineSplitter", "PatternError", "SplitPatterns",
    "compile_patterns", "normalize_capture", "output_name",
    "split_lines", "split_text",
    "PdfPlumberExtractor", "TextExtractor",
    "text_path_for",
    "find_pdfs", "split_directory",
    "ConfigError", "SplitConfig", "load_config",
]
