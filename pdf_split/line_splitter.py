"""Split a text file into named parts using a capture and a delimiter pattern.

Building Block: split_text / split_lines
    Input Data:  Text file (or any iterable of lines), capture prefix regex,
                 delimiter regex
    Output Data: List of written output paths, in creation order
    Setup Data:  Line terminator for written files (default "\\n")

A capture line (``^<prefix>(.*)$``) names the output files that follow it.
A delimiter line (``^<delimiter>$``) closes the current segment: every line
since the previous delimiter, the delimiter included, goes to
``<capture>.txt``. Further delimiters before the next capture go to
``<capture>-1.txt``, ``<capture>-2.txt`` ... and are logged as mismatches.

Lines after the last delimiter are appended to the last written file. When
no file is ever written, buffered lines are dropped.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import IO, Iterable, NamedTuple, Optional, Union

logger = logging.getLogger(__name__)

DEFAULT_CAPTURE_PREFIX = r"part [\d]*. "
DEFAULT_DELIMITER = r"(payment|salary)"
DEFAULT_NEWLINE = "\n"


class PatternError(ValueError):
    """A capture or delimiter expression failed to compile."""


class SplitPatterns(NamedTuple):
    capture: re.Pattern
    delimiter: re.Pattern


def normalize_capture(text: str) -> str:
    """Lowercase and replace spaces with hyphens."""
    return text.replace(" ", "-").lower()


def output_name(capture: str, index: int) -> str:
    """File name for the ``index``-th delimiter seen under ``capture``."""
    if index > 0:
        return f"{capture}-{index}.txt"
    return f"{capture}.txt"


def _compile(expression: str, kind: str) -> re.Pattern:
    try:
        return re.compile(expression, re.IGNORECASE)
    except re.error as exc:
        raise PatternError(f"Invalid {kind} pattern {expression!r}: {exc}") from exc


def compile_patterns(capture_prefix: str = DEFAULT_CAPTURE_PREFIX,
                     delimiter: str = DEFAULT_DELIMITER) -> SplitPatterns:
    """Compile the anchored, case-insensitive capture and delimiter patterns.

    Raises PatternError if either expression is malformed.
    """
    return SplitPatterns(
        capture=_compile(f"^{capture_prefix}(.*)$", "capture"),
        delimiter=_compile(f"^{delimiter}$", "delimiter"),
    )


class LineSplitter:
    """Per-file splitting state: current capture, mismatch counter, buffer, writer.

    Starts in the buffering state (no writer). The first delimiter that
    follows a capture opens a writer and moves to the writing state; each
    later delimiter closes that writer and opens the next one.
    """

    def __init__(self, output_dir: Path, patterns: SplitPatterns,
                 newline: str = DEFAULT_NEWLINE,
                 source: Optional[Path] = None) -> None:
        self._output_dir = Path(output_dir)
        self._patterns = patterns
        self._newline = newline
        self._source = Path(source).resolve() if source is not None else None
        self.capture: Optional[str] = None
        self.mismatches = 0
        self._pending: list[str] = []
        self._writer: Optional[IO[str]] = None
        self.written: list[Path] = []

    @property
    def writing(self) -> bool:
        return self._writer is not None

    def feed(self, line: str) -> None:
        """Dispatch one input line (without its terminator)."""
        match = self._patterns.capture.search(line)
        if match:
            # trailing (.*) is always the last group, whatever the prefix holds
            self.capture = normalize_capture(match.group(self._patterns.capture.groups))
            self.mismatches = 0

        self._pending.append(line)
        if self._patterns.delimiter.search(line):
            self._rotate(line)

    def _rotate(self, line: str) -> None:
        if self.capture is None:
            logger.warning("Delimiter [%s] found before any capture; "
                           "dropping %d buffered line(s).",
                           line.lower(), len(self._pending))
            self._pending.clear()
            return

        output_file = self._output_dir / output_name(self.capture, self.mismatches)
        if self.mismatches > 0:
            logger.warning("Mismatched delimiter [%s] for capture [%s].",
                           line.lower(), self.capture)

        # opening the source for writing would truncate it mid-read
        if self._source is not None and output_file.resolve() == self._source:
            raise OSError(
                f"Output file {output_file.name} would overwrite the source "
                f"text file {self._source}; rename the PDF or change the "
                f"capture pattern"
            )

        self._close_writer()
        logger.info("Writing: %s", output_file.name)
        self._writer = open(output_file, "w", encoding="utf-8", newline="")
        self.written.append(output_file)
        self._flush_pending()
        self.mismatches += 1

    def _flush_pending(self) -> None:
        for pending in self._pending:
            self._writer.write(pending + self._newline)
        self._pending.clear()

    def _close_writer(self) -> None:
        if self._writer is not None:
            writer, self._writer = self._writer, None
            writer.close()

    def finish(self) -> None:
        """Write trailing lines to the open writer (if any) and close it."""
        try:
            if self._writer is not None:
                self._flush_pending()
            elif self._pending:
                logger.debug("No output file opened; discarding %d line(s).",
                             len(self._pending))
            self._pending.clear()
        finally:
            self._close_writer()

    def close(self) -> None:
        """Release the open writer without flushing (error path)."""
        self._close_writer()


def split_lines(lines: Iterable[str], output_dir: Path, patterns: SplitPatterns,
                newline: str = DEFAULT_NEWLINE,
                source: Optional[Path] = None) -> list[Path]:
    """Split an iterable of lines into files under ``output_dir``.

    Returns the written paths in creation order. A path appears twice if the
    same name was written twice (the later write overwrites the earlier).
    An output name that resolves to ``source`` raises OSError instead of
    truncating the file being read.
    """
    splitter = LineSplitter(output_dir, patterns, newline=newline, source=source)
    try:
        for line in lines:
            splitter.feed(line)
        splitter.finish()
    finally:
        splitter.close()
    return splitter.written


def _read_lines(f: IO[str]) -> Iterable[str]:
    for raw in f:
        yield raw.rstrip("\n")


def split_text(text_file: Path,
               capture_prefix: Union[str, SplitPatterns] = DEFAULT_CAPTURE_PREFIX,
               delimiter: str = DEFAULT_DELIMITER,
               newline: str = DEFAULT_NEWLINE) -> list[Path]:
    """Split a UTF-8 text file into parts written beside it.

    ``capture_prefix`` may also be a pre-compiled SplitPatterns, in which case
    ``delimiter`` is ignored.
    """
    text_file = Path(text_file)
    if isinstance(capture_prefix, SplitPatterns):
        patterns = capture_prefix
    else:
        patterns = compile_patterns(capture_prefix, delimiter)

    with open(text_file, encoding="utf-8") as f:
        return split_lines(_read_lines(f), text_file.parent, patterns,
                           newline=newline, source=text_file)
