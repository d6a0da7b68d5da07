"""
cli.py — Split the PDFs of a directory into named text files
=============================================================

    pdf-split [directory] [capture_prefix] [delimiter]

    pdf-split statements "employee: " "net pay" --keep-going

Exit codes: 0 success, 1 processing error, 2 bad pattern or config.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from pdf_split.config import NEWLINES, ConfigError, SplitConfig, load_config
from pdf_split.driver import split_directory
from pdf_split.line_splitter import PatternError

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pdf-split",
        description="Extract text from PDFs and split it into files named by "
                    "capture lines, at delimiter lines.",
    )
    parser.add_argument("directory", nargs="?", default=None,
                        help="folder containing the PDF files (default: .)")
    parser.add_argument("capture_prefix", nargs="?", default=None,
                        help="regex prefix of the line whose remainder names "
                             r"the output file (default: 'part [\d]*. ')")
    parser.add_argument("delimiter", nargs="?", default=None,
                        help="regex of the line that ends each output file "
                             "(default: '(payment|salary)')")
    parser.add_argument("--config", type=Path, default=None,
                        help="JSON config file; positional arguments override it")
    parser.add_argument("--keep-going", action="store_true", default=None,
                        help="log a failing PDF and continue with the next one")
    parser.add_argument("--newline", choices=sorted(NEWLINES), default=None,
                        help="line terminator for written files (default: lf)")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="debug logging")
    return parser


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def resolve_config(args: argparse.Namespace) -> SplitConfig:
    """Config file values (if any) overridden by command-line arguments."""
    config = load_config(args.config) if args.config else SplitConfig()
    return config.merged(
        directory=args.directory,
        capture_prefix=args.capture_prefix,
        delimiter=args.delimiter,
        newline=NEWLINES.get(args.newline) if args.newline else None,
        keep_going=args.keep_going,
    )


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    _setup_logging(args.verbose)

    try:
        config = resolve_config(args)
        summary = split_directory(
            Path(config.directory),
            capture_prefix=config.capture_prefix,
            delimiter=config.delimiter,
            newline=config.newline,
            keep_going=config.keep_going,
        )
    except (PatternError, ConfigError) as exc:
        logger.error("%s", exc)
        return EXIT_USAGE
    except Exception:
        logger.exception("Split run aborted")
        return EXIT_FAILURE

    if summary["failed"]:
        logger.error("%d of %d PDF(s) failed: %s", len(summary["failed"]),
                     len(summary["pdf_files"]), ", ".join(summary["failed"]))
        return EXIT_FAILURE
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
