"""Tests for pdf_split.driver — directory scan and per-PDF pipeline."""

import logging
from pathlib import Path

import pytest

from pdf_split.driver import find_pdfs, split_directory, text_path_for
from pdf_split.line_splitter import PatternError
from pdf_split.text_extractor import TextExtractor


# ── Stub extractor standing in for pdfplumber ───────────────────────────────


class _StubExtractor(TextExtractor):
    """Writes canned text for each PDF name; raises for names in ``fail``."""

    def __init__(self, texts: dict, fail=()):
        self.texts = texts
        self.fail = set(fail)
        self.calls: list[str] = []

    def extract(self, pdf_path: Path) -> Path:
        self.calls.append(pdf_path.name)
        if pdf_path.name in self.fail:
            raise OSError(f"cannot read {pdf_path.name}")
        out = text_path_for(pdf_path)
        out.write_text(self.texts.get(pdf_path.name, ""), encoding="utf-8")
        return out


def _touch_pdfs(directory, *names):
    for name in names:
        (directory / name).write_bytes(b"%PDF-1.4\n")


# ── find_pdfs ───────────────────────────────────────────────────────────────


def test_find_pdfs_filters_and_sorts(tmp_path):
    _touch_pdfs(tmp_path, "b.pdf", "a.pdf", "upper.PDF", "notes.txt", "c.pdf.bak")
    assert [p.name for p in find_pdfs(tmp_path)] == ["a.pdf", "b.pdf"]


def test_find_pdfs_skips_directories(tmp_path):
    _touch_pdfs(tmp_path, "a.pdf")
    (tmp_path / "archive.pdf").mkdir()
    assert [p.name for p in find_pdfs(tmp_path)] == ["a.pdf"]


def test_find_pdfs_empty_directory(tmp_path):
    assert find_pdfs(tmp_path) == []


def test_find_pdfs_missing_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        find_pdfs(tmp_path / "nope")


def test_find_pdfs_not_a_directory(tmp_path):
    f = tmp_path / "file.pdf"
    f.write_bytes(b"")
    with pytest.raises(NotADirectoryError):
        find_pdfs(f)


def test_text_path_for_replaces_extension():
    assert text_path_for(Path("dir/report.pdf")) == Path("dir/report.txt")


# ── split_directory ─────────────────────────────────────────────────────────


def test_split_directory_end_to_end(tmp_path):
    _touch_pdfs(tmp_path, "march.pdf")
    stub = _StubExtractor({
        "march.pdf": "Part 1. Bob\ndata A\nsalary\nPart 2. Carol\ndata B\npayment\n",
    })
    summary = split_directory(tmp_path, extractor=stub)

    assert stub.calls == ["march.pdf"]
    assert [p.name for p in summary["pdf_files"]] == ["march.pdf"]
    assert [p.name for p in summary["outputs"]["march.pdf"]] == ["bob.txt", "carol.txt"]
    assert summary["failed"] == {}
    assert (tmp_path / "march.txt").exists()
    assert (tmp_path / "carol.txt").read_text(encoding="utf-8") == \
        "Part 2. Carol\ndata B\npayment\n"


def test_split_directory_processes_in_name_order(tmp_path):
    _touch_pdfs(tmp_path, "z.pdf", "a.pdf", "m.pdf")
    stub = _StubExtractor({})
    split_directory(tmp_path, extractor=stub)
    assert stub.calls == ["a.pdf", "m.pdf", "z.pdf"]


def test_split_directory_custom_patterns(tmp_path):
    _touch_pdfs(tmp_path, "pay.pdf")
    stub = _StubExtractor({"pay.pdf": "Employee: Ann Lee\ngross 10\nNet Pay\n"})
    summary = split_directory(tmp_path, "employee: ", "net pay", extractor=stub)
    assert [p.name for p in summary["outputs"]["pay.pdf"]] == ["ann-lee.txt"]


def test_split_directory_newline_passed_through(tmp_path):
    _touch_pdfs(tmp_path, "a.pdf")
    stub = _StubExtractor({"a.pdf": "Part 1. Bob\nsalary\n"})
    split_directory(tmp_path, extractor=stub, newline="\r\n")
    assert (tmp_path / "bob.txt").read_bytes() == b"Part 1. Bob\r\nsalary\r\n"


def test_bad_pattern_fails_before_extraction(tmp_path):
    _touch_pdfs(tmp_path, "a.pdf")
    stub = _StubExtractor({})
    with pytest.raises(PatternError):
        split_directory(tmp_path, "part [", extractor=stub)
    assert stub.calls == []


def test_error_aborts_run_by_default(tmp_path):
    _touch_pdfs(tmp_path, "a.pdf", "b.pdf")
    stub = _StubExtractor({"b.pdf": "Part 1. Bob\nsalary\n"}, fail={"a.pdf"})
    with pytest.raises(OSError, match="cannot read a.pdf"):
        split_directory(tmp_path, extractor=stub)
    assert stub.calls == ["a.pdf"]
    assert not (tmp_path / "bob.txt").exists()


def test_keep_going_records_failure_and_continues(tmp_path, caplog):
    _touch_pdfs(tmp_path, "a.pdf", "b.pdf")
    stub = _StubExtractor({"b.pdf": "Part 1. Bob\nsalary\n"}, fail={"a.pdf"})
    with caplog.at_level(logging.ERROR, logger="pdf_split.driver"):
        summary = split_directory(tmp_path, extractor=stub, keep_going=True)
    assert stub.calls == ["a.pdf", "b.pdf"]
    assert "a.pdf" in summary["failed"]
    assert "cannot read" in summary["failed"]["a.pdf"]
    assert [p.name for p in summary["outputs"]["b.pdf"]] == ["bob.txt"]
    assert any("a.pdf" in r.getMessage() for r in caplog.records)


def test_logs_reading_and_done(tmp_path, caplog):
    _touch_pdfs(tmp_path, "a.pdf")
    with caplog.at_level(logging.INFO, logger="pdf_split"):
        split_directory(tmp_path, extractor=_StubExtractor({}))
    messages = [r.getMessage() for r in caplog.records]
    assert "Reading: a.pdf" in messages
    assert messages[-1] == "Done."


def test_logs_writing(tmp_path, caplog):
    _touch_pdfs(tmp_path, "a.pdf")
    stub = _StubExtractor({"a.pdf": "Part 1. Bob\nsalary\n"})
    with caplog.at_level(logging.INFO, logger="pdf_split"):
        split_directory(tmp_path, extractor=stub)
    assert "Writing: bob.txt" in [r.getMessage() for r in caplog.records]


def test_empty_directory_summary(tmp_path):
    summary = split_directory(tmp_path, extractor=_StubExtractor({}))
    assert summary == {"pdf_files": [], "outputs": {}, "failed": {}}
