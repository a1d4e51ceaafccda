"""
Test module for folder scanning and the diagnostic log.
File: tests/test_scanner_and_diagnostics.py
"""

import re

from pathlib import Path

from pdf_embedder.constants import LOG_FILE_NAME
from pdf_embedder.core.diagnostics import RunLog, describe_error
from pdf_embedder.core.exceptions import HostError, NoKeyMatch
from pdf_embedder.core.file_patterns import PDF_FILE_RGX
from pdf_embedder.core.scanner import list_files, scan_candidates, strip_extension


def touch(folder: Path, *names: str):
    folder.mkdir(parents=True, exist_ok=True)
    for name in names:
        (folder / name).write_bytes(b'')


# Scanner

def test_strip_extension():
    assert strip_extension("1234567_001.psd") == "1234567_001"
    assert strip_extension("a.b.tiff") == "a.b"
    assert strip_extension("noext") == "noext"


def test_list_files_filters_and_sorts(tmp_path):
    touch(tmp_path, "b.pdf", "a.PDF", ".hidden.pdf", "~lock.pdf", "c.txt")
    (tmp_path / "sub.pdf").mkdir()

    assert [p.name for p in list_files(tmp_path, PDF_FILE_RGX)] == ["a.PDF", "b.pdf"]
    assert [p.name for p in list_files(tmp_path)] == ["a.PDF", "b.pdf", "c.txt"]


def test_list_files_missing_folder(tmp_path):
    assert list_files(tmp_path / "missing", PDF_FILE_RGX) == []


def test_scan_candidates(tmp_path):
    touch(tmp_path / "pdf", "x.pdf", "x.jpg")
    touch(tmp_path / "tiff", "x.tif", "y.tiff", "x.pdf")
    touch(tmp_path / "jpeg", "x.jpg", "y.jpeg", "z.png")

    candidates = scan_candidates(tmp_path / "pdf", tmp_path / "tiff", tmp_path / "jpeg")

    assert [p.name for p in candidates.documents] == ["x.pdf"]
    assert [p.name for p in candidates.tiffs] == ["x.tif", "y.tiff"]
    assert [p.name for p in candidates.jpegs] == ["x.jpg", "y.jpeg"]


def test_scan_candidates_optional_folders(tmp_path):
    candidates = scan_candidates(None, tmp_path / "missing", None)
    assert candidates.documents == candidates.tiffs == candidates.jpegs == ()


# Diagnostic log

def test_log_file_created_on_first_entry(tmp_path):
    run_log = RunLog(tmp_path, host_description="Fake host 1.0")
    assert not run_log.path.exists()

    run_log.log('Error creating regular expression for source file, "x.psd".')
    run_log.log('Error placing TIFF file, "y.tif".', HostError("cannot place", context="y.tif"))
    run_log.close()

    lines = run_log.path.read_text(encoding='utf-8').splitlines()
    assert run_log.path.name == LOG_FILE_NAME
    assert lines[0] == "Embed PDF Pages Script Log"
    assert lines[1].startswith("OS: ")
    assert lines[2] == "Fake host 1.0"
    assert lines[3] == ""
    assert re.match(r'^\d{4}-\d{2}-\d{2} T\d{2}:\d{2}:\d{2} - Error creating regular expression', lines[4])
    assert lines[5].endswith('Error placing TIFF file, "y.tif".')
    assert lines[6] == "cannot place @ y.tif"
    assert run_log.count == 2


def test_new_run_replaces_old_log(tmp_path):
    first = RunLog(tmp_path)
    first.log("first run")
    first.close()

    second = RunLog(tmp_path)
    second.log("second run")
    second.close()

    text = second.path.read_text(encoding='utf-8')
    assert "second run" in text
    assert "first run" not in text


def test_disabled_log_writes_nothing(tmp_path):
    run_log = RunLog(tmp_path, enabled=False)
    run_log.log("ignored")
    run_log.close()

    assert not run_log.path.exists()
    assert not run_log.has_entries


def test_describe_error_uses_line_without_context():
    try:
        raise NoKeyMatch("x", "UNIQLO")
    except NoKeyMatch as e:
        described = describe_error(e)
    assert described.startswith("No document key in 'x' (pattern: UNIQLO) @ line ")
