"""
Test module for page counting by descending probe.
File: tests/test_page_counter.py
"""

import pytest
from pathlib import Path

from pdf_embedder.core.exceptions import HostError
from pdf_embedder.core.page_counter import (
    DEFAULT_MAX_PAGES,
    PdfOpenOptions,
    ProbeOk,
    ProbeErr,
    ProbeReason,
    probe_page,
    count_pages,
)
from tests.fake_host import FakeHost


PDF = Path("1234567_001.pdf")


@pytest.mark.parametrize("pages", [1, 2, 3, 17, 99, 100])
def test_count_pages_returns_exact_count(pages):
    host = FakeHost(page_counts={PDF.name: pages})
    assert count_pages(host, PDF) == pages


@pytest.mark.parametrize("pages", [1, 3, 50, 100])
def test_count_pages_probe_budget(pages):
    host = FakeHost(page_counts={PDF.name: pages})
    count_pages(host, PDF)
    assert len(host.probes) == 101 - pages
    assert host.probes == list(range(100, pages - 1, -1))


def test_count_pages_falls_back_to_one():
    host = FakeHost(page_counts={})
    assert count_pages(host, PDF) == 1
    assert len(host.probes) == DEFAULT_MAX_PAGES
    assert host.probes[-1] == 1


def test_documents_longer_than_ceiling_report_ceiling():
    host = FakeHost(page_counts={PDF.name: 250})
    assert count_pages(host, PDF) == 100
    assert host.probes == [100]


def test_host_errors_are_retried_like_out_of_range():
    host = FakeHost(page_counts={PDF.name: 5}, host_errors={PDF.name})
    assert count_pages(host, PDF) == 1
    assert len(host.probes) == 100


def test_custom_ceiling():
    host = FakeHost(page_counts={PDF.name: 4})
    assert count_pages(host, PDF, max_pages=10) == 4
    assert host.probes == [10, 9, 8, 7, 6, 5, 4]


def test_invalid_ceiling():
    with pytest.raises(ValueError):
        count_pages(FakeHost(), PDF, max_pages=0)


def test_session_released_once_per_opened_probe():
    host = FakeHost(page_counts={PDF.name: 3})
    count_pages(host, PDF)
    assert len(host.opened_sessions) == 1
    assert host.closed_sessions == host.opened_sessions


def test_probe_page_ok_releases_session():
    host = FakeHost(page_counts={PDF.name: 3})
    result = probe_page(host, PDF, 2, PdfOpenOptions())
    assert result == ProbeOk(2)
    assert len(host.closed_sessions) == 1


def test_probe_page_out_of_range():
    host = FakeHost(page_counts={PDF.name: 3})
    result = probe_page(host, PDF, 4)
    assert isinstance(result, ProbeErr)
    assert result.reason == ProbeReason.OUT_OF_RANGE
    assert result.page == 4
    assert host.closed_sessions == []


def test_probe_page_host_error():
    host = FakeHost(host_errors={PDF.name})
    result = probe_page(host, PDF, 1)
    assert isinstance(result, ProbeErr)
    assert result.reason == ProbeReason.HOST_ERROR
    assert isinstance(result.error, HostError)


class ClosingFailsHost(FakeHost):
    def close_document(self, handle, discard_changes=True):
        super().close_document(handle, discard_changes)
        raise RuntimeError("close failed")


def test_unexpected_errors_propagate():
    class BrokenHost(FakeHost):
        def open_document_at_page(self, file_ref, page, options=None):
            raise RuntimeError("bug")

    with pytest.raises(RuntimeError):
        count_pages(BrokenHost(), PDF)


def test_release_is_attempted_even_when_it_fails():
    host = ClosingFailsHost(page_counts={PDF.name: 2})
    with pytest.raises(RuntimeError):
        count_pages(host, PDF)
    assert len(host.closed_sessions) == 1
