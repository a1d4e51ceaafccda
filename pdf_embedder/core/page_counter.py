"""
Page counting for multi-page documents.
File: pdf_embedder/core/page_counter.py

The host exposes no page-count query, only the ability to open a
document at a given page. The count is found by probing downward from
an upper bound until a page opens:

    probe(100) -> out of range
    probe(99)  -> out of range
    ...
    probe(3)   -> opened        => 3 pages

Any host failure counts as "not this page"; the reason is kept on the
probe result but does not change the search. When nothing opens the
count falls back to 1.
"""

from pathlib import Path
from dataclasses import dataclass
from typing import Any, Optional, Union

from pdf_embedder.host.base import HostApplication
from pdf_embedder.core.exceptions import HostError, PageOutOfRange


DEFAULT_MAX_PAGES = 100
FALLBACK_PAGE_COUNT = 1


@dataclass(frozen=True)
class PdfOpenOptions:
    """Options used when opening a PDF page in the host."""
    anti_alias: bool = True
    bits_per_channel: int = 8
    constrain_proportions: bool = True
    crop_page: str = 'mediabox'
    mode: str = 'RGB'
    resolution: int = 72
    suppress_warnings: bool = True


class ProbeReason:
    """Why a probe failed."""
    OUT_OF_RANGE    = "out_of_range"
    HOST_ERROR      = "host_error"


@dataclass(frozen=True)
class ProbeOk:
    """The page opened."""
    page: int


@dataclass(frozen=True)
class ProbeErr:
    """The page did not open."""
    page: int
    reason: str
    error: Optional[Exception] = None


ProbeResult = Union[ProbeOk, ProbeErr]


def probe_page(host: HostApplication, file_ref: Path, page: int,
               options: Any = None) -> ProbeResult:
    """
    Try to open a document at one page.

    An opened session is closed without saving before returning, on
    every path.
    """
    try:
        handle = host.open_document_at_page(file_ref, page, options)
    except PageOutOfRange as e:
        return ProbeErr(page, ProbeReason.OUT_OF_RANGE, e)
    except HostError as e:
        return ProbeErr(page, ProbeReason.HOST_ERROR, e)

    try:
        return ProbeOk(page)
    finally:
        host.close_document(handle, discard_changes=True)


def count_pages(host: HostApplication, file_ref: Path,
                max_pages: int = DEFAULT_MAX_PAGES,
                options: Any = None) -> int:
    """
    Find the page count of a multi-page document.

    Args:
        host: Host adapter providing open_document_at_page()
        file_ref: Document to probe
        max_pages: Highest page number tried
        options: Open options passed through to the host

    Returns:
        Highest page that opens, or 1 if none does. An N-page document
        takes at most max_pages + 1 - N probes.

    Raises:
        ValueError: If max_pages is less than 1
    """
    if max_pages < 1:
        raise ValueError(f"max_pages must be >= 1, got {max_pages}")

    if options is None:
        options = PdfOpenOptions()

    candidate = max_pages
    while candidate >= 1:
        result = probe_page(host, file_ref, candidate, options)
        if isinstance(result, ProbeOk):
            return result.page
        candidate -= 1

    return FALLBACK_PAGE_COUNT


# End of file #
