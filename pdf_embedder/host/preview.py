"""
Preview host: real page probing, simulated editing.
File: pdf_embedder/host/preview.py

PDF pages are opened with pypdf, so page counts are real. Edits to the
source document (placed pages, layers, keywords, save) are tracked in
memory and printed, nothing is written to disk. This is the default
host; use --host to plug in an adapter for an actual image editor.
"""

from pathlib import Path
from dataclasses import dataclass, field
from typing import Any, BinaryIO, Optional
from pypdf import PdfReader
from pypdf.errors import PyPdfError
from rich.console import Console

from pdf_embedder._version import __version__
from pdf_embedder.host.base import HostApplication
from pdf_embedder.core.exceptions import HostError, PageOutOfRange
from pdf_embedder.core.warning_suppression import suppress_pdf_warnings

console = Console()


@dataclass
class PdfPageSession:
    """A PDF opened at one page."""
    path: Path
    page: int
    stream: Optional[BinaryIO] = None


@dataclass
class PreviewDocument:
    """In-memory stand-in for an open source document."""
    path: Path
    layers: list[str] = field(default_factory=lambda: ['Background'])
    keywords: list[str] = field(default_factory=list)
    saved_to: Optional[Path] = None
    saved_format: Optional[str] = None
    closed: bool = False

    @property
    def active_layer(self) -> str:
        return self.layers[0]


def _read_page_total(stream: BinaryIO, path: Path) -> int:
    try:
        with suppress_pdf_warnings():
            return len(PdfReader(stream).pages)
    except (PyPdfError, OSError, ValueError) as e:
        raise HostError(f"Could not read PDF: {e}", context=path.name) from e


def _pdf_page_total(path: Path) -> int:
    try:
        with open(path, 'rb') as stream:
            return _read_page_total(stream, path)
    except OSError as e:
        raise HostError(f"Could not open file: {e}", context=path.name) from e


class PreviewHost(HostApplication):
    """Host adapter that previews every edit on the console."""

    def __init__(self, quiet: bool = False):
        self.quiet = quiet
        self.documents: list[PreviewDocument] = []

    def _say(self, message: str):
        if not self.quiet:
            console.print(message)

    def describe(self) -> str:
        return f"Preview host (pdf-page-embedder {__version__})"

    # Multi-page documents

    def open_document_at_page(self, file_ref: Path, page: int, options: Any = None) -> PdfPageSession:
        path = Path(file_ref)
        try:
            stream = open(path, 'rb')
        except OSError as e:
            raise HostError(f"Could not open file: {e}", context=path.name) from e

        try:
            if not 1 <= page <= _read_page_total(stream, path):
                raise PageOutOfRange(page, context=path.name)
        except HostError:
            stream.close()
            raise

        return PdfPageSession(path, page, stream)

    # Source documents

    def open_document(self, file_ref: Path) -> PreviewDocument:
        path = Path(file_ref)
        if not path.is_file():
            raise HostError(f"File not found: {path}", context=path.name)

        document = PreviewDocument(path)
        self.documents.append(document)
        self._say(f"[blue]Opened {path.name}[/blue]")
        return document

    def close_document(self, handle: Any, discard_changes: bool = True) -> None:
        if isinstance(handle, PdfPageSession):
            if handle.stream is not None:
                handle.stream.close()
                handle.stream = None
        elif isinstance(handle, PreviewDocument):
            handle.closed = True

    def place_embedded(self, handle: PreviewDocument, file_ref: Path, page: Optional[int] = None) -> str:
        path = Path(file_ref)
        if page is not None:
            total = _pdf_page_total(path)
            if not 1 <= page <= total:
                raise HostError(f"Cannot place page {page} of {total}", context=path.name)
        elif not path.is_file():
            raise HostError(f"File not found: {path}", context=path.name)

        layer_name = path.stem
        handle.layers.insert(0, layer_name)
        where = f" (page {page})" if page is not None else ""
        self._say(f"[dim]  + Place embedded: {path.name}{where}[/dim]")
        return layer_name

    def add_layer_from_file(self, handle: PreviewDocument, file_ref: Path) -> str:
        path = Path(file_ref)
        if not path.is_file():
            raise HostError(f"Error opening image file, \"{path.name}\"", context=path.name)

        handle.layers.insert(0, path.stem)
        self._say(f"[dim]  + Layer from file: {path.name}[/dim]")
        return path.stem

    def rename_active_layer(self, handle: PreviewDocument, name: str) -> None:
        handle.layers[0] = name
        self._say(f"[dim]    layer name: {name}[/dim]")

    def add_text_layer(self, handle: PreviewDocument, contents: str,
                       color: tuple[int, int, int], position: tuple[float, float]) -> str:
        handle.layers.insert(0, contents)
        self._say(f"[dim]  + Text layer: \"{contents}\" rgb{tuple(color)}[/dim]")
        return contents

    def center_active_layer(self, handle: PreviewDocument) -> None:
        self._say(f"[dim]    centered: {handle.active_layer}[/dim]")

    def get_keywords(self, handle: PreviewDocument) -> list[str]:
        return list(handle.keywords)

    def set_keywords(self, handle: PreviewDocument, keywords: list[str]) -> None:
        handle.keywords = list(keywords)
        self._say(f"[dim]  + Keywords: {', '.join(keywords)}[/dim]")

    def save_as(self, handle: PreviewDocument, output_path: Path, output_format: str) -> None:
        handle.saved_to = Path(output_path)
        handle.saved_format = output_format
        self._say(f"[green]✓ Would save: {handle.saved_to} ({output_format}, "
                  f"{len(handle.layers)} layers)[/green]")


# End of file #
