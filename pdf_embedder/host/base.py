"""
Host application interface.
File: pdf_embedder/host/base.py

Every document operation (open, place, rename, save) goes through a
HostApplication adapter. The core only depends on this interface, so
an adapter for a real image editor can be plugged in with --host.
"""

import importlib

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional


class HostApplication(ABC):
    """
    Narrow set of capabilities the batch process needs from an editor.

    Handles returned by the open methods are opaque to the caller and
    must be released with close_document().
    """

    @abstractmethod
    def describe(self) -> str:
        """Application name and version, written to the log header."""

    @abstractmethod
    def open_document_at_page(self, file_ref: Path, page: int, options: Any = None) -> Any:
        """
        Open a multi-page document at a given page.

        Raises:
            PageOutOfRange: If the document has no such page
            HostError: For any other failure
        """

    @abstractmethod
    def open_document(self, file_ref: Path) -> Any:
        """Open a source document and make its top layer active. Raises HostError."""

    @abstractmethod
    def close_document(self, handle: Any, discard_changes: bool = True) -> None:
        """Release a document session."""

    @abstractmethod
    def place_embedded(self, handle: Any, file_ref: Path, page: Optional[int] = None) -> str:
        """Place a file (or one PDF page) as an embedded object; return the new layer name."""

    @abstractmethod
    def add_layer_from_file(self, handle: Any, file_ref: Path) -> str:
        """Copy an image into the document as a new top layer; return the layer name."""

    @abstractmethod
    def rename_active_layer(self, handle: Any, name: str) -> None:
        """Rename the active layer."""

    @abstractmethod
    def add_text_layer(self, handle: Any, contents: str,
                       color: tuple[int, int, int], position: tuple[float, float]) -> str:
        """Create a text layer; return its name."""

    @abstractmethod
    def center_active_layer(self, handle: Any) -> None:
        """Center the active layer on the canvas."""

    @abstractmethod
    def get_keywords(self, handle: Any) -> list[str]:
        """Document metadata keywords."""

    @abstractmethod
    def set_keywords(self, handle: Any, keywords: list[str]) -> None:
        """Replace the document metadata keywords."""

    @abstractmethod
    def save_as(self, handle: Any, output_path: Path, output_format: str) -> None:
        """Save a copy of the document in PSD or TIFF format."""


def load_host(spec: str) -> HostApplication:
    """
    Instantiate a host adapter from a "module:ClassName" string.

    Raises:
        ValueError: If the spec is malformed or does not name a HostApplication
    """
    module_name, sep, class_name = spec.partition(':')
    if not sep or not module_name or not class_name:
        raise ValueError(f"Invalid host '{spec}' (expected 'module:ClassName')")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ValueError(f"Cannot import host module '{module_name}': {e}") from e

    host_class = getattr(module, class_name, None)
    if not isinstance(host_class, type) or not issubclass(host_class, HostApplication):
        raise ValueError(f"'{spec}' is not a HostApplication")

    return host_class()


# End of file #
