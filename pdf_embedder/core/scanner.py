"""File system scanning for source documents and their auxiliary files."""

import re

from pathlib import Path
from dataclasses import dataclass
from typing import Optional
from rich.console import Console

from pdf_embedder.core.file_patterns import (
    PDF_FILE_RGX,
    TIFF_FILE_RGX,
    JPEG_FILE_RGX,
    IGNORED_FILE_RGX,
    FILE_EXTENSION_RGX,
)

console = Console()


@dataclass(frozen=True)
class CandidateFileSet:
    """Auxiliary files found for a run. Read-only input to matching."""
    documents: tuple[Path, ...] = ()
    tiffs: tuple[Path, ...] = ()
    jpegs: tuple[Path, ...] = ()

    def __str__(self):
        return (f"CandidateFileSet({len(self.documents)} PDF, "
                f"{len(self.tiffs)} TIFF, {len(self.jpegs)} JPEG)")


def strip_extension(filename: str) -> str:
    """Remove the trailing extension: "1234567_001.psd" -> "1234567_001"."""
    return FILE_EXTENSION_RGX.sub('', filename)


def list_files(folder: Path, pattern: Optional[re.Pattern] = None) -> list[Path]:
    """
    List files in a folder whose names match an optional pattern.

    Hidden files (".") and temporary files ("~") are skipped. Subfolders
    are not searched.

    Args:
        folder: Folder to scan
        pattern: Compiled expression tested against each file name

    Returns:
        Matching files sorted by name
    """
    folder = Path(folder)
    if not folder.is_dir():
        console.print(f"[red]Folder not found: {folder}[/red]")
        return []

    files = []
    for path in folder.iterdir():
        if IGNORED_FILE_RGX.search(path.name):
            continue
        if not path.is_file():
            continue
        if pattern is None or pattern.search(path.name):
            files.append(path)

    return sorted(files, key=lambda p: p.name)


def _optional_files(folder: Optional[Path], pattern: re.Pattern) -> tuple[Path, ...]:
    if folder is None or not Path(folder).is_dir():
        return ()
    return tuple(list_files(folder, pattern))


def scan_candidates(pdf_folder: Optional[Path] = None,
                    tiff_folder: Optional[Path] = None,
                    jpeg_folder: Optional[Path] = None) -> CandidateFileSet:
    """Collect the PDF, TIFF and JPEG candidates from the optional folders."""
    return CandidateFileSet(
        documents=_optional_files(pdf_folder, PDF_FILE_RGX),
        tiffs=_optional_files(tiff_folder, TIFF_FILE_RGX),
        jpegs=_optional_files(jpeg_folder, JPEG_FILE_RGX),
    )
