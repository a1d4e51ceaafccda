"""
Run configuration.
File: pdf_embedder/core/config.py

An EmbedConfig is built once from the command line and never changes
during a run. Everything the batch process needs (folders, active
extraction rule, naming overrides) is passed around explicitly in it.
"""

import argparse

from pathlib import Path
from dataclasses import dataclass
from typing import Optional

from pdf_embedder.constants import OUTPUT_FORMATS, DEFAULT_OUTPUT_FORMAT
from pdf_embedder.core.page_counter import DEFAULT_MAX_PAGES
from pdf_embedder.host import DEFAULT_HOST
from pdf_embedder.matcher.rules import ExtractionRule, get_rule, get_default_rule


@dataclass(frozen=True)
class EmbedConfig:
    """Immutable settings for one batch run."""
    source_folder: Path
    output_folder: Path
    rule: ExtractionRule
    pdf_folder: Optional[Path] = None
    tiff_folder: Optional[Path] = None
    jpeg_folder: Optional[Path] = None
    output_format: str = DEFAULT_OUTPUT_FORMAT
    pdf_layer_name: Optional[str] = None
    tiff_layer_name: Optional[str] = None
    jpeg_layer_name: Optional[str] = None
    keywords: tuple[str, ...] = ()
    text_contents: Optional[str] = None
    max_pages: int = DEFAULT_MAX_PAGES
    log_enabled: bool = True
    notify_when_done: bool = True
    host: str = DEFAULT_HOST

    @property
    def log_folder(self) -> Path:
        """The log is written next to the output folder, not inside it."""
        return self.output_folder.parent

    def __str__(self):
        return (f"EmbedConfig({self.source_folder} -> {self.output_folder}, "
                f"pattern={self.rule.name}, format={self.output_format})")


def clean_text(value: Optional[str]) -> Optional[str]:
    """Trim surrounding whitespace; blank text becomes None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def output_extension(output_format: str) -> str:
    """File extension for an output format: "PSD" -> "psd", "TIFF" -> "tif"."""
    try:
        return OUTPUT_FORMATS[output_format.upper()]
    except KeyError:
        raise ValueError(f"Unsupported output format '{output_format}'") from None


def _optional_path(value) -> Optional[Path]:
    if value is None or str(value).strip() == '':
        return None
    return Path(value).expanduser()


def config_from_args(args: argparse.Namespace) -> EmbedConfig:
    """
    Build the run configuration from parsed command-line arguments.

    Raises:
        ValueError: If the pattern name is unknown
    """
    pattern = getattr(args, 'pattern', None)
    rule = get_rule(pattern) if pattern else get_default_rule()

    keywords = tuple(k for k in (clean_text(k) for k in (getattr(args, 'keyword', None) or [])) if k)

    return EmbedConfig(
        source_folder=Path(args.source_folder).expanduser(),
        output_folder=Path(args.output).expanduser(),
        rule=rule,
        pdf_folder=_optional_path(getattr(args, 'pdf_folder', None)),
        tiff_folder=_optional_path(getattr(args, 'tiff_folder', None)),
        jpeg_folder=_optional_path(getattr(args, 'jpeg_folder', None)),
        output_format=getattr(args, 'file_type', DEFAULT_OUTPUT_FORMAT).upper(),
        pdf_layer_name=clean_text(getattr(args, 'pdf_layer_name', None)),
        tiff_layer_name=clean_text(getattr(args, 'tiff_layer_name', None)),
        jpeg_layer_name=clean_text(getattr(args, 'jpeg_layer_name', None)),
        keywords=keywords,
        text_contents=clean_text(getattr(args, 'text_layer', None)),
        max_pages=getattr(args, 'max_pages', DEFAULT_MAX_PAGES),
        log_enabled=not getattr(args, 'no_log', False),
        notify_when_done=not getattr(args, 'no_notify', False),
        host=getattr(args, 'host', None) or DEFAULT_HOST,
    )


def validate_config(config: EmbedConfig) -> tuple[bool, str]:
    """
    Check a configuration before any file is touched.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not config.source_folder.is_dir():
        return False, f"Source folder not found: {config.source_folder}"

    if config.output_folder.exists() and not config.output_folder.is_dir():
        return False, f"Output path is not a folder: {config.output_folder}"

    for label, folder in (('PDF', config.pdf_folder),
                          ('TIFF', config.tiff_folder),
                          ('JPEG', config.jpeg_folder)):
        if folder is not None and not folder.is_dir():
            return False, f"{label} folder not found: {folder}"

    if config.output_format not in OUTPUT_FORMATS:
        return False, f"Output format must be one of: {', '.join(OUTPUT_FORMATS)}"

    if config.max_pages < 1:
        return False, "Maximum page count must be >= 1"

    return True, ""


# End of file #
