"""
Pattern matching between source documents and their auxiliary files.
File: pdf_embedder/matcher/pattern_matcher.py

Given a source document name (extension stripped) and the active
extraction rule, builds the expressions used to pick out:

- the multi-page PDF and placed TIFF files (key-gated prefix match)
- the JPEG overlay files (prefix or fixed-offset match, never fails)

All matchers are case-insensitive and anchored to the start of the
candidate file name.
"""

import re

from pathlib import Path
from typing import Iterable

from pdf_embedder.core.exceptions import NoKeyMatch
from pdf_embedder.matcher.rules import ExtractionRule, OverlayStrategy
from pdf_embedder.matcher.matcher_regex_patterns import (
    REGEX_RESERVED_CHARS_RGX,
    JPEG_SUFFIX,
    SWATCH_DELIMITER,
    SWATCH_WIDTH,
)


def escape_regexp(text: str) -> str:
    """
    Backslash-escape regex-reserved characters and whitespace.

    Examples:
        "a.b+c" -> "a\\.b\\+c"
        "Spring 2020 (v2)" -> "Spring\\ 2020\\ \\(v2\\)"
    """
    return REGEX_RESERVED_CHARS_RGX.sub(lambda m: '\\' + m.group(0), text)


def derive_document_key(filename: str, rule: ExtractionRule) -> str:
    """
    Extract the document key from a filename with the given rule.

    Args:
        filename: Source document name with its extension stripped
        rule: Active extraction rule

    Returns:
        Content of the rule's first capturing group

    Raises:
        NoKeyMatch: If the rule does not match, or has no usable group
    """
    if rule.key_expression.groups < 1:
        raise NoKeyMatch(filename, rule.name)

    match = rule.key_expression.search(filename)
    if not match or match.group(1) is None:
        raise NoKeyMatch(filename, rule.name)

    return match.group(1)


def derive_multipage_matcher(filename: str, rule: ExtractionRule) -> re.Pattern:
    """
    Build the matcher for PDF (and placed TIFF) files of a source document.

    The key is only used as a validity gate: the matcher itself tests
    for the whole escaped filename as a prefix.

    Raises:
        NoKeyMatch: If the filename does not satisfy the rule
    """
    derive_document_key(filename, rule)
    return re.compile('^' + escape_regexp(filename), re.IGNORECASE)


def derive_overlay_matcher(filename: str, rule: ExtractionRule) -> re.Pattern:
    """
    Build the matcher for JPEG overlay files of a source document.

    Fixed-offset rules match the 10 characters following the first "_"
    (from the start when there is no "_"), followed by ".jpg"/".jpeg".
    A shorter segment is used as is, which can make the matcher broad.
    Every other rule matches the full filename followed by anything.
    """
    if rule.overlay_strategy == OverlayStrategy.FIXED_OFFSET:
        start = filename.find(SWATCH_DELIMITER) + 1
        segment = filename[start:start + SWATCH_WIDTH]
        return re.compile('^' + escape_regexp(segment) + JPEG_SUFFIX, re.IGNORECASE)

    return re.compile('^' + escape_regexp(filename) + '.*' + JPEG_SUFFIX, re.IGNORECASE)


def filter_matching(files: Iterable[Path], matcher: re.Pattern) -> list[Path]:
    """Keep the files whose names the matcher accepts, in their original order."""
    return [path for path in files if matcher.search(path.name)]


def select_documents(files: Iterable[Path], filename: str, matcher: re.Pattern) -> list[Path]:
    """
    Pick the PDF files to embed for a source document.

    An exact stem match wins (so "1234567_001" does not also pull in
    "1234567_001_ALT1.pdf"); otherwise every prefix match is returned.
    """
    matches = filter_matching(files, matcher)
    exact = [path for path in matches if path.stem.lower() == filename.lower()]
    return exact or matches


# End of file #
