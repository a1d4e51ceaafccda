"""
Filename pattern matching for embed-pdf-pages.
File: pdf_embedder/matcher/__init__.py

Derives document keys from source filenames and builds the expressions
that locate each document's PDF, TIFF and JPEG companions.
"""

from pdf_embedder.matcher.rules import (
    ExtractionRule,
    OverlayStrategy,
    EXTRACTION_RULES,
    get_rule,
    get_default_rule,
    rule_names,
)
from pdf_embedder.matcher.pattern_matcher import (
    escape_regexp,
    derive_document_key,
    derive_multipage_matcher,
    derive_overlay_matcher,
    filter_matching,
    select_documents,
)


__all__ = [
    'ExtractionRule',
    'OverlayStrategy',
    'EXTRACTION_RULES',
    'get_rule',
    'get_default_rule',
    'rule_names',
    'escape_regexp',
    'derive_document_key',
    'derive_multipage_matcher',
    'derive_overlay_matcher',
    'filter_matching',
    'select_documents',
]

# End of file #
