"""
PDF Page Embedder Test Suite
File: tests/__init__.py

Test modules for pattern matching, page counting and batch processing.
"""

__all__ = [
    'test_pattern_matcher',
    'test_page_counter',
    'test_processor',
    'test_preview_host',
    'test_config_and_cli',
    'test_scanner_and_diagnostics',
]
