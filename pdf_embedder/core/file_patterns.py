"""
Regex patterns for file discovery and name handling.
File: pdf_embedder/core/file_patterns.py

Contains the extension filters used when scanning folders, kept apart
from the scanner so they can be tuned without touching its logic.
"""

import re


# Source documents (note: "jpg?" also admits ".jp", matching the old script)
SOURCE_FILE_RGX = re.compile(r'\.(?:psd|tiff?|png|jpg?)$', re.IGNORECASE)

# Auxiliary file categories
PDF_FILE_RGX = re.compile(r'\.pdf$', re.IGNORECASE)
TIFF_FILE_RGX = re.compile(r'\.tiff?$', re.IGNORECASE)
JPEG_FILE_RGX = re.compile(r'\.jpe?g$', re.IGNORECASE)

# System and temporary files to skip
IGNORED_FILE_RGX = re.compile(r'^(?:~|\.)')

# Trailing extension, stripped to get the document name
FILE_EXTENSION_RGX = re.compile(r'\.\w+$')


# End of file #
