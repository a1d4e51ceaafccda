"""
Regex patterns for the matcher subsection.
File: pdf_embedder/matcher/matcher_regex_patterns.py
"""

import re

# Characters that must be backslash-escaped before embedding literal text
REGEX_RESERVED_CHARS_RGX = re.compile(r'[-\[\]{}()*+?.,\\^$|#\s]')

# Suffix accepted for raster overlays (".jpg" or ".jpeg")
JPEG_SUFFIX = r'\.jpe?g$'

# Delimiter and width for the fixed-offset overlay strategy
SWATCH_DELIMITER = '_'
SWATCH_WIDTH = 10

# End of file #
