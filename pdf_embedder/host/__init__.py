"""
Host application adapters.
File: pdf_embedder/host/__init__.py
"""

from pdf_embedder.host.base import HostApplication, load_host


DEFAULT_HOST = 'pdf_embedder.host.preview:PreviewHost'


__all__ = [
    'HostApplication',
    'load_host',
    'DEFAULT_HOST',
]

# End of file #
