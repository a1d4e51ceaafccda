"""Embed PDF Pages - place PDF pages and overlay images into matching source documents."""

from ._version import __version__
from .cli import main

__all__ = ['main', '__version__']
