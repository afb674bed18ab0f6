"""Folio - static site generator for Markdown blog posts."""

__version__ = "0.1.0"
