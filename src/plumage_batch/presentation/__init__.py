"""Presentation layer package."""

from plumage_batch.presentation.cli import main, build_parser

__all__ = ["main", "build_parser"]
