"""Parallel batch generation of numbered plumage images."""

__version__ = "0.1.0"
