"""Converter package."""

from plumage_batch.infrastructure.converters.imagemagick import ImageMagickConverter

__all__ = ["ImageMagickConverter"]
