"""Path normalization module."""

from .normalizer import PathNormalizer

__all__ = ["PathNormalizer"]
