"""Ready-made mixins for Xaos objects."""

from xaos.mixins.enumerable import Enumerable

__all__ = ["Enumerable"]
