# API routes package

from . import verify

__all__ = ["verify"]
