"""API endpoints package."""

from . import health
from . import proposal

__all__ = ["health", "proposal"]
