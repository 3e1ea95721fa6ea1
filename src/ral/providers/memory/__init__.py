"""In-process provider keeping its records in memory."""

from .provider import MemoryProvider

__all__ = ["MemoryProvider"]
