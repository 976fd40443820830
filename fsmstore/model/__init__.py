"""
Minimal record/model framework used as the host of ModelPersistence.
"""

from .backend import MemoryBackend, StorageBackend
from .record import Record

__all__ = ["MemoryBackend", "Record", "StorageBackend"]
