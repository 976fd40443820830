"""
Persistence layers between the engine and a storage framework.

- BasePersistence: storage neutral reads and writes of state
- ORMPersistence: persisted writes with rollback and whiny persistence
- ModelPersistence: adapter for Record hosts
"""

from .base import BasePersistence, is_blank
from .model import ModelPersistence
from .orm import ORMPersistence

__all__ = ["BasePersistence", "ModelPersistence", "ORMPersistence", "is_blank"]
