"""Persistence for design weeks, document versions and the operation log."""

from .base import DesignWeekStore
from .memory_store import InMemoryStore
from .json_store import JsonFileStore

__all__ = [
    "DesignWeekStore",
    "InMemoryStore",
    "JsonFileStore",
]
