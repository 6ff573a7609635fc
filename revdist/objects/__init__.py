"""Commit object store backends."""

from .base import Commit, CommitObjectStore
from .cached import Cached
from .git import GitObjects
from .memory import Memory

__all__ = ["Cached", "Commit", "CommitObjectStore", "GitObjects", "Memory"]
