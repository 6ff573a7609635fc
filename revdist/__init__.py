"""revdist: commit distances over a git history graph."""

from .distance import (
    UNBOUNDED,
    BoundedBreadthCalculator,
    DistanceCalculator,
    FirstParentCalculator,
    VisitHook,
    create,
    distance,
    normalize_max_depth,
)
from .errors import ResolutionError, RevdistError, StoreIOError
from .objects import Cached, Commit, CommitObjectStore, GitObjects, Memory
from .store import object_store

__all__ = [
    "BoundedBreadthCalculator",
    "Cached",
    "Commit",
    "CommitObjectStore",
    "DistanceCalculator",
    "FirstParentCalculator",
    "GitObjects",
    "Memory",
    "ResolutionError",
    "RevdistError",
    "StoreIOError",
    "UNBOUNDED",
    "VisitHook",
    "create",
    "distance",
    "normalize_max_depth",
    "object_store",
]
