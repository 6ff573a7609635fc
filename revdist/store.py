"""Commit object store factory."""

from __future__ import annotations

from typing import Literal

from .objects.base import CommitObjectStore


def object_store(
    storage: Literal["memory", "git"] = "memory",
    *,
    path: str | None = None,
    cached: bool = False,
) -> CommitObjectStore:
    """Create a commit object store.

    Args:
        storage: ``"memory"`` (default) for an empty ``Memory`` graph
            populated by the caller, or ``"git"`` to read an existing
            repository.
        path: Required when ``storage="git"``. Path to the repository.
        cached: Wrap the store in a ``Cached`` read-through cache.

    Returns:
        A ``CommitObjectStore``.
    """
    if storage == "memory":
        from .objects.memory import Memory

        backend: CommitObjectStore = Memory()
    elif storage == "git":
        if path is None:
            raise ValueError("path is required when storage='git'")
        from .objects.git import GitObjects

        backend = GitObjects.open(path)
    else:
        raise ValueError(f"Unknown storage: {storage!r}")

    if cached:
        from .objects.cached import Cached

        return Cached(backend)
    return backend
