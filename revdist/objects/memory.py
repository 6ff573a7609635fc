"""In-memory commit object store."""

import threading
from typing import Iterable

from ..errors import ResolutionError
from .base import Commit, CommitObjectStore


class Memory(CommitObjectStore):
    """A memory-backed commit graph.

    Commits are added explicitly with ``add()``; named refs (branches,
    tags, ``HEAD``) map to commit ids via ``set_ref()``.
    """

    def __init__(self) -> None:
        self.commits: dict[str, Commit] = {}
        self.refs: dict[str, str] = {}
        self._lock = threading.Lock()

    def add(self, commit_id: str, parents: Iterable[str] = ()) -> Commit:
        """Record a commit. Re-adding an identical commit is a no-op."""
        commit = Commit(commit_id, tuple(parents))
        with self._lock:
            existing = self.commits.get(commit_id)
            if existing is not None and existing != commit:
                raise ValueError(
                    f"Commit {commit_id!r} already exists with parents "
                    f"{existing.parents!r}"
                )
            self.commits[commit_id] = commit
        return commit

    def set_ref(self, name: str, commit_id: str) -> None:
        if commit_id not in self.commits:
            raise ValueError(f"Unknown commit: {commit_id!r}")
        with self._lock:
            self.refs[name] = commit_id

    def resolve(self, ref: str) -> Commit:
        commit = self.commits.get(ref)
        if commit is None:
            target = self.refs.get(ref)
            if target is not None:
                commit = self.commits.get(target)
        if commit is None:
            raise ResolutionError(ref, "no such commit")
        return commit

    def __contains__(self, commit_id: str) -> bool:
        return commit_id in self.commits

    def __len__(self) -> int:
        return len(self.commits)
