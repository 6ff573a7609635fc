"""Read-through cache wrapper for commit stores."""

import threading

from .base import Commit, CommitObjectStore


class Cached(CommitObjectStore):
    """Memoizes ``resolve()`` results of the wrapped store.

    Useful when many distance queries walk the same history, since
    commits are immutable once written. Only commit ids are cached,
    never ref names (refs move) or failed lookups.
    The cache lives in process memory only.
    """

    def __init__(self, store: CommitObjectStore) -> None:
        self.store = store
        self._commits: dict[str, Commit] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def resolve(self, ref: str) -> Commit:
        with self._lock:
            commit = self._commits.get(ref)
            if commit is not None:
                self.hits += 1
                return commit
            self.misses += 1
        commit = self.store.resolve(ref)
        with self._lock:
            self._commits[commit.id] = commit
        return commit

    def __contains__(self, commit_id: str) -> bool:
        with self._lock:
            if commit_id in self._commits:
                return True
        return commit_id in self.store

    def clear(self) -> None:
        with self._lock:
            self._commits.clear()
            self.hits = 0
            self.misses = 0
