"""Abstract commit object store interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class Commit:
    """One node of the commit graph.

    Parent order matters: index 0 is the mainline parent.
    """

    id: str
    parents: tuple[str, ...] = ()

    @property
    def is_root(self) -> bool:
        return not self.parents

    @property
    def is_merge(self) -> bool:
        return len(self.parents) >= 2

    @property
    def mainline(self) -> str | None:
        return self.parents[0] if self.parents else None


class CommitObjectStore(ABC):
    """Read-only access to parsed commits.

    Implementations must be safe for concurrent reads.
    """

    @abstractmethod
    def resolve(self, ref: str) -> Commit:
        """Parse a reference or commit id into a Commit.

        Raises ResolutionError if the object is missing, corrupt or
        not a commit, and StoreIOError if the backing storage fails.
        """

    @abstractmethod
    def __contains__(self, commit_id: str) -> bool:
        """Check if the store holds a commit with this id."""
