"""Commit object store over a git repository, read with dulwich."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from ..errors import ResolutionError, StoreIOError
from .base import Commit, CommitObjectStore

if TYPE_CHECKING:
    from dulwich.repo import BaseRepo

# Short names are tried against these prefixes, in order
REF_PREFIXES = ("", "refs/tags/", "refs/heads/", "refs/remotes/")

# SHA-1 or SHA-256 hex object id
HEX_ID = re.compile(r"[0-9a-f]{40}(?:[0-9a-f]{24})?")


class GitObjects(CommitObjectStore):
    """Commit store backed by a dulwich repository.

    ``resolve()`` accepts full hex commit ids and ref names (``HEAD``,
    ``refs/tags/v1.0``, or short names such as ``v1.0`` or ``main``).
    Annotated tags are peeled to the commit they point at.
    """

    def __init__(self, repo: BaseRepo) -> None:
        self.repo = repo

    @classmethod
    def open(cls, path: str) -> GitObjects:
        """Open the git repository at ``path``."""
        from dulwich.errors import NotGitRepository
        from dulwich.repo import Repo

        try:
            return cls(Repo(path))
        except NotGitRepository as e:
            raise ResolutionError(path, "not a git repository") from e
        except OSError as e:
            raise StoreIOError(f"Cannot open repository at {path!r}") from e

    def resolve(self, ref: str) -> Commit:
        from dulwich.errors import ChecksumMismatch, ObjectFormatException
        from dulwich.objects import Commit as GitCommit
        from dulwich.objects import Tag

        try:
            obj = self._lookup(ref)
            while isinstance(obj, Tag):
                obj = self.repo[obj.object[1]]
        except KeyError as e:
            raise ResolutionError(ref, "no such object (dangling tag)") from e
        except (ChecksumMismatch, ObjectFormatException) as e:
            raise ResolutionError(ref, f"corrupt object ({e})") from e
        except OSError as e:
            raise StoreIOError(f"Failed reading {ref!r} from object store") from e

        if not isinstance(obj, GitCommit):
            raise ResolutionError(ref, f"not a commit ({obj.type_name.decode()})")
        return Commit(
            obj.id.decode("ascii"),
            tuple(p.decode("ascii") for p in obj.parents),
        )

    def __contains__(self, commit_id: str) -> bool:
        from dulwich.objects import Commit as GitCommit

        if not HEX_ID.fullmatch(commit_id):
            return False
        try:
            obj = self.repo.object_store[commit_id.encode("ascii")]
        except KeyError:
            return False
        except OSError as e:
            raise StoreIOError(
                f"Failed reading {commit_id!r} from object store"
            ) from e
        return isinstance(obj, GitCommit)

    def close(self) -> None:
        self.repo.close()

    def _lookup(self, ref: str):
        name = ref.encode("utf-8")
        for prefix in REF_PREFIXES:
            try:
                return self.repo[prefix.encode("utf-8") + name]
            except (KeyError, ValueError):
                continue
        raise ResolutionError(ref, "no such object or ref")
