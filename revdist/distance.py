"""Commit distance: hop counts between a start commit and its ancestors."""

import logging
import sys
from abc import ABC, abstractmethod
from collections import deque
from typing import Callable, Literal

from .objects.base import Commit, CommitObjectStore

logger = logging.getLogger(__name__)

UNBOUNDED = sys.maxsize

VisitHook = Callable[[Commit, int], None]
"""Observer: (commit, depth) -> None, called for each commit the walk steps onto.

The first-parent walk calls it again for a commit it later reaches in
fewer hops.
"""

Strategy = Literal["first_parent", "breadth"]


def normalize_max_depth(max_depth: int) -> int:
    """Map a non-positive bound to UNBOUNDED."""
    return max_depth if max_depth > 0 else UNBOUNDED


class DistanceCalculator(ABC):
    """Reusable distance queries from one start commit.

    A calculator holds no per-query state: every ``distance_to()``
    call allocates its own frontier and visited set, so one instance
    may serve concurrent queries from several threads.
    """

    def __init__(
        self,
        start: Commit,
        store: CommitObjectStore,
        max_depth: int = 0,
        *,
        on_visit: VisitHook | None = None,
    ) -> None:
        self.start = start
        self.store = store
        self.max_depth = normalize_max_depth(max_depth)
        self.on_visit = on_visit

    @abstractmethod
    def distance_to(self, target: str) -> int | None:
        """Number of parent hops from start to target.

        Returns None if target is unreachable or further away than
        ``max_depth``. Store failures propagate as exceptions.
        """

    def _visit(self, commit: Commit, depth: int) -> None:
        if self.on_visit is not None:
            self.on_visit(commit, depth)

    def __repr__(self) -> str:
        bound = "unbounded" if self.max_depth == UNBOUNDED else self.max_depth
        return f"{type(self).__name__}(start={self.start.id!r}, max_depth={bound})"


class BoundedBreadthCalculator(DistanceCalculator):
    """Breadth-first walk over all parents.

    Returns the true shortest hop count, following merge side branches
    as readily as mainline parents.
    """

    def distance_to(self, target: str) -> int | None:
        start_id = self.start.id
        logger.debug("breadth walk from %s to %s", start_id, target)
        if target == start_id:
            self._visit(self.start, 0)
            return 0

        depths: dict[str, int] = {start_id: 0}
        queue: deque[Commit] = deque([self.start])
        while queue:
            current = queue.popleft()
            depth = depths[current.id]
            self._visit(current, depth)
            # Depths are non-decreasing along the queue
            if depth >= self.max_depth:
                break
            for p in current.parents:
                if p in depths:
                    continue
                depths[p] = depth + 1
                parent = self.store.resolve(p)
                if p == target:
                    self._visit(parent, depth + 1)
                    logger.debug("found %s at depth %d", target, depth + 1)
                    return depth + 1
                queue.append(parent)

        logger.debug("%s not found within %d commits", target, len(depths))
        return None


class FirstParentCalculator(DistanceCalculator):
    """Mainline-first walk.

    Follows first parents until the target, a root, a commit already
    reached in as few hops, or ``max_depth`` is reached, then resumes
    from the most recently deferred merge side parent. A commit reached
    again in fewer hops is expanded again, so a commit cut off at
    ``max_depth`` on the mainline is still explored from a side branch.

    A resumed side parent counts as one hop from its branch point, not
    from start, so distances found on side branches are relative to
    that branch. On mainline
    targets the result equals the mainline hop count, which may exceed
    the shortest path through a merge.
    """

    def distance_to(self, target: str) -> int | None:
        logger.debug("first-parent walk from %s to %s", self.start.id, target)
        # Fewest hops each commit was reached with
        best: dict[str, int] = {}
        pending: list[str] = []
        head = self.start
        hops = 0

        while True:
            if hops < best.get(head.id, UNBOUNDED):
                best[head.id] = hops
                self._visit(head, hops)
                if head.id == target:
                    logger.debug("found %s after %d hops", target, hops)
                    return hops
                if head.parents and hops < self.max_depth:
                    # parent[1] must come off the stack first
                    pending.extend(reversed(head.parents[1:]))
                    head = self.store.resolve(head.parents[0])
                    hops += 1
                    continue

            # Branch exhausted
            while pending and best.get(pending[-1], UNBOUNDED) <= 1:
                pending.pop()
            if not pending:
                logger.debug(
                    "%s not found after visiting %d commits", target, len(best)
                )
                return None
            head = self.store.resolve(pending.pop())
            hops = 1


CALCULATORS: dict[str, type[DistanceCalculator]] = {
    "first_parent": FirstParentCalculator,
    "breadth": BoundedBreadthCalculator,
}


def create(
    start: str,
    store: CommitObjectStore,
    max_depth: int = 0,
    *,
    strategy: Strategy = "first_parent",
    on_visit: VisitHook | None = None,
) -> DistanceCalculator:
    """Create a reusable DistanceCalculator for ``start``.

    Args:
        start: Commit id or ref to measure from. Resolved immediately;
            raises ResolutionError if it does not name a commit.
        store: Commit object store to read parents from.
        max_depth: Give up beyond this many hops. ``<= 0`` means
            unbounded.
        strategy: ``"first_parent"`` (default) walks the mainline
            first; ``"breadth"`` returns true shortest distances.
        on_visit: Optional hook called with each visited commit and
            its depth.
    """
    try:
        cls = CALCULATORS[strategy]
    except KeyError:
        raise ValueError(f"Unknown strategy: {strategy!r}") from None
    return cls(store.resolve(start), store, max_depth, on_visit=on_visit)


def distance(
    start: str,
    target: str,
    store: CommitObjectStore,
    max_depth: int = 0,
    *,
    strategy: Strategy = "first_parent",
) -> int | None:
    """One-shot ``create(start, ...).distance_to(target)``."""
    return create(start, store, max_depth, strategy=strategy).distance_to(target)
