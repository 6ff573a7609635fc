"""revdist error types."""


class RevdistError(Exception):
    """Base class for revdist errors."""


class ResolutionError(RevdistError):
    """Raised when a reference cannot be parsed into a commit.

    The object may be missing, corrupt, or not a commit at all.

    Attributes:
        ref: The reference or commit id that failed to resolve.
    """

    def __init__(self, ref: str, reason: str | None = None) -> None:
        self.ref = ref
        self.reason = reason
        message = f"Cannot resolve commit {ref!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class StoreIOError(RevdistError):
    """Raised when reading the commit object store fails.

    A failed read is not the same as an unreachable commit: callers
    get this error instead of an empty answer. The underlying
    exception is available as ``__cause__``.
    """
