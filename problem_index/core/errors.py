"""Exception hierarchy shared by the index, fetcher and service layers."""

from __future__ import annotations


class ProblemIndexError(RuntimeError):
    """Base class for failures raised by the problem index."""


class SourceFetchError(ProblemIndexError):
    """Raised when the source archive cannot be downloaded or yields no data."""


class IndexBuildError(ProblemIndexError):
    """Raised when a canonical index cannot be constructed."""


class EmptyIndexError(IndexBuildError):
    """Raised when parsed input contains no usable companies or records."""


class RefreshInProgressError(ProblemIndexError):
    """Raised when a rebuild is requested while another one is running."""


class StaleSnapshotError(ProblemIndexError):
    """Raised when a finished build is older than the active snapshot."""

    def __init__(self, sequence: int, active_sequence: int) -> None:
        super().__init__(
            f"Snapshot #{sequence} is older than active snapshot #{active_sequence}."
        )
        self.sequence = sequence
        self.active_sequence = active_sequence
