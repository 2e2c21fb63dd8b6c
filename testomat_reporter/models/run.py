"""Models for the remote test run."""

from dataclasses import dataclass
from typing import Literal

RunState = Literal["uninitialized", "created", "aborted", "finished"]

FALLBACK_RUN_TITLE = "JUnit Test Run (stub-case)"


@dataclass(frozen=True, kw_only=True)
class TestRun:
    """Snapshot of the run owned by the controller.

    The controller swaps in a new snapshot on every transition, so the uid seen
    by a reader never changes under it.
    """

    __test__ = False

    uid: str | None = None
    title: str = FALLBACK_RUN_TITLE
    started_at: float | None = None
    state: RunState = "uninitialized"
