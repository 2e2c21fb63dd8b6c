"""Captured outcome of a best-effort reporter call."""

from dataclasses import dataclass
from typing import Literal

from testomat_reporter.errors import ReporterError


@dataclass(frozen=True, kw_only=True)
class Outcome:
    """Result of a call whose failure must not propagate to the test batch."""

    status: Literal["delivered", "failed", "skipped"]
    error: ReporterError | None = None

    @property
    def ok(self) -> bool:
        """Whether the request reached the service and was accepted."""
        return self.status == "delivered"
