"""Models for test execution results."""

from dataclasses import dataclass
from typing import Literal

ResultStatus = Literal["passed", "failed", "skipped"]


@dataclass(frozen=True, kw_only=True)
class TestResult:
    """Reportable outcome of a single test.

    One record per test, submitted to the run it belongs to by uid.
    """

    __test__ = False

    title: str
    test_id: str | None = None
    suite_title: str
    file: str
    status: ResultStatus
    message: str | None = None
    stack: str | None = None
