"""Host-neutral test completion event."""

from dataclasses import dataclass

from testomat_reporter.models.result import ResultStatus


@dataclass(frozen=True, kw_only=True)
class TestEvent:
    """A finished test as seen by the host framework.

    ``trace`` carries a failure trace already rendered by the host; when it is
    missing the trace is rendered from ``cause``.
    """

    __test__ = False

    name: str
    suite_name: str
    status: ResultStatus
    cause: BaseException | None = None
    trace: str | None = None
    test_id: str | None = None
    title: str | None = None
