"""Mapping of finished tests to reportable results."""

import traceback
from dataclasses import dataclass

from testomat_reporter.models.event import TestEvent
from testomat_reporter.models.result import TestResult

STATUS_MESSAGE = "Test finished with status: {status}"


@dataclass(frozen=True, kw_only=True)
class ResultMapper:
    """Derives a TestResult from a test completion event.

    The source file is not known to every host, so it is derived from the
    suite name and ``file_extension``.
    """

    file_extension: str = ".py"

    def map(self, event: TestEvent) -> TestResult:
        """Build the result record for ``event``."""
        message = STATUS_MESSAGE.format(status=event.status)
        stack = None
        if event.cause is not None:
            message = str(event.cause) or type(event.cause).__name__
            stack = event.trace or render_trace(event.cause)

        return TestResult(
            title=event.title or event.name,
            test_id=event.test_id,
            suite_title=event.suite_name,
            file=f"{event.suite_name}{self.file_extension}",
            status=event.status,
            message=message,
            stack=stack if event.status != "passed" else None,
        )


def render_trace(cause: BaseException) -> str:
    """Render the full traceback of an exception."""
    return "".join(traceback.format_exception(cause))
