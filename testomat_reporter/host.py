"""Host framework adapter interface and its Testomat.io implementation."""

import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager, AsyncExitStack

from testomat_reporter.client import ReporterClient
from testomat_reporter.config import ReporterConfig
from testomat_reporter.controller import RunController
from testomat_reporter.loop import LoopThread
from testomat_reporter.mapper import ResultMapper
from testomat_reporter.models.event import TestEvent
from testomat_reporter.models.outcome import Outcome
from testomat_reporter.models.run import TestRun
from testomat_reporter.transport import AiohttpTransport, Transport

log = logging.getLogger(__name__)

TEST_ID_LOG_PREFIX = "tid://@"
TEST_TITLE_LOG_PREFIX = "title://"

TransportFactory = Callable[[], AbstractAsyncContextManager[Transport]]


class BatchListener(ABC):
    """Callbacks a host test framework drives around one batch of tests.

    Hosts must call ``on_batch_start`` once and let it return before any test
    event, and must not send test events once ``on_batch_end`` has begun.
    """

    @abstractmethod
    def on_batch_start(self, batch_name: str) -> None:
        """Start the batch. Raising aborts the batch before any test runs."""

    def on_test_start(
        self, name: str, test_id: str | None = None, title: str | None = None
    ) -> None:
        """Observe a test about to execute."""

    @abstractmethod
    def on_test_event(self, event: TestEvent) -> Outcome:
        """Record a finished test. Must not raise."""

    @abstractmethod
    def on_batch_end(self) -> Outcome:
        """Close the batch after every test event was handled."""


class TestomatReporter(BatchListener):
    """Reports a test batch as one Testomat.io run.

    Synchronous facade over :class:`RunController`: the controller and its
    HTTP session live on a background event loop that every host thread
    submits to.
    """

    __test__ = False

    def __init__(
        self,
        config: ReporterConfig,
        transport_factory: TransportFactory = AiohttpTransport.open,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config
        self.mapper = ResultMapper(file_extension=config.file_extension)
        self.controller: RunController | None = None
        self._transport_factory = transport_factory
        self._clock = clock
        self._loop = LoopThread()
        self._resources = AsyncExitStack()

    @property
    def run(self) -> TestRun | None:
        return self.controller.run if self.controller else None

    def on_batch_start(self, batch_name: str) -> None:
        """Create the remote run.

        Raises:
            ReporterError: If the run could not be created; the reporter is
                closed and the batch must not run

        """
        self._loop.start()
        try:
            transport = self._loop.run(
                self._resources.enter_async_context(self._transport_factory())
            )
            self.controller = RunController(
                ReporterClient(config=self.config, transport=transport),
                clock=self._clock,
            )
            self._loop.run(self.controller.create_run(batch_name))
        except Exception:
            self.close()
            raise

    def on_test_start(
        self, name: str, test_id: str | None = None, title: str | None = None
    ) -> None:
        """Log the metadata markers of a test about to execute."""
        if test_id:
            log.info("%s%s", TEST_ID_LOG_PREFIX, test_id)
        if title:
            log.info("%s%s", TEST_TITLE_LOG_PREFIX, title)

    def on_test_event(self, event: TestEvent) -> Outcome:
        """Report a finished test, best effort."""
        if self.controller is None or not self._loop.running:
            return Outcome(status="skipped")
        result = self.mapper.map(event)
        return self._loop.run(self.controller.report_result(result))

    def on_batch_end(self) -> Outcome:
        """Finish the run if one was created, then release resources."""
        try:
            if self.controller is None or self.controller.state != "created":
                return Outcome(status="skipped")
            return self._loop.run(self.controller.finish_run())
        finally:
            self.close()

    def close(self) -> None:
        """Close the HTTP session and stop the event loop."""
        if self._loop.running:
            self._loop.run(self._resources.aclose())
        self._loop.stop()
