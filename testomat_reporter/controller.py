"""Lifecycle of a single Testomat.io test run."""

import logging
import time
from collections.abc import Callable
from dataclasses import replace

from testomat_reporter.client import ReporterClient
from testomat_reporter.errors import ConfigurationError, ReporterError, RunStateError
from testomat_reporter.models.outcome import Outcome
from testomat_reporter.models.result import TestResult
from testomat_reporter.models.run import FALLBACK_RUN_TITLE, RunState, TestRun

log = logging.getLogger(__name__)


class RunController:
    """Opens a run, reports results into it and finishes it.

    State moves ``uninitialized -> created -> finished``, or
    ``uninitialized -> aborted`` when creation fails. The uid is written once,
    before any report can be issued, so ``report_result`` may be awaited from
    many callers at once without locking.
    """

    def __init__(
        self,
        client: ReporterClient,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.client = client
        self.clock = clock
        self._run = TestRun()

    @property
    def run(self) -> TestRun:
        """Current run snapshot."""
        return self._run

    @property
    def state(self) -> RunState:
        return self._run.state

    async def create_run(self, title: str | None = None) -> TestRun:
        """Create the remote run.

        Args:
            title: Run title; empty or missing titles use the fallback title

        Returns:
            The created run snapshot

        Raises:
            ConfigurationError: If no API key is configured. State is unchanged.
            RunStateError: If a run was already created or aborted
            ReporterError: If the service call failed. State becomes aborted.

        """
        if not self.client.config.has_api_key:
            raise ConfigurationError("Environment variable TESTOMATIO is not set")
        if self._run.state != "uninitialized":
            raise RunStateError(f"Cannot create a run in state {self._run.state}")

        title = title or FALLBACK_RUN_TITLE
        started_at = self.clock()
        try:
            uid = await self.client.create_run(title)
        except ReporterError as exc:
            self._run = replace(self._run, title=title, state="aborted")
            log.error("Cannot start Testomat test run: %s", exc)
            raise

        self._run = TestRun(uid=uid, title=title, started_at=started_at, state="created")
        log.info("Test run started, UID: %s", uid)
        return self._run

    async def report_result(self, result: TestResult) -> Outcome:
        """Report one result; never raises.

        Returns a skipped outcome when no run is open and a failed outcome when
        the request did not succeed.
        """
        run = self._run
        if run.state != "created" or run.uid is None:
            log.debug("Skipping result for %s: run is %s", result.title, run.state)
            return Outcome(status="skipped")

        try:
            await self.client.report_result(run.uid, result)
        except ReporterError as exc:
            log.warning("Failed to report test result for %s: %s", result.title, exc)
            return Outcome(status="failed", error=exc)

        log.debug("Test result reported: %s (%s)", result.title, result.status)
        return Outcome(status="delivered")

    async def finish_run(self, duration: float | None = None) -> Outcome:
        """Finish the run with its total duration.

        Args:
            duration: Seconds to report; defaults to the time since creation

        Returns:
            Delivered outcome when the run is now finished, failed otherwise

        """
        run = self._run
        if run.state != "created" or run.uid is None:
            error = RunStateError(f"Cannot finish a run in state {run.state}")
            log.warning("Failed to finish test run: %s", error)
            return Outcome(status="failed", error=error)

        if duration is None:
            duration = self.elapsed()

        try:
            await self.client.finish_run(run.uid, duration)
        except ReporterError as exc:
            log.warning("Failed to finish test run %s: %s", run.uid, exc)
            return Outcome(status="failed", error=exc)

        self._run = replace(run, state="finished")
        log.info("Test run finished successfully. Total duration (s): %s", duration)
        return Outcome(status="delivered")

    def elapsed(self) -> float:
        """Seconds since the run was created, at millisecond precision."""
        if self._run.started_at is None:
            return 0.0
        return round(self.clock() - self._run.started_at, 3)
