"""Client for the Testomat.io reporter API."""

import logging
from dataclasses import dataclass

from yarl import URL

from testomat_reporter import codec
from testomat_reporter.config import ReporterConfig
from testomat_reporter.errors import DecodeError, RemoteError
from testomat_reporter.models.result import TestResult
from testomat_reporter.transport import Method, Response, Transport

log = logging.getLogger(__name__)

HTTP_STATUS_OK = 200


@dataclass(frozen=True, kw_only=True)
class ReporterClient:
    """Executes the create, report and finish requests of a test run.

    Every method raises on failure; deciding which failures are fatal is left
    to the caller.
    """

    config: ReporterConfig
    transport: Transport

    def url(self, *segments: str) -> URL:
        """Build an endpoint URL carrying the API key."""
        url = URL(self.config.base_url.rstrip("/"))
        for segment in segments:
            url = url / segment
        return url.with_query(api_key=self.config.api_key.get_secret_value())

    async def create_run(self, title: str) -> str:
        """Create a test run and return its uid.

        Raises:
            TransportError: If the request could not be completed
            RemoteError: If the service does not answer 200
            DecodeError: If the response has no uid

        """
        response = await self._send(
            "create test run", "POST", self.url(), codec.encode_create_run(title)
        )
        uid = codec.decode_run_uid(response.body)
        if uid is None:
            raise DecodeError(f"Create run response has no uid: {response.body}")
        return uid

    async def report_result(self, uid: str, result: TestResult) -> None:
        """Report a single test result to the run."""
        body = codec.encode_result(result)
        log.debug("Reporting result for %s: %s", result.title, body)
        await self._send(
            f"report test result for {result.title}",
            "POST",
            self.url(uid, "testrun"),
            body,
        )

    async def finish_run(self, uid: str, duration: float) -> None:
        """Mark the run finished with its total duration in seconds."""
        await self._send(
            "finish test run", "PUT", self.url(uid), codec.encode_finish(duration)
        )

    async def _send(self, operation: str, method: Method, url: URL, body: str) -> Response:
        response = await self.transport.send(method, url, body, self.config.timeout)
        if response.status != HTTP_STATUS_OK:
            raise RemoteError(operation, response.status, response.body)
        return response
