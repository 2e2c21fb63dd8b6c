"""pytest plugin reporting test outcomes to Testomat.io.

Enabled with ``--testomat``. Tests can carry metadata through markers::

    @pytest.mark.testomat_id("T001")
    @pytest.mark.testomat_title("Check addition works")
    def test_two_plus_two(): ...
"""

import os
from collections.abc import Generator

import pytest

from testomat_reporter.config import ReporterConfig
from testomat_reporter.errors import ConfigurationError, ReporterError
from testomat_reporter.host import BatchListener, TestomatReporter
from testomat_reporter.models.event import TestEvent
from testomat_reporter.models.result import ResultStatus

ID_MARKER = "testomat_id"
TITLE_MARKER = "testomat_title"
PLUGIN_NAME = "testomat-reporter"


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("testomat", "Testomat.io reporting")
    group.addoption(
        "--testomat",
        action="store_true",
        default=False,
        help="Report test results to Testomat.io (API key from TESTOMATIO)",
    )
    group.addoption(
        "--testomat-title",
        default=None,
        help="Title of the Testomat.io run (default: rootdir name)",
    )
    group.addoption(
        "--testomat-file-extension",
        default=".py",
        help="Extension appended to the suite name to form the reported file",
    )


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers", f"{ID_MARKER}(id): external Testomat.io test case id"
    )
    config.addinivalue_line(
        "markers", f"{TITLE_MARKER}(title): title reported to Testomat.io"
    )

    if not config.getoption("testomat"):
        return

    reporter_config = ReporterConfig.from_env(
        os.environ,
        file_extension=config.getoption("testomat_file_extension"),
    )
    config.pluginmanager.register(
        TestomatPlugin(TestomatReporter(reporter_config)), PLUGIN_NAME
    )


def marker_value(item: pytest.Item, name: str) -> str | None:
    """Return the first argument of the closest marker called ``name``."""
    marker = item.get_closest_marker(name)
    if marker is None or not marker.args:
        return None
    return str(marker.args[0])


def suite_name(item: pytest.Item) -> str:
    """Name of the class holding the test, else the module basename."""
    cls = getattr(item, "cls", None)
    if cls is not None:
        return cls.__name__
    module = getattr(item, "module", None)
    if module is not None:
        return module.__name__.rpartition(".")[2]
    return item.path.stem


def report_status(report: pytest.TestReport) -> ResultStatus | None:
    """Status to report for a phase, or None when the phase is not reported.

    The call phase is always reported; setup only when it kept the test from
    running. xfail outcomes arrive as skipped.
    """
    if report.when == "call" or (report.when == "setup" and not report.passed):
        return report.outcome
    return None


class TestomatPlugin:
    """Translates pytest hooks into BatchListener callbacks."""

    __test__ = False

    def __init__(self, listener: BatchListener) -> None:
        self.listener = listener

    def pytest_sessionstart(self, session: pytest.Session) -> None:
        config = session.config
        title = config.getoption("testomat_title") or config.rootpath.name
        try:
            self.listener.on_batch_start(title)
        except ConfigurationError as exc:
            pytest.exit(str(exc), returncode=pytest.ExitCode.USAGE_ERROR)
        except ReporterError as exc:
            pytest.exit(
                f"Cannot start Testomat test run: {exc}",
                returncode=pytest.ExitCode.INTERNAL_ERROR,
            )

    def pytest_runtest_setup(self, item: pytest.Item) -> None:
        self.listener.on_test_start(
            item.name,
            test_id=marker_value(item, ID_MARKER),
            title=marker_value(item, TITLE_MARKER),
        )

    @pytest.hookimpl(wrapper=True)
    def pytest_runtest_makereport(
        self, item: pytest.Item, call: pytest.CallInfo[None]
    ) -> Generator[None, pytest.TestReport, pytest.TestReport]:
        report = yield
        status = report_status(report)
        if status is not None:
            cause = call.excinfo.value if call.excinfo is not None else None
            if report.when == "setup" and report.skipped:
                # skip markers disable the test; nothing raised in it
                cause = None
            trace = report.longreprtext if report.failed else None
            self.listener.on_test_event(
                TestEvent(
                    name=item.name,
                    suite_name=suite_name(item),
                    status=status,
                    cause=cause,
                    trace=trace or None,
                    test_id=marker_value(item, ID_MARKER),
                    title=marker_value(item, TITLE_MARKER),
                )
            )
        return report

    def pytest_sessionfinish(self, session: pytest.Session) -> None:
        outcome = self.listener.on_batch_end()
        if outcome.status == "failed":
            terminal = session.config.pluginmanager.get_plugin("terminalreporter")
            if terminal is not None:
                terminal.write_line(
                    f"Testomat test run left open: {outcome.error}", yellow=True
                )
