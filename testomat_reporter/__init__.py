"""Testomat.io reporter for pytest."""

from testomat_reporter.config import ReporterConfig
from testomat_reporter.controller import RunController
from testomat_reporter.host import BatchListener, TestomatReporter
from testomat_reporter.mapper import ResultMapper

__all__ = [
    "BatchListener",
    "ReporterConfig",
    "ResultMapper",
    "RunController",
    "TestomatReporter",
]
