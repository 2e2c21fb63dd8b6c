"""Pydantic models for Testomat.io reporter API bodies."""

from typing import Any, Literal

from pydantic import ConfigDict, field_validator

from testomat_reporter.models.base import CamelModel, Model
from testomat_reporter.models.result import ResultStatus


class CreateRunRequest(Model):
    """Body of the create run request."""

    title: str


class ResultPayload(CamelModel):
    """Body of the report result request."""

    title: str
    test_id: str | None
    suite_title: str
    file: str
    status: ResultStatus
    message: str | None
    stack: str | None


class FinishRunRequest(Model):
    """Body of the finish run request."""

    status_event: Literal["finish"] = "finish"
    duration: float


class CreateRunResponse(Model):
    """Response from the create run API."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    uid: str | None = None

    @field_validator("uid", mode="before")
    @classmethod
    def uid_as_text(cls, value: Any) -> str | None:
        """Accept scalar uids as text, treat containers as missing."""
        if isinstance(value, str) or value is None:
            return value
        if isinstance(value, bool):
            return str(value).lower()
        if isinstance(value, int | float):
            return str(value)
        return None
