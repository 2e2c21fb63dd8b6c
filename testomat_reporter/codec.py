"""Encoding of request bodies and decoding of responses."""

import json

from pydantic_core import PydanticSerializationError

from testomat_reporter.errors import DecodeError, EncodeError
from testomat_reporter.models.base import Model
from testomat_reporter.models.result import TestResult
from testomat_reporter.models.wire import (
    CreateRunRequest,
    CreateRunResponse,
    FinishRunRequest,
    ResultPayload,
)


def dump(body: Model) -> str:
    """Serialize a request body with its wire aliases.

    Raises:
        EncodeError: If the body holds text that is not valid UTF-8, such as
            lone surrogates from ``surrogateescape`` decoding

    """
    try:
        return body.model_dump_json(by_alias=True)
    except (PydanticSerializationError, UnicodeError) as exc:
        raise EncodeError(f"Cannot encode {type(body).__name__}: {exc}") from exc


def encode_create_run(title: str) -> str:
    """Encode the create run body."""
    return dump(CreateRunRequest(title=title))


def encode_result(result: TestResult) -> str:
    """Encode a test result, keeping absent values as null."""
    return dump(
        ResultPayload(
            title=result.title,
            test_id=result.test_id,
            suite_title=result.suite_title,
            file=result.file,
            status=result.status,
            message=result.message,
            stack=result.stack,
        )
    )


def encode_finish(duration: float) -> str:
    """Encode the finish run body."""
    return dump(FinishRunRequest(duration=duration))


def decode_run_uid(text: str) -> str | None:
    """Extract the run uid from a create run response.

    Returns None when the document is valid JSON but carries no usable uid.

    Raises:
        DecodeError: If the body is not valid JSON

    """
    try:
        data = json.loads(text)
    except ValueError as exc:
        raise DecodeError(f"Malformed create run response: {exc}") from exc

    if not isinstance(data, dict):
        return None
    return CreateRunResponse.model_validate(data).uid
