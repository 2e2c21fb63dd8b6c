"""Payload helpers for reporter API responses in tests."""

from typing import Any


def create_run_response(*, uid: str = "abc123") -> dict[str, Any]:
    """Create a create run response payload.

    Mirrors the fields the reporter API returns for a new run.
    """
    return {
        "uid": uid,
        "url": f"https://app.testomat.io/projects/demo/runs/{uid}",
        "public_url": None,
        "status": "running",
        "title": "JUnit Test Run (stub-case)",
    }


def error_response(message: str = "Unauthorized") -> dict[str, Any]:
    """Create an error payload as returned with non-200 statuses."""
    return {"message": message}
