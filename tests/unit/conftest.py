"""
Shared fixtures for unit tests.
"""

from __future__ import annotations

import os
import types
import uuid

import pytest

# The Lambda adapter reads its configuration at import time, so the
# environment has to be in place before any test module imports it.
os.environ.setdefault("SERVICE_NAME", "notes-api-test")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "true")
os.environ.pop("NOTES_FILE", None)


@pytest.fixture(scope="session", autouse=True)
def _env_vars():
    """
    Ensures a deterministic environment for every test run.
    Overwrite *only* the variables needed by the handlers.
    """
    original = os.environ.copy()
    os.environ.setdefault("POWERTOOLS_LOG_LEVEL", "INFO")
    yield
    os.environ.clear()
    os.environ.update(original)


# ---------- Minimal, realistic dummy events ---------- #
@pytest.fixture
def sample_notes() -> dict:
    return {
        "1": {"id": "1", "content": "hi"},
        "abc": {"id": "abc", "userId": "user9", "content": "groceries", "pinned": True},
    }


@pytest.fixture
def make_event():
    """Builds an API Gateway HTTP API (v2) proxy event."""

    def _make(note_id: str | None = None, body: str | None = None, **overrides) -> dict:
        event = {
            "version": "2.0",
            "routeKey": "GET /notes/{id}",
            "rawPath": f"/notes/{note_id}" if note_id else "/notes",
            "requestContext": {"http": {"method": "GET"}},
            "pathParameters": {"id": note_id} if note_id is not None else None,
            "isBase64Encoded": False,
        }
        if body is not None:
            event["body"] = body
        event.update(overrides)
        return event

    return _make


@pytest.fixture
def lambda_context():
    """A *very* small stand-in for the LambdaContext object."""
    return types.SimpleNamespace(
        function_name="notes-api-test",
        function_version="$LATEST",
        memory_limit_in_mb=128,
        aws_request_id="req-" + uuid.uuid4().hex,
        invoked_function_arn="arn:aws:lambda:eu-west-1:000000000000:function:notes-api-test",
        get_remaining_time_in_millis=lambda: 30000,
    )
