# src/notes_api/core.py

"""
Core request handling for the Notes API.

Each function maps a parsed request plus a note store to a proxy-integration
response. They hold no state, never write to the store, and know nothing about
Lambda, so they can be exercised directly with any `NoteStore`.

A missing note is not an error: it is answered with a 404 and the fixed body
`{"error":true}`, whether the id is unknown, empty, or absent altogether.
"""

import json
import logging
from typing import Any

import pydantic

from .exceptions import InvalidRequestBodyError, NoteSerializationError
from .schemas import HttpResponse, NoteRequest, NoteUpdate
from .store import NoteStore, find_note

logger = logging.getLogger(__name__)

ERROR_BODY = '{"error":true}'
JSON_HEADERS = {"Content-Type": "application/json"}


# --- Helpers ---
def build_response(status_code: int, body: str) -> HttpResponse:
    return {"statusCode": status_code, "headers": dict(JSON_HEADERS), "body": body}


def error_response(status_code: int) -> HttpResponse:
    return build_response(status_code, ERROR_BODY)


def serialize(payload: Any, note_id: str | None = None) -> str:
    """
    Encodes *payload* as compact JSON, keeping key order.
    Raises NoteSerializationError for values JSON cannot represent.
    """
    try:
        return json.dumps(
            payload, separators=(",", ":"), ensure_ascii=False, allow_nan=False
        )
    except (TypeError, ValueError) as e:
        raise NoteSerializationError(note_id=note_id, reason=str(e)) from e


def _ok_response(payload: Any, note_id: str | None, strict: bool) -> HttpResponse:
    try:
        return build_response(200, serialize(payload, note_id))
    except NoteSerializationError as e:
        if strict:
            raise
        # Compatibility: an unencodable note still answers 200, with no body.
        logger.warning(
            "Serialization failed; returning an empty body.",
            extra={"error": e.to_dict()},
        )
        return build_response(200, "")


def parse_note_update(request: NoteRequest) -> NoteUpdate:
    """Validates the update payload carried in the request body."""
    try:
        raw = request.decoded_body()
    except ValueError as e:
        raise InvalidRequestBodyError(str(e)) from e

    if not raw:
        raise InvalidRequestBodyError("body is missing")

    try:
        return NoteUpdate.model_validate_json(raw)
    except pydantic.ValidationError as e:
        raise InvalidRequestBodyError(
            "body must be a JSON object with a string 'content'",
            context={
                "validation_errors": e.errors(include_url=False, include_input=False)
            },
        ) from e


# --- Handlers ---
def fetch_note(
    request: NoteRequest, store: NoteStore, *, strict: bool = False
) -> HttpResponse:
    """Answers with the note named by the `id` path parameter, or a 404."""
    note_id = request.note_id
    note = find_note(store.snapshot(), note_id)

    if note is None:
        logger.info("Note not found.", extra={"note_id": note_id})
        return error_response(404)

    logger.debug("Note found.", extra={"note_id": note_id})
    return _ok_response(note, note_id, strict)


def list_notes(store: NoteStore, *, strict: bool = False) -> HttpResponse:
    """Answers with every note in the current snapshot, keyed by id."""
    snapshot = store.snapshot()
    logger.debug("Listing notes.", extra={"count": len(snapshot)})
    return _ok_response(snapshot, None, strict)


def update_note(
    request: NoteRequest, store: NoteStore, *, strict: bool = False
) -> HttpResponse:
    """
    Answers with the note named by `id` after replacing its content with the
    one from the request body. The store keeps its original note; only the
    response reflects the change.

    Unknown notes get a 404 before the body is looked at. A body that is not
    a JSON object with a string `content` gets a 400.
    """
    note_id = request.note_id
    note = find_note(store.snapshot(), note_id)

    if note is None:
        logger.info("Note not found for update.", extra={"note_id": note_id})
        return error_response(404)

    try:
        update = parse_note_update(request)
    except InvalidRequestBodyError as e:
        logger.warning("Rejected update request.", extra={"error": e.to_dict()})
        return error_response(400)

    updated = {**note, "content": update.content}
    return _ok_response(updated, note_id, strict)
