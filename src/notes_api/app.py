"""
The Lambda Adapter for the Notes API service.

This module holds the AWS Lambda entry points. It is responsible for:
1.  Initializing and configuring AWS Lambda Powertools (Logger, Tracer, Metrics).
2.  Parsing the API Gateway proxy event into a `NoteRequest`.
3.  Delegating to the request handlers in `core` with the configured note store.
4.  Turning service errors that escape the core into a 500 response.

Handler paths:
    notes_api.app.get_handler     GET /notes/{id}
    notes_api.app.list_handler    GET /notes
    notes_api.app.update_handler  PUT /notes/{id}
"""

from typing import Callable

import pydantic
from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from .config import get_config
from .core import error_response, fetch_note, list_notes, update_note
from .exceptions import (
    NoteSerializationError,
    NoteStoreError,
    NotesApiError,
    get_error_context,
)
from .schemas import HttpResponse, NoteRequest
from .store import NoteStore, build_note_store

# --- Global & Reusable Components ---
CONFIG = get_config()

logger = Logger(service=CONFIG.service_name, level=CONFIG.log_level)
tracer = Tracer(service=CONFIG.service_name)
metrics = Metrics(namespace=CONFIG.metrics_namespace, service=CONFIG.service_name)

note_store: NoteStore = build_note_store(CONFIG)

_OUTCOME_METRICS = {
    200: "SuccessfulRequests",
    400: "InvalidRequestBody",
    404: "NoteNotFound",
    500: "FailedRequests",
}


def _parse_request(event: dict) -> NoteRequest:
    """
    Reads the fields the handlers need from the event. An event that does not
    fit the model is handled as one without path parameters, i.e. a 404.
    """
    try:
        return NoteRequest.model_validate(event)
    except pydantic.ValidationError as e:
        logger.warning(
            "Event failed validation; treating it as a request without parameters.",
            extra={
                "validation_errors": e.errors(include_url=False, include_input=False)
            },
        )
        return NoteRequest()


def _guarded(action: Callable[[], HttpResponse]) -> HttpResponse:
    """Runs *action*, answering 500 for any service error it raises."""
    try:
        return action()
    except NoteSerializationError as e:
        metrics.add_metric(name="SerializationErrors", unit=MetricUnit.Count, value=1)
        logger.error(
            f"Failed to serialize response: {e}", extra={"error": get_error_context(e)}
        )
        return error_response(500)
    except NoteStoreError as e:
        metrics.add_metric(name="NoteStoreErrors", unit=MetricUnit.Count, value=1)
        logger.error(
            f"Note store failed: {e}", extra={"error": get_error_context(e)}
        )
        return error_response(500)
    except NotesApiError as e:
        logger.error(
            f"Application error while handling request: {e}",
            extra={"error": get_error_context(e)},
        )
        return error_response(500)
    except Exception as e:
        metrics.add_metric(name="UnexpectedErrors", unit=MetricUnit.Count, value=1)
        logger.exception(
            "Unexpected error while handling request.",
            extra={"error_type": type(e).__name__},
        )
        return error_response(500)


def _record_outcome(response: HttpResponse) -> None:
    status_code = response["statusCode"]
    metric_name = _OUTCOME_METRICS.get(status_code)
    if metric_name:
        metrics.add_metric(name=metric_name, unit=MetricUnit.Count, value=1)
    # An empty 200 body means a serialization failure was masked.
    if status_code == 200 and not response["body"]:
        metrics.add_metric(name="SerializationErrors", unit=MetricUnit.Count, value=1)
    logger.info("Request handled.", extra={"status_code": status_code})


def _start(event: dict) -> NoteRequest:
    metrics.add_dimension(name="environment", value=CONFIG.environment)
    request = _parse_request(event)
    if request.note_id:
        logger.append_keys(note_id=request.note_id)
        tracer.put_annotation(key="NoteId", value=request.note_id)
    return request


@logger.inject_lambda_context(clear_state=True)
@tracer.capture_lambda_handler
@metrics.log_metrics(capture_cold_start_metric=True)
def get_handler(event: dict, context: LambdaContext) -> HttpResponse:
    """Returns a single note, or 404 with `{"error":true}`."""
    request = _start(event)
    response = _guarded(
        lambda: fetch_note(request, note_store, strict=CONFIG.strict_serialization)
    )
    _record_outcome(response)
    return response


@logger.inject_lambda_context(clear_state=True)
@tracer.capture_lambda_handler
@metrics.log_metrics(capture_cold_start_metric=True)
def list_handler(event: dict, context: LambdaContext) -> HttpResponse:
    """Returns every note keyed by id."""
    _start(event)
    response = _guarded(
        lambda: list_notes(note_store, strict=CONFIG.strict_serialization)
    )
    _record_outcome(response)
    return response


@logger.inject_lambda_context(clear_state=True)
@tracer.capture_lambda_handler
@metrics.log_metrics(capture_cold_start_metric=True)
def update_handler(event: dict, context: LambdaContext) -> HttpResponse:
    """Returns the note with its content replaced by the request body's."""
    request = _start(event)
    response = _guarded(
        lambda: update_note(request, note_store, strict=CONFIG.strict_serialization)
    )
    _record_outcome(response)
    return response
