# In src/notes_api/schemas.py

import base64
import binascii
from typing import Any, TypedDict

from pydantic import BaseModel, ConfigDict, Field

# --- Static Type Hinting (for mypy and IDEs) ---

Note = dict[str, Any]


class HttpResponse(TypedDict):
    """The proxy-integration response shape API Gateway expects back."""

    statusCode: int
    headers: dict[str, str]
    body: str


# --- Runtime Validation (using Pydantic) ---


class NoteRequest(BaseModel):
    """
    The subset of an API Gateway proxy event (REST v1 or HTTP v2) that the
    handlers read. Everything else in the event is ignored.
    """

    model_config = ConfigDict(populate_by_name=True)

    path_parameters: dict[str, str] | None = Field(None, alias="pathParameters")
    body: str | None = None
    is_base64_encoded: bool = Field(False, alias="isBase64Encoded")

    @property
    def note_id(self) -> str | None:
        return (self.path_parameters or {}).get("id") or None

    def decoded_body(self) -> str | None:
        """Returns the body as text, undoing API Gateway's base64 wrapping."""
        if self.body is None or not self.is_base64_encoded:
            return self.body
        try:
            return base64.b64decode(self.body, validate=True).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as e:
            raise ValueError(f"body is not valid base64 UTF-8 text: {e}") from e


class NoteUpdate(BaseModel):
    content: str
