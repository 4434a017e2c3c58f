"""Errors that terminate a webhook request at the ingestion gate."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class GateResponse:
    """Framework-independent response produced by the ingestion gate."""

    status_code: int
    body: dict[str, Any]
    headers: dict[str, str] = field(default_factory=dict)


class GateError(Exception):
    """Base class for request rejections. None of them are retried."""

    status_code = 500
    error = "Internal server error"
    message: str | None = None
    allow: str | None = None

    def to_response(self) -> GateResponse:
        body: dict[str, Any] = {"error": self.error}
        if self.message is not None:
            body["message"] = self.message
        return GateResponse(
            status_code=self.status_code,
            body=body,
            headers={"Allow": self.allow} if self.allow else {},
        )


class MethodNotAllowed(GateError):
    """The request used a method other than POST."""

    status_code = 405
    error = "Method not allowed"
    allow = "POST"


class Unauthorized(GateError):
    """The signature is missing, mismatched, or no secret is configured.

    Deliberately carries no reason.
    """

    status_code = 401
    error = "Invalid signature"


class MalformedPayload(GateError):
    """An authenticated body is not a JSON object."""

    message = "Invalid JSON payload"


class DispatchFailure(GateError):
    """The event dispatcher raised while handling a verified event."""

    message = "Failed to process webhook"
