"""GitHub webhook HTTP endpoint."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from webhook_receiver.webhook.gate import IngestionGate

router = APIRouter()


def get_gate(request: Request) -> IngestionGate:
    """Return the gate built for this application at startup."""
    return request.app.state.gate


async def github_webhook(request: Request) -> JSONResponse:
    """
    Handle incoming GitHub webhooks.

    The raw body is handed to the gate untouched so the signature is
    checked over the exact bytes GitHub signed.
    """
    gate = get_gate(request)

    body = await request.body()
    response = await gate.handle_request(request.method, request.headers, body)

    return JSONResponse(
        status_code=response.status_code,
        content=response.body,
        headers=response.headers or None,
    )


# Registered without a method list so every method reaches the gate,
# which answers 405 itself
router.add_route("/github", github_webhook, methods=None, include_in_schema=False)
