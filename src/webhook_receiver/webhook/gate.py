"""Ingestion gate for GitHub webhook deliveries."""

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

from webhook_receiver.webhook.errors import (
    DispatchFailure,
    GateError,
    GateResponse,
    MalformedPayload,
    MethodNotAllowed,
    Unauthorized,
)
from webhook_receiver.webhook.validator import verify_signature

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "x-hub-signature-256"
EVENT_HEADER = "x-github-event"
DELIVERY_HEADER = "x-github-delivery"


class Dispatcher(Protocol):
    """Anything that can consume a verified event envelope."""

    async def dispatch(self, event: dict[str, Any], event_type: str) -> Any: ...


class IngestionGate:
    """
    Decide whether a delivery is trusted and well-formed, then dispatch it.

    The secret is fixed at construction. Each call to handle_request is
    independent of every other; the only await is the dispatch itself.
    """

    def __init__(self, secret: str, dispatcher: Dispatcher):
        self._secret = secret
        self._dispatcher = dispatcher

    @property
    def dispatcher(self) -> Dispatcher:
        return self._dispatcher

    async def handle_request(
        self,
        method: str,
        headers: Mapping[str, str],
        raw_body: bytes,
    ) -> GateResponse:
        """
        Run a single delivery through the gate.

        Args:
            method: HTTP method of the request
            headers: Request headers; names are matched case-insensitively
            raw_body: The body exactly as received

        Returns:
            The response to send. Rejections are returned, never raised.
        """
        try:
            return await self._process(method, headers, raw_body)
        except GateError as e:
            return e.to_response()

    async def _process(
        self,
        method: str,
        headers: Mapping[str, str],
        raw_body: bytes,
    ) -> GateResponse:
        if method.upper() != "POST":
            logger.info(f"Rejecting {method!r} request")
            raise MethodNotAllowed()

        lowered = {name.lower(): value for name, value in headers.items()}
        signature = lowered.get(SIGNATURE_HEADER, "")
        event_type = lowered.get(EVENT_HEADER, "")
        delivery_id = lowered.get(DELIVERY_HEADER, "")

        logger.info(f"Received webhook: {event_type!r} ({delivery_id!r})")

        if not verify_signature(raw_body, signature, self._secret):
            logger.error(f"Invalid webhook signature for delivery {delivery_id!r}")
            raise Unauthorized()

        event = self._parse(raw_body, delivery_id)

        try:
            await self._dispatcher.dispatch(event, event_type)
        except Exception:
            logger.exception(f"Error processing {event_type!r} delivery {delivery_id!r}")
            raise DispatchFailure() from None

        return GateResponse(
            status_code=200,
            body={
                "message": "Webhook processed successfully",
                "event": event_type,
                "delivery": delivery_id,
            },
        )

    @staticmethod
    def _parse(raw_body: bytes, delivery_id: str) -> dict[str, Any]:
        """Parse an authenticated body into an event envelope."""
        try:
            event = json.loads(raw_body)
        except (ValueError, RecursionError) as e:
            logger.error(f"Failed to parse payload for delivery {delivery_id!r}: {e}")
            raise MalformedPayload() from None

        if not isinstance(event, dict):
            logger.error(
                f"Payload for delivery {delivery_id!r} is a {type(event).__name__}, "
                "expected an object"
            )
            raise MalformedPayload()

        return event
