"""Send a signed sample delivery to a running receiver for local testing."""

import json
import uuid
from typing import Any

import httpx

from webhook_receiver.webhook.validator import sign_payload

DEFAULT_URL = "http://localhost:8000/webhook/github"


def build_payload(
    event_type: str,
    repo: str,
    action: str = "opened",
    number: int = 1,
    title: str = "Test",
) -> dict[str, Any]:
    """Build a minimal payload of the given event type."""
    owner, _, name = repo.partition("/")
    payload: dict[str, Any] = {
        "repository": {"name": name or owner, "full_name": repo},
        "sender": {"login": owner},
    }

    if event_type == "issues":
        payload["action"] = action
        payload["issue"] = {"number": number, "title": title, "body": "", "labels": []}
    elif event_type == "pull_request":
        payload["action"] = action
        payload["pull_request"] = {
            "number": number,
            "title": title,
            "state": "open",
            "user": {"login": owner},
        }
    elif event_type == "push":
        payload["ref"] = "refs/heads/main"
        payload["pusher"] = {"name": owner}
        payload["commits"] = [{"id": uuid.uuid4().hex, "message": title}]
    else:
        payload["action"] = action

    return payload


def send_delivery(
    url: str,
    event_type: str,
    payload: dict[str, Any],
    secret: str,
    delivery_id: str | None = None,
) -> httpx.Response:
    """
    Sign a payload the way GitHub does and POST it.

    Args:
        url: Receiver endpoint
        event_type: Value for the X-GitHub-Event header
        payload: Event payload
        secret: Webhook secret shared with the receiver
        delivery_id: X-GitHub-Delivery value; a random UUID when omitted

    Returns:
        The receiver's response
    """
    payload_bytes = json.dumps(payload).encode()

    return httpx.post(
        url,
        content=payload_bytes,
        headers={
            "Content-Type": "application/json",
            "X-Hub-Signature-256": sign_payload(payload_bytes, secret),
            "X-GitHub-Event": event_type,
            "X-GitHub-Delivery": delivery_id or str(uuid.uuid4()),
        },
    )
