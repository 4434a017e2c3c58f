"""Webhook handling for GitHub events."""

from webhook_receiver.webhook.errors import GateResponse
from webhook_receiver.webhook.gate import IngestionGate
from webhook_receiver.webhook.handler import router
from webhook_receiver.webhook.validator import sign_payload, verify_signature

__all__ = ["GateResponse", "IngestionGate", "router", "sign_payload", "verify_signature"]
