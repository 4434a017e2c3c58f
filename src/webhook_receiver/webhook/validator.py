"""GitHub webhook signature validation."""

import hashlib
import hmac
import logging

logger = logging.getLogger(__name__)

SIGNATURE_PREFIX = "sha256="


def sign_payload(payload: bytes, secret: str) -> str:
    """
    Compute the X-Hub-Signature-256 value GitHub sends for a payload.

    Args:
        payload: The raw request body bytes
        secret: The webhook secret

    Returns:
        Signature string in the format "sha256=<hex_digest>"
    """
    digest = hmac.new(
        secret.encode("utf-8"),
        payload,
        hashlib.sha256,
    ).hexdigest()
    return SIGNATURE_PREFIX + digest


def verify_signature(payload: bytes, signature: str | None, secret: str | None) -> bool:
    """
    Verify a GitHub webhook signature using HMAC SHA-256.

    Fails closed: a missing signature or an unset secret is rejected
    without computing anything.

    Args:
        payload: The raw request body bytes, exactly as received
        signature: The X-Hub-Signature-256 header value
        secret: The webhook secret configured in GitHub

    Returns:
        True if the signature is valid, False otherwise
    """
    if not signature or not secret:
        logger.warning("Missing webhook signature or secret")
        return False

    try:
        provided = signature.encode("ascii")
    except UnicodeEncodeError:
        logger.warning("Webhook signature contains non-ASCII characters")
        return False

    expected = sign_payload(payload, secret).encode("ascii")

    # compare_digest returns False for unequal lengths
    is_valid = hmac.compare_digest(expected, provided)

    if not is_valid:
        logger.warning("Webhook signature validation failed")

    return is_valid
