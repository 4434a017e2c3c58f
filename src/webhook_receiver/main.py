"""FastAPI application entry point."""

import argparse
import json
import logging
import os
import sys
from contextlib import asynccontextmanager
from typing import Any

import uvicorn
from fastapi import FastAPI

from webhook_receiver import __version__
from webhook_receiver.config import Settings, get_settings
from webhook_receiver.events import EventDispatcher
from webhook_receiver.simulate import DEFAULT_URL, build_payload, send_delivery
from webhook_receiver.webhook import IngestionGate
from webhook_receiver.webhook import router as webhook_router
from webhook_receiver.webhook.gate import Dispatcher

logger = logging.getLogger(__name__)


def setup_logging(level: str) -> None:
    """Configure structured logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level)
    logger.info("Webhook receiver starting up")
    if not settings.has_webhook_secret:
        logger.warning("GITHUB_WEBHOOK_SECRET is not set, every webhook will be rejected")
    yield
    logger.info("Webhook receiver shutting down")


def create_app(
    settings: Settings | None = None,
    dispatcher: Dispatcher | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title="Webhook Receiver",
        description="Verifies and dispatches GitHub webhook deliveries",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.gate = IngestionGate(
        secret=settings.github_webhook_secret,
        dispatcher=dispatcher or EventDispatcher(),
    )

    # Include routers
    app.include_router(webhook_router, prefix="/webhook", tags=["webhook"])

    @app.get("/health")
    async def health_check() -> dict[str, Any]:
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    return app


def simulate(args: argparse.Namespace) -> int:
    """Send a signed sample delivery and print the response."""
    secret = args.secret or os.environ.get("GITHUB_WEBHOOK_SECRET")
    if not secret:
        print("Error: Webhook secret required (--secret or GITHUB_WEBHOOK_SECRET)")
        return 1

    payload = build_payload(
        args.event,
        args.repo,
        action=args.action,
        number=args.number,
        title=args.title,
    )

    print(f"Sending {args.event} webhook to {args.url}")
    print(f"Payload: {json.dumps(payload, indent=2)}")

    response = send_delivery(args.url, args.event, payload, secret, delivery_id=args.delivery)

    print(f"\nResponse status: {response.status_code}")
    print(f"Response body: {response.text}")

    return 0 if response.status_code == 200 else 1


def cli(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Webhook Receiver - GitHub webhook ingestion")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Start the webhook server")
    serve_parser.add_argument("--host", default=None, help="Host to bind to")
    serve_parser.add_argument("--port", type=int, default=None, help="Port to bind to")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")

    # Simulate command
    simulate_parser = subparsers.add_parser("simulate", help="Send a signed sample webhook")
    simulate_parser.add_argument("--url", default=DEFAULT_URL, help="Receiver endpoint")
    simulate_parser.add_argument("--event", default="issues", help="X-GitHub-Event value")
    simulate_parser.add_argument("--repo", required=True, help="Repository (owner/repo)")
    simulate_parser.add_argument("--action", default="opened", help="Event action")
    simulate_parser.add_argument("--number", type=int, default=1, help="Issue or PR number")
    simulate_parser.add_argument("--title", default="Test", help="Issue, PR or commit title")
    simulate_parser.add_argument("--delivery", default=None, help="X-GitHub-Delivery value")
    simulate_parser.add_argument(
        "--secret", default=None, help="Webhook secret (or use GITHUB_WEBHOOK_SECRET env)"
    )

    args = parser.parse_args(argv)

    if args.command == "serve":
        settings = get_settings()
        setup_logging(settings.log_level)
        uvicorn.run(
            "webhook_receiver.main:create_app",
            host=args.host if args.host is not None else settings.host,
            port=args.port if args.port is not None else settings.port,
            reload=args.reload,
            factory=True,
        )
        return 0
    if args.command == "simulate":
        return simulate(args)

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(cli())
