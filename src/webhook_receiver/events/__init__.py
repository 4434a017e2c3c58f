"""Dispatch of verified GitHub events."""

from webhook_receiver.events.dispatcher import DispatchResult, EventDispatcher

__all__ = ["DispatchResult", "EventDispatcher"]
