"""Tests for event dispatch."""

import asyncio
import logging

import pytest
from pydantic import ValidationError

from webhook_receiver.events import DispatchResult, EventDispatcher


@pytest.fixture
def dispatcher() -> EventDispatcher:
    return EventDispatcher()


def _dispatch(dispatcher: EventDispatcher, event: dict, event_type: str) -> DispatchResult:
    return asyncio.run(dispatcher.dispatch(event, event_type))


def test_known_event_types(dispatcher: EventDispatcher):
    """Test the set of event types with a handler."""
    assert dispatcher.event_types == [
        "check_run",
        "issue_comment",
        "issues",
        "pull_request",
        "push",
        "workflow_run",
    ]


def test_issue_opened(dispatcher: EventDispatcher, caplog: pytest.LogCaptureFixture):
    """Test that an opened issue is logged as new."""
    event = {
        "action": "opened",
        "repository": {"name": "repo", "full_name": "owner/repo"},
        "issue": {
            "number": 7,
            "title": "Crash on start",
            "body": "",
            "state": "open",
            "labels": [{"name": "bug"}, {"name": "p1"}],
            "assignees": [{"login": "octocat"}],
        },
    }

    with caplog.at_level(logging.INFO, logger="webhook_receiver"):
        result = _dispatch(dispatcher, event, "issues")

    assert result == DispatchResult(event_type="issues", handled=True)
    assert "Issue event in owner/repo: action=opened" in caplog.text
    assert "labels=bug, p1" in caplog.text
    assert "assignees: octocat" in caplog.text
    assert "New issue #7: Crash on start" in caplog.text


def test_issue_closed_is_not_new(dispatcher: EventDispatcher, caplog: pytest.LogCaptureFixture):
    """Test that only opened issues get the new-issue line."""
    event = {"action": "closed", "issue": {"number": 3, "title": "Old"}}

    with caplog.at_level(logging.INFO, logger="webhook_receiver"):
        result = _dispatch(dispatcher, event, "issues")

    assert result.handled is True
    assert "New issue" not in caplog.text
    assert "Issue event in unknown" in caplog.text


def test_issue_event_without_issue(dispatcher: EventDispatcher):
    """Test that a sparse issues payload is still handled."""
    assert _dispatch(dispatcher, {"action": "opened"}, "issues").handled is True


def test_pull_request_merged(dispatcher: EventDispatcher, caplog: pytest.LogCaptureFixture):
    """Test that merged pull requests log the merger."""
    event = {
        "action": "closed",
        "repository": {"full_name": "owner/repo"},
        "pull_request": {
            "number": 12,
            "title": "Add feature",
            "state": "closed",
            "user": {"login": "author"},
            "merged": True,
            "merged_by": {"login": "maintainer"},
        },
    }

    with caplog.at_level(logging.INFO, logger="webhook_receiver"):
        result = _dispatch(dispatcher, event, "pull_request")

    assert result.handled is True
    assert "PR #12: Add feature (state=closed, author=author)" in caplog.text
    assert "PR #12 merged by maintainer" in caplog.text
    assert "New PR" not in caplog.text


def test_pull_request_opened(dispatcher: EventDispatcher, caplog: pytest.LogCaptureFixture):
    """Test that an opened pull request is logged as new."""
    event = {"action": "opened", "pull_request": {"number": 5, "title": "Fix"}}

    with caplog.at_level(logging.INFO, logger="webhook_receiver"):
        _dispatch(dispatcher, event, "pull_request")

    assert "New PR #5: Fix" in caplog.text


def test_push(dispatcher: EventDispatcher, caplog: pytest.LogCaptureFixture):
    """Test that push events log each commit's short sha and subject."""
    event = {
        "ref": "refs/heads/main",
        "repository": {"full_name": "owner/repo"},
        "pusher": {"name": "octocat", "email": "octocat@example.com"},
        "commits": [
            {"id": "0123456789abcdef", "message": "First line\n\nDetails"},
            {"id": "fedcba9876543210", "message": "Second"},
        ],
    }

    with caplog.at_level(logging.INFO, logger="webhook_receiver"):
        result = _dispatch(dispatcher, event, "push")

    assert result.handled is True
    assert "ref=refs/heads/main, pusher=octocat, commits=2" in caplog.text
    assert "Commit 1: 0123456 - First line" in caplog.text
    assert "Details" not in caplog.text
    assert "Commit 2: fedcba9 - Second" in caplog.text


def test_issue_comment_truncates_body(
    dispatcher: EventDispatcher, caplog: pytest.LogCaptureFixture
):
    """Test that comment bodies are cut to 100 characters in logs."""
    event = {
        "action": "created",
        "issue": {"number": 9, "title": "Question"},
        "comment": {"body": "x" * 150, "user": {"login": "commenter"}},
    }

    with caplog.at_level(logging.INFO, logger="webhook_receiver"):
        _dispatch(dispatcher, event, "issue_comment")

    assert f"Comment by commenter: {'x' * 100}" in caplog.text
    assert "x" * 101 not in caplog.text


@pytest.mark.parametrize(
    ("event_type", "key"),
    [("check_run", "check_run"), ("workflow_run", "workflow_run")],
)
def test_runs_default_to_pending(
    dispatcher: EventDispatcher,
    caplog: pytest.LogCaptureFixture,
    event_type: str,
    key: str,
):
    """Test that runs without a conclusion are reported as pending."""
    event = {"action": "requested", key: {"name": "CI", "status": "queued"}}

    with caplog.at_level(logging.INFO, logger="webhook_receiver"):
        result = _dispatch(dispatcher, event, event_type)

    assert result.handled is True
    assert "status=queued, conclusion=pending" in caplog.text


@pytest.mark.parametrize("event_type", ["star", "ping", "", "Issues"])
def test_unknown_event_is_noop(
    dispatcher: EventDispatcher, caplog: pytest.LogCaptureFixture, event_type: str
):
    """Test that event types without a handler are accepted as a no-op."""
    with caplog.at_level(logging.INFO, logger="webhook_receiver"):
        result = _dispatch(dispatcher, {"zen": "Keep it simple."}, event_type)

    assert result == DispatchResult(event_type=event_type, handled=False)
    assert f"Unhandled event type: {event_type}" in caplog.text


def test_extra_fields_are_tolerated(dispatcher: EventDispatcher):
    """Test that fields GitHub adds later do not break handlers."""
    event = {
        "action": "opened",
        "installation": {"id": 1},
        "issue": {"number": 1, "title": "t", "reactions": {"+1": 2}, "labels": []},
    }

    assert _dispatch(dispatcher, event, "issues").handled is True


def test_wrongly_typed_fields_raise(dispatcher: EventDispatcher):
    """Test that handlers surface payloads they cannot read."""
    with pytest.raises(ValidationError):
        _dispatch(dispatcher, {"issue": {"number": "seven"}}, "issues")


def test_custom_handlers():
    """Test that a dispatcher can be built with its own handler table."""
    seen: list[dict] = []

    async def record(payload: dict) -> None:
        seen.append(payload)

    dispatcher = EventDispatcher(handlers={"deployment": record})

    assert _dispatch(dispatcher, {"action": "created"}, "deployment").handled is True
    assert _dispatch(dispatcher, {}, "issues").handled is False
    assert seen == [{"action": "created"}]
