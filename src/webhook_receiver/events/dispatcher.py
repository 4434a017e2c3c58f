"""Per-event-type handling of verified GitHub deliveries.

Handlers only log what arrived. The comments in each one mark where
automation would hook in; none of it is implemented.
"""

import json
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from webhook_receiver.events.models import (
    CheckRunEvent,
    IssueCommentEvent,
    IssuesEvent,
    PullRequestEvent,
    PushEvent,
    WorkflowRunEvent,
    label_names,
    login_of,
)

logger = logging.getLogger(__name__)

Handler = Callable[[dict[str, Any]], Awaitable[None]]


@dataclass(frozen=True)
class DispatchResult:
    """Outcome of dispatching one event."""

    event_type: str
    handled: bool


async def handle_issues(payload: dict[str, Any]) -> None:
    """Handle an `issues` event."""
    event = IssuesEvent.model_validate(payload)
    issue = event.issue

    logger.info(f"Issue event in {event.repo_name}: action={event.action}")
    if issue is None:
        return

    labels = ", ".join(label_names(issue.labels)) or "none"
    logger.info(
        f"Issue #{issue.number}: {issue.title} (state={issue.state or 'unknown'}, labels={labels})"
    )
    if issue.assignees:
        assignees = ", ".join(login_of(user) for user in issue.assignees)
        logger.info(f"Issue #{issue.number} assignees: {assignees}")

    if event.action == "opened":
        logger.info(f"New issue #{issue.number}: {issue.title}")
        # Triage hooks in here: auto-label, auto-assign, post a welcome comment


async def handle_pull_request(payload: dict[str, Any]) -> None:
    """Handle a `pull_request` event."""
    event = PullRequestEvent.model_validate(payload)
    pr = event.pull_request

    logger.info(f"Pull request event in {event.repo_name}: action={event.action}")
    if pr is None:
        return

    logger.info(
        f"PR #{pr.number}: {pr.title} (state={pr.state or 'unknown'}, author={login_of(pr.user)})"
    )
    if pr.merged:
        logger.info(f"PR #{pr.number} merged by {login_of(pr.merged_by)}")

    if event.action == "opened":
        logger.info(f"New PR #{pr.number}: {pr.title}")
        # Review hooks in here: run checks, comment with suggestions


async def handle_push(payload: dict[str, Any]) -> None:
    """Handle a `push` event."""
    event = PushEvent.model_validate(payload)
    pusher = event.pusher.name if event.pusher and event.pusher.name else "unknown"

    logger.info(
        f"Push event for {event.repo_name}: ref={event.ref}, pusher={pusher}, "
        f"commits={len(event.commits)}"
    )
    for index, commit in enumerate(event.commits, start=1):
        first_line = commit.message.split("\n", 1)[0]
        logger.info(f"Commit {index}: {commit.id[:7]} - {first_line}")

    # Indexing, analysis and test triggers hook in here


async def handle_issue_comment(payload: dict[str, Any]) -> None:
    """Handle an `issue_comment` event."""
    event = IssueCommentEvent.model_validate(payload)

    logger.info(f"Issue comment event in {event.repo_name}: action={event.action}")
    if event.issue is not None:
        logger.info(f"Issue #{event.issue.number}: {event.issue.title}")
    if event.comment is not None:
        logger.info(f"Comment by {login_of(event.comment.user)}: {event.comment.body[:100]}")


async def handle_check_run(payload: dict[str, Any]) -> None:
    """Handle a `check_run` event."""
    event = CheckRunEvent.model_validate(payload)
    check = event.check_run

    logger.info(f"Check run event in {event.repo_name}: action={event.action}")
    if check is not None:
        logger.info(
            f"Check {check.name}: status={check.status}, "
            f"conclusion={check.conclusion or 'pending'}"
        )


async def handle_workflow_run(payload: dict[str, Any]) -> None:
    """Handle a `workflow_run` event."""
    event = WorkflowRunEvent.model_validate(payload)
    run = event.workflow_run

    logger.info(f"Workflow run event in {event.repo_name}: action={event.action}")
    if run is not None:
        logger.info(
            f"Workflow {run.name}: status={run.status}, conclusion={run.conclusion or 'pending'}"
        )


DEFAULT_HANDLERS: dict[str, Handler] = {
    "issues": handle_issues,
    "pull_request": handle_pull_request,
    "push": handle_push,
    "issue_comment": handle_issue_comment,
    "check_run": handle_check_run,
    "workflow_run": handle_workflow_run,
}


class EventDispatcher:
    """Route verified events to a handler by event type.

    Event types are an open set. A type with no handler is a no-op, so
    new GitHub event types never cause an error.
    """

    def __init__(self, handlers: dict[str, Handler] | None = None):
        self._handlers = dict(DEFAULT_HANDLERS if handlers is None else handlers)

    @property
    def event_types(self) -> list[str]:
        return sorted(self._handlers)

    async def dispatch(self, event: dict[str, Any], event_type: str) -> DispatchResult:
        """
        Dispatch one event envelope.

        Args:
            event: Parsed webhook payload
            event_type: Value of the X-GitHub-Event header

        Returns:
            DispatchResult with handled=False when no handler exists
        """
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Processing {event_type} event: {json.dumps(event, indent=2)}")

        handler = self._handlers.get(event_type)
        if handler is None:
            logger.info(f"Unhandled event type: {event_type}")
            return DispatchResult(event_type=event_type, handled=False)

        await handler(event)
        return DispatchResult(event_type=event_type, handled=True)
