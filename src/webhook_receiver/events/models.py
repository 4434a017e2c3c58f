"""Pydantic models for the GitHub webhook payload fields we read.

GitHub controls the payload shape and adds fields over time, so every model
keeps unknown fields and nearly every field is optional.
"""

from pydantic import BaseModel, ConfigDict, Field


class GitHubModel(BaseModel):
    """Base model that tolerates extra and missing fields."""

    model_config = ConfigDict(extra="allow")


class User(GitHubModel):
    """GitHub account that authored or triggered something."""

    login: str = ""


class Label(GitHubModel):
    """Issue or pull request label."""

    name: str = ""


class Repository(GitHubModel):
    """GitHub repository information."""

    name: str = ""
    full_name: str = ""


class Issue(GitHubModel):
    """GitHub issue information."""

    number: int
    title: str = ""
    body: str | None = None
    state: str = ""
    labels: list[Label] = Field(default_factory=list)
    assignees: list[User] = Field(default_factory=list)


class PullRequest(GitHubModel):
    """GitHub pull request information."""

    number: int
    title: str = ""
    state: str = ""
    user: User | None = None
    merged: bool = False
    merged_by: User | None = None


class Comment(GitHubModel):
    """Issue or pull request comment."""

    body: str = ""
    user: User | None = None


class Commit(GitHubModel):
    """A commit listed in a push event."""

    id: str = ""
    message: str = ""


class Pusher(GitHubModel):
    """Author of a push; GitHub sends name and email, not a login."""

    name: str = ""


class CheckRun(GitHubModel):
    """GitHub check run information."""

    name: str = ""
    status: str = ""
    conclusion: str | None = None


class WorkflowRun(GitHubModel):
    """GitHub Actions workflow run information."""

    name: str = ""
    status: str = ""
    conclusion: str | None = None


class WebhookEvent(GitHubModel):
    """Fields shared by most webhook envelopes."""

    action: str | None = None
    repository: Repository | None = None
    sender: User | None = None

    @property
    def repo_name(self) -> str:
        """Full name of the repository, or a placeholder when absent."""
        if self.repository and self.repository.full_name:
            return self.repository.full_name
        return "unknown"


class IssuesEvent(WebhookEvent):
    """Payload of an `issues` event."""

    issue: Issue | None = None


class PullRequestEvent(WebhookEvent):
    """Payload of a `pull_request` event."""

    pull_request: PullRequest | None = None


class PushEvent(WebhookEvent):
    """Payload of a `push` event."""

    ref: str = ""
    pusher: Pusher | None = None
    commits: list[Commit] = Field(default_factory=list)


class IssueCommentEvent(WebhookEvent):
    """Payload of an `issue_comment` event."""

    issue: Issue | None = None
    comment: Comment | None = None


class CheckRunEvent(WebhookEvent):
    """Payload of a `check_run` event."""

    check_run: CheckRun | None = None


class WorkflowRunEvent(WebhookEvent):
    """Payload of a `workflow_run` event."""

    workflow_run: WorkflowRun | None = None


def login_of(user: User | None) -> str:
    """Return a user's login, or a placeholder when GitHub omitted it."""
    return user.login if user and user.login else "unknown"


def label_names(labels: list[Label]) -> list[str]:
    return [label.name for label in labels]

