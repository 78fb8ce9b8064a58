"""Loading the pull request event that triggered the run."""

import json
from pathlib import Path

from jira_pr_link.errors import EventError
from jira_pr_link.models import PullRequestEvent

# Both events carry the same pull_request payload
SUPPORTED_EVENTS = ("pull_request", "pull_request_target")


def load_event(name: str | None, path: str | None, repository: str | None = None) -> PullRequestEvent:
    """Read the webhook payload at path and return the pull request it refers to.

    repository (owner/repo) is used when the payload has no repository block.
    """
    if name not in SUPPORTED_EVENTS:
        raise EventError(f"This action only supports the 'pull_request' event. Received: '{name or ''}'")
    if not path:
        raise EventError("GITHUB_EVENT_PATH is not set. Cannot read the pull request event payload.")

    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise EventError(f"Could not read event payload {path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise EventError(f"Event payload {path} is not a JSON object.")

    pull_request = payload.get("pull_request") or {}
    number = pull_request.get("number")
    if not number:
        raise EventError("This action must be run on a pull_request event.")

    full_name = (payload.get("repository") or {}).get("full_name") or repository
    if not full_name or "/" not in full_name:
        raise EventError("Cannot determine the repository. Expected owner/repo in the event payload or GITHUB_REPOSITORY.")

    return PullRequestEvent(
        name=name,
        action=payload.get("action"),
        number=number,
        repository=full_name,
    )
