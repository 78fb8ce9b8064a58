"""Tests for jira_pr_link.models."""

import pytest

from jira_pr_link.models import Action, JiraPatterns, LinkMode, PullRequest, PullRequestEvent, Reconciliation


def test_link_mode_values() -> None:
    assert [m.value for m in LinkMode] == ["body-start", "body-end"]
    assert LinkMode("body-end") is LinkMode.BODY_END


def test_pull_request_none_fields() -> None:
    pr = PullRequest(number=1, title=None, body=None)  # type: ignore[arg-type]
    assert pr.title == ""
    assert pr.body == ""


def test_pull_request_frozen() -> None:
    pr = PullRequest(number=1, title="PROJ-1", body="x")
    with pytest.raises(Exception):  # ValidationError or TypeError depending on pydantic version
        pr.body = "changed"  # type: ignore[misc]


def test_reconciliation_frozen() -> None:
    result = Reconciliation(body="x", changed=False, action=Action.NOOP)
    with pytest.raises(Exception):
        result.changed = True  # type: ignore[misc]


def test_patterns_frozen(patterns: JiraPatterns) -> None:
    with pytest.raises(Exception):
        patterns.fragment = "x"  # type: ignore[misc]


def test_event_owner_repo() -> None:
    event = PullRequestEvent(name="pull_request", number=3, repository="acme/widgets")
    assert event.owner == "acme"
    assert event.repo == "widgets"
    assert event.action is None
