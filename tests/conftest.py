"""Shared test fixtures."""

import pytest

from jira_pr_link.models import JiraPatterns
from jira_pr_link.patterns import build_patterns, format_link

BASE_URL = "https://acme.atlassian.net"

_RUNNER_ENV = (
    "INPUT_GITHUB-TOKEN",
    "INPUT_TOKEN",
    "GITHUB_TOKEN",
    "INPUT_JIRA-BASE-URL",
    "INPUT_JIRA-LINK-MODE",
    "INPUT_ISSUE-PATTERN",
    "GITHUB_EVENT_NAME",
    "GITHUB_EVENT_PATH",
    "GITHUB_REPOSITORY",
    "GITHUB_API_URL",
    "GITHUB_OUTPUT",
)


@pytest.fixture(autouse=True)
def clean_env(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Isolate tests from the runner environment and any .env in the checkout."""
    for name in _RUNNER_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def patterns() -> JiraPatterns:
    return build_patterns()


@pytest.fixture
def link() -> str:
    return format_link(BASE_URL, "PROJ-123")


@pytest.fixture
def old_link() -> str:
    return format_link(BASE_URL, "OLD-1")
