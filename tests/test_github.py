"""Tests for GitHubClient using pytest-httpx."""

import json

import httpx
import pytest
from pytest_httpx import HTTPXMock

from jira_pr_link.errors import GitHubAPIError
from jira_pr_link.github import GitHubClient
from jira_pr_link.models import PullRequest

API_URL = "https://api.github.com"
PR_URL = f"{API_URL}/repos/acme/widgets/pulls/7"

_PR_NODE = {
    "number": 7,
    "title": "PROJ-123: add export",
    "body": "Fixes bug",
    "state": "open",
    "html_url": "https://github.com/acme/widgets/pull/7",
}


class TestGetPullRequest:
    def test_returns_pull_request(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(method="GET", url=PR_URL, json=_PR_NODE)
        pr = GitHubClient("ghs_test").get_pull_request("acme", "widgets", 7)

        assert isinstance(pr, PullRequest)
        assert pr.number == 7
        assert pr.title == "PROJ-123: add export"
        assert pr.body == "Fixes bug"

    def test_null_body_is_empty(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(method="GET", url=PR_URL, json={**_PR_NODE, "body": None})
        assert GitHubClient("ghs_test").get_pull_request("acme", "widgets", 7).body == ""

    def test_sends_auth_headers(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(method="GET", url=PR_URL, json=_PR_NODE)
        GitHubClient("ghs_test").get_pull_request("acme", "widgets", 7)

        request = httpx_mock.get_requests()[0]
        assert request.headers["Authorization"] == "Bearer ghs_test"
        assert request.headers["Accept"] == "application/vnd.github+json"

    def test_custom_api_url(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(
            method="GET",
            url="https://ghe.example.com/api/v3/repos/acme/widgets/pulls/7",
            json=_PR_NODE,
        )
        pr = GitHubClient("ghs_test", "https://ghe.example.com/api/v3/").get_pull_request("acme", "widgets", 7)
        assert pr.number == 7

    def test_401_raises_with_message(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(method="GET", url=PR_URL, status_code=401, json={"message": "Bad credentials"})
        with pytest.raises(GitHubAPIError, match="401"):
            GitHubClient("ghs_bad").get_pull_request("acme", "widgets", 7)

    def test_404_includes_api_message(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(method="GET", url=PR_URL, status_code=404, json={"message": "Not Found"})
        with pytest.raises(GitHubAPIError, match="404: Not Found"):
            GitHubClient("ghs_test").get_pull_request("acme", "widgets", 7)

    def test_transport_error(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_exception(httpx.ConnectError("connection refused"))
        with pytest.raises(GitHubAPIError, match="request failed: connection refused"):
            GitHubClient("ghs_test").get_pull_request("acme", "widgets", 7)


class TestUpdatePullRequestBody:
    def test_patches_full_body(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(method="PATCH", url=PR_URL, json=_PR_NODE)
        GitHubClient("ghs_test").update_pull_request_body("acme", "widgets", 7, "New body")

        request = httpx_mock.get_requests()[0]
        assert request.method == "PATCH"
        assert json.loads(request.content) == {"body": "New body"}

    def test_403_raises(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(
            method="PATCH",
            url=PR_URL,
            status_code=403,
            json={"message": "Resource not accessible by integration"},
        )
        with pytest.raises(GitHubAPIError, match="Resource not accessible by integration"):
            GitHubClient("ghs_test").update_pull_request_body("acme", "widgets", 7, "New body")
