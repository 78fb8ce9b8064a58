"""GitHub REST API v3 client, limited to the pull request calls the linker makes."""

import httpx

from jira_pr_link.errors import GitHubAPIError
from jira_pr_link.models import PullRequest
from jira_pr_link.settings import DEFAULT_API_URL


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])
    return response.reason_phrase


class GitHubClient:
    def __init__(self, token: str, api_url: str = DEFAULT_API_URL) -> None:
        self._base_url = api_url.rstrip("/")
        self._headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }

    def _check(self, response: httpx.Response) -> dict:
        if response.status_code == 401:
            raise GitHubAPIError(
                "GitHub API returned 401. Check that github-token is valid and has pull-requests: write permission."
            )
        if response.is_error:
            raise GitHubAPIError(f"GitHub API returned {response.status_code}: {_error_message(response)}")
        return response.json()

    def _get(self, path: str) -> dict:
        try:
            response = httpx.get(f"{self._base_url}{path}", headers=self._headers, timeout=30)
        except httpx.HTTPError as exc:
            raise GitHubAPIError(f"GitHub API request failed: {exc}") from exc
        return self._check(response)

    def _patch(self, path: str, body: dict) -> dict:
        try:
            response = httpx.patch(f"{self._base_url}{path}", headers=self._headers, json=body, timeout=30)
        except httpx.HTTPError as exc:
            raise GitHubAPIError(f"GitHub API request failed: {exc}") from exc
        return self._check(response)

    def get_pull_request(self, owner: str, repo: str, number: int) -> PullRequest:
        node = self._get(f"/repos/{owner}/{repo}/pulls/{number}")
        return PullRequest(number=node["number"], title=node.get("title"), body=node.get("body"))

    def update_pull_request_body(self, owner: str, repo: str, number: int, body: str) -> None:
        # The description is overwritten in full
        self._patch(f"/repos/{owner}/{repo}/pulls/{number}", {"body": body})
