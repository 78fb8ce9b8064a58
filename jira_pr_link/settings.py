"""Settings resolution from the GitHub Actions runner environment.

The runner exposes action inputs as INPUT_<NAME> variables (name upper-cased,
hyphens kept) next to its own GITHUB_* context variables. A .env file in the
working directory is read too, which is handy for local runs.
"""

import re

import httpx
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from jira_pr_link.errors import ConfigurationError
from jira_pr_link.models import JiraPatterns, LinkMode
from jira_pr_link.patterns import build_patterns, normalize_base_url
from jira_pr_link.reconcile import parse_mode

DEFAULT_API_URL = "https://api.github.com"


class ActionSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Action inputs
    github_token: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("INPUT_GITHUB-TOKEN", "INPUT_TOKEN", "GITHUB_TOKEN"),
    )
    jira_base_url: str | None = Field(default=None, validation_alias="INPUT_JIRA-BASE-URL")
    jira_link_mode: str | None = Field(default=None, validation_alias="INPUT_JIRA-LINK-MODE")
    issue_pattern: str | None = Field(default=None, validation_alias="INPUT_ISSUE-PATTERN")

    # Runner context
    github_event_name: str | None = Field(default=None, validation_alias="GITHUB_EVENT_NAME")
    github_event_path: str | None = Field(default=None, validation_alias="GITHUB_EVENT_PATH")
    github_repository: str | None = Field(default=None, validation_alias="GITHUB_REPOSITORY")
    github_api_url: str = Field(default=DEFAULT_API_URL, validation_alias="GITHUB_API_URL")
    github_output: str | None = Field(default=None, validation_alias="GITHUB_OUTPUT")


class ActionInputs(BaseModel):
    """Validated inputs, ready for the linker."""

    model_config = ConfigDict(frozen=True)

    token: SecretStr
    jira_base_url: str  # no trailing slash
    jira_link_mode: LinkMode
    patterns: JiraPatterns


def get_settings() -> ActionSettings:
    return ActionSettings()


def validate_base_url(value: str | None) -> str:
    base_url = normalize_base_url((value or "").strip())
    if not base_url:
        raise ConfigurationError('Input "jira-base-url" is required.')
    try:
        url = httpx.URL(base_url)
    except httpx.InvalidURL:
        url = None
    if url is None or not url.is_absolute_url or url.scheme not in ("http", "https"):
        raise ConfigurationError(f'Input "jira-base-url" must be a valid URL. Received: {base_url}')
    return base_url


def build_issue_patterns(fragment: str | None) -> JiraPatterns:
    try:
        return build_patterns(fragment or None)
    except re.error as exc:
        raise ConfigurationError(f'Input "issue-pattern" is not a valid regular expression: {exc}') from exc


def resolve_inputs(settings: ActionSettings) -> ActionInputs:
    """Validate the configured inputs. Nothing here touches the network.

    Raises ConfigurationError naming the first offending input.
    """
    token = settings.github_token.get_secret_value().strip() if settings.github_token else ""
    if not token:
        raise ConfigurationError('Input "github-token" is required.')

    return ActionInputs(
        token=SecretStr(token),
        jira_base_url=validate_base_url(settings.jira_base_url),
        jira_link_mode=parse_mode(settings.jira_link_mode or LinkMode.BODY_START),
        patterns=build_issue_patterns(settings.issue_pattern),
    )
