"""Shared pydantic models passed between the linker stages."""

import re
from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator


class LinkMode(str, Enum):
    """Where a new link line goes when the description has none yet."""

    BODY_START = "body-start"
    BODY_END = "body-end"


class Action(str, Enum):
    REPLACE = "replace"
    INSERT_START = "insert-start"
    INSERT_END = "insert-end"
    REMOVE = "remove"
    NOOP = "noop"


class JiraPatterns(BaseModel):
    """Ticket pattern and the link-line pattern derived from it."""

    model_config = ConfigDict(frozen=True)

    fragment: str  # regex fragment with exactly one capturing group
    ticket: re.Pattern[str]
    link_line: re.Pattern[str]  # compiled with re.MULTILINE


class Reconciliation(BaseModel):
    """Outcome of reconciling a description against a ticket-extraction result."""

    model_config = ConfigDict(frozen=True)

    body: str
    changed: bool
    action: Action


class PullRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    number: int
    title: str
    body: str = ""

    @field_validator("title", "body", mode="before")
    @classmethod
    def _none_as_empty(cls, value: str | None) -> str:
        # GitHub returns null for an empty description
        return value or ""


class PullRequestEvent(BaseModel):
    """The parts of a pull_request webhook payload the linker needs."""

    model_config = ConfigDict(frozen=True)

    name: str  # pull_request | pull_request_target
    action: str | None = None  # opened, edited, reopened, ...
    number: int
    repository: str  # owner/repo

    @property
    def owner(self) -> str:
        return self.repository.split("/", 1)[0]

    @property
    def repo(self) -> str:
        return self.repository.split("/", 1)[1]
