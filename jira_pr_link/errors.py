"""Failures that stop a run. None of them are retried."""


class LinkerError(Exception):
    """Base class for fatal linker errors."""


class ConfigurationError(LinkerError):
    """A required input is missing or an input value is invalid."""


class EventError(LinkerError):
    """The triggering event is not a pull request event, or its payload is unusable."""


class GitHubAPIError(LinkerError):
    """The GitHub API rejected a request or could not be reached."""


class LinkPatternError(LinkerError):
    """The issue pattern cannot match back the link line it produced.

    Only detectable once a title has been read, so it is raised after the pull request fetch.
    """
