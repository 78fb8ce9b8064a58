"""Compute the updated pull request description for a ticket-extraction result.

Every outcome is picked from a decision table keyed by
(ticket found, link line found, mode):

    ticket  link   mode        action
    yes     yes    any         replace the link line in place
    yes     no     body-start  insert link, blank line, body
    yes     no     body-end    insert body, blank line, link
    no      yes    any         remove the link line
    no      no     any         leave the body alone

A body never ends up with two link lines: replacing keeps the first link line and
drops any others.
"""

import re
from collections.abc import Sequence

from jira_pr_link.errors import ConfigurationError, LinkPatternError
from jira_pr_link.models import Action, JiraPatterns, LinkMode, Reconciliation

_LEADING_BLANK_LINES = re.compile(r"\A(?:[^\S\n]*\n)+")

_DECISIONS: dict[tuple[bool, bool, LinkMode], Action] = {
    (True, True, LinkMode.BODY_START): Action.REPLACE,
    (True, True, LinkMode.BODY_END): Action.REPLACE,
    (True, False, LinkMode.BODY_START): Action.INSERT_START,
    (True, False, LinkMode.BODY_END): Action.INSERT_END,
    (False, True, LinkMode.BODY_START): Action.REMOVE,
    (False, True, LinkMode.BODY_END): Action.REMOVE,
    (False, False, LinkMode.BODY_START): Action.NOOP,
    (False, False, LinkMode.BODY_END): Action.NOOP,
}


def parse_mode(mode: LinkMode | str) -> LinkMode:
    try:
        return LinkMode(mode)
    except ValueError:
        allowed = ", ".join(m.value for m in LinkMode)
        raise ConfigurationError(f"Unsupported jira-link-mode '{mode}'. Must be one of: {allowed}") from None


def decide(ticket_found: bool, link_found: bool, mode: LinkMode | str) -> Action:
    return _DECISIONS[(ticket_found, link_found, parse_mode(mode))]


def _newline(body: str) -> str:
    return "\r\n" if "\r\n" in body else "\n"


def _cut(body: str, matches: Sequence[re.Match[str]]) -> str:
    """Remove each matched line plus the blank lines around it.

    The text left between removed lines is re-joined with one blank line.
    """
    newline = _newline(body)
    pieces = []
    start = 0
    for match in matches:
        pieces.append(body[start : match.start()])
        start = match.end()
    pieces.append(body[start:])

    head, *middle, tail = pieces
    kept = [
        head.rstrip(),
        *(_LEADING_BLANK_LINES.sub("", piece).rstrip() for piece in middle),
        _LEADING_BLANK_LINES.sub("", tail),
    ]
    return (newline * 2).join(piece for piece in kept if piece.strip())


def _replace(body: str, link: str, first: re.Match[str], patterns: JiraPatterns) -> str:
    replaced = body[: first.start()] + link + body[first.end() :]
    duplicates = list(patterns.link_line.finditer(replaced, first.start() + len(link)))
    return _cut(replaced, duplicates) if duplicates else replaced


def _apply(
    action: Action,
    body: str,
    link: str | None,
    existing: re.Match[str] | None,
    patterns: JiraPatterns,
) -> str:
    match action:
        case Action.REPLACE:
            return _replace(body, link, existing, patterns)  # type: ignore[arg-type]
        case Action.INSERT_START:
            return f"{link}{_newline(body) * 2}{body.strip()}".strip()
        case Action.INSERT_END:
            return f"{body.strip()}{_newline(body) * 2}{link}".strip()
        case Action.REMOVE:
            return _cut(body, list(patterns.link_line.finditer(body))).strip()
        case _:
            return body


def reconcile(
    body: str,
    link: str | None,
    mode: LinkMode | str,
    patterns: JiraPatterns,
) -> Reconciliation:
    """Reconcile body with link, or with the absence of a ticket when link is None."""
    body = body or ""
    existing = patterns.link_line.search(body)
    action = decide(link is not None, existing is not None, mode)

    if link is not None and not patterns.link_line.fullmatch(link):
        # An unmatchable link would be inserted again on every run
        raise LinkPatternError(
            f"Generated link does not match the link-line pattern built from issue-pattern "
            f"'{patterns.fragment}'. The capturing group must cover the whole ticket identifier. "
            "This is checked once a title has been read, so it is reported after the pull request fetch."
        )

    new_body = _apply(action, body, link, existing, patterns)
    return Reconciliation(body=new_body, changed=new_body != body, action=action)


def reconcile_with_ticket(
    body: str,
    link: str,
    mode: LinkMode | str,
    patterns: JiraPatterns,
) -> Reconciliation:
    """Replace an existing link line with link, or insert link according to mode.

    Raises ConfigurationError for a mode other than body-start/body-end, and
    LinkPatternError when link would not match the link-line pattern.
    """
    return reconcile(body, link, mode, patterns)


def reconcile_without_ticket(body: str, patterns: JiraPatterns) -> Reconciliation:
    """Remove a stale link line. Never inserts anything."""
    return reconcile(body, None, LinkMode.BODY_START, patterns)
