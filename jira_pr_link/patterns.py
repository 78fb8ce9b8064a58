"""Ticket extraction and link-line formatting."""

import re

from jira_pr_link.models import JiraPatterns

DEFAULT_TICKET_PATTERN = r"([A-Z][A-Z0-9_]*-\d+)"

LINK_LABEL = "Linked to JIRA ticket:"
LINK_PREFIX = f"\N{LINK SYMBOL} {LINK_LABEL}"

# The label is the line's identity. The emoji in front is optional when matching:
# a short run of non-ASCII characters is accepted so a re-encoded emoji still matches.
_LINK_LINE_TEMPLATE = r"^(?:[^\x00-\x7F]{{1,8}}[^\S\r\n]+)?" + re.escape(LINK_LABEL) + r" \[{fragment}\]\(.+?\)[^\S\r\n]*(?=\r?$)"


def _ticket_fragment(fragment: str | None) -> str:
    if not fragment:
        return DEFAULT_TICKET_PATTERN
    # A fragment with "(" is assumed to carry its own capturing group
    if "(" not in fragment:
        return f"({fragment})"
    if re.compile(fragment).groups == 0:
        return f"({fragment})"
    return fragment


def build_patterns(fragment: str | None = None) -> JiraPatterns:
    """Compile the ticket pattern and the link-line pattern derived from it.

    Raises re.error when the fragment is not a valid regular expression.
    """
    ticket_fragment = _ticket_fragment(fragment)
    return JiraPatterns(
        fragment=ticket_fragment,
        ticket=re.compile(ticket_fragment),
        link_line=re.compile(_LINK_LINE_TEMPLATE.format(fragment=ticket_fragment), re.MULTILINE),
    )


def extract_ticket(title: str, patterns: JiraPatterns) -> str | None:
    """Return the ticket identifier of the first match in title, or None."""
    match = patterns.ticket.search(title)
    return match.group(1) if match else None


def normalize_base_url(base_url: str) -> str:
    return base_url.removesuffix("/")


def format_link(base_url: str, ticket: str) -> str:
    """Render the single-line markdown link for ticket.

    base_url is used as given; callers normalize it with normalize_base_url first.

    https://acme.atlassian.net, PROJ-123 →
    🔗 Linked to JIRA ticket: [PROJ-123](https://acme.atlassian.net/browse/PROJ-123)
    """
    return f"{LINK_PREFIX} [{ticket}]({base_url}/browse/{ticket})"
