"""jira-pr-link CLI: all commands."""

from pathlib import Path
from typing import Annotated

import typer
from pydantic import SecretStr
from rich import print as rprint
from rich.markup import escape
from rich.table import Table

from jira_pr_link import actions
from jira_pr_link.errors import LinkerError
from jira_pr_link.event import load_event
from jira_pr_link.github import GitHubClient
from jira_pr_link.models import Action, PullRequestEvent, Reconciliation
from jira_pr_link.patterns import extract_ticket, format_link
from jira_pr_link.reconcile import parse_mode, reconcile_with_ticket, reconcile_without_ticket
from jira_pr_link.settings import (
    ActionInputs,
    ActionSettings,
    build_issue_patterns,
    get_settings,
    resolve_inputs,
    validate_base_url,
)

app = typer.Typer(help="jira-pr-link: keep a Jira ticket link in pull request descriptions", no_args_is_help=True)

TokenOpt = Annotated[
    str | None,
    typer.Option("--github-token", help="Token used to update the pull request (default: INPUT_GITHUB-TOKEN)"),
]
BaseUrlOpt = Annotated[
    str | None,
    typer.Option("--jira-base-url", help="Jira base URL, e.g. https://acme.atlassian.net"),
]
ModeOpt = Annotated[
    str | None,
    typer.Option("--jira-link-mode", help="Where to insert a new link: body-start or body-end"),
]
PatternOpt = Annotated[
    str | None,
    typer.Option("--issue-pattern", help="Regex for ticket identifiers (default: [A-Z][A-Z0-9_]*-\\d+)"),
]

_ACTION_MESSAGES = {
    Action.REPLACE: "Updated existing JIRA link in PR description.",
    Action.INSERT_START: "Added new JIRA link to PR description.",
    Action.INSERT_END: "Added new JIRA link to PR description.",
    Action.REMOVE: "Removed existing JIRA link from PR description.",
}


# ---------------------------------------------------------------------------
# Sync
# ---------------------------------------------------------------------------


def _with_overrides(
    settings: ActionSettings,
    github_token: str | None,
    jira_base_url: str | None,
    jira_link_mode: str | None,
    issue_pattern: str | None,
) -> ActionSettings:
    """Apply CLI options on top of the environment."""
    overrides: dict = {}
    if github_token is not None:
        overrides["github_token"] = SecretStr(github_token)
    if jira_base_url is not None:
        overrides["jira_base_url"] = jira_base_url
    if jira_link_mode is not None:
        overrides["jira_link_mode"] = jira_link_mode
    if issue_pattern is not None:
        overrides["issue_pattern"] = issue_pattern
    return settings.model_copy(update=overrides)


def sync_pull_request(
    client: GitHubClient,
    event: PullRequestEvent,
    inputs: ActionInputs,
    output_path: str | None = None,
    dry_run: bool = False,
) -> Reconciliation:
    """Fetch the pull request, reconcile its description and write it back if it changed."""
    pr = client.get_pull_request(event.owner, event.repo, event.number)
    ticket = extract_ticket(pr.title, inputs.patterns)

    if ticket is None:
        actions.info("No JIRA ticket found in PR title.")
        link = None
        result = reconcile_without_ticket(pr.body, inputs.patterns)
    else:
        link = format_link(inputs.jira_base_url, ticket)
        result = reconcile_with_ticket(pr.body, link, inputs.jira_link_mode, inputs.patterns)

    if not result.changed:
        if ticket is not None:
            actions.info("JIRA link already up to date. No changes made.")
    elif dry_run:
        rprint(f"[yellow]Dry run:[/yellow] {escape(_ACTION_MESSAGES[result.action])} New description:")
        typer.echo(result.body)
    else:
        client.update_pull_request_body(event.owner, event.repo, event.number, result.body)
        actions.info(_ACTION_MESSAGES[result.action])

    if link is not None:
        actions.set_output("jira-ticket", ticket, output_path)
        actions.set_output("jira-link", link, output_path)
    return result


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command("run")
def run(
    github_token: TokenOpt = None,
    jira_base_url: BaseUrlOpt = None,
    jira_link_mode: ModeOpt = None,
    issue_pattern: PatternOpt = None,
    dry_run: Annotated[
        bool, typer.Option("--dry-run", help="Show the new description instead of updating the pull request")
    ] = False,
) -> None:
    """Sync the Jira link in the description of the pull request that triggered the workflow."""
    settings = _with_overrides(get_settings(), github_token, jira_base_url, jira_link_mode, issue_pattern)

    try:
        # Everything is validated before the first API call
        event = load_event(settings.github_event_name, settings.github_event_path, settings.github_repository)
        inputs = resolve_inputs(settings)
        client = GitHubClient(inputs.token.get_secret_value(), settings.github_api_url)
        sync_pull_request(client, event, inputs, settings.github_output, dry_run=dry_run)
    except LinkerError as exc:
        actions.error(str(exc))
        raise typer.Exit(1) from exc


@app.command("preview")
def preview(
    title: Annotated[str, typer.Argument(help="Pull request title")],
    jira_base_url: Annotated[str, typer.Option("--jira-base-url", help="Jira base URL")],
    body: Annotated[str | None, typer.Option("--body", "-b", help="Current description")] = None,
    body_file: Annotated[
        Path | None,
        typer.Option(
            "--body-file",
            "-f",
            exists=True,
            dir_okay=False,
            readable=True,
            help="Read the current description from a file",
        ),
    ] = None,
    jira_link_mode: Annotated[str, typer.Option("--jira-link-mode", help="body-start or body-end")] = "body-start",
    issue_pattern: PatternOpt = None,
) -> None:
    """Print the description the linker would produce. Does not contact GitHub."""
    if body is not None and body_file is not None:
        rprint("[red]Use either --body or --body-file, not both.[/red]")
        raise typer.Exit(1)
    current = body_file.read_text(encoding="utf-8") if body_file else (body or "")

    try:
        base_url = validate_base_url(jira_base_url)
        mode = parse_mode(jira_link_mode)
        patterns = build_issue_patterns(issue_pattern)
        ticket = extract_ticket(title, patterns)
        if ticket is None:
            result = reconcile_without_ticket(current, patterns)
        else:
            result = reconcile_with_ticket(current, format_link(base_url, ticket), mode, patterns)
    except LinkerError as exc:
        rprint(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(1) from exc

    typer.echo(f"ticket: {ticket or '(none)'}  action: {result.action.value}  changed: {result.changed}", err=True)
    typer.echo(result.body)


@app.command("config-show")
def config_show() -> None:
    """Show the configuration resolved from the environment (masks credentials)."""
    settings = get_settings()

    def mask(val: str | None) -> str:
        if not val:
            return "[dim](not set)[/dim]"
        if len(val) <= 5:
            return "***"
        return f"...{val[-5:]}"

    def show(val: str | None) -> str:
        return escape(val) if val else "[dim](not set)[/dim]"

    table = Table(title="jira-pr-link Configuration")
    table.add_column("Field", style="bold")
    table.add_column("Value")

    table.add_row("github-token", mask(settings.github_token.get_secret_value() if settings.github_token else None))
    table.add_row("jira-base-url", show(settings.jira_base_url))
    table.add_row("jira-link-mode", show(settings.jira_link_mode) if settings.jira_link_mode else "body-start")
    table.add_row("issue-pattern", show(settings.issue_pattern))
    table.add_row("event", show(settings.github_event_name))
    table.add_row("repository", show(settings.github_repository))
    table.add_row("api-url", show(settings.github_api_url))

    rprint(table)
