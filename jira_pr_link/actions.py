"""GitHub Actions workflow commands: step outputs and error annotations."""

import uuid
from pathlib import Path

import typer
from rich import print as rprint
from rich.markup import escape


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def info(message: str) -> None:
    rprint(escape(message))


def error(message: str) -> None:
    """Report a fatal error as a red console line and an ::error:: annotation."""
    rprint(f"[red]{escape(message)}[/red]")
    typer.echo(f"::error::{_escape_data(message)}")


def set_output(name: str, value: str, output_path: str | None = None) -> None:
    """Append a step output to $GITHUB_OUTPUT, or print it when running outside Actions."""
    if not output_path:
        typer.echo(f"{name}={value}")
        return
    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    with Path(output_path).open("a", encoding="utf-8") as fh:
        fh.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
