"""Main gymdesk CLI application."""

import typer
from rich.console import Console

from gymdesk import __version__
from gymdesk.commands import roles


console = Console()

app = typer.Typer(
    name="gymdesk",
    help="Inspect the gym console's roles and permissions.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command(name="roles")(roles.list_roles)
app.command(name="permissions")(roles.list_permissions)
app.command(name="matrix")(roles.show_matrix)
app.command(name="assignable")(roles.assignable)


@app.callback(invoke_without_command=True)
def version_callback(
    version: bool = typer.Option(
        False, "--version", "-v", help="Show version and exit."
    ),
) -> None:
    """gymdesk - role-based access control for the gym console."""
    if version:
        console.print(f"[bold cyan]gymdesk[/bold cyan] version {__version__}")
        raise typer.Exit()


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
