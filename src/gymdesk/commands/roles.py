"""Commands: gymdesk roles / permissions / matrix / assignable."""

import typer
from rich.console import Console
from rich.table import Table

from gymdesk.core.permissions.assignment import roles_below
from gymdesk.core.permissions.catalog import PERMISSIONS, Capability
from gymdesk.core.permissions.matrix import generate_matrix
from gymdesk.core.permissions.roles import RoleName, get_role, roles_by_level


console = Console()


def _parse_role(value: str) -> RoleName:
    name = RoleName.parse(value.lower())
    if name is None:
        known = ", ".join(r.value for r in RoleName)
        console.print(f"[red]Error:[/red] Unknown role '{value}'. Known roles: {known}")
        raise typer.Exit(1)
    return name


def list_roles() -> None:
    """Show the role hierarchy."""
    table = Table(title="Roles", show_header=True)
    table.add_column("Role", style="cyan", no_wrap=True)
    table.add_column("Name", no_wrap=True)
    table.add_column("Level", style="green", justify="right", no_wrap=True)
    table.add_column("Permissions", justify="right", no_wrap=True)
    table.add_column("Description")

    for role in roles_by_level():
        table.add_row(
            role.name.value,
            role.display_name,
            str(role.level),
            str(len(role.permissions)),
            role.description,
        )

    console.print()
    console.print(table)
    console.print()


def list_permissions(
    resource: str | None = typer.Option(
        None, "--resource", "-r", help="Only show permissions for this resource"
    ),
) -> None:
    """Show the permission catalog."""
    permissions = [
        p for p in PERMISSIONS.values() if resource is None or p.resource == resource
    ]
    if not permissions:
        console.print(f"[yellow]No permissions for resource '{resource}'.[/yellow]")
        return

    table = Table(title="Permissions", show_header=True)
    table.add_column("Id", style="cyan", no_wrap=True)
    table.add_column("Resource", no_wrap=True)
    table.add_column("Action", no_wrap=True)
    table.add_column("Description")

    for p in permissions:
        table.add_row(p.id, p.resource, p.action, p.description)

    console.print()
    console.print(table)
    console.print()


def show_matrix(
    role: str | None = typer.Option(None, "--role", help="Only show one role"),
) -> None:
    """Show which capabilities each role holds."""
    names = [_parse_role(role)] if role else [r.name for r in roles_by_level()]
    matrices = {name: generate_matrix(name) for name in names}

    table = Table(title="Permission Matrix", show_header=True)
    table.add_column("Capability", style="cyan", no_wrap=True)
    for name in names:
        table.add_column(name.value, justify="center", no_wrap=True)

    for capability in Capability:
        marks = [
            "[green]yes[/green]" if matrices[name][capability] else "[dim]-[/dim]"
            for name in names
        ]
        table.add_row(capability.value, *marks)

    console.print()
    console.print(table)
    console.print()


def assignable(
    role: str = typer.Argument(..., help="Role of the acting user"),
) -> None:
    """Show the roles a user with ROLE may grant to others."""
    name = _parse_role(role)
    acting = get_role(name)
    grantable = sorted(
        roles_below(name),
        key=lambda r: get_role(r).level,
        reverse=True,
    )

    if not grantable:
        console.print(f"[yellow]{acting.display_name} cannot assign any roles.[/yellow]")
        return

    console.print(f"[bold cyan]{acting.display_name}[/bold cyan] may assign:")
    for r in grantable:
        console.print(f"  • {r.value} (level {get_role(r).level})")
