"""CLI commands for listing and creating users."""

from __future__ import annotations

import asyncio

import labdesk.lib.cli as click
from labdesk.auth import SessionService
from labdesk.core import di
from labdesk.model import Role
from labdesk.operation import admin as admin_ops
from labdesk.storage import user as user_storage


@click.group("user")
def user():
    """Manage users.

    The data store lives for one process, so users created here last only
    for the command that creates them.
    """
    ...


@user.command("list")
@click.option("--role", "-r", type=click.EnumType(Role), default=None, help="Only users with this role")
@click.option("--group", "-g", default=None, help="Only members of this group")
@click.option("--search", "-s", default=None, help="Match on name or email")
def user_list(role: Role | None, group: str | None, search: str | None) -> None:
    """List users."""
    users = user_storage.find(role=role, group=group, search=search)
    if not users:
        click.echo("No users found.")
        return

    click.echo(f"{'Email':<36} {'Name':<24} {'Role':<8} {'Group':<10} Status")
    click.echo("-" * 90)
    for u in users:
        click.echo(f"{u.email:<36} {u.name:<24} {u.role.value:<8} {u.group or '-':<10} {u.status.value}")


@user.command("create")
@click.argument("email")
@click.argument("name")
@click.option("--role", "-r", type=click.EnumType(Role), required=True, help="Role of the new user")
@click.option("--group", "-g", default=None, help="Group to place a student in")
@di.inject
def user_create(
    email: str,
    name: str,
    role: Role,
    group: str | None,
    service: SessionService = di.Provide["auth.session"],
) -> None:
    """Create a new user as the signed-in administrator.

    EMAIL is the user's email address (used for login).
    NAME is the user's display name.
    """
    actor = service.require((Role.Admin,))
    created = asyncio.run(admin_ops.create_user(actor, name=name, email=email, role=role, group=group))

    click.echo(f"Created user: {created.name} <{created.email}>")
    click.echo(f"  ID:    {created.actor_id}")
    click.echo(f"  Role:  {created.role.value}")
    if created.group:
        click.echo(f"  Group: {created.group}")
