"""CLI commands for the persisted sign-in session."""

from __future__ import annotations

import labdesk.lib.cli as click
from labdesk.auth import SessionService
from labdesk.core import di


@click.group("session")
def session():
    """Sign in, inspect and sign out of the session kept between runs."""
    ...


@session.command("login")
@click.argument("email")
@click.option("--password", "-p", prompt=True, hide_input=True, help="Password (prompted for if not given)")
@di.inject
def login(
    email: str,
    password: str,
    service: SessionService = di.Provide["auth.session"],
) -> None:
    """Sign in as EMAIL."""
    actor = service.authenticate(email, password)
    click.echo(f"Signed in as {actor.name} <{actor.email}> ({actor.role.value})")


@session.command("whoami")
@di.inject
def whoami(
    service: SessionService = di.Provide["auth.session"],
) -> None:
    """Show the signed-in actor."""
    actor = service.current_actor()
    if actor is None:
        raise click.ClickException("not signed in")
    click.echo(f"{actor.name} <{actor.email}>")
    click.echo(f"  Role:   {actor.role.value}")
    if actor.group:
        click.echo(f"  Group:  {actor.group}")
    click.echo(f"  ID:     {actor.actor_id}")


@session.command("logout")
@di.inject
def logout(
    service: SessionService = di.Provide["auth.session"],
) -> None:
    """Sign out."""
    service.logout()
    click.echo("Signed out")
