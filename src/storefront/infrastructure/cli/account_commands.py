"""CLI commands for accounts and the signed-in session."""

from __future__ import annotations

import click

from storefront.domain.exceptions import DomainException
from storefront.domain.model.identity import UserProfile
from storefront.infrastructure.bootstrap import Container


@click.command("register")
@click.option("--username", required=True, help="Unique username.")
@click.option("--name", default="", help="Full name.")
@click.option("--email", default="", help="Email address.")
@click.password_option(help="Password (asked twice if omitted).")
@click.pass_obj
def account_register(
    container: Container, username: str, name: str, email: str, password: str
) -> None:
    """Create a customer account."""
    profile = UserProfile(username=username, name=name, email=email)
    try:
        container.auth.register(profile, password)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("Account created successfully! Please login.")


@click.command("login")
@click.option("--username", required=True, help="Username.")
@click.option("--password", prompt=True, hide_input=True, help="Password.")
@click.pass_obj
def account_login(container: Container, username: str, password: str) -> None:
    """Sign in. Replaces any previous session."""
    try:
        identity = container.auth.authenticate(username, password)
        session = container.restore_session()
        previous = session.username
        session.login(identity)
        if previous is not None and previous != identity.username:
            container.discard_session(previous)
        container.persist_session(session)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Signed in as {identity.username} ({identity.role.value})")


@click.command("logout")
@click.pass_obj
def account_logout(container: Container) -> None:
    """Sign out and empty the cart."""
    try:
        session = container.restore_session()
        username = session.username
        session.logout()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if username is None:
        click.echo("Nobody is signed in.")
        return
    container.discard_session(username)
    click.echo(f"Signed out {username}.")


@click.command("whoami")
@click.pass_obj
def account_whoami(container: Container) -> None:
    """Show who is signed in."""
    identity = container.restore_session().identity
    if identity is None:
        click.echo("Nobody is signed in.")
        return
    click.echo(f"{identity.username} ({identity.role.value})")
