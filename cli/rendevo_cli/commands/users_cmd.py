from __future__ import annotations

import asyncio
from typing import Any

import typer
from rendevo_client import RendevoClientError

from .. import console
from ..config import ENV_BASE_URL
from ..formatting import user_lines, users_table
from ..http import exit_on_error, make_client, session

app = typer.Typer(help="User commands. Each command logs in with the given credentials first.")

BASE_URL_OPTION = typer.Option(..., "--base-url", envvar=ENV_BASE_URL, help="API base URL.")
TIMEOUT_OPTION = typer.Option(None, "--timeout-ms", help="Request timeout in milliseconds.")
JSON_OPTION = typer.Option(False, "--json", help="Print raw JSON.")
EMAIL_OPTION = typer.Option(..., "--email", prompt=True, help="Email to log in with.")
PASSWORD_OPTION = typer.Option(..., "--password", prompt=True, hide_input=True, help="Password to log in with.")


def _print_user(user: dict[str, Any], json_out: bool, headline: str = "User:") -> None:
    if json_out:
        console.print_json(user)
        return
    console.ok(headline)
    for line in user_lines(user):
        console.print(line)


@app.command("me")
def me(
        email: str = EMAIL_OPTION,
        password: str = PASSWORD_OPTION,
        base_url: str = BASE_URL_OPTION,
        timeout_ms: int | None = TIMEOUT_OPTION,
        json_out: bool = JSON_OPTION,
):
    async def _run() -> dict:
        async with make_client(base_url, timeout_ms=timeout_ms) as client:
            async with session(client, email, password):
                return await client.users.get_me()

    try:
        user = asyncio.run(_run())
    except RendevoClientError as e:
        exit_on_error("Fetching current user", e)
    _print_user(user, json_out)


@app.command("list")
def list_users(
        email: str = EMAIL_OPTION,
        password: str = PASSWORD_OPTION,
        base_url: str = BASE_URL_OPTION,
        timeout_ms: int | None = TIMEOUT_OPTION,
        json_out: bool = JSON_OPTION,
):
    async def _run() -> list:
        async with make_client(base_url, timeout_ms=timeout_ms) as client:
            async with session(client, email, password):
                return await client.users.get_all()

    try:
        users = asyncio.run(_run())
    except RendevoClientError as e:
        exit_on_error("Listing users", e)

    if json_out:
        console.print_json(users)
        return
    console.info(f"total={len(users or [])}")
    console.print(users_table(users or []))


@app.command("show")
def show_user(
        user_id: str = typer.Argument(..., help="User ID."),
        email: str = EMAIL_OPTION,
        password: str = PASSWORD_OPTION,
        base_url: str = BASE_URL_OPTION,
        timeout_ms: int | None = TIMEOUT_OPTION,
        json_out: bool = JSON_OPTION,
):
    async def _run() -> dict:
        async with make_client(base_url, timeout_ms=timeout_ms) as client:
            async with session(client, email, password):
                return await client.users.get_by_id(user_id)

    try:
        user = asyncio.run(_run())
    except RendevoClientError as e:
        exit_on_error("Fetching user", e)
    _print_user(user, json_out)


@app.command("update")
def update_user(
        user_id: str = typer.Argument(..., help="User ID."),
        new_email: str | None = typer.Option(None, "--new-email", help="New email address."),
        first_name: str | None = typer.Option(None, "--first-name", help="New first name."),
        last_name: str | None = typer.Option(None, "--last-name", help="New last name."),
        active: bool | None = typer.Option(None, "--active/--inactive", help="Activate or deactivate."),
        email: str = EMAIL_OPTION,
        password: str = PASSWORD_OPTION,
        base_url: str = BASE_URL_OPTION,
        timeout_ms: int | None = TIMEOUT_OPTION,
        json_out: bool = JSON_OPTION,
):
    changes: dict[str, Any] = {}
    if new_email:
        changes["email"] = new_email
    if first_name:
        changes["firstName"] = first_name
    if last_name:
        changes["lastName"] = last_name
    if active is not None:
        changes["isActive"] = active
    if not changes:
        console.err("Nothing to update. Pass at least one of --new-email, --first-name, --last-name, --active.")
        raise typer.Exit(code=2)

    async def _run() -> dict:
        async with make_client(base_url, timeout_ms=timeout_ms) as client:
            async with session(client, email, password):
                return await client.users.update(user_id, changes)

    try:
        user = asyncio.run(_run())
    except RendevoClientError as e:
        exit_on_error("Updating user", e)
    _print_user(user, json_out, headline="User updated:")


@app.command("remove")
def remove_user(
        user_id: str = typer.Argument(..., help="User ID."),
        yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation."),
        email: str = EMAIL_OPTION,
        password: str = PASSWORD_OPTION,
        base_url: str = BASE_URL_OPTION,
        timeout_ms: int | None = TIMEOUT_OPTION,
):
    if not yes and not typer.confirm(f"Remove user {user_id}?", default=False):
        console.info("Aborted.")
        raise typer.Exit(code=0)

    async def _run() -> None:
        async with make_client(base_url, timeout_ms=timeout_ms) as client:
            async with session(client, email, password):
                await client.users.remove(user_id)

    try:
        asyncio.run(_run())
    except RendevoClientError as e:
        exit_on_error("Removing user", e)
    console.ok(f"User {user_id} removed.")
