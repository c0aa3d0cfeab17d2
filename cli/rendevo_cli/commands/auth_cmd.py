from __future__ import annotations

import asyncio

import typer
from rendevo_client import RendevoClientError

from .. import console
from ..config import ENV_BASE_URL
from ..formatting import user_lines
from ..http import exit_on_error, make_client

app = typer.Typer(help="Auth commands.")

BASE_URL_OPTION = typer.Option(..., "--base-url", envvar=ENV_BASE_URL, help="API base URL.")
TIMEOUT_OPTION = typer.Option(None, "--timeout-ms", help="Request timeout in milliseconds.")
JSON_OPTION = typer.Option(False, "--json", help="Print raw JSON.")


def _print_auth(data: dict, json_out: bool, headline: str) -> None:
    if json_out:
        console.print_json(data)
        return
    console.ok(headline)
    for line in user_lines(data.get("user") or {}):
        console.print(line)


def _print_message(data: dict, json_out: bool) -> None:
    if json_out:
        console.print_json(data)
        return
    console.ok(str(data.get("message") or "Done."))


@app.command("login", help="Check credentials and show the account. The session is closed again afterwards.")
def login(
        email: str = typer.Argument(..., help="Account email."),
        password: str = typer.Option(..., "--password", prompt=True, hide_input=True, help="Password."),
        base_url: str = BASE_URL_OPTION,
        timeout_ms: int | None = TIMEOUT_OPTION,
        json_out: bool = JSON_OPTION,
):
    async def _run() -> dict:
        async with make_client(base_url, timeout_ms=timeout_ms) as client:
            data = await client.auth.login({"email": email, "password": password})
            await client.auth.logout({"refreshToken": data["refresh_token"]})
            return data

    try:
        data = asyncio.run(_run())
    except RendevoClientError as e:
        exit_on_error("Login", e)
    _print_auth(data, json_out, f"Logged in as {data['user']['email']}.")


@app.command("register")
def register(
        email: str = typer.Argument(..., help="Account email."),
        password: str = typer.Option(..., "--password", prompt=True, hide_input=True,
                                     confirmation_prompt=True, help="Password."),
        first_name: str = typer.Option(..., "--first-name", prompt=True, help="First name."),
        last_name: str = typer.Option(..., "--last-name", prompt=True, help="Last name."),
        base_url: str = BASE_URL_OPTION,
        timeout_ms: int | None = TIMEOUT_OPTION,
        json_out: bool = JSON_OPTION,
):
    async def _run() -> dict:
        async with make_client(base_url, timeout_ms=timeout_ms) as client:
            return await client.auth.register(
                {"email": email, "password": password, "firstName": first_name, "lastName": last_name}
            )

    try:
        data = asyncio.run(_run())
    except RendevoClientError as e:
        exit_on_error("Registration", e)
    _print_auth(data, json_out, f"Registered {data['user']['email']}. Check your inbox to verify the address.")


@app.command("refresh", help="Log in, then exchange the refresh token for a new token pair.")
def refresh(
        email: str = typer.Argument(..., help="Account email."),
        password: str = typer.Option(..., "--password", prompt=True, hide_input=True, help="Password."),
        base_url: str = BASE_URL_OPTION,
        timeout_ms: int | None = TIMEOUT_OPTION,
        json_out: bool = JSON_OPTION,
):
    async def _run() -> dict:
        async with make_client(base_url, timeout_ms=timeout_ms) as client:
            login_data = await client.auth.login({"email": email, "password": password})
            data = await client.auth.refresh({"refreshToken": login_data["refresh_token"]})
            await client.auth.logout({"refreshToken": data["refresh_token"]})
            return data

    try:
        data = asyncio.run(_run())
    except RendevoClientError as e:
        exit_on_error("Token refresh", e)
    _print_auth(data, json_out, f"Token refreshed for {data['user']['email']}.")


@app.command("forgot-password")
def forgot_password(
        email: str = typer.Argument(..., help="Account email."),
        base_url: str = BASE_URL_OPTION,
        timeout_ms: int | None = TIMEOUT_OPTION,
        json_out: bool = JSON_OPTION,
):
    async def _run() -> dict:
        async with make_client(base_url, timeout_ms=timeout_ms) as client:
            return await client.auth.forgot_password({"email": email})

    try:
        data = asyncio.run(_run())
    except RendevoClientError as e:
        exit_on_error("Password reset request", e)
    _print_message(data, json_out)


@app.command("reset-password")
def reset_password(
        token: str = typer.Argument(..., help="Reset token from the email."),
        new_password: str = typer.Option(..., "--new-password", prompt=True, hide_input=True,
                                         confirmation_prompt=True, help="New password."),
        base_url: str = BASE_URL_OPTION,
        timeout_ms: int | None = TIMEOUT_OPTION,
        json_out: bool = JSON_OPTION,
):
    async def _run() -> dict:
        async with make_client(base_url, timeout_ms=timeout_ms) as client:
            return await client.auth.reset_password({"token": token, "newPassword": new_password})

    try:
        data = asyncio.run(_run())
    except RendevoClientError as e:
        exit_on_error("Password reset", e)
    _print_message(data, json_out)


@app.command("verify-email")
def verify_email(
        token: str = typer.Argument(..., help="Verification token from the email."),
        base_url: str = BASE_URL_OPTION,
        timeout_ms: int | None = TIMEOUT_OPTION,
        json_out: bool = JSON_OPTION,
):
    async def _run() -> dict:
        async with make_client(base_url, timeout_ms=timeout_ms) as client:
            return await client.auth.verify_email({"token": token})

    try:
        data = asyncio.run(_run())
    except RendevoClientError as e:
        exit_on_error("Email verification", e)
    _print_message(data, json_out)


@app.command("resend-verification")
def resend_verification(
        email: str = typer.Argument(..., help="Account email."),
        base_url: str = BASE_URL_OPTION,
        timeout_ms: int | None = TIMEOUT_OPTION,
        json_out: bool = JSON_OPTION,
):
    async def _run() -> dict:
        async with make_client(base_url, timeout_ms=timeout_ms) as client:
            return await client.auth.resend_verification({"email": email})

    try:
        data = asyncio.run(_run())
    except RendevoClientError as e:
        exit_on_error("Resend verification", e)
    _print_message(data, json_out)
