from __future__ import annotations

import typer

from .commands import auth_cmd, users_cmd
from .logging_ import setup_logging


def _build_app() -> typer.Typer:
    app = typer.Typer(
        name="rendevo",
        help="Rendevo API CLI",
        no_args_is_help=True,
    )
    app.add_typer(auth_cmd.app, name="auth")
    app.add_typer(users_cmd.app, name="users")

    @app.callback()
    def _main(
            verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logs."),
    ):
        setup_logging(verbose)

    return app


app = _build_app()


def main() -> None:
    app()


if __name__ == "__main__":
    main()
