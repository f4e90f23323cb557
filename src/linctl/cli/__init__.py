"""linctl CLI commands."""

from __future__ import annotations

import logging

import typer

from ._helpers import SortedGroup

app = typer.Typer(
    help="linctl - command-line client for the Linear issue tracker",
    no_args_is_help=True,
    cls=SortedGroup,
)


@app.callback(invoke_without_command=True)
def _global_options(
    ctx: typer.Context,
    json_output: bool = typer.Option(
        False,
        "--json",
        "-j",
        help="Output as JSON for all commands",
    ),
    plaintext: bool = typer.Option(
        False,
        "--plaintext",
        "-p",
        help="Plain output without colors",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log debug information to stderr",
    ),
) -> None:
    from ._json_state import set_output_flags

    set_output_flags(json_output, plaintext)
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(0)


from . import _cmd_issue  # noqa: E402

for _mod in (_cmd_issue,):
    _mod.register(app)


def main() -> None:
    """Run the linctl CLI application."""
    app()
