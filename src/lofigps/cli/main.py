"""Main CLI definition for lofigps."""

import typer

from lofigps import __version__
from lofigps.cli.commands.info import info
from lofigps.cli.commands.query import query
from lofigps.core.logger import set_verbose


def version_callback(value: bool) -> None:
    if value:
        print(f"lofigps {__version__}")
        raise typer.Exit()


app = typer.Typer(help="Unified GPS track store with time-based position lookup.")


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Print every service call with its parameters",
    ),
    version: bool = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show the program version",
    ),
) -> None:
    set_verbose(verbose)


app.command()(info)
app.command()(query)


if __name__ == "__main__":
    app()
