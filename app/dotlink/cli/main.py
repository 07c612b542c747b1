"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from pathlib import Path
from typing import Annotated

import typer

from dotlink import __version__
from dotlink.cli.commands import add, fix, link, unlink, validate
from dotlink.utils.log import level_for, setup_logging

# Create main Typer app
app = typer.Typer(
    name="dotlink",
    help="Declarative symlink manager for dotfiles.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"dotlink version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Manifest path (defaults to ./Link.toml, then $DOTLINK_ROOT/Link.toml).",
        ),
    ] = None,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
) -> None:
    """dotlink - Declarative symlink manager for dotfiles.

    Keep your dotfiles in one store directory, declare where each one
    belongs in Link.toml, and let dotlink maintain the symlinks.
    """
    setup_logging(level_for(verbose, quiet))

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet


# Register commands
app.command(name="validate")(validate.validate)
app.command(name="fix")(fix.fix)
app.command(name="link")(link.link)
app.command(name="add")(add.add)
app.command(name="unlink")(unlink.unlink)


if __name__ == "__main__":
    app()
