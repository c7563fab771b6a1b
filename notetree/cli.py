"""CLI entrypoint for notetree."""

import logging
import sys
from pathlib import Path

import click

from . import __version__
from .config import CONFIG_FILENAME, load_config
from .errors import ConfigError


def _auto_detect_vault(start: Path) -> Path:
    """Find the nearest directory holding a notetree.toml, else `start`."""
    cur = start.resolve()
    for p in (cur, *cur.parents):
        if (p / CONFIG_FILENAME).is_file():
            return p
    return cur


def _setup_logging(verbose: bool) -> None:
    from rich.console import Console
    from rich.logging import RichHandler

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(__version__, prog_name="notetree")
@click.option(
    "--vault",
    "-v",
    type=click.Path(exists=False, file_okay=False, dir_okay=True, path_type=Path),
    default=None,
    help="Directory holding the notes (defaults to the nearest folder with notetree.toml, else the cwd)",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help=f"Settings file (default: <vault>/{CONFIG_FILENAME} if present)",
)
@click.option("--verbose", is_flag=True, help="Log walk and render details to stderr")
@click.pass_context
def cli(ctx: click.Context, vault: Path | None, config_path: Path | None, verbose: bool) -> None:
    """notetree - browse linked notes as an indented tree.

    Notes are files named ID==SIGNATURE--TITLE__KEYWORDS.ext that link to
    each other with denote:ID references.
    """
    _setup_logging(verbose)
    ctx.ensure_object(dict)

    if vault is None:
        vault = _auto_detect_vault(Path.cwd())
    if not vault.exists() or not vault.is_dir():
        raise click.BadParameter(f"Directory '{vault}' does not exist.", param_hint="--vault / -v")

    if config_path is None:
        default_config = vault / CONFIG_FILENAME
        config_path = default_config if default_config.is_file() else None

    try:
        ctx.obj["config"] = load_config(config_path)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    ctx.obj["vault"] = vault.resolve()


@cli.command()
@click.argument("root")
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["rich", "text", "json"]),
    default="rich",
    show_default=True,
    help="Output format",
)
@click.option("--out", type=click.Path(dir_okay=False, path_type=Path), default=None, help="Write output to a file")
@click.pass_context
def tree(ctx: click.Context, root: str, fmt: str, out: Path | None) -> None:
    """Print the link tree below a note.

    Notes reached a second time (cycles, or a second parent) are shown as
    highlighted stubs instead of being expanded again.

    Examples:

        notetree tree 20240101T120000

        notetree tree 20240101T120000 --format text --out tree.txt
    """
    from .commands.tree_cmd import run_tree

    exit_code = run_tree(ctx.obj["vault"], root, config=ctx.obj["config"], fmt=fmt, out=out)
    sys.exit(exit_code)


@cli.command()
@click.argument("root")
@click.pass_context
def browse(ctx: click.Context, root: str) -> None:
    """Navigate the link tree below a note interactively.

    \b
    n / p     next / previous sibling (prefix digits to repeat)
    i / u     into the first child / up to the parent
    o, Enter  open the note in $EDITOR
    r         rebuild the tree rooted at the current note
    g         back to the root
    q         quit
    """
    from .commands.browse_cmd import run_browse

    exit_code = run_browse(ctx.obj["vault"], root, config=ctx.obj["config"])
    sys.exit(exit_code)


@cli.command()
@click.argument("identifier")
@click.pass_context
def links(ctx: click.Context, identifier: str) -> None:
    """List the identifiers a note links to, in order."""
    from .commands.tree_cmd import run_links

    sys.exit(run_links(ctx.obj["vault"], identifier, config=ctx.obj["config"]))


@cli.command()
@click.argument("identifier")
@click.pass_context
def show(ctx: click.Context, identifier: str) -> None:
    """Show the attributes the store reads for a note."""
    from .commands.tree_cmd import run_show

    sys.exit(run_show(ctx.obj["vault"], identifier, config=ctx.obj["config"]))


@cli.command("list")
@click.pass_context
def list_notes(ctx: click.Context) -> None:
    """List every note identifier with its title, to pick a root from."""
    from .commands.tree_cmd import run_list

    sys.exit(run_list(ctx.obj["vault"], config=ctx.obj["config"]))


def main() -> None:
    """Main entrypoint."""
    cli()


if __name__ == "__main__":
    main()
