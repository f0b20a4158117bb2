"""
toolshed — CLI entrypoint.

Usage:
    toolshed --help
    toolshed install bat
    toolshed check --all
    python -m toolshed.main list --detailed
"""

from __future__ import annotations

from pathlib import Path

import click

from toolshed import __version__
from toolshed.core.observability.logging_config import level_from_flags, setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="toolshed")
@click.option("--verbose", "-v", is_flag=True, help="Log install steps (INFO).")
@click.option("--quiet", "-q", is_flag=True, help="Only report errors.")
@click.option("--debug", is_flag=True, help="Log HTTP requests and commands (DEBUG).")
@click.option(
    "--root",
    "root",
    type=click.Path(file_okay=False),
    default=None,
    envvar="TOOLSHED_ROOT",
    help="Toolshed home (default: $TOOLSHED_ROOT or ~/.toolshed).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    root: str | None,
) -> None:
    """toolshed — install and update developer tools from GitHub releases."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["root"] = Path(root) if root else None

    # ── Logging: configured once per process ────────────────────
    setup_logging(level=level_from_flags(verbose=verbose, quiet=quiet, debug=debug))


# ── Register commands from toolshed/ui/cli/ ───────────────────────

from toolshed.ui.cli.packages import check, info, install, list_cmd, uninstall, update  # noqa: E402

cli.add_command(info)
cli.add_command(check)
cli.add_command(list_cmd)
cli.add_command(install)
cli.add_command(uninstall)
cli.add_command(uninstall, name="remove")
cli.add_command(uninstall, name="rm")
cli.add_command(update)


if __name__ == "__main__":
    cli()
