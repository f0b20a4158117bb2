"""
CLI commands for package management.

Thin wrappers over ``toolshed.core.use_cases``. Every command runs
inside ``_session``: the manifest is loaded on entry and written on
exit, including after a fatal error so earlier installs stay recorded.
"""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, NoReturn

import click

from toolshed.core.services.errors import ToolshedError

if TYPE_CHECKING:
    from toolshed.core.use_cases.session import Session

logger = logging.getLogger(__name__)


def _fail(err: ToolshedError) -> NoReturn:
    click.secho(f"error: {err}", fg="red", err=True)
    sys.exit(1)


@contextmanager
def _session(ctx: click.Context) -> Iterator[Session]:
    """Open a session, persist the manifest on the way out."""
    from toolshed.core.use_cases.session import close_session, open_session

    try:
        session = open_session(ctx.obj.get("root"))
    except ToolshedError as e:
        _fail(e)

    try:
        yield session
    except ToolshedError as e:
        try:
            close_session(session)
        except ToolshedError as save_err:
            logger.error("Manifest not saved: %s", save_err)
        _fail(e)

    try:
        close_session(session)
    except ToolshedError as e:
        _fail(e)


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


# ── Info ────────────────────────────────────────────────────────


@click.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def info(ctx: click.Context, as_json: bool) -> None:
    """Show directories, platform and installed count."""
    from toolshed.core.use_cases.info import get_info

    with _session(ctx) as session:
        result = get_info(session)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    click.secho("🧰 toolshed", fg="cyan", bold=True)
    click.echo(f"   Root:      {result.root_dir}")
    click.echo(f"   Bin:       {result.bin_dir}")
    click.echo(f"   Packages:  {result.pkg_dir}")
    click.echo(f"   Config:    {result.config_path}")
    click.echo(f"   Platform:  {result.platform}")
    click.echo()
    click.echo(f"{_plural(result.installed_count, 'installed package')}.")


# ── Check ───────────────────────────────────────────────────────


@click.command()
@click.option("--all", "show_all", is_flag=True, help="Also show up-to-date packages.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def check(ctx: click.Context, show_all: bool, as_json: bool) -> None:
    """Check installed packages for newer releases."""
    from toolshed.core.use_cases.check import run_check

    with _session(ctx) as session:
        report = run_check(session)

    if as_json:
        click.echo(json.dumps([
            {
                "name": item.name,
                "installed": item.installed.render(),
                "latest": item.latest.render() if item.latest else None,
                "status": item.status,
                "error": item.error,
            }
            for item in report.items
        ], indent=2))
        return

    if not report.items:
        click.echo("No packages installed.")
        return

    for item in report.items:
        if item.status == "current":
            if show_all:
                click.secho(f"   ✓ {item.name}: {item.installed}", fg="green")
        elif item.status == "outdated":
            click.secho(f"   ↑ {item.name}: {item.installed} → {item.latest}", fg="yellow")
        elif item.status == "unresolved":
            click.secho(f"   ? {item.name}: unable to resolve version", fg="yellow")
        else:
            click.secho(f"   ✗ {item.name}: {item.error}", fg="red")

    if not show_all:
        click.echo(f"{_plural(report.current_count, 'package')} up to date")


# ── List ────────────────────────────────────────────────────────


@click.command("list")
@click.option("--all", "-a", "show_all", is_flag=True, help="Include packages not installed.")
@click.option("--detailed", "-d", is_flag=True, help="Show repo, install methods and binary.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def list_cmd(ctx: click.Context, show_all: bool, detailed: bool, as_json: bool) -> None:
    """List installed packages."""
    from toolshed.core.use_cases.listing import list_packages

    with _session(ctx) as session:
        entries = list_packages(session, include_all=show_all)

    if as_json:
        click.echo(json.dumps([
            {
                "name": e.name,
                "version": e.version.render() if e.version else None,
                "repo": e.repo,
                "bin": e.bin_name,
                "installers": e.installers,
            }
            for e in entries
        ], indent=2))
        return

    if not entries:
        click.echo("No packages installed.")
        return

    for entry in entries:
        if entry.installed:
            click.echo(f"{entry.name}: {entry.version}")
        else:
            click.secho(f"{entry.name} (not installed)", dim=True)
        if detailed:
            click.echo(f"   repo: {entry.repo}")
            click.echo(f"   via:  {', '.join(entry.installers)}")
            click.echo(f"   bin:  {entry.bin_name}")


# ── Install / uninstall / update ────────────────────────────────


def _announce(name: str, status: str) -> None:
    if status == "installing":
        click.secho(f"📦 Installing {name}...", fg="cyan")


@click.command()
@click.argument("name", required=False)
@click.option(
    "--version", "-v", "version", default=None, help="Version to install (default: latest)."
)
@click.pass_context
def install(ctx: click.Context, name: str | None, version: str | None) -> None:
    """Install NAME, after any missing ensure-installed packages."""
    from toolshed.core.use_cases.install import run_install

    with _session(ctx) as session:
        result = run_install(session, name, version, on_progress=_announce)

    outcomes = list(result.ensured)
    if result.requested is not None:
        outcomes.append(result.requested)

    for outcome in outcomes:
        if outcome.already_installed:
            click.secho(
                f"⚠️  {outcome.name} already installed. Use 'update' to update.", fg="yellow"
            )
            continue
        click.secho(f"✅ {outcome.name} {outcome.version} installed", fg="green")
        if not outcome.version_resolved:
            click.echo("   Unable to resolve version so the latest version was installed.")

    if not outcomes and not ctx.obj.get("quiet"):
        click.echo("Nothing to install.")


@click.command()
@click.argument("name")
@click.pass_context
def uninstall(ctx: click.Context, name: str) -> None:
    """Uninstall NAME."""
    from toolshed.core.use_cases.uninstall import run_uninstall

    with _session(ctx) as session:
        result = run_uninstall(session, name)

    if result.removed:
        click.secho(f"🗑️  {name} {result.version} uninstalled", fg="green")
    else:
        click.secho(f"⚠️  {name} not installed", fg="yellow")


@click.command()
@click.argument("name")
@click.option(
    "--version", "-v", "version", default=None, help="Version to update to (default: latest)."
)
@click.pass_context
def update(ctx: click.Context, name: str, version: str | None) -> None:
    """Update NAME to the latest (or given) version."""
    from toolshed.core.use_cases.update import run_update

    with _session(ctx) as session:
        if session.manifest.installed(name):
            click.secho(f"⬆️  Updating {name}...", fg="cyan")
        result = run_update(session, name, version)

    if result.updated:
        click.secho(f"✅ {name} {result.previous} → {result.current}", fg="green")
    else:
        click.secho(f"⚠️  {name} not installed", fg="yellow")
