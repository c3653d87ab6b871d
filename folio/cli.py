"""Command-line interface for Folio.

This module defines the CLI commands using Click framework.

Commands:
- compile: Read the content tree, copy resources and report what was found.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from . import __version__


@click.group()
@click.version_option(version=__version__, prog_name="folio")
@click.option("-v", "--verbose", is_flag=True, help="Log every discovered and copied file")
def cli(verbose: bool):
    """Folio static site compiler."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command(name="compile")
@click.option("--drafts", is_flag=True, help="Include draft content")
@click.option("--keep-output", is_flag=True, help="Do not wipe public/ before copying")
def compile_command(drafts: bool, keep_output: bool):
    """Compile content/ and copy resources into public/."""
    project_root = Path.cwd()
    from .build import compile_site
    from .errors import ContentError, FolioError

    try:
        result = compile_site(
            project_root,
            include_drafts=drafts or None,
            clean_output=not keep_output,
        )
    except ContentError as exc:
        click.echo(click.style("Compile failed:", fg="red", bold=True), err=True)
        click.echo(click.style(f"  File: {_relative(exc.source_path, project_root)}", fg="yellow"), err=True)
        click.echo(click.style(f"  Error: {exc.message}", fg="white"), err=True)
        raise SystemExit(1) from None
    except FolioError as exc:
        click.echo(click.style("Compile failed:", fg="red", bold=True), err=True)
        click.echo(click.style(f"  Error: {exc}", fg="white"), err=True)
        raise SystemExit(1) from None

    click.echo(
        f"Compiled {len(result.pages)} pages and {len(result.posts)} posts "
        f"({len(result.tags)} tags, {len(result.authors)} authors)"
    )


def _relative(path: Path, root: Path) -> Path:
    """Return path relative to root when it lies below it."""
    try:
        return path.resolve().relative_to(root.resolve())
    except ValueError:
        return path


def main():
    """Entry point for the CLI application."""
    cli()
