"""CLI entry point: licensetree.

Subcommands:
    licensetree list                         # direct dependencies
    licensetree list --recursive             # plus transitive dependencies
    licensetree list --production            # without devDependencies
    licensetree list --json --out-file x.json
"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path

import click

from licensetree.core.config import load_settings
from licensetree.core.logging import setup_logging
from licensetree.exceptions import LicenseTreeError
from licensetree.graph.installed import InstalledProject, find_project_root
from licensetree.linkers import resolve_linker
from licensetree.report.builder import get_tree
from licensetree.report.render import emit_tree
from licensetree.report.tree import tree_node_to_json


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(verbose: bool) -> None:
    """licensetree: display the licenses of a project's dependencies."""
    setup_logging(verbose=verbose)


@main.command("list")
@click.option(
    "--cwd",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
    help="Directory inside the project",
)
@click.option(
    "-R",
    "--recursive",
    is_flag=True,
    help="Include transitive dependencies (dependencies of direct dependencies)",
)
@click.option("--production", is_flag=True, help="Exclude development dependencies")
@click.option("--json", "as_json", is_flag=True, help="Format output as JSON")
@click.option(
    "--out-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write output to file",
)
@click.option("--concurrency", type=click.IntRange(min=1), default=None, help="Parallel manifest reads")
def list_licenses(
    cwd: Path,
    recursive: bool,
    production: bool,
    as_json: bool,
    out_file: Path | None,
    concurrency: int | None,
) -> None:
    """Display the licenses for all packages in the project.

    By default only direct dependencies are listed.
    """
    settings = load_settings()
    try:
        project = InstalledProject.load(find_project_root(cwd))
        tree = asyncio.run(
            get_tree(
                project,
                as_json,
                recursive,
                production,
                linker=resolve_linker(settings.node_linker),
                concurrency=concurrency or settings.manifest_concurrency,
            )
        )
    except LicenseTreeError as exc:
        raise click.ClickException(str(exc)) from exc

    out = out_file.open("w", encoding="utf-8") if out_file else sys.stdout
    try:
        if as_json:
            out.write(json.dumps(tree_node_to_json(tree), indent=2) + "\n")
        else:
            emit_tree(tree, out)
    finally:
        if out_file:
            out.close()

    if out_file:
        click.echo(f"Licenses written to {out_file}", err=True)


if __name__ == "__main__":
    main()
