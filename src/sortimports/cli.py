"""Command-line interface for sortimports using Click."""
from __future__ import annotations

import logging
import sys
from importlib import metadata
from pathlib import Path
from typing import Any

import click

from sortimports.core.config import ConfigError, SortOrderConfig, TypeSortStrategy, load_config
from sortimports.core.results import BatchResult
from sortimports.core.sortimports import SortImports

LOG = logging.getLogger(__name__)

try:
    VERSION = metadata.version("sortimports")
except metadata.PackageNotFoundError:
    VERSION = "unknown"

EXIT_CLEAN = 0
EXIT_VIOLATIONS = 1
EXIT_ERROR = 2


def _collect_options(
    ignore_case: bool | None,
    ignore_member_sort: bool | None,
    type_sort_strategy: str | None,
    member_syntax_sort_order: str | None,
    strict_runs: bool | None,
) -> dict[str, Any]:
    """Options given on the command line, ready for SortOrderConfig."""
    options: dict[str, Any] = {}
    if ignore_case is not None:
        options["ignoreCase"] = ignore_case
    if ignore_member_sort is not None:
        options["ignoreMemberSort"] = ignore_member_sort
    if type_sort_strategy is not None:
        options["typeSortStrategy"] = type_sort_strategy
    if member_syntax_sort_order is not None:
        options["memberSyntaxSortOrder"] = [p.strip() for p in member_syntax_sort_order.split(",") if p.strip()]
    if strict_runs is not None:
        options["strictRuns"] = strict_runs
    return options


def _build_config(ctx: click.Context, paths: tuple[str, ...]) -> SortOrderConfig:
    obj = ctx.obj or {}
    config_path = obj.get("config_path")
    start = Path(config_path) if config_path else Path(paths[0]) if paths else Path.cwd()
    return load_config(start).merged(obj.get("options", {}))


def _report(batch: BatchResult) -> int:
    exit_code = EXIT_CLEAN
    for result in batch:
        if result.is_error():
            LOG.error(result.message)
            exit_code = EXIT_ERROR
            continue
        for violation in result.violations:
            suffix = "" if violation.fixable else " (no fix available)"
            click.echo(f"{result.path}:{violation.line}: {violation.message}{suffix}")
            exit_code = max(exit_code, EXIT_VIOLATIONS)
    return exit_code


def _run(ctx: click.Context, paths: tuple[str, ...], fix: bool, dry_run: bool, show_diff: bool) -> int:
    try:
        config = _build_config(ctx, paths)
    except ConfigError as e:
        LOG.error("Invalid configuration: %s", e)
        return EXIT_ERROR

    exit_code = EXIT_CLEAN
    for path in paths:
        sorter = SortImports(path, dry_run=dry_run, config=config)
        if not sorter.files:
            LOG.warning("No supported files found for %s", path)
            continue
        LOG.debug("Processing %d file(s) under %s", len(sorter.files), path)
        batch = sorter.fix() if fix else sorter.check()
        exit_code = max(exit_code, _report(batch))
        if fix:
            for changed in batch.files_changed:
                LOG.info("[%s] %s", changed, "imports would be sorted." if dry_run else "file updated.")
            if dry_run and batch.files_changed:
                exit_code = max(exit_code, EXIT_VIOLATIONS)
        if show_diff and batch.diff:
            click.echo(batch.diff)
    return exit_code


def sort_options(func):
    """Ordering options shared by ``check`` and ``fix``."""
    options = [
        click.option("--ignore-case/--no-ignore-case", default=None, help="Compare names case-insensitively."),
        click.option(
            "--ignore-member-sort/--no-ignore-member-sort",
            default=None,
            help="Do not sort names inside a single import.",
        ),
        click.option(
            "--type-sort-strategy",
            type=click.Choice([s.value for s in TypeSortStrategy]),
            default=None,
            help="Place type imports before, after or mixed with other imports.",
        ),
        click.option(
            "--member-syntax-sort-order",
            default=None,
            metavar="ORDER",
            help="Comma-separated order of none,all,multiple,single.",
        ),
        click.option(
            "--strict-runs/--no-strict-runs",
            default=None,
            help="Also split groups at comments between imports.",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _store_options(ctx: click.Context, **kwargs: Any) -> None:
    ctx.ensure_object(dict)
    ctx.obj.setdefault("options", {}).update(_collect_options(**kwargs))


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Increase verbosity.")
@click.option("-q", "--quiet", is_flag=True, help="Suppress non-error output.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="pyproject.toml to read [tool.sortimports] from.",
)
@click.version_option(version=VERSION, prog_name="sortimports")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, quiet: bool, config_path: str | None) -> None:
    """Check and fix the order of import statements."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    # Configure logging only once
    if not logging.getLogger().handlers:
        if quiet:
            logging.basicConfig(level=logging.ERROR, format="%(message)s")
        else:
            logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format="%(message)s")


@cli.command(help="Report import order violations without modifying files.")
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True))
@sort_options
@click.pass_context
def check(ctx: click.Context, paths: tuple[str, ...], **kwargs: Any) -> None:
    _store_options(ctx, **kwargs)
    sys.exit(_run(ctx, paths, fix=False, dry_run=False, show_diff=False))


@cli.command(help="Sort imports in place.")
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True))
@click.option("--dry-run", is_flag=True, help="Report what would change without writing files.")
@click.option("--diff", "show_diff", is_flag=True, help="Print a unified diff of the changes.")
@sort_options
@click.pass_context
def fix(ctx: click.Context, paths: tuple[str, ...], dry_run: bool, show_diff: bool, **kwargs: Any) -> None:
    _store_options(ctx, **kwargs)
    sys.exit(_run(ctx, paths, fix=True, dry_run=dry_run, show_diff=show_diff))


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    cli()
