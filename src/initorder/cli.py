# cli.py
from __future__ import annotations

import sys
from pathlib import Path

import click

from initorder import settings
from initorder.dag import resolve, resolve_levels
from initorder.errors import (
    DependencyCycle,
    DuplicateUnitName,
    LoadFailure,
    MissingDependency,
    ResolutionError,
    UnitLoadError,
    UnitValidationError,
)
from initorder.loader import load_unit
from initorder.plan import load_directory
from initorder.ui.console import Console, set_console, get_console


def report_resolution_error(err: ResolutionError) -> None:
    """Render a ResolutionError with a hint for the common cases."""
    console = get_console()

    if isinstance(err, DependencyCycle):
        console.print_error(
            "Dependency cycle",
            str(err),
            suggestion="Remove one of the before/after declarations on the loop.",
        )
    elif isinstance(err, DuplicateUnitName):
        console.print_error(
            "Duplicate unit name",
            str(err),
            suggestion="Every unit needs a unique [unit].name.",
        )
    elif isinstance(err, LoadFailure) and isinstance(err.error, MissingDependency):
        console.print_error(
            "Missing dependency",
            str(err),
            suggestion=f"Add a unit named \"{err.error.dependency}\" or drop the reference from \"{err.error.unit}\".",
        )
    else:
        console.print_error("Resolution failed", str(err))


@click.group()
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug mode (show stack traces and detailed output)",
)
@click.pass_context
def cli(ctx, debug):
    """initorder: deterministic unit ordering."""
    console = Console(debug=debug)
    set_console(console)
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


@cli.command()
@click.argument("directory", required=False, default=None)
@click.option(
    "--strict/--no-strict",
    default=None,
    help="Fail on the first unit file that cannot be loaded instead of skipping it",
)
@click.option("--levels", is_flag=True, default=False, help="Print parallel stages instead of a flat order")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the ordered units as JSON (a list of stages with --levels)")
@click.pass_context
def order(ctx, directory, strict, levels, as_json):
    """Resolve the units in DIRECTORY and print their order."""
    console = get_console()

    directory = Path(directory or settings.UNIT_DIR)
    if strict is None:
        strict = settings.STRICT
    console.print_debug(f"unit directory: {directory} (strict={strict})")

    try:
        report = load_directory(directory, strict=strict)
        console.print_skipped(report.skipped)
        console.print_debug(f"loaded {len(report.units)} unit(s)")

        if levels:
            stages = resolve_levels(report.units)
            if as_json:
                console.print_json_levels(stages)
            else:
                console.print_levels(stages)
        else:
            ordered = resolve(report.units)
            if as_json:
                console.print_json(ordered)
            else:
                console.print_order(ordered)

    except ResolutionError as e:
        report_resolution_error(e)
        if ctx.obj.get("debug", False):
            console.print_exception(e)
        sys.exit(1)
    except KeyboardInterrupt:
        console.print_info("\nInterrupted by user")
        sys.exit(130)


@cli.command()
@click.argument("files", nargs=-1, required=True)
@click.pass_context
def check(ctx, files):
    """Load and validate unit FILES without resolving them."""
    console = get_console()
    failed = False

    for path in files:
        try:
            unit = load_unit(path)
        except UnitValidationError as e:
            failed = True
            console.print_check_failed(path, "validation failed", e.violations)
        except UnitLoadError as e:
            failed = True
            console.print_check_failed(path, str(e))
            if ctx.obj.get("debug", False):
                console.print_exception(e)
        else:
            console.print_check_ok(path, unit)

    if failed:
        sys.exit(1)


if __name__ == "__main__":
    cli()
