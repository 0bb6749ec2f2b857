#!/usr/bin/env python3
"""
ups CLI

Command-line interface for tracking the values reported by checker scripts.
"""

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ups.config import load_config
from ups.errors import UpsError
from ups.log import setup_logging
from ups.refresh import RefreshEngine
from ups.registry import Registry
from ups.runner import ScriptRunner
from ups.store import NONE, DataStore

console = Console()


def get_store(ctx: click.Context) -> DataStore:
    """Get the data store for the current invocation."""
    return DataStore(ctx.obj["data_path"])


def get_engine(ctx: click.Context) -> RefreshEngine:
    runner = ScriptRunner(timeout=ctx.obj["timeout"])
    return RefreshEngine(runner, max_workers=ctx.obj["max_workers"])


def fail(error: Exception):
    """Report an error and exit with status 1."""
    console.print(f"[red]Error:[/red] {escape(str(error))}")
    raise click.exceptions.Exit(1)


def build_table(registry: Registry) -> Table:
    """Render the registry as a table; values are green when snapshot == latest."""
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("App", style="yellow")
    table.add_column("SnapshotValue")
    table.add_column("LatestValue")
    table.add_column("ScriptPath", style="magenta", overflow="fold")

    for name, app in sorted(registry.all()):
        color = "green" if app.up_to_date else "red"
        table.add_row(
            escape(name),
            f"[{color}]{escape(app.snapshot_value or NONE)}[/{color}]",
            f"[{color}]{escape(app.latest_value or NONE)}[/{color}]",
            escape(str(app.script_path)),
        )

    return table


def print_registry(registry: Registry):
    if not len(registry):
        console.print("[yellow]![/yellow] No apps registered. Add one with 'ups insert NAME SCRIPT'.")
        return
    console.print(build_table(registry))


@click.group(invoke_without_command=True)
@click.version_option(version="0.1.0", prog_name="ups")
@click.option("--data-file", type=click.Path(dir_okay=False, path_type=Path),
              help="Data file to use instead of the per-user default")
@click.option("--config", "config_file", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="Path to config.yaml")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx, data_file, config_file, verbose):
    """ups - know when the things you track have changed

    Each app has a checker script that prints its current value. Running
    ups with no command re-runs every checker and shows which apps have a
    latest value different from the snapshot you last accepted.
    """
    try:
        config = load_config(config_file)
    except UpsError as e:
        fail(e)

    setup_logging("DEBUG" if verbose else config["logging"]["level"])

    ctx.obj = {
        "data_path": data_file or config["data"]["path"],
        "max_workers": config["refresh"]["max_workers"],
        "timeout": config["refresh"]["timeout"],
    }

    if ctx.invoked_subcommand is None:
        ctx.invoke(refresh)


@main.command()
@click.pass_context
def refresh(ctx):
    """Re-run every checker and show the results."""
    store = get_store(ctx)
    engine = get_engine(ctx)

    try:
        with store.session() as registry:
            report = engine.refresh_all(registry)
            console.print()
            print_registry(registry)
    except UpsError as e:
        fail(e)

    if report.checked:
        updates = sum(1 for _, app in registry.all() if not app.up_to_date)
        failed = len(report.failed)
        console.print(
            f"{report.checked} checked, "
            f"{'[red]' if failed else ''}{failed} failed{'[/red]' if failed else ''}, "
            f"{updates} with updates"
        )


@main.command(name="list")
@click.pass_context
def list_apps(ctx):
    """Show stored values without running any checker."""
    try:
        registry = get_store(ctx).load()
    except UpsError as e:
        fail(e)
    print_registry(registry)


@main.command()
@click.argument("name")
@click.argument("script_path", type=click.Path(path_type=Path))
@click.pass_context
def insert(ctx, name, script_path):
    """Register NAME with the checker script at SCRIPT_PATH.

    Re-inserting an existing name replaces it and clears its values.
    """
    try:
        with get_store(ctx).session() as registry:
            replaced = name in registry
            app = registry.insert(name, script_path)
    except UpsError as e:
        fail(e)

    verb = "Replaced" if replaced else "Registered"
    console.print(f"[green]✓[/green] {verb} [yellow]{escape(name)}[/yellow] -> {escape(str(app.script_path))}")


@main.command()
@click.argument("name")
@click.pass_context
def snapshot(ctx, name):
    """Re-check NAME and accept its value as the new snapshot."""
    engine = get_engine(ctx)

    try:
        with get_store(ctx).session() as registry:
            app = registry.snapshot(name, engine.runner)
    except UpsError as e:
        fail(e)

    console.print(f"[green]✓[/green] Snapshot of [yellow]{escape(name)}[/yellow]: {escape(app.snapshot_value or NONE)}")


@main.command()
@click.argument("name")
@click.option("--strict", is_flag=True, help="Exit with an error if the checker fails")
@click.pass_context
def get(ctx, name, strict):
    """Run the checker for NAME and print its current value."""
    engine = get_engine(ctx)

    try:
        with get_store(ctx).session() as registry:
            result = engine.refresh_one(registry, name)
            if strict:
                result.raise_for_status(name)
    except UpsError as e:
        fail(e)

    click.echo(result.value or NONE)


@main.command()
@click.argument("name")
@click.pass_context
def remove(ctx, name):
    """Stop tracking NAME."""
    try:
        with get_store(ctx).session() as registry:
            registry.remove(name)
    except UpsError as e:
        fail(e)

    console.print(f"[green]✓[/green] Removed [yellow]{escape(name)}[/yellow]")


if __name__ == "__main__":
    main()
