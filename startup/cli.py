"""
Startup Pipeline CLI
Provides run, check and steps commands
"""

import asyncio
import json
import logging
import sys


try:
    import typer
    from rich.console import Console
    from rich.table import Table
except ImportError:
    print("Error: CLI dependencies not installed.")
    print("Install with: pip install typer rich")
    sys.exit(1)

from .runtime.config import StartupConfig, load_config
from .runtime.errors import ConfigurationError, StartupConfigError
from .runtime.host import StartupHost
from .runtime.pipeline import PipelineReport
from .runtime.step_factory import default_factory, describe


app = typer.Typer(help="Startup pipeline CLI")
console = Console()


def _load(config_path: str | None) -> StartupConfig:
    try:
        return load_config(config_path)
    except StartupConfigError as e:
        console.print(f"\n[red]✗ {e}[/red]\n")
        raise typer.Exit(2) from e


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


async def _start(host: StartupHost) -> PipelineReport:
    task = host.activate()
    if task is not None:
        return await task
    return await host.initialize_application()


@app.command()
def run(
    config_path: str | None = typer.Argument(
        None,
        help="Path to startup YAML config (defaults and env vars if omitted)",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the report as JSON"),
):
    """Run the configured startup pipeline"""
    config = _load(config_path)
    _configure_logging(config.log_level)

    host = StartupHost.from_config(config)
    report = asyncio.run(_start(host))

    if as_json:
        console.print_json(json.dumps(report.to_dict()))
    else:
        table = Table(title="Startup steps")
        table.add_column("#", justify="right")
        table.add_column("Step")
        table.add_column("Status")
        table.add_column("Error")
        for outcome in report.outcomes:
            status = "[green]✓ ok[/green]" if outcome.success else "[red]✗ failed[/red]"
            error = str(outcome.error.cause) if outcome.error else ""
            table.add_row(str(outcome.index), outcome.step_id, status, error)
        console.print(table)

    if report.fault:
        console.print(f"\n[red]✗ {report.fault}[/red]\n")
        raise typer.Exit(1)

    if report.failed:
        console.print(
            f"\n[yellow]⚠[/yellow] Initialized with {len(report.failed)} failed step(s)\n",
        )
    else:
        console.print("\n[bold green]Application initialized![/bold green]\n")


@app.command()
def check(
    config_path: str | None = typer.Argument(
        None,
        help="Path to startup YAML config",
    ),
):
    """Validate that every configured step resolves"""
    config = _load(config_path)
    factory = default_factory()

    console.print(f"\n[bold]Checking {len(config.steps)} step(s)...[/bold]\n")

    invalid = 0
    for index, descriptor in enumerate(config.steps):
        try:
            factory.resolve(descriptor)
            console.print(f"[green]✓[/green] {index}: {describe(descriptor)}")
        except ConfigurationError as e:
            invalid += 1
            console.print(f"[red]✗[/red] {index}: {e}")

    if invalid:
        console.print(f"\n[red]{invalid} invalid step(s)[/red]\n")
        raise typer.Exit(1)

    console.print("\n[bold green]All steps resolve![/bold green]\n")


@app.command()
def steps():
    """List built-in step ids"""
    factory = default_factory()

    table = Table(title="Built-in steps")
    table.add_column("Step id")
    table.add_column("Class")
    for step_id in factory.available():
        table.add_row(step_id, describe(factory.resolve(step_id)))
    console.print(table)


def main():
    """Entry point for CLI"""
    app()


if __name__ == "__main__":
    main()
