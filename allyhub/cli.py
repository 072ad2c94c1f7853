"""Command-line interface for AllyHub.

Provides commands for:
- Running the countdown timer in the terminal
- Viewing the task list
- Sending a test notification
- Configuration management
"""

import asyncio
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn
from rich.table import Table

from allyhub import __version__
from allyhub.app import AllyHub
from allyhub.services.timer_service import format_seconds
from allyhub.utils.config import Config, load_config, set_config
from allyhub.utils.execution_context import AsyncioExecutionContext, ManualExecutionContext
from allyhub.utils.logging_setup import setup_logging

console = Console()


# --- Main CLI Group ---


@click.group()
@click.version_option(version=__version__, prog_name="AllyHub")
@click.option("--config", "-c", type=click.Path(exists=True), help="Path to config file")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def cli(ctx, config, verbose):
    """AllyHub - countdown timer and task list companion.

    Use 'allyhub <command> --help' for more information about a command.
    """
    ctx.ensure_object(dict)
    setup_logging(verbose)

    config_path = config if config else None
    ctx.obj["config"] = load_config(config_path)
    set_config(ctx.obj["config"])


# --- Timer Commands ---


@cli.group()
def timer():
    """Countdown timer commands."""
    pass


async def _run_countdown(config: Config) -> AllyHub:
    """Run one countdown on the current event loop until it completes."""
    loop = asyncio.get_running_loop()
    hub = AllyHub(AsyncioExecutionContext(loop), config=config)
    finished = loop.create_future()

    def on_completed(_payload):
        if not finished.done():
            finished.set_result(None)

    total = hub.timer.total_duration
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("[cyan]{task.fields[clock]}[/cyan]"),
        console=console,
    ) as progress:
        bar = progress.add_task(hub.tasks.current_task_title, total=total, clock=hub.timer.formatted_time)

        def on_remaining(remaining):
            progress.update(bar, completed=total - max(0, remaining), clock=format_seconds(remaining))

        hub.subscriptions.add(hub.timer.remaining_time_changes.subscribe(on_remaining, replay=True))
        hub.subscriptions.add(hub.timer.completed.subscribe(on_completed))
        hub.timer.start()
        try:
            await finished
        finally:
            hub.close()
    return hub


@timer.command("run")
@click.option("--duration", "-d", type=click.IntRange(min=1), help="Countdown length in seconds")
@click.option("--no-notify", is_flag=True, help="Don't send an alert when the countdown completes")
@click.pass_context
def timer_run(ctx, duration, no_notify):
    """Run the countdown in the terminal until it completes."""
    config: Config = ctx.obj["config"]

    if duration:
        config = config.model_copy(
            update={"timer": config.timer.model_copy(update={"total_duration_seconds": duration})}
        )
    if no_notify:
        config = config.model_copy(
            update={"notifications": config.notifications.model_copy(update={"enabled": False})}
        )

    console.print(Panel(
        f"Counting down [cyan]{format_seconds(config.timer.total_duration_seconds)}[/cyan]\n"
        "[dim]Press Ctrl+C to stop.[/dim]",
        title="AllyHub Timer",
    ))

    try:
        hub = asyncio.run(_run_countdown(config))
    except KeyboardInterrupt:
        console.print("\n[dim]Stopped.[/dim]")
        sys.exit(0)

    hub.wait_for_alerts(timeout=10.0)
    console.print("[green]✓[/green] Timer completed! Time for the next task.")


@timer.command("format")
@click.argument("seconds", type=float)
def timer_format(seconds):
    """Show SECONDS the way the timer displays them."""
    console.print(format_seconds(seconds))


# --- Task Commands ---


@cli.group()
def tasks():
    """Task list commands."""
    pass


@tasks.command("list")
@click.pass_context
def tasks_list(ctx):
    """Show the task list the app starts with."""
    hub = AllyHub(ManualExecutionContext(), config=ctx.obj["config"])
    task_list = hub.tasks
    hub.close()

    if not task_list.tasks:
        console.print(f"[dim]{task_list.current_task_title}[/dim]")
        return

    table = Table(title="Tasks")
    table.add_column("#", style="dim", width=4)
    table.add_column("Title")
    table.add_column("Done", justify="center")

    for index, task in enumerate(task_list.tasks):
        marker = "▶ " if index == task_list.current_index else "  "
        table.add_row(
            str(index),
            f"{marker}{task.title}",
            "[green]✓[/green]" if task.is_completed else "-",
        )

    console.print(table)
    console.print(f"[dim]{hub.status_summary} ({task_list.progress:.0%})[/dim]")


# --- Notify Command ---


@cli.command()
@click.argument("message")
@click.option("--title", "-t", default="AllyHub", help="Notification title")
def notify(message, title):
    """Send a test notification."""
    from allyhub.services.notification_service import create_notification_service

    service = create_notification_service()

    if service.notify_info(title, message):
        console.print("[green]✓[/green] Notification sent")
    else:
        console.print("[yellow]Notification not sent (may be disabled)[/yellow]")


# --- Config Commands ---


@cli.group()
def config():
    """Configuration commands."""
    pass


@config.command("show")
@click.pass_context
def config_show(ctx):
    """Show current configuration."""
    cfg: Config = ctx.obj["config"]

    sections = [
        ("Timer", [
            f"Duration: {format_seconds(cfg.timer.total_duration_seconds)}",
            f"Tick Interval: {cfg.timer.tick_interval_seconds}s",
        ]),
        ("Tasks", [f"Seed: {', '.join(cfg.tasks.seed_titles) or '[none]'}"]),
        ("Notifications", [
            f"Enabled: {cfg.notifications.enabled}",
            f"Sound: {cfg.notifications.sound}",
            f"On Timer Completed: {cfg.notifications.on_timer_completed}",
        ]),
    ]

    for title, items in sections:
        console.print(f"\n[bold]{title}[/bold]")
        for item in items:
            console.print(f"  {item}")


@config.command("path")
def config_path():
    """Show config file path."""
    default_path = Path("config.yaml")
    if default_path.exists():
        console.print(f"Config file: [cyan]{default_path.absolute()}[/cyan]")
    else:
        console.print("[dim]No config.yaml found. Using defaults.[/dim]")
        console.print("[dim]Create config.yaml to customize settings.[/dim]")


@config.command("init")
@click.option("--force", "-f", is_flag=True, help="Overwrite existing config")
def config_init(force):
    """Create a default config file."""
    config_path = Path("config.yaml")

    if config_path.exists() and not force:
        console.print("[yellow]config.yaml already exists. Use --force to overwrite.[/yellow]")
        return

    default_config = """# AllyHub Configuration

# Countdown timer
timer:
  total_duration_seconds: 3600
  tick_interval_seconds: 1.0

# Tasks the list starts with and resets to
tasks:
  seed_titles:
    - Email triage
    - Spec doc review
    - Prototype create
    - Break

# Notification settings
notifications:
  enabled: true
  sound: true
  on_timer_completed: true
"""

    config_path.write_text(default_config)
    console.print(f"[green]✓[/green] Created {config_path}")
    console.print("[dim]Edit the file to configure your settings.[/dim]")


# --- Entry Point ---


def main():
    """Main entry point for the CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
