# src/zombierun/cli.py
"""
zombierun Command Line Interface (CLI).

This module implements the user-facing terminal interface using `typer` and `rich`.

Features
--------
- **Discovery**: List every save location found under the base directory.
- **Live Session**: Poll global hotkeys once per tick and redraw the active
  game's snapshot history in place.

Hotkeys (hold Shift)
--------------------
- Down / Up : select the next / previous snapshot
- N         : capture the live save file
- L         : restore the selected snapshot
- R         : restore the newest snapshot
- Delete    : remove the selected snapshot
- Home / End: select the oldest / newest snapshot
- Left / Right : switch to the previous / next save location

Usage
-----
    # See which save files would be targeted
    $ zombierun profiles

    # Start a session on the second location
    $ zombierun run --profile 1
"""

from __future__ import annotations

import time
import traceback
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console, Group, RenderableType
from rich.live import Live
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from zombierun.core.errors import DiscoveryError
from zombierun.core.settings import get_logger, load_settings
from zombierun.profiles.selector import ActiveProfileSelector
from zombierun.session.controller import FrameView, SessionController
from zombierun.session.input import HotkeyState, KeyboardInput
from zombierun.session.notify import ConsoleNotifier

# Ensure APPDATA overrides in .env are visible before settings are read
load_dotenv()

app = typer.Typer(
    help="zombierun: snapshot and restore game save files on demand.",
    rich_markup_mode="markdown",
)
console = Console()
logger = get_logger(__name__)

HOTKEY_HINT = (
    "Shift+N save · Shift+L load · Shift+R latest · Shift+Del remove · "
    "Shift+↑/↓ select · Shift+Home/End ends · Shift+←/→ location · Ctrl+C quit"
)


# --------------------------------------------------------------------------- #
# Helpers: Discovery & Rendering
# --------------------------------------------------------------------------- #


def _discover(base_dir: Path | None, verbose: bool = False) -> ActiveProfileSelector:
    """
    Helper: Build the location selector or abort the command.

    Discovery failures are fatal: without a base directory there is nothing
    to snapshot.
    """
    try:
        return ActiveProfileSelector.from_base_dir(base_dir)
    except DiscoveryError as e:
        console.print(f"[bold red]❌ Discovery Error:[/bold red] {e}")
        if verbose:
            traceback.print_exc()
        raise typer.Exit(code=1) from e


def render_frame(view: FrameView) -> RenderableType:
    """
    Helper: Turn a `FrameView` into a Rich renderable.

    Snapshots are listed newest first; the selected one is marked with `▶`.
    """
    locations = Table(show_header=False, box=None, pad_edge=False)
    locations.add_column(width=2)
    locations.add_column()
    for row in view.locations:
        marker = "[bold green]●[/bold green]" if row.active else " "
        locations.add_row(marker, escape(row.label))
    if not view.locations:
        locations.add_row(" ", "[dim]no save locations found[/dim]")

    history = Table(show_header=False, box=None, pad_edge=False)
    history.add_column(width=2)
    history.add_column()
    for row in reversed(view.history):
        if row.index == view.selected:
            history.add_row("[bold yellow]▶[/bold yellow]", f"[bold]{escape(row.label())}[/bold]")
        else:
            history.add_row(" ", escape(row.label()))
    if not view.history:
        history.add_row(" ", "[dim]no snapshots yet[/dim]")

    title = str(view.kind) if view.kind is not None else "Snapshots"
    footer = Text(view.message or "", style="green")
    footer.append(f"\n{HOTKEY_HINT}", style="dim")

    return Group(
        Panel(locations, title="Savefile", border_style="cyan"),
        Panel(history, title=title, border_style="magenta"),
        footer,
    )


def _start_input(hotkeys: bool) -> HotkeyState:
    """
    Helper: Start global hotkeys, falling back to an idle source.

    The fallback never fires, so the session stays a read-only view.
    """
    if not hotkeys:
        return HotkeyState()
    source = KeyboardInput()
    try:
        source.start()
    except Exception as e:
        console.print(f"[yellow]⚠️ Global hotkeys unavailable ({e}); running read-only.[/yellow]")
        return HotkeyState()
    return source


# --------------------------------------------------------------------------- #
# Commands
# --------------------------------------------------------------------------- #


@app.command()  # type: ignore[misc]
def profiles(
    base_dir: Annotated[
        Path | None,
        typer.Option(
            "--base-dir",
            "-b",
            file_okay=False,
            help="Directory holding the game save folders (defaults to APPDATA).",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show full error tracebacks for debugging."),
    ] = False,
) -> None:
    """
    List the discovered save locations, in selection order.
    """
    selector = _discover(base_dir, verbose)
    if len(selector) == 0:
        console.print("[yellow]No save locations found.[/yellow]")
        return

    table = Table(title="Save locations")
    table.add_column("#", justify="right")
    table.add_column("Game", style="cyan", no_wrap=True)
    table.add_column("Path", overflow="fold")
    for i, location in enumerate(selector.locations()):
        table.add_row(str(i), location.kind.display_name, str(location.path))
    console.print(table)


@app.command()  # type: ignore[misc]
def run(
    base_dir: Annotated[
        Path | None,
        typer.Option(
            "--base-dir",
            "-b",
            file_okay=False,
            help="Directory holding the game save folders (defaults to APPDATA).",
        ),
    ] = None,
    profile: Annotated[
        int,
        typer.Option("--profile", "-p", min=0, help="Index of the save location to target."),
    ] = 0,
    ticks: Annotated[
        int | None,
        typer.Option("--ticks", min=1, help="Stop after this many ticks (default: run until Ctrl+C)."),
    ] = None,
    hotkeys: Annotated[
        bool,
        typer.Option("--hotkeys/--no-hotkeys", help="Listen for global Shift hotkeys."),
    ] = True,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show full error tracebacks for debugging."),
    ] = False,
) -> None:
    """
    Start a live session: poll hotkeys and redraw the snapshot history each tick.
    """
    cfg = load_settings()
    selector = _discover(base_dir, verbose)
    if len(selector) and not selector.select(profile):
        console.print(
            f"[bold red]❌ No save location #{profile}[/bold red] "
            f"(found {len(selector)}; see `zombierun profiles`)"
        )
        raise typer.Exit(code=1)

    controller = SessionController(
        selector,
        notifier=ConsoleNotifier(),
        message_ttl=cfg.message_ttl_seconds,
        notify_timeout=cfg.notify_timeout_seconds,
    )
    source = _start_input(hotkeys)
    interval = cfg.tick_interval_ms / 1000.0

    tick = 0
    try:
        with Live(render_frame(controller.frame()), console=console, auto_refresh=False) as live:
            while ticks is None or tick < ticks:
                controller.update_from_input(source)
                live.update(render_frame(controller.frame()), refresh=True)
                tick += 1
                if ticks is None or tick < ticks:
                    time.sleep(interval)
    except KeyboardInterrupt:
        console.print("[dim]Session ended.[/dim]")
    finally:
        if isinstance(source, KeyboardInput):
            source.stop()
    logger.debug("Session stopped after %d tick(s)", tick)


if __name__ == "__main__":
    app()
