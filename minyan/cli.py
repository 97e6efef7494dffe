# minyan/cli.py
from __future__ import annotations
import json
from datetime import datetime, tzinfo
from pathlib import Path
from typing import Optional, List
import typer
from rich.console import Console
from rich.table import Table
from rich import box

from . import chat
from . import config as cfgmod
from . import messages
from . import timeparse as tparse
from .commands import COMMAND_PREFIX, UPCOMING_HOURS, TimesCommand, parse_times_command
from .errors import UNDERSTANDING_ERRORS, PairingError, SourceError
from .log import setup_logging
from .sources import YamlEventSource, YamlLiturgicalEventSource
from .yomtov import current_or_upcoming

console = Console()
# Show help when no args; disable shell-completion noise
app = typer.Typer(help="Minyan times from chat-style date expressions", add_completion=False, no_args_is_help=True)

# ---------- global context & config ----------

class Ctx:
    tz: tzinfo
    events_file: Optional[Path]
    yomtov_file: Optional[Path]
    calendar_id: Optional[str]
    grace_minutes: int
    upcoming_hours: int
    window_days: int
    wide_window_days: int

def _load_ctx() -> Ctx:
    cfg = cfgmod.load()
    setup_logging(cfg.get("log_level"), force=True)
    ctx = Ctx()
    ctx.tz = cfgmod.zone(cfg)
    ctx.events_file = Path(cfg["events_file"]).expanduser() if cfg.get("events_file") else None
    ctx.yomtov_file = Path(cfg["yomtov_file"]).expanduser() if cfg.get("yomtov_file") else None
    ctx.calendar_id = cfg.get("calendar_id")
    grace = cfg.get("elapsed_grace_minutes")
    ctx.grace_minutes = 5 if grace is None else int(grace)
    hours = cfg.get("upcoming_hours")
    ctx.upcoming_hours = UPCOMING_HOURS if hours is None else int(hours)
    yt = cfg.get("yomtov", {}) or {}
    ctx.window_days = int(yt.get("window_days", 10))
    ctx.wide_window_days = int(yt.get("wide_window_days", 30))
    return ctx

@app.callback(invoke_without_command=True)
def main(ctx: typer.Context):
    """Load config; print help when no subcommand."""
    ctx.obj = _load_ctx()

# ---------- helpers ----------

def _now(ctx: typer.Context, at: Optional[str]) -> datetime:
    try:
        return tparse.parse_dt(at, ctx.obj.tz) if at else tparse.now_local(ctx.obj.tz)
    except ValueError as e:
        console.print(f"[red]bad --at value: {e}[/red]"); raise typer.Exit(1)

def _parse(ctx: typer.Context, words: List[str], now: datetime) -> TimesCommand:
    text = " ".join(words or [])
    if not text.strip().lower().startswith(COMMAND_PREFIX):
        text = f"{COMMAND_PREFIX} {text}"
    try:
        return parse_times_command(text, now, ctx.obj.upcoming_hours)
    except UNDERSTANDING_ERRORS as e:
        console.print(f"[red]could not understand that date: {e}[/red]"); raise typer.Exit(1)

def _fmt(dt: datetime) -> str:
    return dt.isoformat(timespec="seconds")

def _print_command(command: TimesCommand):
    table = Table(box=box.SIMPLE_HEAVY)
    table.add_column("Header"); table.add_column("Start"); table.add_column("End")
    table.add_column("Sephardic"); table.add_column("Elapsed")
    table.add_row(
        command.header,
        _fmt(command.start),
        _fmt(command.end),
        "✓" if command.use_alternate_locale else "•",
        "✓" if command.include_elapsed else "•",
    )
    console.print(table)

def _events_source(ctx: typer.Context, events: Optional[Path]) -> Optional[YamlEventSource]:
    path = events or ctx.obj.events_file
    return YamlEventSource(path, ctx.obj.tz) if path else None

# ---------- parse / times ----------

@app.command()
def parse(
    ctx: typer.Context,
    expression: List[str] = typer.Argument(None, help="Date expression, e.g. 'friday to monday'"),
    at: str = typer.Option(None, "--at", help="Reference time (ISO or 'YYYY-MM-DD HH:MM'); default now"),
    json_out: bool = typer.Option(False, "--json"),
):
    """Show the time window a `!times` expression resolves to."""
    command = _parse(ctx, expression, _now(ctx, at))
    if json_out:
        typer.echo(json.dumps({
            "header": command.header,
            "start": _fmt(command.start),
            "end": _fmt(command.end),
            "use_alternate_locale": command.use_alternate_locale,
            "include_elapsed": command.include_elapsed,
        }, indent=2))
        return
    _print_command(command)

@app.command()
def times(
    ctx: typer.Context,
    expression: List[str] = typer.Argument(None, help="Date expression; blank means upcoming"),
    events: Path = typer.Option(None, "--events", help="Minyan events YAML (from config or MINYAN_EVENTS)"),
    at: str = typer.Option(None, "--at", help="Reference time (ISO or 'YYYY-MM-DD HH:MM'); default now"),
):
    """Print the minyan-times message for an expression."""
    now = _now(ctx, at)
    command = _parse(ctx, expression, now)
    source = _events_source(ctx, events)
    if source is None:
        console.print("[red]no events file (use --events or set events_file)[/red]"); raise typer.Exit(1)
    try:
        text = chat.times_message(command, source, now, ctx.obj.calendar_id, ctx.obj.grace_minutes)
    except SourceError as e:
        console.print(f"[red]{e}[/red]"); raise typer.Exit(1)
    typer.echo(text)

# ---------- yom tov ----------

@app.command()
def yomtov(
    ctx: typer.Context,
    file: Path = typer.Option(None, "--file", help="Candle-lighting/havdalah YAML (from config or MINYAN_YOMTOV)"),
    at: str = typer.Option(None, "--at", help="Reference time; default now"),
):
    """Show the current or next Yom Tov and whether notifications are suppressed."""
    path = file or ctx.obj.yomtov_file
    if not path:
        console.print("[red]no Yom Tov file (use --file or set yomtov_file)[/red]"); raise typer.Exit(1)
    now = _now(ctx, at)
    try:
        found = current_or_upcoming(YamlLiturgicalEventSource(path, ctx.obj.tz), now,
                                    ctx.obj.window_days, ctx.obj.wide_window_days)
    except PairingError as e:
        console.print(f"[yellow]{e}[/yellow]"); raise typer.Exit(1)
    except SourceError as e:
        console.print(f"[red]{e}[/red]"); raise typer.Exit(1)
    table = Table(box=box.SIMPLE_HEAVY)
    table.add_column("Candle lighting"); table.add_column("Havdalah"); table.add_column("Status")
    table.add_row(_fmt(found.candle_lighting), _fmt(found.havdalah),
                  "[bold]in effect[/bold]" if found.active else "upcoming")
    console.print(table)

# ---------- chat ----------

@app.command("chat")
def chat_cmd(
    ctx: typer.Context,
    text: List[str] = typer.Argument(..., help="Chat message, e.g. '!times tomorrow'"),
    events: Path = typer.Option(None, "--events", help="Minyan events YAML"),
    at: str = typer.Option(None, "--at", help="Reference time; default now"),
):
    """Answer a chat message the way the bot would."""
    source = _events_source(ctx, events)
    if source is None:
        console.print("[red]no events file (use --events or set events_file)[/red]"); raise typer.Exit(1)
    reply = chat.handle_message(" ".join(text), source, _now(ctx, at), ctx.obj.calendar_id,
                                ctx.obj.grace_minutes, ctx.obj.upcoming_hours)
    if reply is None:
        console.print("[dim](no reply)[/dim]")
        return
    typer.echo(reply)

@app.command()
def daily(
    ctx: typer.Context,
    events: Path = typer.Option(None, "--events", help="Minyan events YAML"),
    file: Path = typer.Option(None, "--yomtov", help="Candle-lighting/havdalah YAML"),
    at: str = typer.Option(None, "--at", help="Reference time; default now"),
):
    """Build the scheduled upcoming-times message, skipped during Yom Tov."""
    source = _events_source(ctx, events)
    path = file or ctx.obj.yomtov_file
    if source is None or not path:
        console.print("[red]need both an events file and a Yom Tov file[/red]"); raise typer.Exit(1)
    try:
        reply = chat.daily_message(source, YamlLiturgicalEventSource(path, ctx.obj.tz), _now(ctx, at),
                                   ctx.obj.calendar_id, ctx.obj.window_days, ctx.obj.wide_window_days,
                                   ctx.obj.grace_minutes, ctx.obj.upcoming_hours)
    except (PairingError, SourceError) as e:
        console.print(f"[red]{e}[/red]"); raise typer.Exit(1)
    if reply is None:
        console.print("[yellow]Yom Tov in effect; nothing sent.[/yellow]")
        return
    typer.echo(reply)

@app.command()
def usage():
    """Print the chat help text."""
    typer.echo(messages.USAGE)

# ---------- entry point ----------

if __name__ == "__main__":
    app()
