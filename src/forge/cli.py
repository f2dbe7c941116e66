#!/usr/bin/env python3
"""
Forge CLI.

Usage:
    forge serve --port 8000           # Run the API server
    forge init-db                     # Create the SQLite schema
    forge stats --user-id <id>        # Show XP, level, streak and achievements
    forge health                      # Check backend connectivity
"""

import argparse
import logging
import sys
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .config import Settings, get_settings
from .db import create_backend
from .db.backends import Backend
from .exceptions import ForgeError
from .services.gamification_service import GamificationService

console = Console()


def get_level_color(level: int) -> str:
    """Get rich color for a level tier."""
    colors = {1: "white", 2: "green", 3: "cyan", 4: "magenta", 5: "yellow"}
    return colors.get(level, "white")


def cmd_serve(args, settings: Settings) -> int:
    """Run the API with uvicorn."""
    import uvicorn

    uvicorn.run(
        "forge.main:app",
        host=args.host or settings.api_host,
        port=args.port or settings.api_port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )
    return 0


def cmd_init_db(args, backend: Backend) -> int:
    """Create tables (SQLite) or verify the connection (Supabase)."""
    backend.initialize()
    console.print("[green]Backend ready.[/green]")
    return 0


def cmd_health(args, backend: Backend) -> int:
    health = backend.health_check()
    color = "green" if health["healthy"] else "red"
    status = "HEALTHY" if health["healthy"] else "UNHEALTHY"

    text = f"""
[cyan]Backend:[/cyan]  {health['backend']}
[cyan]Status:[/cyan]   [{color}]{status}[/{color}]
[cyan]Latency:[/cyan]  {health['latency_ms']} ms
"""
    console.print(Panel(text, title="Forge - Health", box=box.ROUNDED))
    return 0 if health["healthy"] else 1


def cmd_stats(args, backend: Backend) -> int:
    """Show the gamification summary for a user."""
    summary = GamificationService(backend).get_summary(args.user_id)
    level = summary.level
    color = get_level_color(level.level)

    next_line = "Top tier reached"
    if level.next_level is not None:
        next_line = f"{level.xp_to_next} XP to {level.next_level.name}"

    text = f"""
[cyan]Total XP:[/cyan]        {summary.total_xp}
[cyan]Level:[/cyan]           [{color}]{level.level} - {level.name}[/{color}]
[cyan]Progress:[/cyan]        {level.progress_percent:.1f}%  ({next_line})

[cyan]Workout streak:[/cyan]  {summary.streak.current} day(s) (longest {summary.streak.longest})
[cyan]Last workout:[/cyan]    {summary.streak.last_activity_date or '-'}
"""
    console.print()
    console.print(Panel(text, title="Forge - Stats", box=box.ROUNDED))

    table = Table(title="Achievements", box=box.SIMPLE)
    table.add_column("", width=3)
    table.add_column("Name", style="bold")
    table.add_column("Description")
    table.add_column("Unlocked", justify="center")

    for item in summary.achievements:
        unlocked = "[green]yes[/green]" if item.unlocked else "[dim]no[/dim]"
        table.add_row(
            item.achievement.icon,
            item.achievement.name,
            item.achievement.description,
            unlocked,
        )

    console.print(table)
    console.print(
        f"{summary.achievements_unlocked}/{len(summary.achievements)} achievements unlocked"
    )
    console.print()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="forge",
        description="Forge - habits, todos, courses and gym tracking",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  forge serve --port 8000
  forge init-db
  forge stats --user-id 6f1c...
  forge health
        """,
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    serve_p = subparsers.add_parser("serve", help="Run the API server")
    serve_p.add_argument("--host", type=str, help="Bind address")
    serve_p.add_argument("--port", "-p", type=int, help="Port")
    serve_p.add_argument("--reload", action="store_true", help="Reload on code changes")

    subparsers.add_parser("init-db", help="Create the schema or verify the backend")

    stats_p = subparsers.add_parser("stats", help="Show XP, level, streak and achievements")
    stats_p.add_argument("--user-id", "-u", type=str, required=True, help="User ID")

    subparsers.add_parser("health", help="Check backend connectivity")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "serve":
        return cmd_serve(args, settings)

    if args.command is None:
        parser.print_help()
        return 1

    try:
        backend = create_backend(settings)
        if args.command == "init-db":
            return cmd_init_db(args, backend)
        if args.command == "health":
            return cmd_health(args, backend)
        if args.command == "stats":
            backend.initialize()
            return cmd_stats(args, backend)
    except ForgeError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        return 1

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
