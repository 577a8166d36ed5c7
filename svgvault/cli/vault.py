#!/usr/bin/env python3
"""
svault - index and search SVG vaults.

Usage:
    svault index ROOT               - Rebuild the index of a vault
    svault search ROOT [QUERY]      - Search a vault's stored index
    svault colors ROOT              - Show the vault palette
    svault daemon start             - Start the local API daemon
    svault daemon status            - Check daemon status
"""

import asyncio
import json
import os
import sys
from pathlib import Path
from typing import Optional
import click
import httpx
from rich.console import Console
from rich.table import Table
from loguru import logger

from ..daemon.config import Config
from ..daemon.main import configure_logging
from ..daemon.service import VaultService
from ..daemon.search import search_vault

console = Console()


def _daemon_url(config: Config) -> str:
    return f"http://{config.api.host}:{config.api.port}"


async def daemon_request(config: Config, path: str, payload: dict) -> dict:
    """Send a vault request to the running daemon."""
    async with httpx.AsyncClient() as client:
        response = await client.post(
            f"{_daemon_url(config)}{path}",
            json=payload,
            timeout=None
        )
        return response.json()


def _run(config: Config, use_daemon: bool, path: str, payload: dict, local) -> dict:
    if not use_daemon:
        return local()
    try:
        return asyncio.run(daemon_request(config, path, payload))
    except httpx.ConnectError:
        console.print("[red]Cannot connect to daemon. Is it running?[/red]")
        console.print("Start with: [cyan]svault daemon start[/cyan]")
        sys.exit(1)


def _fail(result: dict) -> None:
    console.print(f"[red]Error:[/red] {result.get('error', 'unknown error')}")
    sys.exit(1)


def display_colors(colors: list, limit: int = 16) -> None:
    if not colors:
        console.print("[yellow]No fill colors recorded[/yellow]")
        return

    table = Table(title="Fill colors")
    table.add_column("Color", style="cyan")
    table.add_column("Items", justify="right")

    for entry in colors[:limit]:
        table.add_row(entry["color"], str(entry["count"]))

    console.print(table)


def display_results(results: dict, limit: int) -> None:
    items = results.get("items", [])
    console.print(f"Results: [bold]{results.get('count', len(items))}[/bold]")

    if not items:
        console.print("[yellow]No results found[/yellow]")
        return

    table = Table()
    table.add_column("Name", style="cyan", no_wrap=False)
    table.add_column("Path", no_wrap=False)
    table.add_column("Paths", justify="right")
    table.add_column("Fills", style="magenta")
    table.add_column("Tags", style="green")

    for item in items[:limit]:
        table.add_row(
            item.get("name", ""),
            item.get("id", ""),
            str(item.get("pathCount", 0)),
            ", ".join(item.get("fills", [])[:4]),
            ", ".join(item.get("tags", []))
        )

    console.print(table)
    if len(items) > limit:
        console.print(f"[dim]Showing {limit} of {len(items)}[/dim]")


@click.group()
@click.option("--config", "-c", "config_path", type=click.Path(exists=True, dir_okay=False),
              help="Config file path")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def cli(ctx, config_path: Optional[str], verbose: bool):
    """svgvault - index and search folders of SVG assets."""
    config = Config.load(Path(config_path) if config_path else None)
    configure_logging(config.logging, level="DEBUG" if verbose else "WARNING")
    ctx.obj = config


@cli.command()
@click.argument("root", type=click.Path(file_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Print the index as JSON")
@click.option("--daemon", "use_daemon", is_flag=True, help="Run through the local daemon")
@click.pass_obj
def index(config: Config, root: str, as_json: bool, use_daemon: bool):
    """Rebuild the index of a vault."""
    root = os.path.abspath(root)
    service = VaultService(config)
    result = _run(config, use_daemon, "/vault/index", {"rootDir": root},
                  lambda: service.index(root))

    if not result.get("success"):
        _fail(result)

    data = result["index"]
    if as_json:
        click.echo(json.dumps(data, indent=2))
        return

    console.print(f"[green]✓[/green] Indexed [bold]{data['count']}[/bold] items in {data['rootDir']}")

    last = service.stats.get("last_index")
    if last and (last["skipped"] or last["unreadable_dirs"]):
        console.print(
            f"[yellow]Skipped {last['skipped']} files, "
            f"{len(last['unreadable_dirs'])} unreadable folders[/yellow]"
        )
    if last and not last["persisted"]:
        console.print("[yellow]Index could not be saved; results are for this run only[/yellow]")

    display_colors(data.get("colors", []))


@cli.command()
@click.argument("root", type=click.Path(file_okay=False))
@click.argument("query", required=False, default="")
@click.option("--min-paths", type=int, help="Minimum path count")
@click.option("--max-paths", type=int, help="Maximum path count")
@click.option("--fill", help="Required fill color")
@click.option("--stroke", help="Required stroke color")
@click.option("--limit", "-l", default=50, help="Max rows to show")
@click.option("--json", "as_json", is_flag=True, help="Print results as JSON")
@click.option("--daemon", "use_daemon", is_flag=True, help="Run through the local daemon")
@click.pass_obj
def search(config: Config, root: str, query: str, min_paths: Optional[int],
           max_paths: Optional[int], fill: Optional[str], stroke: Optional[str],
           limit: int, as_json: bool, use_daemon: bool):
    """Search the stored index of a vault."""
    root = os.path.abspath(root)
    filters = {
        "minPaths": min_paths,
        "maxPaths": max_paths,
        "fill": fill,
        "stroke": stroke,
    }
    payload = {"rootDir": root, "query": query, "filters": filters}
    result = _run(config, use_daemon, "/vault/search", payload,
                  lambda: VaultService(config).search(root, query, filters))

    if not result.get("success"):
        _fail(result)

    if as_json:
        click.echo(json.dumps(result["results"], indent=2))
    else:
        display_results(result["results"], limit)


@cli.command()
@click.argument("root", type=click.Path(exists=True, file_okay=False))
@click.option("--limit", "-l", default=24, help="Max colors to show")
@click.pass_obj
def colors(config: Config, root: str, limit: int):
    """Show the fill palette of a vault's stored index."""
    stored = search_vault(root, config=config)
    if not stored.created_at:
        console.print("[yellow]Vault is not indexed yet[/yellow]")
        console.print(f"Run: [cyan]svault index {root}[/cyan]")
        return
    display_colors([c.to_dict() for c in stored.colors], limit)


@cli.group()
def daemon():
    """Manage the svgvault daemon."""
    pass


@daemon.command()
@click.option("--config", "-c", "config_path", type=click.Path(exists=True), help="Config file path")
def start(config_path: Optional[str]):
    """Start the svgvault daemon."""
    console.print("[cyan]Starting svgvault daemon...[/cyan]")

    from ..daemon.main import main as daemon_main

    try:
        asyncio.run(daemon_main(config_path))
    except KeyboardInterrupt:
        console.print("\n[yellow]Daemon stopped by user[/yellow]")
    except Exception as e:
        console.print(f"[red]Daemon error:[/red] {e}")
        logger.exception("Daemon crashed")
        sys.exit(1)


@daemon.command()
@click.pass_obj
def status(config: Config):
    """Check daemon status."""
    asyncio.run(check_status(config))


async def check_status(config: Config):
    try:
        async with httpx.AsyncClient() as client:
            response = await client.get(f"{_daemon_url(config)}/status", timeout=2.0)

        if response.status_code == 200:
            data = response.json()
            console.print("[green]✓ Daemon is running[/green]")

            stats = data.get("stats", {})
            console.print(f"\nUptime: {data.get('uptime', 'unknown')}")
            console.print(f"Index runs: {stats.get('index_count', 0)}")
            console.print(f"Searches: {stats.get('search_count', 0)}")
            console.print(f"Memory: {stats.get('memory_mb', 0):.1f} MB")
        else:
            console.print("[red]Daemon error[/red]")

    except httpx.ConnectError:
        console.print("[red]✗ Daemon is not running[/red]")
        console.print("Start with: [cyan]svault daemon start[/cyan]")


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
