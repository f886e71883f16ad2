"""
Command-line interface for git-focus.
"""

import json
from datetime import datetime, timezone
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from git_focus.cache import ResultCache
from git_focus.config import (
    is_cache_enabled,
    set_cache_dir,
    set_cache_ttl,
    set_verify_ssl,
)
from git_focus.core import AnalysisOutcome, analyze_user
from git_focus.errors import DataFetchError, UserNotFoundError
from git_focus.http_client import close_http_client
from git_focus.scoring import summarize_categories

# --- Typer App ---
app = typer.Typer(help="Find what to focus on in a GitHub account.")
console = Console()

CATEGORY_STYLES = {
    "health": "red",
    "work": "yellow",
    "growth": "green",
}


# --- Helper Functions ---


def _format_timestamp(timestamp_ms: int) -> str:
    moment = datetime.fromtimestamp(timestamp_ms / 1000, tz=timezone.utc)
    return moment.strftime("%Y-%m-%d %H:%M UTC")


def outcome_to_dict(outcome: AnalysisOutcome) -> dict:
    """JSON-ready view of an outcome for ``--json`` output."""
    data = outcome.result.to_dict()
    data["from_cache"] = outcome.from_cache
    data["stale"] = outcome.stale
    return data


def display_outcome(outcome: AnalysisOutcome):
    """Display profile, score cards and focus items."""
    result = outcome.result
    profile = result.profile

    console.print(
        f"\n👤 [bold cyan]{profile.name or profile.login}[/bold cyan] [dim]@{profile.login}[/dim]"
    )
    if profile.bio:
        console.print(f"   {escape(profile.bio)}")
    console.print(
        f"   {profile.followers} followers · {profile.following} following · "
        f"{result.repo_count} repositories analyzed"
    )

    if outcome.from_cache:
        scanned = _format_timestamp(result.timestamp)
        if outcome.stale:
            console.print(
                f"\n[yellow]Showing cached results from {scanned}. "
                f"Re-scan available: git-focus analyze {profile.login} --rescan[/yellow]"
            )
        else:
            console.print(f"\n[dim]Loaded from cache ({scanned}).[/dim]")

    summary = summarize_categories(result.findings)
    cards = Table(show_header=True, header_style="bold magenta")
    for category in summary:
        cards.add_column(category.capitalize(), justify="center")
    cards.add_row(
        *(
            f"[{CATEGORY_STYLES[category]}]{card['count']} items · top {card['top_score']:.2f}"
            f"[/{CATEGORY_STYLES[category]}]"
            for category, card in summary.items()
        )
    )
    console.print(cards)

    if not result.findings:
        console.print("[green]Nothing needs your attention right now. ✓[/green]")
        return

    table = Table(title="Focus Items")
    table.add_column("#", justify="right", style="cyan", no_wrap=True)
    table.add_column("Category", justify="left")
    table.add_column("Score", justify="center", style="magenta")
    table.add_column("Focus", justify="left")

    for finding in result.findings:
        style = CATEGORY_STYLES.get(finding.category, "white")
        title = escape(finding.title)
        if finding.link:
            title = f"[link={finding.link}]{title}[/link]"
        table.add_row(
            f"#{finding.rank}",
            f"[{style}]{finding.category}[/{style}]",
            f"{finding.score:.2f}",
            title,
        )

    console.print(table)


@app.command()
def analyze(
    username: str = typer.Argument(..., help="GitHub username to analyze."),
    rescan: bool = typer.Option(
        False,
        "--rescan",
        "-r",
        help="Ignore the cached result and analyze again.",
    ),
    no_cache: bool = typer.Option(
        False,
        "--no-cache",
        help="Neither read nor write the result cache.",
    ),
    output_json: bool = typer.Option(
        False,
        "--json",
        help="Print the result as JSON.",
    ),
    cache_dir: Path | None = typer.Option(
        None,
        "--cache-dir",
        help="Cache directory path (default: ~/.cache/git-focus).",
    ),
    cache_ttl: int | None = typer.Option(
        None,
        "--cache-ttl",
        help="Seconds before a cached result is considered stale (default: 14400).",
    ),
    insecure: bool = typer.Option(
        False,
        "--insecure",
        help="Disable SSL certificate verification for HTTPS requests.",
    ),
):
    """Analyze a GitHub account and rank what to focus on."""
    set_verify_ssl(not insecure)
    if cache_dir is not None:
        set_cache_dir(cache_dir)
    if cache_ttl is not None:
        set_cache_ttl(cache_ttl)

    cache = ResultCache() if is_cache_enabled() and not no_cache else None

    try:
        outcome = analyze_user(username, cache=cache, force=rescan)
    except UserNotFoundError as e:
        console.print(f"[red]❌ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from None
    except DataFetchError as e:
        console.print(f"[red]❌ Could not fetch data from GitHub: {escape(str(e))}[/red]")
        console.print("[dim]Please retry in a moment.[/dim]")
        raise typer.Exit(code=2) from None
    finally:
        close_http_client()

    if output_json:
        typer.echo(json.dumps(outcome_to_dict(outcome), indent=2, ensure_ascii=False))
        return

    display_outcome(outcome)


@app.command()
def clear_cache(
    username: str | None = typer.Argument(
        None,
        help="Username whose cached result should be removed, or omit for all.",
    ),
    cache_dir: Path | None = typer.Option(
        None,
        "--cache-dir",
        help="Cache directory path (default: ~/.cache/git-focus).",
    ),
):
    """Remove cached analysis results."""
    if cache_dir is not None:
        set_cache_dir(cache_dir)
    cache = ResultCache()

    if username:
        if cache.invalidate(username):
            console.print(f"[green]✨ Cleared cached result for {username}[/green]")
        else:
            console.print(f"[yellow]No cached result for {username}[/yellow]")
        return

    cleared = cache.clear()
    if cleared:
        console.print(f"[green]✨ Cleared {cleared} cached result(s)[/green]")
    else:
        console.print("[yellow]No cache files found to clear.[/yellow]")


@app.command()
def cache_stats(
    cache_dir: Path | None = typer.Option(
        None,
        "--cache-dir",
        help="Cache directory path (default: ~/.cache/git-focus).",
    ),
):
    """Display cache statistics."""
    if cache_dir is not None:
        set_cache_dir(cache_dir)
    stats = ResultCache().stats()

    if not stats["exists"]:
        console.print(
            f"[yellow]Cache directory does not exist: {stats['cache_dir']}[/yellow]"
        )
        return

    console.print("[bold cyan]Cache Statistics[/bold cyan]")
    console.print(f"  Directory: {stats['cache_dir']}")
    console.print(f"  Total entries: {stats['total_entries']}")
    console.print(f"  Fresh entries: [green]{stats['fresh_entries']}[/green]")
    console.print(f"  Stale entries: [yellow]{stats['stale_entries']}[/yellow]")
    if stats["unreadable_entries"]:
        console.print(f"  Unreadable entries: [red]{stats['unreadable_entries']}[/red]")


if __name__ == "__main__":
    app()
