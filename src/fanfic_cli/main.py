"""CLI entrypoint using typer."""

from __future__ import annotations

import asyncio

import structlog
import typer
from rich.console import Console
from rich.markup import escape

from fanfic_bot.client import FanficBot
from fanfic_bot.observability import configure_logging
from fanfic_core.config.settings import Settings
from fanfic_core.exceptions import ScrapingError
from fanfic_core.models.record import FicRecord
from fanfic_core.models.source import FicSource
from fanfic_core.pagination import PageSet, paginate
from fanfic_scrapers.factories import create_scraper, max_pages_for

app = typer.Typer(
    name="fanfic-finder",
    help="Discord bot that searches AO3 and FanFiction.net",
)
console = Console()
logger = structlog.get_logger()


@app.command()
def run(
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
) -> None:
    """Connect to Discord and serve ``!fanfic`` commands until interrupted."""
    settings = Settings()
    if verbose:
        settings.log_level = "DEBUG"

    if settings.discord_token is None:
        console.print(
            "[red]Error:[/red] Set FANFIC_DISCORD_TOKEN (environment or .env)",
            style="bold",
        )
        raise typer.Exit(code=1)

    configure_logging(settings)
    console.print(
        f"[bold green]Starting bot[/bold green] (prefix: {settings.command_prefix})"
    )
    bot = FanficBot(settings)
    # log_handler=None keeps discord.py on the structlog handler set up above
    bot.run(settings.discord_token.get_secret_value(), log_handler=None)


@app.command()
def search(
    term: str | None = typer.Argument(None, help="Search term (default: configured term)"),
    source: FicSource = typer.Option(FicSource.AO3, "--source", help="Archive to search"),
    pages: int | None = typer.Option(
        None, "--pages", min=1, help="Max search pages (default: per-source policy)"
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
) -> None:
    """Scrape one archive from the terminal and print the paged results."""
    settings = Settings()
    if verbose:
        settings.log_level = "DEBUG"
    configure_logging(settings)

    search_term = (term or "").strip() or settings.default_search_term
    max_pages = pages if pages is not None else max_pages_for(source, settings)
    console.print(
        f"[bold]Searching {source.display_name}[/bold] for [cyan]{escape(search_term)}[/cyan]"
    )

    try:
        records = asyncio.run(_scrape(source, search_term, max_pages, settings))
    except ScrapingError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    if not records:
        console.print(f"[yellow]No fanfics found on {source.display_name}.[/yellow]")
        return

    page_set = paginate(
        records,
        search_term,
        page_size=settings.page_size,
        summary_limit=settings.summary_max_chars,
    )
    _print_pages(page_set)


@app.command()
def version() -> None:
    """Show version."""
    console.print("fanfic-finder v0.1.0")


async def _scrape(
    source: FicSource, search_term: str, max_pages: int, settings: Settings
) -> list[FicRecord]:
    scraper = create_scraper(source, settings)
    return await scraper.scrape(search_term, max_pages)


def _print_pages(page_set: PageSet) -> None:
    """Print every page the way the bot would render it."""
    for index in range(len(page_set)):
        payload = page_set.render(index)
        console.rule(f"{escape(payload.title)} [dim]({payload.footer})[/dim]")
        for field in payload.fields:
            console.print(f"[bold magenta]{escape(field.name)}[/bold magenta]")
            console.print(field.value, markup=False, highlight=False)
            console.print()


if __name__ == "__main__":
    app()
