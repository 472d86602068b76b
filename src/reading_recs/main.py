#!/usr/bin/env python3
"""Command-line entry point for reading-recs.

Usage:
    reading-recs search "stoicism" --minutes 15
    reading-recs search "space" --mock
    reading-recs search "space" --exclude https://example.com/a --exclude https://example.com/b
    reading-recs check-link https://en.wikipedia.org/wiki?curid=123
"""

import asyncio
import sys
from pathlib import Path
from typing import Annotated

import typer
import yaml
from dotenv import load_dotenv

from reading_recs.models.articles import ArticleCandidate, LicenseFilter
from reading_recs.models.config import ServiceConfig
from reading_recs.models.recommendations import RecommendationRequest, RecommendationResult
from reading_recs.service import RecommendationsService
from reading_recs.utils.config_loader import load_service_config
from reading_recs.utils.links import is_reachable
from reading_recs.utils.logging import setup_logging
from reading_recs.utils.reading import estimated_minutes

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(help="Find free-to-read articles that fit your reading time.")


def load_config_or_exit(config_file: Path | None) -> ServiceConfig:
    """Load the service config, exiting with code 1 if it cannot be read."""
    try:
        return load_service_config(config_file, missing_ok=True)
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"\n❌ Failed to load configuration: {e}")
        raise typer.Exit(code=1) from e


def print_header(title: str) -> None:
    """Print a formatted header."""
    print("\n" + "=" * 80)
    print(f"  {title}")
    print("=" * 80 + "\n")


def print_candidate(position: int, candidate: ArticleCandidate, wpm: int) -> None:
    """Print one ranked candidate."""
    if candidate.word_count:
        length = f"~{estimated_minutes(candidate.word_count, wpm)} min"
    else:
        length = "length unknown"

    print(f"  {position}. {candidate.title}")
    print(f"     {candidate.source.value} | {candidate.license_type.value} | {length}")
    print(f"     {candidate.url}")
    if candidate.snippet:
        print(f"     {candidate.snippet[:120]}")


def print_result(result: RecommendationResult, wpm: int) -> None:
    """Print top picks and backups."""
    if not result.top_three:
        print("  No matches. Try a broader topic or a longer time budget.")
        return

    print_header("Top picks")
    for position, candidate in enumerate(result.top_three, 1):
        print_candidate(position, candidate, wpm)

    if result.backups:
        print_header("Backups")
        for position, candidate in enumerate(result.backups, 1):
            print_candidate(position, candidate, wpm)


@app.command()
def search(
    topic: Annotated[str, typer.Argument(help="Subject to read about")],
    minutes: Annotated[int, typer.Option("--minutes", "-m", min=1, help="Time budget")] = 10,
    license_filter: Annotated[
        LicenseFilter, typer.Option("--license", "-l", help="License restriction")
    ] = LicenseFilter.ANY,
    language: Annotated[str, typer.Option("--language", help="Language tag")] = "en",
    wpm: Annotated[
        int | None, typer.Option("--wpm", min=1, help="Reading speed (words per minute)")
    ] = None,
    allow_over: Annotated[
        bool,
        typer.Option("--allow-over/--strict", help="Allow articles one minute over budget"),
    ] = True,
    prefer_recent: Annotated[bool, typer.Option("--prefer-recent")] = False,
    mock: Annotated[bool, typer.Option("--mock", help="Offline deterministic results")] = False,
    exclude: Annotated[
        list[str] | None, typer.Option("--exclude", "-x", help="URL to leave out")
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Service config (default: $READING_RECS_CONFIG)"),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Search every source and print a ranked shortlist."""
    config = load_config_or_exit(config_file)

    if verbose:
        config.logging.level = "DEBUG"
    setup_logging(config.logging)

    if not topic.strip():
        print("\n❌ Enter a subject to search.")
        raise typer.Exit(code=1)

    request = RecommendationRequest(
        topic=topic.strip(),
        minutes=minutes,
        license_filter=license_filter,
        language=language.strip() or config.default_language,
        wpm=wpm or config.default_wpm,
        allow_slightly_over=allow_over,
        prefer_recent=prefer_recent,
        mock_mode=mock,
        excluded_urls=tuple(exclude or ()),
    )

    print_header(f"📚 Recommendations for '{request.topic}' ({minutes} min)")

    service = RecommendationsService(config=config)
    try:
        result = asyncio.run(service.search(request))
    except KeyboardInterrupt:
        print("\n\n⚠️  Search interrupted by user")
        sys.exit(130)

    print_result(result, request.wpm)


@app.command("check-link")
def check_link(
    url: Annotated[str, typer.Argument(help="URL to probe")],
    config_file: Annotated[Path | None, typer.Option("--config", "-c")] = None,
) -> None:
    """Report whether a URL is reachable (HEAD, then GET)."""
    config = load_config_or_exit(config_file)
    setup_logging(config.logging)

    reachable = asyncio.run(
        is_reachable(url, config.link_check.timeout_seconds, config.fetch.user_agent)
    )
    print(f"{'✅ Reachable' if reachable else '❌ Unreachable'}: {url}")
    if not reachable:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
