#!/usr/bin/env python3
"""CLI script to resolve commit authors into people and store them as Parquet."""

from __future__ import annotations

from pathlib import Path

import structlog
import typer

from authorlens.config import get_settings
from authorlens.identity.blacklist import Blacklist
from authorlens.identity.resolver import resolve_people
from authorlens.storage.parquet_store import write_people_parquet

logger = structlog.get_logger(__name__)
app = typer.Typer()


@app.command()
def main(
    cache: Path | None = typer.Option(
        None, "--cache", help="Signature CSV cache (read if present, written otherwise)"
    ),
    hash_file: Path | None = typer.Option(
        None, "--hash-file", help="Only use commits whose hash is listed in this file"
    ),
    blacklist_dir: Path | None = typer.Option(
        None, "--blacklist-dir", help="Directory with names.txt, emails.txt, domains.txt"
    ),
    recent_months: int | None = typer.Option(
        None, "--recent-months", help="Window, in months, for recent usage counts"
    ),
    output: Path | None = typer.Option(None, "--output", help="Parquet file for the people"),
    provider: str | None = typer.Option(
        None, "--provider", help="Identity provider label stored with the people"
    ),
) -> None:
    """Build one person per accepted commit signature and report usage statistics."""
    settings = get_settings()

    cache = cache or Path(settings.signature_cache)
    if hash_file is None and settings.hash_file:
        hash_file = Path(settings.hash_file)
    if blacklist_dir is None and settings.blacklist_dir:
        blacklist_dir = Path(settings.blacklist_dir)
    if recent_months is None:
        recent_months = settings.recent_months
    output = output or Path(settings.people_output)
    if provider is None:
        provider = settings.external_id_provider

    blacklist = Blacklist.from_directory(blacklist_dir) if blacklist_dir else Blacklist.default()

    people, name_freqs, email_freqs = resolve_people(
        settings.database_url,
        cache,
        blacklist,
        recent_months,
        hash_file=hash_file,
        timeout=settings.db_timeout,
    )
    write_people_parquet(people, output, provider)
    logger.info(
        "identity_matching_complete",
        people=len(people),
        distinct_names=len(name_freqs),
        distinct_emails=len(email_freqs),
        output=str(output),
    )


if __name__ == "__main__":
    app()
