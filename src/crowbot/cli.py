from __future__ import annotations

import random
from typing import Optional

import httpx
from rich import print
import typer

from . import __version__
from .bio_extractor import extract_bio
from .celebrity import celebrity_status
from .config import load_config, repo_root
from .fetcher import build_client
from .logging_setup import configure_logging
from .quotes import pick_quote_line, split_quote
from .search import SearchError, search_first_result
from .url_rules import DEFAULT_POLICY, default_rules_path
from .url_validator import check_url, validate_url

app = typer.Typer(add_completion=False)


@app.callback()
def _setup() -> None:
    cfg = load_config()
    configure_logging(cfg.log_level)


@app.command()
def ping() -> None:
    """
    Sanity check: config files, env wiring and the URL rule table.
    """
    cfg = load_config()
    root = repo_root()

    print(f"[bold]crowbot[/bold] version={__version__}")
    print(f"env={cfg.env}")
    print(f"log_level={cfg.log_level}")
    print(f"repo_root={root}")

    settings_path = root / "configs" / "settings.yaml"
    print(f"settings.yaml exists={settings_path.exists()}")
    print(f"url_rules={default_rules_path()}")

    print(f"search engines={len(DEFAULT_POLICY.search_engines)}")
    print(f"news domains={len(DEFAULT_POLICY.news_domains)}")
    print(f"search.engine={cfg.search_engine}")


@app.command()
def bio(text: str) -> None:
    """Extract life dates from a lead sentence."""
    rec = extract_bio(text)
    print(f"cleaned={rec.cleaned_sentence}")
    print(f"birth={rec.birth_date}")
    print(f"death={rec.death_date}")
    print(f"age_at_death={rec.age_at_death}")


@app.command("check-url")
def check_url_cmd(text: str) -> None:
    """Validate the URL embedded in a bot message."""
    verdict = validate_url(text)
    print(f"url={verdict.url}")
    if verdict.accepted:
        print("[green]accepted[/green]")
        return
    print(f"[red]rejected[/red] reason={verdict.reason.value}")
    raise typer.Exit(code=1)


@app.command()
def quote(text: str, seed: Optional[int] = typer.Option(None, help="Seed for a repeatable pick")) -> None:
    """Split a <Speaker> line quote and pick one line."""
    for speaker, line in split_quote(text):
        print(f"{speaker}: {line}")
    rng = random.Random(seed) if seed is not None else None
    print(f"selected={pick_quote_line(text, rng, fallback_to_text=True)}")


@app.command()
def search(query: str, engine: Optional[str] = typer.Option(None, help="duckduckgo or google")) -> None:
    """First organic search result, checked by the URL rules."""
    cfg = load_config()
    try:
        with build_client(httpx.Timeout(cfg.http_timeout_s)) as client:
            result = search_first_result(query, engine=engine or cfg.search_engine, client=client)
    except (SearchError, ValueError) as e:
        print(f"[red]error[/red] {e}")
        raise typer.Exit(code=2)

    if result is None:
        print("no results")
        raise typer.Exit(code=1)

    print(f"title={result.title}")
    print(f"url={result.url}")
    print(f"snippet={result.snippet}")
    verdict = check_url(result.url)
    print(f"url_check={'accepted' if verdict.accepted else verdict.reason.value}")


@app.command("alive-or-dead")
def alive_or_dead(name: str) -> None:
    """Look a person up on Wikipedia and report their status."""
    cfg = load_config()
    try:
        with build_client(httpx.Timeout(cfg.http_timeout_s)) as client:
            status = celebrity_status(name, client=client)
    except httpx.HTTPError as e:
        print(f"[red]error[/red] Wikipedia lookup failed: {e}")
        raise typer.Exit(code=2)

    if status is None:
        print(f"Sorry, I couldn't find information about '{name}'.")
        raise typer.Exit(code=1)
    print(status)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
