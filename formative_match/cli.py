"""
formative-match CLI entry point.

Every command turns bad input (missing or malformed files, invalid config,
unknown --format) into an ``[ERROR]`` line on stderr and exit code 1.
Commands that do work then configure logging on stderr, so stdout carries
only the command's own report.

Install and run::

    pip install -e .
    formative-match --help
    formative-match validate-config
    formative-match score --opportunities opps.json --user-type influencer --bio "fashion blogger"
    formative-match recommend --opportunities opps.json --limit 6 --output out/recs.json
    formative-match dashboard --token $TOKEN
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any, Optional

import typer

app = typer.Typer(
    name="formative-match",
    help="Creator/brand marketplace opportunity recommender.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from formative_match.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from formative_match.utils.logging import configure_logging
    configure_logging(config.logging)


def _load_opportunities_or_exit(path: str):
    """Read an opportunities JSON file (bare list or ``{"opportunities": [...]}``)."""
    from pydantic import ValidationError

    from formative_match.models.opportunity import Opportunity

    file_path = Path(path)
    if not file_path.exists():
        typer.echo(f"[ERROR] Opportunities file not found: {file_path}", err=True)
        raise typer.Exit(code=1)

    try:
        raw: Any = json.loads(file_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        typer.echo(f"[ERROR] JSON parse error: {exc}", err=True)
        raise typer.Exit(code=1)

    if isinstance(raw, dict):
        raw = raw.get("opportunities")
    if not isinstance(raw, list):
        typer.echo(
            "[ERROR] Opportunities file must contain an array "
            "or an object with an 'opportunities' array.",
            err=True,
        )
        raise typer.Exit(code=1)

    opportunities = []
    errors: list[tuple[int, str]] = []
    for idx, record in enumerate(raw):
        try:
            opportunities.append(Opportunity.model_validate(record))
        except ValidationError as exc:
            errors.append((idx, str(exc)))

    if errors:
        typer.echo(f"[ERROR] {len(errors)} opportunity record(s) failed validation:", err=True)
        for idx, msg in errors[:5]:
            typer.echo(f"  Record #{idx}: {msg}", err=True)
        if len(errors) > 5:
            typer.echo(f"  ... and {len(errors) - 5} more.", err=True)
        raise typer.Exit(code=1)

    return opportunities


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  API base URL:     {config.api.base_url}")
    typer.echo(f"  API token:        {'set' if config.api.token else 'not set'}")
    typer.echo(f"  Carousel limit:   {config.recommendations.carousel_limit}")
    typer.echo(f"  Recent limit:     {config.recommendations.recent_limit}")
    typer.echo(f"  Deadline limit:   {config.recommendations.deadline_limit}")
    typer.echo(f"  Log level:        {config.logging.level}")
    typer.echo(f"  Debug mode:       {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        dumped = config.model_dump()
        if dumped["api"]["token"]:
            dumped["api"]["token"] = "***"
        typer.echo(json.dumps(dumped, indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("score")
def score(
    opportunities_file: str = typer.Option(
        ...,
        "--opportunities",
        help="JSON file of opportunity records.",
    ),
    user_type: Optional[str] = typer.Option(
        None, "--user-type", help="Account role, e.g. influencer, brand, freelancer."
    ),
    bio: Optional[str] = typer.Option(None, "--bio", help="Profile bio text."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Print the score breakdown of every opportunity, in file order."""
    from formative_match.models.user import UserProfile
    from formative_match.recommendations.engine import RecommendationEngine

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    opportunities = _load_opportunities_or_exit(opportunities_file)
    engine = RecommendationEngine(UserProfile(user_type=user_type, bio=bio))

    typer.echo(f"Niches from bio: {', '.join(engine.industries) or '(none)'}")
    for opp in opportunities:
        c = engine.score_components(opp)
        typer.echo(
            f"  #{opp.id:<6} {c.total:>6.1f}  "
            f"type={c.user_type_score:g} industry={c.industry_score:g} "
            f"budget={c.budget_score:g}  {opp.title}"
        )


@app.command("recommend")
def recommend(
    opportunities_file: str = typer.Option(
        ...,
        "--opportunities",
        help="JSON file of opportunity records.",
    ),
    user_type: Optional[str] = typer.Option(
        None, "--user-type", help="Account role, e.g. influencer, brand, freelancer."
    ),
    bio: Optional[str] = typer.Option(None, "--bio", help="Profile bio text."),
    limit: Optional[int] = typer.Option(
        None, "--limit", help="Max results (default: recommendations.carousel_limit)."
    ),
    output: Optional[str] = typer.Option(
        None, "--output", help="Write the ranked list to this file."
    ),
    fmt: str = typer.Option("json", "--format", help="Output file format: json or csv."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Rank opportunities for a profile and print (or write) the top results."""
    from formative_match.models.user import UserProfile
    from formative_match.recommendations.engine import RecommendationEngine
    from formative_match.recommendations.reporter import (
        write_recommendation_csv,
        write_recommendation_json,
    )

    if fmt not in ("json", "csv"):
        typer.echo(f"[ERROR] Unknown format '{fmt}'. Use 'json' or 'csv'.", err=True)
        raise typer.Exit(code=1)

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    opportunities = _load_opportunities_or_exit(opportunities_file)
    engine = RecommendationEngine(UserProfile(user_type=user_type, bio=bio))
    n = limit if limit is not None else config.recommendations.carousel_limit
    ranked = engine.recommend(opportunities, n)

    typer.echo(f"Top {len(ranked)} of {len(opportunities)} opportunities:")
    for rank, item in enumerate(ranked, start=1):
        typer.echo(
            f"  {rank:>2}. [{item.score:5.1f}] {item.opportunity.title} "
            f"({item.opportunity.company_name}): {item.reasoning}"
        )

    if output:
        out_path = Path(output)
        if fmt == "csv":
            write_recommendation_csv(ranked, out_path)
        else:
            write_recommendation_json(ranked, out_path)
        typer.echo(f"  Written: {out_path}")


@app.command("dashboard")
def dashboard(
    token: Optional[str] = typer.Option(
        None, "--token", help="API bearer token (default: api.token / FORMATIVE_MATCH_API_TOKEN)."
    ),
    base_url: Optional[str] = typer.Option(None, "--base-url", help="Override api.base_url."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Load the live dashboard from the backend and print a summary."""
    from pydantic import ValidationError

    from formative_match.api.client import MarketplaceClient
    from formative_match.config import ApiConfig
    from formative_match.models.social import format_count
    from formative_match.pipeline.dashboard import DashboardLoader
    from formative_match.utils.time_utils import format_deadline_label

    config = _load_config_or_exit(config_path)

    api = config.api
    if base_url:
        try:
            api = ApiConfig.model_validate({**api.model_dump(), "base_url": base_url})
        except ValidationError as exc:
            typer.echo(f"[ERROR] Invalid --base-url: {exc}", err=True)
            raise typer.Exit(code=1)

    _configure_logging(config)

    async def _load():
        async with MarketplaceClient(
            api.base_url,
            token=token or api.token,
            timeout_seconds=api.timeout_seconds,
        ) as client:
            return await DashboardLoader(client, config.recommendations).load()

    snapshot = asyncio.run(_load())

    stats = snapshot.stats
    typer.echo(
        f"Applications: {stats.applications}  Earnings: ${stats.earnings:,.2f}  "
        f"Profile views: {stats.profile_views}  Campaigns: {stats.campaigns}"
    )
    typer.echo("")
    typer.echo("Recommended for you:")
    if not snapshot.recommendations:
        typer.echo("  (none; complete your profile to get personalized opportunities)")
    for item in snapshot.recommendations:
        typer.echo(f"  [{item.score:5.1f}] {item.opportunity.title} ({item.opportunity.budget_label})")

    typer.echo("")
    typer.echo("Upcoming deadlines:")
    if not snapshot.upcoming_deadlines:
        typer.echo("  (no upcoming deadlines)")
    for deadline in snapshot.upcoming_deadlines:
        typer.echo(
            f"  {format_deadline_label(deadline.deadline):>8}  "
            f"{deadline.title} ({deadline.company_name})"
        )

    typer.echo("")
    typer.echo("Recent activity:")
    if not snapshot.activity:
        typer.echo("  (no recent activity)")
    for entry in snapshot.activity:
        typer.echo(f"  {entry.activity_type.value:<20} {entry.title}")

    typer.echo("")
    typer.echo("Linked accounts:")
    if not snapshot.social_accounts:
        typer.echo("  (no linked accounts)")
    for account in snapshot.social_accounts:
        typer.echo(
            f"  {account.platform_type.display_name:<10} {account.display_username:<20} "
            f"{account.formatted_followers} followers, {format_count(account.total_posts)} posts"
        )

    if snapshot.is_partial:
        typer.echo("")
        for error in snapshot.errors:
            typer.echo(f"[WARN] {error}", err=True)


if __name__ == "__main__":
    app()
