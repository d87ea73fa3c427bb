"""CivicTrack CLI entry point."""
from __future__ import annotations

import json
import logging

import click

from civictrack.config import CivicTrackConfig
from civictrack.errors import CivicTrackError

_STATUS_CHOICES = ["reported", "in_progress", "resolved"]
_CATEGORY_CHOICES = ["roads", "lighting", "water", "cleanliness", "safety", "obstructions"]


def _load_issues(path: str):
    from civictrack.sources import JSONIssueSource

    try:
        return JSONIssueSource(path).fetch()
    except CivicTrackError as exc:
        raise click.ClickException(str(exc)) from exc


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """CivicTrack: rank and classify civic issue reports."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.option("--issues", "issues_path", required=True, type=click.Path(exists=True), help="JSON file of issues")
@click.option("--lat", type=float, default=None, help="Latitude of the reference point")
@click.option("--lng", type=float, default=None, help="Longitude of the reference point")
@click.option("--radius", type=float, default=None, help="Search radius in km")
@click.option("--search", default="", help="Text to match in title or description")
@click.option("--category", "categories", multiple=True, type=click.Choice(_CATEGORY_CHOICES))
@click.option("--status", "statuses", multiple=True, type=click.Choice(_STATUS_CHOICES))
@click.option("--include-flagged", is_flag=True, default=False, help="Keep flagged issues")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print JSON")
def nearby(
    issues_path: str,
    lat: float | None,
    lng: float | None,
    radius: float | None,
    search: str,
    categories: tuple[str, ...],
    statuses: tuple[str, ...],
    include_flagged: bool,
    as_json: bool,
) -> None:
    """List issues near a point, nearest first."""
    from civictrack.feed import FeedFilters, build_feed
    from civictrack.geo import resolve_center
    from civictrack.model.category import ReportCategory
    from civictrack.model.coordinate import Coordinate
    from civictrack.model.issue import IssueStatus

    config = CivicTrackConfig.from_env()
    try:
        if (lat is None) != (lng is None):
            raise click.UsageError("--lat and --lng must be given together")
        location = Coordinate(lat=lat, lng=lng) if lat is not None else None
        center = resolve_center(location, config.fallback_location)
        filters = FeedFilters(
            search=search,
            categories=tuple(ReportCategory(c) for c in categories),
            statuses=tuple(IssueStatus(s) for s in statuses),
            radius_km=config.default_radius_km if radius is None else radius,
            hide_flagged=not include_flagged,
        )
        ranked = build_feed(_load_issues(issues_path), center, filters)
    except CivicTrackError as exc:
        raise click.ClickException(str(exc)) from exc

    if location is None:
        click.echo("Location unavailable; using configured fallback location.", err=True)

    if as_json:
        click.echo(json.dumps([item.to_dict() for item in ranked], indent=2))
        return

    click.echo(f"{len(ranked)} issues within {filters.radius_km:g} km")
    for item in ranked:
        issue = item.issue
        click.echo(f"{item.distance:7.2f} km  [{issue.status}] {issue.title} ({issue.category}, {issue.upvotes} upvotes)")


@cli.command()
@click.option("--title", required=True, help="Issue title")
@click.option("--description", default="", help="Issue description")
@click.option("--location", default=None, help="Free-text location")
@click.option("--remote/--local", default=False, help="Use the remote classifier")
@click.option("--fallback", is_flag=True, default=False, help="Fall back to keyword rules if the remote call fails")
def classify(title: str, description: str, location: str | None, remote: bool, fallback: bool) -> None:
    """Classify an issue description."""
    from civictrack.classifier import classify_issue

    remote_classifier = None
    if remote:
        remote_classifier = CivicTrackConfig.from_env().remote_classifier()
        if remote_classifier is None:
            raise click.ClickException(
                "Remote classification needs CIVICTRACK_CLASSIFIER_API_KEY or OPENAI_API_KEY"
            )

    try:
        result = classify_issue(
            title,
            description,
            location,
            remote=remote_classifier,
            fallback_to_local=fallback,
        )
    except CivicTrackError as exc:
        raise click.ClickException(str(exc)) from exc
    finally:
        if remote_classifier is not None:
            remote_classifier.close()

    click.echo(json.dumps(result.to_dict(), indent=2))


@cli.command()
@click.option("--issues", "issues_path", required=True, type=click.Path(exists=True), help="JSON file of issues")
def stats(issues_path: str) -> None:
    """Print dashboard counts for an issue file."""
    from civictrack.stats import average_response_days, category_breakdown, compute_stats

    issues = _load_issues(issues_path)
    summary = compute_stats(issues)

    click.echo(f"Total:        {summary.total}")
    click.echo(f"Reported:     {summary.reported}")
    click.echo(f"In progress:  {summary.in_progress}")
    click.echo(f"Resolved:     {summary.resolved} ({summary.resolution_rate}%)")
    click.echo(f"Flagged:      {summary.flagged}")
    click.echo(f"Today:        {summary.today} (+{summary.this_week} this week)")
    click.echo(f"Avg response: {average_response_days(issues)} days")
    click.echo("By category:")
    for category, count in category_breakdown(issues):
        click.echo(f"  {category:<14}{count}")


@cli.command()
@click.option("--host", default="127.0.0.1", help="Host to bind to")
@click.option("--port", default=5000, type=int, help="Port to bind to")
@click.option("--issues", "issues_path", default=None, type=click.Path(exists=True), help="JSON file of issues")
@click.option("--debug/--no-debug", default=False, help="Enable debug mode")
def serve(host: str, port: int, issues_path: str | None, debug: bool) -> None:
    """Start the CivicTrack API server."""
    from dataclasses import replace

    from civictrack.web.app import create_app

    config = CivicTrackConfig.from_env()
    config = replace(config, host=host, port=port, issues_path=issues_path or config.issues_path)

    app = create_app(config=config)
    click.echo(f"Starting CivicTrack on {host}:{port}")
    app.run(host=host, port=port, debug=debug)


if __name__ == "__main__":
    cli()
