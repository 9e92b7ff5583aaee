"""CLI entry point for the link hub."""

import asyncio
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import typer

from link_hub.adapters.notifications import EmailJSSender
from link_hub.adapters.render import MarkdownRenderer
from link_hub.adapters.sources import FileDocumentSource, HttpDocumentSource
from link_hub.config import Settings, get_settings
from link_hub.core import DocumentLoadError, DocumentSource, build_changelog_view
from link_hub.core.validators import parse_instant
from link_hub.use_cases import ChangelogService, CollectionLoader, SuggestionService

app = typer.Typer(help="Validate, render and diff link hub data.", no_args_is_help=True)

CONFIG_OPTION = typer.Option(Path("config.yaml"), "--config", help="Path to config.yaml")


def _build_source(settings: Settings, data_dir: Optional[Path] = None) -> DocumentSource:
    if data_dir is None and settings.data.base_url:
        return HttpDocumentSource(settings.data.base_url, timeout=settings.data.request_timeout)
    return FileDocumentSource(data_dir or settings.data_dir)


def _build_loader(settings: Settings, data_dir: Optional[Path] = None) -> CollectionLoader:
    data = settings.data
    return CollectionLoader(
        source=_build_source(settings, data_dir),
        categories_file=data.categories_file,
        links_file=data.links_file,
        events_file=data.events_file,
        updates_file=data.updates_file,
        variants=data.variants,
        default_variant=data.default_variant,
    )


def _parse_now(now: Optional[str]) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    parsed = parse_instant(now)
    if parsed is None:
        raise typer.BadParameter(f"Invalid timestamp: {now}", param_hint="--now")
    return parsed


def _check_variants(settings: Settings, variants: list[str]) -> None:
    for variant in variants:
        if variant not in settings.data.variants:
            raise typer.BadParameter(
                f"Unknown variant: {variant} (expected one of {', '.join(settings.data.variants)})",
                param_hint="--variant",
            )


def _run(coro):
    try:
        return asyncio.run(coro)
    except DocumentLoadError as e:
        print(f"❌ {e}")
        raise typer.Exit(code=1)


@app.command()
def links(
    variant: Optional[str] = typer.Option(None, help="Game variant (poe1 or poe2)"),
    config: Path = CONFIG_OPTION,
) -> None:
    """Load and render link categories."""
    settings = get_settings(config)
    if variant is not None:
        _check_variants(settings, [variant])
    loader = _build_loader(settings)
    categories = _run(loader.load_links(variant))
    print(MarkdownRenderer().render_categories(categories, datetime.now(timezone.utc)))


@app.command()
def events(
    now: Optional[str] = typer.Option(None, help="Evaluate durations at this ISO timestamp"),
    config: Path = CONFIG_OPTION,
) -> None:
    """Load and render events with their durations."""
    settings = get_settings(config)
    evaluated_at = _parse_now(now)
    loaded = _run(_build_loader(settings).load_events())
    print(MarkdownRenderer().render_events(loaded, evaluated_at))


@app.command()
def updates(config: Path = CONFIG_OPTION) -> None:
    """Load the update history and render the changelog."""
    settings = get_settings(config)
    record = _run(_build_loader(settings).load_updates())
    if record is None:
        print("❌ Update history is unavailable or invalid")
        raise typer.Exit(code=1)

    view = build_changelog_view(list(record.changelog))
    print(MarkdownRenderer().render_changelog(view, record.last_updated))


@app.command()
def diff(
    previous_dir: Path = typer.Argument(..., help="Data directory of the previous snapshot"),
    variant: Optional[list[str]] = typer.Option(None, help="Variants to compare (default: all)"),
    note: Optional[list[str]] = typer.Option(None, help="Free-text note for the update"),
    write: bool = typer.Option(False, "--write", help="Prepend the changes to the updates document"),
    config: Path = CONFIG_OPTION,
) -> None:
    """Compare current link data against a previous snapshot."""
    settings = get_settings(config)
    _check_variants(settings, variant or [])
    current = _build_loader(settings, settings.data_dir)
    previous = _build_loader(settings, previous_dir)
    service = ChangelogService()

    entries = _run(service.diff_snapshots(current, previous, variant or None))

    print(f"\n📊 Changes: {len(entries)}")
    for entry in entries:
        sign = "+" if entry.type.value == "added" else "-"
        print(f"  {sign} [{entry.category_id}] {entry.link_name} <{entry.link_url}>")

    if not write:
        return

    if not entries and not note:
        print("✓ Nothing to record")
        return

    now = datetime.now(timezone.utc)
    group = service.build_group(entries, now, note or ())
    record = _run(current.load_history())
    updated = service.record_update(record, group, now)

    source = FileDocumentSource(settings.data_dir)
    path = source.write_json(settings.data.updates_file, updated.to_dict())
    print(f"✓ Update recorded in {path}")


@app.command()
def suggest(
    name: str = typer.Argument(..., help="Event name"),
    start: str = typer.Argument(..., help="Start date/time (local, YYYY-MM-DDTHH:MM)"),
    end: str = typer.Argument(..., help="End date/time (local, YYYY-MM-DDTHH:MM)"),
    game: str = typer.Option("poe1", help="Game variant (poe1 or poe2)"),
    event_type: Optional[str] = typer.Option(None, "--type", help="league, race, event or other"),
    description: Optional[str] = typer.Option(None, help="Short description"),
    banner: Optional[str] = typer.Option(None, help="Banner image URL"),
    details: Optional[str] = typer.Option(None, help="Details or sign-up link"),
    email: Optional[str] = typer.Option(None, help="Your email for follow-up"),
    config: Path = CONFIG_OPTION,
) -> None:
    """Send an event suggestion to the maintainer."""
    settings = get_settings(config)
    emailjs = settings.emailjs
    sender = EmailJSSender(emailjs.service_id, emailjs.public_key) if not emailjs.missing_keys() else None
    service = SuggestionService(sender, emailjs)

    data = {
        "name": name,
        "game": game,
        "startDate": start,
        "endDate": end,
        "type": event_type,
        "description": description,
        "bannerImageUrl": banner,
        "detailsLink": details,
        "email": email,
    }
    result = asyncio.run(service.submit(data, email))

    if result.success:
        print(f"✓ Suggestion sent ({result.message_id})")
        return

    print(f"❌ {result.error}")
    raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
