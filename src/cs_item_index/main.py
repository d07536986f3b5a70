"""CLI entry point for CS Item Index."""

import logging
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress

from .catalog_loader import CatalogLoader, load_catalogs
from .config import ConfigManager
from .index_store import CategoryIndexStore
from .models import BaseItem, Variant
from .output_formatter import OutputFormatter

app = typer.Typer(
    name="csindex",
    help="Search CS item catalogs by name, variant and category",
    no_args_is_help=True,
)

# Global state for formatter and config (set by callback)
formatter: OutputFormatter = OutputFormatter()
config: ConfigManager | None = None
source_overrides: dict[str, str] = {}


def get_config() -> ConfigManager:
    """Get or create ConfigManager instance."""
    global config
    if config is None:
        config = ConfigManager()
    return config


def parse_sources(values: list[str] | None) -> dict[str, str]:
    """Parse repeated TYPE=SOURCE options.

    Raises:
        ValueError: If a value has no type or no source
    """
    sources: dict[str, str] = {}
    for value in values or []:
        item_type, sep, source = value.partition("=")
        if not sep or not item_type.strip() or not source.strip():
            raise ValueError(f"Invalid source '{value}', expected TYPE=PATH_OR_URL")
        sources[item_type.strip().lower()] = source.strip()
    return sources


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr through Rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def get_sources() -> dict[str, str]:
    """Catalog sources from config, with command line overrides applied."""
    return source_overrides or get_config().sources


def build_loader(sources: dict[str, str]) -> CatalogLoader:
    """Create a CatalogLoader using the configured timeout, workers and aliases."""
    cfg = get_config()
    return CatalogLoader(
        sources,
        timeout=cfg.loader.timeout,
        max_workers=cfg.loader.max_workers,
        aliases=cfg.aliases,
    )


def result_entry(store: CategoryIndexStore, item: BaseItem, variant: Variant) -> dict[str, Any]:
    """Build the output record for one search result."""
    selection = store.select_variant(item, variant)
    return {
        "index": item.index,
        "base_name": item.base_name,
        "item_type": item.item_type,
        "metadata": item.metadata,
        "variants": [v.value for v in item.variants],
        "selected_variant": selection.selected_variant.value if selection else None,
        "wear_conditions": selection.wear_conditions if selection else [],
        "selected": selection.item.model_dump(mode="json") if selection else {},
    }


@app.callback()
def main(
    json_output: Annotated[
        bool, typer.Option("--json", help="Output as JSON for programmatic use")
    ] = False,
    config_path: Annotated[
        Path | None, typer.Option("--config", help="Path to a config TOML file")
    ] = None,
    source: Annotated[
        list[str] | None,
        typer.Option("--source", "-s", help="Catalog source as TYPE=PATH_OR_URL (repeatable)"),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", help="Show debug logging")] = False,
) -> None:
    """CS Item Index CLI - Autocomplete search over CS item catalogs."""
    global formatter, config, source_overrides

    formatter = OutputFormatter(json_mode=json_output)
    configure_logging(verbose)

    config = ConfigManager(config_path=config_path)

    try:
        source_overrides = parse_sources(source)
    except ValueError as e:
        formatter.error(str(e), error_code="INVALID_SOURCE")
        raise typer.Exit(code=1)


@app.command()
def search(
    item_type: Annotated[str, typer.Argument(help="Catalog type, e.g. skins or stickers")],
    query: Annotated[str, typer.Argument(help="Search text")] = "",
    limit: Annotated[
        int | None, typer.Option("--limit", "-l", help="Maximum results to show")
    ] = None,
    exclude_special: Annotated[
        bool | None,
        typer.Option("--exclude-special/--include-special", help="Hide knives and gloves"),
    ] = None,
    variant: Annotated[
        Variant, typer.Option("--variant", help="Preferred variant to display")
    ] = Variant.NORMAL,
) -> None:
    """Search a catalog type."""
    try:
        cfg = get_config()
        sources = get_sources()
        resolved = cfg.aliases.get(item_type.lower(), item_type.lower())
        store, _ = load_catalogs(
            {resolved: sources[resolved]} if resolved in sources else {},
            timeout=cfg.loader.timeout,
            max_workers=cfg.loader.max_workers,
            aliases=cfg.aliases,
        )

        if exclude_special is None:
            exclude_special = cfg.search.exclude_special
        max_results = limit if limit is not None else cfg.search.max_results

        matches = store.search(resolved, query, exclude_special=exclude_special)
        results = [result_entry(store, item, variant) for item in matches[:max_results]]

        output_data = {
            "success": True,
            "data": {
                "item_type": resolved,
                "query": query,
                "total": len(matches),
                "results": results,
                "error": store.failures.get(resolved),
            },
        }
        formatter.output(output_data)
    except Exception as e:
        formatter.error(str(e))
        raise typer.Exit(code=1)


@app.command()
def stats() -> None:
    """Load every configured catalog and show index statistics."""
    try:
        sources = get_sources()
        loader = build_loader(sources)

        if formatter.json_mode:
            events = list(loader.stream())
        else:
            events = []
            with Progress(console=formatter.console, transient=True) as progress:
                task = progress.add_task("Loading catalogs", total=len(sources))
                for event in loader.stream():
                    events.append(event)
                    progress.update(task, completed=event.loaded)

        store = loader.store
        output_data = {
            "success": True,
            "data": {
                "catalogs": store.stats(),
                "progress": {
                    "loaded": len(events),
                    "total": len(sources),
                    "failed": sum(1 for event in events if not event.ok),
                },
            },
        }
        formatter.output(output_data)
    except Exception as e:
        formatter.error(str(e))
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
