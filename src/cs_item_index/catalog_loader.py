"""Concurrent loading of catalog payloads into a CategoryIndexStore.

Each catalog is fetched and indexed on its own worker. A catalog that fails
to load ends up with an empty index and a recorded error; the remaining
catalogs load normally.
"""

import json
import logging
from collections.abc import Iterator, Mapping
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Any
from urllib.parse import urlparse
from urllib.request import url2pathname

import requests

from .index_builder import build_category_index, empty_index
from .index_store import CategoryIndexStore
from .models import CatalogType, CategoryIndex, LoadProgress
from .preprocessor import type_name

logger = logging.getLogger(__name__)

_API_BASE = "https://raw.githubusercontent.com/ByMykel/CSGO-API/main/public/api/en"

DEFAULT_SOURCES = {
    CatalogType.SKINS.value: f"{_API_BASE}/skins.json",
    CatalogType.CASES.value: f"{_API_BASE}/crates.json",
    CatalogType.STICKERS.value: f"{_API_BASE}/stickers.json",
    CatalogType.AGENTS.value: f"{_API_BASE}/agents.json",
    CatalogType.KEYCHAINS.value: f"{_API_BASE}/keychains.json",
    CatalogType.GRAFFITI.value: f"{_API_BASE}/graffiti.json",
    CatalogType.PATCHES.value: f"{_API_BASE}/patches.json",
    CatalogType.MUSIC_KITS.value: f"{_API_BASE}/music_kits.json",
    CatalogType.HIGHLIGHTS.value: f"{_API_BASE}/highlights.json",
}
DEFAULT_TIMEOUT = 15.0
DEFAULT_MAX_WORKERS = 4


class CategoryFetchError(Exception):
    """Raised when a catalog payload cannot be fetched or decoded."""

    def __init__(self, item_type: str, source: str, reason: str):
        self.item_type = item_type
        self.source = source
        self.reason = reason
        super().__init__(f"Failed to load {item_type} from {source}: {reason}")


def fetch_payload(item_type: str, source: str, timeout: float = DEFAULT_TIMEOUT) -> Any:
    """Fetch and decode one catalog payload.

    Args:
        item_type: Catalog type, used in error messages
        source: http(s) URL, file:// URL or local path
        timeout: Seconds to wait for the server

    Returns:
        Decoded JSON payload

    Raises:
        CategoryFetchError: If the payload cannot be read or is not JSON
    """
    parsed = urlparse(source)
    if parsed.scheme in ("http", "https"):
        try:
            response = requests.get(source, timeout=timeout)
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError, RecursionError) as e:
            raise CategoryFetchError(item_type, source, str(e)) from e

    path = Path(url2pathname(parsed.path)) if parsed.scheme == "file" else Path(source)
    try:
        with open(path.expanduser(), encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError, RecursionError) as e:
        raise CategoryFetchError(item_type, source, str(e)) from e


class CatalogLoader:
    """Loads a set of catalog sources into a CategoryIndexStore."""

    def __init__(
        self,
        sources: Mapping[str, str],
        timeout: float = DEFAULT_TIMEOUT,
        max_workers: int = DEFAULT_MAX_WORKERS,
        aliases: Mapping[str, str] | None = None,
    ):
        """Initialize the loader.

        Args:
            sources: Source URL or path keyed by catalog type
            timeout: Per-request timeout in seconds
            max_workers: Maximum number of concurrent fetches
            aliases: Extra type aliases for the resulting store
        """
        self.sources = {type_name(item_type): source for item_type, source in sources.items()}
        self.timeout = timeout
        self.max_workers = max(1, max_workers)
        self.aliases = dict(aliases or {})
        self._store: CategoryIndexStore | None = None

    @property
    def store(self) -> CategoryIndexStore:
        """Get the loaded store once streaming has finished."""
        if self._store is None:
            raise RuntimeError("Catalogs have not finished loading")
        return self._store

    def _load_one(self, item_type: str, source: str) -> CategoryIndex:
        payload = fetch_payload(item_type, source, self.timeout)
        return build_category_index(item_type, payload)

    def stream(self) -> Iterator[LoadProgress]:
        """Load every source, yielding progress as each catalog completes."""
        total = len(self.sources)
        indexes: dict[str, CategoryIndex] = {}
        failures: dict[str, str] = {}

        if total:
            workers = min(self.max_workers, total)
            with ThreadPoolExecutor(max_workers=workers) as pool:
                futures = {
                    pool.submit(self._load_one, item_type, source): item_type
                    for item_type, source in self.sources.items()
                }
                for future in as_completed(futures):
                    item_type = futures[future]
                    try:
                        index = future.result()
                    except CategoryFetchError as e:
                        logger.warning("%s", e)
                        failures[item_type] = e.reason
                        index = empty_index(item_type)
                    except Exception as e:
                        logger.exception("Unexpected error while indexing %s", item_type)
                        failures[item_type] = str(e) or type(e).__name__
                        index = empty_index(item_type)
                    else:
                        logger.info("Loaded %d %s items", len(index.items), item_type)

                    indexes[item_type] = index
                    yield LoadProgress(
                        loaded=len(indexes),
                        total=total,
                        item_type=item_type,
                        ok=item_type not in failures,
                        item_count=len(index.items),
                        error=failures.get(item_type),
                    )

        self._store = CategoryIndexStore(
            {item_type: indexes[item_type] for item_type in self.sources},
            aliases=self.aliases,
            failures=failures,
        )


def load_catalogs(
    sources: Mapping[str, str] | None = None,
    timeout: float = DEFAULT_TIMEOUT,
    max_workers: int = DEFAULT_MAX_WORKERS,
    aliases: Mapping[str, str] | None = None,
) -> tuple[CategoryIndexStore, list[LoadProgress]]:
    """Load catalogs and build their indexes.

    Args:
        sources: Source URL or path keyed by catalog type. Defaults to the
                 public CS item API.
        timeout: Per-request timeout in seconds
        max_workers: Maximum number of concurrent fetches
        aliases: Extra type aliases for the store

    Returns:
        The store and the progress events in completion order
    """
    loader = CatalogLoader(
        DEFAULT_SOURCES if sources is None else sources,
        timeout=timeout,
        max_workers=max_workers,
        aliases=aliases,
    )
    progress = list(loader.stream())
    return loader.store, progress
