"""Output formatting for CLI and programmatic use."""

import json
from typing import Any

from rich.console import Console
from rich.table import Table

VARIANT_LABELS = {
    "normal": "Normal",
    "stattrak": "StatTrak™",
    "souvenir": "Souvenir",
}


class OutputFormatter:
    """Formats output for both Rich terminal and JSON modes."""

    def __init__(self, json_mode: bool = False):
        """Initialize formatter.

        Args:
            json_mode: If True, output JSON instead of Rich formatting
        """
        self.json_mode = json_mode
        self.console = Console()

    def output(self, data: dict[str, Any], message: str = "") -> None:
        """Output data in appropriate format.

        Args:
            data: Data to output
            message: Optional message for Rich mode
        """
        if self.json_mode:
            self._output_json(data)
        else:
            self._output_rich(data, message)

    def _output_json(self, data: dict[str, Any]) -> None:
        """Output as JSON to stdout."""
        print(json.dumps(data, indent=2, ensure_ascii=False))

    def _output_rich(self, data: dict[str, Any], message: str) -> None:
        """Output with Rich formatting."""
        if message:
            self.console.print(f"[green]✓[/green] {message}")

        if "results" in data.get("data", {}):
            self._render_results(data)
        elif "catalogs" in data.get("data", {}):
            self._render_stats(data)

    def _render_results(self, data: dict) -> None:
        """Render search results with Rich."""
        search = data["data"]
        results = search["results"]

        if not results:
            self.console.print(
                f"[dim]No {search['item_type']} found matching \"{search['query']}\"[/dim]"
            )
            return

        table = Table(
            title=f"{search['item_type'].replace('_', ' ').title()} ({search['total']} matches)",
            show_header=True,
            header_style="bold cyan",
        )
        table.add_column("#", style="dim", justify="right")
        table.add_column("Item", style="cyan", no_wrap=False)
        table.add_column("Details", style="yellow")
        table.add_column("Rarity", style="magenta")
        table.add_column("Wear", style="blue")
        table.add_column("Variants", style="green")

        for result in results:
            selected = result["selected"]
            table.add_row(
                str(result["index"]),
                selected["name"],
                " • ".join(result["metadata"]),
                selected.get("rarity") or "",
                ", ".join(result.get("wear_conditions", [])),
                ", ".join(VARIANT_LABELS.get(v, v) for v in result["variants"]),
            )

        self.console.print(table)

        if search["total"] > len(results):
            self.console.print(f"[dim]Showing {len(results)} of {search['total']} matches[/dim]")

    def _render_stats(self, data: dict) -> None:
        """Render per-catalog index statistics."""
        catalogs = data["data"]["catalogs"]

        table = Table(title="Catalog Index", show_header=True, header_style="bold cyan")
        table.add_column("Type", style="cyan")
        table.add_column("Base Items", justify="right")
        table.add_column("Entries", justify="right")
        table.add_column("Tokens", justify="right")
        table.add_column("Status")

        for item_type, stats in catalogs.items():
            status = f"[red]{stats['error']}[/red]" if stats.get("error") else "[green]ok[/green]"
            table.add_row(
                item_type,
                str(stats["base_items"]),
                str(stats["entries"]),
                str(stats["tokens"]),
                status,
            )

        self.console.print(table)

        progress = data["data"].get("progress")
        if progress:
            self.console.print(
                f"\nLoaded {progress['loaded']}/{progress['total']} catalogs"
                f" ({progress['failed']} failed)"
            )

    def error(self, message: str, error_code: str | None = None) -> None:
        """Output error message.

        Args:
            message: Error message
            error_code: Optional error code
        """
        if self.json_mode:
            output = {"success": False, "error": message}
            if error_code:
                output["error_code"] = error_code
            print(json.dumps(output))
        else:
            self.console.print(f"[red]✗ Error:[/red] {message}")
