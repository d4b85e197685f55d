"""
this_file: src/vehicle_gallery/cli.py

Terminal front end for the vehicle gallery: list the catalog, fetch images and
render the gallery's loading states live.
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

import fire
from loguru import logger
from rich.console import Console, Group
from rich.live import Live
from rich.panel import Panel
from rich.spinner import Spinner
from rich.table import Table
from rich.text import Text

from vehicle_gallery import __version__
from vehicle_gallery.core.catalog import default_catalog
from vehicle_gallery.core.config import GalleryConfig, load_config, write_config
from vehicle_gallery.core.http import create_http_client
from vehicle_gallery.core.loader import ImageLoader
from vehicle_gallery.core.presenter import GalleryView, VehicleCard

if TYPE_CHECKING:
    from vehicle_gallery.core.outcome import FetchOutcome
    from vehicle_gallery.core.vehicle import Vehicle

LIVE_REFRESH_PER_SECOND = 12
MAX_URL_DISPLAY_WIDTH = 60

console = Console()


def configure_logging(*, verbose: bool = False) -> None:
    """Route loguru output to stderr at INFO, or DEBUG when verbose."""
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else "INFO",
        format="<level>{level}</level>: {message}",
        colorize=True,
    )


def _format_outcome(outcome: FetchOutcome) -> tuple[str, str]:
    if outcome.ok:
        image = outcome.image
        return "[green]loaded[/green]", f"{image.format or 'unknown'} {image.width}x{image.height}"
    return f"[red]{outcome.kind.value}[/red]", outcome.reason


class CLI:
    """Vehicle gallery - fetch and display remote vehicle images with loading and error states."""

    def __init__(
        self,
        config: str = "",
        fail_x_wing: bool | None = None,
        fail_tie_fighter: bool | None = None,
        verbose: bool = False,
    ) -> None:
        """Resolve configuration and build the catalog.

        Args:
            config: Optional YAML or TOML configuration file
            fail_x_wing: Override simulated failure for the X-Wing image
            fail_tie_fighter: Override simulated failure for the TIE Fighter image
            verbose: Enable debug logging
        """
        configure_logging(verbose=verbose)
        base = load_config(config) if config else GalleryConfig()
        self.config = base.with_overrides(fail_x_wing=fail_x_wing, fail_tie_fighter=fail_tie_fighter)
        self.catalog = default_catalog(
            fail_x_wing=self.config.fail_x_wing,
            fail_tie_fighter=self.config.fail_tie_fighter,
        )

    def version(self) -> str:
        """Print and return the package version."""
        console.print(f"[bold green]vehicle-gallery[/bold green] v{__version__}")
        return __version__

    def vehicles(self) -> None:
        """List the catalog in display order."""
        table = Table(title="Vehicle Catalog")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Name", style="bold")
        table.add_column("Locator", max_width=MAX_URL_DISPLAY_WIDTH, overflow="fold")
        table.add_column("Simulated failure", justify="center")

        for index, vehicle in enumerate(self.catalog.list(), start=1):
            table.add_row(
                str(index),
                vehicle.name,
                str(vehicle.locator) if vehicle.locator else "[dim]-[/dim]",
                "[red]yes[/red]" if vehicle.simulate_failure else "no",
            )

        console.print(table)
        console.print(f"Total: {len(self.catalog)}")

    def fetch(self, names: Any = "") -> None:
        """Load images for every vehicle, or only the named ones, and print the outcomes.

        Args:
            names: Comma-separated vehicle names (case-insensitive substrings)
        """
        selected = self._select_vehicles(names)
        if not selected:
            console.print("[yellow]No vehicles selected[/yellow]")
            return

        outcomes = asyncio.run(self._fetch_all(selected))

        table = Table(title="Image Loads")
        table.add_column("Name", style="bold")
        table.add_column("Outcome")
        table.add_column("Details", overflow="fold")
        for vehicle, outcome in zip(selected, outcomes, strict=True):
            label, details = _format_outcome(outcome)
            table.add_row(vehicle.name, label, details)
        console.print(table)

        succeeded = sum(1 for outcome in outcomes if outcome.ok)
        console.print(f"Loaded {succeeded}/{len(outcomes)} images")

    def show(self) -> None:
        """Render the gallery live: spinner, then image or error text."""
        asyncio.run(self._show_gallery())

    def settings(self, write: str = "") -> None:
        """Print the effective configuration, or write it to a YAML/TOML file.

        Args:
            write: Destination file; the suffix selects the format
        """
        if write:
            path = write_config(self.config, write)
            console.print(f"[green]✓[/green] Configuration written to {path}")
            return

        table = Table(title="Gallery Configuration")
        table.add_column("Key", style="cyan")
        table.add_column("Value")
        for key, value in self.config.to_dict().items():
            table.add_row(key, "[dim]default[/dim]" if value is None else str(value))
        console.print(table)

    def _select_vehicles(self, names: Any) -> list[Vehicle]:
        if not names:
            return list(self.catalog.list())

        # fire hands comma-separated values over as a tuple
        if isinstance(names, (list, tuple)):
            wanted = [str(name).strip() for name in names]
        else:
            wanted = [name.strip() for name in str(names).split(",")]

        selected = []
        for name in filter(None, wanted):
            matches = [v for v in self.catalog.list() if name.casefold() in v.name.casefold()]
            if not matches:
                console.print(f"[red]Warning: Vehicle '{name}' not found[/red]")
            selected.extend(v for v in matches if v not in selected)
        # keep catalog order
        return [v for v in self.catalog.list() if v in selected]

    async def _fetch_all(self, vehicles: list[Vehicle]) -> list[FetchOutcome]:
        async with create_http_client(self.config) as client:
            loader = ImageLoader(client=client, config=self.config)
            handles = [loader.load_vehicle(vehicle, lambda _outcome: None) for vehicle in vehicles]
            return [await handle.wait() for handle in handles]

    async def _show_gallery(self) -> None:
        view = GalleryView(self.catalog, self.config)
        async with create_http_client(self.config) as client:
            loader = ImageLoader(client=client, config=self.config)
            with Live(self._render_gallery(view), console=console, refresh_per_second=LIVE_REFRESH_PER_SECOND) as live:
                view.subscribe(lambda _card: live.update(self._render_gallery(view)))
                view.start(loader)
                await view.wait_settled()
                # let the reveal finish before the final frame
                await asyncio.sleep(self.config.reveal_duration)
                live.update(self._render_gallery(view))
            view.dispose()

        stats = loader.stats()
        logger.debug(f"Loader stats: {stats}")

    def _render_gallery(self, view: GalleryView) -> Group:
        width = min(int(self.config.viewport_width - 2 * self.config.margin) // 4, console.width)
        panels = [self._render_card(card, width) for card, _title, _image in view.layout()]
        return Group(*panels)

    def _render_card(self, card: VehicleCard, width: int) -> Panel:
        if card.spinner_visible:
            body: Any = Spinner("dots", text=" Loading image...")
        elif card.error_visible:
            body = Text(card.error_text, style="red")
        elif card.image is not None:
            image = card.image
            body = Text(
                f"{image.format or 'image'} {image.width}x{image.height} (scale {card.image_scale:.0%})",
                style="green",
            )
        else:
            body = Text("")
        return Panel(body, title=Text(card.title, style="bold"), width=width)


def main() -> None:
    """Main CLI entry point."""
    configure_logging()
    fire.Fire(CLI)


if __name__ == "__main__":
    main()
