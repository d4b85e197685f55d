"""
this_file: src/vehicle_gallery/core/presenter.py

Framework-independent presentation model: one card per vehicle driven by its
FetchOutcome, and a vertical stack layout for the gallery.
"""

from __future__ import annotations

import asyncio
import weakref
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from loguru import logger

from vehicle_gallery.core.config import GalleryConfig

if TYPE_CHECKING:
    from collections.abc import Callable

    from vehicle_gallery.core.catalog import VehicleCatalog
    from vehicle_gallery.core.loader import ImageLoad, ImageLoader
    from vehicle_gallery.core.outcome import FetchOutcome, LoadedImage
    from vehicle_gallery.core.vehicle import Vehicle

    CardListener = Callable[["VehicleCard"], None]

TITLE_LINE_HEIGHT = 1.2


class CardStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


@dataclass(frozen=True)
class Frame:
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class CardSnapshot:
    title: str
    status: CardStatus
    spinner_visible: bool
    error_visible: bool
    error_text: str
    image_scale: float
    image_size: tuple[int, int] | None


def _weak_outcome_callback(card: VehicleCard) -> Callable[[FetchOutcome], None]:
    """Outcome callback that does not keep ``card`` alive."""
    ref = weakref.ref(card)
    title = card.title

    def deliver(outcome: FetchOutcome) -> None:
        target = ref()
        if target is None:
            logger.debug(f"Card '{title}' was discarded before its image outcome arrived")
            return
        target._apply_outcome(outcome)

    return deliver


def _weak_reveal(card: VehicleCard) -> Callable[[], None]:
    ref = weakref.ref(card)

    def reveal() -> None:
        target = ref()
        if target is not None:
            target._reveal_error()

    return reveal


class VehicleCard:
    """Display element for one vehicle: spinner, then image or error text.

    A failed load reveals the error text only after ``config.error_delay``
    seconds; the spinner keeps running until then. The spinner is shown only
    when a network fetch is actually attempted.
    """

    def __init__(self, vehicle: Vehicle, config: GalleryConfig | None = None) -> None:
        self.vehicle = vehicle
        self.config = config or GalleryConfig()
        self.spinner_visible = False
        self.error_visible = False
        self.image: LoadedImage | None = None
        self._status = CardStatus.IDLE
        self._load: ImageLoad | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._loaded_at: float | None = None
        self._reveal_handle: asyncio.TimerHandle | None = None
        self._settled: asyncio.Future[CardStatus] | None = None
        self._listeners: list[CardListener] = []

    @property
    def title(self) -> str:
        return self.vehicle.name

    @property
    def error_text(self) -> str:
        return self.config.error_text

    @property
    def status(self) -> CardStatus:
        return self._status

    @property
    def load(self) -> ImageLoad | None:
        return self._load

    @property
    def is_settled(self) -> bool:
        return self._status in (CardStatus.LOADED, CardStatus.ERROR)

    def subscribe(self, listener: CardListener) -> Callable[[], None]:
        """Register ``listener`` for visible changes. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def start(self, loader: ImageLoader) -> ImageLoad:
        """Begin loading this card's image. A card loads at most once."""
        if self._load is not None:
            msg = f"Card '{self.title}' has already started loading"
            raise RuntimeError(msg)
        self._loop = asyncio.get_running_loop()
        self._settled = self._loop.create_future()
        self._status = CardStatus.LOADING
        self.spinner_visible = self.vehicle.can_load
        self._load = loader.load_vehicle(self.vehicle, _weak_outcome_callback(self))
        self._notify()
        return self._load

    async def wait_settled(self) -> CardStatus:
        """Wait until the image is shown or the error text is revealed."""
        if self._settled is None:
            msg = f"Card '{self.title}' has not been started"
            raise RuntimeError(msg)
        return await asyncio.shield(self._settled)

    def image_scale_at(self, now: float) -> float:
        """Image scale at loop time ``now``, growing linearly over the reveal duration."""
        initial = self.config.initial_image_scale
        if self._loaded_at is None:
            return initial
        duration = self.config.reveal_duration
        if duration <= 0:
            return 1.0
        progress = min(max((now - self._loaded_at) / duration, 0.0), 1.0)
        return initial + (1.0 - initial) * progress

    @property
    def image_scale(self) -> float:
        if self._loaded_at is None or self._loop is None:
            return self.config.initial_image_scale
        return self.image_scale_at(self._loop.time())

    def snapshot(self) -> CardSnapshot:
        return CardSnapshot(
            title=self.title,
            status=self._status,
            spinner_visible=self.spinner_visible,
            error_visible=self.error_visible,
            error_text=self.error_text,
            image_scale=self.image_scale,
            image_size=self.image.size if self.image else None,
        )

    def dispose(self) -> None:
        """Drop listeners and any pending error reveal. The fetch itself keeps running."""
        if self._reveal_handle is not None:
            self._reveal_handle.cancel()
            self._reveal_handle = None
        self._listeners.clear()

    def _apply_outcome(self, outcome: FetchOutcome) -> None:
        if outcome.ok:
            self.image = outcome.image
            self.spinner_visible = False
            self._loaded_at = self._loop.time() if self._loop else None
            self._set_settled(CardStatus.LOADED)
            return

        logger.debug(f"Card '{self.title}' failed ({outcome.kind.value}), revealing error in {self.config.error_delay}s")
        if self._loop is None:
            self._reveal_error()
            return
        self._reveal_handle = self._loop.call_later(self.config.error_delay, _weak_reveal(self))

    def _reveal_error(self) -> None:
        self._reveal_handle = None
        self.spinner_visible = False
        self.error_visible = True
        self._set_settled(CardStatus.ERROR)

    def _set_settled(self, status: CardStatus) -> None:
        self._status = status
        if self._settled is not None and not self._settled.done():
            self._settled.set_result(status)
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def __repr__(self) -> str:
        return f"VehicleCard(title={self.title!r}, status={self._status.value})"


class GalleryView:
    """Vertical stack of title + card pairs, one per catalog vehicle, in catalog order."""

    def __init__(self, catalog: VehicleCatalog, config: GalleryConfig | None = None) -> None:
        self.config = config or GalleryConfig()
        self.cards = tuple(VehicleCard(vehicle, self.config) for vehicle in catalog.list())

    def start(self, loader: ImageLoader) -> list[ImageLoad]:
        return [card.start(loader) for card in self.cards]

    async def wait_settled(self) -> list[CardStatus]:
        return list(await asyncio.gather(*(card.wait_settled() for card in self.cards)))

    def subscribe(self, listener: CardListener) -> None:
        for card in self.cards:
            card.subscribe(listener)

    def is_settled(self) -> bool:
        return all(card.is_settled for card in self.cards)

    def dispose(self) -> None:
        for card in self.cards:
            card.dispose()

    @property
    def title_height(self) -> float:
        return self.config.title_font_size * TITLE_LINE_HEIGHT

    def content_height(self) -> float:
        count = len(self.cards)
        if count == 0:
            return 0.0
        rows = 2 * count
        return count * (self.title_height + self.config.card_height) + (rows - 1) * self.config.spacing

    def layout(self) -> list[tuple[VehicleCard, Frame, Frame]]:
        """Compute ``(card, title_frame, image_frame)`` for every card.

        The stack is inset horizontally by the margin and centered vertically
        within the viewport. It may extend past the viewport when it does not fit.
        """
        cfg = self.config
        width = cfg.viewport_width - 2 * cfg.margin
        y = (cfg.viewport_height - self.content_height()) / 2

        frames = []
        for card in self.cards:
            title_frame = Frame(cfg.margin, y, width, self.title_height)
            y += self.title_height + cfg.spacing
            image_frame = Frame(cfg.margin, y, width, cfg.card_height)
            y += cfg.card_height + cfg.spacing
            frames.append((card, title_frame, image_frame))
        return frames
