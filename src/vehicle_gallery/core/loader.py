"""
this_file: src/vehicle_gallery/core/loader.py

Async image loader: one fetch per request, decoded with Pillow, reported as a
single FetchOutcome on the caller's dispatch context.
"""

from __future__ import annotations

import asyncio
from io import BytesIO
from typing import TYPE_CHECKING, Any, Self

import httpx
from loguru import logger
from PIL import Image, UnidentifiedImageError

from vehicle_gallery.core.http import create_http_client
from vehicle_gallery.core.outcome import Failure, FetchOutcome, LoadedImage, LoadState, Success
from vehicle_gallery.utils.exceptions import (
    DecodeError,
    ImageLoadError,
    MissingLocatorError,
    SimulatedFailure,
    TransportError,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from vehicle_gallery.core.config import GalleryConfig
    from vehicle_gallery.core.vehicle import Vehicle

    Dispatch = Callable[[Callable[[], Any]], Any]
    OutcomeCallback = Callable[[FetchOutcome], Any]

DECODE_ERRORS = (UnidentifiedImageError, OSError, ValueError, SyntaxError, Image.DecompressionBombError)


def decode_image(data: bytes, locator: Any = None) -> LoadedImage:
    """Decode ``data`` into a fully loaded Pillow image.

    Raises:
        DecodeError: If the bytes are empty or not a readable image
    """
    if not data:
        msg = "Empty response body"
        raise DecodeError(msg, locator)
    try:
        image = Image.open(BytesIO(data))
        image.load()
    except DECODE_ERRORS as e:
        msg = f"Response is not a valid image: {e}"
        raise DecodeError(msg, locator) from e
    return LoadedImage(data=data, image=image, format=image.format, size=image.size)


class ImageLoad:
    """Handle for one load request: Idle -> Pending -> Succeeded | Failed."""

    def __init__(self, locator: httpx.URL | None, simulate_failure: bool) -> None:
        self.locator = locator
        self.simulate_failure = simulate_failure
        self._state = LoadState.IDLE
        self._outcome: FetchOutcome | None = None
        self._done: asyncio.Future[FetchOutcome] | None = None

    @property
    def state(self) -> LoadState:
        return self._state

    @property
    def outcome(self) -> FetchOutcome | None:
        return self._outcome

    def done(self) -> bool:
        return self._state.is_terminal

    async def wait(self) -> FetchOutcome:
        """Wait until the outcome is known and return it."""
        if self._outcome is not None:
            return self._outcome
        if self._done is None:
            msg = "Load has not been started"
            raise RuntimeError(msg)
        return await asyncio.shield(self._done)

    def _start(self, loop: asyncio.AbstractEventLoop) -> None:
        if self._state is not LoadState.IDLE:
            msg = f"Cannot start a load in state {self._state.value}"
            raise RuntimeError(msg)
        self._done = loop.create_future()
        self._state = LoadState.PENDING

    def _finish(self, outcome: FetchOutcome) -> None:
        if self._state is not LoadState.PENDING:
            msg = f"Cannot finish a load in state {self._state.value}"
            raise RuntimeError(msg)
        self._outcome = outcome
        self._state = LoadState.SUCCEEDED if outcome.ok else LoadState.FAILED
        if self._done is not None and not self._done.done():
            self._done.set_result(outcome)

    def __repr__(self) -> str:
        return f"ImageLoad(locator={str(self.locator) if self.locator else None!r}, state={self._state.value})"


class ImageLoader:
    """Async image loader.

    Every call to ``load`` runs as an independent task. There is no retry,
    caching, batching or cancellation.

    Args:
        client: Shared httpx client; created from ``config`` when omitted
        config: Gallery configuration used when creating the client
        dispatch: Callable that schedules a zero-argument function on the
            caller's execution context. Defaults to ``call_soon`` of the loop
            that calls ``load``.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        config: GalleryConfig | None = None,
        dispatch: Dispatch | None = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client or create_http_client(config)
        self._dispatch = dispatch
        self._tasks: set[asyncio.Task[None]] = set()
        self._request_count = 0
        self._success_count = 0
        self._failure_count = 0
        self._simulated_count = 0
        self._missing_locator_count = 0

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def fetch(self, locator: httpx.URL | str | None, simulate_failure: bool = False) -> FetchOutcome:
        """Resolve ``locator`` to a decoded image.

        Load errors are returned as ``Failure`` outcomes, never raised.
        """
        if simulate_failure:
            logger.debug(f"Simulated failure for {locator}, skipping request")
            self._simulated_count += 1
            return self._failed(SimulatedFailure("Simulated image load failure", locator))
        if locator is None:
            logger.debug("No image locator, skipping request")
            self._missing_locator_count += 1
            return self._failed(MissingLocatorError("No image locator available"))

        url = httpx.URL(locator)
        self._request_count += 1
        logger.info(f"Fetching image: {url}")

        try:
            response = await self._client.get(url)
        except httpx.HTTPError as e:
            logger.warning(f"Error loading image from {url}: {type(e).__name__}: {e}")
            return self._failed(TransportError(f"{type(e).__name__}: {e}", url))

        if not response.is_success:
            logger.warning(f"Error loading image from {url}: HTTP {response.status_code}")
            return self._failed(
                TransportError(f"HTTP {response.status_code}", url, status_code=response.status_code)
            )

        try:
            loaded = await asyncio.to_thread(decode_image, response.content, url)
        except DecodeError as e:
            content_type = response.headers.get("content-type", "unknown")
            logger.warning(f"Could not decode image from {url} (Content-Type: {content_type}): {e}")
            return self._failed(e)

        self._success_count += 1
        logger.info(f"Loaded image {url}: {loaded.format} {loaded.width}x{loaded.height}")
        return Success(loaded)

    def load(
        self,
        locator: httpx.URL | str | None,
        simulate_failure: bool,
        callback: OutcomeCallback,
    ) -> ImageLoad:
        """Start a load and deliver its outcome to ``callback`` exactly once.

        Must be called from a running event loop. The returned handle is
        already pending.
        """
        loop = asyncio.get_running_loop()
        dispatch = self._dispatch or loop.call_soon
        handle = ImageLoad(httpx.URL(locator) if locator is not None else None, simulate_failure)
        handle._start(loop)

        task = loop.create_task(self._run(handle, callback, dispatch))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        logger.debug(f"Scheduled {handle!r}")
        return handle

    def load_vehicle(self, vehicle: Vehicle, callback: OutcomeCallback) -> ImageLoad:
        return self.load(vehicle.locator, vehicle.simulate_failure, callback)

    async def _run(self, handle: ImageLoad, callback: OutcomeCallback, dispatch: Dispatch) -> None:
        try:
            outcome = await self.fetch(handle.locator, handle.simulate_failure)
        except Exception as e:
            logger.exception(f"Unexpected {type(e).__name__} while loading {handle.locator}")
            outcome = self._failed(ImageLoadError(f"Unexpected {type(e).__name__}: {e}", handle.locator))

        handle._finish(outcome)
        dispatch(lambda: callback(outcome))

    def _failed(self, error: ImageLoadError) -> Failure:
        self._failure_count += 1
        return Failure(error)

    def pending(self) -> int:
        """Number of loads still in flight."""
        return len(self._tasks)

    def stats(self) -> dict[str, int]:
        return {
            "requests": self._request_count,
            "succeeded": self._success_count,
            "failed": self._failure_count,
            "simulated": self._simulated_count,
            "missing_locator": self._missing_locator_count,
        }
