"""
this_file: src/vehicle_gallery/core/http.py

HTTP client construction for image requests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from vehicle_gallery.core.config import GalleryConfig

IMAGE_ACCEPT = "image/jpeg,image/png,image/webp,image/*;q=0.8"
# same value httpx applies when a client is built without a timeout
DEFAULT_TIMEOUT_SECONDS = 5.0


def create_http_client(
    config: GalleryConfig | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """
    Create the async client used for image fetches.

    No retries are configured. The timeout is ``DEFAULT_TIMEOUT_SECONDS``
    unless the configuration provides ``http_timeout``.

    Args:
        config: Gallery configuration supplying timeout and user agent
        transport: Optional transport override, e.g. ``httpx.MockTransport``

    Returns:
        Configured AsyncClient instance
    """
    headers = {"Accept": IMAGE_ACCEPT}
    timeout: httpx.Timeout = httpx.Timeout(DEFAULT_TIMEOUT_SECONDS)
    if config is not None:
        headers["User-Agent"] = config.user_agent
        if config.http_timeout is not None:
            timeout = httpx.Timeout(config.http_timeout)

    return httpx.AsyncClient(
        headers=headers,
        timeout=timeout,
        follow_redirects=True,
        max_redirects=5,
        http2=True,
        transport=transport,
    )
