"""
this_file: src/vehicle_gallery/core/vehicle.py

Vehicle value type and image locator construction.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import httpx

IMAGE_SCHEME = "https"
IMAGE_HOST = "lumiere-a.akamaihd.net"
X_WING_PATH = "/v1/images/X-Wing-Fighter_47c7c342.jpeg"
TIE_FIGHTER_PATH = "/v1/images/vaders-tie-fighter_8bcb92e1.jpeg"

REGION_PARAM = "region"
WIDTH_PARAM = "width"


class ImageRegion(Enum):
    """Named crop variants served by the image host.

    Each value is ``(crop, width)``: ``crop`` is ``x,y,w,h`` and ``width`` an
    optional output width hint.
    """

    X_WING_STARFIGHTER = ("0,1,1536,864", None)
    DARTH_VADER_TIE_FIGHTER = ("0,147,1560,878", 1536)

    @property
    def crop(self) -> str:
        return self.value[0]

    @property
    def width(self) -> int | None:
        return self.value[1]

    def query_params(self) -> dict[str, str]:
        params = {REGION_PARAM: self.crop}
        if self.width is not None:
            params[WIDTH_PARAM] = str(self.width)
        return params


def build_vehicle_url(path: str, region: ImageRegion) -> httpx.URL:
    """Build an image locator for ``path`` cropped to ``region``.

    Args:
        path: Absolute path of the image on the image host
        region: Crop variant to request

    Returns:
        Fully qualified URL with the region query parameters

    Raises:
        ValueError: If path is not absolute
    """
    if not path.startswith("/"):
        msg = f"Image path must be absolute, got {path!r}"
        raise ValueError(msg)
    return httpx.URL(f"{IMAGE_SCHEME}://{IMAGE_HOST}{path}", params=region.query_params())


@dataclass(frozen=True)
class Vehicle:
    name: str
    locator: httpx.URL | None = None
    simulate_failure: bool = False

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            msg = "Vehicle name cannot be empty"
            raise ValueError(msg)
        if isinstance(self.locator, str):
            object.__setattr__(self, "locator", httpx.URL(self.locator))

    @property
    def can_load(self) -> bool:
        """True when a network fetch may be attempted for this vehicle."""
        return self.locator is not None and not self.simulate_failure
