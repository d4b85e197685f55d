"""
this_file: src/vehicle_gallery/core/outcome.py

Fetch outcomes and per-load state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from PIL import Image

    from vehicle_gallery.utils.exceptions import FailureKind, ImageLoadError


class LoadState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (LoadState.SUCCEEDED, LoadState.FAILED)


@dataclass(frozen=True)
class LoadedImage:
    """A decoded image together with the bytes it came from."""

    data: bytes = field(repr=False)
    image: Image.Image = field(repr=False)
    format: str | None
    size: tuple[int, int]

    @property
    def width(self) -> int:
        return self.size[0]

    @property
    def height(self) -> int:
        return self.size[1]


@dataclass(frozen=True)
class Success:
    image: LoadedImage

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    error: ImageLoadError

    @property
    def ok(self) -> bool:
        return False

    @property
    def kind(self) -> FailureKind:
        return self.error.kind

    @property
    def reason(self) -> str:
        return str(self.error)


FetchOutcome = Union[Success, Failure]
