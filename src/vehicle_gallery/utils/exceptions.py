"""
this_file: src/vehicle_gallery/utils/exceptions.py

Exception hierarchy for the vehicle gallery.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class FailureKind(str, Enum):
    TRANSPORT = "transport"
    DECODE = "decode"
    SIMULATED = "simulated"
    MISSING_LOCATOR = "missing_locator"
    UNEXPECTED = "unexpected"


class VehicleGalleryError(Exception):
    """Base error for the package."""


class ConfigurationError(VehicleGalleryError):
    """Invalid or missing configuration."""


class ImageLoadError(VehicleGalleryError):
    """An image could not be produced for a locator."""

    kind: FailureKind = FailureKind.UNEXPECTED

    def __init__(self, message: str, locator: Any = None) -> None:
        super().__init__(message)
        self.locator = locator


class TransportError(ImageLoadError):
    """Network or HTTP-level failure."""

    kind = FailureKind.TRANSPORT

    def __init__(self, message: str, locator: Any = None, status_code: int | None = None) -> None:
        super().__init__(message, locator)
        self.status_code = status_code


class DecodeError(ImageLoadError):
    """Bytes were received but are not a valid image."""

    kind = FailureKind.DECODE


class SimulatedFailure(ImageLoadError):
    """Deliberate failure requested by the caller; no request is made."""

    kind = FailureKind.SIMULATED


class MissingLocatorError(SimulatedFailure):
    """The vehicle has no image locator."""

    kind = FailureKind.MISSING_LOCATOR
