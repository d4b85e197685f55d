"""
this_file: src/vehicle_gallery/utils/__init__.py

Utility subpackage exports.
"""

from __future__ import annotations

from vehicle_gallery.utils.exceptions import (
    ConfigurationError,
    DecodeError,
    FailureKind,
    ImageLoadError,
    MissingLocatorError,
    SimulatedFailure,
    TransportError,
    VehicleGalleryError,
)

__all__ = [
    "ConfigurationError",
    "DecodeError",
    "FailureKind",
    "ImageLoadError",
    "MissingLocatorError",
    "SimulatedFailure",
    "TransportError",
    "VehicleGalleryError",
]
