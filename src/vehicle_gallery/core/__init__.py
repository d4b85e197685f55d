"""
this_file: src/vehicle_gallery/core/__init__.py

Core exports. Keep imports local to avoid side effects at package import time.
"""

from __future__ import annotations

from .catalog import VehicleCatalog, default_catalog
from .loader import ImageLoad, ImageLoader
from .outcome import Failure, FetchOutcome, LoadedImage, LoadState, Success
from .vehicle import Vehicle

__all__ = [
    "Failure",
    "FetchOutcome",
    "ImageLoad",
    "ImageLoader",
    "LoadState",
    "LoadedImage",
    "Success",
    "Vehicle",
    "VehicleCatalog",
    "default_catalog",
]
