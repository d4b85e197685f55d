"""
this_file: src/vehicle_gallery/__init__.py

Package entry for vehicle_gallery.
"""

from __future__ import annotations

from vehicle_gallery._version import __version__  # re-export version

# Import main classes for user convenience
from vehicle_gallery.core.catalog import VehicleCatalog, default_catalog
from vehicle_gallery.core.loader import ImageLoader

__all__ = [
    "ImageLoader",
    "VehicleCatalog",
    "__version__",
    "default_catalog",
]
