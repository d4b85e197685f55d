"""
this_file: src/vehicle_gallery/core/catalog.py

Vehicle catalog: a fixed, ordered sequence of vehicles exposed to presentation code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from vehicle_gallery.core.vehicle import (
    TIE_FIGHTER_PATH,
    X_WING_PATH,
    ImageRegion,
    Vehicle,
    build_vehicle_url,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


class VehicleCatalog:
    """Immutable, ordered collection of vehicles.

    Order of construction is display order. Lookups by name never reorder.

    Example:
        >>> catalog = VehicleCatalog([Vehicle(name="X-Wing Starfighter")])
        >>> [v.name for v in catalog.list()]
        ['X-Wing Starfighter']
    """

    def __init__(self, vehicles: Iterable[Vehicle]) -> None:
        """Freeze the given vehicles into a catalog.

        Raises:
            ValueError: If an entry is not a Vehicle or a name is duplicated
        """
        frozen = tuple(vehicles)
        seen: set[str] = set()
        for vehicle in frozen:
            if not isinstance(vehicle, Vehicle):
                msg = f"Catalog entries must be Vehicle instances, got {type(vehicle)}"
                raise ValueError(msg)
            if vehicle.name in seen:
                msg = f"Duplicate vehicle name in catalog: {vehicle.name}"
                raise ValueError(msg)
            seen.add(vehicle.name)
        self._vehicles = frozen
        logger.debug(f"VehicleCatalog initialized with {len(frozen)} vehicles")

    def list(self) -> tuple[Vehicle, ...]:
        """Return every vehicle in display order. Same result on every call."""
        return self._vehicles

    def names(self) -> tuple[str, ...]:
        return tuple(vehicle.name for vehicle in self._vehicles)

    def get(self, name: str) -> Vehicle | None:
        """Retrieve a vehicle by name.

        Args:
            name: Vehicle display name

        Returns:
            The vehicle if found, None otherwise
        """
        for vehicle in self._vehicles:
            if vehicle.name == name:
                return vehicle
        return None

    def get_required(self, name: str) -> Vehicle:
        """Retrieve a vehicle by name, raising if not found.

        Raises:
            KeyError: If no vehicle has that name
        """
        vehicle = self.get(name)
        if vehicle is None:
            msg = f"Vehicle '{name}' not found in catalog"
            raise KeyError(msg)
        return vehicle

    def __iter__(self) -> Iterator[Vehicle]:
        return iter(self._vehicles)

    def __len__(self) -> int:
        return len(self._vehicles)

    def __contains__(self, name: object) -> bool:
        return any(vehicle.name == name for vehicle in self._vehicles)

    def __repr__(self) -> str:
        return f"VehicleCatalog({list(self.names())!r})"


def default_catalog(*, fail_x_wing: bool = True, fail_tie_fighter: bool = False) -> VehicleCatalog:
    """Build the demo catalog.

    Args:
        fail_x_wing: Force the X-Wing image load down the failure path
        fail_tie_fighter: Force the TIE Fighter image load down the failure path
    """
    return VehicleCatalog(
        [
            Vehicle(
                name="X-Wing Starfighter",
                locator=build_vehicle_url(X_WING_PATH, ImageRegion.X_WING_STARFIGHTER),
                simulate_failure=fail_x_wing,
            ),
            Vehicle(
                name="Darth Vader's TIE Fighter",
                locator=build_vehicle_url(TIE_FIGHTER_PATH, ImageRegion.DARTH_VADER_TIE_FIGHTER),
                simulate_failure=fail_tie_fighter,
            ),
        ]
    )
