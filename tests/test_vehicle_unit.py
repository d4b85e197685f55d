#!/usr/bin/env python3
"""
this_file: tests/test_vehicle_unit.py

Unit tests for the Vehicle value type and image locator construction.
"""

import dataclasses
import unittest

import httpx
import pytest

from vehicle_gallery.core.vehicle import (
    IMAGE_HOST,
    TIE_FIGHTER_PATH,
    X_WING_PATH,
    ImageRegion,
    Vehicle,
    build_vehicle_url,
)


class TestBuildVehicleUrl(unittest.TestCase):
    """Locator construction from path and region."""

    def test_x_wing_url_components(self):
        """X-Wing locator carries scheme, host, path and the region crop."""
        url = build_vehicle_url(X_WING_PATH, ImageRegion.X_WING_STARFIGHTER)

        assert url.scheme == "https"
        assert url.host == IMAGE_HOST
        assert url.path == "/v1/images/X-Wing-Fighter_47c7c342.jpeg"
        assert url.params["region"] == "0,1,1536,864"
        assert "width" not in url.params

    def test_tie_fighter_url_includes_width_hint(self):
        """TIE Fighter region adds the output width parameter."""
        url = build_vehicle_url(TIE_FIGHTER_PATH, ImageRegion.DARTH_VADER_TIE_FIGHTER)

        assert url.path == TIE_FIGHTER_PATH
        assert url.params["region"] == "0,147,1560,878"
        assert url.params["width"] == "1536"

    def test_region_is_percent_encoded_in_query(self):
        """Commas in the crop rectangle are encoded on the wire."""
        url = build_vehicle_url(X_WING_PATH, ImageRegion.X_WING_STARFIGHTER)
        assert "0%2C1%2C1536%2C864" in str(url)

    def test_relative_path_rejected(self):
        with pytest.raises(ValueError, match="absolute"):
            build_vehicle_url("v1/images/x.jpeg", ImageRegion.X_WING_STARFIGHTER)


class TestVehicle(unittest.TestCase):
    """Vehicle immutability and derived flags."""

    def test_vehicle_is_frozen(self):
        vehicle = Vehicle(name="X-Wing Starfighter")
        with pytest.raises(dataclasses.FrozenInstanceError):
            vehicle.name = "Y-Wing"

    def test_string_locator_is_normalized(self):
        vehicle = Vehicle(name="Probe", locator="https://example.com/probe.png")
        assert isinstance(vehicle.locator, httpx.URL)
        assert vehicle.locator.host == "example.com"

    def test_can_load(self):
        """Only a vehicle with a locator and no simulated failure may fetch."""
        url = build_vehicle_url(X_WING_PATH, ImageRegion.X_WING_STARFIGHTER)

        assert Vehicle(name="a", locator=url).can_load
        assert not Vehicle(name="b", locator=url, simulate_failure=True).can_load
        assert not Vehicle(name="c", locator=None).can_load

    def test_empty_name_rejected(self):
        with pytest.raises(ValueError, match="empty"):
            Vehicle(name="  ")


if __name__ == "__main__":
    unittest.main()
