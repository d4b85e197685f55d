"""
this_file: tests/test_cli_smoke.py

Smoke tests for CLI commands to ensure core functionality works without crashing.
"""

import os
import subprocess
import sys
import tempfile
from io import BytesIO
from pathlib import Path
from unittest.mock import patch

import httpx
from PIL import Image
from rich.console import Console

from vehicle_gallery.cli import CLI


def _mock_client_factory(status_code=200):
    buffer = BytesIO()
    Image.new("RGB", (48, 27), color="black").save(buffer, format="JPEG")
    payload = buffer.getvalue()
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(status_code, content=payload)

    def factory(_config=None):
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return factory, requests


class TestCLISmoke:
    """Smoke tests for CLI commands run as a subprocess."""

    @staticmethod
    def run_cli_command(command_args: list[str]) -> tuple[int, str, str]:
        """Run a CLI command and return exit code, stdout, stderr."""
        cmd = [sys.executable, "-m", "vehicle_gallery", *command_args]
        result = subprocess.run(
            cmd,
            check=False,
            capture_output=True,
            text=True,
            timeout=30,
            env={**os.environ, "COLUMNS": "200"},
        )
        return result.returncode, result.stdout, result.stderr

    def test_version_command(self):
        exit_code, stdout, stderr = self.run_cli_command(["version"])

        assert exit_code == 0, f"Version command failed with stderr: {stderr}"
        assert "vehicle-gallery" in stdout
        assert "v0.1.0" in stdout

    def test_vehicles_command(self):
        exit_code, stdout, stderr = self.run_cli_command(["vehicles"])

        assert exit_code == 0, f"Vehicles command failed with stderr: {stderr}"
        assert "Vehicle Catalog" in stdout
        assert "X-Wing Starfighter" in stdout
        assert "Darth Vader's TIE Fighter" in stdout
        assert stdout.index("X-Wing Starfighter") < stdout.index("Darth Vader's TIE Fighter")
        assert "Total: 2" in stdout

    def test_settings_command(self):
        exit_code, stdout, stderr = self.run_cli_command(["settings"])

        assert exit_code == 0, f"Settings command failed with stderr: {stderr}"
        assert "Gallery Configuration" in stdout
        assert "error_delay" in stdout
        assert "viewport_width" in stdout

    def test_settings_write_and_reuse(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "gallery.yaml"
            exit_code, _, stderr = self.run_cli_command(["settings", f"--write={path}"])
            assert exit_code == 0, f"Settings write failed with stderr: {stderr}"
            assert path.exists()

            exit_code, stdout, stderr = self.run_cli_command([f"--config={path}", "vehicles"])
            assert exit_code == 0, f"Vehicles with config failed with stderr: {stderr}"
            assert "Total: 2" in stdout

    def test_invalid_command_handling(self):
        exit_code, _, _ = self.run_cli_command(["definitely-not-a-command"])
        assert exit_code != 0


class TestCLIFetch:
    """In-process fetch command with the network stubbed out."""

    def test_fetch_reports_each_vehicle(self):
        factory, requests = _mock_client_factory()
        record = Console(record=True, width=200)

        with patch("vehicle_gallery.cli.create_http_client", factory), patch("vehicle_gallery.cli.console", record):
            CLI(fail_x_wing=True, fail_tie_fighter=False).fetch()

        output = record.export_text()
        assert "simulated" in output
        assert "JPEG 48x27" in output
        assert "Loaded 1/2 images" in output
        assert len(requests) == 1

    def test_fetch_selected_by_name(self):
        factory, requests = _mock_client_factory()
        record = Console(record=True, width=200)

        with patch("vehicle_gallery.cli.create_http_client", factory), patch("vehicle_gallery.cli.console", record):
            CLI(fail_x_wing=False).fetch(names="x-wing")

        output = record.export_text()
        assert "X-Wing Starfighter" in output
        assert "TIE Fighter" not in output
        assert "Loaded 1/1 images" in output
        assert len(requests) == 1

    def test_fetch_unknown_name(self):
        factory, requests = _mock_client_factory()
        record = Console(record=True, width=200)

        with patch("vehicle_gallery.cli.create_http_client", factory), patch("vehicle_gallery.cli.console", record):
            CLI().fetch(names="y-wing")

        output = record.export_text()
        assert "Vehicle 'y-wing' not found" in output
        assert "No vehicles selected" in output
        assert requests == []

    def test_show_settles_gallery(self):
        factory, requests = _mock_client_factory()
        record = Console(record=True, width=200)

        with patch("vehicle_gallery.cli.create_http_client", factory), patch("vehicle_gallery.cli.console", record):
            cli = CLI(fail_x_wing=True, fail_tie_fighter=False)
            cli.config = cli.config.with_overrides(error_delay=0.01, reveal_duration=0.01)
            cli.show()

        output = record.export_text()
        assert cli.config.error_text in output
        assert "JPEG 48x27" in output
        assert len(requests) == 1
