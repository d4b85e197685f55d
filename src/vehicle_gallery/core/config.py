"""
this_file: src/vehicle_gallery/core/config.py

Gallery configuration: presentation timing, layout metrics, HTTP settings and
failure simulation switches. Readable from YAML or TOML files.
"""

from __future__ import annotations

import tomllib
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any

import tomli_w
import yaml
from loguru import logger

from vehicle_gallery.utils.exceptions import ConfigurationError

YAML_SUFFIXES = (".yaml", ".yml")
TOML_SUFFIXES = (".toml",)

NUMERIC_FIELDS = (
    "viewport_width",
    "viewport_height",
    "margin",
    "spacing",
    "card_height",
    "corner_radius",
    "title_font_size",
    "error_delay",
    "reveal_duration",
    "initial_image_scale",
    "http_timeout",
)
OPTIONAL_FIELDS = ("http_timeout",)
BOOL_FIELDS = ("fail_x_wing", "fail_tie_fighter")
STR_FIELDS = ("error_text", "user_agent")


@dataclass(frozen=True)
class GalleryConfig:
    """Effective configuration for the gallery.

    Attributes:
        viewport_width: Width of the rendering surface in points
        viewport_height: Height of the rendering surface in points
        margin: Horizontal inset of the vehicle stack
        spacing: Vertical gap between stacked elements
        card_height: Height of each image card
        corner_radius: Corner radius applied to images
        title_font_size: Point size of the vehicle title
        error_delay: Seconds before a failed card reveals its error text
        reveal_duration: Seconds the image takes to grow to full scale
        initial_image_scale: Scale of the image before it is loaded
        error_text: Text shown when an image cannot be loaded
        http_timeout: Request timeout in seconds; None keeps the httpx default
        user_agent: User-Agent header sent with image requests
        fail_x_wing: Simulate a failed X-Wing image load
        fail_tie_fighter: Simulate a failed TIE Fighter image load
    """

    viewport_width: float = 375.0
    viewport_height: float = 667.0
    margin: float = 20.0
    spacing: float = 20.0
    card_height: float = 200.0
    corner_radius: float = 12.0
    title_font_size: float = 24.0
    error_delay: float = 1.0
    reveal_duration: float = 0.3
    initial_image_scale: float = 0.1
    error_text: str = "Error loading image"
    http_timeout: float | None = None
    user_agent: str = "vehicle-gallery/0.1"
    fail_x_wing: bool = True
    fail_tie_fighter: bool = False

    def __post_init__(self) -> None:
        for name in NUMERIC_FIELDS:
            value = getattr(self, name)
            if value is None and name in OPTIONAL_FIELDS:
                continue
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                msg = f"{name} must be a number, got {type(value).__name__}"
                raise ConfigurationError(msg)
        for name in BOOL_FIELDS:
            if not isinstance(getattr(self, name), bool):
                msg = f"{name} must be true or false, got {type(getattr(self, name)).__name__}"
                raise ConfigurationError(msg)
        for name in STR_FIELDS:
            if not isinstance(getattr(self, name), str):
                msg = f"{name} must be a string, got {type(getattr(self, name)).__name__}"
                raise ConfigurationError(msg)

        for name in ("viewport_width", "viewport_height", "card_height", "title_font_size"):
            if getattr(self, name) <= 0:
                msg = f"{name} must be positive, got {getattr(self, name)}"
                raise ConfigurationError(msg)
        for name in ("margin", "spacing", "corner_radius", "error_delay", "reveal_duration"):
            if getattr(self, name) < 0:
                msg = f"{name} cannot be negative, got {getattr(self, name)}"
                raise ConfigurationError(msg)
        if not 0 < self.initial_image_scale <= 1:
            msg = f"initial_image_scale must be in (0, 1], got {self.initial_image_scale}"
            raise ConfigurationError(msg)
        if self.http_timeout is not None and self.http_timeout <= 0:
            msg = f"http_timeout must be positive, got {self.http_timeout}"
            raise ConfigurationError(msg)
        if 2 * self.margin >= self.viewport_width:
            msg = "margin leaves no room for content within the viewport"
            raise ConfigurationError(msg)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GalleryConfig:
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            msg = f"Unknown configuration keys: {', '.join(unknown)}"
            raise ConfigurationError(msg)
        try:
            return cls(**data)
        except TypeError as e:
            msg = f"Invalid configuration values: {e}"
            raise ConfigurationError(msg) from e

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def with_overrides(self, **overrides: Any) -> GalleryConfig:
        """Return a copy with the given fields replaced. ``None`` values are ignored."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        if not changes:
            return self
        return self.from_dict({**self.to_dict(), **changes})


def load_config(path: str | Path) -> GalleryConfig:
    """Load configuration from a YAML or TOML file.

    Args:
        path: File to read; the suffix selects the format

    Returns:
        Parsed configuration, defaults filled in for absent keys

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid
    """
    config_path = Path(path)
    if not config_path.exists():
        msg = f"Configuration file not found: {config_path}"
        raise ConfigurationError(msg)

    suffix = config_path.suffix.lower()
    try:
        if suffix in YAML_SUFFIXES:
            with config_path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        elif suffix in TOML_SUFFIXES:
            with config_path.open("rb") as f:
                data = tomllib.load(f)
        else:
            msg = f"Unsupported configuration format: {config_path.suffix or '<none>'}"
            raise ConfigurationError(msg)
    except (yaml.YAMLError, tomllib.TOMLDecodeError, OSError) as e:
        msg = f"Failed to parse configuration {config_path}: {e}"
        raise ConfigurationError(msg) from e

    if not isinstance(data, dict):
        msg = f"Configuration root must be a mapping: {config_path}"
        raise ConfigurationError(msg)

    logger.debug(f"Loaded gallery configuration from: {config_path}")
    return GalleryConfig.from_dict(data)


def write_config(config: GalleryConfig, path: str | Path) -> Path:
    """Write configuration to a YAML or TOML file, creating parent directories.

    Keys whose value is None are omitted since TOML cannot represent them.
    """
    config_path = Path(path)
    suffix = config_path.suffix.lower()
    data = {key: value for key, value in config.to_dict().items() if value is not None}

    config_path.parent.mkdir(parents=True, exist_ok=True)
    if suffix in YAML_SUFFIXES:
        with config_path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, sort_keys=False)
    elif suffix in TOML_SUFFIXES:
        with config_path.open("wb") as f:
            tomli_w.dump(data, f)
    else:
        msg = f"Unsupported configuration format: {config_path.suffix or '<none>'}"
        raise ConfigurationError(msg)

    logger.debug(f"Wrote gallery configuration to: {config_path}")
    return config_path
