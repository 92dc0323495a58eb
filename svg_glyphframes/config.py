"""Configuration for svg-glyphframes.

Values come from a TOML file (explicit path, ``$SVG_GLYPHFRAMES_CONFIG`` or
``~/.config/svg-glyphframes/config.toml``) and can be overridden with
``SVG_GLYPHFRAMES_*`` environment variables.
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from svg_glyphframes.exceptions import GlyphFramesError

logger = logging.getLogger(__name__)

CONFIG_ENV = "SVG_GLYPHFRAMES_CONFIG"
DEFAULT_CONFIG_PATH = Path.home() / ".config" / "svg-glyphframes" / "config.toml"

# env var -> (field name, converter)
_ENV_OVERRIDES = {
    "SVG_GLYPHFRAMES_FONT_FAMILY": ("default_font_family", str),
    "SVG_GLYPHFRAMES_FONT_SIZE": ("default_font_size", float),
    "SVG_GLYPHFRAMES_LOCALE": ("default_locale", str),
    "SVG_GLYPHFRAMES_LOG_LEVEL": ("log_level", str),
}

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Config:
    """Settings applied where a document leaves something unspecified."""

    default_font_family: str = "sans-serif"
    default_font_size: float = 24.0
    default_locale: str = "en-us"
    default_color: str = "black"
    use_fontconfig: bool = True
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if self.default_font_size <= 0:
            raise GlyphFramesError(
                f"default_font_size must be positive, got {self.default_font_size}"
            )
        self.log_level = str(self.log_level).upper()
        if self.log_level not in _LOG_LEVELS:
            raise GlyphFramesError(f"Unknown log level: {self.log_level}")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Config:
        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in data.items():
            name = key.replace("-", "_")
            if name not in known:
                logger.debug("Ignoring unknown config key %r", key)
                continue
            values[name] = value
        try:
            return cls(**values)
        except TypeError as e:
            raise GlyphFramesError(f"Invalid configuration: {e}") from e

    @classmethod
    def load(cls, path: Path | str | None = None) -> Config:
        """Load configuration from TOML and apply environment overrides.

        Args:
            path: Explicit config file. When omitted, ``$SVG_GLYPHFRAMES_CONFIG``
                and then the per-user default location are tried.

        Returns:
            Loaded Config (defaults when no file exists)

        Raises:
            GlyphFramesError: If the file cannot be parsed or holds bad values
        """
        data: dict[str, Any] = {}
        config_path = Path(path) if path else None
        if config_path is None and os.environ.get(CONFIG_ENV):
            config_path = Path(os.environ[CONFIG_ENV])
        if config_path is None and DEFAULT_CONFIG_PATH.exists():
            config_path = DEFAULT_CONFIG_PATH

        if config_path is not None:
            try:
                with open(config_path, "rb") as f:
                    data = tomllib.load(f)
            except (OSError, tomllib.TOMLDecodeError) as e:
                raise GlyphFramesError(f"Cannot read config {config_path}: {e}") from e
            logger.debug("Loaded config from %s", config_path)

        for env_name, (field_name, convert) in _ENV_OVERRIDES.items():
            raw = os.environ.get(env_name)
            if raw is None:
                continue
            try:
                data[field_name] = convert(raw)
            except ValueError as e:
                raise GlyphFramesError(f"Invalid value for {env_name}: {raw!r}") from e

        return cls.from_dict(data)
