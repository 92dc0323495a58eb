"""Unit tests for svg_glyphframes.config."""

from pathlib import Path

import pytest

from svg_glyphframes.config import Config
from svg_glyphframes.exceptions import GlyphFramesError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for name in (
        "SVG_GLYPHFRAMES_CONFIG",
        "SVG_GLYPHFRAMES_FONT_FAMILY",
        "SVG_GLYPHFRAMES_FONT_SIZE",
        "SVG_GLYPHFRAMES_LOCALE",
        "SVG_GLYPHFRAMES_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("svg_glyphframes.config.DEFAULT_CONFIG_PATH", tmp_path / "absent.toml")


class TestConfig:
    """Tests for Config defaults, loading and overrides."""

    def test_defaults(self) -> None:
        config = Config.load()
        assert config.default_font_family == "sans-serif"
        assert config.default_font_size == 24.0
        assert config.default_locale == "en-us"
        assert config.default_color == "black"
        assert config.use_fontconfig is True
        assert config.log_level == "WARNING"

    def test_load_from_file(self, tmp_path: Path) -> None:
        path = tmp_path / "c.toml"
        path.write_text(
            'default-font-family = "Serif"\ndefault_font_size = 12\nlog_level = "debug"\n'
            'unknown_key = 1\n',
            encoding="utf-8",
        )
        config = Config.load(path)
        assert config.default_font_family == "Serif"
        assert config.default_font_size == 12
        assert config.log_level == "DEBUG"

    def test_config_path_from_environment(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        path = tmp_path / "env.toml"
        path.write_text('default_locale = "fr-fr"\n', encoding="utf-8")
        monkeypatch.setenv("SVG_GLYPHFRAMES_CONFIG", str(path))
        assert Config.load().default_locale == "fr-fr"

    def test_environment_overrides_file(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        path = tmp_path / "c.toml"
        path.write_text("default_font_size = 12\n", encoding="utf-8")
        monkeypatch.setenv("SVG_GLYPHFRAMES_FONT_SIZE", "30")
        monkeypatch.setenv("SVG_GLYPHFRAMES_FONT_FAMILY", "Mono")
        config = Config.load(path)
        assert config.default_font_size == 30.0
        assert config.default_font_family == "Mono"

    def test_invalid_environment_value(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SVG_GLYPHFRAMES_FONT_SIZE", "huge")
        with pytest.raises(GlyphFramesError):
            Config.load()

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.toml"
        path.write_text("this is = = not toml", encoding="utf-8")
        with pytest.raises(GlyphFramesError):
            Config.load(path)

    @pytest.mark.parametrize(
        "values",
        [{"default_font_size": 0}, {"log_level": "LOUD"}],
    )
    def test_invalid_values(self, values: dict) -> None:
        with pytest.raises(GlyphFramesError):
            Config.from_dict(values)
