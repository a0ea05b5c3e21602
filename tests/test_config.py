"""
Tests for the configuration file layer
======================================
Tests for xkpasswd/utils/config.py.
"""

import json
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from xkpasswd.core.settings import Language, Preset, WordTransform
from xkpasswd.utils.config import Config, find_config_path, to_config_value
from xkpasswd.utils.exceptions import ConfigError


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    return home


def write_config(path, data):
    path.write_text(data if isinstance(data, str) else json.dumps(data), encoding="utf-8")
    return str(path)


class TestConfigFile:
    """Locating and reading config files."""

    def test_no_default_file(self, isolated_home):
        config = Config()
        assert config.as_dict() == {}
        assert config.config_path == str(isolated_home / ".xkpasswd.json")

    def test_default_file_in_home(self, isolated_home):
        write_config(isolated_home / ".xkpasswd.json", {"words_count": 4})
        assert Config().get_number("words_count") == 4

    def test_xdg_config_wins(self, tmp_path, isolated_home, monkeypatch):
        xdg = tmp_path / "xdg"
        xdg.mkdir()
        monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg))
        write_config(xdg / "xkpasswd.json", {"words_count": 7})
        write_config(isolated_home / ".xkpasswd.json", {"words_count": 4})

        assert find_config_path() == str(xdg / "xkpasswd.json")
        assert Config().get_number("words_count") == 7

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            Config(str(tmp_path / "nope.json"))

    def test_invalid_json(self, tmp_path):
        path = write_config(tmp_path / "bad.json", "words_count = 3")
        with pytest.raises(ConfigError, match="Error loading config file"):
            Config(path)

    def test_non_object_json(self, tmp_path):
        path = write_config(tmp_path / "list.json", [1, 2])
        with pytest.raises(ConfigError):
            Config(path)

    def test_save_and_reload(self, tmp_path):
        path = str(tmp_path / "nested" / "xkpasswd.json")
        config = Config()
        config.config_path = path
        config.set("separators", "-")
        config.save()

        assert Config(path)["separators"] == "-"


class TestConfigValues:
    """Typed lookups and merging."""

    def test_full_file(self, tmp_path):
        path = write_config(tmp_path / "xkpasswd.json", {
            "words_count": 5,
            "word_min": 4,
            "word_max": 8,
            "separators": ".-_",
            "digits_before": 2,
            "digits_after": 3,
            "symbols": "!@#$",
            "symbols_before": 1,
            "symbols_after": 2,
            "preset": "web32",
            "lang": "de",
            "transforms": ["lowercase", "uppercase"],
        })
        merged = Config(path).merge({})

        assert merged["words_count"] == 5
        assert merged["word_min"] == 4
        assert merged["word_max"] == 8
        assert merged["separators"] == ".-_"
        assert merged["digits_before"] == 2
        assert merged["digits_after"] == 3
        assert merged["symbols"] == "!@#$"
        assert merged["symbols_before"] == 1
        assert merged["symbols_after"] == 2
        assert merged["preset"] is Preset.WEB32
        assert merged["lang"] is Language.GERMAN
        assert merged["transforms"] == WordTransform.LOWERCASE | WordTransform.UPPERCASE

    def test_command_line_wins(self, tmp_path):
        path = write_config(tmp_path / "xkpasswd.json", {"words_count": 5, "separators": "."})
        merged = Config(path).merge({"words_count": 10, "separators": None})

        assert merged["words_count"] == 10
        assert merged["separators"] == "."

    def test_wrong_types_are_ignored(self, tmp_path):
        path = write_config(tmp_path / "xkpasswd.json", {
            "words_count": True,
            "word_min": "4",
            "separators": False,
            "transforms": "lowercase",
        })
        merged = Config(path).merge({})

        assert merged.get("words_count") is None
        assert merged.get("word_min") is None
        assert merged.get("separators") is None
        assert merged.get("transforms") is None

    def test_negative_numbers_are_ignored(self, tmp_path):
        path = write_config(tmp_path / "xkpasswd.json", {"words_count": -3, "digits_before": 0})
        config = Config(path)

        assert config.get_number("words_count") is None
        assert config.get_number("digits_before") == 0
        assert config.merge({}).get("words_count") is None

    @pytest.mark.parametrize("field,value", [
        ("preset", "apple_id"),
        ("padding", "fixed_padding"),
        ("lang", "klingon"),
    ])
    def test_invalid_variant(self, tmp_path, field, value):
        path = write_config(tmp_path / "xkpasswd.json", {field: value})

        with pytest.raises(ConfigError) as excinfo:
            Config(path).merge({})

        assert excinfo.value.field == field
        assert excinfo.value.message == f"invalid variant: {value}"

    def test_padding_variants(self, tmp_path):
        for value in ("fixed", "adaptive"):
            path = write_config(tmp_path / "xkpasswd.json", {"padding": value})
            assert Config(path).merge({})["padding"] == value

    def test_transforms_with_non_string(self, tmp_path):
        path = write_config(tmp_path / "xkpasswd.json", {"transforms": ["lowercase", False]})

        with pytest.raises(ConfigError) as excinfo:
            Config(path).get_transforms()

        assert excinfo.value.field == "transforms"
        assert excinfo.value.message == "Invalid data type, expect string but got 'false'"

    def test_transforms_with_unknown_name(self, tmp_path):
        path = write_config(tmp_path / "xkpasswd.json",
                            {"transforms": ["lowercase", "inversed_titlecase"]})

        with pytest.raises(ConfigError) as excinfo:
            Config(path).get_transforms()

        assert excinfo.value.field == "transforms"
        assert excinfo.value.message == "invalid variant: inversed_titlecase"

    def test_to_config_value(self):
        transforms = WordTransform.TITLECASE | WordTransform.INVERTED_TITLECASE
        assert to_config_value(transforms) == ["titlecase", "inverted-titlecase"]
        assert to_config_value(Preset.APPLE_ID) == "apple-id"
        assert to_config_value(Language.SPANISH) == "es"
        assert to_config_value(4) == 4
