"""
Tests for CLI Commands
======================
Tests for the xkpasswd CLI interface in xkpasswd/cli.py.
"""

import json
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from xkpasswd.cli import build_settings, main
from xkpasswd.core.padding import AdaptivePadding, FixedPadding
from xkpasswd.core.settings import Preset, Settings
from xkpasswd.utils.exceptions import InvalidSettingsError


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    return home


def output_lines(capsys):
    return capsys.readouterr().out.splitlines()


class TestCLIBasic:
    """Basic CLI tests."""

    def test_version_flag(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["--version"])
        assert excinfo.value.code == 0
        assert "xkpasswd" in capsys.readouterr().out

    def test_help_flag(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["--help"])
        assert excinfo.value.code == 0
        out = capsys.readouterr().out
        assert "--preset" in out
        assert "--adaptive-length" in out

    def test_default_generates_one_password(self, capsys):
        assert main([]) == 0
        lines = output_lines(capsys)
        assert len(lines) == 1
        assert len(lines[0]) > 0


class TestCLIGenerate:
    """Generation options."""

    def test_seed_is_reproducible(self, capsys):
        assert main(["--seed", "5"]) == 0
        first = output_lines(capsys)
        assert main(["--seed", "5"]) == 0
        assert output_lines(capsys) == first

    def test_preset_and_language(self, capsys):
        assert main(["-p", "xkcd", "-l", "de", "--seed", "1"]) == 0
        lines = output_lines(capsys)
        assert len(lines[0].split("-")) == 4

    def test_count(self, capsys):
        assert main(["-n", "3"]) == 0
        assert len(output_lines(capsys)) == 3

    def test_entropy_flag(self, capsys):
        assert main(["-e", "-p", "xkcd"]) == 0
        lines = output_lines(capsys)
        assert len(lines) == 2
        assert lines[1].startswith("Entropy: between ")
        assert "bits with full knowledge" in lines[1]

    def test_word_options(self, capsys):
        args = ["-p", "xkcd", "-w", "5", "--word-min", "6", "--word-max", "6",
                "-t", "titlecase", "-s", "+"]
        assert main(args) == 0
        words = output_lines(capsys)[0].split("+")
        assert len(words) == 5
        for word in words:
            assert len(word) == 6
            assert word == word.capitalize()

    def test_adaptive_length(self, capsys):
        assert main(["--adaptive-length", "40"]) == 0
        assert len(output_lines(capsys)[0]) == 40

    def test_adaptive_without_length_fails(self, capsys):
        assert main(["--padding", "adaptive"]) == 1

    def test_wifi_keeps_preset_adaptive_length(self, capsys):
        assert main(["-p", "wifi", "--padding", "adaptive"]) == 0
        assert len(output_lines(capsys)[0]) == 63

    def test_invalid_range_fails(self):
        assert main(["--word-min", "9", "--word-max", "3"]) == 1

    def test_no_candidates_fails(self):
        assert main(["--word-min", "15", "--word-max", "20"]) == 1

    def test_invalid_count_fails(self):
        assert main(["-n", "0"]) == 1

    def test_output_file(self, tmp_path, capsys):
        target = tmp_path / "passwords.txt"
        assert main(["-n", "25", "--output-file", str(target)]) == 0

        lines = target.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 25
        assert capsys.readouterr().out == ""


class TestCLIConfig:
    """Config file interaction."""

    def test_missing_config_fails(self, tmp_path):
        assert main(["--config", str(tmp_path / "missing.json")]) == 1

    def test_invalid_config_fails(self, tmp_path):
        path = tmp_path / "xkpasswd.json"
        path.write_text(json.dumps({"preset": "apple_id"}), encoding="utf-8")
        assert main(["--config", str(path)]) == 1

    def test_config_file_values_apply(self, tmp_path, capsys):
        path = tmp_path / "xkpasswd.json"
        path.write_text(json.dumps({"preset": "xkcd", "words_count": 2, "separators": "_"}),
                        encoding="utf-8")

        assert main(["--config", str(path)]) == 0
        assert len(output_lines(capsys)[0].split("_")) == 2

    def test_command_line_overrides_config(self, tmp_path, capsys):
        path = tmp_path / "xkpasswd.json"
        path.write_text(json.dumps({"preset": "xkcd", "words_count": 2, "separators": "_"}),
                        encoding="utf-8")

        assert main(["--config", str(path), "-w", "6"]) == 0
        assert len(output_lines(capsys)[0].split("_")) == 6

    def test_save_config(self, isolated_home, capsys):
        assert main(["-w", "5", "-t", "uppercase", "-p", "web32", "--save-config"]) == 0

        saved = json.loads((isolated_home / ".xkpasswd.json").read_text(encoding="utf-8"))
        assert saved == {"words_count": 5, "transforms": ["uppercase"], "preset": "web32"}

    def test_saved_config_is_used(self, isolated_home, capsys):
        assert main(["-p", "xkcd", "-w", "3", "--save-config"]) == 0
        capsys.readouterr()

        assert main([]) == 0
        assert len(output_lines(capsys)[0].split("-")) == 3

    @pytest.mark.parametrize("argv", [
        ["--word-min", "9", "--word-max", "3"],
        ["--padding", "adaptive"],
        ["-w", "4", "-n", "0"],
    ])
    def test_invalid_options_are_not_saved(self, isolated_home, capsys, argv):
        assert main(argv + ["--save-config"]) == 1
        assert not (isolated_home / ".xkpasswd.json").exists()

        assert main([]) == 0
        assert len(output_lines(capsys)) == 1

    def test_invalid_options_keep_existing_config(self, isolated_home, capsys):
        assert main(["-p", "xkcd", "-w", "3", "--save-config"]) == 0
        before = (isolated_home / ".xkpasswd.json").read_text(encoding="utf-8")

        assert main(["--word-min", "9", "--word-max", "3", "--save-config"]) == 1
        assert (isolated_home / ".xkpasswd.json").read_text(encoding="utf-8") == before


class TestBuildSettings:
    """Merged values to settings."""

    def test_empty_values_use_default_preset(self):
        assert build_settings({}) == Settings.from_preset(Preset.DEFAULT)

    def test_fixed_overrides_adaptive_preset(self):
        settings = build_settings({"preset": Preset.WIFI, "padding": "fixed"})
        assert settings.padding_strategy == FixedPadding()

    def test_adaptive_length_implies_adaptive(self):
        settings = build_settings({"adaptive_length": 24})
        assert settings.padding_strategy == AdaptivePadding(24)

    def test_digit_alphabet(self):
        settings = build_settings({"digits": "01"})
        assert settings.padding_digits == "01"

    def test_invalid_settings(self):
        with pytest.raises(InvalidSettingsError):
            build_settings({"word_min": 5, "word_max": 4})
