"""Tests for config loading, validation, and env var overrides."""

from pathlib import Path

import pytest

from vibesafe.config.loader import ConfigError, load_config
from vibesafe.config.schema import normalize_severity, severity_at_or_above


class TestSeverityComparison:
    def test_at_or_above(self):
        assert severity_at_or_above("Critical", "High") is True
        assert severity_at_or_above("High", "High") is True
        assert severity_at_or_above("Medium", "High") is False
        assert severity_at_or_above("Info", "Low") is False

    def test_ordering_matches_declaration(self):
        levels = ["Info", "None", "Low", "Medium", "High", "Critical"]
        for lower, higher in zip(levels, levels[1:]):
            assert severity_at_or_above(higher, lower)
            assert not severity_at_or_above(lower, higher)

    def test_normalize(self):
        assert normalize_severity("high") == "High"
        assert normalize_severity(" CRITICAL ") == "Critical"
        assert normalize_severity("urgent") is None


class TestConfigLoading:
    def test_default_config(self, tmp_path: Path):
        cfg = load_config(tmp_path)
        assert cfg.scan.fail_on == "High"
        assert cfg.scan.ignore_patterns == []
        assert cfg.scan.workers == 1
        assert cfg.entropy.min_entropy == 4.0
        assert cfg.entropy.min_length == 20
        assert cfg.output.format == "terminal"

    def test_custom_toml(self, tmp_path: Path):
        (tmp_path / ".vibesafe.toml").write_text(
            'version = "1.0"\n'
            "[scan]\n"
            'fail_on = "medium"\n'
            'ignore_patterns = ["dist/"]\n'
            "[entropy]\n"
            "min_entropy = 3.5\n"
            "unknown_key = 1\n"
        )
        cfg = load_config(tmp_path)
        assert cfg.scan.fail_on == "Medium"
        assert cfg.scan.ignore_patterns == ["dist/"]
        assert cfg.entropy.min_entropy == 3.5

    def test_config_override_path(self, tmp_path: Path):
        custom = tmp_path / "custom.toml"
        custom.write_text('[output]\nformat = "json"\n')
        cfg = load_config(tmp_path, config_override=str(custom))
        assert cfg.output.format == "json"

    def test_missing_override_raises(self, tmp_path: Path):
        with pytest.raises(ConfigError):
            load_config(tmp_path, config_override="/nonexistent/config.toml")

    def test_invalid_toml_raises(self, tmp_path: Path):
        (tmp_path / ".vibesafe.toml").write_text("this is not valid [toml")
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    def test_invalid_severity_raises(self, tmp_path: Path):
        (tmp_path / ".vibesafe.toml").write_text('[scan]\nfail_on = "urgent"\n')
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    def test_invalid_format_raises(self, tmp_path: Path):
        (tmp_path / ".vibesafe.toml").write_text('[output]\nformat = "sarif"\n')
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    @pytest.mark.parametrize(
        "toml",
        [
            '[scan]\nmax_depth = "2"\n',
            '[scan]\nworkers = "4"\n',
            "[scan]\nworkers = 0\n",
            "[scan]\nmax_file_size_kb = -1\n",
            '[scan]\nfollow_symlinks = "yes"\n',
            "[scan]\nmax_depth = true\n",
            "[scan]\nignore_patterns = [1, 2]\n",
            '[entropy]\nmin_length = "20"\n',
            '[entropy]\nmin_entropy = "high"\n',
            "[entropy]\nenabled = 1\n",
            '[output]\nredact = "on"\n',
        ],
    )
    def test_wrongly_typed_value_raises(self, tmp_path: Path, toml: str):
        (tmp_path / ".vibesafe.toml").write_text(toml)
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    def test_integer_min_entropy_accepted(self, tmp_path: Path):
        (tmp_path / ".vibesafe.toml").write_text("[entropy]\nmin_entropy = 4\n")
        assert load_config(tmp_path).entropy.min_entropy == 4


class TestEnvVarOverrides:
    def test_fail_on_override(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("VIBESAFE_FAIL_ON", "critical")
        assert load_config(tmp_path).scan.fail_on == "Critical"

    def test_format_override(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("VIBESAFE_FORMAT", "markdown")
        assert load_config(tmp_path).output.format == "markdown"

    def test_ignore_patterns_override(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("VIBESAFE_IGNORE_PATTERNS", r"vendor/, \.lock$")
        assert load_config(tmp_path).scan.ignore_patterns == ["vendor/", r"\.lock$"]

    def test_disable_rules_override(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("VIBESAFE_DISABLE_RULES", "AWS_ACCESS_KEY_ID,GENERIC_API_KEY")
        assert load_config(tmp_path).rules.disable == ["AWS_ACCESS_KEY_ID", "GENERIC_API_KEY"]

    def test_workers_override(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("VIBESAFE_WORKERS", "8")
        assert load_config(tmp_path).scan.workers == 8

    def test_invalid_env_ignored(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("VIBESAFE_FAIL_ON", "not_a_severity")
        monkeypatch.setenv("VIBESAFE_WORKERS", "many")
        cfg = load_config(tmp_path)
        assert cfg.scan.fail_on == "High"
        assert cfg.scan.workers == 1
