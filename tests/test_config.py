"""Tests for config loading, validation, and env var overrides."""

from pathlib import Path

import pytest

from mailpatch.config.loader import ConfigError, load_config


class TestConfigLoading:
    def test_default_config(self, tmp_path: Path):
        cfg = load_config(tmp_path)
        assert cfg.output.directory == "patches"
        assert cfg.output.format == "terminal"
        assert cfg.convert.keep_failed is True
        assert cfg.convert.lf_suffixes == [".sh"]

    def test_custom_toml(self, tmp_path: Path):
        (tmp_path / ".mailpatch.toml").write_text(
            'version = "1.0"\n'
            '[output]\n'
            'directory = "out"\n'
            'format = "yaml"\n'
            '[convert]\n'
            'lf_suffixes = [".sh", ".bash"]\n'
        )
        cfg = load_config(tmp_path)
        assert cfg.output.directory == "out"
        assert cfg.output.format == "yaml"
        assert cfg.convert.lf_suffixes == [".sh", ".bash"]

    def test_unknown_keys_ignored(self, tmp_path: Path):
        (tmp_path / ".mailpatch.toml").write_text('[output]\ncolour = "blue"\noverwrite = true\n')
        cfg = load_config(tmp_path)
        assert cfg.output.overwrite is True

    def test_config_override_path(self, tmp_path: Path):
        custom = tmp_path / "custom.toml"
        custom.write_text("[convert]\nfail_on_warning = true\n")
        cfg = load_config(tmp_path, config_override=str(custom))
        assert cfg.convert.fail_on_warning is True

    def test_missing_override_raises(self, tmp_path: Path):
        with pytest.raises(ConfigError):
            load_config(tmp_path, config_override="/nonexistent/config.toml")

    def test_invalid_toml_raises(self, tmp_path: Path):
        (tmp_path / ".mailpatch.toml").write_text("this is not valid [toml")
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    def test_invalid_format_raises(self, tmp_path: Path):
        (tmp_path / ".mailpatch.toml").write_text('[output]\nformat = "sarif"\n')
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    def test_non_string_lf_suffixes_raise(self, tmp_path: Path):
        (tmp_path / ".mailpatch.toml").write_text("[convert]\nlf_suffixes = [1]\n")
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    def test_lf_suffixes_must_be_a_list(self, tmp_path: Path):
        (tmp_path / ".mailpatch.toml").write_text('[convert]\nlf_suffixes = ".sh"\n')
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    def test_output_encoding(self, tmp_path: Path):
        (tmp_path / ".mailpatch.toml").write_text('[output]\nencoding = "latin-1"\n')
        cfg = load_config(tmp_path)
        assert cfg.output.encoding == "latin-1"


class TestEnvVarOverrides:
    def test_output_dir_override(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("MAILPATCH_OUTPUT_DIR", "/tmp/patches")
        cfg = load_config(tmp_path)
        assert cfg.output.directory == "/tmp/patches"

    def test_format_override(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("MAILPATCH_FORMAT", "json")
        cfg = load_config(tmp_path)
        assert cfg.output.format == "json"

    def test_invalid_format_env_ignored(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("MAILPATCH_FORMAT", "xml")
        cfg = load_config(tmp_path)
        assert cfg.output.format == "terminal"

    def test_boolean_overrides(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("MAILPATCH_OVERWRITE", "yes")
        monkeypatch.setenv("MAILPATCH_FAIL_ON_WARNING", "1")
        cfg = load_config(tmp_path)
        assert cfg.output.overwrite is True
        assert cfg.convert.fail_on_warning is True
