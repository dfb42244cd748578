from __future__ import annotations

from pathlib import Path

import pytest

from ramah.config.loader import (
    DEFAULT_CONFIG_PATH,
    AppConfig,
    ConfigError,
    _validate_config_schema,
    load_config,
    resolve_config_path,
)


def test_load_config_success(write_config: Path):
    cfg = load_config(write_config)
    assert cfg.export_directory == "./exports"
    assert cfg.keep_na_strings == ["NA"]
    assert cfg.header_scan_depth == 50
    assert cfg.top_n == 5
    assert cfg.distribution_slices == 4
    assert cfg.default_sheet is None


def test_load_config_missing_required_file(temp_workdir: Path):
    with pytest.raises(ConfigError):
        load_config(temp_workdir / "config" / "not_exists.yml")


def test_load_config_missing_default_file_uses_defaults(temp_workdir: Path):
    cfg = load_config(temp_workdir / "config" / "ramah.yml", required=False)
    assert cfg == AppConfig()


def test_load_config_empty_file_uses_defaults(write_config: Path):
    write_config.write_text("", encoding="utf-8")
    assert load_config(write_config) == AppConfig()


def test_load_config_invalid_yaml(write_config: Path):
    write_config.write_text("top_n: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "invalid yaml" in str(e.value)


def test_load_config_non_mapping_root(write_config: Path):
    write_config.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(write_config)


def test_load_config_wrong_type(write_config: Path):
    write_config.write_text("top_n: many\n", encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "config validation failed" in str(e.value)


def test_load_config_extra_field(write_config: Path):
    text = write_config.read_text(encoding="utf-8") + "\nextra_field: not_allowed\n"
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "config validation failed" in str(e.value)


def test_validate_rejects_too_few_slices():
    with pytest.raises(ConfigError):
        _validate_config_schema({"distribution_slices": 1})


def test_resolve_config_path_precedence(temp_workdir: Path, monkeypatch):
    assert resolve_config_path(None) == (DEFAULT_CONFIG_PATH, False)

    monkeypatch.setenv("RAMAH_CONFIG", "env.yml")
    assert resolve_config_path(None) == (Path("env.yml"), True)

    assert resolve_config_path(Path("cli.yml")) == (Path("cli.yml"), True)


def test_load_config_without_path_reads_env(temp_workdir: Path, monkeypatch):
    p = temp_workdir / "custom.yml"
    p.write_text("top_n: 3\n", encoding="utf-8")
    monkeypatch.setenv("RAMAH_CONFIG", str(p))
    assert load_config().top_n == 3
