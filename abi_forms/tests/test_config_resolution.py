from __future__ import annotations

import json
from pathlib import Path

import pytest

import abi_forms.core.config as config


def test_resolve_config_path_defaults_to_repo_root(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.delenv("ABI_FORMS_CONFIG_PATH", raising=False)
    monkeypatch.delenv("ABI_FORMS_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)

    repo_root = Path(__file__).resolve().parents[2]
    assert config.resolve_config_path() == repo_root / "config.json"


def test_resolve_config_path_env_relative_is_repo_relative(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setenv("ABI_FORMS_CONFIG_PATH", "config.example.json")
    monkeypatch.chdir(tmp_path)

    repo_root = Path(__file__).resolve().parents[2]
    assert config.resolve_config_path() == repo_root / "config.example.json"


def test_resolve_config_path_env_absolute(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    target = tmp_path / "custom.json"
    monkeypatch.setenv("ABI_FORMS_CONFIG", str(target))
    monkeypatch.delenv("ABI_FORMS_CONFIG_PATH", raising=False)
    assert config.resolve_config_path() == target


def test_load_config_reads_settings(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {
                "logging": {"level": "debug"},
                "validation": {"require_even_length_bytes": True},
                "preview": {"recently_updated_seconds": 2.5},
            }
        )
    )
    config.load_config(path)

    assert config.get_log_level() == "DEBUG"
    assert config.require_even_length_bytes() is True
    assert config.get_recently_updated_seconds() == 2.5


def test_load_config_json_tolerates_bad_files(tmp_path: Path) -> None:
    broken = tmp_path / "broken.json"
    broken.write_text("{not json")
    assert config.load_config_json(broken) == {}

    listing = tmp_path / "list.json"
    listing.write_text("[1, 2]")
    assert config.load_config_json(listing) == {}

    assert config.load_config_json(tmp_path / "missing.json") == {}
    with pytest.raises(FileNotFoundError):
        config.load_config_json(tmp_path / "missing.json", require_exists=True)


def test_defaults_without_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("ABI_FORMS_LOG_LEVEL", raising=False)
    assert config.get_log_level() == "INFO"
    assert config.require_even_length_bytes() is False
    assert config.get_recently_updated_seconds() == 1.0

    monkeypatch.setenv("ABI_FORMS_LOG_LEVEL", "warning")
    assert config.get_log_level() == "WARNING"

    config.set_config({"preview": {"recently_updated_seconds": "soon"}})
    assert config.get_recently_updated_seconds() == 1.0
