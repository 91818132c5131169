"""JSON settings for abi-forms.

Recognized keys::

    {
      "logging": {"level": "INFO"},
      "validation": {"require_even_length_bytes": false},
      "preview": {"recently_updated_seconds": 1.0}
    }

The file is ``$ABI_FORMS_CONFIG_PATH`` (or ``$ABI_FORMS_CONFIG``); relative
values are taken from the project root. Without either variable,
``config.json`` in the project root is used.
"""

import json
import os
from pathlib import Path
from typing import Any

CONFIG_PATH_ENV_VARS = ("ABI_FORMS_CONFIG_PATH", "ABI_FORMS_CONFIG")
LOG_LEVEL_ENV_VAR = "ABI_FORMS_LOG_LEVEL"
CONFIG_FILENAME = "config.json"

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_RECENTLY_UPDATED_SECONDS = 1.0


def _pyproject_dir(start: Path) -> Path | None:
    here = start.resolve()
    return next(
        (d for d in (here, *here.parents) if (d / "pyproject.toml").is_file()), None
    )


def _root_dir() -> Path | None:
    return _pyproject_dir(Path.cwd()) or _pyproject_dir(Path(__file__).parent)


def _from_root(relative: Path) -> Path:
    root = _root_dir()
    return root / relative if root else relative


def _env_config_path() -> str:
    for var in CONFIG_PATH_ENV_VARS:
        value = os.getenv(var, "").strip()
        if value:
            return value
    return ""


def resolve_config_path(path: str | Path | None = None) -> Path:
    if path is not None:
        return Path(path).expanduser()

    from_env = _env_config_path()
    if not from_env:
        return _from_root(Path(CONFIG_FILENAME))

    candidate = Path(from_env).expanduser()
    return candidate if candidate.is_absolute() else _from_root(candidate)


def load_config_json(
    path: str | Path | None = None, *, require_exists: bool = False
) -> dict[str, Any]:
    """Read the settings file; unreadable or non-object files give ``{}``."""
    target = resolve_config_path(path)
    if not target.exists():
        if require_exists:
            raise FileNotFoundError(f"Config file not found: {target}")
        return {}
    try:
        data = json.loads(target.read_text())
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


CONFIG: dict[str, Any] = load_config_json()


def set_config(config: dict[str, Any]) -> None:
    """Swap the settings in place so modules holding ``CONFIG`` see the change."""
    CONFIG.clear()
    CONFIG.update(config)


def load_config(
    path: str | Path | None = None, *, require_exists: bool = False
) -> None:
    set_config(load_config_json(path, require_exists=require_exists))


def _section(name: str) -> dict[str, Any]:
    section = CONFIG.get(name)
    return section if isinstance(section, dict) else {}


def get_log_level() -> str:
    level = (
        _section("logging").get("level")
        or os.getenv(LOG_LEVEL_ENV_VAR)
        or DEFAULT_LOG_LEVEL
    )
    return str(level).strip().upper()


def require_even_length_bytes() -> bool:
    return bool(_section("validation").get("require_even_length_bytes", False))


def get_recently_updated_seconds() -> float:
    raw = _section("preview").get("recently_updated_seconds")
    if raw is None:
        return DEFAULT_RECENTLY_UPDATED_SECONDS
    try:
        return float(raw)
    except (TypeError, ValueError):
        return DEFAULT_RECENTLY_UPDATED_SECONDS
