"""Wizard settings: ``config.yaml`` layered over built-in defaults, loaded once at import.

``.env`` at the project root is loaded first so the Gemini client finds
``GOOGLE_API_KEY``. ``WIZ_SERVICE_URL`` and ``WIZ_LOG_LEVEL`` override the
file, which lets a deployment point the CLI elsewhere without editing YAML.
"""

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(_PROJECT_ROOT / ".env")

CONFIG_PATH = Path(__file__).resolve().parent / "config.yaml"

DEFAULTS: dict = {
    "legacy_model": "gemini-2.0-flash",
    "legacy_temperature": 0.7,
    "service_base_url": "http://localhost:3000",
    "request_timeout": 60,
    "output_path": "./output/workflow.json",
    "vocabulary_path": None,
    "log_level": "WARNING",
}

_ENV_OVERRIDES = {
    "WIZ_SERVICE_URL": "service_base_url",
    "WIZ_LOG_LEVEL": "log_level",
}


def load_config(path: str | Path = CONFIG_PATH) -> dict:
    """Merge the YAML file at ``path`` over DEFAULTS, then apply environment overrides.

    A missing or empty file yields the defaults. A file whose top level is
    not a mapping raises ValueError.
    """
    path = Path(path)
    loaded = yaml.safe_load(path.read_text(encoding="utf-8")) if path.exists() else None
    if loaded is not None and not isinstance(loaded, dict):
        raise ValueError(f"{path} must contain a mapping, got {type(loaded).__name__}.")

    config = {**DEFAULTS, **(loaded or {})}
    for env_var, key in _ENV_OVERRIDES.items():
        if os.environ.get(env_var):
            config[key] = os.environ[env_var]
    return config


_config = load_config()


def get_config() -> dict:
    """Return the loaded config dictionary."""
    return _config
