"""Layered configuration loading.

Every layer is reduced to the sectioned shape of ``config.yaml`` and merged
in order; ``AppConfig`` validates the result once:

    defaults < YAML file < TELEBOX_* env (incl. .env) < CLI overrides
"""

from __future__ import annotations

from copy import deepcopy
from pathlib import Path
from typing import Any, Mapping

import yaml
from dotenv import load_dotenv

from .defaults import DEFAULT_CONFIG
from .schema import AppConfig, EnvOverrides

_SECTIONS = ("http", "logging", "linkbox")
_TOP_LEVEL = ("app_name", "environment")

# Flat names accepted from env vars and the CLI, keyed to their section slot
_FLAT_KEYS: dict[str, tuple[str, str]] = {
    "http_timeout_seconds": ("http", "timeout_seconds"),
    "http_follow_redirects": ("http", "follow_redirects"),
    "http_user_agent": ("http", "user_agent"),
    "log_level": ("logging", "level"),
    "log_format": ("logging", "format"),
    "linkbox_api_token": ("linkbox", "api_token"),
    "linkbox_base_folder_id": ("linkbox", "base_folder_id"),
    "linkbox_base_url": ("linkbox", "base_url"),
}


def _merge_into(target: dict[str, Any], layer: Mapping[str, Any]) -> None:
    """Merge *layer* into *target* in place; nested mappings merge key-wise."""
    for key, value in layer.items():
        current = target.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            _merge_into(current, value)
        else:
            target[key] = deepcopy(value)


def _sectioned(layer: Mapping[str, Any]) -> dict[str, Any]:
    """Reduce a layer to known top-level keys and sections.

    Flat keys (``linkbox_api_token``) land in their section and win over a
    section block given in the same layer.  Unknown keys are dropped.
    """
    out: dict[str, Any] = {key: layer[key] for key in _TOP_LEVEL if key in layer}
    for section in _SECTIONS:
        block = layer.get(section)
        if isinstance(block, Mapping):
            out[section] = dict(block)

    for flat_key, (section, key) in _FLAT_KEYS.items():
        if flat_key in layer:
            out.setdefault(section, {})[key] = layer[flat_key]
    return out


def _yaml_layer(config_path: Path) -> dict[str, Any]:
    if not config_path.exists():
        raise FileNotFoundError(config_path)

    parsed = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ValueError(f"Config YAML must be a mapping, got: {type(parsed)!r}")
    return parsed


def _env_layer(dotenv_path: Path | None) -> dict[str, Any]:
    # Variables already set in the process win over the .env file
    if dotenv_path is not None:
        if not dotenv_path.exists():
            raise FileNotFoundError(dotenv_path)
        load_dotenv(dotenv_path, override=False)
    return EnvOverrides().to_update_dict()


def load_config(
    *,
    config_path: Path | None = None,
    dotenv_path: Path | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> AppConfig:
    """Load, merge and validate configuration.

    Only reads: no file or directory is ever created.  Explicitly given
    paths that do not exist raise ``FileNotFoundError``.
    """
    layers: list[Mapping[str, Any]] = [DEFAULT_CONFIG]
    if config_path is not None:
        layers.append(_yaml_layer(config_path))
    layers.append(_env_layer(dotenv_path))
    layers.append(cli_overrides or {})

    merged: dict[str, Any] = {}
    for layer in layers:
        _merge_into(merged, _sectioned(layer))

    return AppConfig.model_validate(merged)
