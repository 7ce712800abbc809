"""Configuration management for dactyl.

Reads and writes TOML config at ~/.config/dactyl/config.toml.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

import tomli_w

CONFIG_DIR = Path.home() / ".config" / "dactyl"
CONFIG_PATH = CONFIG_DIR / "config.toml"


@dataclass
class PanelConfig:
    url: str = ""
    application_key: str = ""
    client_key: str = ""


@dataclass
class OutputConfig:
    color: bool = True


@dataclass
class DactylConfig:
    panel: PanelConfig = field(default_factory=PanelConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


def load_config() -> DactylConfig:
    """Load config from TOML file, returning defaults if missing or corrupt."""
    if not CONFIG_PATH.exists():
        return DactylConfig()
    try:
        with open(CONFIG_PATH, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError):
        return DactylConfig()

    panel_data = data.get("panel")
    output_data = data.get("output")
    if not isinstance(panel_data, dict):
        panel_data = {}
    if not isinstance(output_data, dict):
        output_data = {}

    return DactylConfig(
        panel=PanelConfig(
            url=panel_data.get("url", ""),
            application_key=panel_data.get("application_key", ""),
            client_key=panel_data.get("client_key", ""),
        ),
        output=OutputConfig(
            color=output_data.get("color", True),
        ),
    )


def save_config(config: DactylConfig) -> None:
    """Write config to TOML file. The file holds API keys, so it is 0600."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    os.chmod(CONFIG_DIR, 0o700)

    data = {
        "panel": {
            "url": config.panel.url,
            "application_key": config.panel.application_key,
            "client_key": config.panel.client_key,
        },
        "output": {
            "color": config.output.color,
        },
    }

    with open(CONFIG_PATH, "wb") as f:
        tomli_w.dump(data, f)
    os.chmod(CONFIG_PATH, 0o600)


def has_credentials(mode: str = "admin") -> bool:
    """Quick check that a URL and the key for ``mode`` ("admin"/"user") are set."""
    panel = load_config().panel
    key = panel.application_key if mode == "admin" else panel.client_key
    return bool(panel.url and key)
