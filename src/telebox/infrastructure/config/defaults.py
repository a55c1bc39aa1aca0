"""Hardcoded default configuration values."""

from __future__ import annotations

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {
    "app_name": "telebox",
    "environment": "dev",
    "http": {
        "timeout_seconds": 20.0,
        "follow_redirects": True,
        "user_agent": "Telebox-Catalog/0.1.0",
    },
    "logging": {
        "level": "INFO",
        "format": None,  # Derived from environment in schema.py
    },
    "linkbox": {
        "api_token": None,
        "base_folder_id": "0",
        "base_url": "https://www.linkbox.to",
    },
}
