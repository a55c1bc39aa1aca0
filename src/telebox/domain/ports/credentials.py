"""Port for the two provider settings the core reads."""

from __future__ import annotations

from typing import Protocol

from telebox.domain.exceptions import MissingCredential


class CredentialsPort(Protocol):
    """Read-only account settings (satisfied by ``LinkboxConfig``)."""

    api_token: str | None
    base_folder_id: str


def require_token(credentials: CredentialsPort) -> str:
    """Return the configured API token or raise ``MissingCredential``."""
    token = (credentials.api_token or "").strip()
    if not token:
        raise MissingCredential(
            "No Telebox API token configured. "
            "Set TELEBOX_LINKBOX_API_TOKEN or linkbox.api_token."
        )
    return token
