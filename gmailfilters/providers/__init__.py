from __future__ import annotations

from typing import Optional

from .base import BaseProvider


def get_provider(
    name: str, *, credentials_path: str, token_path: str, refresh_token: Optional[str] = None
) -> BaseProvider:
    n = (name or "").lower()
    if n == "gmail":
        # Lazy import to avoid importing Google libs during --help
        from .gmail import GmailProvider  # type: ignore
        return GmailProvider(credentials_path=credentials_path, token_path=token_path, refresh_token=refresh_token)
    raise ValueError(f"Unsupported provider: {name}")

__all__ = [
    "BaseProvider",
    "get_provider",
]
