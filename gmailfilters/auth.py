"""Sign-in command: run the OAuth consent flow or check the stored token."""
from __future__ import annotations

import argparse

from .config_resolver import resolve_paths, resolve_refresh_token


def _lazy_gmail_client():
    from .gmail_api import GmailClient
    return GmailClient


def run_auth(args: argparse.Namespace) -> int:
    """Authenticate with Gmail and store the token for later commands."""
    creds_path, token_path = resolve_paths(
        arg_credentials=getattr(args, "credentials", None),
        arg_token=getattr(args, "token", None),
    )
    GmailClient = _lazy_gmail_client()
    client = GmailClient(
        credentials_path=creds_path,
        token_path=token_path,
        refresh_token=resolve_refresh_token(getattr(args, "refresh_token", None)),
    )

    if getattr(args, "validate", False):
        # AuthError propagates to the CLI error handler
        address = client.validate_token()
        print(f"Gmail token valid for {address or 'this account'}.")
        return 0

    client.authenticate(port=getattr(args, "port", 0) or 0)
    if client.refresh_token:
        print("Authentication complete (refresh token).")
    else:
        print(f"Authentication complete. Token saved to {client.token_path}")
    return 0
