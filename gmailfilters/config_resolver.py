from __future__ import annotations

import logging
import os
from typing import Optional, Tuple

LOG = logging.getLogger(__name__)

ENV_CONFIG_DIR = "GMAILFILTERS_CONFIG_DIR"
ENV_CREDENTIALS = "GMAILFILTERS_CREDENTIALS"
ENV_TOKEN = "GMAILFILTERS_TOKEN"
ENV_REFRESH_TOKEN = "GMAILFILTERS_REFRESH_TOKEN"

_APP_DIR = "gmailfilters"


def expand_path(path: Optional[str]) -> Optional[str]:
    if not path:
        return path
    return os.path.expanduser(path)


def config_dir() -> str:
    """Return the directory holding credentials.json and token.json."""
    env_dir = os.environ.get(ENV_CONFIG_DIR)
    if env_dir:
        return os.path.expanduser(env_dir)
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return os.path.join(os.path.expanduser(xdg), _APP_DIR)
    return os.path.join(os.path.expanduser("~/.config"), _APP_DIR)


def default_gmail_credentials_path() -> str:
    return os.path.join(config_dir(), "credentials.json")


def default_gmail_token_path() -> str:
    return os.path.join(config_dir(), "token.json")


def resolve_paths(
    arg_credentials: Optional[str] = None,
    arg_token: Optional[str] = None,
) -> Tuple[str, str]:
    """Resolve credentials/token paths: flag, then environment, then config dir."""
    creds = arg_credentials or os.environ.get(ENV_CREDENTIALS) or default_gmail_credentials_path()
    token = arg_token or os.environ.get(ENV_TOKEN) or default_gmail_token_path()
    creds, token = expand_path(creds), expand_path(token)
    LOG.debug("using credentials %s and token %s", creds, token)
    return creds, token


def resolve_refresh_token(arg_refresh_token: Optional[str] = None) -> Optional[str]:
    """Return the OAuth refresh token from the flag or environment, if any."""
    return arg_refresh_token or os.environ.get(ENV_REFRESH_TOKEN) or None
