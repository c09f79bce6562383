"""gmailfilters CLI: manage Gmail filters as a YAML document.

Commands:
- auth: sign in to Gmail and store the OAuth token
- apply: replace all filters with those declared in a YAML file
- get filters: list existing filters as a table or YAML
- delete: remove one filter by id
"""

from __future__ import annotations

import logging
from typing import List, Optional

from core.cli_framework import CLIApp

from .. import __version__
from ..auth import run_auth
from ..config_resolver import default_gmail_credentials_path, default_gmail_token_path
from ..filters.commands import run_filters_apply, run_filters_delete, run_filters_get
from ..filters.processors import OUTPUT_FORMATS, OUTPUT_TEXT

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

app = CLIApp(
    "gmailfilters",
    "Manage Gmail filters declaratively from YAML",
    version=__version__,
)

app.global_argument(
    "--credentials",
    help=f"Path to OAuth credentials.json (default: {default_gmail_credentials_path()})",
)
app.global_argument(
    "--token",
    help=f"Path to token.json (default: {default_gmail_token_path()})",
)
app.global_argument("--refresh-token", help="OAuth refresh token to use instead of the token file")
app.global_argument("--verbose", action="store_true", help="Enable verbose logging")
app.global_argument("--log-file", help="Append JSON-lines audit records to this file")


def configure_logging(args) -> None:
    level = logging.DEBUG if getattr(args, "verbose", False) else logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT)


# --- auth command ---
@app.command("auth", help="Authenticate with Gmail and save the OAuth token")
@app.argument("--validate", action="store_true", help="Validate the existing token non-interactively")
@app.argument("--port", type=int, default=0, help="Local port for the OAuth callback (default: any free port)")
def cmd_auth(args) -> int:
    return run_auth(args)


# --- apply command ---
@app.command("apply", help="Replace all Gmail filters with the ones declared in YAML")
@app.argument("-f", "--file", required=True, help="Filters YAML document (- for stdin)")
@app.argument("--apply-to-existing", action="store_true", help="Also apply label changes to matching existing messages")
@app.argument("--dry-run", action="store_true", help="Show what would be deleted and created")
def cmd_apply(args) -> int:
    return run_filters_apply(args)


# --- get group ---
get_group = app.group("get", help="Get resources")


@get_group.command("filters", help="List existing Gmail filters", aliases=["filter"])
@get_group.argument("-o", "--output", choices=list(OUTPUT_FORMATS), default=OUTPUT_TEXT, help="Output format")
def cmd_get_filters(args) -> int:
    return run_filters_get(args)


# --- delete command ---
@app.command("delete", help="Delete one Gmail filter by id")
@app.argument("--id", required=True, help="Gmail filter id")
def cmd_delete(args) -> int:
    return run_filters_delete(args)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the gmailfilters CLI."""
    return app.run(argv, setup=configure_logging)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
