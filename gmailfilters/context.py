"""Filters CLI application context."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from core.context import AppContext

from .applog import make_app_logger
from .config_resolver import resolve_paths, resolve_refresh_token
from .providers import get_provider
from .session import MailboxSession


@dataclass
class FiltersContext(AppContext):
    session: Optional[MailboxSession] = field(default=None, init=False)

    @classmethod
    def from_args(cls, args: object) -> "FiltersContext":
        return cls(root=Path.cwd(), args=args)

    def get_session(self) -> MailboxSession:
        """Authenticate once and return this invocation's mailbox session."""
        if self.session is not None:
            return self.session
        creds_path, token_path = resolve_paths(
            arg_credentials=self.arg("credentials"),
            arg_token=self.arg("token"),
        )
        client = get_provider(
            "gmail",
            credentials_path=creds_path,
            token_path=token_path,
            refresh_token=resolve_refresh_token(self.arg("refresh_token")),
        )
        client.authenticate()
        self.session = MailboxSession.open(client)
        return self.session

    def app_logger(self):
        return make_app_logger(self.arg("log_file"))
