"""Thin Gmail API wrapper covering labels, filters and label batch updates.

Google client libraries are imported lazily so `--help` works without them.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, List, Optional

try:
    from google.auth.transport.requests import Request  # type: ignore
    from google.oauth2.credentials import Credentials  # type: ignore
    from google_auth_oauthlib.flow import InstalledAppFlow  # type: ignore
    from googleapiclient.discovery import build  # type: ignore
except ImportError:  # pragma: no cover - optional dependency
    Request = Credentials = InstalledAppFlow = build = None  # type: ignore

from core.cli_errors import AuthError

from .paging import chunked, gather_pages, paginate_gmail_messages

LOG = logging.getLogger(__name__)

SCOPES = [
    # Labels: list and create
    "https://www.googleapis.com/auth/gmail.labels",
    # Settings: filters list/create/delete
    "https://www.googleapis.com/auth/gmail.settings.basic",
    # Search and batch-modify messages when applying filters to existing mail
    "https://www.googleapis.com/auth/gmail.modify",
]

# messages.batchModify accepts at most this many ids per call
BATCH_MODIFY_LIMIT = 1000

DEFAULT_TOKEN_URI = "https://oauth2.googleapis.com/token"


def ensure_google_api() -> None:
    """Ensure optional Google API dependencies are present."""
    if Credentials is None or InstalledAppFlow is None or build is None or Request is None:
        raise RuntimeError(
            "Google API libraries not installed. Please `pip install google-api-python-client google-auth-httplib2 google-auth-oauthlib`."
        )


class GmailClient:
    def __init__(self, credentials_path: str, token_path: str, refresh_token: Optional[str] = None) -> None:
        self.credentials_path = os.path.expanduser(credentials_path)
        self.token_path = os.path.expanduser(token_path)
        self.refresh_token = refresh_token
        self.creds: Optional[Credentials] = None  # type: ignore
        self._service = None

    def authenticate(self, port: int = 0) -> None:
        """Load usable credentials, running the browser consent flow only when needed.

        With a refresh token the token file is neither read nor written.
        """
        ensure_google_api()

        if self.refresh_token:
            creds = self._credentials_from_refresh_token()
        else:
            creds = self._stored_credentials()
            if creds is None or not creds.valid:
                creds = self._run_consent_flow(port)
                self._save_token(creds)

        self.creds = creds
        self._service = build("gmail", "v1", credentials=self.creds)

    def validate_token(self) -> str:
        """Check the stored credentials without prompting; return the mailbox address."""
        ensure_google_api()
        if self.refresh_token:
            creds = self._credentials_from_refresh_token()
        else:
            if not os.path.exists(self.token_path):
                raise AuthError(
                    f"Token file not found: {self.token_path}",
                    hint="Run `gmailfilters auth` to sign in.",
                )
            creds = self._stored_credentials()
            if creds is None or not creds.valid:
                raise AuthError(
                    f"Gmail token invalid or expired: {self.token_path}",
                    hint="Run `gmailfilters auth` to sign in again.",
                )
        self.creds = creds
        self._service = build("gmail", "v1", credentials=self.creds)
        try:
            profile = self.get_profile()
        except Exception as exc:  # googleapiclient.errors.HttpError and transport errors
            raise AuthError(f"Gmail rejected the token: {exc}") from exc
        return profile.get("emailAddress", "")

    def _stored_credentials(self):
        if not os.path.exists(self.token_path):
            return None
        LOG.debug("reading OAuth token from %s", self.token_path)
        try:
            creds = Credentials.from_authorized_user_file(self.token_path, SCOPES)
        except ValueError as exc:
            LOG.warning("ignoring unreadable token file %s: %s", self.token_path, exc)
            return None
        if creds and creds.expired and getattr(creds, "refresh_token", None):
            try:
                creds.refresh(Request())
            except Exception as exc:  # google.auth.exceptions.RefreshError and transport errors
                LOG.warning("token refresh failed: %s", exc)
                return None
            self._save_token(creds)
        return creds

    def _run_consent_flow(self, port: int):
        if not os.path.exists(self.credentials_path):
            raise AuthError(
                f"OAuth client credentials not found: {self.credentials_path}",
                hint="Download an OAuth client (Desktop app) JSON from Google Cloud Console and pass --credentials.",
            )
        LOG.debug("reading OAuth client config from %s", self.credentials_path)
        flow = InstalledAppFlow.from_client_secrets_file(self.credentials_path, SCOPES)
        return flow.run_local_server(port=port)

    def _save_token(self, creds) -> None:
        token_dir = os.path.dirname(self.token_path)
        if token_dir:
            os.makedirs(token_dir, exist_ok=True)
        with open(self.token_path, "w", encoding="utf-8") as token:
            token.write(creds.to_json())

    def _credentials_from_refresh_token(self):
        if not os.path.exists(self.credentials_path):
            raise AuthError(
                f"OAuth client credentials not found: {self.credentials_path}",
                hint="A refresh token needs the OAuth client JSON it was issued for; pass --credentials.",
            )
        with open(self.credentials_path, "r", encoding="utf-8") as fh:
            info = json.load(fh)
        client = info.get("installed") or info.get("web") or {}
        creds = Credentials(
            token=None,
            refresh_token=self.refresh_token,
            token_uri=client.get("token_uri") or DEFAULT_TOKEN_URI,
            client_id=client.get("client_id"),
            client_secret=client.get("client_secret"),
            scopes=SCOPES,
        )
        LOG.debug("exchanging refresh token for an access token")
        try:
            creds.refresh(Request())
        except Exception as exc:  # google.auth.exceptions.RefreshError and transport errors
            raise AuthError(f"Refresh token rejected: {exc}", hint="Run `gmailfilters auth` for a new token.") from exc
        return creds

    @property
    def service(self):
        if not self._service:
            raise RuntimeError("GmailClient not authenticated. Call authenticate().")
        return self._service

    def get_profile(self) -> Dict[str, Any]:
        return self.service.users().getProfile(userId="me").execute()

    # --- Labels ---
    def list_labels(self) -> List[Dict[str, Any]]:
        resp = self.service.users().labels().list(userId="me").execute()
        return resp.get("labels", [])

    def create_label(self, name: str, **kwargs: Any) -> Dict[str, Any]:
        body: Dict[str, Any] = {"name": name}
        for k, v in kwargs.items():
            if k not in body:
                body[k] = v
        return self.service.users().labels().create(userId="me", body=body).execute()

    # --- Filters ---
    def list_filters(self) -> List[Dict[str, Any]]:
        resp = self.service.users().settings().filters().list(userId="me").execute()
        return resp.get("filter", resp.get("filters", []))

    def create_filter(self, criteria: Dict[str, Any], action: Dict[str, Any]) -> Dict[str, Any]:
        body = {"criteria": criteria, "action": action}
        return self.service.users().settings().filters().create(userId="me", body=body).execute()

    def delete_filter(self, filter_id: str) -> None:
        self.service.users().settings().filters().delete(userId="me", id=filter_id).execute()

    # --- Messages ---
    def list_message_ids(
        self,
        query: Optional[str] = None,
        label_ids: Optional[List[str]] = None,
        max_pages: Optional[int] = None,
        page_size: int = 500,
    ) -> List[str]:
        """List message IDs matching query/labels; all pages unless max_pages is set."""
        pages = paginate_gmail_messages(
            self.service.users().messages(), query=query, label_ids=label_ids, page_size=page_size
        )
        return gather_pages(pages, max_pages=max_pages)

    def batch_modify_messages(
        self,
        ids: List[str],
        add_label_ids: Optional[List[str]] = None,
        remove_label_ids: Optional[List[str]] = None,
    ) -> None:
        if not ids:
            return
        body: Dict[str, Any] = {}
        if add_label_ids:
            body["addLabelIds"] = add_label_ids
        if remove_label_ids:
            body["removeLabelIds"] = remove_label_ids
        msgs = self.service.users().messages()
        for group in chunked(ids, BATCH_MODIFY_LIMIT):
            msgs.batchModify(userId="me", body={"ids": group, **body}).execute()
