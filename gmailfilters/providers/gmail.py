from __future__ import annotations

from typing import Any, Dict, List, Optional

from .base import BaseProvider
from ..gmail_api import GmailClient


class GmailProvider(BaseProvider):
    _provider_name = "gmail"

    def __init__(self, *, credentials_path: str, token_path: str, refresh_token: Optional[str] = None) -> None:
        super().__init__(credentials_path=credentials_path, token_path=token_path)
        self._client = GmailClient(credentials_path=credentials_path, token_path=token_path, refresh_token=refresh_token)

    # ---- lifecycle ----
    def authenticate(self) -> None:
        self._client.authenticate()

    # ---- labels ----
    def list_labels(self) -> List[Dict[str, Any]]:
        return self._client.list_labels()

    def create_label(self, **body: Any) -> Dict[str, Any]:
        return self._client.create_label(**body)

    # ---- filters ----
    def list_filters(self) -> List[Dict[str, Any]]:
        return self._client.list_filters()

    def create_filter(self, criteria: Dict[str, Any], action: Dict[str, Any]) -> Dict[str, Any]:
        return self._client.create_filter(criteria, action)

    def delete_filter(self, filter_id: str) -> None:
        self._client.delete_filter(filter_id)

    # ---- messages ----
    def list_message_ids(
        self,
        query: Optional[str] = None,
        label_ids: Optional[List[str]] = None,
        max_pages: Optional[int] = None,
        page_size: int = 500,
    ) -> List[str]:
        return self._client.list_message_ids(query=query, label_ids=label_ids, max_pages=max_pages, page_size=page_size)

    def batch_modify_messages(
        self,
        ids: List[str],
        add_label_ids: Optional[List[str]] = None,
        remove_label_ids: Optional[List[str]] = None,
    ) -> None:
        self._client.batch_modify_messages(ids, add_label_ids=add_label_ids, remove_label_ids=remove_label_ids)
