from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class BaseProvider(ABC):
    """Remote mailbox surface the filter session needs.

    Errors from any call (network, auth, quota) propagate to the caller as-is.
    """

    _provider_name: str = "mail"

    def __init__(self, *, credentials_path: str, token_path: str) -> None:
        self.credentials_path = credentials_path
        self.token_path = token_path

    # ---- lifecycle ----
    @abstractmethod
    def authenticate(self) -> None:
        ...

    # ---- labels ----
    @abstractmethod
    def list_labels(self) -> List[Dict[str, Any]]:
        ...

    @abstractmethod
    def create_label(self, **body: Any) -> Dict[str, Any]:
        ...

    # ---- filters ----
    @abstractmethod
    def list_filters(self) -> List[Dict[str, Any]]:
        ...

    @abstractmethod
    def create_filter(self, criteria: Dict[str, Any], action: Dict[str, Any]) -> Dict[str, Any]:
        ...

    @abstractmethod
    def delete_filter(self, filter_id: str) -> None:
        ...

    # ---- messages ----
    @abstractmethod
    def list_message_ids(
        self,
        query: Optional[str] = None,
        label_ids: Optional[List[str]] = None,
        max_pages: Optional[int] = None,
        page_size: int = 500,
    ) -> List[str]:
        ...

    @abstractmethod
    def batch_modify_messages(
        self,
        ids: List[str],
        add_label_ids: Optional[List[str]] = None,
        remove_label_ids: Optional[List[str]] = None,
    ) -> None:
        ...
