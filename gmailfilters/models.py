"""Declarative filter model (criteria + action) used by YAML documents."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .constants import IMPORTANT_UNSET
from .query import render_filter

RESOURCE_KIND_FILTER = "Filter"

# Document key -> attribute name. Attribute order is the document order.
_CRITERIA_KEYS = {
    "from": "from_",
    "to": "to",
    "subject": "subject",
    "query": "query",
    "negated_query": "negated_query",
    "larger_than": "larger_than",
    "smaller_than": "smaller_than",
    "has_attachment": "has_attachment",
    "exclude_chats": "exclude_chats",
}

_ACTION_KEYS = {
    "archive": "archive",
    "mark_as_read": "mark_as_read",
    "star": "star",
    "add_label": "add_label",
    "forward_to": "forward_to",
    "delete": "delete",
    "never_mark_as_spam": "never_mark_as_spam",
    "important": "important",
    "category": "category",
}


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _as_size(key: str, value: Any) -> int:
    if value in (None, ""):
        return 0
    if isinstance(value, bool):
        raise ValueError(f"criteria.{key} must be a byte count, got {value!r}")
    try:
        size = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"criteria.{key} must be a byte count, got {value!r}") from None
    if size < 0:
        raise ValueError(f"criteria.{key} must be non-negative, got {size}")
    return size


def _as_bool(key: str, value: Any) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ValueError(f"{key} must be true or false, got {value!r}")
    return value


def _compact(d: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in d.items() if v not in (None, "", 0, False)}


@dataclass
class FilterCriteria:
    from_: str = ""
    to: str = ""
    subject: str = ""
    query: str = ""
    negated_query: str = ""
    larger_than: int = 0
    smaller_than: int = 0
    has_attachment: bool = False
    exclude_chats: bool = False

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "FilterCriteria":
        d = data or {}
        return cls(
            from_=_as_str(d.get("from")),
            to=_as_str(d.get("to")),
            subject=_as_str(d.get("subject")),
            query=_as_str(d.get("query")),
            negated_query=_as_str(d.get("negated_query")),
            larger_than=_as_size("larger_than", d.get("larger_than")),
            smaller_than=_as_size("smaller_than", d.get("smaller_than")),
            has_attachment=_as_bool("criteria.has_attachment", d.get("has_attachment")),
            exclude_chats=_as_bool("criteria.exclude_chats", d.get("exclude_chats")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return _compact({key: getattr(self, attr) for key, attr in _CRITERIA_KEYS.items()})


@dataclass
class FilterAction:
    archive: bool = False
    mark_as_read: bool = False
    star: bool = False
    add_label: str = ""
    forward_to: str = ""
    delete: bool = False
    never_mark_as_spam: bool = False
    important: str = IMPORTANT_UNSET
    category: str = ""

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "FilterAction":
        d = data or {}
        return cls(
            archive=_as_bool("action.archive", d.get("archive")),
            mark_as_read=_as_bool("action.mark_as_read", d.get("mark_as_read")),
            star=_as_bool("action.star", d.get("star")),
            add_label=_as_str(d.get("add_label")),
            forward_to=_as_str(d.get("forward_to")),
            delete=_as_bool("action.delete", d.get("delete")),
            never_mark_as_spam=_as_bool("action.never_mark_as_spam", d.get("never_mark_as_spam")),
            important=_as_str(d.get("important")),
            category=_as_str(d.get("category")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return _compact({key: getattr(self, attr) for key, attr in _ACTION_KEYS.items()})


@dataclass
class Filter:
    """A declarative rule: match criteria plus the action to take.

    ``id`` is only set on filters decoded from the remote service and is used
    for deletion; it takes no part in equality.
    """

    criteria: FilterCriteria = field(default_factory=FilterCriteria)
    action: FilterAction = field(default_factory=FilterAction)
    id: str = field(default="", compare=False)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Filter":
        d = data or {}
        return cls(
            criteria=FilterCriteria.from_dict(d.get("criteria")),
            action=FilterAction.from_dict(d.get("action")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"criteria": self.criteria.to_dict(), "action": self.action.to_dict()}

    def __str__(self) -> str:
        return render_filter(self)
