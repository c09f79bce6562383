"""Translate declarative filters to and from Gmail filter resources.

Reserved label ids (TRASH, IMPORTANT, INBOX, CATEGORY_*, ...) encode actions
and are handled explicitly; every other id is a user label resolved through
the session's LabelCache.
"""
from __future__ import annotations

from typing import Any, Dict, List

from .constants import (
    CATEGORY_NAMES,
    CATEGORY_SYNONYMS,
    IMPORTANT_ALWAYS,
    IMPORTANT_NEVER,
    IMPORTANT_UNSET,
    LABEL_IMPORTANT,
    LABEL_INBOX,
    LABEL_SPAM,
    LABEL_STARRED,
    LABEL_TRASH,
    LABEL_UNREAD,
)
from .errors import InvalidActionValue
from .labels import LabelCache
from .models import Filter, FilterAction, FilterCriteria

SIZE_LARGER = "larger"
SIZE_SMALLER = "smaller"


def validate_action(action: FilterAction) -> None:
    """Raise InvalidActionValue for an unknown important/category literal."""
    _important_ids(action.important)
    _category_id(action.category)


def _important_ids(important: str) -> tuple[List[str], List[str]]:
    if important == IMPORTANT_UNSET:
        return [], []
    if important == IMPORTANT_ALWAYS:
        return [LABEL_IMPORTANT], []
    if important == IMPORTANT_NEVER:
        return [], [LABEL_IMPORTANT]
    raise InvalidActionValue("important", important)


def _category_id(category: str) -> str:
    if not category:
        return ""
    try:
        return CATEGORY_SYNONYMS[category]
    except KeyError:
        raise InvalidActionValue("category", category) from None


def criteria_to_wire(criteria: FilterCriteria) -> Dict[str, Any]:
    wire: Dict[str, Any] = {}
    for key, value in (
        ("from", criteria.from_),
        ("to", criteria.to),
        ("subject", criteria.subject),
        ("query", criteria.query),
        ("negatedQuery", criteria.negated_query),
    ):
        if value:
            wire[key] = value
    if criteria.has_attachment:
        wire["hasAttachment"] = True
    if criteria.exclude_chats:
        wire["excludeChats"] = True
    if criteria.larger_than > 0:
        wire["sizeComparison"] = SIZE_LARGER
        wire["size"] = int(criteria.larger_than)
    elif criteria.smaller_than > 0:
        wire["sizeComparison"] = SIZE_SMALLER
        wire["size"] = int(criteria.smaller_than)
    return wire


def criteria_from_wire(wire: Dict[str, Any]) -> FilterCriteria:
    w = wire or {}
    criteria = FilterCriteria(
        from_=w.get("from") or "",
        to=w.get("to") or "",
        subject=w.get("subject") or "",
        query=w.get("query") or "",
        negated_query=w.get("negatedQuery") or "",
        has_attachment=bool(w.get("hasAttachment")),
        exclude_chats=bool(w.get("excludeChats")),
    )
    comparison = w.get("sizeComparison")
    size = int(w.get("size") or 0)
    if comparison == SIZE_LARGER:
        criteria.larger_than = size
    elif comparison == SIZE_SMALLER:
        criteria.smaller_than = size
    return criteria


class FilterTranslator:
    def __init__(self, cache: LabelCache) -> None:
        self.cache = cache

    def to_wire(self, flt: Filter) -> Dict[str, Any]:
        """Build a Gmail filter body ``{"criteria": ..., "action": ...}``.

        ``action.add_label`` must already be in the cache (see
        LabelMaterializer); an unknown name resolves to an empty id.
        """
        action = flt.action
        add_ids: List[str] = []
        remove_ids: List[str] = []

        if action.add_label:
            add_ids.append(self.cache.id_for(action.add_label) or "")
        if action.delete:
            add_ids.append(LABEL_TRASH)
        imp_add, imp_remove = _important_ids(action.important)
        add_ids.extend(imp_add)
        remove_ids.extend(imp_remove)
        if action.star:
            add_ids.append(LABEL_STARRED)
        category_id = _category_id(action.category)
        if category_id:
            add_ids.append(category_id)
        if action.archive:
            remove_ids.append(LABEL_INBOX)
        if action.mark_as_read:
            remove_ids.append(LABEL_UNREAD)
        if action.never_mark_as_spam:
            remove_ids.append(LABEL_SPAM)

        wire_action: Dict[str, Any] = {}
        if action.forward_to:
            wire_action["forward"] = action.forward_to
        if add_ids:
            wire_action["addLabelIds"] = add_ids
        if remove_ids:
            wire_action["removeLabelIds"] = remove_ids
        return {"criteria": criteria_to_wire(flt.criteria), "action": wire_action}

    def from_wire(self, wire: Dict[str, Any]) -> Filter:
        """Decode a Gmail filter resource; never fails on well-formed input."""
        w = wire or {}
        act = w.get("action") or {}
        action = FilterAction(forward_to=act.get("forward") or "")

        for label_id in act.get("addLabelIds") or []:
            if label_id == LABEL_TRASH:
                action.delete = True
            elif label_id == LABEL_IMPORTANT:
                action.important = IMPORTANT_ALWAYS
            elif label_id == LABEL_STARRED:
                action.star = True
            elif label_id in CATEGORY_NAMES:
                action.category = CATEGORY_NAMES[label_id]
            else:
                # single-label model: the last user label wins
                action.add_label = self.cache.name_for(label_id) or ""

        for label_id in act.get("removeLabelIds") or []:
            if label_id == LABEL_INBOX:
                action.archive = True
            elif label_id == LABEL_UNREAD:
                action.mark_as_read = True
            elif label_id == LABEL_SPAM:
                action.never_mark_as_spam = True
            elif label_id == LABEL_IMPORTANT:
                action.important = IMPORTANT_NEVER

        return Filter(
            criteria=criteria_from_wire(w.get("criteria") or {}),
            action=action,
            id=str(w.get("id") or ""),
        )
