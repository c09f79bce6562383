"""Render filters as Gmail search syntax and plain-English action summaries.

The output is for display (and for searching existing messages); it is never
parsed back into a Filter.
"""
from __future__ import annotations

import re
from typing import TYPE_CHECKING, List

from .constants import IMPORTANT_ALWAYS, IMPORTANT_NEVER

if TYPE_CHECKING:  # pragma: no cover
    from .models import Filter, FilterAction, FilterCriteria

_BARE_TOKEN = re.compile(r"[A-Za-z0-9_]+")


def _field_clause(name: str, value: str) -> str:
    if _BARE_TOKEN.fullmatch(value):
        return f"{name}:{value}"
    return f"{name}:({value})"


def render_criteria(criteria: "FilterCriteria") -> str:
    parts: List[str] = []
    if criteria.from_:
        parts.append(_field_clause("from", criteria.from_))
    if criteria.to:
        parts.append(_field_clause("to", criteria.to))
    if criteria.subject:
        parts.append(_field_clause("subject", criteria.subject))
    if criteria.query:
        parts.append(criteria.query)
    if criteria.negated_query:
        neg = criteria.negated_query
        parts.append(f"-{neg}" if _BARE_TOKEN.fullmatch(neg) else f"-{{{neg}}}")
    if criteria.has_attachment:
        parts.append("has:attachment")
    if criteria.exclude_chats:
        parts.append("-in:chats")
    # larger wins when both sizes are set
    if criteria.larger_than > 0:
        parts.append(f"larger:{int(criteria.larger_than)}")
    elif criteria.smaller_than > 0:
        parts.append(f"smaller:{int(criteria.smaller_than)}")
    return " ".join(parts)


def render_action(action: "FilterAction") -> str:
    parts: List[str] = []
    if action.archive:
        parts.append("Skip Inbox")
    if action.mark_as_read:
        parts.append("Mark as read")
    if action.star:
        parts.append("Star it")
    if action.add_label:
        parts.append(f'Apply label "{action.add_label}"')
    if action.forward_to:
        parts.append(f"Forward to {action.forward_to}")
    if action.delete:
        parts.append("Delete it")
    if action.never_mark_as_spam:
        parts.append("Never send it to Spam")
    if action.important == IMPORTANT_ALWAYS:
        parts.append("Mark it as important")
    elif action.important == IMPORTANT_NEVER:
        parts.append("Never mark it as important")
    if action.category:
        parts.append(f"Categorize as {action.category}")
    return ", ".join(parts)


def render_filter(flt: "Filter") -> str:
    return f"{render_criteria(flt.criteria)} => {render_action(flt.action)}"
