"""Gmail reserved label ids and the fixed action vocabularies."""

from __future__ import annotations

from typing import Dict

IMPORTANT_UNSET = ""
IMPORTANT_ALWAYS = "always"
IMPORTANT_NEVER = "never"

# Reserved label ids with a fixed meaning in filter actions
LABEL_TRASH = "TRASH"
LABEL_IMPORTANT = "IMPORTANT"
LABEL_STARRED = "STARRED"
LABEL_INBOX = "INBOX"
LABEL_UNREAD = "UNREAD"
LABEL_SPAM = "SPAM"
CATEGORY_PERSONAL = "CATEGORY_PERSONAL"
CATEGORY_SOCIAL = "CATEGORY_SOCIAL"
CATEGORY_UPDATES = "CATEGORY_UPDATES"
CATEGORY_FORUMS = "CATEGORY_FORUMS"
CATEGORY_PROMOTIONS = "CATEGORY_PROMOTIONS"

# Case-sensitive synonyms accepted in documents
CATEGORY_SYNONYMS: Dict[str, str] = {
    "primary": CATEGORY_PERSONAL,
    "personal": CATEGORY_PERSONAL,
    "mail": CATEGORY_PERSONAL,
    "social": CATEGORY_SOCIAL,
    "update": CATEGORY_UPDATES,
    "updates": CATEGORY_UPDATES,
    "new": CATEGORY_UPDATES,
    "forum": CATEGORY_FORUMS,
    "forums": CATEGORY_FORUMS,
    "promotion": CATEGORY_PROMOTIONS,
    "promotions": CATEGORY_PROMOTIONS,
}

# Canonical name emitted when reading a category id back
CATEGORY_NAMES: Dict[str, str] = {
    CATEGORY_PERSONAL: "primary",
    CATEGORY_SOCIAL: "social",
    CATEGORY_UPDATES: "updates",
    CATEGORY_FORUMS: "forums",
    CATEGORY_PROMOTIONS: "promotions",
}
