"""Per-mailbox session tying a transport to its own label cache."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from .labels import LabelCache, LabelMaterializer
from .models import Filter
from .paging import chunked
from .providers.base import BaseProvider
from .query import render_criteria
from .translate import FilterTranslator

LOG = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 1000


class MailboxSession:
    """Filter operations for one authenticated mailbox.

    The label cache belongs to this session alone; build one session per
    mailbox rather than sharing caches.
    """

    def __init__(self, client: BaseProvider, cache: Optional[LabelCache] = None) -> None:
        self.client = client
        self.labels = cache if cache is not None else LabelCache()
        self.materializer = LabelMaterializer(client, self.labels)
        self.translator = FilterTranslator(self.labels)

    @classmethod
    def open(cls, client: BaseProvider) -> "MailboxSession":
        session = cls(client)
        session.refresh_labels()
        return session

    def refresh_labels(self) -> None:
        LOG.debug("listing labels")
        self.labels.load(self.client.list_labels())

    def list_filters(self) -> List[Filter]:
        LOG.debug("listing filters")
        return [self.translator.from_wire(f) for f in self.client.list_filters()]

    def create_filter(self, flt: Filter) -> Dict[str, Any]:
        if flt.action.add_label:
            self.materializer.ensure_label(flt.action.add_label)
        wire = self.translator.to_wire(flt)
        LOG.debug("creating filter %s", wire)
        return self.client.create_filter(wire["criteria"], wire["action"])

    def delete_filter(self, filter_id: str) -> None:
        if not filter_id:
            raise ValueError("id must be non-empty")
        LOG.debug("deleting filter %s", filter_id)
        self.client.delete_filter(filter_id)

    def delete_all_filters(self) -> int:
        filters = self.list_filters()
        for flt in filters:
            self.delete_filter(flt.id)
        return len(filters)

    def apply_to_existing(self, flt: Filter, *, page_size: int = 500, batch_size: int = DEFAULT_BATCH_SIZE) -> int:
        """Apply the filter's label changes to messages already in the mailbox.

        Forwarding is never applied retroactively. Returns the number of
        messages modified.
        """
        query = render_criteria(flt.criteria)
        if not query:
            LOG.debug("skipping apply-to-existing for filter without criteria")
            return 0
        if flt.action.add_label:
            self.materializer.ensure_label(flt.action.add_label)
        action = self.translator.to_wire(flt)["action"]
        add_ids = [x for x in action.get("addLabelIds") or [] if x]
        remove_ids = list(action.get("removeLabelIds") or [])
        if not add_ids and not remove_ids:
            return 0
        ids = self.client.list_message_ids(query=query, page_size=page_size)
        LOG.debug("query %r matched %d messages", query, len(ids))
        for group in chunked(ids, batch_size):
            self.client.batch_modify_messages(group, add_label_ids=add_ids, remove_label_ids=remove_ids)
        return len(ids)
