"""Label name/id cache and on-demand label creation."""
from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Iterable, Optional, Tuple, Union

LOG = logging.getLogger(__name__)

LabelEntry = Union[Tuple[str, str], Dict[str, Any]]


def _label_pair(entry: LabelEntry) -> Tuple[str, str]:
    if isinstance(entry, dict):
        return str(entry.get("id") or ""), str(entry.get("name") or "")
    label_id, name = entry
    return str(label_id), str(name)


class LabelCache:
    """Bidirectional label ID <-> name mapping for one mailbox session.

    Both dicts sit behind a single lock, so readers on other threads never
    see ``id_to_name`` and ``name_to_id`` disagree.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._id_to_name: Dict[str, str] = {}
        self._name_to_id: Dict[str, str] = {}

    @classmethod
    def from_labels(cls, labels: Iterable[LabelEntry]) -> "LabelCache":
        cache = cls()
        cache.load(labels)
        return cache

    def load(self, labels: Iterable[LabelEntry]) -> None:
        """Replace the contents with a full label enumeration.

        Accepts ``(id, name)`` pairs or Gmail label resources.
        """
        id_to_name: Dict[str, str] = {}
        name_to_id: Dict[str, str] = {}
        for entry in labels or []:
            label_id, name = _label_pair(entry)
            if not label_id or not name:
                continue
            _link(id_to_name, name_to_id, label_id, name)
        with self._lock:
            self._id_to_name = id_to_name
            self._name_to_id = name_to_id
        LOG.debug("label cache loaded with %d labels", len(id_to_name))

    def name_for(self, label_id: str) -> Optional[str]:
        with self._lock:
            return self._id_to_name.get(label_id)

    def id_for(self, name: str) -> Optional[str]:
        with self._lock:
            return self._name_to_id.get(name)

    def insert(self, label_id: str, name: str) -> None:
        with self._lock:
            _link(self._id_to_name, self._name_to_id, label_id, name)

    def snapshot(self) -> Dict[str, str]:
        """Return a copy of the id -> name mapping."""
        with self._lock:
            return dict(self._id_to_name)

    def __len__(self) -> int:
        with self._lock:
            return len(self._id_to_name)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._name_to_id


def _link(id_to_name: Dict[str, str], name_to_id: Dict[str, str], label_id: str, name: str) -> None:
    # Drop stale partners so the two maps stay a bijection
    old_name = id_to_name.pop(label_id, None)
    if old_name is not None and name_to_id.get(old_name) == label_id:
        del name_to_id[old_name]
    old_id = name_to_id.pop(name, None)
    if old_id is not None and id_to_name.get(old_id) == name:
        del id_to_name[old_id]
    id_to_name[label_id] = name
    name_to_id[name] = label_id


class LabelMaterializer:
    """Make sure a named label exists remotely, creating it when missing.

    Two concurrent calls for the same absent name may both create it; the
    remote service is left to decide what a duplicate name means.
    """

    def __init__(self, client: Any, cache: LabelCache) -> None:
        self.client = client
        self.cache = cache

    def ensure_label(self, name: str) -> str:
        if not name:
            raise ValueError("label name must be non-empty")
        existing = self.cache.id_for(name)
        if existing:
            return existing
        LOG.debug("creating label %r", name)
        created = self.client.create_label(name=name)
        label_id = str(created.get("id") or "")
        if not label_id:
            raise RuntimeError(f"create_label returned no id for {name!r}")
        self.cache.insert(label_id, str(created.get("name") or name))
        return label_id
