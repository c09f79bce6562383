"""Consumers for filters pipelines."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, List

from core.cli_errors import ConfigError, UsageError
from core.pipeline import Consumer
from core.yamlio import load_config

from ..context import FiltersContext
from ..models import RESOURCE_KIND_FILTER, Filter


@dataclass
class FiltersApplyPayload:
    filters: List[Filter]
    source: str
    apply_to_existing: bool
    dry_run: bool


@dataclass
class FiltersGetPayload:
    filters: List[Filter]
    output: str


@dataclass
class FiltersDeletePayload:
    filter_id: str


def load_filters_document(doc: Any, *, source: str = "") -> List[Filter]:
    """Decode a ``{kind: Filter, filters: [...]}`` document into filters."""
    where = f" in {source}" if source else ""
    if not isinstance(doc, dict) or not doc:
        raise ConfigError(
            f"No filters document found{where}.",
            hint="Expected a mapping with 'kind: Filter' and a 'filters' list.",
        )
    kind = doc.get("kind")
    if kind != RESOURCE_KIND_FILTER:
        raise ConfigError(f"Unsupported kind{where}: {kind!r} (expected {RESOURCE_KIND_FILTER!r}).")
    entries = doc.get("filters")
    if not isinstance(entries, list):
        raise ConfigError(f"Document{where} is missing a 'filters' list.")

    filters: List[Filter] = []
    for i, entry in enumerate(entries, start=1):
        if not isinstance(entry, dict):
            raise ConfigError(f"filters[{i}]{where} must be a mapping, got {type(entry).__name__}.")
        try:
            filters.append(Filter.from_dict(entry))
        except ValueError as exc:
            raise ConfigError(f"filters[{i}]{where}: {exc}") from exc
    return filters


class FiltersApplyConsumer(Consumer[FiltersApplyPayload]):
    """Load the declarative YAML document for apply."""

    def __init__(self, context: FiltersContext):
        self.context = context

    def consume(self) -> FiltersApplyPayload:
        source = self.context.arg("file") or ""
        if not source:
            raise UsageError("No filters document given.", hint="Pass -f FILE, or -f - to read stdin.")
        if source != "-" and not Path(source).expanduser().exists():
            raise ConfigError(f"Filters document not found: {source}")
        doc = load_config(str(Path(source).expanduser()) if source != "-" else source)
        return FiltersApplyPayload(
            filters=load_filters_document(doc, source=source),
            source=source,
            apply_to_existing=bool(self.context.arg("apply_to_existing", False)),
            dry_run=bool(self.context.arg("dry_run", False)),
        )


class FiltersGetConsumer(Consumer[FiltersGetPayload]):
    """Fetch the mailbox's existing filters."""

    def __init__(self, context: FiltersContext):
        self.context = context

    def consume(self) -> FiltersGetPayload:
        session = self.context.get_session()
        return FiltersGetPayload(
            filters=session.list_filters(),
            output=self.context.arg("output") or "text",
        )


class FiltersDeleteConsumer(Consumer[FiltersDeletePayload]):
    def __init__(self, context: FiltersContext):
        self.context = context

    def consume(self) -> FiltersDeletePayload:
        return FiltersDeletePayload(filter_id=(self.context.arg("id") or "").strip())
