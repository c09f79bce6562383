"""Producers for filters pipelines."""
from __future__ import annotations

import logging
from typing import List, Optional, TextIO

from core.cli_output import OutputConfig, OutputWriter
from core.pipeline import Producer, ResultEnvelope
from core.yamlio import dump_stream

from ..applog import NullAppLogger
from ..errors import FilterOperationError
from ..models import Filter
from ..session import MailboxSession
from .processors import OUTPUT_YAML, TEXT_HEADER, FiltersApplyPlan, FiltersGetResult

LOG = logging.getLogger(__name__)


class FiltersApplyProducer(Producer[ResultEnvelope[FiltersApplyPlan]]):
    """Replace the mailbox's filters with the declared ones.

    Existing filters are deleted first, then each declared filter is created
    in document order. A remote failure stops the run with a
    FilterOperationError naming the filter and the step that failed.
    """

    def __init__(self, session: MailboxSession, *, app_logger=None, log_session_id: str = ""):
        self.session = session
        self.app_logger = app_logger or NullAppLogger()
        self.log_session_id = log_session_id

    def produce(self, result: ResultEnvelope[FiltersApplyPlan]) -> None:
        if not result.ok() or not result.payload:
            print("Filters apply failed.")
            return
        plan = result.payload
        if plan.dry_run:
            self._print_plan(plan)
            return

        print("Delete all filters...")
        deleted = self._delete_existing()
        created = 0
        touched = 0
        for index, flt in enumerate(plan.filters, start=1):
            print(f"Create filter: {flt}")
            self._run(index, flt, "create_filter", lambda f=flt: self.session.create_filter(f))
            created += 1
            self.app_logger.info(self.log_session_id, {"created": index, "filter": str(flt)})
            if plan.apply_to_existing:
                count = self._run(index, flt, "apply_to_existing", lambda f=flt: self.session.apply_to_existing(f))
                touched += count or 0
                print(f"  Applied to {count or 0} existing messages.")
        summary = f"Filters apply complete. Deleted: {deleted}, Created: {created}."
        if plan.apply_to_existing:
            summary += f" Messages updated: {touched}."
        print(summary)

    def _list_existing(self) -> List[Filter]:
        try:
            return self.session.list_filters()
        except Exception as exc:
            self.app_logger.error(self.log_session_id, "list_filters failed", {"error": str(exc)})
            raise FilterOperationError("list_filters", "", exc) from exc

    def _delete_existing(self) -> int:
        existing = self._list_existing()
        for index, flt in enumerate(existing, start=1):
            LOG.debug("deleting existing filter %s: %s", flt.id, flt)
            self._run(index, flt, "delete_filter", lambda f=flt: self.session.delete_filter(f.id))
        return len(existing)

    def _run(self, index: int, flt: Filter, operation: str, call):
        try:
            return call()
        except FilterOperationError:
            raise
        except Exception as exc:
            # a label still missing from the cache means ensure_label failed
            if operation != "delete_filter" and flt.action.add_label and flt.action.add_label not in self.session.labels:
                operation = "create_label"
            self.app_logger.error(
                self.log_session_id,
                f"{operation} failed",
                {"index": index, "filter": str(flt), "error": str(exc)},
            )
            raise FilterOperationError(operation, str(flt), exc, index=index) from exc

    def _print_plan(self, plan: FiltersApplyPlan) -> None:
        existing = self._list_existing()
        print(f"Would delete {len(existing)} existing filter(s):")
        for flt in existing:
            print(f"  [{flt.id}] {flt}")
        print(f"Would create {len(plan.filters)} filter(s):")
        for flt in plan.filters:
            print(f"  {flt}")
        if plan.apply_to_existing:
            print("Would apply each filter's labels to matching existing messages.")


class FiltersGetProducer(Producer[ResultEnvelope[FiltersGetResult]]):
    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream

    def produce(self, result: ResultEnvelope[FiltersGetResult]) -> None:
        writer = OutputWriter(OutputConfig(file=self.stream))
        if not result.ok() or not result.payload:
            writer.print("Listing filters failed.")
            return
        payload = result.payload
        if payload.output == OUTPUT_YAML:
            dump_stream(payload.document, writer.config.stream)
            return
        writer.print_table(TEXT_HEADER, payload.rows)
