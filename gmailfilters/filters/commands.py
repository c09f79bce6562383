"""Orchestration helpers for filters commands."""
from __future__ import annotations

import time

from core.cli_errors import UsageError

from ..context import FiltersContext
from .consumers import FiltersApplyConsumer, FiltersDeleteConsumer, FiltersGetConsumer
from .processors import FiltersApplyProcessor, FiltersGetProcessor
from .producers import FiltersApplyProducer, FiltersGetProducer


def run_filters_apply(args) -> int:
    context = FiltersContext.from_args(args)
    payload = FiltersApplyConsumer(context).consume()

    envelope = FiltersApplyProcessor().process(payload)
    if not envelope.ok():
        diagnostics = envelope.diagnostics or {}
        raise UsageError(
            diagnostics.get("message", "Filters validation failed."),
            hint="No filters were changed.",
        )

    app_logger = context.app_logger()
    sid = app_logger.start("apply", [payload.source])
    started = time.time()
    try:
        producer = FiltersApplyProducer(
            context.get_session(),
            app_logger=app_logger,
            log_session_id=sid,
        )
        producer.produce(envelope)
    except Exception as exc:
        app_logger.end(sid, status="error", duration_ms=(time.time() - started) * 1000, error=str(exc))
        raise
    app_logger.end(sid, status="ok", duration_ms=(time.time() - started) * 1000)
    return 0


def run_filters_get(args) -> int:
    context = FiltersContext.from_args(args)
    payload = FiltersGetConsumer(context).consume()
    envelope = FiltersGetProcessor().process(payload)
    FiltersGetProducer().produce(envelope)
    return envelope.exit_code()


def run_filters_delete(args) -> int:
    context = FiltersContext.from_args(args)
    payload = FiltersDeleteConsumer(context).consume()
    if not payload.filter_id:
        raise UsageError("Filter id is required.", hint="Pass --id with the Gmail filter id.")
    context.get_session().delete_filter(payload.filter_id)
    print(f"Deleted filter: id={payload.filter_id}")
    return 0
