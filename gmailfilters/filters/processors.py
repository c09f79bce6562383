"""Processors for filters pipelines."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List

from core.cli_errors import ExitCode
from core.pipeline import Processor, ResultEnvelope

from ..errors import InvalidActionValue
from ..models import RESOURCE_KIND_FILTER, Filter
from ..query import render_action, render_criteria
from ..translate import validate_action
from .consumers import FiltersApplyPayload, FiltersGetPayload

OUTPUT_TEXT = "text"
OUTPUT_WIDE = "wide"
OUTPUT_YAML = "yaml"
OUTPUT_FORMATS = (OUTPUT_TEXT, OUTPUT_WIDE, OUTPUT_YAML)

TEXT_HEADER = ("MATCHES", "ACTION")
ABBREV_WIDTH = 40


def abbreviate(text: str, width: int = ABBREV_WIDTH) -> str:
    if len(text) < width:
        return text
    return text[: width - 4] + "..."


@dataclass
class FiltersApplyPlan:
    filters: List[Filter]
    apply_to_existing: bool
    dry_run: bool


@dataclass
class FiltersGetResult:
    output: str
    rows: List[tuple]
    document: Dict[str, Any]


class FiltersApplyProcessor(Processor[FiltersApplyPayload, ResultEnvelope[FiltersApplyPlan]]):
    """Validate every declared action before anything touches the mailbox."""

    def process(self, payload: FiltersApplyPayload) -> ResultEnvelope[FiltersApplyPlan]:
        for index, flt in enumerate(payload.filters, start=1):
            try:
                validate_action(flt.action)
            except InvalidActionValue as exc:
                return ResultEnvelope.error(
                    f"filter #{index} ({flt}): {exc}",
                    code=int(ExitCode.USAGE),
                    index=index,
                    field=exc.field,
                    value=exc.value,
                )
        return ResultEnvelope.success(
            FiltersApplyPlan(
                filters=list(payload.filters),
                apply_to_existing=payload.apply_to_existing,
                dry_run=payload.dry_run,
            )
        )


class FiltersGetProcessor(Processor[FiltersGetPayload, ResultEnvelope[FiltersGetResult]]):
    def process(self, payload: FiltersGetPayload) -> ResultEnvelope[FiltersGetResult]:
        if payload.output not in OUTPUT_FORMATS:
            return ResultEnvelope.error(
                f"unknown output format: {payload.output}",
                code=int(ExitCode.USAGE),
            )
        rows = [(render_criteria(f.criteria), render_action(f.action)) for f in payload.filters]
        if payload.output == OUTPUT_TEXT:
            rows = [(abbreviate(m), abbreviate(a)) for m, a in rows]
        document = {
            "kind": RESOURCE_KIND_FILTER,
            "filters": [f.to_dict() for f in payload.filters],
        }
        return ResultEnvelope.success(FiltersGetResult(output=payload.output, rows=rows, document=document))
