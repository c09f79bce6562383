"""Errors raised while translating and applying filters."""
from __future__ import annotations

from typing import Optional

from core.cli_errors import CLIError, ExitCode


class InvalidActionValue(ValueError):
    """An action field holds a literal outside its fixed vocabulary."""

    def __init__(self, field: str, value: str) -> None:
        self.field = field
        self.value = value
        super().__init__(f"unknown action.{field} value: {value}")


class FilterOperationError(CLIError):
    """A remote operation failed for one filter of a batch.

    Names the filter and the operation so the operator can retry that step.
    """

    def __init__(
        self,
        operation: str,
        filter_text: str,
        cause: BaseException,
        *,
        index: Optional[int] = None,
    ) -> None:
        if index is None and not filter_text:
            # a mailbox-wide step such as listing the existing filters
            message = f"{operation} failed: {cause}"
            hint = "Fix the cause and re-run; no filters were changed."
        else:
            where = f"filter #{index}" if index is not None else "filter"
            message = f"{operation} failed for {where} ({filter_text}): {cause}"
            hint = "Fix the cause and re-run; earlier filters were already applied."
        super().__init__(message, ExitCode.ERROR, hint)
        self.operation = operation
        self.filter_text = filter_text
        self.index = index
