"""CLI error types and the exit codes they map to."""
from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional


class ExitCode(IntEnum):
    SUCCESS = 0
    ERROR = 1
    USAGE = 2
    CONFIG_ERROR = 3
    AUTH_ERROR = 4
    INTERRUPTED = 130  # Ctrl+C


@dataclass
class CLIError(Exception):
    """CLI error with exit code, message and an optional hint."""
    message: str
    code: ExitCode = ExitCode.ERROR
    hint: Optional[str] = None

    def __str__(self) -> str:
        return self.message


class ConfigError(CLIError):
    """Declarative document or configuration problem."""
    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message, ExitCode.CONFIG_ERROR, hint)


class AuthError(CLIError):
    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message, ExitCode.AUTH_ERROR, hint)


class UsageError(CLIError):
    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message, ExitCode.USAGE, hint)


def handle_error(error: BaseException, verbose: bool = False) -> int:
    """Report an exception on stderr and return the exit code to use."""
    if isinstance(error, CLIError):
        print(f"Error: {error.message}", file=sys.stderr)
        if error.hint:
            print(f"Hint: {error.hint}", file=sys.stderr)
        if verbose and error.__cause__ is not None:
            import traceback
            traceback.print_exception(type(error.__cause__), error.__cause__, error.__cause__.__traceback__)
        return int(error.code)

    if isinstance(error, KeyboardInterrupt):
        print("\nInterrupted.", file=sys.stderr)
        return int(ExitCode.INTERRUPTED)

    print(f"Error: {error}", file=sys.stderr)
    if verbose:
        import traceback
        traceback.print_exc()
    return int(ExitCode.ERROR)
