"""Shared test fixtures and utilities."""

from __future__ import annotations

import io
import os
import tempfile
from contextlib import contextmanager, redirect_stderr, redirect_stdout
from types import SimpleNamespace
from typing import Dict, Optional

from tests.fakes.gmail import FakeGmailClient, make_gmail_client  # noqa: F401


# -----------------------------------------------------------------------------
# YAML document helpers
# -----------------------------------------------------------------------------


def write_yaml(data: dict, dir: Optional[str] = None, filename: str = "filters.yaml") -> str:
    """Write a dict to a temporary YAML file, return the path."""
    import yaml

    td = dir or tempfile.mkdtemp()
    p = os.path.join(td, filename)
    with open(p, "w", encoding="utf-8") as fh:
        yaml.safe_dump(data, fh, sort_keys=False)
    return p


def filters_document(*filters: dict) -> dict:
    return {"kind": "Filter", "filters": list(filters)}


# -----------------------------------------------------------------------------
# Output capture helpers
# -----------------------------------------------------------------------------


@contextmanager
def capture_stdout():
    """Context manager that captures stdout and yields a StringIO buffer."""
    buf = io.StringIO()
    with redirect_stdout(buf):
        yield buf


@contextmanager
def capture_stderr():
    buf = io.StringIO()
    with redirect_stderr(buf):
        yield buf


def make_args(**kwargs) -> SimpleNamespace:
    """Create a SimpleNamespace with common CLI arg defaults merged with kwargs."""
    defaults = {
        "credentials": None,
        "token": None,
        "refresh_token": None,
        "verbose": False,
        "log_file": None,
    }
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


# -----------------------------------------------------------------------------
# Label factories
# -----------------------------------------------------------------------------


def make_user_label(label_id: str, name: str) -> Dict[str, str]:
    return {"id": label_id, "name": name, "type": "user"}


def make_system_label(label_id: str) -> Dict[str, str]:
    return {"id": label_id, "name": label_id, "type": "system"}


class TempDirMixin:
    """Mixin providing a temporary directory that's cleaned up after each test.

    Usage:
        class MyTest(TempDirMixin, unittest.TestCase):
            def test_something(self):
                path = os.path.join(self.tmpdir, "file.txt")
                ...
    """

    tmpdir: str

    def setUp(self):
        super().setUp()
        self.tmpdir = tempfile.mkdtemp()

    def tearDown(self):
        import shutil
        shutil.rmtree(self.tmpdir, ignore_errors=True)
        super().tearDown()
