"""Shared fake objects for testing.

Modules:
    gmail   - FakeGmailClient standing in for the Gmail provider
"""

from __future__ import annotations

from tests.fakes.gmail import FakeGmailClient, make_gmail_client

__all__ = [
    "FakeGmailClient",
    "make_gmail_client",
]
