"""YAML read/write helpers for declarative documents."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Dict, Optional, TextIO

import yaml

__all__ = ["load_config", "dump_stream"]


def load_config(path: Optional[str], *, stdin: Optional[TextIO] = None) -> Any:
    """Load a YAML document; ``-`` reads stdin. Returns {} if missing/empty."""
    if not path:
        return {}
    if path == "-":
        text = (stdin or sys.stdin).read()
    else:
        p = Path(path)
        if not p.exists():
            return {}
        text = p.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    data = yaml.safe_load(text)
    if data is None:
        return {}
    # non-mapping roots are returned as-is for the caller to reject
    return data


def dump_stream(data: Dict[str, Any], stream: Optional[TextIO] = None) -> None:
    yaml.safe_dump(data, stream or sys.stdout, sort_keys=False, allow_unicode=True)
