"""Shared persistence utilities."""

import json
import os
import threading
from pathlib import Path
from typing import Any


def atomic_write_json(path: Path, data: Any, indent: int = 4) -> None:
    """Write JSON data to a file atomically.

    Writes to a temporary file next to the target, then renames it over
    the target path. Readers see either the old or the new document.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(f"{path.suffix}.{os.getpid()}-{threading.get_ident()}.tmp")
    try:
        tmp_path.write_text(
            json.dumps(data, indent=indent, ensure_ascii=False),
            encoding="utf-8",
        )
        tmp_path.replace(path)
    finally:
        tmp_path.unlink(missing_ok=True)
