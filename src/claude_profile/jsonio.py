"""JSON read/write helpers shared by the two stores."""

from __future__ import annotations

import contextlib
import json
import os
import shutil
import uuid
from pathlib import Path
from typing import Any

from .config import JSON_INDENT

# Returned by :func:`load_json` when the file does not exist.
MISSING = object()


def load_json(path: Path) -> Any:
    """Return the parsed contents of ``path`` or :data:`MISSING`.

    ``ValueError`` (malformed JSON or bytes that are not UTF-8)
    propagates; the stores translate it into their own corruption error.
    """
    if not path.exists():
        return MISSING
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def save_json(path: Path, data: Any) -> None:
    """Write ``data`` as indented JSON with a trailing newline.

    The document goes to a hidden temp file next to ``path`` which is
    then renamed over it, so a reader never sees a partial write.
    Parent directories are created as needed.  A symlinked ``path`` is
    followed so the link survives, and an existing file keeps its mode.
    """
    path = path.resolve()
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(f".{path.name}.{uuid.uuid4().hex}.tmp")
    try:
        with open(tmp_path, "w", encoding="utf-8") as handle:
            json.dump(data, handle, indent=JSON_INDENT, ensure_ascii=False)
            handle.write("\n")
        if path.exists():
            shutil.copymode(path, tmp_path)
        os.replace(tmp_path, path)
    except BaseException:
        with contextlib.suppress(OSError):
            tmp_path.unlink()
        raise


__all__ = ["MISSING", "load_json", "save_json"]
