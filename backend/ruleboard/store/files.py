import json
import logging
import re
from pathlib import Path
from typing import Any, Optional

from ruleboard.errors import StorageReadError, StorageWriteError

logger = logging.getLogger(__name__)

ROOT_VIEW_ID = "root"

_UNSAFE_ID_CHARS = re.compile(r"[^A-Za-z0-9_-]")


def sanitize_view_id(view_id: Optional[str]) -> str:
    """
    Strip every character outside [A-Za-z0-9-_] from a view id.

    Only a missing id addresses the root view; an id with nothing left after
    stripping is the empty sub-view id, never root. Distinct raw ids that
    sanitize to the same string address the same stored view.
    """
    return _UNSAFE_ID_CHARS.sub("", view_id or ROOT_VIEW_ID)


def read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.error("[Store] Failed to read %s: %s", path, e)
        raise StorageReadError() from e


def write_json(path: Path, payload: Any) -> None:
    """Overwrite `path` with `payload`; no merge, no backup."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    except (OSError, TypeError, ValueError) as e:
        logger.error("[Store] Failed to write %s: %s", path, e)
        raise StorageWriteError() from e
