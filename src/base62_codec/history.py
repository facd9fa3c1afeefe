import json
import logging
from collections import deque
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

HISTORY_PATH = Path.home() / ".base62_codec_history.jsonl"


def log_event(action: str, payload: Dict[str, Any], path: Optional[Path] = None) -> None:
    """
    Append a simple JSON line to history for traceability.
    """
    path = path or HISTORY_PATH
    record = {"action": action, **payload}
    try:
        with path.open("a", encoding="utf-8") as fh:
            fh.write(json.dumps(record, ensure_ascii=False) + "\n")
    except OSError as exc:
        # History failures should not break core functionality.
        logger.debug("Could not write history to %s: %s", path, exc)


def read_events(limit: int = 20, path: Optional[Path] = None) -> List[Dict[str, Any]]:
    """Return up to ``limit`` most recent history records, oldest first."""
    path = path or HISTORY_PATH
    if limit <= 0 or not path.exists():
        return []
    records: deque = deque(maxlen=limit)
    with path.open("r", encoding="utf-8") as fh:
        for line in fh:
            line = line.strip()
            if not line:
                continue
            try:
                records.append(json.loads(line))
            except ValueError:
                logger.debug("Skipping malformed history line: %r", line)
    return list(records)
