import json
import os
import time
from pathlib import Path
from typing import Any, Dict

HISTORY_PATH = Path.home() / ".shift_cipher_history.jsonl"


def history_path() -> Path:
    override = os.getenv("SHIFT_CIPHER_HISTORY", "")
    return Path(override) if override else HISTORY_PATH


def log_event(action: str, payload: Dict[str, Any]) -> None:
    """
    Append one JSON line describing a finished run.
    """
    record = {"time": time.strftime("%Y-%m-%dT%H:%M:%S"), "action": action, **payload}
    try:
        with history_path().open("a", encoding="utf-8") as fh:
            fh.write(json.dumps(record, ensure_ascii=False) + "\n")
    except Exception:
        # History failures should not break a cipher run.
        pass
