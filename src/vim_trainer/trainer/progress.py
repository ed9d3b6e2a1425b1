"""Per-user persistence of the current exercise index."""

from __future__ import annotations

from datetime import datetime, timezone
import json
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

from vim_trainer.runtime import telemetry


class ProgressStore(Protocol):
    def load_index(self, user: str) -> Optional[int]: ...

    def save_index(self, user: str, index: int) -> None: ...


class MemoryProgressStore:
    """Keeps progress for the lifetime of the process only."""

    def __init__(self) -> None:
        self._indices: Dict[str, int] = {}

    def load_index(self, user: str) -> Optional[int]:
        return self._indices.get(user)

    def save_index(self, user: str, index: int) -> None:
        self._indices[user] = index


class JsonProgressStore:
    """Stores ``{"users": {user: {"current_exercise": n, "saved_at": iso}}}``.

    A missing, unreadable or malformed file loads as "no progress"; the next
    save rewrites it.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load_index(self, user: str) -> Optional[int]:
        record = self._read().get("users", {}).get(user)
        if not isinstance(record, dict):
            return None
        index = record.get("current_exercise")
        if isinstance(index, bool) or not isinstance(index, int):
            return None
        return index

    def save_index(self, user: str, index: int) -> None:
        payload = self._read()
        users = payload.setdefault("users", {})
        users[user] = {
            "current_exercise": index,
            "saved_at": datetime.now(timezone.utc).isoformat(),
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(payload, indent=2, sort_keys=True), "utf-8")
        telemetry.record_event(
            "progress.saved",
            level="debug",
            data={"user": user, "index": index, "path": str(self.path)},
        )

    def _read(self) -> Dict[str, Any]:
        try:
            raw = self.path.read_text("utf-8")
        except FileNotFoundError:
            return {}
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            telemetry.record_event(
                "progress.corrupt",
                level="warning",
                data={"path": str(self.path), "error": str(exc)},
            )
            return {}
        if not isinstance(payload, dict) or not isinstance(payload.get("users", {}), dict):
            return {}
        return payload


__all__ = ["ProgressStore", "MemoryProgressStore", "JsonProgressStore"]
