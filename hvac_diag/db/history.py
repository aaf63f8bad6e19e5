# Saved diagnostics history (capped, oldest evicted first)

import json
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from hvac_diag.config import HISTORY_BACKEND, HISTORY_LIMIT, HISTORY_PATH

log = logging.getLogger(__name__)

HISTORY_TABLE = "saved_diagnostics"


# --------------------------------------------------
# Helpers
# --------------------------------------------------

def make_entry(
    system_type: Optional[str],
    system_info: Dict[str, Any],
    symptoms: str,
    result: Dict[str, Any],
    entry_id: Optional[str] = None,
    timestamp: Optional[str] = None,
) -> Dict[str, Any]:
    return {
        "id": entry_id or str(uuid.uuid4()),
        "timestamp": timestamp or datetime.now(timezone.utc).isoformat(),
        "systemType": system_type,
        "systemInfo": system_info or {},
        "symptoms": symptoms or "",
        "result": result,
    }


def append_capped(entries: List[Dict[str, Any]], entry: Dict[str, Any], limit: int) -> List[Dict[str, Any]]:
    """
    Append and keep only the newest `limit` entries.
    """
    updated = list(entries) + [entry]
    return updated[-limit:] if limit > 0 else []


def newest_first(entries: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return sorted(entries, key=lambda e: e.get("timestamp") or "", reverse=True)


# --------------------------------------------------
# Local JSON file (mirrors browser storage)
# --------------------------------------------------

class LocalHistoryStore:
    def __init__(self, path: str = HISTORY_PATH, limit: int = HISTORY_LIMIT):
        self.path = Path(path)
        self.limit = limit

    def load(self) -> List[Dict[str, Any]]:
        if not self.path.exists():
            return []

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            log.exception("Could not read history from %s", self.path)
            return []

        return data if isinstance(data, list) else []

    def _write(self, entries: List[Dict[str, Any]]) -> bool:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(entries, indent=2), encoding="utf-8")
            return True
        except OSError:
            log.exception("Could not write history to %s", self.path)
            return False

    def save(self, entry: Dict[str, Any]) -> bool:
        return self._write(append_capped(self.load(), entry, self.limit))

    def delete(self, entry_id: str) -> bool:
        entries = self.load()
        remaining = [e for e in entries if e.get("id") != entry_id]
        if len(remaining) == len(entries):
            return False
        return self._write(remaining)


# --------------------------------------------------
# Supabase table
# --------------------------------------------------

class SupabaseHistoryStore:
    def __init__(self, client=None, limit: int = HISTORY_LIMIT):
        self._client = client
        self.limit = limit

    @property
    def client(self):
        if self._client is None:
            from hvac_diag.db.db import get_supabase
            self._client = get_supabase()
        return self._client

    def load(self) -> List[Dict[str, Any]]:
        try:
            response = (
                self.client
                .table(HISTORY_TABLE)
                .select("id, timestamp, system_type, system_info, symptoms, result")
                .order("timestamp")
                .execute()
            )
        except Exception:
            log.exception("Could not load history from supabase")
            return []

        return [
            {
                "id": row["id"],
                "timestamp": row["timestamp"],
                "systemType": row.get("system_type"),
                "systemInfo": row.get("system_info") or {},
                "symptoms": row.get("symptoms") or "",
                "result": row.get("result") or {},
            }
            for row in response.data or []
        ]

    def save(self, entry: Dict[str, Any]) -> bool:
        try:
            self.client.table(HISTORY_TABLE).insert({
                "id": entry["id"],
                "timestamp": entry["timestamp"],
                "system_type": entry.get("systemType"),
                "system_info": entry.get("systemInfo") or {},
                "symptoms": entry.get("symptoms") or "",
                "result": entry.get("result") or {},
            }).execute()
        except Exception:
            log.exception("Could not save history entry %s", entry.get("id"))
            return False

        self._evict()
        return True

    def _evict(self) -> None:
        entries = self.load()
        overflow = len(entries) - self.limit
        if overflow <= 0:
            return

        stale_ids = [e["id"] for e in entries[:overflow]]
        try:
            self.client.table(HISTORY_TABLE).delete().in_("id", stale_ids).execute()
        except Exception:
            log.exception("Could not evict %d old history entries", overflow)

    def delete(self, entry_id: str) -> bool:
        try:
            response = (
                self.client
                .table(HISTORY_TABLE)
                .delete()
                .eq("id", entry_id)
                .execute()
            )
        except Exception:
            log.exception("Could not delete history entry %s", entry_id)
            return False

        return bool(response.data)


def get_history_store():
    if HISTORY_BACKEND == "supabase":
        return SupabaseHistoryStore()
    return LocalHistoryStore()
