"""
Local snapshot slot for the account store.

The slot is a key-value mapping scoped to a single browser session (the app
passes ``st.session_state``). Snapshots hold ``{user, preferences}`` only;
session credentials are never written here.
"""
from __future__ import annotations
import json
from typing import Any, Dict, MutableMapping, Optional
from fishlog.config.settings import SNAPSHOT_KEY
from fishlog.utils.logging import logger

class SnapshotStore:
    """Serializes snapshots as JSON text under one key of ``slot``."""

    def __init__(self, slot: MutableMapping[str, Any], key: str = SNAPSHOT_KEY):
        self.slot = slot
        self.key = key

    def load(self) -> Optional[Dict[str, Any]]:
        raw = self.slot.get(self.key)
        if raw is None:
            return None
        try:
            data = json.loads(raw)
        except (TypeError, ValueError) as e:
            logger.warning("storage: unreadable snapshot %s: %s", self.key, e)
            return None
        if not isinstance(data, dict): return None
        return data

    def save(self, snapshot: Dict[str, Any]) -> None:
        self.slot[self.key] = json.dumps(snapshot, ensure_ascii=False)

    def clear(self) -> None:
        self.slot.pop(self.key, None)
