"""
User-facing notifications, emitted as a side channel by store actions.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import List
import streamlit as st
from fishlog.utils.logging import logger

SESSION_KEY = "notifications"

@dataclass(frozen=True)
class Notification:
    level: str  # success | error
    message: str

class Notifier:
    """Records notifications and logs them; subclasses add a display target."""

    def __init__(self):
        self.history: List[Notification] = []

    def success(self, message: str) -> None:
        self._emit(Notification("success", message))

    def error(self, message: str) -> None:
        self._emit(Notification("error", message))

    def _emit(self, note: Notification) -> None:
        self.history.append(note)
        if note.level == "error":
            logger.warning("notify: %s", note.message)
        else:
            logger.info("notify: %s", note.message)

class StreamlitNotifier(Notifier):
    """Queues notifications in session state so they survive ``st.rerun``."""

    def _emit(self, note: Notification) -> None:
        super()._emit(note)
        st.session_state.setdefault(SESSION_KEY, []).append(note)

def drain() -> List[Notification]:
    pending = st.session_state.get(SESSION_KEY, [])
    st.session_state[SESSION_KEY] = []
    return pending
