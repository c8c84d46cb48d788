"""
Pure transition function for the account store.

``reduce`` never performs I/O; ``AuthStore`` calls it with the outcome of a
finished remote sequence and commits whatever it returns.
"""
from __future__ import annotations
from dataclasses import replace
from typing import Any, Dict, Optional

from fishlog.utils.typing import AuthState, Preferences, User, DEFAULT_PREFERENCES

CHECK_STARTED = "check_started"
HYDRATED = "hydrated"
AUTHENTICATED = "authenticated"
SIGNED_OUT = "signed_out"
PROFILE_UPDATED = "profile_updated"
PREFERENCES_UPDATED = "preferences_updated"

INITIAL_STATE = AuthState()


def reduce(state: AuthState, event: str, **payload: Any) -> AuthState:
    if event == CHECK_STARTED:
        return replace(state, is_loading=True)
    if event == HYDRATED:
        # optimistic: loading stays on until check_auth confirms
        return AuthState(
            user=payload.get("user"),
            preferences=payload.get("preferences"),
            is_loading=state.is_loading,
        )
    if event == AUTHENTICATED:
        return AuthState(
            user=payload["user"],
            preferences=payload.get("preferences") or DEFAULT_PREFERENCES,
            is_loading=False,
        )
    if event == SIGNED_OUT:
        return AuthState(user=None, preferences=None, is_loading=False)
    if event == PROFILE_UPDATED:
        return replace(state, user=payload["user"])
    if event == PREFERENCES_UPDATED:
        return replace(state, preferences=payload["preferences"])
    raise ValueError(f"Unknown auth event: {event}")


def to_snapshot(state: AuthState, include_preferences: bool = True) -> Dict[str, Any]:
    snap: Dict[str, Any] = {"user": state.user.to_dict() if state.user else None}
    if include_preferences:
        snap["preferences"] = state.preferences.to_dict() if state.preferences else None
    return snap


def from_snapshot(data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Turn a stored snapshot back into ``HYDRATED`` payload."""
    data = data or {}
    user = data.get("user")
    prefs = data.get("preferences")
    return {
        "user": User.from_dict(user) if user else None,
        "preferences": Preferences.from_dict(prefs) if prefs else None,
    }
