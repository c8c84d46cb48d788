"""
Account / session / preferences store.

One instance per UI session holds who is signed in and what they prefer.
Each action runs its Appwrite calls strictly in order; when a step fails the
action stops there, emits a failure notification and re-raises. Steps that
already succeeded remotely are not undone.

After every committed transition the store writes ``{user, preferences}`` to
its ``SnapshotStore`` so a rerun in the same browser session can show the
last known state while ``check_auth`` re-validates it. Session credentials
stay inside the client and are never written there.
"""
from __future__ import annotations
import functools
import json
from datetime import datetime, timezone
from typing import Any, Callable, List, Mapping, Optional, Tuple

from fishlog.config.schema import get_collection
from fishlog.config.settings import BUCKETS, COLLECTIONS
from fishlog.core.appwrite_client import AppwriteClient
from fishlog.core import auth_state
from fishlog.core.auth_state import (
    AUTHENTICATED, CHECK_STARTED, HYDRATED, PREFERENCES_UPDATED, PROFILE_UPDATED, SIGNED_OUT,
)
from fishlog.services.notifications import Notifier
from fishlog.services.storage import SnapshotStore
from fishlog.utils.errors import FishLogError, NotAuthenticated, ValidationError
from fishlog.utils.logging import logger
from fishlog.utils.security import validate_upload
from fishlog.utils.typing import (
    AuthState, DEFAULT_PREFERENCES, Preferences, UploadFile, User,
)

USERS = COLLECTIONS["USERS"]
AVATARS = BUCKETS["USER_AVATARS"]

# users-collection attributes the store manages itself
_MANAGED_FIELDS = {"avatar", "preferences", "createdAt", "updatedAt"}


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def editable_profile_fields() -> List[str]:
    return [k for k in get_collection(USERS).attribute_keys() if k not in _MANAGED_FIELDS]


def _action(success: str, failure: str):
    """Notify on success; on failure notify ``"<failure>: <error>"`` and re-raise."""
    def decorator(fn):
        @functools.wraps(fn)
        def _wrap(self, *a, **k):
            try:
                result = fn(self, *a, **k)
            except Exception as e:
                logger.warning("auth: %s failed: %s", fn.__name__, e)
                self.notifier.error(f"{failure}: {e}")
                raise
            self.notifier.success(success)
            return result
        return _wrap
    return decorator


class AuthStore:
    def __init__(
        self,
        client: AppwriteClient,
        snapshots: Optional[SnapshotStore] = None,
        notifier: Optional[Notifier] = None,
        include_preferences: bool = True,
    ):
        self.client = client
        self.snapshots = snapshots
        self.notifier = notifier or Notifier()
        self.include_preferences = include_preferences
        self._state: AuthState = auth_state.INITIAL_STATE
        self._listeners: List[Callable[[AuthState], None]] = []

    # -- state -------------------------------------------------------------

    @property
    def state(self) -> AuthState:
        return self._state

    @property
    def user(self) -> Optional[User]:
        return self._state.user

    @property
    def preferences(self) -> Optional[Preferences]:
        return self._state.preferences

    @property
    def is_loading(self) -> bool:
        return self._state.is_loading

    def subscribe(self, listener: Callable[[AuthState], None]) -> Callable[[], None]:
        """Call ``listener`` after every commit. Returns an unsubscribe function."""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def _commit(self, event: str, **payload: Any) -> AuthState:
        self._state = auth_state.reduce(self._state, event, **payload)
        logger.debug("auth: %s -> %s", event, self._state.status)
        self._persist()
        for listener in list(self._listeners):
            listener(self._state)
        return self._state

    def _persist(self) -> None:
        if self.snapshots is None:
            return
        self.snapshots.save(auth_state.to_snapshot(self._state, self.include_preferences))

    def hydrate(self) -> AuthState:
        """Load the last persisted snapshot. ``check_auth`` must still run afterwards."""
        if self.snapshots is None:
            return self._state
        try:
            payload = auth_state.from_snapshot(self.snapshots.load())
        except FishLogError as e:
            logger.warning("auth: ignoring unreadable snapshot: %s", e)
            return self._state
        return self._commit(HYDRATED, **payload)

    def _require_user(self) -> User:
        user = self._state.user
        if user is None:
            raise NotAuthenticated("Not authenticated")
        return user

    def _load_profile(self, user_id: str) -> Tuple[Optional[str], Preferences]:
        doc = self.client.get_document(USERS, user_id)
        prefs = doc.get("preferences")
        if isinstance(prefs, str):
            prefs = json.loads(prefs) if prefs else None
        return doc.get("avatar"), Preferences.from_dict(prefs) if prefs else DEFAULT_PREFERENCES

    # -- actions -----------------------------------------------------------

    def check_auth(self) -> AuthState:
        """Re-validate the session. Any failure means "signed out"; never raises."""
        self._commit(CHECK_STARTED)
        try:
            account = self.client.get_current_user()
            avatar, prefs = self._load_profile(account["$id"])
        except Exception as e:
            logger.info("auth: no active session (%s)", e)
            return self._commit(SIGNED_OUT)
        return self._commit(AUTHENTICATED, user=User.from_account(account, avatar), preferences=prefs)

    @_action("Welcome back!", "Login failed")
    def login(self, email: str, password: str) -> AuthState:
        self.client.create_session(email, password)
        account = self.client.get_current_user()
        avatar, prefs = self._load_profile(account["$id"])
        return self._commit(AUTHENTICATED, user=User.from_account(account, avatar), preferences=prefs)

    @_action("Account created successfully!", "Registration failed")
    def register(self, email: str, password: str, name: str, avatar: Optional[UploadFile] = None) -> AuthState:
        if avatar is not None:
            validate_upload(avatar, AVATARS)

        account = self.client.create_account(email, password, name)
        avatar_id = self.client.upload_file(AVATARS, avatar) if avatar is not None else None
        self.client.create_document(USERS, account["$id"], {
            "email": email,
            "name": name,
            "avatar": avatar_id,
            "preferences": DEFAULT_PREFERENCES.to_dict(),
            "createdAt": _now_iso(),
        })
        self.client.create_session(email, password)
        current = self.client.get_current_user()
        return self._commit(
            AUTHENTICATED, user=User.from_account(current, avatar_id), preferences=DEFAULT_PREFERENCES
        )

    def logout(self) -> AuthState:
        """Sign out. Local state is cleared whatever the backend answers."""
        try:
            self.client.delete_session()
        except NotAuthenticated as e:
            # session already expired or revoked
            logger.info("auth: session already gone on logout: %s", e)
            self.client.forget_session()
        except Exception as e:
            self.client.forget_session()
            self._commit(SIGNED_OUT)
            self.notifier.error(f"Logout failed: {e}")
            raise
        self._commit(SIGNED_OUT)
        self.notifier.success("Logged out successfully")
        return self._state

    @_action("Profile updated successfully!", "Failed to update profile")
    def update_profile(
        self,
        fields: Mapping[str, Any],
        avatar: Optional[UploadFile] = None,
        password: Optional[str] = None,
    ) -> AuthState:
        user = self._require_user()
        fields = dict(fields)
        unknown = set(fields) - set(editable_profile_fields())
        if unknown:
            raise ValidationError(f"Cannot update profile field(s): {', '.join(sorted(unknown))}")
        blank = sorted(k for k, v in fields.items() if not str(v or "").strip())
        if blank:
            raise ValidationError(f"Profile field(s) cannot be empty: {', '.join(blank)}")
        email_changed = "email" in fields and fields["email"] != user.email
        if email_changed and not password:
            raise ValidationError("Current password is required to change email")
        if avatar is not None:
            validate_upload(avatar, AVATARS)

        avatar_id = user.avatar
        if avatar is not None:
            if avatar_id:
                self.client.delete_file(AVATARS, avatar_id)
            avatar_id = self.client.upload_file(AVATARS, avatar)

        self.client.update_document(USERS, user.id, {
            **fields,
            "avatar": avatar_id,
            "updatedAt": _now_iso(),
        })
        if email_changed:
            self.client.update_email(fields["email"], password)
        if "name" in fields:
            self.client.update_name(fields["name"])

        account = self.client.get_current_user()
        return self._commit(PROFILE_UPDATED, user=User.from_account(account, avatar_id))

    @_action("Preferences updated successfully!", "Failed to update preferences")
    def update_preferences(self, partial: Mapping[str, Any]) -> AuthState:
        """Merge ``partial`` group by group: a supplied group replaces the stored one."""
        user = self._require_user()
        updated = (self._state.preferences or DEFAULT_PREFERENCES).merged(partial)
        self.client.update_document(USERS, user.id, {
            "preferences": updated.to_dict(),
            "updatedAt": _now_iso(),
        })
        return self._commit(PREFERENCES_UPDATED, preferences=updated)

    @_action("Account deleted successfully", "Failed to delete account")
    def delete_account(self) -> AuthState:
        user = self._require_user()
        if user.avatar:
            self.client.delete_file(AVATARS, user.avatar)
        self.client.delete_document(USERS, user.id)
        self.client.delete_account()
        return self._commit(SIGNED_OUT)

    # -- helpers for views -------------------------------------------------

    def avatar_url(self, width: Optional[int] = None) -> Optional[str]:
        user = self._state.user
        if user is None:
            return None
        if user.avatar:
            return self.client.file_preview_url(AVATARS, user.avatar, width=width)
        return self.client.initials_avatar_url(user.name or user.email)

