from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from fishlog.utils.errors import ValidationError

THEMES = ("light", "dark", "system")
CATCH_VIEWS = ("table", "grid", "timeline")
DASHBOARD_VIEWS = ("overview", "calendar", "groups")
MEASUREMENT_SYSTEMS = ("imperial", "metric")
DATE_FORMATS = ("MM/DD/YYYY", "DD/MM/YYYY", "YYYY-MM-DD")

def _choice(value: Any, allowed, name: str) -> str:
    if value not in allowed:
        raise ValidationError(f"Invalid {name} '{value}'. Allowed: {', '.join(allowed)}")
    return value

def _mapping(data: Any, name: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValidationError(f"Invalid {name}: expected an object, got {type(data).__name__}")
    return data

def _flags(data: Mapping[str, Any], defaults: Dict[str, bool]) -> Dict[str, bool]:
    data = _mapping(data, "settings group")
    unknown = set(data) - set(defaults)
    if unknown:
        raise ValidationError(f"Unknown setting(s): {', '.join(sorted(unknown))}")
    return {k: bool(data.get(k, v)) for k, v in defaults.items()}

@dataclass(frozen=True)
class NotificationSettings:
    email: bool = True
    push: bool = True
    group_invites: bool = True
    challenge_updates: bool = True
    new_comments: bool = True

    def to_dict(self) -> Dict[str, bool]:
        return {
            "email": self.email,
            "push": self.push,
            "groupInvites": self.group_invites,
            "challengeUpdates": self.challenge_updates,
            "newComments": self.new_comments,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "NotificationSettings":
        f = _flags(data, cls().to_dict())
        return cls(f["email"], f["push"], f["groupInvites"], f["challengeUpdates"], f["newComments"])

@dataclass(frozen=True)
class PrivacySettings:
    show_email: bool = False
    show_location: bool = True
    public_profile: bool = True

    def to_dict(self) -> Dict[str, bool]:
        return {
            "showEmail": self.show_email,
            "showLocation": self.show_location,
            "publicProfile": self.public_profile,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PrivacySettings":
        f = _flags(data, cls().to_dict())
        return cls(f["showEmail"], f["showLocation"], f["publicProfile"])

@dataclass(frozen=True)
class DisplaySettings:
    # dashboard layouts store one of DASHBOARD_VIEWS here instead
    default_catch_view: str = "grid"
    measurement_system: str = "imperial"
    date_format: str = "MM/DD/YYYY"

    def to_dict(self) -> Dict[str, str]:
        return {
            "defaultCatchView": self.default_catch_view,
            "measurementSystem": self.measurement_system,
            "dateFormat": self.date_format,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DisplaySettings":
        data = _mapping(data, "settings group")
        d = cls()
        unknown = set(data) - set(d.to_dict())
        if unknown:
            raise ValidationError(f"Unknown setting(s): {', '.join(sorted(unknown))}")
        return cls(
            default_catch_view=_choice(
                data.get("defaultCatchView", d.default_catch_view),
                CATCH_VIEWS + DASHBOARD_VIEWS, "default view",
            ),
            measurement_system=_choice(
                data.get("measurementSystem", d.measurement_system),
                MEASUREMENT_SYSTEMS, "measurement system",
            ),
            date_format=_choice(data.get("dateFormat", d.date_format), DATE_FORMATS, "date format"),
        )

PREFERENCE_GROUPS = ("theme", "notifications", "privacy", "displaySettings")

@dataclass(frozen=True)
class Preferences:
    theme: str = "system"
    notifications: NotificationSettings = field(default_factory=NotificationSettings)
    privacy: PrivacySettings = field(default_factory=PrivacySettings)
    display_settings: DisplaySettings = field(default_factory=DisplaySettings)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "theme": self.theme,
            "notifications": self.notifications.to_dict(),
            "privacy": self.privacy.to_dict(),
            "displaySettings": self.display_settings.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "Preferences":
        """Build a full record; groups or flags that are missing take their defaults."""
        data = _mapping(data if data is not None else {}, "preferences")
        unknown = set(data) - set(PREFERENCE_GROUPS)
        if unknown:
            raise ValidationError(f"Unknown preference group(s): {', '.join(sorted(unknown))}")
        return cls(
            theme=_choice(data.get("theme", "system"), THEMES, "theme"),
            notifications=NotificationSettings.from_dict(data.get("notifications") or {}),
            privacy=PrivacySettings.from_dict(data.get("privacy") or {}),
            display_settings=DisplaySettings.from_dict(data.get("displaySettings") or {}),
        )

    def merged(self, partial: Mapping[str, Any]) -> "Preferences":
        """Group-level merge: each group present in ``partial`` replaces the current one."""
        data = self.to_dict()
        data.update(partial)
        return Preferences.from_dict(data)

DEFAULT_PREFERENCES = Preferences()

@dataclass(frozen=True)
class User:
    id: str
    email: str
    name: str
    avatar: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "email": self.email, "name": self.name, "avatar": self.avatar}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "User":
        data = _mapping(data, "user")
        if "id" not in data:
            raise ValidationError("Invalid user: missing id")
        return cls(
            id=data["id"],
            email=data.get("email", ""),
            name=data.get("name", ""),
            avatar=data.get("avatar"),
        )

    @classmethod
    def from_account(cls, account: Mapping[str, Any], avatar: Optional[str] = None) -> "User":
        return cls(
            id=account["$id"],
            email=account.get("email", ""),
            name=account.get("name", ""),
            avatar=avatar,
        )

@dataclass(frozen=True)
class UploadFile:
    filename: str
    content: bytes
    content_type: Optional[str] = None

    @property
    def size(self) -> int:
        return len(self.content)

    @classmethod
    def from_uploaded(cls, uploaded) -> "UploadFile":
        """Wrap a Streamlit ``UploadedFile``."""
        return cls(filename=uploaded.name, content=uploaded.getvalue(), content_type=uploaded.type)

@dataclass(frozen=True)
class AuthState:
    user: Optional[User] = None
    preferences: Optional[Preferences] = None
    is_loading: bool = True

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def status(self) -> str:
        if self.is_authenticated:
            return "authenticated"
        return "unknown" if self.is_loading else "anonymous"
