"""
Application settings.

Values are resolved from the environment once at import time and fall back to
the literals below when unset. A `.env` file found from the working directory
is loaded first; variables already set in the environment win over it.
"""
import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

load_dotenv(find_dotenv(usecwd=True))

APP_NAME = "FishLog"

APPWRITE_ENDPOINT = os.environ.get(
    "APPWRITE_ENDPOINT", "https://mentor-db.sustainablegrowthlabs.com/v1"
).rstrip("/")
APPWRITE_PROJECT = os.environ.get("APPWRITE_PROJECT", "6723a47b7732b1007525")

# seconds, per HTTP request
REQUEST_TIMEOUT = float(os.environ.get("FISHLOG_REQUEST_TIMEOUT", "30"))

DATABASE_ID = "fishlog"

COLLECTIONS = {
    "USERS": "users",
    "CATCHES": "catches",
    "GROUPS": "groups",
    "EVENTS": "events",
    "COMMENTS": "comments",
    "CHALLENGES": "challenges",
    "INVITATIONS": "invitations",
}

BUCKETS = {
    "CATCH_PHOTOS": "catch-photos",
    "GROUP_AVATARS": "group-avatars",
    "USER_AVATARS": "user-avatars",
}

FUNCTIONS = {
    "PROCESS_CATCH_PHOTO": "process-catch-photo",
    "NOTIFY_GROUP_MEMBERS": "notify-group-members",
    "CLEANUP_EXPIRED_INVITATIONS": "cleanup-expired-invitations",
}

# Name of the local slot holding the persisted store snapshot
SNAPSHOT_KEY = "auth-storage"


def config_dir() -> Path:
    env = os.environ.get("FISHLOG_CONFIG_DIR")
    return Path(env).expanduser() if env else Path.home() / ".config" / "fishlog"
