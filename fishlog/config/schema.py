"""
Static registry of the Appwrite collections and buckets the app relies on.

Provisioning lives outside this repository; at runtime the registry is only
consulted to keep document writes to declared attributes and to look up
bucket upload limits.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from fishlog.config.settings import BUCKETS, COLLECTIONS

MiB = 1024 * 1024
IMAGE_EXTENSIONS = ("jpg", "jpeg", "png", "webp")


@dataclass(frozen=True)
class Attribute:
    key: str
    type: str  # string | integer | double | boolean | object | string[]
    required: bool = False
    size: Optional[int] = None
    min: Optional[int] = None


@dataclass(frozen=True)
class Index:
    key: str
    type: str  # key | unique | fulltext
    attributes: Tuple[str, ...]


@dataclass(frozen=True)
class CollectionSchema:
    id: str
    name: str
    attributes: Tuple[Attribute, ...]
    indexes: Tuple[Index, ...] = ()
    read: Tuple[str, ...] = ("role:member",)
    write: Tuple[str, ...] = ("role:member",)

    def attribute_keys(self) -> List[str]:
        return [a.key for a in self.attributes]


@dataclass(frozen=True)
class BucketPolicy:
    id: str
    name: str
    max_file_size: int
    allowed_extensions: Tuple[str, ...] = IMAGE_EXTENSIONS
    permissions: Tuple[str, ...] = field(default=("role:all",))


COLLECTION_SCHEMAS: Dict[str, CollectionSchema] = {
    COLLECTIONS["USERS"]: CollectionSchema(
        id=COLLECTIONS["USERS"],
        name="Users",
        attributes=(
            Attribute("email", "string", required=True, size=255),
            Attribute("name", "string", required=True, size=128),
            Attribute("avatar", "string", size=64),
            Attribute("preferences", "object"),
            Attribute("createdAt", "string", required=True, size=32),
            Attribute("updatedAt", "string", size=32),
        ),
        indexes=(Index("email_unique", "unique", ("email",)),),
    ),
    COLLECTIONS["CATCHES"]: CollectionSchema(
        id=COLLECTIONS["CATCHES"],
        name="Catches",
        attributes=(
            Attribute("userId", "string", required=True, size=64),
            Attribute("species", "string", required=True, size=128),
            Attribute("weight", "double"),
            Attribute("length", "double"),
            Attribute("location", "string", size=255),
            Attribute("caughtAt", "string", required=True, size=32),
            Attribute("photos", "string[]", size=64),
            Attribute("notes", "string", size=4096),
        ),
        indexes=(
            Index("user_catches", "key", ("userId",)),
            Index("species_search", "fulltext", ("species",)),
        ),
    ),
    COLLECTIONS["GROUPS"]: CollectionSchema(
        id=COLLECTIONS["GROUPS"],
        name="Groups",
        attributes=(
            Attribute("name", "string", required=True, size=128),
            Attribute("description", "string", size=2048),
            Attribute("ownerId", "string", required=True, size=64),
            Attribute("members", "string[]", size=64),
            Attribute("avatar", "string", size=64),
        ),
        indexes=(Index("owner_groups", "key", ("ownerId",)),),
    ),
    COLLECTIONS["EVENTS"]: CollectionSchema(
        id=COLLECTIONS["EVENTS"],
        name="Events",
        attributes=(
            Attribute("groupId", "string", required=True, size=64),
            Attribute("title", "string", required=True, size=255),
            Attribute("startsAt", "string", required=True, size=32),
            Attribute("endsAt", "string", size=32),
            Attribute("location", "string", size=255),
        ),
        indexes=(Index("group_events", "key", ("groupId",)),),
    ),
    COLLECTIONS["COMMENTS"]: CollectionSchema(
        id=COLLECTIONS["COMMENTS"],
        name="Comments",
        attributes=(
            Attribute("catchId", "string", required=True, size=64),
            Attribute("userId", "string", required=True, size=64),
            Attribute("body", "string", required=True, size=2048),
            Attribute("createdAt", "string", required=True, size=32),
        ),
        indexes=(Index("catch_comments", "key", ("catchId",)),),
    ),
    COLLECTIONS["CHALLENGES"]: CollectionSchema(
        id=COLLECTIONS["CHALLENGES"],
        name="Challenges",
        attributes=(
            Attribute("groupId", "string", required=True, size=64),
            Attribute("title", "string", required=True, size=255),
            Attribute("rules", "object"),
            Attribute("startsAt", "string", required=True, size=32),
            Attribute("endsAt", "string", required=True, size=32),
            Attribute("participants", "string[]", size=64),
        ),
        indexes=(Index("group_challenges", "key", ("groupId",)),),
    ),
    COLLECTIONS["INVITATIONS"]: CollectionSchema(
        id=COLLECTIONS["INVITATIONS"],
        name="Invitations",
        attributes=(
            Attribute("groupId", "string", required=True, size=64),
            Attribute("email", "string", required=True, size=255),
            Attribute("status", "string", required=True, size=16),
            Attribute("expiresAt", "string", required=True, size=32),
        ),
        indexes=(Index("invite_lookup", "unique", ("groupId", "email")),),
    ),
}

BUCKET_POLICIES: Dict[str, BucketPolicy] = {
    BUCKETS["CATCH_PHOTOS"]: BucketPolicy(BUCKETS["CATCH_PHOTOS"], "Catch Photos", 10 * MiB),
    BUCKETS["GROUP_AVATARS"]: BucketPolicy(BUCKETS["GROUP_AVATARS"], "Group Avatars", 5 * MiB),
    BUCKETS["USER_AVATARS"]: BucketPolicy(BUCKETS["USER_AVATARS"], "User Avatars", 5 * MiB),
}


def get_collection(collection_id: str) -> CollectionSchema:
    try:
        return COLLECTION_SCHEMAS[collection_id]
    except KeyError:
        raise KeyError(f"Unknown collection: {collection_id}") from None


def get_bucket(bucket_id: str) -> BucketPolicy:
    try:
        return BUCKET_POLICIES[bucket_id]
    except KeyError:
        raise KeyError(f"Unknown bucket: {bucket_id}") from None

