from __future__ import annotations
from pathlib import PurePath
from fishlog.config.schema import get_bucket
from fishlog.utils.errors import ValidationError
from fishlog.utils.typing import UploadFile

def file_extension(filename: str) -> str:
    return PurePath(filename or "").suffix.lower().lstrip(".")

def validate_upload(file: UploadFile, bucket_id: str) -> None:
    """Reject files the bucket would refuse, before any network call."""
    policy = get_bucket(bucket_id)
    ext = file_extension(file.filename)
    if ext not in policy.allowed_extensions:
        raise ValidationError(
            f"Invalid file type '{ext or file.filename}'. Allowed: {', '.join(policy.allowed_extensions)}."
        )
    if file.size > policy.max_file_size:
        raise ValidationError(
            f"File too large (max {policy.max_file_size // (1024 * 1024)}MB)."
        )
