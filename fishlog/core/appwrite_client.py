"""
Thin client for the Appwrite REST API.

Covers the three capability groups the app needs (account, databases,
storage) against one endpoint/project. Calls are never retried; every failure
is raised as one of the ``fishlog.utils.errors`` Appwrite exceptions.
"""
from __future__ import annotations
from typing import Any, Dict, Optional
from urllib.parse import quote, urlencode

import requests

from fishlog.config.settings import (
    APPWRITE_ENDPOINT, APPWRITE_PROJECT, DATABASE_ID, REQUEST_TIMEOUT,
)
from fishlog.utils.errors import (
    AppwriteError, AuthError, Conflict, NetworkError, NotAuthenticated, NotFound,
    RemoteValidationError,
)
from fishlog.utils.logging import logger
from fishlog.utils.typing import UploadFile

UNIQUE_ID = "unique()"
FALLBACK_COOKIES = "X-Fallback-Cookies"

# Appwrite error types that get a more specific class than their status code implies
_TYPE_ERRORS = {
    "user_invalid_credentials": AuthError,
    "user_blocked": AuthError,
    "user_session_already_exists": Conflict,
}

_STATUS_ERRORS = {
    400: RemoteValidationError,
    401: NotAuthenticated,
    404: NotFound,
    409: Conflict,
}


def error_from_response(response: requests.Response) -> AppwriteError:
    try:
        body = response.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}
    message = body.get("message") or response.reason or f"HTTP {response.status_code}"
    err_type = body.get("type")
    cls = _TYPE_ERRORS.get(err_type) or _STATUS_ERRORS.get(response.status_code, AppwriteError)
    return cls(message, code=response.status_code, type=err_type)


class AppwriteClient:
    """Account, document and file operations for a single Appwrite project."""

    def __init__(
        self,
        endpoint: str = APPWRITE_ENDPOINT,
        project: str = APPWRITE_PROJECT,
        database_id: str = DATABASE_ID,
        timeout: float = REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.endpoint = endpoint.rstrip("/")
        self.project = project
        self.database_id = database_id
        self.timeout = timeout
        self.http = session or requests.Session()
        self.http.headers["X-Appwrite-Project"] = project
        self._session_secret: Optional[str] = None

    # -- session continuity ------------------------------------------------

    @property
    def session_secret(self) -> Optional[str]:
        """Opaque fallback-cookie value identifying the current session, if any."""
        return self._session_secret

    @session_secret.setter
    def session_secret(self, value: Optional[str]) -> None:
        self._session_secret = value
        if value:
            self.http.headers[FALLBACK_COOKIES] = value
        else:
            self.http.headers.pop(FALLBACK_COOKIES, None)

    def forget_session(self) -> None:
        self.session_secret = None
        self.http.cookies.clear()

    # -- transport ---------------------------------------------------------

    def _call(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        data: Optional[Dict[str, Any]] = None,
        files: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        url = f"{self.endpoint}{path}"
        logger.debug("appwrite: %s %s", method, path)
        try:
            response = self.http.request(
                method, url, json=json, data=data, files=files, timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error("appwrite: %s %s failed: %s", method, path, e)
            raise NetworkError(f"Could not reach Appwrite: {e}") from e

        fallback = response.headers.get(FALLBACK_COOKIES)
        if fallback:
            self.session_secret = fallback

        if response.status_code >= 400:
            err = error_from_response(response)
            logger.warning(
                "appwrite: %s %s -> %s %s: %s", method, path, err.code, err.type, err.message
            )
            raise err

        if response.status_code == 204 or not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            return {}

    def _documents_path(self, collection: str, document_id: Optional[str] = None) -> str:
        path = f"/databases/{self.database_id}/collections/{collection}/documents"
        return f"{path}/{quote(document_id, safe='')}" if document_id else path

    # -- account -----------------------------------------------------------

    def create_account(self, email: str, password: str, name: str) -> Dict[str, Any]:
        return self._call("POST", "/account", json={
            "userId": UNIQUE_ID, "email": email, "password": password, "name": name,
        })

    def create_session(self, email: str, password: str) -> Dict[str, Any]:
        return self._call("POST", "/account/sessions/email", json={
            "email": email, "password": password,
        })

    def get_current_user(self) -> Dict[str, Any]:
        return self._call("GET", "/account")

    def delete_session(self, session_id: str = "current") -> None:
        self._call("DELETE", f"/account/sessions/{session_id}")
        if session_id == "current":
            self.forget_session()

    def update_email(self, email: str, password: str) -> Dict[str, Any]:
        return self._call("PATCH", "/account/email", json={"email": email, "password": password})

    def update_name(self, name: str) -> Dict[str, Any]:
        return self._call("PATCH", "/account/name", json={"name": name})

    def delete_account(self) -> None:
        self._call("DELETE", "/account")
        self.forget_session()

    # -- databases ---------------------------------------------------------

    def get_document(self, collection: str, document_id: str) -> Dict[str, Any]:
        return self._call("GET", self._documents_path(collection, document_id))

    def create_document(self, collection: str, document_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        return self._call("POST", self._documents_path(collection), json={
            "documentId": document_id, "data": fields,
        })

    def update_document(self, collection: str, document_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        return self._call("PATCH", self._documents_path(collection, document_id), json={"data": fields})

    def delete_document(self, collection: str, document_id: str) -> None:
        self._call("DELETE", self._documents_path(collection, document_id))

    # -- storage -----------------------------------------------------------

    def upload_file(self, bucket: str, file: UploadFile) -> str:
        """Upload ``file`` and return its new id. Size/type checks are the caller's job."""
        result = self._call(
            "POST",
            f"/storage/buckets/{bucket}/files",
            data={"fileId": UNIQUE_ID},
            files={"file": (file.filename, file.content, file.content_type or "application/octet-stream")},
        )
        return result["$id"]

    def delete_file(self, bucket: str, file_id: str) -> None:
        self._call("DELETE", f"/storage/buckets/{bucket}/files/{quote(file_id, safe='')}")

    def file_preview_url(self, bucket: str, file_id: str, width: Optional[int] = None) -> str:
        params = {"project": self.project}
        if width:
            params["width"] = width
        return (
            f"{self.endpoint}/storage/buckets/{bucket}/files/{quote(file_id, safe='')}/preview?"
            f"{urlencode(params)}"
        )

    def initials_avatar_url(self, name: str) -> str:
        return f"{self.endpoint}/avatars/initials?{urlencode({'name': name, 'project': self.project})}"
