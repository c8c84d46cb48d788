import json
import pytest
import requests
from requests.cookies import RequestsCookieJar
from requests.structures import CaseInsensitiveDict

from fishlog.core.appwrite_client import AppwriteClient
from fishlog.utils.errors import (
    AppwriteError, AuthError, Conflict, NetworkError, NotAuthenticated, NotFound, ValidationError,
)
from fishlog.utils.typing import UploadFile

ENDPOINT = "https://appwrite.test/v1"


class Dummy:
    def __init__(self, status=200, body=None, headers=None, reason="OK"):
        self.status_code = status
        self.reason = reason
        self.headers = CaseInsensitiveDict(headers or {})
        self.content = json.dumps(body).encode() if body is not None else b""

    def json(self):
        if not self.content:
            raise ValueError("no body")
        return json.loads(self.content)


class FakeHTTP:
    def __init__(self, *responses):
        self.headers = CaseInsensitiveDict()
        self.cookies = RequestsCookieJar()
        self.responses = list(responses)
        self.sent = []

    def request(self, method, url, **kw):
        self.sent.append((method, url, kw, dict(self.headers)))
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


def _client(*responses):
    http = FakeHTTP(*responses)
    return AppwriteClient(ENDPOINT, "proj", database_id="fishlog", timeout=5, session=http), http


def test_project_header_and_session_request():
    client, http = _client(Dummy(201, {"$id": "s1"}))
    assert client.create_session("a@b.c", "pw") == {"$id": "s1"}
    method, url, kw, headers = http.sent[0]
    assert (method, url) == ("POST", f"{ENDPOINT}/account/sessions/email")
    assert kw["json"] == {"email": "a@b.c", "password": "pw"}
    assert kw["timeout"] == 5
    assert headers["X-Appwrite-Project"] == "proj"


def test_create_account_uses_unique_id():
    client, http = _client(Dummy(201, {"$id": "u1", "email": "a@b.c", "name": "A"}))
    client.create_account("a@b.c", "pw", "A")
    assert http.sent[0][2]["json"]["userId"] == "unique()"


def test_fallback_cookie_is_kept_and_resent():
    client, http = _client(
        Dummy(201, {"$id": "s1"}, headers={"X-Fallback-Cookies": '{"a_session_proj":"xyz"}'}),
        Dummy(200, {"$id": "u1"}),
        Dummy(204),
    )
    client.create_session("a@b.c", "pw")
    assert client.session_secret == '{"a_session_proj":"xyz"}'
    client.get_current_user()
    assert http.sent[1][3]["X-Fallback-Cookies"] == '{"a_session_proj":"xyz"}'
    client.delete_session()
    assert client.session_secret is None
    assert "X-Fallback-Cookies" not in http.headers


def test_document_paths_and_bodies():
    client, http = _client(
        Dummy(201, {"$id": "u1"}), Dummy(200, {"$id": "u1"}), Dummy(200, {"$id": "u1"}), Dummy(204),
    )
    client.create_document("users", "u1", {"name": "A"})
    client.get_document("users", "u1")
    client.update_document("users", "u1", {"name": "B"})
    assert client.delete_document("users", "u1") is None

    base = f"{ENDPOINT}/databases/fishlog/collections/users/documents"
    assert [(m, u) for m, u, _, _ in http.sent] == [
        ("POST", base), ("GET", f"{base}/u1"), ("PATCH", f"{base}/u1"), ("DELETE", f"{base}/u1"),
    ]
    assert http.sent[0][2]["json"] == {"documentId": "u1", "data": {"name": "A"}}
    assert http.sent[2][2]["json"] == {"data": {"name": "B"}}


def test_upload_file_is_multipart():
    client, http = _client(Dummy(201, {"$id": "f1"}))
    fid = client.upload_file("user-avatars", UploadFile("me.png", b"abc", "image/png"))
    assert fid == "f1"
    _, url, kw, _ = http.sent[0]
    assert url == f"{ENDPOINT}/storage/buckets/user-avatars/files"
    assert kw["data"] == {"fileId": "unique()"}
    assert kw["files"]["file"] == ("me.png", b"abc", "image/png")
    assert kw["json"] is None


@pytest.mark.parametrize("status,body,exc", [
    (401, {"message": "Invalid credentials", "type": "user_invalid_credentials"}, AuthError),
    (401, {"message": "missing scope", "type": "general_unauthorized_scope"}, NotAuthenticated),
    (404, {"message": "File not found", "type": "storage_file_not_found"}, NotFound),
    (409, {"message": "exists", "type": "user_already_exists"}, Conflict),
    (400, {"message": "bad email", "type": "general_argument_invalid"}, ValidationError),
    (500, {"message": "boom"}, AppwriteError),
])
def test_errors_are_mapped(status, body, exc):
    client, _ = _client(Dummy(status, body))
    with pytest.raises(exc) as info:
        client.get_current_user()
    assert info.value.code == status
    assert str(info.value) == body["message"]


def test_error_without_json_body():
    client, _ = _client(Dummy(502, None, reason="Bad Gateway"))
    with pytest.raises(AppwriteError, match="Bad Gateway"):
        client.delete_file("user-avatars", "f1")


def test_transport_failure_is_network_error():
    client, _ = _client(requests.ConnectionError("refused"))
    with pytest.raises(NetworkError):
        client.get_current_user()


def test_urls():
    client, _ = _client()
    assert client.file_preview_url("user-avatars", "f1", width=96) == (
        f"{ENDPOINT}/storage/buckets/user-avatars/files/f1/preview?project=proj&width=96"
    )
    assert client.initials_avatar_url("Ann Lee") == f"{ENDPOINT}/avatars/initials?name=Ann+Lee&project=proj"
