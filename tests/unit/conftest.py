import itertools
import pytest

from fishlog.core.auth_store import AuthStore
from fishlog.services.notifications import Notifier
from fishlog.services.storage import SnapshotStore
from fishlog.utils.errors import AuthError, Conflict, NotAuthenticated, NotFound


class FakeAppwrite:
    """In-memory stand-in for AppwriteClient with per-method failure injection."""

    def __init__(self):
        self.accounts = {}      # id -> {"$id", "email", "name", "password"}
        self.documents = {}     # (collection, id) -> dict
        self.files = {}         # (bucket, id) -> UploadFile
        self.current = None     # id of the signed-in account
        self.session_secret = None
        self.calls = []
        self.fail = {}          # method name -> exception to raise
        self._ids = itertools.count(1)

    def _enter(self, name, *args):
        self.calls.append((name,) + args)
        if name in self.fail:
            raise self.fail[name]

    def _public(self, account):
        return {"$id": account["$id"], "email": account["email"], "name": account["name"]}

    def forget_session(self):
        self.current = None
        self.session_secret = None

    # account
    def create_account(self, email, password, name):
        self._enter("create_account", email, name)
        if any(a["email"] == email for a in self.accounts.values()):
            raise Conflict("A user with the same email already exists", code=409, type="user_already_exists")
        uid = f"user{next(self._ids)}"
        self.accounts[uid] = {"$id": uid, "email": email, "name": name, "password": password}
        return self._public(self.accounts[uid])

    def create_session(self, email, password):
        self._enter("create_session", email)
        for account in self.accounts.values():
            if account["email"] == email and account["password"] == password:
                self.current = account["$id"]
                self.session_secret = f'{{"a_session_test":"secret-{account["$id"]}"}}'
                return {"$id": "session", "userId": account["$id"]}
        raise AuthError("Invalid credentials", code=401, type="user_invalid_credentials")

    def get_current_user(self):
        self._enter("get_current_user")
        if self.current is None:
            raise NotAuthenticated("User (role: guests) missing scope (account)", code=401)
        return self._public(self.accounts[self.current])

    def delete_session(self, session_id="current"):
        self._enter("delete_session")
        if self.current is None:
            raise NotAuthenticated("Session not found", code=401)
        self.forget_session()

    def update_email(self, email, password):
        self._enter("update_email", email)
        account = self.accounts[self.current]
        if account["password"] != password:
            raise AuthError("Invalid credentials", code=401, type="user_invalid_credentials")
        account["email"] = email
        return self._public(account)

    def update_name(self, name):
        self._enter("update_name", name)
        self.accounts[self.current]["name"] = name
        return self._public(self.accounts[self.current])

    def delete_account(self):
        self._enter("delete_account")
        if self.current is None:
            raise NotAuthenticated("Not authenticated", code=401)
        del self.accounts[self.current]
        self.forget_session()

    # databases
    def get_document(self, collection, document_id):
        self._enter("get_document", collection, document_id)
        try:
            return dict(self.documents[(collection, document_id)])
        except KeyError:
            raise NotFound("Document not found", code=404) from None

    def create_document(self, collection, document_id, fields):
        self._enter("create_document", collection, document_id)
        if (collection, document_id) in self.documents:
            raise Conflict("Document already exists", code=409)
        self.documents[(collection, document_id)] = {"$id": document_id, **fields}
        return dict(self.documents[(collection, document_id)])

    def update_document(self, collection, document_id, fields):
        self._enter("update_document", collection, document_id)
        if (collection, document_id) not in self.documents:
            raise NotFound("Document not found", code=404)
        self.documents[(collection, document_id)].update(fields)
        return dict(self.documents[(collection, document_id)])

    def delete_document(self, collection, document_id):
        self._enter("delete_document", collection, document_id)
        if self.documents.pop((collection, document_id), None) is None:
            raise NotFound("Document not found", code=404)

    # storage
    def upload_file(self, bucket, file):
        self._enter("upload_file", bucket, file.filename)
        fid = f"file{next(self._ids)}"
        self.files[(bucket, fid)] = file
        return fid

    def delete_file(self, bucket, file_id):
        self._enter("delete_file", bucket, file_id)
        if self.files.pop((bucket, file_id), None) is None:
            raise NotFound("File not found", code=404)

    def file_preview_url(self, bucket, file_id, width=None):
        return f"https://appwrite.test/v1/storage/buckets/{bucket}/files/{file_id}/preview"

    def initials_avatar_url(self, name):
        return f"https://appwrite.test/v1/avatars/initials?name={name}"

    def names(self):
        return [c[0] for c in self.calls]


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("FISHLOG_CONFIG_DIR", str(tmp_path))
    return tmp_path


@pytest.fixture
def backend():
    return FakeAppwrite()


@pytest.fixture
def slot():
    """Stand-in for one browser session's ``st.session_state``."""
    return {}


@pytest.fixture
def store(backend, slot, config_dir):
    return AuthStore(backend, SnapshotStore(slot), Notifier())


@pytest.fixture
def signed_in(store, backend):
    """Store with a registered, signed-in user and a clean call log."""
    store.register("ann@example.com", "secret123", "Ann")
    backend.calls.clear()
    store.notifier.history.clear()
    return store
