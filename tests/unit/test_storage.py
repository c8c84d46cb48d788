from fishlog.services.storage import SnapshotStore

SNAP = {"user": {"id": "u1", "email": "a@b.c", "name": "A", "avatar": None}, "preferences": None}

def test_snapshot_round_trip():
    slot = {}
    store = SnapshotStore(slot)
    assert store.load() is None
    store.save(SNAP)
    assert store.load() == SNAP
    assert isinstance(slot["auth-storage"], str)

def test_corrupt_snapshot_is_ignored():
    slot = {"auth-storage": "{not json"}
    assert SnapshotStore(slot).load() is None
    slot["auth-storage"] = "[1, 2]"
    assert SnapshotStore(slot).load() is None
    slot["auth-storage"] = 42
    assert SnapshotStore(slot).load() is None

def test_clear_removes_only_own_key():
    slot = {"other": 1}
    store = SnapshotStore(slot)
    store.save(SNAP)
    store.clear()
    store.clear()
    assert slot == {"other": 1}

def test_slots_are_independent():
    a, b = SnapshotStore({}), SnapshotStore({})
    a.save(SNAP)
    assert b.load() is None
