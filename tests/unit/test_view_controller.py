import pytest
from fishlog.core.auth_store import AuthStore
from fishlog.core.view_controller import ViewController
from fishlog.services.notifications import Notifier
from fishlog.utils.errors import ValidationError
from fishlog.utils.typing import DEFAULT_PREFERENCES

def _prefs(view):
    return DEFAULT_PREFERENCES.merged({"displaySettings": {"defaultCatchView": view}})

def test_catches_variant_seeds_from_preferences():
    vc = ViewController("catches", DEFAULT_PREFERENCES)
    assert vc.current == "grid"
    assert vc.views == ("table", "grid", "timeline")

def test_dashboard_variant_falls_back_to_overview():
    vc = ViewController("dashboard", DEFAULT_PREFERENCES)  # "grid" is not a dashboard view
    assert vc.current == "overview"
    assert ViewController("dashboard").current == "overview"

def test_navigation_sticks_until_preference_changes():
    vc = ViewController("dashboard", _prefs("calendar"))
    assert vc.current == "calendar"
    vc.select("groups")
    assert vc.sync(_prefs("calendar")) == "groups"
    assert vc.sync(None) == "groups"
    assert vc.sync(_prefs("overview")) == "overview"

def test_select_rejects_unknown_view():
    vc = ViewController("catches")
    with pytest.raises(ValidationError):
        vc.select("calendar")
    with pytest.raises(ValueError):
        ViewController("kanban")

def test_follows_store_preferences(backend, config_dir):
    store = AuthStore(backend, notifier=Notifier())
    vc = ViewController("dashboard")
    store.subscribe(vc.on_state)
    store.register("ann@example.com", "secret123", "Ann")
    assert vc.current == "overview"
    store.update_preferences({"displaySettings": {"defaultCatchView": "groups"}})
    assert vc.current == "groups"
