import streamlit as st
from fishlog.utils.logging import logger
from fishlog.core.appwrite_client import AppwriteClient
from fishlog.core.auth_store import AuthStore
from fishlog.core.view_controller import ViewController
from fishlog.services.notifications import StreamlitNotifier
from fishlog.services.storage import SnapshotStore

def initialize() -> None:
    if st.session_state.get("_initialized"):
        return
    logger.info("Initializing session state")

    # every browser session gets its own client (own cookies) and its own slot
    store = AuthStore(AppwriteClient(), SnapshotStore(st.session_state), StreamlitNotifier())
    controller = ViewController("dashboard")
    store.subscribe(controller.on_state)

    st.session_state["auth_store"] = store
    st.session_state["view_controller"] = controller
    st.session_state.setdefault("current_page", "Dashboard")

    # snapshot first so the shell can render, then the authoritative check
    store.hydrate()
    store.check_auth()

    st.session_state["_initialized"] = True

def get_store() -> AuthStore:
    return st.session_state["auth_store"]
