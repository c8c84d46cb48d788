import streamlit as st
from fishlog.app import routing, state
from fishlog.config.schema import IMAGE_EXTENSIONS
from fishlog.utils.errors import ui_error_boundary, run_action
from fishlog.utils.typing import (
    CATCH_VIEWS, DASHBOARD_VIEWS, DATE_FORMATS, MEASUREMENT_SYSTEMS, THEMES, UploadFile,
)

@ui_error_boundary
def render() -> None:
    st.header("⚙️ Settings")
    profile_tab, prefs_tab, account_tab = st.tabs(["Profile", "Preferences", "Account"])
    with profile_tab:
        _render_profile()
    with prefs_tab:
        _render_preferences()
    with account_tab:
        _render_account()

def _render_profile() -> None:
    store = state.get_store()
    user = store.user
    with st.form("profile_form"):
        name = st.text_input("Name", value=user.name)
        email = st.text_input("Email", value=user.email)
        password = st.text_input(
            "Current password", type="password", help="Only needed when changing your email"
        )
        uploaded = st.file_uploader("New profile picture", type=list(IMAGE_EXTENSIONS))
        submitted = st.form_submit_button("Save profile")
    if not submitted:
        return

    fields = {}
    if name != user.name:
        fields["name"] = name
    if email != user.email:
        fields["email"] = email
    avatar = UploadFile.from_uploaded(uploaded) if uploaded else None
    if not fields and avatar is None:
        st.info("Nothing to update.")
        return
    run_action(store.update_profile, fields, avatar=avatar, password=password or None)
    st.rerun()

def _render_preferences() -> None:
    store = state.get_store()
    prefs = store.preferences
    if prefs is None:
        st.info("Preferences are not loaded yet.")
        return
    notif = prefs.notifications
    privacy = prefs.privacy
    display = prefs.display_settings
    views = DASHBOARD_VIEWS + CATCH_VIEWS

    with st.form("preferences_form"):
        theme = st.selectbox("Theme", THEMES, index=THEMES.index(prefs.theme))

        st.markdown("**Notifications**")
        notifications = {
            "email": st.checkbox("Email", value=notif.email),
            "push": st.checkbox("Push", value=notif.push),
            "groupInvites": st.checkbox("Group invites", value=notif.group_invites),
            "challengeUpdates": st.checkbox("Challenge updates", value=notif.challenge_updates),
            "newComments": st.checkbox("New comments", value=notif.new_comments),
        }

        st.markdown("**Privacy**")
        privacy_flags = {
            "showEmail": st.checkbox("Show email", value=privacy.show_email),
            "showLocation": st.checkbox("Show location", value=privacy.show_location),
            "publicProfile": st.checkbox("Public profile", value=privacy.public_profile),
        }

        st.markdown("**Display**")
        display_settings = {
            "defaultCatchView": st.selectbox(
                "Default view", views, index=views.index(display.default_catch_view)
            ),
            "measurementSystem": st.selectbox(
                "Units", MEASUREMENT_SYSTEMS,
                index=MEASUREMENT_SYSTEMS.index(display.measurement_system),
            ),
            "dateFormat": st.selectbox(
                "Date format", DATE_FORMATS, index=DATE_FORMATS.index(display.date_format)
            ),
        }
        submitted = st.form_submit_button("Save preferences")

    if not submitted:
        return
    current = prefs.to_dict()
    changed = {
        group: value
        for group, value in {
            "theme": theme,
            "notifications": notifications,
            "privacy": privacy_flags,
            "displaySettings": display_settings,
        }.items()
        if value != current[group]
    }
    if not changed:
        st.info("Nothing to update.")
        return
    run_action(store.update_preferences, changed)
    st.rerun()

def _render_account() -> None:
    store = state.get_store()
    st.warning("Deleting your account removes your profile and picture permanently.")
    if st.button("🗑️ Delete account", type="secondary"):
        st.session_state["show_delete_warning"] = True

    if st.session_state.get("show_delete_warning", False):
        col1, col2 = st.columns(2)
        with col1:
            if st.button("⚠️ Confirm delete", type="primary"):
                st.session_state["show_delete_warning"] = False
                if run_action(store.delete_account):
                    routing.set_page(routing.PAGES[0])
                st.rerun()
        with col2:
            if st.button("❌ Cancel"):
                st.session_state["show_delete_warning"] = False
                st.rerun()
