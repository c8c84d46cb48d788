import streamlit as st
from fishlog.app import routing, state
from fishlog.utils.errors import ui_error_boundary

@ui_error_boundary
def render() -> None:
    store = state.get_store()
    user = store.user
    prefs = store.preferences
    view = routing.get_current_view()

    st.header(f"Hi {user.name}")
    display = prefs.display_settings if prefs else None

    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("View", view.title())
    with col2:
        st.metric("Units", display.measurement_system.title() if display else "-")
    with col3:
        st.metric("Date format", display.date_format if display else "-")

    st.markdown("---")
    if view == "calendar":
        render_calendar()
    elif view == "groups":
        render_groups()
    else:
        render_overview()

def render_overview() -> None:
    st.markdown("### 📈 Overview")
    st.info("Your recent catches will show up here.")

def render_calendar() -> None:
    st.markdown("### 📅 Calendar")
    st.info("Upcoming group events will show up here.")

def render_groups() -> None:
    st.markdown("### 👥 Groups")
    st.info("Groups you belong to will show up here.")
