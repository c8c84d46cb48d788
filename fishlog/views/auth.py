import streamlit as st
from fishlog.app import state
from fishlog.config.schema import IMAGE_EXTENSIONS
from fishlog.utils.errors import ui_error_boundary, run_action
from fishlog.utils.typing import UploadFile

@ui_error_boundary
def render() -> None:
    st.subheader("Welcome to your fishing log")
    login_tab, register_tab = st.tabs(["Sign in", "Create account"])
    with login_tab:
        _render_login()
    with register_tab:
        _render_register()

def _render_login() -> None:
    with st.form("login_form"):
        email = st.text_input("Email", placeholder="you@example.com")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Sign in", use_container_width=True)
    if submitted:
        run_action(state.get_store().login, email, password)
        st.rerun()

def _render_register() -> None:
    with st.form("register_form"):
        name = st.text_input("Name", placeholder="John Doe")
        email = st.text_input("Email", placeholder="you@example.com", key="register_email")
        password = st.text_input("Password", type="password", key="register_password")
        uploaded = st.file_uploader(
            "Profile picture (optional)",
            type=list(IMAGE_EXTENSIONS),
            help="Max file size: 5MB. Supported formats: JPEG, PNG, WebP",
        )
        submitted = st.form_submit_button("Create account", use_container_width=True)
    if submitted:
        avatar = UploadFile.from_uploaded(uploaded) if uploaded else None
        run_action(state.get_store().register, email, password, name, avatar)
        st.rerun()
