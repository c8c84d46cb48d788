import streamlit as st
from fishlog.core.view_controller import ViewController

PAGES = ["Dashboard", "Settings"]

def get_current_page() -> str:
    return st.session_state.get("current_page", PAGES[0])

def set_page(page: str) -> None:
    st.session_state["current_page"] = page

def get_view_controller() -> ViewController:
    return st.session_state["view_controller"]

def get_current_view() -> str:
    return get_view_controller().current

def set_view(view_name: str) -> None:
    get_view_controller().select(view_name)
