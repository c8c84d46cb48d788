"""
FishLog - Streamlit entry point

    streamlit run fishlog/app/main.py
"""
import streamlit as st

from fishlog.config.settings import APP_NAME
from fishlog.utils import errors, logging as app_logging
from fishlog.app import routing, state
from fishlog.components import header, sidebar
from fishlog.views import auth, dashboard, settings

def configure_page() -> None:
    st.set_page_config(
        page_title=APP_NAME,
        page_icon="🎣",
        layout="wide",
        initial_sidebar_state="expanded",
    )

@errors.ui_error_boundary
def main() -> None:
    app_logging.init()
    configure_page()
    state.initialize()
    header.render()

    store = state.get_store()
    if store.is_loading:
        st.info("Checking your session...")
        return
    if not store.state.is_authenticated:
        auth.render()
        return

    sidebar.render()
    if routing.get_current_page() == "Settings":
        settings.render()
    else:
        dashboard.render()

if __name__ == "__main__":
    main()
