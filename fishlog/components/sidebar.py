import streamlit as st
from fishlog.app import routing, state
from fishlog.utils.errors import run_action

def render() -> None:
    store = state.get_store()
    user = store.user
    with st.sidebar:
        if user:
            url = store.avatar_url(width=96)
            if url:
                st.image(url, width=64)
            st.markdown(f"**{user.name}**")
            st.caption(user.email)
            st.divider()

        st.header("Navigation")
        current = routing.get_current_page()
        sel = st.radio("Page", routing.PAGES, index=routing.PAGES.index(current))
        if sel != current:
            routing.set_page(sel)
            st.rerun()

        if routing.get_current_page() == "Dashboard":
            controller = routing.get_view_controller()
            view = st.radio(
                "View", controller.views,
                index=controller.views.index(controller.current),
                format_func=str.title,
            )
            if view != controller.current:
                routing.set_view(view)
                st.rerun()

        st.divider()
        if st.button("Log out", use_container_width=True):
            run_action(store.logout)
            st.rerun()
