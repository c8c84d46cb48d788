import streamlit as st
from fishlog.config.settings import APP_NAME
from fishlog.services import notifications

def render() -> None:
    st.markdown(
        """
        <style>
        .fl-header{background:linear-gradient(90deg,#0b4f6c,#1f7a8c);padding:12px;border-radius:8px;margin:8px 0 16px}
        .fl-header h1{color:#fff;margin:0;text-align:center;font-weight:700}
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.markdown(f'<div class="fl-header"><h1>🎣 {APP_NAME}</h1></div>', unsafe_allow_html=True)

    for note in notifications.drain():
        st.toast(note.message, icon="✅" if note.level == "success" else "⚠️")
