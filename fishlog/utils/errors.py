import functools, traceback
from typing import Optional
import streamlit as st
from fishlog.utils.logging import logger

class FishLogError(Exception): ...
class ValidationError(FishLogError): ...

class AppwriteError(FishLogError):
    """Failure reported by (or while talking to) the Appwrite backend."""

    def __init__(self, message: str, code: Optional[int] = None, type: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.type = type

class AuthError(AppwriteError): ...
class NotAuthenticated(AppwriteError): ...
class Conflict(AppwriteError): ...
class NotFound(AppwriteError): ...
class NetworkError(AppwriteError): ...

class RemoteValidationError(AppwriteError, ValidationError): ...

def ui_error_boundary(fn):
    @functools.wraps(fn)
    def _wrap(*a, **k):
        try:
            return fn(*a, **k)
        except Exception as e:
            logger.error("UI error in %s: %s", fn.__name__, e, exc_info=True)
            st.error("Unexpected error. See details below.")
            with st.expander("Error details"):
                st.code("".join(traceback.format_exception(type(e), e, e.__traceback__)))
    return _wrap

def handle_fatal(e: Exception) -> None:
    logger.critical("Fatal error: %s", e, exc_info=True)
    st.error("Critical error: the application cannot continue.")
    st.stop()

def run_action(fn, *a, **k) -> bool:
    """Run a store action from a widget. The store has already notified any failure."""
    try:
        fn(*a, **k)
        return True
    except FishLogError as e:
        logger.debug("action %s rejected: %s", getattr(fn, "__name__", fn), e)
        return False
