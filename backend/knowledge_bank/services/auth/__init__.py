"""
Auth adapters and the session state holder.
"""
from .base import AuthInterface, AuthSubscription
from .factory import AuthFactory
from .memory_auth import MemoryAuth
from .session_state import SessionState

__all__ = ["AuthInterface", "AuthSubscription", "AuthFactory", "MemoryAuth", "SessionState"]
