"""
Per-request view of who is calling.

A ``SessionContext`` is built for every request and handed to routes
through FastAPI dependencies. It starts unresolved; ``initialize`` is
called exactly once when the identity lookup finishes, and anything that
needs the user awaits ``wait_ready`` instead of polling.
"""
import asyncio
from typing import Any, Dict, Optional

DEFAULT_ROLE = "viewer"


class SessionContext:
    def __init__(self, token: Optional[str] = None):
        self.token = token
        self.user: Optional[Dict[str, Any]] = None
        self.profile: Optional[Dict[str, Any]] = None
        self._ready = asyncio.Event()

    def initialize(self, user: Optional[Dict[str, Any]], profile: Optional[Dict[str, Any]]) -> None:
        if self._ready.is_set():
            raise RuntimeError("Session already initialized")
        self.user = user
        self.profile = profile
        self._ready.set()

    @property
    def ready(self) -> bool:
        return self._ready.is_set()

    async def wait_ready(self) -> "SessionContext":
        await self._ready.wait()
        return self

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def user_id(self) -> Optional[str]:
        return self.user.get("localId") if self.user else None

    @property
    def email(self) -> Optional[str]:
        return self.user.get("email") if self.user else None

    @property
    def role(self) -> str:
        return (self.profile or {}).get("role") or DEFAULT_ROLE

    @property
    def name(self) -> str:
        return (self.profile or {}).get("name") or self.email or "User"

    @property
    def disabled(self) -> bool:
        return bool((self.profile or {}).get("disabled"))

    @classmethod
    def anonymous(cls) -> "SessionContext":
        session = cls()
        session.initialize(None, None)
        return session

    @classmethod
    def for_user(cls, user_id: str, email: str, profile: Optional[Dict[str, Any]] = None,
                 token: Optional[str] = None) -> "SessionContext":
        session = cls(token)
        session.initialize({"localId": user_id, "email": email}, profile)
        return session
