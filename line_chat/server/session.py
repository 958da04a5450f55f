"""Per-connection authentication state."""
from dataclasses import dataclass, field
from itertools import count
from typing import Optional

from .schemas import ChatRecord, UserOut

_connection_ids = count(1)


@dataclass
class Session:
    """Identity bound to one connection.

    Owned by a single connection handler. Starts unauthenticated and is only
    changed by a successful register or login.
    """

    remote_addr: str
    connection_id: int = field(default_factory=lambda: next(_connection_ids))
    user: Optional[UserOut] = None

    @property
    def authenticated(self) -> bool:
        return self.user is not None

    @property
    def display_name(self) -> str:
        return self.user.name if self.user else self.remote_addr

    def bind(self, user: UserOut) -> None:
        self.user = user

    def record(self, text: str) -> ChatRecord:
        """Build the log record for a payload line sent on this session."""
        if self.user:
            return ChatRecord(user_id=self.user.id, user_name=self.user.name, addr=self.remote_addr, text=text)
        return ChatRecord(addr=self.remote_addr, text=text)
