"""Dispatcher for ``/``-prefixed session commands."""
from typing import Callable, Dict, List

from . import auth
from .errors import InternalError, StorageError, UnknownCommandError, UsageError
from .logging_config import configure_logging
from .session import Session
from .users import CredentialStore
from ..shared.protocol import COMMAND_PREFIX

logger = configure_logging()

NO_OTHER_USERS = "(no other users)"


class CommandDispatcher:
    """Route command lines to their handlers.

    Handlers return the reply line on success and raise CommandError on
    failure. Only a successful register or login touches the session.
    """

    def __init__(self, store: CredentialStore):
        self.store = store
        self._handlers: Dict[str, Callable[[Session, List[str]], str]] = {
            "register": self._register,
            "login": self._login,
            "list": self._list,
        }
        self._aliases = {"setname": "register", "connect": "login"}

    def dispatch(self, line: str, session: Session) -> str:
        parts = line.split()
        name = parts[0][len(COMMAND_PREFIX):]
        handler = self._handlers.get(self._aliases.get(name, name))
        if handler is None:
            raise UnknownCommandError(name)
        try:
            return handler(session, parts[1:])
        except StorageError:
            logger.exception("COMMAND_FAIL command=%s addr=%s reason=storage", name, session.remote_addr)
            raise InternalError() from None

    def _register(self, session: Session, args: List[str]) -> str:
        if len(args) != 2:
            raise UsageError(f"usage: {COMMAND_PREFIX}register <name> <password>")
        name, password = args
        auth.register(self.store, session, name, password)
        return f"OK: registered and logged in as {name}"

    def _login(self, session: Session, args: List[str]) -> str:
        if len(args) != 2:
            raise UsageError(f"usage: {COMMAND_PREFIX}login <name> <password>")
        name, password = args
        auth.login(self.store, session, name, password)
        return f"OK: logged in as {name}"

    def _list(self, session: Session, args: List[str]) -> str:
        own_id = session.user.id if session.user else None
        names = [u.name for u in self.store.list_all() if u.id != own_id]
        if not names:
            return NO_OTHER_USERS
        return ", ".join(names)
