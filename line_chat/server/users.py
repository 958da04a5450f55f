"""Credential store backed by the ``users`` table."""
import threading
from typing import List, Tuple

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from .errors import NameTakenError, StorageError, UserNotFoundError
from .models import User
from .schemas import UserOut


class CredentialStore:
    """Create and look up user credentials.

    Safe to share between connection threads: every call opens its own
    database session under a store-wide lock. Uncommitted work is rolled
    back when the session closes.
    """

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory
        self._lock = threading.Lock()

    def create(self, name: str, password_hash: str) -> UserOut:
        try:
            with self._lock, self._session_factory() as db:
                if db.query(User).filter(User.name == name).first():
                    raise NameTakenError()
                user = User(name=name, password_hash=password_hash)
                db.add(user)
                db.commit()
                db.refresh(user)
                return UserOut.model_validate(user)
        except IntegrityError as exc:
            raise NameTakenError() from exc
        except SQLAlchemyError as exc:
            raise StorageError(f"create user {name!r} failed") from exc

    def find_by_name(self, name: str) -> UserOut:
        user, _ = self.credentials(name)
        return user

    def credentials(self, name: str) -> Tuple[UserOut, str]:
        """Return the user named ``name`` and its stored password hash."""
        try:
            with self._lock, self._session_factory() as db:
                user = db.query(User).filter(User.name == name).first()
                if not user:
                    raise UserNotFoundError()
                return UserOut.model_validate(user), user.password_hash
        except SQLAlchemyError as exc:
            raise StorageError(f"lookup user {name!r} failed") from exc

    def list_all(self) -> List[UserOut]:
        try:
            with self._lock, self._session_factory() as db:
                return [UserOut.model_validate(u) for u in db.query(User).order_by(User.id).all()]
        except SQLAlchemyError as exc:
            raise StorageError("list users failed") from exc
