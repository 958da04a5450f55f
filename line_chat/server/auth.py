"""Password hashing and the register/login operations."""
import bcrypt

from .errors import InternalError, InvalidPasswordError, NameTakenError, UserNotFoundError
from .logging_config import configure_logging
from .schemas import UserOut
from .session import Session
from .users import CredentialStore

logger = configure_logging()

BCRYPT_ROUNDS = 12


def hash_password(password: str) -> str:
    try:
        return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode()
    except ValueError as exc:
        logger.warning("HASH_FAIL reason=%s", exc)
        raise InternalError() from exc


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except ValueError:
        return False


def register(store: CredentialStore, session: Session, name: str, password: str) -> UserOut:
    """Create ``name`` and bind it to ``session``.

    Raises NameTakenError if the name exists, InternalError if hashing fails
    and StorageError if the store cannot be read or written.
    """
    try:
        store.find_by_name(name)
    except UserNotFoundError:
        pass
    else:
        logger.info("REGISTER_FAIL name=%s reason=name_taken addr=%s", name, session.remote_addr)
        raise NameTakenError()

    user = store.create(name, hash_password(password))
    session.bind(user)
    logger.info("REGISTER_SUCCESS name=%s user_id=%s addr=%s", user.name, user.id, session.remote_addr)
    return user


def login(store: CredentialStore, session: Session, name: str, password: str) -> UserOut:
    """Verify ``password`` for ``name`` and bind the user to ``session``."""
    try:
        user, password_hash = store.credentials(name)
    except UserNotFoundError:
        logger.info("LOGIN_FAIL name=%s reason=not_found addr=%s", name, session.remote_addr)
        raise

    if not verify_password(password, password_hash):
        logger.info("LOGIN_FAIL name=%s reason=bad_password addr=%s", name, session.remote_addr)
        raise InvalidPasswordError()

    session.bind(user)
    logger.info("LOGIN_SUCCESS name=%s user_id=%s addr=%s", user.name, user.id, session.remote_addr)
    return user
