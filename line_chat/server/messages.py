"""Append-only message log backed by the ``messages`` table."""
import threading
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from .config import TIME_FORMAT
from .errors import StorageError
from .models import Message
from .schemas import ChatRecord


class MessageLog:
    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory
        self._lock = threading.Lock()

    def append(self, record: ChatRecord) -> None:
        message = Message(
            user_id=record.user_id,
            user_name=record.user_name,
            addr=record.addr,
            text=record.text,
            created_at=record.created_at,
        )
        try:
            with self._lock, self._session_factory() as db:
                db.add(message)
                db.commit()
        except SQLAlchemyError as exc:
            raise StorageError("append message failed") from exc

    def scan_ordered(self) -> List[ChatRecord]:
        """Return every recorded line, oldest first."""
        try:
            with self._lock, self._session_factory() as db:
                messages = db.query(Message).order_by(Message.created_at, Message.id).all()
                return [ChatRecord.model_validate(m) for m in messages]
        except SQLAlchemyError as exc:
            raise StorageError("scan messages failed") from exc


def format_history_line(record: ChatRecord) -> str:
    return f"{record.created_at.strftime(TIME_FORMAT)} {record.display_name} {record.text}"
