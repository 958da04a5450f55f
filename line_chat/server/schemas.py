"""Pydantic value objects handed out by the storage adapters."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    created_at: datetime


class ChatRecord(BaseModel):
    """One recorded payload line.

    ``user_name`` is set only when the line arrived over an authenticated
    session; otherwise the record is attributed to ``addr``.
    """

    model_config = ConfigDict(from_attributes=True)

    user_id: Optional[int] = None
    user_name: Optional[str] = None
    addr: str
    text: str
    created_at: datetime = Field(default_factory=datetime.now)

    @property
    def display_name(self) -> str:
        return self.user_name or self.addr
