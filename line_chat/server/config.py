"""Server configuration values."""
import os
from pathlib import Path

from ..shared.protocol import DEFAULT_PORT

BASE_DIR = Path(__file__).resolve().parent
HOST = os.environ.get("LINE_CHAT_HOST", "0.0.0.0")
PORT = int(os.environ.get("LINE_CHAT_PORT", DEFAULT_PORT))
DATABASE_URL = os.environ.get("LINE_CHAT_DATABASE_URL", "sqlite:///chat.db")
LOG_FILE = Path(os.environ.get("LINE_CHAT_LOG_FILE", BASE_DIR / "server.log"))
TIME_FORMAT = "%H:%M"
