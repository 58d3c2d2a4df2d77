"""
Conversation logging.

Sessions hand their history to a ConversationSink after every AI turn. The
default sink appends one JSON object per line to a rotating log file.
"""

import asyncio
import json
import logging
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol

from pydantic import BaseModel, Field

from .config import config
from .logging_config import get_logger

logger = get_logger(__name__)

ACCESS_LOG_NAME = "ghostwriter-access.log"


class ConversationRecord(BaseModel):
    """What a session reports to the sink."""
    conversation: List[Dict[str, Any]]
    settings: Dict[str, Any] = Field(default_factory=dict)
    metadata: Dict[str, Any] = Field(default_factory=dict)


class ConversationSink(Protocol):
    async def record(self, record: ConversationRecord) -> None: ...


class JsonlConversationLog:
    """
    Appends conversation records to `ghostwriter-access.log`, one JSON
    object per line, rotating at 10MB.
    """

    def __init__(self, log_dir: Optional[Path] = None, max_bytes: int = 10 * 1024 * 1024, backup_count: int = 5):
        self.log_dir = Path(log_dir) if log_dir else config.logs_dir
        self.log_dir.mkdir(exist_ok=True, parents=True)
        self.path = self.log_dir / ACCESS_LOG_NAME

        # A dedicated logger per file keeps records out of the application log
        self._writer = logging.getLogger(f"ghostwriter.access.{self.path}")
        self._writer.setLevel(logging.INFO)
        self._writer.propagate = False
        if not self._writer.handlers:
            handler = RotatingFileHandler(self.path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")
            handler.setFormatter(logging.Formatter("%(message)s"))
            self._writer.addHandler(handler)

    async def record(self, record: ConversationRecord) -> None:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "metadata": record.metadata,
            "conversation": record.conversation,
            "settings": record.settings,
        }
        line = json.dumps(entry, ensure_ascii=False, default=str)
        await asyncio.to_thread(self._writer.info, line)
        logger.info(
            f"Logged conversation ({len(record.conversation)} entries) "
            f"for {record.metadata.get('session_id', 'unknown session')}"
        )

    def close(self) -> None:
        for handler in list(self._writer.handlers):
            handler.close()
            self._writer.removeHandler(handler)

    def read_records(self) -> List[dict]:
        """Parse the current log file (not rotated backups)."""
        if not self.path.exists():
            return []
        records = []
        with open(self.path, encoding="utf-8") as handle:
            for line in handle:
                line = line.strip()
                if line:
                    records.append(json.loads(line))
        return records
