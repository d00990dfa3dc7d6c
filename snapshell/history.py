import json
import logging
import os
from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from typing import List, Optional

from .exceptions import HistoryError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HistoryEntry:
    timestamp: str
    prompt: str
    command: str

    @classmethod
    def create(cls, prompt: str, command: str, now: Optional[datetime] = None) -> "HistoryEntry":
        """Stamp a new entry with the current UTC time in RFC 3339 form."""
        now = now or datetime.now(timezone.utc)
        return cls(timestamp=now.isoformat(), prompt=prompt, command=command)

    def format(self) -> str:
        return f"{self.timestamp} -> {self.prompt}\n  {self.command}"


class HistoryStore:
    """
    Append-only log of prompts and the commands they produced.

    Each entry is one JSON object on its own line. The file and its parent
    directories are created on the first append.
    """

    def __init__(self, path: str):
        self.path = path

    def exists(self) -> bool:
        return os.path.exists(self.path)

    def append(self, entry: HistoryEntry) -> None:
        """
        Write one entry to the end of the log.

        Raises:
            HistoryError: If the directory or file cannot be written.
        """
        line = json.dumps(asdict(entry), ensure_ascii=False) + "\n"
        try:
            parent = os.path.dirname(self.path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(line)
        except OSError as e:
            raise HistoryError(f"{self.path}: {e}") from e
        logger.info(f"Saved history entry to {self.path}")

    def record(self, prompt: str, command: str) -> HistoryEntry:
        entry = HistoryEntry.create(prompt, command)
        self.append(entry)
        return entry

    def read(self) -> List[HistoryEntry]:
        """
        Read every entry in the order it was appended.

        Lines that are not valid entries are skipped. A missing file reads as
        an empty history.

        Raises:
            HistoryError: If the file exists but cannot be read.
        """
        if not self.exists():
            return []

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                lines = f.read().splitlines()
        except (OSError, UnicodeDecodeError) as e:
            raise HistoryError(f"{self.path}: {e}") from e

        entries = []
        for number, line in enumerate(lines, 1):
            try:
                data = json.loads(line)
                entries.append(HistoryEntry(
                    timestamp=data["timestamp"],
                    prompt=data["prompt"],
                    command=data["command"],
                ))
            except (json.JSONDecodeError, KeyError, TypeError):
                logger.warning(f"Skipping malformed history line {number} in {self.path}")
        return entries


def print_history(store: HistoryStore) -> None:
    """Print every recorded entry, or ``no history`` when nothing was ever saved."""
    if not store.exists():
        print("no history")
        return
    for entry in store.read():
        print(entry.format())
