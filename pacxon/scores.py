"""
High score persistence.

Scores live in a small JSON file: a list of ``{name, score, level, date}``
objects, best first.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import List

logger = logging.getLogger(__name__)


def _timestamp() -> str:
    return datetime.now().isoformat(timespec='seconds')


@dataclass
class HighScoreEntry:
    """A single row of the high score table."""
    name: str
    score: int
    level: int
    date: str = field(default_factory=_timestamp)

    @classmethod
    def from_dict(cls, data: dict) -> 'HighScoreEntry':
        """Build an entry from its JSON form; raises on missing fields."""
        return cls(
            name=str(data['name']),
            score=int(data['score']),
            level=int(data['level']),
            date=str(data.get('date', '')),
        )


class HighScoreTable:
    """
    Bounded, sorted high score list backed by a JSON file.

    Args:
        path: Location of the JSON file
        limit: Maximum number of entries kept
    """

    def __init__(self, path: str, limit: int = 10):
        self.path = path
        self.limit = limit
        self.entries: List[HighScoreEntry] = self.load()

    def load(self) -> List[HighScoreEntry]:
        """
        Read the table from disk.

        A missing file yields an empty table; unreadable or malformed content
        is logged and also yields an empty table.
        """
        if not os.path.exists(self.path):
            return []

        try:
            with open(self.path, encoding='utf-8') as fh:
                data = json.load(fh)
            entries = [HighScoreEntry.from_dict(row) for row in data]
        except (OSError, ValueError, TypeError, KeyError) as e:
            logger.warning("Error loading high scores from %s: %s", self.path, e)
            return []

        entries.sort(key=lambda entry: entry.score, reverse=True)
        return entries[:self.limit]

    def save(self):
        """Write the table to disk; failures are logged and otherwise ignored."""
        try:
            with open(self.path, 'w', encoding='utf-8') as fh:
                json.dump([asdict(entry) for entry in self.entries], fh, indent=2)
        except OSError as e:
            logger.error("Error saving high scores to %s: %s", self.path, e)

    def add(self, name: str, score: int, level: int) -> HighScoreEntry:
        """
        Insert a score, keep the best ``limit`` entries and persist.

        Ties keep earlier entries ahead of the new one.

        Returns:
            The created entry (which may already have been cut off)
        """
        entry = HighScoreEntry(name, score, level)
        self.entries.append(entry)
        self.entries.sort(key=lambda e: e.score, reverse=True)
        del self.entries[self.limit:]
        self.save()
        logger.info("High score %s: %d (level %d)", name, score, level)
        return entry

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)
