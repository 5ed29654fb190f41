"""Learning-progress document store.

The whole progress document lives under one fixed key in a small JSON file
and is read and written wholesale on every update. Timestamps are epoch
milliseconds so exported documents stay interchangeable with the browser
copy of the same data.
"""

from __future__ import annotations

import copy
import json
import logging
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Callable

from xsspage.exceptions import ProgressError

logger = logging.getLogger(__name__)

STORAGE_KEY = "xss-page-learning-progress"
SCHEMA_VERSION = "1.0.0"

NOT_STARTED = "not-started"
IN_PROGRESS = "in-progress"
COMPLETED = "completed"

_EMPTY_STATS: dict[str, Any] = {
    "totalPoints": 0,
    "challengesCompleted": 0,
    "lessonsCompleted": 0,
    "pathsCompleted": 0,
    "totalTimeSpent": 0,
    "streak": 0,
    "lastActiveDate": None,
}


def default_document(timestamp: int | None = None) -> dict[str, Any]:
    """A fresh, empty progress document."""
    return {
        "version": SCHEMA_VERSION,
        "lastUpdated": timestamp,
        "paths": {},
        "lessons": {},
        "challenges": {},
        "stats": copy.deepcopy(_EMPTY_STATS),
    }


class ProgressStore:
    """Read-modify-write access to the progress document.

    Every mutating method loads the current document, applies one change,
    saves it back and returns the updated document.

    Usage::

        store = ProgressStore(Path("~/.xsspage/progress.json").expanduser())
        store.start_lesson("reflected-basics")
        store.complete_challenge("reflected-1", points=10, solution="<svg onload=alert(1)>")
        print(store.get_stats()["totalPoints"])
    """

    def __init__(
        self,
        path: Path,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.path = path
        self._clock = clock or datetime.now

    def _now_ms(self) -> int:
        return int(self._clock().timestamp() * 1000)

    # -- Storage ------------------------------------------------------------

    def _read_container(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Failed to load progress from %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring progress file %s: not a JSON object", self.path)
            return {}
        return data

    def load(self) -> dict[str, Any]:
        """Return the stored document, or a fresh one if none is usable.

        Documents written under another schema version are overlaid onto
        the current defaults.
        """
        stored = self._read_container().get(STORAGE_KEY)
        if not isinstance(stored, dict):
            return default_document(self._now_ms())

        if stored.get("version") != SCHEMA_VERSION:
            logger.info(
                "Migrating progress from version %s to %s",
                stored.get("version"), SCHEMA_VERSION,
            )
            migrated = default_document()
            migrated.update(stored)
            migrated["version"] = SCHEMA_VERSION
            migrated["lastUpdated"] = self._now_ms()
            return migrated

        for section in ("paths", "lessons", "challenges"):
            stored.setdefault(section, {})
        stored.setdefault("stats", copy.deepcopy(_EMPTY_STATS))
        return stored

    def save(self, document: dict[str, Any]) -> None:
        """Stamp ``lastUpdated`` and write the whole document."""
        document["lastUpdated"] = self._now_ms()
        container = self._read_container()
        container[STORAGE_KEY] = document
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(container, indent=2), encoding="utf-8")

    def reset(self) -> bool:
        """Delete stored progress. Returns True if anything was removed."""
        container = self._read_container()
        if STORAGE_KEY not in container:
            return False
        del container[STORAGE_KEY]
        if container:
            self.path.write_text(json.dumps(container, indent=2), encoding="utf-8")
        else:
            self.path.unlink()
        return True

    def export(self) -> str:
        return json.dumps(self.load(), indent=2)

    def import_document(self, text: str) -> dict[str, Any]:
        """Replace stored progress with an exported document.

        Raises:
            ProgressError: If *text* is not JSON, not an object, or lacks
                ``version`` or ``stats``.
        """
        try:
            imported = json.loads(text)
        except ValueError as exc:
            raise ProgressError(f"Progress data is not valid JSON: {exc}") from exc
        if not isinstance(imported, dict):
            raise ProgressError("Progress data must be a JSON object")
        if not imported.get("version") or not imported.get("stats"):
            raise ProgressError("Invalid progress data structure")
        self.save(imported)
        return imported

    # -- Updates ------------------------------------------------------------

    def start_path(self, path_id: str) -> dict[str, Any]:
        progress = self.load()
        if path_id not in progress["paths"]:
            progress["paths"][path_id] = {
                "status": IN_PROGRESS,
                "startedAt": self._now_ms(),
                "completedAt": None,
                "progress": 0,
            }
            self.save(progress)
        return progress

    def start_lesson(self, lesson_id: str) -> dict[str, Any]:
        progress = self.load()
        if lesson_id not in progress["lessons"]:
            progress["lessons"][lesson_id] = {
                "status": IN_PROGRESS,
                "startedAt": self._now_ms(),
                "completedAt": None,
                "timeSpent": 0,
                "quizScore": None,
                "challengesCompleted": [],
            }
            self.save(progress)
        return progress

    def complete_challenge(
        self,
        challenge_id: str,
        points: int,
        solution: str,
        attempts: int = 1,
        hints_used: int = 0,
    ) -> dict[str, Any]:
        """Record a solved challenge.

        Points, the completion counter and the streak only move the first
        time a challenge is completed.
        """
        progress = self.load()
        already = bool(progress["challenges"].get(challenge_id, {}).get("completed"))

        progress["challenges"][challenge_id] = {
            "completed": True,
            "completedAt": self._now_ms(),
            "solution": solution,
            "points": points,
            "attempts": attempts,
            "hintsUsed": hints_used,
        }

        if not already:
            stats = progress["stats"]
            stats["challengesCompleted"] = stats.get("challengesCompleted", 0) + 1
            stats["totalPoints"] = stats.get("totalPoints", 0) + points
            self._update_streak(stats)

        self.save(progress)
        return progress

    def add_challenge_to_lesson(self, lesson_id: str, challenge_id: str) -> dict[str, Any]:
        progress = self.load()
        lesson = progress["lessons"].get(lesson_id)
        if lesson is not None:
            completed = lesson.setdefault("challengesCompleted", [])
            if challenge_id not in completed:
                completed.append(challenge_id)
            self.save(progress)
        return progress

    def complete_lesson(self, lesson_id: str, quiz_score: int | None = None) -> dict[str, Any]:
        progress = self.load()
        lesson = progress["lessons"].get(lesson_id, {})
        already = lesson.get("status") == COMPLETED

        progress["lessons"][lesson_id] = {
            **lesson,
            "status": COMPLETED,
            "completedAt": self._now_ms(),
            "quizScore": quiz_score,
        }
        if not already:
            stats = progress["stats"]
            stats["lessonsCompleted"] = stats.get("lessonsCompleted", 0) + 1

        self.save(progress)
        return progress

    def complete_path(self, path_id: str) -> dict[str, Any]:
        progress = self.load()
        path = progress["paths"].get(path_id, {})
        already = path.get("status") == COMPLETED

        progress["paths"][path_id] = {
            **path,
            "status": COMPLETED,
            "completedAt": self._now_ms(),
            "progress": 100,
        }
        if not already:
            stats = progress["stats"]
            stats["pathsCompleted"] = stats.get("pathsCompleted", 0) + 1

        self.save(progress)
        return progress

    def _update_streak(self, stats: dict[str, Any]) -> None:
        """Extend the daily streak, or restart it after a missed day."""
        today = self._clock().date()
        last_ms = stats.get("lastActiveDate")
        last_active = (
            datetime.fromtimestamp(last_ms / 1000).date() if last_ms else None
        )
        if last_active == today:
            return
        if last_active == today - timedelta(days=1):
            stats["streak"] = stats.get("streak", 0) + 1
        else:
            stats["streak"] = 1
        stats["lastActiveDate"] = self._now_ms()

    # -- Queries ------------------------------------------------------------

    def get_stats(self) -> dict[str, Any]:
        return self.load()["stats"]

    def get_challenge(self, challenge_id: str) -> dict[str, Any] | None:
        return self.load()["challenges"].get(challenge_id)

    def get_lesson(self, lesson_id: str) -> dict[str, Any] | None:
        return self.load()["lessons"].get(lesson_id)

    def get_path(self, path_id: str) -> dict[str, Any] | None:
        return self.load()["paths"].get(path_id)
