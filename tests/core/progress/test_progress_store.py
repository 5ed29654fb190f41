"""Tests for the JSON-file learning-progress store.

Verifies:
    - Defaults, corrupt files and schema migration on load.
    - Idempotent challenge, lesson and path completion.
    - Daily streak arithmetic.
    - Export/import and reset.
"""

from __future__ import annotations

import json
from datetime import datetime, timedelta
from pathlib import Path

import pytest

from xsspage.core.progress import (
    COMPLETED,
    IN_PROGRESS,
    SCHEMA_VERSION,
    STORAGE_KEY,
    ProgressStore,
)
from xsspage.exceptions import ProgressError


class FakeClock:
    """Settable clock for deterministic timestamps and streaks."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 3, 1, 12, 0, 0))


@pytest.fixture
def store(tmp_path: Path, clock: FakeClock) -> ProgressStore:
    return ProgressStore(tmp_path / "progress.json", clock=clock)


class TestLoad:

    def test_missing_file_gives_defaults(self, store: ProgressStore) -> None:
        doc = store.load()
        assert doc["version"] == SCHEMA_VERSION
        assert doc["paths"] == {} and doc["lessons"] == {} and doc["challenges"] == {}
        assert doc["stats"]["totalPoints"] == 0
        assert not store.path.exists()

    def test_corrupt_file_gives_defaults(self, store: ProgressStore) -> None:
        store.path.write_text("{not json", encoding="utf-8")
        assert store.load()["stats"]["challengesCompleted"] == 0

    def test_old_version_is_migrated(self, store: ProgressStore) -> None:
        old = {"version": "0.9.0", "challenges": {"c1": {"completed": True}}}
        store.path.write_text(json.dumps({STORAGE_KEY: old}), encoding="utf-8")
        doc = store.load()
        assert doc["version"] == SCHEMA_VERSION
        assert doc["challenges"] == {"c1": {"completed": True}}
        assert doc["lessons"] == {}

    def test_save_writes_under_storage_key(self, store: ProgressStore) -> None:
        store.start_lesson("intro")
        raw = json.loads(store.path.read_text(encoding="utf-8"))
        assert list(raw) == [STORAGE_KEY]
        assert raw[STORAGE_KEY]["lastUpdated"] == int(datetime(2024, 3, 1, 12).timestamp() * 1000)


class TestChallenges:

    def test_complete_awards_points_once(self, store: ProgressStore) -> None:
        store.complete_challenge("c1", points=10, solution="<svg onload=alert(1)>")
        store.complete_challenge("c1", points=10, solution="<img src=x onerror=alert(1)>",
                                 attempts=3)
        stats = store.get_stats()
        assert stats["totalPoints"] == 10
        assert stats["challengesCompleted"] == 1
        challenge = store.get_challenge("c1")
        assert challenge is not None
        assert challenge["solution"] == "<img src=x onerror=alert(1)>"
        assert challenge["attempts"] == 3

    def test_points_accumulate(self, store: ProgressStore) -> None:
        store.complete_challenge("c1", points=10, solution="a")
        store.complete_challenge("c2", points=25, solution="b", hints_used=1)
        assert store.get_stats()["totalPoints"] == 35
        assert store.get_challenge("c2")["hintsUsed"] == 1

    def test_unknown_challenge(self, store: ProgressStore) -> None:
        assert store.get_challenge("missing") is None


class TestStreak:

    def test_first_completion_starts_streak(self, store: ProgressStore) -> None:
        store.complete_challenge("c1", points=1, solution="x")
        assert store.get_stats()["streak"] == 1

    def test_same_day_does_not_extend(self, store: ProgressStore, clock: FakeClock) -> None:
        store.complete_challenge("c1", points=1, solution="x")
        clock.advance(hours=2)
        store.complete_challenge("c2", points=1, solution="x")
        assert store.get_stats()["streak"] == 1

    def test_next_day_extends(self, store: ProgressStore, clock: FakeClock) -> None:
        store.complete_challenge("c1", points=1, solution="x")
        clock.advance(days=1)
        store.complete_challenge("c2", points=1, solution="x")
        assert store.get_stats()["streak"] == 2

    def test_missed_day_resets(self, store: ProgressStore, clock: FakeClock) -> None:
        store.complete_challenge("c1", points=1, solution="x")
        clock.advance(days=1)
        store.complete_challenge("c2", points=1, solution="x")
        clock.advance(days=2)
        store.complete_challenge("c3", points=1, solution="x")
        assert store.get_stats()["streak"] == 1


class TestLessonsAndPaths:

    def test_start_lesson_is_idempotent(self, store: ProgressStore, clock: FakeClock) -> None:
        store.start_lesson("intro")
        started = store.get_lesson("intro")["startedAt"]
        clock.advance(minutes=5)
        store.start_lesson("intro")
        assert store.get_lesson("intro")["startedAt"] == started
        assert store.get_lesson("intro")["status"] == IN_PROGRESS

    def test_add_challenge_to_lesson(self, store: ProgressStore) -> None:
        store.start_lesson("intro")
        store.add_challenge_to_lesson("intro", "c1")
        store.add_challenge_to_lesson("intro", "c1")
        assert store.get_lesson("intro")["challengesCompleted"] == ["c1"]

    def test_add_challenge_to_unknown_lesson(self, store: ProgressStore) -> None:
        store.add_challenge_to_lesson("nope", "c1")
        assert store.get_lesson("nope") is None

    def test_complete_lesson_counts_once(self, store: ProgressStore) -> None:
        store.start_lesson("intro")
        store.complete_lesson("intro", quiz_score=80)
        store.complete_lesson("intro", quiz_score=90)
        lesson = store.get_lesson("intro")
        assert lesson["status"] == COMPLETED
        assert lesson["quizScore"] == 90
        assert store.get_stats()["lessonsCompleted"] == 1

    def test_complete_path(self, store: ProgressStore) -> None:
        store.start_path("basics")
        assert store.get_path("basics")["progress"] == 0
        store.complete_path("basics")
        store.complete_path("basics")
        path = store.get_path("basics")
        assert path["status"] == COMPLETED
        assert path["progress"] == 100
        assert store.get_stats()["pathsCompleted"] == 1


class TestExportImportReset:

    def test_export_round_trips_through_import(
        self, store: ProgressStore, tmp_path: Path, clock: FakeClock
    ) -> None:
        store.complete_challenge("c1", points=10, solution="x")
        exported = store.export()

        other = ProgressStore(tmp_path / "other.json", clock=clock)
        other.import_document(exported)
        assert other.get_stats()["totalPoints"] == 10
        assert other.get_challenge("c1")["completed"] is True

    @pytest.mark.parametrize(
        ("text", "message"),
        [
            ("not json", "not valid JSON"),
            ("[1, 2]", "must be a JSON object"),
            ('{"version": "1.0.0"}', "Invalid progress data structure"),
        ],
    )
    def test_import_rejects_bad_documents(
        self, store: ProgressStore, text: str, message: str
    ) -> None:
        with pytest.raises(ProgressError, match=message):
            store.import_document(text)

    def test_reset_removes_file(self, store: ProgressStore) -> None:
        store.start_lesson("intro")
        assert store.reset() is True
        assert not store.path.exists()
        assert store.reset() is False

    def test_reset_keeps_foreign_keys(self, store: ProgressStore) -> None:
        store.path.write_text(json.dumps({"other": 1}), encoding="utf-8")
        store.start_lesson("intro")
        assert store.reset() is True
        assert json.loads(store.path.read_text(encoding="utf-8")) == {"other": 1}
