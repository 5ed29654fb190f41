"""Checking learner submissions against challenge and quiz definitions.

A challenge runs the submitted payload through one of the filter
simulations, drops the result into an injection context and asks the
indicator detector whether anything executable survived. The validation
rules then decide success: banned patterns first, then required patterns
(all of them or any one), then an optional custom predicate, and finally
the execution check.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from typing import Any, Callable

from xsspage.core.challenges.contexts import CONTEXTS
from xsspage.core.fuzzer.filters import FILTERS
from xsspage.core.payloads.detector import DetectionResult, detect_xss

logger = logging.getLogger(__name__)

PATTERN_MATCH = "pattern-match"
CUSTOM_FUNCTION = "custom-function"

MIN_POINTS = 5
HINT_PENALTY = 5
ATTEMPT_PENALTY = 2
QUIZ_PASS_SCORE = 70

# (payload, filtered, would_execute) -> accepted
CustomValidator = Callable[[str, str, bool], bool]


@dataclass(frozen=True)
class Challenge:
    """The parts of a challenge definition that drive validation."""

    filter_type: str
    context: str
    points: int = 10
    validation_type: str = PATTERN_MATCH
    patterns: tuple[str, ...] = field(default_factory=tuple)
    required_all: bool = False
    banned_patterns: tuple[str, ...] = field(default_factory=tuple)
    validator: CustomValidator | None = None
    check_execution: bool = False


@dataclass(frozen=True)
class ChallengeResult:
    success: bool
    feedback: str
    reason: str | None = None
    hint: str | None = None
    points: int | None = None
    explanation: str | None = None
    filtered: str | None = None
    contextual: str | None = None
    detection: DetectionResult | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"success": self.success}
        for key, value in (
            ("reason", self.reason),
            ("points", self.points),
            ("feedback", self.feedback),
            ("hint", self.hint),
            ("explanation", self.explanation),
            ("filtered", self.filtered),
            ("contextual", self.contextual),
        ):
            if value is not None:
                data[key] = value
        if self.detection is not None:
            data["detection"] = self.detection.to_dict()
        return data


def _invalid_config(what: str) -> ChallengeResult:
    return ChallengeResult(
        success=False,
        reason="Invalid challenge configuration",
        feedback=f"Challenge has invalid {what} configuration",
    )


def _compile_all(patterns: tuple[str, ...]) -> list[re.Pattern[str]] | None:
    try:
        return [re.compile(p, re.IGNORECASE) for p in patterns]
    except re.error:
        logger.debug("Invalid challenge pattern in %r", patterns, exc_info=True)
        return None


def validate_challenge(challenge: Challenge, payload: str) -> ChallengeResult:
    """Validate *payload* as a solution to *challenge*.

    Unknown filter or context names, and patterns that are not valid regular
    expressions, produce an "Invalid challenge configuration" result.
    """
    if not payload or not payload.strip():
        return ChallengeResult(
            success=False,
            reason="Empty payload",
            feedback="Please enter a payload to test",
        )

    sanitizer = FILTERS.get(challenge.filter_type)
    if sanitizer is None:
        logger.warning("Unknown filter type: %s", challenge.filter_type)
        return _invalid_config("filter")
    context = CONTEXTS.get(challenge.context)
    if context is None:
        logger.warning("Unknown context: %s", challenge.context)
        return _invalid_config("context")

    filtered = sanitizer.apply(payload)
    contextual = context.render(filtered)
    detection = detect_xss(filtered)

    def failure(reason: str, feedback: str, hint: str | None = None) -> ChallengeResult:
        return ChallengeResult(
            success=False,
            reason=reason,
            feedback=feedback,
            hint=hint,
            filtered=filtered,
            contextual=contextual,
            detection=detection,
        )

    if challenge.validation_type == PATTERN_MATCH:
        banned = _compile_all(challenge.banned_patterns)
        required = _compile_all(challenge.patterns)
        if banned is None or required is None:
            return _invalid_config("pattern")

        for pattern in banned:
            if pattern.search(payload):
                return failure(
                    "Solution uses banned techniques",
                    f"This challenge doesn't allow: {pattern.pattern}. "
                    "Try a different approach.",
                )

        if required and challenge.required_all:
            for pattern in required:
                if not pattern.search(payload):
                    return failure(
                        "Missing required patterns",
                        "Your payload doesn't match the expected pattern. "
                        "Check the challenge requirements.",
                        hint=f"Required pattern: {pattern.pattern}",
                    )
        elif required and not any(p.search(payload) for p in required):
            return failure(
                "No matching patterns",
                "Your payload doesn't match any of the expected patterns",
            )

    if challenge.validation_type == CUSTOM_FUNCTION and challenge.validator is not None:
        try:
            accepted = challenge.validator(payload, filtered, detection.would_execute)
        except Exception:
            logger.exception("Custom challenge validator failed")
            return failure(
                "Validation error",
                "An error occurred while validating your solution",
            )
        if not accepted:
            return failure(
                "Custom validation failed",
                "Your solution doesn't meet the challenge requirements. "
                "Review the challenge description.",
            )

    if challenge.check_execution and not detection.would_execute:
        return failure(
            "Payload would not execute",
            "Your payload was blocked or sanitized and would not execute JavaScript.",
            hint="Try a different technique that bypasses the filter",
        )

    return ChallengeResult(
        success=True,
        points=challenge.points,
        feedback="Challenge completed successfully!",
        explanation="Your payload successfully bypassed the filter and would execute.",
        filtered=filtered,
        contextual=contextual,
        detection=detection,
    )


def calculate_points(base_points: int, attempts: int = 1, hints_used: int = 0) -> int:
    """Award for a solved challenge: -5 per hint, -2 per retry, never below 5."""
    penalty = hints_used * HINT_PENALTY + max(0, attempts - 1) * ATTEMPT_PENALTY
    return max(MIN_POINTS, base_points - penalty)


# ---------------------------------------------------------------------------
# Quizzes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class QuizQuestion:
    question: str
    options: tuple[str, ...]
    correct_answer: int
    explanation: str = ""


@dataclass(frozen=True)
class QuizAnswer:
    correct: bool
    explanation: str
    correct_answer: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "correct": self.correct,
            "explanation": self.explanation,
            "correctAnswer": self.correct_answer,
        }


@dataclass(frozen=True)
class QuizScore:
    score: int
    correct: int
    total: int
    passed: bool
    results: tuple[QuizAnswer, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "correct": self.correct,
            "total": self.total,
            "passed": self.passed,
            "results": [r.to_dict() for r in self.results],
        }


def validate_quiz_answer(question: QuizQuestion, selected_index: int) -> QuizAnswer:
    return QuizAnswer(
        correct=selected_index == question.correct_answer,
        explanation=question.explanation,
        correct_answer=question.correct_answer,
    )


def calculate_quiz_score(
    questions: list[QuizQuestion] | tuple[QuizQuestion, ...],
    answers: list[int] | tuple[int, ...],
) -> QuizScore:
    """Percentage score, rounded half up; 70 or more passes.

    Raises:
        ValueError: If *questions* and *answers* differ in length.
    """
    if len(questions) != len(answers):
        raise ValueError("Questions and answers must have the same length")

    results = tuple(validate_quiz_answer(q, a) for q, a in zip(questions, answers))
    correct = sum(1 for r in results if r.correct)
    score = math.floor(correct / len(questions) * 100 + 0.5) if questions else 0
    return QuizScore(
        score=score,
        correct=correct,
        total=len(questions),
        passed=score >= QUIZ_PASS_SCORE,
        results=results,
    )
