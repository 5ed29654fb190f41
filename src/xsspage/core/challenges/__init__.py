"""Injection contexts and challenge/quiz validation."""

from xsspage.core.challenges.contexts import CONTEXTS, InjectionContext, get_context
from xsspage.core.challenges.validator import (
    CUSTOM_FUNCTION,
    PATTERN_MATCH,
    Challenge,
    ChallengeResult,
    QuizAnswer,
    QuizQuestion,
    QuizScore,
    calculate_points,
    calculate_quiz_score,
    validate_challenge,
    validate_quiz_answer,
)

__all__ = [
    "CONTEXTS",
    "CUSTOM_FUNCTION",
    "PATTERN_MATCH",
    "Challenge",
    "ChallengeResult",
    "InjectionContext",
    "QuizAnswer",
    "QuizQuestion",
    "QuizScore",
    "calculate_points",
    "calculate_quiz_score",
    "get_context",
    "validate_challenge",
    "validate_quiz_answer",
]
