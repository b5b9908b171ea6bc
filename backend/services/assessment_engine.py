"""Self-assessment scoring.

Totals are banded with the PHQ-9 cut-offs: 0-4, 5-9, 10-14, 15-19 and 20+.
Results are computed on every submission and never stored.
"""

from collections.abc import Mapping, Sequence
from dataclasses import asdict, dataclass
from typing import Any

from backend.core.errors import InvalidInput
from backend.storage.base import Collection, Record

MAX_OPTION_SCORE = 3


@dataclass(frozen=True)
class Band:
    low: int
    high: int | None
    rating: str
    advice: str
    recommendation: str

    def contains(self, total: int) -> bool:
        return total >= self.low and (self.high is None or total <= self.high)


BANDS = (
    Band(
        0, 4,
        'Excellent Mental Health',
        'You are doing great! Keep up your positive habits and continue to monitor your well-being.',
        'You are in a great state to attend classes and engage fully in your academic activities.',
    ),
    Band(
        5, 9,
        'Good Mental Health',
        'You have good mental health. Consider practicing mindfulness or engaging in stress-reducing '
        'activities regularly.',
        'You can attend classes normally. Consider exploring resources to maintain your well-being.',
    ),
    Band(
        10, 14,
        'Moderate Mental Health Concerns',
        'You might be experiencing some mental health concerns. It could be beneficial to explore resources '
        'or talk to a counselor.',
        'You may want to consider attending classes but also schedule a counseling session to discuss '
        'your concerns.',
    ),
    Band(
        15, 19,
        'Moderately Severe Mental Health Concerns',
        'You are experiencing significant mental health challenges. We strongly recommend scheduling a '
        'session with a professional.',
        'Consider taking a break from classes and prioritizing your mental health. Schedule a counseling '
        'session immediately.',
    ),
    Band(
        20, None,
        'Severe Mental Health Concerns',
        'You are experiencing severe mental health challenges. Please seek professional help immediately.',
        'We strongly recommend taking time off from classes and seeking immediate professional support. '
        'Your mental health is the priority.',
    ),
)


@dataclass(frozen=True)
class AssessmentResult:
    totalScore: int
    rating: str
    advice: str
    recommendation: str
    maxScore: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def band_for(total: int) -> Band:
    for band in BANDS:
        if band.contains(total):
            return band
    # Totals below zero cannot come from valid options; treat them as the lowest band.
    return BANDS[0]


def answer_score(question: Mapping[str, Any] | None, score: Any) -> int:
    """Score an answer counts for, or 0 when it matches none of the question's options."""
    if question is None or isinstance(score, bool):
        return 0
    for option in question.get('options', []):
        if option.get('score') == score:
            return score
    return 0


def question_for(by_id: Mapping[int, Mapping[str, Any]], question_id: Any) -> Mapping[str, Any] | None:
    if not isinstance(question_id, int) or isinstance(question_id, bool):
        return None
    return by_id.get(question_id)


def score_answers(answers: Sequence[Mapping[str, Any]], questions: Sequence[Mapping[str, Any]]) -> AssessmentResult:
    by_id = {question.get('id'): question for question in questions}
    total = sum(
        answer_score(question_for(by_id, answer.get('questionId')), answer.get('score')) for answer in answers
    )
    band = band_for(total)

    return AssessmentResult(
        totalScore=total,
        rating=band.rating,
        advice=band.advice,
        recommendation=band.recommendation,
        maxScore=len(questions) * MAX_OPTION_SCORE,
    )


class AssessmentEngine:
    def __init__(self, collection: Collection):
        self.collection = collection

    def questions(self) -> list[Record]:
        return self.collection.load()

    def submit(self, answers: Any) -> AssessmentResult:
        if not isinstance(answers, list) or not all(isinstance(answer, Mapping) for answer in answers):
            raise InvalidInput('Invalid answers format')

        questions = self.questions()
        if len(answers) != len(questions):
            raise InvalidInput('Please answer all questions before submitting.')

        return score_answers(answers, questions)
