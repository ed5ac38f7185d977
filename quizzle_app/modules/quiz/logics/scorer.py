# File: quizzle_app/modules/quiz/logics/scorer.py

from __future__ import annotations

from collections import OrderedDict
from typing import Dict, Mapping, Optional, Sequence

from ...question_bank.schemas import Question
from ..config import QuizConfig
from ..schemas import ScoreSummary, TagScore


def percentage_of(correct: int, total: int) -> int:
    """round(correct / total * 100), half-up, in integer arithmetic. 0 when total is 0."""
    if total <= 0:
        return 0
    return (correct * 200 + total) // (2 * total)


def is_passing(percentage: int) -> bool:
    return percentage >= QuizConfig.PASS_THRESHOLD


def score(questions: Sequence[Question], answers: Mapping[int, str]) -> ScoreSummary:
    """
    Score a finished quiz.

    Unanswered questions count as incorrect. ``per_tag_breakdown`` is only
    filled when the questions carry topic tags (full-syllabus exams).
    """
    total = len(questions)
    correct = 0
    tagged: Dict[str, list] = OrderedDict()

    for index, question in enumerate(questions):
        is_correct = answers.get(index) == question.correct_option
        if is_correct:
            correct += 1
        if question.topic_tag:
            bucket = tagged.setdefault(question.topic_tag, [0, 0])
            bucket[1] += 1
            if is_correct:
                bucket[0] += 1

    breakdown: Optional[Dict[str, TagScore]] = None
    if tagged:
        breakdown = {
            tag: TagScore(correct=c, total=t, percentage=percentage_of(c, t))
            for tag, (c, t) in tagged.items()
        }

    percentage = percentage_of(correct, total)
    answered = sum(1 for index in range(total) if index in answers)
    return ScoreSummary(
        correct_count=correct,
        total=total,
        percentage=percentage,
        passed=is_passing(percentage),
        unanswered=total - answered,
        per_tag_breakdown=breakdown,
    )


def grade_for(percentage: int) -> Dict[str, str]:
    for floor, grade, label in QuizConfig.GRADE_BANDS:
        if percentage >= floor:
            return {'grade': grade, 'label': label}
    return {'grade': 'F', 'label': 'Needs Improvement'}
