# File: quizzle_app/modules/quiz/logics/selector.py
"""
Question selection for the three quiz types.

All functions are pure over their input pool; randomness comes from the
``rng`` argument (``random.Random`` compatible) so callers and tests can seed it.
Short pools are not an error: the result may hold fewer questions than asked.
"""

from __future__ import annotations

import dataclasses
import math
import random
from collections import OrderedDict
from typing import Dict, List, Optional, Sequence

from ...question_bank.config import QuestionBankConfig
from ...question_bank.schemas import Question
from ..config import QuizConfig


def shuffle(items: Sequence, rng: Optional[random.Random] = None) -> list:
    """Uniform random permutation (Fisher-Yates) of a copy of ``items``."""
    rng = rng or random
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = rng.randrange(i + 1)
        result[i], result[j] = result[j], result[i]
    return result


def _partition(pool: Sequence[Question], key: str) -> Dict[str, List[Question]]:
    groups: Dict[str, List[Question]] = OrderedDict()
    for question in pool:
        groups.setdefault(getattr(question, key) or '', []).append(question)
    return groups


def select_lesson(pool: Sequence[Question], count: int = 5, rng=None) -> List[Question]:
    shuffled = shuffle(pool, rng)
    if len(shuffled) <= count:
        return shuffled
    return shuffled[:count]


def select_balanced(pool: Sequence[Question], target: int = 30, rng=None) -> List[Question]:
    """Equal quota from every chapter present in ``pool``, then one more shuffle."""
    chapters = _partition(pool, 'chapter')
    if not chapters:
        return []

    quota = math.ceil(target / len(chapters))
    picked: List[Question] = []
    for questions in chapters.values():
        picked.extend(shuffle(questions, rng)[:quota])
    return shuffle(picked, rng)


def select_full_syllabus(
    pool: Sequence[Question],
    per_subject: int = QuizConfig.FULL_SYLLABUS_PER_SUBJECT,
    subject_target: int = QuizConfig.QUESTION_COUNTS[QuizConfig.QUIZ_SUBJECT],
    rng=None,
) -> List[Question]:
    """
    Composite exam: a balanced selection per subject, cut to ``per_subject``
    and tagged with the subject id so the scorer can break results down.
    """
    picked: List[Question] = []
    for subject, questions in _partition(pool, 'subject').items():
        balanced = shuffle(select_balanced(questions, subject_target, rng), rng)
        picked.extend(
            dataclasses.replace(q, topic_tag=subject or q.topic_tag) for q in balanced[:per_subject]
        )
    return shuffle(picked, rng)


def select(pool: Sequence[Question], count: int, mode: str, rng=None) -> List[Question]:
    """Dispatch on quiz type; ``count`` is the total number of questions wanted."""
    if mode == QuizConfig.QUIZ_LESSON:
        return select_lesson(pool, count, rng)
    if mode == QuizConfig.QUIZ_SUBJECT:
        return select_balanced(pool, count, rng)
    if mode == QuizConfig.QUIZ_FULL_SYLLABUS:
        # Fixed share per catalogue subject; a subject without content shrinks the exam.
        per_subject = count // len(QuestionBankConfig.SUBJECTS)
        return select_full_syllabus(pool, per_subject=per_subject, rng=rng)
    raise ValueError(f"Unknown quiz mode: {mode}")
