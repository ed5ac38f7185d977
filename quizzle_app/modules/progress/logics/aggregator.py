# File: quizzle_app/modules/progress/logics/aggregator.py
"""
Pure folds over a user's quiz results.

Inputs are ``QuizResult`` values (newest-first order is not required);
nothing here touches the database. Callers recompute on demand.
"""

from __future__ import annotations

from collections import OrderedDict
from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional, Sequence

from quizzle_app.utils.time_utils import ensure_utc, utcnow

from ...question_bank.config import QuestionBankConfig
from ...quiz.config import QuizConfig
from ...quiz.schemas import QuizResult
from ..schemas import SubjectProgress, UserProgress

ONE_DAY = timedelta(days=1)


def round_half_up(numerator: int, denominator: int) -> int:
    """round(numerator / denominator) with .5 going up; 0 for an empty denominator."""
    if denominator <= 0:
        return 0
    return (2 * numerator + denominator) // (2 * denominator)


def calculate_streak(results: Iterable[QuizResult], now: Optional[datetime] = None) -> int:
    """
    Walk attempts newest-first from ``now``; each attempt within one day of the
    previous cursor extends the streak and moves the cursor to it.

    Several attempts on the same day each count.
    """
    cursor = ensure_utc(now or utcnow())
    ordered = sorted(results, key=lambda r: ensure_utc(r.completed_at), reverse=True)

    streak = 0
    for result in ordered:
        completed = ensure_utc(result.completed_at)
        day_diff = (cursor - completed) // ONE_DAY
        if day_diff <= 1:
            streak += 1
            cursor = completed
        else:
            break
    return streak


def aggregate(
    results: Sequence[QuizResult],
    now: Optional[datetime] = None,
    subjects: Optional[List[dict]] = None,
) -> UserProgress:
    """Per-subject progress for every catalogue subject, plus the streak."""
    subjects = subjects if subjects is not None else QuestionBankConfig.SUBJECTS
    progress = UserProgress()
    for subject in subjects:
        progress.subjects[subject['id']] = SubjectProgress(total_lessons=len(subject['lessons']))

    passed_lessons: Dict[str, set] = {sid: set() for sid in progress.subjects}
    passed_scores: Dict[str, List[int]] = {sid: [] for sid in progress.subjects}

    for result in results:
        entry = progress.subjects.get(result.subject_id)
        if entry is None:
            # Full-syllabus exams and retired subjects only feed the streak.
            continue

        entry.total_quizzes_taken += 1
        if result.passed:
            passed_scores[result.subject_id].append(result.score_percent)
        if result.quiz_type == QuizConfig.QUIZ_LESSON and result.score_percent >= QuizConfig.PASS_THRESHOLD:
            passed_lessons[result.subject_id].add(result.lesson_title)
        if result.quiz_type == QuizConfig.QUIZ_SUBJECT and result.passed:
            entry.subject_quiz_completed = True
            entry.subject_quiz_score = result.score_percent

    for sid, entry in progress.subjects.items():
        entry.lessons_completed = len(passed_lessons[sid])
        scores = passed_scores[sid]
        entry.average_score = round_half_up(sum(scores), len(scores))

    progress.streak = calculate_streak(results, now)
    return progress


def profile_stats(results: Sequence[QuizResult], now: Optional[datetime] = None) -> Dict[str, Any]:
    total = len(results)
    return {
        'totalQuizzes': total,
        'averageScore': round_half_up(sum(r.score_percent for r in results), total),
        'passRate': round_half_up(100 * sum(1 for r in results if r.passed), total),
        'totalTimeSpent': sum(r.time_spent_seconds for r in results),
        'streak': calculate_streak(results, now),
    }


def lesson_progress(results: Sequence[QuizResult], subject_id: str) -> List[Dict[str, Any]]:
    """Best lesson-quiz score per lesson of one subject, in catalogue order."""
    subject = QuestionBankConfig.get_subject(subject_id)
    best: Dict[str, int] = {}
    attempts: Dict[str, int] = {}
    for result in results:
        if result.subject_id != subject_id or result.quiz_type != QuizConfig.QUIZ_LESSON:
            continue
        attempts[result.lesson_title] = attempts.get(result.lesson_title, 0) + 1
        best[result.lesson_title] = max(best.get(result.lesson_title, 0), result.score_percent)

    lessons = subject['lessons'] if subject else [{'title': t} for t in best]
    rows = []
    for lesson in lessons:
        title = lesson['title']
        score = best.get(title)
        rows.append({
            'lessonTitle': title,
            'bestScore': score,
            'attempts': attempts.get(title, 0),
            'completed': score is not None and score >= QuizConfig.PASS_THRESHOLD,
            'hasQuiz': title in subject['lesson_chapters'] if subject else True,
        })
    return rows


def subject_breakdown(results: Sequence[QuizResult]) -> Dict[str, Dict[str, int]]:
    """Per subject id: attempts, passes, rounded average score and pass rate."""
    totals: Dict[str, List[int]] = OrderedDict()
    for result in results:
        bucket = totals.setdefault(result.subject_id, [0, 0, 0])
        bucket[0] += 1
        bucket[1] += 1 if result.passed else 0
        bucket[2] += result.score_percent

    return {
        subject_id: {
            'total': total,
            'passed': passed,
            'averageScore': round_half_up(score_sum, total),
            'passRate': round_half_up(100 * passed, total),
        }
        for subject_id, (total, passed, score_sum) in totals.items()
    }
