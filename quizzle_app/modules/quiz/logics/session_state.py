# File: quizzle_app/modules/quiz/logics/session_state.py
"""
Quiz Session State Machine
==========================
A synchronous reducer over one quiz attempt. Two event sources drive it:
user actions (select / save-next / mark-review / clear / navigate / submit)
and a 1 Hz ``tick``.

Per-question status is derived, never stored:

    Answered         <=> index in ``answers``
    MarkedForReview  review flag set and not answered
    Visited          shown at least once
    NotVisited       otherwise

The review flag is kept separately, so it coexists with Answered.

Rejected actions return ``False`` and leave the state untouched. Signals
are not sent from here: events are queued and the caller drains them with
``drain_events()``.
"""

from __future__ import annotations

import dataclasses
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Sequence, Tuple

from quizzle_app.core.logging_config import get_logger
from quizzle_app.utils.time_utils import utcnow

from ...question_bank.schemas import Question
from ..schemas import QuizResult
from .scorer import score

logger = get_logger(__name__)

NOT_VISITED = 'not-visited'
VISITED = 'visited'
ANSWERED = 'answered'
MARKED_FOR_REVIEW = 'marked-for-review'

EVENT_TIME_WARNING = 'time_warning'
EVENT_COMPLETED = 'completed'


class QuizSession:
    """In-flight state of a single quiz attempt."""

    def __init__(
        self,
        questions: Sequence[Question],
        quiz_type: str,
        time_limit: Optional[int] = None,
        warning_threshold: Optional[int] = None,
        user_id: Optional[str] = None,
        subject_id: str = '',
        lesson_title: str = '',
    ):
        if not questions:
            raise ValueError("a quiz session needs at least one question")

        self.questions: Tuple[Question, ...] = tuple(questions)
        self.quiz_type = quiz_type
        self.time_limit = time_limit
        self.warning_threshold = warning_threshold
        self.user_id = user_id
        self.subject_id = subject_id
        self.lesson_title = lesson_title

        self.current_index = 0
        self.answers: Dict[int, str] = {}
        self.pending: Optional[str] = None
        self.visited = {0}
        self.review = set()
        self.elapsed_seconds = 0
        self.warned = False
        self.complete = False
        self.result: Optional[QuizResult] = None
        self._events: List[Tuple[str, Dict[str, Any]]] = []

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def total(self) -> int:
        return len(self.questions)

    @property
    def is_last(self) -> bool:
        return self.current_index == self.total - 1

    @property
    def remaining_seconds(self) -> Optional[int]:
        if self.time_limit is None:
            return None
        return max(self.time_limit - self.elapsed_seconds, 0)

    def status(self, index: int) -> str:
        if index in self.answers:
            return ANSWERED
        if index in self.review:
            return MARKED_FOR_REVIEW
        if index in self.visited:
            return VISITED
        return NOT_VISITED

    def is_marked(self, index: int) -> bool:
        return index in self.review

    def drain_events(self) -> List[Tuple[str, Dict[str, Any]]]:
        events, self._events = self._events, []
        return events

    # ------------------------------------------------------------------
    # User actions
    # ------------------------------------------------------------------
    def select_answer(self, option: str) -> bool:
        if self.complete or option not in self.questions[self.current_index].options:
            return False
        self.pending = option
        return True

    def save_and_next(self, now: Optional[datetime] = None) -> bool:
        if self.complete or self.pending is None:
            return False
        self._commit_pending()
        self.review.discard(self.current_index)
        self._advance_or_finish(now)
        return True

    def mark_for_review(self, now: Optional[datetime] = None) -> bool:
        if self.complete:
            return False
        self._commit_pending()
        self.review.add(self.current_index)
        self._advance_or_finish(now)
        return True

    def clear_selection(self) -> bool:
        if self.complete:
            return False
        self.pending = None
        self.answers.pop(self.current_index, None)
        self.review.discard(self.current_index)
        self.visited.add(self.current_index)
        return True

    def navigate_to(self, index: int) -> bool:
        if self.complete or not 0 <= index < self.total:
            return False
        self._commit_pending()
        self._show(index)
        return True

    def previous(self) -> bool:
        return self.navigate_to(self.current_index - 1)

    def next(self) -> bool:
        return self.navigate_to(self.current_index + 1)

    # ------------------------------------------------------------------
    # Clock and completion
    # ------------------------------------------------------------------
    def tick(self, now: Optional[datetime] = None) -> bool:
        """Advance the clock one second; may warn once and may force submission."""
        if self.complete:
            return False

        self.elapsed_seconds += 1
        if self.time_limit is None:
            return True

        if (
            self.warning_threshold
            and not self.warned
            and self.elapsed_seconds == self.time_limit - self.warning_threshold
        ):
            self.warned = True
            self._events.append((EVENT_TIME_WARNING, {'remaining_seconds': self.remaining_seconds}))

        if self.elapsed_seconds >= self.time_limit:
            logger.info(
                f"[QUIZ] Time limit reached ({self.time_limit}s) for user={self.user_id}, forcing submit"
            )
            self.submit(now=now, forced=True)
        return True

    def advance(self, seconds: int, started_at: Optional[datetime] = None) -> int:
        """
        Deliver ``seconds`` ticks, stopping early once the session completes.
        Returns the number of ticks consumed.
        """
        if self.complete or seconds <= 0:
            return 0
        if self.time_limit is None:
            # Untimed: nothing can fire, skip the per-second walk.
            self.elapsed_seconds += seconds
            return seconds

        consumed = 0
        while consumed < seconds and not self.complete:
            consumed += 1
            tick_time = started_at + timedelta(seconds=consumed) if started_at else None
            self.tick(now=tick_time)
        return consumed

    def submit(self, now: Optional[datetime] = None, forced: bool = False) -> Optional[QuizResult]:
        """Finalize the attempt. A second call returns None and changes nothing."""
        if self.complete:
            return None

        self._commit_pending()
        self.complete = True

        summary = score(self.questions, self.answers)
        snapshot = []
        for index, question in enumerate(self.questions):
            item = question.to_dict()
            item['userAnswer'] = self.answers.get(index)
            item['isCorrect'] = self.answers.get(index) == question.correct_option
            snapshot.append(item)

        self.result = QuizResult(
            user_id=self.user_id,
            subject_id=self.subject_id,
            lesson_title=self.lesson_title,
            quiz_type=self.quiz_type,
            score_percent=summary.percentage,
            total_questions=summary.total,
            time_spent_seconds=self.elapsed_seconds,
            answers=dict(self.answers),
            question_snapshot=snapshot,
            passed=summary.passed,
            completed_at=now or utcnow(),
            summary=summary,
            forced=forced,
        )
        self._events.append((EVENT_COMPLETED, {'result': self.result, 'forced': forced}))
        return self.result

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _commit_pending(self):
        if self.pending is not None:
            self.answers[self.current_index] = self.pending
            self.pending = None

    def _show(self, index: int):
        self.current_index = index
        self.visited.add(index)
        # Re-opening an answered question preselects its answer.
        self.pending = self.answers.get(index)

    def _advance_or_finish(self, now):
        if self.is_last:
            self.submit(now=now)
        else:
            self._show(self.current_index + 1)

    # ------------------------------------------------------------------
    # Serialization (ActiveQuizSession.state)
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            'questions': [
                dict(dataclasses.asdict(q), options=list(q.options)) for q in self.questions
            ],
            'quiz_type': self.quiz_type,
            'time_limit': self.time_limit,
            'warning_threshold': self.warning_threshold,
            'user_id': self.user_id,
            'subject_id': self.subject_id,
            'lesson_title': self.lesson_title,
            'current_index': self.current_index,
            'answers': {str(k): v for k, v in self.answers.items()},
            'pending': self.pending,
            'visited': sorted(self.visited),
            'review': sorted(self.review),
            'elapsed_seconds': self.elapsed_seconds,
            'warned': self.warned,
            'complete': self.complete,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'QuizSession':
        questions = [dict(q, options=tuple(q['options'])) for q in data['questions']]
        session = cls(
            questions=[Question(**q) for q in questions],
            quiz_type=data['quiz_type'],
            time_limit=data.get('time_limit'),
            warning_threshold=data.get('warning_threshold'),
            user_id=data.get('user_id'),
            subject_id=data.get('subject_id', ''),
            lesson_title=data.get('lesson_title', ''),
        )
        session.current_index = data.get('current_index', 0)
        session.answers = {int(k): v for k, v in (data.get('answers') or {}).items()}
        session.pending = data.get('pending')
        session.visited = set(data.get('visited') or [session.current_index])
        session.review = set(data.get('review') or [])
        session.elapsed_seconds = data.get('elapsed_seconds', 0)
        session.warned = data.get('warned', False)
        session.complete = data.get('complete', False)
        return session

    def view(self) -> Dict[str, Any]:
        """Client-facing snapshot; correct answers stay hidden until completion."""
        question = self.questions[self.current_index]
        return {
            'quizType': self.quiz_type,
            'subjectId': self.subject_id,
            'lessonTitle': self.lesson_title,
            'totalQuestions': self.total,
            'currentIndex': self.current_index,
            'currentQuestion': {
                'question': question.text,
                'options': list(question.options),
                'subject': question.topic_tag,
            },
            'status': [
                {'status': self.status(i), 'markedForReview': self.is_marked(i)}
                for i in range(self.total)
            ],
            'answers': {str(k): v for k, v in self.answers.items()},
            'selectedOption': self.pending,
            'elapsedSeconds': self.elapsed_seconds,
            'timeLimit': self.time_limit,
            'remainingSeconds': self.remaining_seconds,
            'timeWarning': self.warned,
            'complete': self.complete,
        }
