# File: quizzle_app/modules/quiz/services/session_service.py
"""
Server-side owner of the single in-flight quiz per user.

The state machine is rebuilt from ``ActiveQuizSession.state`` on every call,
brought up to date with ``sync_clock`` and written back (or deleted once
complete). Queued state-machine events are turned into blinker signals here.
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Tuple

from flask import current_app

from quizzle_app.core.error_handlers import ContentUnavailable, NotFoundError, ValidationError
from quizzle_app.core.signals import quiz_completed, quiz_started, quiz_time_warning
from quizzle_app.models import ActiveQuizSession, db
from quizzle_app.utils.time_utils import ensure_utc, utcnow

from ...question_bank import interface as question_bank
from ...question_bank.config import QuestionBankConfig
from ..config import QuizConfig
from ..logics.scorer import grade_for
from ..logics.selector import select
from ..logics.session_state import EVENT_COMPLETED, EVENT_TIME_WARNING, QuizSession
from ..schemas import QuizResult

ACTIONS = (
    'select', 'save-next', 'mark-review', 'clear', 'navigate', 'previous', 'next', 'submit',
)


class QuizSessionService:
    """Start, drive and finish quiz sessions stored in the database."""

    # ------------------------------------------------------------------
    # Start
    # ------------------------------------------------------------------
    @staticmethod
    def _load_pool(quiz_type: str, subject_id: Optional[str], lesson_title: Optional[str], difficulty: str):
        if quiz_type == QuizConfig.QUIZ_FULL_SYLLABUS:
            return question_bank.load_full_syllabus_pool(difficulty)

        if not question_bank.get_subject(subject_id):
            raise ValidationError(f"Unknown subject '{subject_id}'")
        if quiz_type == QuizConfig.QUIZ_SUBJECT:
            return question_bank.load_subject_pool(subject_id, difficulty)
        if not lesson_title:
            raise ValidationError("lessonTitle is required for a lesson quiz")
        return question_bank.load_lesson_pool(subject_id, lesson_title, difficulty)

    @staticmethod
    def _labels(quiz_type: str, subject_id: Optional[str], lesson_title: Optional[str]) -> Tuple[str, str]:
        if quiz_type == QuizConfig.QUIZ_FULL_SYLLABUS:
            return QuizConfig.FULL_SYLLABUS_SUBJECT_ID, QuizConfig.FULL_SYLLABUS_TITLE
        if quiz_type == QuizConfig.QUIZ_SUBJECT:
            return subject_id, QuizConfig.SUBJECT_QUIZ_TITLE
        return subject_id, lesson_title

    @staticmethod
    def start(
        user_id: str,
        quiz_type: str,
        subject_id: Optional[str] = None,
        lesson_title: Optional[str] = None,
        difficulty: str = None,
        now: Optional[datetime] = None,
        rng=None,
    ) -> Tuple[ActiveQuizSession, QuizSession]:
        """
        Select questions and open a new session, replacing any previous one.

        Raises:
            ContentUnavailable: the selection came back empty; no session is created.
        """
        if quiz_type not in QuizConfig.QUIZ_TYPES:
            raise ValidationError(f"Unknown quiz type '{quiz_type}'")
        difficulty = difficulty or QuestionBankConfig.DEFAULT_DIFFICULTY
        now = now or utcnow()

        pool = QuizSessionService._load_pool(quiz_type, subject_id, lesson_title, difficulty)
        questions = select(pool, QuizConfig.QUESTION_COUNTS[quiz_type], quiz_type, rng=rng)
        if not questions:
            current_app.logger.warning(
                f"[QUIZ] Empty selection for {quiz_type} quiz subject={subject_id} lesson={lesson_title}"
            )
            raise ContentUnavailable(
                "No questions are available for this quiz yet",
                resource=f"{quiz_type}/{subject_id or ''}/{lesson_title or ''}",
            )

        stored_subject, stored_title = QuizSessionService._labels(quiz_type, subject_id, lesson_title)
        session = QuizSession(
            questions,
            quiz_type=quiz_type,
            time_limit=QuizConfig.TIME_LIMITS[quiz_type],
            warning_threshold=QuizConfig.WARNING_THRESHOLDS[quiz_type],
            user_id=user_id,
            subject_id=stored_subject,
            lesson_title=stored_title,
        )

        existing = ActiveQuizSession.query.filter_by(user_id=user_id).first()
        if existing is not None:
            current_app.logger.info(f"[QUIZ] Replacing active session {existing.session_id} of user={user_id}")
            db.session.delete(existing)
            db.session.flush()

        row = ActiveQuizSession(
            user_id=user_id,
            quiz_type=quiz_type,
            state=session.to_dict(),
            started_at=now,
            last_synced_at=now,
        )
        db.session.add(row)
        db.session.commit()

        quiz_started.send(
            current_app._get_current_object(),
            user_id=user_id,
            session_id=row.session_id,
            quiz_type=quiz_type,
            total_questions=session.total,
        )
        return row, session

    # ------------------------------------------------------------------
    # Lookup and clock
    # ------------------------------------------------------------------
    @staticmethod
    def get_active(user_id: str) -> Tuple[ActiveQuizSession, QuizSession]:
        row = ActiveQuizSession.query.filter_by(user_id=user_id).first()
        if row is None:
            raise NotFoundError("No active quiz session", resource='quiz-session')
        return row, QuizSession.from_dict(row.state)

    @staticmethod
    def sync_clock(row: ActiveQuizSession, session: QuizSession, now: Optional[datetime] = None) -> int:
        """Deliver one tick per whole second elapsed since the last sync."""
        now = ensure_utc(now or utcnow())
        last = ensure_utc(row.last_synced_at)
        whole_seconds = math.floor((now - last).total_seconds())
        if whole_seconds <= 0:
            return 0
        consumed = session.advance(whole_seconds, started_at=last)
        # Keep the sub-second remainder for the next sync.
        row.last_synced_at = last + timedelta(seconds=whole_seconds)
        return consumed

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------
    @staticmethod
    def _dispatch(session: QuizSession, action: str, payload: Dict[str, Any], now: datetime) -> bool:
        if action == 'select':
            return session.select_answer(payload.get('option'))
        if action == 'save-next':
            return session.save_and_next(now=now)
        if action == 'mark-review':
            return session.mark_for_review(now=now)
        if action == 'clear':
            return session.clear_selection()
        if action == 'navigate':
            index = payload.get('index')
            return index is not None and session.navigate_to(index)
        if action == 'previous':
            return session.previous()
        if action == 'next':
            return session.next()
        if action == 'submit':
            return session.submit(now=now) is not None
        raise ValidationError(f"Unknown quiz action '{action}'")

    @staticmethod
    def apply_action(
        user_id: str, action: str, payload: Optional[Dict[str, Any]] = None, now: Optional[datetime] = None
    ) -> Dict[str, Any]:
        """
        Run one user action against the caller's active session.

        Rejected actions are reported with ``accepted: False``. If the clock
        runs out before the action is applied, the forced result is returned.
        """
        if action not in ACTIONS:
            raise ValidationError(f"Unknown quiz action '{action}'")
        now = now or utcnow()
        if action == 'submit' and ActiveQuizSession.query.filter_by(user_id=user_id).first() is None:
            # Repeated submit after the session was finalized and removed.
            return QuizSessionService._finished_response(None)
        row, session = QuizSessionService.get_active(user_id)

        QuizSessionService.sync_clock(row, session, now)
        accepted = False
        if not session.complete:
            accepted = QuizSessionService._dispatch(session, action, payload or {}, now)

        return QuizSessionService._persist(row, session, accepted)

    @staticmethod
    def current_view(user_id: str, now: Optional[datetime] = None) -> Dict[str, Any]:
        row, session = QuizSessionService.get_active(user_id)
        QuizSessionService.sync_clock(row, session, now)
        return QuizSessionService._persist(row, session, True)

    @staticmethod
    def abandon(user_id: str) -> bool:
        row = ActiveQuizSession.query.filter_by(user_id=user_id).first()
        if row is None:
            return False
        db.session.delete(row)
        db.session.commit()
        current_app.logger.info(f"[QUIZ] User {user_id} abandoned session {row.session_id}")
        return True

    @staticmethod
    def sweep_all(now: Optional[datetime] = None) -> int:
        """Bring every active session up to date; returns how many were force-submitted."""
        now = now or utcnow()
        finished = 0
        session_ids = [sid for (sid,) in db.session.query(ActiveQuizSession.session_id).all()]
        for session_id in session_ids:
            row = ActiveQuizSession.query.filter_by(session_id=session_id).first()
            if row is None:
                continue
            session = QuizSession.from_dict(row.state)
            QuizSessionService.sync_clock(row, session, now)
            response = QuizSessionService._persist(row, session, False)
            if 'report' in response:
                finished += 1
        return finished

    # ------------------------------------------------------------------
    # Write-back and events
    # ------------------------------------------------------------------
    @staticmethod
    def _persist(row: ActiveQuizSession, session: QuizSession, accepted: bool) -> Dict[str, Any]:
        """
        Write the session back (or remove it once complete) and emit its events.

        The write is conditional on the row still existing, so when a request
        and the sweep job finish the same session concurrently only the one
        that removed the row emits ``quiz_completed``.
        """
        session_id = row.session_id
        synced_at = row.last_synced_at
        # Keep the ORM from flushing its own UPDATE for a row another worker may have removed.
        db.session.expunge(row)

        query = ActiveQuizSession.query.filter_by(session_id=session_id)
        if session.complete:
            claimed = query.delete(synchronize_session=False)
        else:
            claimed = query.update(
                {'state': session.to_dict(), 'last_synced_at': synced_at}, synchronize_session=False
            )
        db.session.commit()

        if claimed != 1:
            session.drain_events()
            current_app.logger.info(f"[QUIZ] Session {session_id} was already finished elsewhere")
            return QuizSessionService._finished_response(session_id)

        QuizSessionService._emit(session, session_id)

        response = {'accepted': accepted, 'sessionId': session_id, 'session': session.view()}
        if session.complete and session.result is not None:
            response['report'] = QuizSessionService.build_report(session.result)
        return response

    @staticmethod
    def _finished_response(session_id: Optional[str]) -> Dict[str, Any]:
        return {'accepted': False, 'sessionId': session_id, 'complete': True}

    @staticmethod
    def _emit(session: QuizSession, session_id: str) -> List[str]:
        sender = current_app._get_current_object()
        emitted = []
        for name, payload in session.drain_events():
            if name == EVENT_TIME_WARNING:
                quiz_time_warning.send(
                    sender,
                    user_id=session.user_id,
                    session_id=session_id,
                    remaining_seconds=payload['remaining_seconds'],
                )
            elif name == EVENT_COMPLETED:
                quiz_completed.send(sender, result=payload['result'], forced=payload['forced'])
            emitted.append(name)
        return emitted

    @staticmethod
    def build_report(result: QuizResult) -> Dict[str, Any]:
        report = {'result': result.to_dict(), 'grade': grade_for(result.score_percent)}
        if result.summary is not None:
            report['score'] = result.summary.to_dict()
        return report
