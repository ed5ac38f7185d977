"""
Tests for quiz sessions and the result store over HTTP and at service level.

Tests cover:
- Starting each quiz type, empty selections
- Driving a session through the action endpoint
- Server-side clock: warning signal, sub-second carry, time-forced submission via the sweep
- Fire-and-forget persistence, including the failure path
- Client-reported results
"""

import random
from datetime import datetime, timedelta, timezone

import pytest

from quizzle_app import create_app
from quizzle_app.core.error_handlers import ContentUnavailable, PersistenceError
from quizzle_app.core.signals import quiz_completed, quiz_time_warning, result_persist_failed
from quizzle_app.models import ActiveQuizSession, QuizResultRecord, User, db
from quizzle_app.modules.quiz.services.result_store import ResultStore
from quizzle_app.modules.quiz.services.session_service import QuizSessionService

from conftest import TestConfig

T0 = datetime(2024, 6, 1, 9, 0, tzinfo=timezone.utc)

LESSON = {'quizType': 'lesson', 'subjectId': 'operating-systems', 'lessonTitle': 'Process Management'}


@pytest.fixture
def user(app):
    user = User(name='Grace', email='grace@example.com')
    db.session.add(user)
    db.session.commit()
    return user


def _act(client, headers, action, **body):
    response = client.post(f'/api/quiz/session/{action}', headers=headers, json=body)
    assert response.status_code == 200, response.get_json()
    return response.get_json()['data']


class TestStart:
    def test_start_lesson_quiz(self, client, auth_headers):
        response = client.post('/api/quiz/start', headers=auth_headers, json=LESSON)
        assert response.status_code == 201
        session = response.get_json()['data']['session']
        assert session['totalQuestions'] == 5
        assert session['timeLimit'] is None
        assert session['status'][0]['status'] == 'visited'
        assert 'answer' not in session['currentQuestion']

    def test_requires_login(self, client):
        assert client.post('/api/quiz/start', json=LESSON).status_code == 401

    def test_unmapped_lesson_is_content_unavailable(self, client, auth_headers):
        response = client.post('/api/quiz/start', headers=auth_headers, json={
            'quizType': 'lesson', 'subjectId': 'entrepreneurship', 'lessonTitle': 'Marketing and Sales',
        })
        assert response.status_code == 404
        assert response.get_json()['code'] == 'CONTENT_UNAVAILABLE'
        assert ActiveQuizSession.query.count() == 0

    def test_empty_difficulty_creates_no_session(self, app, user):
        with pytest.raises(ContentUnavailable):
            QuizSessionService.start(user.id, 'subject', subject_id='data-analytics', difficulty='easy')
        assert ActiveQuizSession.query.count() == 0

    def test_invalid_quiz_type(self, client, auth_headers):
        response = client.post('/api/quiz/start', headers=auth_headers, json={'quizType': 'weekly'})
        assert response.status_code == 400

    def test_subject_quiz_is_balanced_and_timed(self, app, user):
        _, session = QuizSessionService.start(
            user.id, 'subject', subject_id='entrepreneurship', rng=random.Random(4)
        )
        assert session.total == 32
        assert session.time_limit == 1200
        assert session.lesson_title == 'Subject Quiz'

    def test_full_syllabus(self, app, user):
        _, session = QuizSessionService.start(user.id, 'full-syllabus', rng=random.Random(4))
        assert session.total == 100
        assert session.time_limit == 3600
        assert session.subject_id == 'full-syllabus'
        assert {q.topic_tag for q in session.questions} == {
            'data-analytics', 'operating-systems', 'entrepreneurship', 'software-engineering',
        }

    def test_new_quiz_replaces_active_one(self, app, user):
        QuizSessionService.start(user.id, 'lesson', subject_id='operating-systems', lesson_title='File Systems')
        QuizSessionService.start(user.id, 'subject', subject_id='operating-systems')
        rows = ActiveQuizSession.query.filter_by(user_id=user.id).all()
        assert [r.quiz_type for r in rows] == ['subject']


class TestActions:
    def test_full_lesson_flow_persists_result(self, client, auth_headers):
        client.post('/api/quiz/start', headers=auth_headers, json=LESSON)

        data = None
        for _ in range(5):
            assert _act(client, auth_headers, 'select', option='Option A')['accepted']
            data = _act(client, auth_headers, 'save-next')

        assert data['session']['complete']
        report = data['report']
        assert report['result']['score'] == 100
        assert report['grade'] == {'grade': 'A+', 'label': 'Excellent'}
        assert report['score']['correctCount'] == 5

        assert client.get('/api/quiz/session', headers=auth_headers).status_code == 404
        results = client.get('/api/quiz-results', headers=auth_headers).get_json()['data']
        assert len(results) == 1
        assert results[0]['passed'] is True
        assert results[0]['quizType'] == 'lesson'
        assert results[0]['selectedAnswers']['0'] == 'Option A'

    def test_rejected_action_is_not_an_error(self, client, auth_headers):
        client.post('/api/quiz/start', headers=auth_headers, json=LESSON)
        data = _act(client, auth_headers, 'save-next')
        assert data['accepted'] is False
        assert data['session']['currentIndex'] == 0

    def test_navigate_and_review(self, client, auth_headers):
        client.post('/api/quiz/start', headers=auth_headers, json=LESSON)
        _act(client, auth_headers, 'select', option='Option B')
        data = _act(client, auth_headers, 'mark-review')
        assert data['session']['status'][0] == {'status': 'answered', 'markedForReview': True}

        data = _act(client, auth_headers, 'navigate', index=4)
        assert data['session']['currentIndex'] == 4
        assert _act(client, auth_headers, 'navigate')['accepted'] is False
        assert _act(client, auth_headers, 'next')['accepted'] is False

        data = _act(client, auth_headers, 'submit')
        assert data['report']['result']['score'] == 0
        assert data['report']['score']['unansweredCount'] == 4

    def test_repeated_submit_is_a_no_op(self, client, auth_headers):
        client.post('/api/quiz/start', headers=auth_headers, json=LESSON)
        assert 'report' in _act(client, auth_headers, 'submit')

        data = _act(client, auth_headers, 'submit')

        assert data == {'accepted': False, 'sessionId': None, 'complete': True}
        assert QuizResultRecord.query.count() == 1

    def test_unknown_action(self, client, auth_headers):
        client.post('/api/quiz/start', headers=auth_headers, json=LESSON)
        response = client.post('/api/quiz/session/teleport', headers=auth_headers, json={})
        assert response.status_code == 400

    def test_abandon(self, client, auth_headers):
        client.post('/api/quiz/start', headers=auth_headers, json=LESSON)
        response = client.delete('/api/quiz/session', headers=auth_headers)
        assert response.get_json()['data'] == {'abandoned': True}
        assert ActiveQuizSession.query.count() == 0
        assert QuizResultRecord.query.count() == 0


class TestClock:
    def test_sub_second_remainder_carries(self, app, user):
        row, session = QuizSessionService.start(user.id, 'subject', subject_id='operating-systems', now=T0)
        QuizSessionService.sync_clock(row, session, T0 + timedelta(seconds=1.5))
        assert session.elapsed_seconds == 1
        QuizSessionService.sync_clock(row, session, T0 + timedelta(seconds=2.1))
        assert session.elapsed_seconds == 2

    def test_warning_signal_sent_once(self, app, user):
        QuizSessionService.start(user.id, 'subject', subject_id='operating-systems', now=T0)
        warnings = []

        def receiver(sender, **kwargs):
            warnings.append(kwargs['remaining_seconds'])

        with quiz_time_warning.connected_to(receiver):
            QuizSessionService.apply_action(user.id, 'next', now=T0 + timedelta(seconds=950))
            QuizSessionService.apply_action(user.id, 'next', now=T0 + timedelta(seconds=1000))

        assert warnings == [300]

    def test_sweep_force_submits_expired_sessions(self, app, user):
        QuizSessionService.start(user.id, 'subject', subject_id='operating-systems', now=T0)
        completed = []

        def receiver(sender, **kwargs):
            completed.append(kwargs['forced'])

        with quiz_completed.connected_to(receiver):
            assert QuizSessionService.sweep_all(now=T0 + timedelta(seconds=1199)) == 0
            assert QuizSessionService.sweep_all(now=T0 + timedelta(seconds=1200)) == 1
            assert QuizSessionService.sweep_all(now=T0 + timedelta(seconds=5000)) == 0

        assert completed == [True]
        record = QuizResultRecord.query.one()
        assert record.time_spent == 1200
        assert record.score == 0
        assert record.passed is False
        assert ActiveQuizSession.query.count() == 0

    def test_sweep_and_request_finish_a_session_once(self, question_bank_dir, tmp_path):
        """A request holding a stale copy of the session loses to the sweep that removed it."""
        config = type('SharedFileConfig', (TestConfig,), {
            'QUESTION_BANK_DIR': question_bank_dir,
            'SQLALCHEMY_DATABASE_URI': f"sqlite:///{tmp_path / 'quizzle.db'}",
        })
        app = create_app(config)
        expired = T0 + timedelta(seconds=1300)
        completed = []

        def receiver(sender, **kwargs):
            completed.append(kwargs['forced'])

        with app.app_context():
            user = User(name='Grace', email='grace@example.com')
            db.session.add(user)
            db.session.commit()
            user_id = user.id
            QuizSessionService.start(user_id, 'subject', subject_id='operating-systems', now=T0)

        with quiz_completed.connected_to(receiver):
            with app.app_context():
                row, session = QuizSessionService.get_active(user_id)
                session_id = row.session_id

                with app.app_context():
                    assert QuizSessionService.sweep_all(now=expired) == 1

                QuizSessionService.sync_clock(row, session, expired)
                response = QuizSessionService._persist(row, session, False)

                assert response == {'accepted': False, 'sessionId': session_id, 'complete': True}
                assert QuizResultRecord.query.count() == 1

        assert completed == [True]
        with app.app_context():
            db.drop_all()

    def test_action_after_expiry_returns_forced_report(self, app, user):
        QuizSessionService.start(user.id, 'subject', subject_id='operating-systems', now=T0)
        data = QuizSessionService.apply_action(
            user.id, 'select', {'option': 'Option A'}, now=T0 + timedelta(hours=2)
        )
        assert data['accepted'] is False
        assert data['report']['result']['forced'] is True
        assert data['report']['result']['timeSpent'] == 1200

    def test_lesson_quiz_is_never_cut_off(self, app, user):
        QuizSessionService.start(
            user.id, 'lesson', subject_id='operating-systems', lesson_title='File Systems', now=T0
        )
        assert QuizSessionService.sweep_all(now=T0 + timedelta(days=1)) == 0
        view = QuizSessionService.current_view(user.id, now=T0 + timedelta(days=1))
        assert view['session']['elapsedSeconds'] == 86400
        assert view['session']['complete'] is False


class TestPersistence:
    def test_failed_write_still_returns_report(self, app, user, monkeypatch):
        def broken_save(result):
            raise PersistenceError('disk on fire')

        monkeypatch.setattr(ResultStore, 'save_result', staticmethod(broken_save))
        failures = []

        def receiver(sender, **kwargs):
            failures.append(kwargs['error'])

        QuizSessionService.start(user.id, 'lesson', subject_id='operating-systems', lesson_title='File Systems')
        with result_persist_failed.connected_to(receiver):
            data = QuizSessionService.apply_action(user.id, 'submit')

        assert data['session']['complete']
        assert data['report']['result']['score'] == 0
        assert failures == ['disk on fire']
        assert QuizResultRecord.query.count() == 0
        assert ActiveQuizSession.query.count() == 0

    def test_start_and_stored_result_are_logged(self, app, user, monkeypatch):
        messages = []
        monkeypatch.setattr(app.logger, 'info', lambda msg, *args, **kwargs: messages.append(msg))

        QuizSessionService.start(user.id, 'lesson', subject_id='operating-systems', lesson_title='File Systems')
        QuizSessionService.apply_action(user.id, 'submit')

        assert any(m.startswith('[QUIZ] Started lesson quiz') for m in messages)
        assert any(m.startswith('[RESULTS] Stored result') for m in messages)

    def test_results_newest_first(self, app, user):
        for minutes, score in ((30, 40), (10, 90), (20, 70)):
            ResultStore.save_reported(user.id, {
                'subject_id': 'operating-systems', 'lesson_title': 'File Systems', 'score': score,
                'total_questions': 5, 'quiz_type': 'lesson',
                'completed_at': T0 - timedelta(minutes=minutes),
            })
        assert [r.score_percent for r in ResultStore.load_results(user.id)] == [90, 70, 40]


class TestReportedResults:
    @pytest.mark.parametrize('score,passed', [(60, True), (59, False)])
    def test_passed_is_recomputed(self, client, auth_headers, score, passed):
        response = client.post('/api/quiz-results', headers=auth_headers, json={
            'subjectId': 'data-analytics', 'lessonTitle': 'Data Visualization',
            'score': score, 'totalQuestions': 5, 'timeSpent': 120, 'passed': not passed,
        })
        assert response.status_code == 201
        assert response.get_json()['data']['passed'] is passed

    def test_score_out_of_range(self, client, auth_headers):
        response = client.post('/api/quiz-results', headers=auth_headers, json={
            'subjectId': 'data-analytics', 'lessonTitle': 'Data Visualization',
            'score': 140, 'totalQuestions': 5,
        })
        assert response.status_code == 400
