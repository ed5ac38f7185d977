import json
import os
import sys

import pytest
from flask import g

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from quizzle_app import create_app, db
from quizzle_app.config import Config
from quizzle_app.modules.question_bank.config import QuestionBankConfig
from quizzle_app.modules.question_bank.schemas import Question

OPTIONS = ['Option A', 'Option B', 'Option C', 'Option D']


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_ENGINE_OPTIONS = {
        'connect_args': {'check_same_thread': False}
    }
    SCHEDULER_ENABLED = False
    LOG_DIR = None


def make_question(text='Q', correct='Option A', subject=None, chapter=None, tag=None, options=None):
    return Question(
        text=text,
        options=tuple(options or OPTIONS),
        correct_option=correct,
        topic_tag=tag,
        subject=subject,
        chapter=chapter,
    )


def write_chapter(root, subject, difficulty, chapter, count, records=None):
    """Write ``count`` generated questions (answer always 'Option A') to one chapter file."""
    folder = os.path.join(root, subject, difficulty)
    os.makedirs(folder, exist_ok=True)
    if records is None:
        records = [
            {
                'question': f'{subject} {chapter} question {i}',
                'options': OPTIONS,
                'answer': 'Option A',
                'explanation': f'Explanation {i}',
            }
            for i in range(count)
        ]
    with open(os.path.join(folder, f'{chapter}.json'), 'w', encoding='utf-8') as handle:
        json.dump(records, handle)


@pytest.fixture
def question_bank_dir(tmp_path):
    """Every catalogue chapter at 'hard' with 10 questions; nothing at 'easy'."""
    root = str(tmp_path / 'question_bank')
    for subject in QuestionBankConfig.SUBJECTS:
        for chapter in subject['chapters']:
            write_chapter(root, subject['id'], 'hard', chapter, 10)
    return root


@pytest.fixture
def app(question_bank_dir):
    config = type('BankTestConfig', (TestConfig,), {'QUESTION_BANK_DIR': question_bank_dir})
    app = create_app(config)

    @app.teardown_request
    def forget_request_user(exc):
        # Test requests share the fixture's app context, so Flask-Login's
        # per-request user cache in ``g`` must not leak into the next request.
        g.pop('_login_user', None)

    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def create_profile(client, name='Ada Lovelace', email='ada@example.com'):
    response = client.post('/api/auth/create-profile', json={'name': name, 'email': email})
    assert response.status_code == 201, response.get_json()
    data = response.get_json()['data']
    return data['user'], {'X-Session-Id': data['sessionId']}


@pytest.fixture
def auth_headers(client):
    _, headers = create_profile(client)
    return headers
