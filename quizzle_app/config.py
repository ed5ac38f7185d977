# File: quizzle_app/config.py

import os

from dotenv import load_dotenv

load_dotenv()

# quizzle_app/ sits directly under the project root.
BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))

DATABASE_PATH = os.path.join(BASE_DIR, "database", "quizzle.db")


class Config:
    """Cấu hình ứng dụng Quizzle."""

    SECRET_KEY = os.environ.get('SECRET_KEY')
    if not SECRET_KEY:
        SECRET_KEY = 'dev-secret-key-replace-in-production'

    SQLALCHEMY_DATABASE_URI = os.environ.get('SQLALCHEMY_DATABASE_URI') or f'sqlite:///{DATABASE_PATH}'
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,
        'connect_args': {'timeout': 30},
    }
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Static content store: <QUESTION_BANK_DIR>/<subject>/<difficulty>/<chapter>.json
    QUESTION_BANK_DIR = os.environ.get('QUESTION_BANK_DIR') or os.path.join(BASE_DIR, 'question_bank')

    # Auth tokens handed out by /api/auth/create-profile and /api/auth/login
    SESSION_HEADER_NAME = 'X-Session-Id'
    SESSION_TOKEN_TTL_SECONDS = int(os.environ.get('SESSION_TOKEN_TTL_SECONDS', 7 * 24 * 3600))

    # Background jobs
    SCHEDULER_ENABLED = os.environ.get('SCHEDULER_ENABLED', '1') not in ('0', 'false', 'False')
    SCHEDULER_API_ENABLED = False
    QUIZ_SWEEP_INTERVAL_SECONDS = int(os.environ.get('QUIZ_SWEEP_INTERVAL_SECONDS', 30))
    TOKEN_PURGE_INTERVAL_MINUTES = 10

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    LOG_DIR = os.environ.get('LOG_DIR') or os.path.join(BASE_DIR, 'logs')

    @classmethod
    def init_app(cls, app):
        """Khởi tạo các thư mục cần thiết."""
        uri = app.config.get('SQLALCHEMY_DATABASE_URI', '')
        if uri == f'sqlite:///{DATABASE_PATH}':
            os.makedirs(os.path.dirname(DATABASE_PATH), exist_ok=True)
        if app.config.get('LOG_DIR'):
            os.makedirs(app.config['LOG_DIR'], exist_ok=True)
