"""Database models package for Quizzle."""

from ..db_instance import db

from .quiz import ActiveQuizSession, QuizResultRecord
from .user import User

__all__ = [
    'db',
    'User',
    'QuizResultRecord',
    'ActiveQuizSession',
]
