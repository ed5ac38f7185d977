"""User profile model."""

from __future__ import annotations

import uuid

from flask_login import UserMixin

from ..db_instance import db
from ..utils.time_utils import to_iso, utcnow


def _new_user_id() -> str:
    return str(uuid.uuid4())


class User(UserMixin, db.Model):
    """Learner profile. Authentication is by e-mail plus an issued session token."""

    __tablename__ = 'users'

    ROLE_STUDENT = 'student'
    ROLE_INSTRUCTOR = 'instructor'
    ROLES = (ROLE_STUDENT, ROLE_INSTRUCTOR)

    id = db.Column(db.String(36), primary_key=True, default=_new_user_id)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    avatar_url = db.Column(db.String(512), nullable=True)
    role = db.Column(db.String(20), default=ROLE_STUDENT, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False)
    last_login = db.Column(db.DateTime(timezone=True), nullable=True)

    quiz_results = db.relationship(
        'QuizResultRecord',
        backref='user',
        lazy='dynamic',
        cascade='all, delete-orphan',
        passive_deletes=True,
    )
    active_session = db.relationship(
        'ActiveQuizSession',
        uselist=False,
        backref='user',
        cascade='all, delete-orphan',
        passive_deletes=True,
    )

    def get_id(self):
        return self.id

    def to_dict(self) -> dict[str, object]:
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'avatarUrl': self.avatar_url,
            'role': self.role,
            'createdAt': to_iso(self.created_at),
            'lastLogin': to_iso(self.last_login),
        }
