"""
Auth Service - profile creation, e-mail login and token lifecycle.

Decouples DB logic from Routes.
"""
from typing import Optional, Tuple

from flask import current_app
from sqlalchemy.exc import IntegrityError

from quizzle_app.core.error_handlers import ConflictError, NotFoundError, ValidationError
from quizzle_app.models import User, db
from quizzle_app.utils.time_utils import utcnow

from .token_store import get_token_store


class AuthService:
    """Service for Authentication related operations."""

    @staticmethod
    def find_by_email(email: str) -> Optional[User]:
        return User.query.filter(db.func.lower(User.email) == email.strip().lower()).first()

    @staticmethod
    def create_profile(name: str, email: str, avatar_url: str = None, role: str = None) -> Tuple[User, str]:
        """
        Create a user and log them in.

        Returns:
            (user, session token)
        Raises:
            ConflictError: the e-mail is already registered.
            ValidationError: unknown role.
        """
        role = role or User.ROLE_STUDENT
        if role not in User.ROLES:
            raise ValidationError(f"Unknown role '{role}'")
        email = email.strip().lower()
        if AuthService.find_by_email(email):
            raise ConflictError('User with this email already exists')

        now = utcnow()
        user = User(
            name=name.strip(),
            email=email,
            avatar_url=avatar_url,
            role=role,
            created_at=now,
            last_login=now,
        )
        db.session.add(user)
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            raise ConflictError('User with this email already exists')

        current_app.logger.info(f"[AUTH] Profile created: {user.email} ({user.id})")
        return user, get_token_store().issue(user.id)

    @staticmethod
    def login(email: str) -> Tuple[User, str]:
        """
        Raises:
            NotFoundError: no profile for this e-mail.
        """
        user = AuthService.find_by_email(email)
        if user is None:
            raise NotFoundError('User not found', resource='user')

        user.last_login = utcnow()
        db.session.commit()

        current_app.logger.info(f"[AUTH] Login: {user.email}")
        return user, get_token_store().issue(user.id)

    @staticmethod
    def logout(token: str) -> bool:
        return get_token_store().revoke(token)

    @staticmethod
    def reset_profile(user: User) -> None:
        """Delete the user with all results and the active session, and drop every token."""
        user_id, email = user.id, user.email
        db.session.delete(user)
        db.session.commit()

        revoked = get_token_store().revoke_user(user_id)
        current_app.logger.info(f"[AUTH] Profile reset: {email}, {revoked} token(s) revoked")

    @staticmethod
    def user_for_token(token: str) -> Optional[User]:
        user_id = get_token_store().resolve(token)
        if not user_id:
            return None
        return db.session.get(User, user_id)
