# File: quizzle_app/modules/auth/interface.py
from typing import Optional

from quizzle_app.models import User

from .services.auth_service import AuthService


class AuthInterface:
    @staticmethod
    def get_user_by_email(email: str) -> Optional[User]:
        """Public API to look a profile up by e-mail (case-insensitive)."""
        return AuthService.find_by_email(email)
