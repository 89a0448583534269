"""
Login for the email-based user and JWT session issuing.

Both registration and login hand the client the same payload: the user plus
a refresh/access pair, so token creation lives here rather than in views.
"""

import logging
from dataclasses import dataclass

from django.contrib.auth import get_user_model
from django.contrib.auth.models import update_last_login
from rest_framework_simplejwt.tokens import RefreshToken

from .exceptions import InvalidCredentialsError, InactiveAccountError

User = get_user_model()

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthSession:
    user: User
    access: str
    refresh: str

    @property
    def tokens(self) -> dict:
        return {'refresh': self.refresh, 'access': self.access}


def issue_session(user: User) -> AuthSession:
    """Mint a fresh refresh/access pair for ``user``."""
    refresh = RefreshToken.for_user(user)
    return AuthSession(
        user=user,
        access=str(refresh.access_token),
        refresh=str(refresh),
    )


def authenticate_user(*, email: str, password: str) -> AuthSession:
    """
    Check credentials and open a session.

    Email matching ignores case, the same way registration rejects
    duplicates. ``last_login`` is stamped only on success.

    Returns:
        AuthSession with the user and a new token pair

    Raises:
        InvalidCredentialsError: Unknown email or wrong password
        InactiveAccountError: Correct password on a deactivated account
    """
    user = User.objects.filter(email__iexact=email.strip()).first()

    if user is None or not user.check_password(password):
        logger.info("Rejected login for %s", email)
        raise InvalidCredentialsError("Invalid email or password")

    if not user.is_active:
        raise InactiveAccountError("Account is deactivated")

    update_last_login(None, user)
    return issue_session(user)
