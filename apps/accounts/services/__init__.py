"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    UserRegistrationError,
    DuplicateEmailError,
    InvalidCurrencyError,
    InvalidCredentialsError,
    InactiveAccountError,
)
from .user_registration import register_user
from .user_authentication import AuthSession, authenticate_user, issue_session

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'UserRegistrationError',
    'DuplicateEmailError',
    'InvalidCurrencyError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    # Services
    'AuthSession',
    'register_user',
    'authenticate_user',
    'issue_session',
]
