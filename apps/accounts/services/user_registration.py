"""User registration service."""

import logging

from django.core.exceptions import ValidationError
from django.db import transaction, IntegrityError
from django.contrib.auth import get_user_model

from ..validators import normalize_currency
from .exceptions import (
    DuplicateEmailError,
    InvalidCurrencyError,
    UserRegistrationError,
)

User = get_user_model()

logger = logging.getLogger(__name__)


@transaction.atomic
def register_user(
    *,
    email: str,
    password: str,
    display_name: str = "",
    default_currency: str = "USD"
) -> User:
    """
    Register a new user.

    No streak record is created here; the streak engine creates one lazily
    on the user's first purchase.

    Args:
        email: User's email address
        password: User's password (will be hashed)
        display_name: Optional display name
        default_currency: ISO currency code used for new expenses, any case

    Returns:
        Created User instance

    Raises:
        DuplicateEmailError: The email is already registered
        InvalidCurrencyError: default_currency is not a 3-letter code
        UserRegistrationError: The user row could not be written
    """
    try:
        currency = normalize_currency(default_currency)
    except ValidationError as e:
        raise InvalidCurrencyError(f"Invalid default currency: {default_currency!r}") from e

    normalized = User.objects.normalize_email(email)
    if User.objects.filter(email__iexact=normalized).exists():
        raise DuplicateEmailError("A user with this email already exists")

    try:
        user = User.objects.create_user(
            email=normalized,
            password=password,
            display_name=display_name,
            default_currency=currency,
        )
    except (IntegrityError, ValueError) as e:
        raise UserRegistrationError(f"Registration failed: {e}") from e

    logger.info("Registered user %s", user.id)
    return user
