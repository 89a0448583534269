"""Errors raised by the account services; views map them to HTTP responses."""


class AccountsServiceError(Exception):
    """Base exception for accounts services."""
    pass


class UserRegistrationError(AccountsServiceError):
    """The account could not be created."""
    pass


class DuplicateEmailError(UserRegistrationError):
    """Another account already uses this email (case-insensitive)."""
    pass


class InvalidCurrencyError(UserRegistrationError):
    """Default currency is not a 3-letter code."""
    pass


class InvalidCredentialsError(AccountsServiceError):
    """Unknown email or wrong password; deliberately indistinguishable."""
    pass


class InactiveAccountError(AccountsServiceError):
    """Password matched but the account is switched off."""
    pass
