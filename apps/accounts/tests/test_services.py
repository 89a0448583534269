import pytest
from rest_framework_simplejwt.tokens import AccessToken, RefreshToken
from apps.accounts.models import User
from apps.accounts.services import (
    AuthSession,
    authenticate_user,
    issue_session,
    register_user,
    DuplicateEmailError,
    InvalidCurrencyError,
    InvalidCredentialsError,
    InactiveAccountError,
    UserRegistrationError,
)


# =============================================================================
# register_user Tests
# =============================================================================

@pytest.mark.django_db
class TestRegisterUser:
    """Tests for register_user()"""

    def test_creates_user_with_hashed_password(self):
        user = register_user(email='new@example.com', password='SecurePass123!')

        assert user.pk is not None
        assert user.check_password('SecurePass123!')
        assert user.default_currency == 'USD'

    def test_upper_cases_currency(self):
        user = register_user(
            email='czk@example.com',
            password='SecurePass123!',
            default_currency=' czk ',
        )

        assert user.default_currency == 'CZK'

    @pytest.mark.parametrize("currency", ['', 'EU', 'EURO', 'E1R', None])
    def test_invalid_currency(self, currency):
        with pytest.raises(InvalidCurrencyError):
            register_user(
                email='bad@example.com',
                password='SecurePass123!',
                default_currency=currency,
            )

        assert not User.objects.filter(email='bad@example.com').exists()

    def test_duplicate_email_ignores_case(self, user):
        with pytest.raises(DuplicateEmailError):
            register_user(email=user.email.upper(), password='SecurePass123!')

    def test_duplicate_is_a_registration_error(self, user):
        with pytest.raises(UserRegistrationError):
            register_user(email=user.email, password='SecurePass123!')


# =============================================================================
# authenticate_user Tests
# =============================================================================

@pytest.mark.django_db
class TestAuthenticateUser:
    """Tests for authenticate_user()"""

    def test_returns_session_for_user(self, user):
        session = authenticate_user(email=user.email, password='TestPass123!')

        assert isinstance(session, AuthSession)
        assert session.user == user
        assert str(AccessToken(session.access)['user_id']) == str(user.id)
        assert str(RefreshToken(session.refresh)['user_id']) == str(user.id)

    def test_email_match_ignores_case(self, user):
        session = authenticate_user(email=' TestUser@Example.com ', password='TestPass123!')

        assert session.user == user

    def test_stamps_last_login(self, user):
        assert user.last_login is None

        authenticate_user(email=user.email, password='TestPass123!')

        user.refresh_from_db()
        assert user.last_login is not None

    def test_wrong_password(self, user):
        with pytest.raises(InvalidCredentialsError):
            authenticate_user(email=user.email, password='WrongPass123!')

        user.refresh_from_db()
        assert user.last_login is None

    def test_unknown_email_looks_like_wrong_password(self, db):
        with pytest.raises(InvalidCredentialsError) as exc_info:
            authenticate_user(email='nobody@example.com', password='TestPass123!')

        assert str(exc_info.value) == "Invalid email or password"

    def test_inactive_account(self, user_inactive):
        with pytest.raises(InactiveAccountError):
            authenticate_user(email=user_inactive.email, password='TestPass123!')


# =============================================================================
# issue_session Tests
# =============================================================================

@pytest.mark.django_db
class TestIssueSession:
    """Tests for issue_session()"""

    def test_tokens_payload(self, user):
        session = issue_session(user)

        assert session.tokens == {'refresh': session.refresh, 'access': session.access}

    def test_each_call_mints_new_refresh_token(self, user):
        first = issue_session(user)
        second = issue_session(user)

        assert first.refresh != second.refresh
