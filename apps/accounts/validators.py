from django.core.exceptions import ValidationError
from django.core.validators import RegexValidator

validate_currency_code = RegexValidator(
    r'^[A-Z]{3}$',
    message='Currency must be a 3-letter ISO 4217 code',
    code='invalid_currency',
)


def normalize_currency(value) -> str:
    """Upper-case and check a currency code; raises ``ValidationError``."""
    if not isinstance(value, str):
        raise ValidationError('Currency must be a string', code='invalid_currency')
    code = value.strip().upper()
    validate_currency_code(code)
    return code
