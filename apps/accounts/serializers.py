from rest_framework import serializers
from django.contrib.auth.password_validation import validate_password
from .models import User
from .validators import validate_currency_code


class CurrencyField(serializers.CharField):
    """Three-letter currency code; input is upper-cased before validation."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.validators.append(validate_currency_code)

    def to_internal_value(self, data):
        return super().to_internal_value(data).upper()


class UserSerializer(serializers.ModelSerializer):
    """Basic user serializer for profile display."""

    default_currency = CurrencyField(required=False)

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'display_name',
            'default_currency',
            'created_at',
            'last_login',
        ]
        read_only_fields = ['id', 'email', 'created_at', 'last_login']


class UserRegistrationSerializer(serializers.ModelSerializer):
    """Validate registration input; the service creates the user."""

    password = serializers.CharField(
        write_only=True,
        required=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )
    password_confirm = serializers.CharField(
        write_only=True,
        required=True,
        style={'input_type': 'password'}
    )
    default_currency = CurrencyField(required=False)

    class Meta:
        model = User
        fields = ['email', 'password', 'password_confirm', 'display_name', 'default_currency']

    def validate(self, attrs):
        """Validate password confirmation."""
        if attrs['password'] != attrs['password_confirm']:
            raise serializers.ValidationError({
                'password_confirm': 'Passwords do not match'
            })
        return attrs


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )
