from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from django.db import transaction
from rest_framework import serializers

from advocate_profile.models import Advocate
from common.choices import UserRole

User = get_user_model()

ADVOCATE_PROFILE_FIELDS = (
    "specialization",
    "experience_years",
    "bar_council_number",
    "license_number",
    "location",
    "bio",
    "hourly_rate",
)


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ['id', 'name', 'email', 'phone', 'role', 'created_at']
        read_only_fields = fields


class RegisterSerializer(serializers.Serializer):
    """
    Sign-up for clients and advocates. Advocates get their profile row in the
    same transaction, optionally pre-filled with the professional fields.
    """
    name = serializers.CharField(max_length=255)
    email = serializers.EmailField(max_length=255)
    password = serializers.CharField(write_only=True, style={'input_type': 'password'})
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True, allow_null=True)
    role = serializers.ChoiceField(
        choices=[UserRole.USER, UserRole.ADVOCATE], default=UserRole.USER,
        error_messages={'invalid_choice': 'Role must be either "user" or "advocate".'},
    )

    specialization = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)
    experience_years = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    bar_council_number = serializers.CharField(max_length=100, required=False, allow_blank=True, allow_null=True)
    license_number = serializers.CharField(max_length=100, required=False, allow_blank=True, allow_null=True)
    location = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)
    bio = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    hourly_rate = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=0, required=False, allow_null=True
    )

    def validate_email(self, value):
        value = value.lower()
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("A user with this email already exists.")
        return value

    def validate_password(self, value):
        validate_password(value)
        return value

    def validate_bar_council_number(self, value):
        if value and Advocate.objects.filter(bar_council_number=value).exists():
            raise serializers.ValidationError("This bar council number is already registered.")
        return value or None

    def create(self, validated_data):
        profile_data = {
            field: validated_data.pop(field)
            for field in ADVOCATE_PROFILE_FIELDS
            if field in validated_data
        }
        password = validated_data.pop("password")

        with transaction.atomic():
            user = User.objects.create_user(password=password, **validated_data)
            if user.role == UserRole.ADVOCATE:
                Advocate.objects.create(user=user, **profile_data)
        return user


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, style={'input_type': 'password'})

    def validate_email(self, value):
        return value.lower()
