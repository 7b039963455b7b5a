from decimal import Decimal

from django.core.exceptions import ValidationError

MIN_REVIEW_RATING = 1
MAX_REVIEW_RATING = 5

def validate_review_rating(value):
    if value is None or not MIN_REVIEW_RATING <= value <= MAX_REVIEW_RATING:
        raise ValidationError(
            f"Rating must be between {MIN_REVIEW_RATING} and {MAX_REVIEW_RATING}."
        )

def validate_non_negative_amount(value):
    if value is not None and Decimal(value) < 0:
        raise ValidationError("Amount must not be negative.")

def validate_positive_duration(value):
    if value is not None and value <= 0:
        raise ValidationError("duration_minutes must be greater than zero.")
