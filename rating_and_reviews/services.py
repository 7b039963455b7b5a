"""Review submission and the advocate rating it feeds."""

from __future__ import annotations

import logging
from typing import Optional

from django.db import transaction
from rest_framework.exceptions import ValidationError

from advocate_profile.models import Advocate
from bookings.models import Booking
from common.choices import BookingStatus

from .models import Review

logger = logging.getLogger("rating_and_reviews")


def submit_review(user, booking_id: int, rating: int, comment: Optional[str] = None) -> Review:
    """
    Store the review for a completed booking of ``user`` and refresh the
    advocate's aggregate rating.

    The advocate row is locked for the whole transaction so concurrent
    submissions for the same advocate recompute one after the other.
    """

    with transaction.atomic():
        booking = Booking.objects.filter(
            pk=booking_id, user=user, status=BookingStatus.COMPLETED
        ).first()
        if booking is None:
            raise ValidationError({"error": "Invalid booking or booking not completed"})

        advocate = Advocate.objects.select_for_update().get(pk=booking.advocate_id)

        if Review.objects.filter(booking=booking).exists():
            raise ValidationError({"error": "Review already exists for this booking"})

        review = Review.objects.create(
            booking=booking,
            user=user,
            advocate=advocate,
            rating=rating,
            comment=comment,
        )
        new_rating, total = advocate.recompute_rating()

    logger.info(
        "Review %s for booking %s stored; advocate %s now %s over %s reviews",
        review.pk, booking.pk, advocate.pk, new_rating, total,
    )
    return review
