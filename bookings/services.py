"""Booking lifecycle operations used by the booking views."""

from __future__ import annotations

import logging
from typing import Any, Dict

from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import NotFound, ValidationError

from advocate_profile.models import Advocate
from catalog.models import Service
from common.choices import BookingStatus

from .models import Booking

logger = logging.getLogger("bookings")


def create_booking(user, data: Dict[str, Any]) -> Booking:
    """
    Create a ``pending`` booking for ``user``.

    The total is snapshotted here and never recomputed. Unknown advocates or
    services, and services owned by another advocate, are rejected.
    """

    with transaction.atomic():
        advocate = Advocate.objects.filter(pk=data["advocate_id"]).first()
        if advocate is None:
            raise ValidationError({"error": "Advocate not found"})

        service = None
        service_id = data.get("service_id")
        if service_id:
            service = Service.objects.filter(pk=service_id).first()
            if service is None:
                raise ValidationError({"error": "Service not found"})
            if service.advocate_id != advocate.pk:
                raise ValidationError({"error": "Service does not belong to this advocate"})

        booking = Booking.objects.create(
            user=user,
            advocate=advocate,
            service=service,
            booking_date=data["booking_date"],
            booking_time=data["booking_time"],
            service_type=data["service_type"],
            total_amount=Booking.resolve_total_amount(advocate, service),
            notes=data.get("notes"),
        )

    logger.info(
        "Booking %s created by user %s for advocate %s (amount=%s)",
        booking.pk, user.pk, advocate.pk, booking.total_amount,
    )
    return booking


def set_booking_status(advocate: Advocate, booking_id: int, status: str) -> None:
    """
    Move a booking owned by ``advocate`` to ``status``. Any status may be set
    from any other; only ownership is enforced.
    """

    if status not in BookingStatus.values:
        raise ValidationError({"error": f"Invalid status: {status}"})

    updated = Booking.objects.filter(pk=booking_id, advocate=advocate).update(
        status=status, updated_at=timezone.now()
    )
    if not updated:
        raise NotFound("Booking not found or unauthorized")
    logger.info("Booking %s set to %s by advocate %s", booking_id, status, advocate.pk)


def cancel_booking(user, booking_id: int) -> None:
    """Cancel a booking owned by ``user``, whatever its current status."""

    updated = Booking.objects.filter(pk=booking_id, user=user).update(
        status=BookingStatus.CANCELLED, updated_at=timezone.now()
    )
    if not updated:
        raise NotFound("Booking not found or unauthorized")
    logger.info("Booking %s cancelled by user %s", booking_id, user.pk)
