"""Aggregates shown on the admin dashboard."""

from __future__ import annotations

from decimal import Decimal
from typing import Dict

from django.contrib.auth import get_user_model
from django.db.models import DecimalField, Sum, Value
from django.db.models.functions import Coalesce

from bookings.models import Booking
from common.choices import BookingStatus, PaymentStatus, UserRole

User = get_user_model()

ZERO = Decimal("0.00")
RECENT_BOOKINGS_LIMIT = 10


class AdminDashboardService:
    """Counts, paid revenue and the latest bookings across the whole platform."""

    def get_metrics(self) -> Dict[str, object]:
        revenue = Booking.objects.filter(payment_status=PaymentStatus.PAID).aggregate(
            total=Coalesce(
                Sum("total_amount"),
                Value(ZERO),
                output_field=DecimalField(max_digits=14, decimal_places=2),
            )
        )["total"]

        return {
            "totalUsers": User.objects.filter(role=UserRole.USER).count(),
            "totalAdvocates": User.objects.filter(role=UserRole.ADVOCATE).count(),
            "totalBookings": Booking.objects.count(),
            "pendingBookings": Booking.objects.filter(status=BookingStatus.PENDING).count(),
            "totalRevenue": revenue,
            "recentBookings": self.get_recent_bookings(),
        }

    def get_recent_bookings(self):
        return (
            Booking.objects.select_related("user", "advocate__user")
            .order_by("-created_at", "-id")[:RECENT_BOOKINGS_LIMIT]
        )
