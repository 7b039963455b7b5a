from decimal import Decimal

from django.conf import settings
from django.db import models

from advocate_profile.models import Advocate
from catalog.models import Service
from common.choices import BookingStatus, PaymentStatus, SessionType
from common.models import BaseModel


class Booking(BaseModel):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='bookings')
    advocate = models.ForeignKey(Advocate, on_delete=models.CASCADE, related_name='bookings')
    service = models.ForeignKey(
        Service, on_delete=models.SET_NULL, related_name='bookings', blank=True, null=True
    )
    booking_date = models.DateField()
    booking_time = models.TimeField()
    service_type = models.CharField(max_length=10, choices=SessionType.choices)
    status = models.CharField(max_length=10, choices=BookingStatus.choices, default=BookingStatus.PENDING)
    payment_status = models.CharField(max_length=10, choices=PaymentStatus.choices, default=PaymentStatus.PENDING)
    total_amount = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    notes = models.TextField(blank=True, null=True)

    class Meta:
        ordering = ['-booking_date', '-booking_time']
        indexes = [
            models.Index(fields=['advocate', 'status'], name='booking_advocate_status_idx'),
            models.Index(fields=['user', 'status'], name='booking_user_status_idx'),
        ]

    def __str__(self):
        return f"#{self.pk} {self.user_id} -> {self.advocate_id} | {self.booking_date} {self.booking_time} | {self.status}"

    @staticmethod
    def resolve_total_amount(advocate, service=None):
        """
        Price snapshot taken at creation: the service price when a service is
        booked, otherwise the advocate's hourly rate, otherwise zero.
        """
        if service is not None:
            return service.price if service.price is not None else Decimal("0.00")
        if advocate is not None and advocate.hourly_rate is not None:
            return advocate.hourly_rate
        return Decimal("0.00")
