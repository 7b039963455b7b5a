from django.db import models

from advocate_profile.models import Advocate
from common.choices import ServiceType
from common.models import BaseModel
from common.validators import validate_non_negative_amount, validate_positive_duration


class ServiceQuerySet(models.QuerySet):
    def active(self):
        return self.filter(is_active=True)

    def offering(self, service_type):
        """Services usable for ``service_type``; ``both`` matches either kind."""
        return self.filter(service_type__in=[service_type, ServiceType.BOTH])


class Service(BaseModel):
    advocate = models.ForeignKey(Advocate, on_delete=models.CASCADE, related_name='services')
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)
    service_type = models.CharField(max_length=10, choices=ServiceType.choices, default=ServiceType.BOTH)
    category = models.CharField(max_length=100, blank=True, null=True)
    price = models.DecimalField(
        max_digits=10, decimal_places=2, validators=[validate_non_negative_amount]
    )
    duration_minutes = models.PositiveIntegerField(validators=[validate_positive_duration])
    is_active = models.BooleanField(default=True)

    objects = ServiceQuerySet.as_manager()

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.title} | {self.advocate_id} | {self.price}"
