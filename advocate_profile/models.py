from decimal import Decimal, ROUND_HALF_UP

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import Avg, Count

from common.models import BaseModel
from common.validators import validate_non_negative_amount

RATING_PLACES = Decimal("0.01")


class Advocate(BaseModel):
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='advocate_profile'
    )

    # Professional details
    specialization = models.CharField(max_length=255, blank=True, null=True)
    experience_years = models.PositiveIntegerField(blank=True, null=True)
    bar_council_number = models.CharField(max_length=100, unique=True, blank=True, null=True)
    license_number = models.CharField(max_length=100, blank=True, null=True)
    location = models.CharField(max_length=255, blank=True, null=True)
    bio = models.TextField(blank=True, null=True)
    hourly_rate = models.DecimalField(
        max_digits=10, decimal_places=2, blank=True, null=True,
        validators=[validate_non_negative_amount],
    )

    # Derived from reviews, see recompute_rating()
    rating = models.DecimalField(
        max_digits=3, decimal_places=2, default=Decimal("0.00"),
        validators=[MinValueValidator(0), MaxValueValidator(5)],
    )
    total_reviews = models.PositiveIntegerField(default=0)

    is_verified = models.BooleanField(default=False)
    is_available = models.BooleanField(default=True)

    class Meta:
        ordering = ['-rating', '-total_reviews']

    def __str__(self):
        return f"{self.user.get_full_name()} | {self.specialization or '-'}"

    def recompute_rating(self, save=True):
        """
        Rebuild ``rating`` and ``total_reviews`` from the full review set.

        Callers that run concurrently with other review submissions should hold
        a ``select_for_update`` lock on this row.
        """
        aggregate = self.reviews.aggregate(avg=Avg("rating"), count=Count("id"))
        count = aggregate["count"] or 0
        if count:
            average = Decimal(str(aggregate["avg"])).quantize(RATING_PLACES, rounding=ROUND_HALF_UP)
        else:
            average = Decimal("0.00")

        self.rating = average
        self.total_reviews = count
        if save:
            self.save(update_fields=["rating", "total_reviews", "updated_at"])
        return self.rating, self.total_reviews
