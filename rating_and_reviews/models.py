from django.conf import settings
from django.db import models

from advocate_profile.models import Advocate
from bookings.models import Booking
from common.validators import validate_review_rating

class Review(models.Model):
    booking = models.OneToOneField(Booking, on_delete=models.CASCADE, related_name="review")
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="reviews")
    advocate = models.ForeignKey(Advocate, on_delete=models.CASCADE, related_name="reviews")
    rating = models.PositiveSmallIntegerField(validators=[validate_review_rating])
    comment = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.CheckConstraint(
                condition=models.Q(rating__gte=1) & models.Q(rating__lte=5),
                name="review_rating_between_1_and_5",
            )
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.booking_id} - {self.rating}"
