from django.contrib import admin

from .models import Advocate


@admin.register(Advocate)
class AdvocateAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "user",
        "specialization",
        "location",
        "hourly_rate",
        "rating",
        "total_reviews",
        "is_verified",
        "is_available",
    )
    list_filter = ("is_verified", "is_available")
    search_fields = ("user__name", "user__email", "specialization", "location", "bar_council_number")
    readonly_fields = ("rating", "total_reviews", "created_at", "updated_at")
    list_select_related = ("user",)
