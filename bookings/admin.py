from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "user",
        "advocate",
        "service",
        "booking_date",
        "booking_time",
        "service_type",
        "status",
        "payment_status",
        "total_amount",
    )
    list_filter = ("status", "payment_status", "service_type")
    search_fields = ("user__email", "user__name", "advocate__user__name", "notes")
    date_hierarchy = "booking_date"
    list_select_related = ("user", "advocate__user", "service")
