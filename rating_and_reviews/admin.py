from django.contrib import admin

from .models import Review


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ("id", "booking", "user", "advocate", "rating", "created_at")
    list_filter = ("rating",)
    search_fields = ("comment", "user__email", "advocate__user__name")
    list_select_related = ("booking", "user", "advocate__user")
