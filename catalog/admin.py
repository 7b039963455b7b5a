from django.contrib import admin

from .models import Service


@admin.register(Service)
class ServiceAdmin(admin.ModelAdmin):
    list_display = ("id", "title", "advocate", "service_type", "category", "price", "duration_minutes", "is_active")
    list_filter = ("service_type", "is_active", "category")
    search_fields = ("title", "description", "category", "advocate__user__name")
    list_select_related = ("advocate__user",)
