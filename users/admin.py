from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models import User
from advocate_profile.models import Advocate

class AdvocateInline(admin.StackedInline):
    model = Advocate
    can_delete = False
    verbose_name_plural = 'Advocate Profile'
    fk_name = 'user'
    readonly_fields = ("rating", "total_reviews")

@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = (
        "id",
        "email",
        "name",
        "phone",
        "role",
        "is_active",
        "created_at",
    )
    list_filter = ("role", "is_staff", "is_active")
    search_fields = ("email", "name", "phone")
    ordering = ("-created_at",)
    readonly_fields = ("created_at", "updated_at", "last_login")
    fieldsets = (
        (None, {"fields": ("email", "password")}),
        ("Personal info", {"fields": ("name", "phone", "role")}),
        ("Permissions", {"fields": ("is_active", "is_staff", "is_superuser", "groups", "user_permissions")}),
        ("Important dates", {"fields": ("last_login", "created_at", "updated_at")}),
    )
    add_fieldsets = (
        (None, {
            "classes": ("wide",),
            "fields": ("email", "name", "role", "password1", "password2", "is_active", "is_staff"),
        }),
    )
    inlines = [AdvocateInline]
    filter_horizontal = ("groups", "user_permissions")
