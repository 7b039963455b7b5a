from django.contrib.auth import get_user_model
from rest_framework import serializers

from advocate_profile.models import Advocate
from bookings.models import Booking
from bookings.serializers import BOOKING_FIELDS, BookingSerializer

User = get_user_model()


class RecentBookingSerializer(serializers.ModelSerializer):
    user_name = serializers.ReadOnlyField(source="user.name")
    advocate_name = serializers.ReadOnlyField(source="advocate.user.name")

    class Meta:
        model = Booking
        fields = ["id", "booking_date", "status", "total_amount", "user_name", "advocate_name"]


class DashboardMetricsSerializer(serializers.Serializer):
    totalUsers = serializers.IntegerField()
    totalAdvocates = serializers.IntegerField()
    totalBookings = serializers.IntegerField()
    pendingBookings = serializers.IntegerField()
    totalRevenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    recentBookings = RecentBookingSerializer(many=True)


class AdminUserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ["id", "name", "email", "phone", "role", "created_at"]


class AdminAdvocateSerializer(serializers.ModelSerializer):
    name = serializers.ReadOnlyField(source="user.name")
    email = serializers.ReadOnlyField(source="user.email")
    phone = serializers.ReadOnlyField(source="user.phone")
    created_at = serializers.ReadOnlyField(source="user.created_at")

    class Meta:
        model = Advocate
        fields = [
            "id",
            "specialization",
            "experience_years",
            "location",
            "rating",
            "total_reviews",
            "is_verified",
            "is_available",
            "name",
            "email",
            "phone",
            "created_at",
        ]


class AdminBookingSerializer(BookingSerializer):
    user_name = serializers.ReadOnlyField(source="user.name")
    user_email = serializers.ReadOnlyField(source="user.email")
    advocate_name = serializers.ReadOnlyField(source="advocate.user.name")
    advocate_email = serializers.ReadOnlyField(source="advocate.user.email")

    class Meta(BookingSerializer.Meta):
        fields = BOOKING_FIELDS + ["user_name", "user_email", "advocate_name", "advocate_email"]


class VerificationSerializer(serializers.Serializer):
    is_verified = serializers.BooleanField()
