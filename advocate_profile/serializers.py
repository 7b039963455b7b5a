from rest_framework import serializers

from catalog.serializers import ServiceSerializer
from rating_and_reviews.serializers import ReviewSerializer

from .models import Advocate

RECENT_REVIEWS_LIMIT = 10


class AdvocateListSerializer(serializers.ModelSerializer):
    user_id = serializers.ReadOnlyField()
    name = serializers.ReadOnlyField(source='user.name')
    email = serializers.ReadOnlyField(source='user.email')
    phone = serializers.ReadOnlyField(source='user.phone')

    class Meta:
        model = Advocate
        fields = [
            "id",
            "user_id",
            "specialization",
            "experience_years",
            "location",
            "bio",
            "hourly_rate",
            "rating",
            "total_reviews",
            "is_verified",
            "is_available",
            "name",
            "email",
            "phone",
        ]


class AdvocateProfileSerializer(AdvocateListSerializer):
    class Meta(AdvocateListSerializer.Meta):
        fields = AdvocateListSerializer.Meta.fields + [
            "bar_council_number",
            "license_number",
            "created_at",
            "updated_at",
        ]


class AdvocateDetailSerializer(AdvocateProfileSerializer):
    services = serializers.SerializerMethodField()
    reviews = serializers.SerializerMethodField()

    class Meta(AdvocateProfileSerializer.Meta):
        fields = AdvocateProfileSerializer.Meta.fields + ["services", "reviews"]

    def get_services(self, obj):
        return ServiceSerializer(obj.services.active(), many=True).data

    def get_reviews(self, obj):
        recent = obj.reviews.select_related("user").order_by("-created_at", "-id")[:RECENT_REVIEWS_LIMIT]
        return ReviewSerializer(recent, many=True).data


class AdvocateProfileUpdateSerializer(serializers.ModelSerializer):
    hourly_rate = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=0, required=False, allow_null=True
    )

    class Meta:
        model = Advocate
        fields = [
            "specialization",
            "experience_years",
            "bar_council_number",
            "license_number",
            "location",
            "bio",
            "hourly_rate",
        ]

    def validate_bar_council_number(self, value):
        # empty strings would collide on the unique index
        return value or None


class AvailabilitySerializer(serializers.Serializer):
    is_available = serializers.BooleanField()
