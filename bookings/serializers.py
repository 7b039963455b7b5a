from rest_framework import serializers

from common.choices import BookingStatus, SessionType

from .models import Booking

BOOKING_FIELDS = [
    "id",
    "user_id",
    "advocate_id",
    "service_id",
    "booking_date",
    "booking_time",
    "service_type",
    "status",
    "payment_status",
    "total_amount",
    "notes",
    "created_at",
    "updated_at",
]


class BookingSerializer(serializers.ModelSerializer):
    user_id = serializers.ReadOnlyField()
    advocate_id = serializers.ReadOnlyField()
    service_id = serializers.ReadOnlyField()

    class Meta:
        model = Booking
        fields = BOOKING_FIELDS
        read_only_fields = BOOKING_FIELDS


class ServiceInfoMixin(serializers.Serializer):
    service_title = serializers.SerializerMethodField()

    def get_service_title(self, obj):
        return obj.service.title if obj.service_id else None


class MyBookingSerializer(ServiceInfoMixin, BookingSerializer):
    """Booking as seen by the client who made it."""
    specialization = serializers.ReadOnlyField(source="advocate.specialization")
    location = serializers.ReadOnlyField(source="advocate.location")
    advocate_name = serializers.ReadOnlyField(source="advocate.user.name")
    advocate_phone = serializers.ReadOnlyField(source="advocate.user.phone")

    class Meta(BookingSerializer.Meta):
        fields = BOOKING_FIELDS + [
            "specialization",
            "location",
            "advocate_name",
            "advocate_phone",
            "service_title",
        ]


class AdvocateBookingSerializer(ServiceInfoMixin, BookingSerializer):
    """Booking as seen by the advocate it was made with."""
    user_name = serializers.ReadOnlyField(source="user.name")
    user_phone = serializers.ReadOnlyField(source="user.phone")
    user_email = serializers.ReadOnlyField(source="user.email")

    class Meta(BookingSerializer.Meta):
        fields = BOOKING_FIELDS + [
            "user_name",
            "user_phone",
            "user_email",
            "service_title",
        ]


class BookingDetailSerializer(ServiceInfoMixin, BookingSerializer):
    user_name = serializers.ReadOnlyField(source="user.name")
    user_phone = serializers.ReadOnlyField(source="user.phone")
    user_email = serializers.ReadOnlyField(source="user.email")
    advocate_name = serializers.ReadOnlyField(source="advocate.user.name")
    advocate_phone = serializers.ReadOnlyField(source="advocate.user.phone")
    specialization = serializers.ReadOnlyField(source="advocate.specialization")
    location = serializers.ReadOnlyField(source="advocate.location")
    service_description = serializers.SerializerMethodField()

    class Meta(BookingSerializer.Meta):
        fields = BOOKING_FIELDS + [
            "user_name",
            "user_phone",
            "user_email",
            "advocate_name",
            "advocate_phone",
            "specialization",
            "location",
            "service_title",
            "service_description",
        ]

    def get_service_description(self, obj):
        return obj.service.description if obj.service_id else None


class BookingCreateSerializer(serializers.Serializer):
    advocate_id = serializers.IntegerField(min_value=1)
    service_id = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    booking_date = serializers.DateField()
    booking_time = serializers.TimeField()
    service_type = serializers.ChoiceField(choices=SessionType.choices)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class BookingStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=BookingStatus.choices,
        error_messages={
            "invalid_choice": "Status must be one of: pending, confirmed, completed, cancelled."
        },
    )
