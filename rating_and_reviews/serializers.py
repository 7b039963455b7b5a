from rest_framework import serializers

from .models import Review

class ReviewSerializer(serializers.ModelSerializer):
    booking_id = serializers.ReadOnlyField()
    user_id = serializers.ReadOnlyField()
    advocate_id = serializers.ReadOnlyField()
    user_name = serializers.CharField(source="user.name", read_only=True)
    short_comment = serializers.SerializerMethodField(read_only=True)

    class Meta:
        model = Review
        fields = [
            "id", "booking_id", "user_id", "advocate_id", "user_name",
            "rating", "comment", "short_comment", "created_at",
        ]
        read_only_fields = fields

    def get_short_comment(self, obj):
        if obj.comment:
            return obj.comment[:50] + "..." if len(obj.comment) > 50 else obj.comment
        return ""


class ReviewCreateSerializer(serializers.Serializer):
    booking_id = serializers.IntegerField(min_value=1)
    rating = serializers.IntegerField()
    comment = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def validate_rating(self, value):
        if not 1 <= value <= 5:
            raise serializers.ValidationError("Rating must be between 1 and 5.")
        return value
