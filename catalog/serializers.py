from rest_framework import serializers

from .models import Service


class ServiceSerializer(serializers.ModelSerializer):
    advocate_id = serializers.ReadOnlyField()

    class Meta:
        model = Service
        fields = [
            "id",
            "advocate_id",
            "title",
            "description",
            "service_type",
            "category",
            "price",
            "duration_minutes",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "advocate_id", "created_at", "updated_at"]


class ServiceWriteSerializer(serializers.ModelSerializer):
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    duration_minutes = serializers.IntegerField(min_value=1)

    class Meta:
        model = Service
        fields = [
            "title",
            "description",
            "service_type",
            "category",
            "price",
            "duration_minutes",
            "is_active",
        ]
