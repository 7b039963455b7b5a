import logging

from rest_framework import generics, permissions, status
from rest_framework.exceptions import NotFound
from rest_framework.response import Response
from rest_framework.views import APIView

from common.permissions import IsAdvocate

from .filters import AdvocateFilter
from .models import Advocate
from .serializers import (
    AdvocateDetailSerializer,
    AdvocateListSerializer,
    AdvocateProfileSerializer,
    AdvocateProfileUpdateSerializer,
    AvailabilitySerializer,
)
from .utils import get_own_advocate

logger = logging.getLogger("advocate_profile")


class AdvocateListView(generics.ListAPIView):
    """
    Public directory: available advocates, best rated first.
    """
    serializer_class = AdvocateListSerializer
    permission_classes = [permissions.AllowAny]
    filterset_class = AdvocateFilter
    failure_message = "Failed to fetch advocates"

    def get_queryset(self):
        return (
            Advocate.objects.select_related("user")
            .filter(is_available=True)
            .order_by("-rating", "-total_reviews")
        )


class AdvocateDetailView(generics.RetrieveAPIView):
    """
    One advocate with active services and the latest reviews.
    """
    serializer_class = AdvocateDetailSerializer
    permission_classes = [permissions.AllowAny]
    failure_message = "Failed to fetch advocate"

    def get_object(self):
        advocate = Advocate.objects.select_related("user").filter(pk=self.kwargs["pk"]).first()
        if advocate is None:
            raise NotFound("Advocate not found")
        return advocate


class MyAdvocateProfileView(generics.RetrieveAPIView):
    serializer_class = AdvocateProfileSerializer
    permission_classes = [IsAdvocate]
    failure_message = "Failed to fetch profile"

    def get_object(self):
        return get_own_advocate(self.request.user)


class AdvocateProfileUpdateView(generics.UpdateAPIView):
    serializer_class = AdvocateProfileUpdateSerializer
    permission_classes = [IsAdvocate]
    failure_message = "Failed to update profile"

    def get_object(self):
        return get_own_advocate(self.request.user)

    def update(self, request, *args, **kwargs):
        # PUT and PATCH both leave omitted fields untouched
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        logger.info("Advocate %s updated profile fields %s", instance.pk, sorted(serializer.validated_data))
        return Response(
            {
                "message": "Profile updated successfully",
                "profile": AdvocateProfileSerializer(instance).data,
            },
            status=status.HTTP_200_OK,
        )


class AvailabilityView(APIView):
    permission_classes = [IsAdvocate]
    failure_message = "Failed to update availability"

    def patch(self, request):
        serializer = AvailabilitySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        is_available = serializer.validated_data["is_available"]

        advocate = get_own_advocate(request.user)
        advocate.is_available = is_available
        advocate.save(update_fields=["is_available", "updated_at"])

        return Response({"message": "Availability updated", "is_available": is_available})
