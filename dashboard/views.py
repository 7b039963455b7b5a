import logging

from django.contrib.auth import get_user_model
from rest_framework import generics, status
from rest_framework.exceptions import NotFound
from rest_framework.response import Response
from rest_framework.views import APIView

from advocate_profile.models import Advocate
from bookings.models import Booking
from common.permissions import IsAdminRole

from .serializers import (
    AdminAdvocateSerializer,
    AdminBookingSerializer,
    AdminUserSerializer,
    DashboardMetricsSerializer,
    VerificationSerializer,
)
from .services import AdminDashboardService

logger = logging.getLogger("dashboard")

User = get_user_model()


class DashboardStatsView(APIView):
    permission_classes = [IsAdminRole]
    failure_message = "Failed to fetch dashboard stats"

    def get(self, request):
        metrics = AdminDashboardService().get_metrics()
        serializer = DashboardMetricsSerializer(metrics)
        return Response(serializer.data)


class AdminUserListView(generics.ListAPIView):
    serializer_class = AdminUserSerializer
    permission_classes = [IsAdminRole]
    failure_message = "Failed to fetch users"

    def get_queryset(self):
        return User.objects.order_by("-created_at", "-id")


class AdminUserDeleteView(APIView):
    """
    DELETE /api/admin/users/<id>/
    Removes the account together with its advocate profile, bookings and reviews.
    """
    permission_classes = [IsAdminRole]
    failure_message = "Failed to delete user"

    def delete(self, request, pk):
        user = User.objects.filter(pk=pk).first()
        if user is None:
            raise NotFound("User not found")
        user.delete()
        logger.info("Admin %s deleted user %s", request.user.pk, pk)
        return Response({"message": "User deleted successfully"}, status=status.HTTP_200_OK)


class AdminAdvocateListView(generics.ListAPIView):
    serializer_class = AdminAdvocateSerializer
    permission_classes = [IsAdminRole]
    failure_message = "Failed to fetch advocates"

    def get_queryset(self):
        return Advocate.objects.select_related("user").order_by("-user__created_at", "-id")


class AdvocateVerifyView(APIView):
    permission_classes = [IsAdminRole]
    failure_message = "Failed to update verification status"

    def patch(self, request, pk):
        serializer = VerificationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        advocate = Advocate.objects.filter(pk=pk).first()
        if advocate is None:
            raise NotFound("Advocate not found")
        advocate.is_verified = serializer.validated_data["is_verified"]
        advocate.save(update_fields=["is_verified", "updated_at"])
        logger.info("Advocate %s verification set to %s", pk, advocate.is_verified)

        return Response({"message": "Advocate verification status updated"})


class AdminBookingListView(generics.ListAPIView):
    serializer_class = AdminBookingSerializer
    permission_classes = [IsAdminRole]
    failure_message = "Failed to fetch bookings"

    def get_queryset(self):
        return (
            Booking.objects.select_related("user", "advocate__user", "service")
            .order_by("-created_at", "-id")
        )
