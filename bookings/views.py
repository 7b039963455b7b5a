from rest_framework import generics, permissions, status
from rest_framework.exceptions import NotFound, PermissionDenied
from rest_framework.response import Response
from rest_framework.views import APIView

from advocate_profile.models import Advocate
from advocate_profile.utils import get_own_advocate
from common.permissions import IsAdvocate, IsClient
from common.utils import require_fields

from .models import Booking
from .serializers import (
    AdvocateBookingSerializer,
    BookingCreateSerializer,
    BookingDetailSerializer,
    BookingStatusSerializer,
    MyBookingSerializer,
)
from .services import cancel_booking, create_booking, set_booking_status

REQUIRED_BOOKING_FIELDS = ("advocate_id", "booking_date", "booking_time", "service_type")


class BookingCreateView(APIView):
    """
    POST /api/bookings/
    Only clients can book; the booking starts as ``pending``.
    """
    permission_classes = [IsClient]
    failure_message = "Failed to create booking"

    def post(self, request):
        require_fields(request.data, REQUIRED_BOOKING_FIELDS)
        serializer = BookingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        booking = create_booking(request.user, serializer.validated_data)
        return Response(
            {"message": "Booking created successfully", "bookingId": booking.pk},
            status=status.HTTP_201_CREATED,
        )


class MyBookingsView(generics.ListAPIView):
    serializer_class = MyBookingSerializer
    permission_classes = [IsClient]
    failure_message = "Failed to fetch bookings"

    def get_queryset(self):
        return (
            Booking.objects.select_related("advocate__user", "service")
            .filter(user=self.request.user)
            .order_by("-booking_date", "-booking_time")
        )


class AdvocateBookingsView(generics.ListAPIView):
    serializer_class = AdvocateBookingSerializer
    permission_classes = [IsAdvocate]
    failure_message = "Failed to fetch bookings"

    def get_queryset(self):
        advocate = get_own_advocate(self.request.user)
        return (
            Booking.objects.select_related("user", "service")
            .filter(advocate=advocate)
            .order_by("-booking_date", "-booking_time")
        )


class BookingStatusView(APIView):
    """
    PATCH /api/bookings/{pk}/status/
    The advocate who owns the booking sets any of the four statuses.
    """
    permission_classes = [IsAdvocate]
    failure_message = "Failed to update booking"

    def patch(self, request, pk):
        serializer = BookingStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        advocate = get_own_advocate(request.user)
        set_booking_status(advocate, pk, serializer.validated_data["status"])
        return Response({"message": "Booking status updated"})


class BookingCancelView(APIView):
    """
    PATCH /api/bookings/{pk}/cancel/
    """
    permission_classes = [IsClient]
    failure_message = "Failed to cancel booking"

    def patch(self, request, pk):
        cancel_booking(request.user, pk)
        return Response({"message": "Booking cancelled"})


class BookingDetailView(generics.RetrieveAPIView):
    serializer_class = BookingDetailSerializer
    permission_classes = [permissions.IsAuthenticated]
    failure_message = "Failed to fetch booking"

    def get_object(self):
        booking = (
            Booking.objects.select_related("user", "advocate__user", "service")
            .filter(pk=self.kwargs["pk"])
            .first()
        )
        if booking is None:
            raise NotFound("Booking not found")
        user = self.request.user

        if user.is_client and booking.user_id != user.pk:
            raise PermissionDenied("Unauthorized")
        if user.is_advocate:
            own_advocate_id = (
                Advocate.objects.filter(user=user).values_list("id", flat=True).first()
            )
            if own_advocate_id is None or booking.advocate_id != own_advocate_id:
                raise PermissionDenied("Unauthorized")
        return booking
