from rest_framework import generics, permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from common.permissions import IsClient

from .models import Review
from .serializers import ReviewCreateSerializer, ReviewSerializer
from .services import submit_review


class ReviewCreateView(APIView):
    """
    A client reviews one of their completed bookings, once.
    """
    permission_classes = [IsClient]
    failure_message = "Failed to submit review"

    def post(self, request):
        serializer = ReviewCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        review = submit_review(
            request.user,
            booking_id=serializer.validated_data["booking_id"],
            rating=serializer.validated_data["rating"],
            comment=serializer.validated_data.get("comment"),
        )
        return Response(
            {"message": "Review submitted successfully", "reviewId": review.pk},
            status=status.HTTP_201_CREATED,
        )


class AdvocateReviewListView(generics.ListAPIView):
    serializer_class = ReviewSerializer
    permission_classes = [permissions.AllowAny]
    failure_message = "Failed to fetch reviews"

    def get_queryset(self):
        return (
            Review.objects.select_related("user")
            .filter(advocate_id=self.kwargs["advocate_id"])
            .order_by("-created_at", "-id")
        )
