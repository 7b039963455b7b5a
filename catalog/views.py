import logging

from rest_framework import generics, permissions, status
from rest_framework.exceptions import NotFound
from rest_framework.response import Response
from rest_framework.views import APIView

from advocate_profile.utils import get_own_advocate
from common.permissions import IsAdvocate
from common.utils import require_fields

from .models import Service
from .serializers import ServiceSerializer, ServiceWriteSerializer

logger = logging.getLogger("catalog")

REQUIRED_SERVICE_FIELDS = ("title", "description", "price", "duration_minutes")


class AdvocateServiceListView(generics.ListAPIView):
    """
    Active services published by one advocate.
    """
    serializer_class = ServiceSerializer
    permission_classes = [permissions.AllowAny]
    failure_message = "Failed to fetch services"

    def get_queryset(self):
        return Service.objects.active().filter(advocate_id=self.kwargs["advocate_id"])


class MyServiceListView(generics.ListAPIView):
    serializer_class = ServiceSerializer
    permission_classes = [IsAdvocate]
    failure_message = "Failed to fetch services"

    def get_queryset(self):
        advocate = get_own_advocate(self.request.user)
        return Service.objects.filter(advocate=advocate).order_by("-created_at")


class ServiceCreateView(APIView):
    permission_classes = [IsAdvocate]
    failure_message = "Failed to create service"

    def post(self, request):
        require_fields(request.data, REQUIRED_SERVICE_FIELDS)
        advocate = get_own_advocate(request.user)

        serializer = ServiceWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        service = serializer.save(advocate=advocate)
        logger.info("Advocate %s created service %s", advocate.pk, service.pk)

        return Response(
            {"message": "Service created successfully", "serviceId": service.pk},
            status=status.HTTP_201_CREATED,
        )


class ServiceDetailView(APIView):
    """
    PUT/PATCH/DELETE on a service owned by the calling advocate.
    """
    permission_classes = [IsAdvocate]
    failure_message = "Failed to update service"

    def _get_own_service(self, request, pk):
        advocate = get_own_advocate(request.user)
        service = Service.objects.filter(pk=pk, advocate=advocate).first()
        if service is None:
            raise NotFound("Service not found or unauthorized")
        return service

    def put(self, request, pk):
        service = self._get_own_service(request, pk)
        serializer = ServiceWriteSerializer(service, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(
            {"message": "Service updated successfully", "service": ServiceSerializer(service).data}
        )

    def patch(self, request, pk):
        return self.put(request, pk)

    def delete(self, request, pk):
        self.failure_message = "Failed to delete service"
        service = self._get_own_service(request, pk)
        service.delete()
        logger.info("Service %s deleted by user %s", pk, request.user.pk)
        return Response({"message": "Service deleted successfully"})
