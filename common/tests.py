from decimal import Decimal

from django.contrib.auth.models import AnonymousUser
from django.core.exceptions import ValidationError as DjangoValidationError
from django.http import HttpResponse
from django.test import RequestFactory, SimpleTestCase, TestCase
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.test import APIRequestFactory, force_authenticate
from rest_framework.views import APIView

from common.choices import UserRole
from common.exceptions import api_exception_handler
from common.middleware import GlobalRequestLoggingMiddleware
from common.permissions import IsAdminRole, IsAdvocate, IsClient
from common.utils import require_fields
from common.validators import (
    validate_non_negative_amount,
    validate_positive_duration,
    validate_review_rating,
)
from users.models import User


class ExplodingView(APIView):
    permission_classes = []
    authentication_classes = []
    failure_message = "Failed to do the thing"

    def get(self, request):
        raise RuntimeError("boom")


class ExceptionHandlerTests(SimpleTestCase):

    def _handle(self, exc, view=None):
        return api_exception_handler(exc, {"view": view, "request": None})

    def test_plain_api_exception(self):
        response = self._handle(exceptions.NotFound("Booking not found"))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data, {"error": "Booking not found"})

    def test_error_key_is_flattened(self):
        response = self._handle(exceptions.ValidationError({"error": "Advocate not found"}))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, {"error": "Advocate not found"})

    def test_field_errors_kept_under_details(self):
        exc = exceptions.ValidationError({"rating": ["Rating must be between 1 and 5."]})
        response = self._handle(exc)
        self.assertEqual(response.data["error"], "rating: Rating must be between 1 and 5.")
        self.assertIn("rating", response.data["details"])

    def test_unhandled_error_uses_view_failure_message(self):
        request = APIRequestFactory().get("/explode/")
        with self.assertLogs("common", level="ERROR"):
            response = ExplodingView.as_view()(request)
        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data, {"error": "Failed to do the thing"})

    def test_unhandled_error_without_view(self):
        with self.assertLogs("common", level="ERROR"):
            response = self._handle(RuntimeError("boom"))
        self.assertEqual(response.data, {"error": "Internal server error"})


class RequireFieldsTests(SimpleTestCase):

    def test_lists_every_required_field(self):
        with self.assertRaises(exceptions.ValidationError) as ctx:
            require_fields({"title": "Consult"}, ("title", "description", "price"))
        self.assertEqual(
            str(ctx.exception.detail["error"]),
            "Missing required fields: title, description, and price are required",
        )

    def test_empty_string_counts_as_missing(self):
        with self.assertRaises(exceptions.ValidationError):
            require_fields({"title": ""}, ("title",))

    def test_zero_is_present(self):
        require_fields({"price": 0, "duration_minutes": 30}, ("price", "duration_minutes"))


    def test_non_object_rejected(self):
        for body in ([1, 2], "text", 3):
            with self.assertRaises(exceptions.ValidationError):
                require_fields(body, ("title",))

class ValidatorTests(SimpleTestCase):

    def test_review_rating_bounds(self):
        validate_review_rating(1)
        validate_review_rating(5)
        for value in (0, 6, None):
            with self.assertRaises(DjangoValidationError):
                validate_review_rating(value)

    def test_amount_and_duration(self):
        validate_non_negative_amount(Decimal("0.00"))
        with self.assertRaises(DjangoValidationError):
            validate_non_negative_amount(Decimal("-1"))
        with self.assertRaises(DjangoValidationError):
            validate_positive_duration(0)


class RoleView(APIView):
    def get(self, request):
        return Response({"ok": True})


class PermissionTests(TestCase):

    def setUp(self):
        self.factory = APIRequestFactory()
        self.client_user = User.objects.create_user(email="c@example.com", password="pass12345", name="C")
        self.advocate_user = User.objects.create_user(
            email="a@example.com", password="pass12345", name="A", role=UserRole.ADVOCATE
        )
        self.admin_user = User.objects.create_superuser(email="r@example.com", password="pass12345", name="R")

    def _call(self, permission, user=None):
        view = RoleView.as_view(permission_classes=[permission])
        request = self.factory.get("/role/")
        if user is not None:
            force_authenticate(request, user=user)
        return view(request)

    def test_role_gates(self):
        self.assertEqual(self._call(IsClient, self.client_user).status_code, status.HTTP_200_OK)
        self.assertEqual(self._call(IsClient, self.advocate_user).status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(self._call(IsAdvocate, self.advocate_user).status_code, status.HTTP_200_OK)
        self.assertEqual(self._call(IsAdvocate, self.admin_user).status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(self._call(IsAdminRole, self.admin_user).status_code, status.HTTP_200_OK)
        self.assertEqual(self._call(IsAdminRole, self.client_user).status_code, status.HTTP_403_FORBIDDEN)

    def test_forbidden_message(self):
        response = self._call(IsAdminRole, self.client_user)
        self.assertEqual(response.data, {"error": "Only administrators can perform this action."})

    def test_anonymous_gets_401(self):
        response = self._call(IsClient)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class RequestLoggingMiddlewareTests(SimpleTestCase):

    def test_masks_credentials_in_logged_body(self):
        request = RequestFactory().post(
            "/api/auth/login/",
            data='{"email": "a@example.com", "password": "secret"}',
            content_type="application/json",
        )
        request.user = AnonymousUser()
        middleware = GlobalRequestLoggingMiddleware(lambda req: HttpResponse(status=200))

        with self.assertLogs("common", level="INFO") as logs:
            middleware(request)

        output = "\n".join(logs.output)
        self.assertNotIn("secret", output)
        self.assertIn('"password": "***"', output)
        self.assertIn('"status_code": 200', output)
