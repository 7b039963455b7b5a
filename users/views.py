import logging

from django.contrib.auth import authenticate
from rest_framework import generics, permissions, status
from rest_framework.exceptions import AuthenticationFailed
from rest_framework.response import Response

from .serializers import LoginSerializer, RegisterSerializer, UserSerializer
from .throttles import AuthRequestThrottle
from .utils import issue_tokens

logger = logging.getLogger("users")


class RegisterView(generics.GenericAPIView):
    """
    Create a client or advocate account and return a JWT pair.
    """
    serializer_class = RegisterSerializer
    permission_classes = [permissions.AllowAny]
    throttle_classes = [AuthRequestThrottle]
    failure_message = "Registration failed"

    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        logger.info("Registered user %s with role %s", user.pk, user.role)

        return Response(
            {
                "message": "User registered successfully",
                "user": UserSerializer(user).data,
                "tokens": issue_tokens(user),
            },
            status=status.HTTP_201_CREATED,
        )


class LoginView(generics.GenericAPIView):
    """
    Exchange email + password for a JWT pair.
    """
    serializer_class = LoginSerializer
    permission_classes = [permissions.AllowAny]
    throttle_classes = [AuthRequestThrottle]
    failure_message = "Login failed"

    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = authenticate(
            request,
            email=serializer.validated_data["email"],
            password=serializer.validated_data["password"],
        )
        if user is None:
            logger.info("Failed login for %s", serializer.validated_data["email"])
            raise AuthenticationFailed("Invalid email or password")

        return Response(
            {
                "message": "Login successful",
                "user": UserSerializer(user).data,
                "tokens": issue_tokens(user),
            },
            status=status.HTTP_200_OK,
        )


class MeView(generics.RetrieveAPIView):
    serializer_class = UserSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_object(self):
        return self.request.user
