"""
URL configuration for the BookMyAdvocate project.
"""

from django.contrib import admin
from django.urls import path, include

from drf_spectacular.views import (
    SpectacularAPIView,
    SpectacularSwaggerView,
    SpectacularRedocView,
)

urlpatterns = [
    # Admin Panel
    path("admin/", admin.site.urls),

    # Local Apps
    path("api/auth/", include("users.urls")),
    path("api/advocates/", include("advocate_profile.urls")),
    path("api/services/", include("catalog.urls")),
    path("api/bookings/", include("bookings.urls")),
    path("api/reviews/", include("rating_and_reviews.urls")),
    path("api/admin/", include("dashboard.urls")),

    # API Docs
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path(
        "api/docs/",
        SpectacularSwaggerView.as_view(url_name="schema"),
        name="swagger-ui",
    ),
    path(
        "api/redoc/",
        SpectacularRedocView.as_view(url_name="schema"),
        name="redoc",
    ),
]
