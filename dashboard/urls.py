from django.urls import path

from .views import (
    AdminAdvocateListView,
    AdminBookingListView,
    AdminUserDeleteView,
    AdminUserListView,
    AdvocateVerifyView,
    DashboardStatsView,
)

app_name = "dashboard"

urlpatterns = [
    path("dashboard/", DashboardStatsView.as_view(), name="dashboard-stats"),
    path("users/", AdminUserListView.as_view(), name="admin-users"),
    path("users/<int:pk>/", AdminUserDeleteView.as_view(), name="admin-user-delete"),
    path("advocates/", AdminAdvocateListView.as_view(), name="admin-advocates"),
    path("advocates/<int:pk>/verify/", AdvocateVerifyView.as_view(), name="admin-advocate-verify"),
    path("bookings/", AdminBookingListView.as_view(), name="admin-bookings"),
]
