from django.urls import path

from .views import (
    AdvocateBookingsView,
    BookingCancelView,
    BookingCreateView,
    BookingDetailView,
    BookingStatusView,
    MyBookingsView,
)

app_name = "bookings"

urlpatterns = [
    path('', BookingCreateView.as_view(), name='booking-create'),
    path('my-bookings/', MyBookingsView.as_view(), name='my-bookings'),
    path('advocate-bookings/', AdvocateBookingsView.as_view(), name='advocate-bookings'),
    path('<int:pk>/status/', BookingStatusView.as_view(), name='booking-status'),
    path('<int:pk>/cancel/', BookingCancelView.as_view(), name='booking-cancel'),
    path('<int:pk>/', BookingDetailView.as_view(), name='booking-detail'),
]
