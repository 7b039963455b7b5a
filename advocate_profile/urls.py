from django.urls import path

from .views import (
    AdvocateDetailView,
    AdvocateListView,
    AdvocateProfileUpdateView,
    AvailabilityView,
    MyAdvocateProfileView,
)

urlpatterns = [
    path('', AdvocateListView.as_view(), name='advocate-list'),
    path('profile/', AdvocateProfileUpdateView.as_view(), name='advocate-profile-update'),
    path('me/profile/', MyAdvocateProfileView.as_view(), name='advocate-my-profile'),
    path('availability/', AvailabilityView.as_view(), name='advocate-availability'),
    path('<int:pk>/', AdvocateDetailView.as_view(), name='advocate-detail'),
]
