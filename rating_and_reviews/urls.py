from django.urls import path

from .views import AdvocateReviewListView, ReviewCreateView

urlpatterns = [
    path("", ReviewCreateView.as_view(), name="review-create"),
    path("advocate/<int:advocate_id>/", AdvocateReviewListView.as_view(), name="review-advocate-list"),
]
