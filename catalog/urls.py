from django.urls import path

from .views import (
    AdvocateServiceListView,
    MyServiceListView,
    ServiceCreateView,
    ServiceDetailView,
)

urlpatterns = [
    path('', ServiceCreateView.as_view(), name='service-create'),
    path('my-services/', MyServiceListView.as_view(), name='service-my-list'),
    path('advocate/<int:advocate_id>/', AdvocateServiceListView.as_view(), name='service-advocate-list'),
    path('<int:pk>/', ServiceDetailView.as_view(), name='service-detail'),
]
