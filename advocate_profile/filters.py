import django_filters
from django.db.models import Q

from catalog.models import Service
from common.choices import ServiceType

from .models import Advocate


class AdvocateFilter(django_filters.FilterSet):
    """
    Directory filters. ``serviceType`` is declared last so it narrows the
    candidates produced by the other filters.
    """

    search = django_filters.CharFilter(method="filter_search")
    specialization = django_filters.CharFilter(field_name="specialization", lookup_expr="icontains")
    location = django_filters.CharFilter(field_name="location", lookup_expr="icontains")
    minRating = django_filters.NumberFilter(field_name="rating", lookup_expr="gte")
    serviceType = django_filters.ChoiceFilter(choices=ServiceType.choices, method="filter_service_type")

    class Meta:
        model = Advocate
        fields = []

    def filter_search(self, queryset, name, value):
        value = value.strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(user__name__icontains=value)
            | Q(specialization__icontains=value)
            | Q(location__icontains=value)
        )

    def filter_service_type(self, queryset, name, value):
        offering = (
            Service.objects.active()
            .offering(value)
            .filter(advocate_id__in=queryset.values("id"))
            .values("advocate_id")
        )
        return queryset.filter(id__in=offering)
