import django_filters
from django.db.models import Q

from modules.customers.models import Customer, CustomerStatus


class CustomerFilter(django_filters.FilterSet):
    """Query filters backing the repository's status and name look-ups."""

    status = django_filters.ChoiceFilter(choices=CustomerStatus.choices)
    name = django_filters.CharFilter(method="filter_name")

    class Meta:
        model = Customer
        fields = ["status", "name"]

    def filter_name(self, queryset, name, value):
        """Case-insensitive substring match on first OR last name."""
        return queryset.filter(
            Q(first_name__icontains=value) | Q(last_name__icontains=value)
        )
