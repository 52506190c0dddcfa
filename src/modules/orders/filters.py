import django_filters

from modules.orders.constants import TERMINAL_STATES, OrderStatus
from modules.orders.models import Order


class OrderFilter(django_filters.FilterSet):
    status = django_filters.MultipleChoiceFilter(choices=OrderStatus.choices)
    customer = django_filters.UUIDFilter(field_name="customer_id")
    start_date = django_filters.DateFilter(field_name="created_at", lookup_expr="date__gte")
    end_date = django_filters.DateFilter(field_name="created_at", lookup_expr="date__lte")
    open = django_filters.BooleanFilter(method="filter_open")

    class Meta:
        model = Order
        fields = ["status", "customer", "start_date", "end_date", "open"]

    def filter_open(self, queryset, name, value):
        """``open=true`` keeps orders that can still change status."""
        if value is None:
            return queryset
        terminal = list(TERMINAL_STATES)
        if value:
            return queryset.exclude(status__in=terminal)
        return queryset.filter(status__in=terminal)
