import django_filters

from modules.orders.models import Order


class OrderFilter(django_filters.FilterSet):
    client = django_filters.UUIDFilter(field_name="client_id")
    delivery_type = django_filters.CharFilter(
        field_name="delivery_type", lookup_expr="iexact"
    )
    start_date = django_filters.DateFilter(field_name="order_date", lookup_expr="gte")
    end_date = django_filters.DateFilter(field_name="order_date", lookup_expr="lte")

    class Meta:
        model = Order
        fields = ["client", "delivery_type", "start_date", "end_date"]
