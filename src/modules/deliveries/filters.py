import django_filters

from modules.deliveries.constants import DeliveryStatus
from modules.deliveries.models import Delivery


class DeliveryFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=DeliveryStatus.choices)
    order = django_filters.UUIDFilter(field_name="order_id")

    class Meta:
        model = Delivery
        fields = ["status", "order"]
