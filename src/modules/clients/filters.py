import django_filters

from modules.clients.models import Client


class ClientFilter(django_filters.FilterSet):
    name = django_filters.CharFilter(field_name="name", lookup_expr="icontains")
    city = django_filters.CharFilter(field_name="city", lookup_expr="iexact")
    state = django_filters.CharFilter(field_name="state", lookup_expr="iexact")

    class Meta:
        model = Client
        fields = ["name", "city", "state"]
