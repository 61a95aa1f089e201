"""Order API views.

Exposes the ``OrderService`` via HTTP using DRF ViewSets.
Domain exceptions propagate to ``api_exception_handler``.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.clients.repositories.django_repository import ClientDjangoRepository
from modules.core.guards import ReferentialGuard
from modules.core.http import parse_id, request_payload
from modules.deliveries.repositories.django_repository import DeliveryDjangoRepository
from modules.orders.dtos import CreateOrderDTO, UpdateOrderDTO
from modules.orders.filters import OrderFilter
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.serializers import OrderSerializer
from modules.orders.services import OrderService


class OrderViewSet(GenericViewSet):
    """ViewSet for Order operations.

    Uses ``OrderService`` with injected repositories (DIP).
    Does **not** extend ``ModelViewSet`` — all ORM access goes through
    the service/repository layer.
    """

    queryset = Order.objects.all()
    serializer_class = OrderSerializer
    filterset_class = OrderFilter
    ordering_fields = ["created_at", "order_date", "weight_kg", "distance_km"]
    ordering = ["-created_at", "-id"]
    filter_backends = [DjangoFilterBackend, OrderingFilter]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        order_repository = OrderDjangoRepository()
        self._service = OrderService(
            order_repository=order_repository,
            client_repository=ClientDjangoRepository(),
            guard=ReferentialGuard(
                order_repository=order_repository,
                delivery_repository=DeliveryDjangoRepository(),
            ),
        )

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def get_queryset(self):
        return self._service.list_orders()

    def list(self, request: Request) -> Response:
        """GET /pedidos

        Filtering (client, delivery type, date range) is handled by
        ``OrderFilter``; ordering by ``OrderingFilter``.
        """
        queryset = self.filter_queryset(self.get_queryset())
        data = OrderSerializer(queryset, many=True).data
        if not data:
            return Response(
                {"message": "A tabela selecionada não contém dados", "data": []}
            )
        return Response({"message": "Dados recebidos", "data": data})

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /pedidos/{pk}"""
        order = self._service.get_order(str(parse_id(pk)))
        return Response(
            {"message": "Pedido encontrado.", "data": OrderSerializer(order).data}
        )

    @action(detail=False, methods=["get"], url_path=r"cliente/(?P<client_id>[^/.]+)")
    def by_client(self, request: Request, client_id: str | None = None) -> Response:
        """GET /pedidos/cliente/{client_id}"""
        orders = self._service.list_client_orders(str(parse_id(client_id)))
        return Response(
            {"message": "Dados recebidos", "data": OrderSerializer(orders, many=True).data}
        )

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /pedidos"""
        dto = CreateOrderDTO.model_validate(request_payload(request))
        order = self._service.create_order(dto)
        return Response(
            {
                "message": "Pedido criado com sucesso.",
                "id_pedido": str(order.id),
                "data": OrderSerializer(order).data,
            },
            status=status.HTTP_201_CREATED,
        )

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT/PATCH /pedidos/{pk} (patch semantics)"""
        order_id = parse_id(pk)
        dto = UpdateOrderDTO.model_validate(request_payload(request))
        order = self._service.update_order(str(order_id), dto)
        return Response(
            {
                "message": "Pedido atualizado com sucesso!",
                "data": OrderSerializer(order).data,
            }
        )

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /pedidos/{pk}"""
        return self.update(request, pk)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /pedidos/{pk}"""
        self._service.delete_order(str(parse_id(pk)))
        return Response({"message": "Pedido deletado com sucesso."})
