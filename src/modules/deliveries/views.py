"""Delivery API views.

Exposes ``DeliveryService`` via HTTP using DRF ViewSets.  Deliveries are
only created through ``POST /entregas/calcular``.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.exceptions import ValidationError
from modules.core.http import parse_id, request_payload
from modules.deliveries.dtos import SetStatusDTO, UpdateDeliveryDTO
from modules.deliveries.filters import DeliveryFilter
from modules.deliveries.models import Delivery
from modules.deliveries.repositories.django_repository import DeliveryDjangoRepository
from modules.deliveries.serializers import DeliverySerializer
from modules.deliveries.services import DeliveryService
from modules.orders.repositories.django_repository import OrderDjangoRepository


class DeliveryViewSet(GenericViewSet):
    """ViewSet for Delivery operations.

    All ORM access goes through the service/repository layer.
    """

    queryset = Delivery.objects.all()
    serializer_class = DeliverySerializer
    filterset_class = DeliveryFilter
    ordering_fields = ["created_at", "final_cost", "status"]
    ordering = ["-created_at", "-id"]
    filter_backends = [DjangoFilterBackend, OrderingFilter]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = DeliveryService(
            delivery_repository=DeliveryDjangoRepository(),
            order_repository=OrderDjangoRepository(),
        )

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def get_queryset(self):
        return self._service.list_deliveries()

    def list(self, request: Request) -> Response:
        """GET /entregas"""
        queryset = self.filter_queryset(self.get_queryset())
        data = DeliverySerializer(queryset, many=True).data
        if not data:
            return Response(
                {"message": "A tabela selecionada não contém dados", "data": []}
            )
        return Response({"message": "Dados recebidos", "data": data})

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /entregas/{pk}"""
        delivery = self._service.get_delivery(str(parse_id(pk)))
        return Response(
            {"message": "Entrega encontrada.", "data": DeliverySerializer(delivery).data}
        )

    @action(detail=False, methods=["get"], url_path=r"pedido/(?P<order_id>[^/.]+)")
    def by_order(self, request: Request, order_id: str | None = None) -> Response:
        """GET /entregas/pedido/{order_id}"""
        deliveries = self._service.list_order_deliveries(str(parse_id(order_id)))
        return Response(
            {
                "message": "Dados recebidos",
                "data": DeliverySerializer(deliveries, many=True).data,
            }
        )

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @action(detail=False, methods=["post"], url_path="calcular")
    def calculate(self, request: Request) -> Response:
        """POST /entregas/calcular

        Body: ``{"order_id": "<uuid>"}``.
        """
        order_id = request_payload(request).get("order_id")
        if order_id in (None, ""):
            raise ValidationError("O campo order_id é obrigatório.")
        delivery = self._service.calculate(str(parse_id(order_id)))
        data = DeliverySerializer(delivery).data
        return Response(
            {
                "message": "Entrega calculada com sucesso.",
                "id_entrega": str(delivery.id),
                "entrega": data,
            },
            status=status.HTTP_201_CREATED,
        )

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT/PATCH /entregas/{pk}

        Accepts ``status`` and/or the monetary fields, with patch
        semantics.
        """
        delivery_id = parse_id(pk)
        dto = UpdateDeliveryDTO.model_validate(request_payload(request))
        delivery = self._service.update_delivery(str(delivery_id), dto)
        return Response(
            {
                "message": "Entrega atualizada com sucesso.",
                "data": DeliverySerializer(delivery).data,
            }
        )

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /entregas/{pk}"""
        return self.update(request, pk)

    @action(
        detail=False,
        methods=["put", "patch"],
        url_path=r"status/(?P<delivery_id>[^/.]+)",
    )
    def change_status(self, request: Request, delivery_id: str | None = None) -> Response:
        """PUT /entregas/status/{delivery_id}

        Body: ``{"status": "em_transito"}``.
        """
        parsed_id = parse_id(delivery_id)
        dto = SetStatusDTO.model_validate(request_payload(request))
        delivery = self._service.set_status(str(parsed_id), dto.status)
        return Response(
            {
                "message": "Status da entrega atualizado com sucesso.",
                "data": DeliverySerializer(delivery).data,
            }
        )

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /entregas/{pk}"""
        self._service.delete_delivery(str(parse_id(pk)))
        return Response({"message": "Entrega deletada com sucesso."})
