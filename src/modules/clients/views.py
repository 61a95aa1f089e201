"""Client API views.

Exposes the ``ClientService`` via HTTP using DRF ViewSets.
Domain exceptions propagate to ``api_exception_handler``, which
renders them; views only parse input and shape success bodies.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter, SearchFilter
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.clients.dtos import CreateClientDTO, UpdateClientDTO
from modules.clients.filters import ClientFilter
from modules.clients.models import Client
from modules.clients.repositories.django_repository import ClientDjangoRepository
from modules.clients.serializers import ClientSerializer
from modules.clients.services import ClientService
from modules.core.guards import ReferentialGuard
from modules.core.http import parse_id, request_payload
from modules.deliveries.repositories.django_repository import DeliveryDjangoRepository
from modules.orders.repositories.django_repository import OrderDjangoRepository


class ClientViewSet(GenericViewSet):
    """ViewSet for Client CRUD operations.

    Uses ``ClientService`` with ``ClientDjangoRepository`` (DIP).
    Does **not** extend ``ModelViewSet`` — all ORM access goes through
    the service/repository layer.
    """

    filterset_class = ClientFilter
    search_fields = ["name", "surname", "email", "city"]
    ordering_fields = ["name", "surname", "city", "created_at"]
    ordering = ["-created_at", "-id"]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    queryset = Client.objects.all()
    serializer_class = ClientSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ClientService(
            repository=ClientDjangoRepository(),
            guard=ReferentialGuard(
                order_repository=OrderDjangoRepository(),
                delivery_repository=DeliveryDjangoRepository(),
            ),
        )

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def get_queryset(self):
        return self._service.list_clients()

    def list(self, request: Request) -> Response:
        """GET /clientes"""
        queryset = self.filter_queryset(self.get_queryset())
        data = ClientSerializer(queryset, many=True).data
        if not data:
            return Response(
                {"message": "A tabela selecionada não contém dados", "data": []}
            )
        return Response({"message": "Dados recebidos", "data": data})

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /clientes/{pk}"""
        client = self._service.get_client(str(parse_id(pk)))
        return Response(
            {"message": "Cliente encontrado.", "data": ClientSerializer(client).data}
        )

    @action(detail=False, methods=["get"], url_path=r"cpf/(?P<national_id>[^/.]+)")
    def by_national_id(self, request: Request, national_id: str | None = None) -> Response:
        """GET /clientes/cpf/{national_id}"""
        client = self._service.get_client_by_national_id(national_id or "")
        return Response(
            {"message": "Cliente encontrado.", "data": ClientSerializer(client).data}
        )

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /clientes"""
        dto = CreateClientDTO.model_validate(request_payload(request))
        client = self._service.create_client(dto)
        return Response(
            {
                "message": "Registro incluído com sucesso",
                "id_cliente": str(client.id),
                "data": ClientSerializer(client).data,
            },
            status=status.HTTP_201_CREATED,
        )

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT/PATCH /clientes/{pk} (patch semantics)"""
        client_id = parse_id(pk)
        dto = UpdateClientDTO.model_validate(request_payload(request))
        client = self._service.update_client(str(client_id), dto)
        return Response(
            {
                "message": "Cliente atualizado com sucesso.",
                "data": ClientSerializer(client).data,
            }
        )

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /clientes/{pk}"""
        return self.update(request, pk)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /clientes/{pk}"""
        self._service.delete_client(str(parse_id(pk)))
        return Response({"message": "O cliente foi excluído com sucesso"})
