from __future__ import annotations

import random
from datetime import timedelta
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.utils import timezone

from modules.clients.models import Client
from modules.deliveries.constants import DeliveryStatus
from modules.deliveries.repositories.django_repository import DeliveryDjangoRepository
from modules.deliveries.services import DeliveryService
from modules.orders.constants import DeliveryType
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository


class Command(BaseCommand):
    help = "Seed database with realistic development data."

    def add_arguments(self, parser):
        parser.add_argument("--orders", type=int, default=30)

    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Seeding development data...")

        clients = self._seed_clients()
        orders = self._seed_orders(clients, options["orders"])
        deliveries_created = self._seed_deliveries(orders)

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"clients={len(clients)}, "
                f"orders={len(orders)}, "
                f"deliveries={deliveries_created}"
            )
        )

    def _seed_clients(self) -> list[Client]:
        self.stdout.write("Creating clients...")
        clients: list[Client] = []
        seed_clients = [
            ("Ana", "Souza", "39053344705", "São Paulo", "SP", "01310100"),
            ("Carla", "Mendes", "98765432100", "Campinas", "SP", "13010111"),
            ("Daniel", "Costa", "12345678901", "Curitiba", "PR", "80010000"),
            ("Fernanda", "Rocha", "74125896300", "Belo Horizonte", "MG", "30110000"),
            ("Gabriel", "Santos", "36925814700", "Porto Alegre", "RS", "90010150"),
            ("Helena", "Ferreira", "25814736900", "Recife", "PE", "50010000"),
            ("Igor", "Ramos", "74185296300", "Salvador", "BA", "40010000"),
            ("Julia", "Oliveira", "15935745600", "Rio de Janeiro", "RJ", "20010000"),
        ]
        for name, surname, national_id, city, state, postal_code in seed_clients:
            client, _ = Client.objects.get_or_create(
                national_id=national_id,
                defaults={
                    "name": name,
                    "surname": surname,
                    "phone": f"119{random.randint(10000000, 99999999)}",
                    "email": f"{name.lower()}.{surname.lower()}@example.com",
                    "street_type": "Rua",
                    "street": "das Flores",
                    "number": str(random.randint(1, 999)),
                    "district": "Centro",
                    "city": city,
                    "state": state,
                    "postal_code": postal_code,
                },
            )
            clients.append(client)
        self.stdout.write(self.style.SUCCESS("Creating clients... Done!"))
        return clients

    def _seed_orders(self, clients: list[Client], count: int) -> list[Order]:
        self.stdout.write("Creating orders...")
        if not clients:
            self.stdout.write(self.style.WARNING("Skipping orders (no clients)."))
            return []

        orders: list[Order] = []
        for _ in range(count):
            order = Order.objects.create(
                client=random.choice(clients),
                order_date=(timezone.now() - timedelta(days=random.randint(0, 30))).date(),
                delivery_type=random.choices(
                    [DeliveryType.STANDARD, DeliveryType.URGENT], weights=[0.7, 0.3], k=1
                )[0],
                weight_kg=Decimal(random.randint(1, 900)) / 10,
                distance_km=Decimal(random.randint(5, 4000)) / 10,
                base_rate_per_km=Decimal("2.50"),
                base_rate_per_kg=Decimal("1.20"),
            )
            orders.append(order)
        self.stdout.write(self.style.SUCCESS("Creating orders... Done!"))
        return orders

    def _seed_deliveries(self, orders: list[Order]) -> int:
        self.stdout.write("Pricing deliveries...")
        service = DeliveryService(
            delivery_repository=DeliveryDjangoRepository(),
            order_repository=OrderDjangoRepository(),
        )
        statuses = list(DeliveryStatus.values)
        created = 0
        for order in orders:
            delivery = service.calculate(str(order.id))
            service.set_status(str(delivery.id), random.choice(statuses))
            created += 1
        self.stdout.write(self.style.SUCCESS("Pricing deliveries... Done!"))
        return created
