"""Delivery domain exceptions.

Raised by the pricing engine, the lifecycle and the service layer.
``api_exception_handler`` translates them into HTTP responses.
"""

from __future__ import annotations

from modules.core.exceptions import NotFoundError, ValidationError


class DeliveryNotFound(NotFoundError):
    """The requested delivery does not exist."""

    default_message = "Entrega não encontrada."


class InvalidDeliveryStatus(ValidationError):
    """The requested status is not one of ``DeliveryStatus``."""

    default_message = "Status inválido."


class MissingPricingInput(ValidationError):
    """The order lacks a value the price formula needs."""

    default_message = "Pedido sem dados suficientes para o cálculo."


class DeliveryCostOutOfRange(ValidationError):
    """A monetary value does not fit the 10 integer digits of a cost column."""

    default_message = "Valor da entrega excede o limite permitido."
