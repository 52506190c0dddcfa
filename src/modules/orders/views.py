"""HTTP surface of the order workflow.

Each action resolves the caller to an ``Actor`` and hands off to
``OrderService``.  Domain exceptions map to status codes here
(404, 400, 403, 409); anything else propagates to DRF.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.throttling import BaseThrottle
from rest_framework.viewsets import GenericViewSet

from modules.accounts.services import resolve_actor
from modules.core.pagination import StandardResultsSetPagination
from modules.orders.dtos import CreateOrderDTO, UpdateContentsDTO, UpdateStatusDTO
from modules.orders.exceptions import (
    ActorNotAuthorized,
    CustomerRequired,
    InvalidOrderStatus,
    OrderLocked,
    OrderNotFound,
    TransitionNotAllowedForRole,
)
from modules.orders.filters import OrderFilter
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.serializers import (
    CreateOrderSerializer,
    OrderListSerializer,
    OrderSerializer,
    OrderTransitionsSerializer,
    StatusTransitionSerializer,
    UpdateOrderSerializer,
)
from modules.orders.services import OrderService
from shared.infrastructure.bus import event_bus

_ORDER_NOT_FOUND = {"detail": "Order not found."}


def _error(exc: Exception, code: int) -> Response:
    return Response({"detail": str(exc)}, status=code)


class OrderViewSet(GenericViewSet):
    """Orders endpoints; a plain ``GenericViewSet`` so writes never bypass
    the service."""

    queryset = Order.objects.none()
    filterset_class = OrderFilter
    ordering_fields = ["created_at", "status", "total_amount"]
    ordering = ["-created_at", "-id"]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    pagination_class = StandardResultsSetPagination

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = OrderService(
            order_repository=OrderDjangoRepository(),
            event_bus=event_bus,
        )

    throttle_scopes = {
        "create": "order_creation",
        "list": "order_listing",
        "retrieve": "order_listing",
        "transitions": "order_listing",
        "change_status": "order_transition",
    }

    def get_throttles(self) -> list[BaseThrottle]:
        self.throttle_scope = self.throttle_scopes.get(self.action)
        return super().get_throttles()

    def create(self, request: Request) -> Response:
        """POST /api/v1/orders/ -- new order in DRAFT."""
        serializer = CreateOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dto = CreateOrderDTO(**serializer.validated_data)

        try:
            order = self._service.create_order(dto, resolve_actor(request.user))
        except ActorNotAuthorized as exc:
            return _error(exc, status.HTTP_403_FORBIDDEN)
        except CustomerRequired as exc:
            return _error(exc, status.HTTP_400_BAD_REQUEST)

        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)

    def list(self, request: Request) -> Response:
        """GET /api/v1/orders/ -- tenant-scoped, filtered, paginated."""
        try:
            queryset = self._service.list_orders(resolve_actor(request.user))
        except ActorNotAuthorized as exc:
            return _error(exc, status.HTTP_403_FORBIDDEN)

        page = self.paginate_queryset(self.filter_queryset(queryset))
        serializer = OrderListSerializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/"""
        try:
            order = self._service.get_order(str(pk), resolve_actor(request.user))
        except OrderNotFound:
            return Response(_ORDER_NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        return Response(OrderSerializer(order).data)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/orders/{pk}/ -- edit notes while DRAFT or PENDING.

        Status changes go through ``POST /orders/{pk}/status/``.
        """
        if "status" in request.data:
            return Response(
                {"detail": "Use the /status/ endpoint to change the order status."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        serializer = UpdateOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dto = UpdateContentsDTO(**serializer.validated_data)

        try:
            order = self._service.update_contents(
                str(pk), dto, resolve_actor(request.user)
            )
        except OrderNotFound:
            return Response(_ORDER_NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        except ActorNotAuthorized as exc:
            return _error(exc, status.HTTP_403_FORBIDDEN)
        except OrderLocked as exc:
            return _error(exc, status.HTTP_409_CONFLICT)

        return Response(OrderSerializer(order).data)

    @action(detail=True, methods=["post"], url_path="status", url_name="status")
    def change_status(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/orders/{pk}/status/

        400 when the transition is impossible, 403 when the caller's role
        may not perform it or is read-only.
        """
        serializer = StatusTransitionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dto = UpdateStatusDTO(**serializer.validated_data)

        try:
            order = self._service.update_status(
                str(pk), dto, resolve_actor(request.user)
            )
        except OrderNotFound:
            return Response(_ORDER_NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        except ActorNotAuthorized as exc:
            return _error(exc, status.HTTP_403_FORBIDDEN)
        except InvalidOrderStatus as exc:
            return _error(exc, status.HTTP_400_BAD_REQUEST)
        except TransitionNotAllowedForRole as exc:
            return _error(exc, status.HTTP_403_FORBIDDEN)

        return Response(OrderSerializer(order).data)

    @action(detail=True, methods=["get"])
    def transitions(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/transitions/ -- buttons for the caller."""
        try:
            result = self._service.available_transitions(
                str(pk), resolve_actor(request.user)
            )
        except OrderNotFound:
            return Response(_ORDER_NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        return Response(OrderTransitionsSerializer(result.model_dump()).data)
