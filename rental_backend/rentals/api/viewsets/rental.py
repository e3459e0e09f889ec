# rentals/api/viewsets/rental.py

"""
======================================================
PATH: rentals/api/viewsets/rental.py
======================================================
RENTAL VIEWSET (STAFF)

Purpose:
- Rental list / detail / header edits / delete
  (PUT replaces every header field, PATCH changes only the ones sent)
- Status actions (send, confirm, cancel, print)
- Order line CRUD (each write recomputes totals)

Rentals are addressed by their public reference (R0001), not the UUID.

Concurrency:
- Every write accepts an optional version (body "version" or If-Match header).
  A stale version returns 409.
- Detail responses carry ETag: "<version>".

Security:
- IsAuthenticated + per-action capability (see action_capabilities)
======================================================
"""

from __future__ import annotations

from django.db.models import Q
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import mixins, serializers, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from permissions.roles import (
    CAP_RENTALS_DELETE,
    CAP_RENTALS_EDIT,
    CAP_RENTALS_TRANSITION,
    CAP_RENTALS_VIEW,
    HasActionCapability,
)
from rentals.models import RentalOrder
from rentals.serializers import (
    OrderLineInputSerializer,
    OrderLineSerializer,
    RentalActionInputSerializer,
    RentalDetailSerializer,
    RentalOrderSerializer,
    RentalWriteSerializer,
    totals_payload,
)
from rentals.services import rental_service
from rentals.services.exceptions import (
    InvalidRentalActionError,
    InvalidRentalFieldError,
    OrderLineNotFoundError,
    RentalConflictError,
    RentalLifecycleError,
    RentalLockedError,
    RentalNotFoundError,
    RentalPersistenceError,
    RentalTransitionRejected,
)


# ==========================================================
# ERROR MAPPING
# ==========================================================

ERROR_STATUS = (
    ((RentalNotFoundError, OrderLineNotFoundError), status.HTTP_404_NOT_FOUND),
    ((InvalidRentalActionError, InvalidRentalFieldError), status.HTTP_400_BAD_REQUEST),
    ((RentalTransitionRejected, RentalLockedError), status.HTTP_400_BAD_REQUEST),
    (RentalConflictError, status.HTTP_409_CONFLICT),
    (RentalPersistenceError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def _error_response(exc: RentalLifecycleError) -> Response:
    for classes, code in ERROR_STATUS:
        if isinstance(exc, classes):
            return Response({"detail": str(exc)}, status=code)
    return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)


def _expected_version(request, data=None):
    """
    Body "version" wins; otherwise If-Match: "3" (weak tags accepted).
    """
    if data and data.get("version") is not None:
        return data["version"]

    raw = (request.headers.get("If-Match") or "").strip()
    if not raw or raw == "*":
        return None

    if raw.startswith("W/"):
        raw = raw[2:]
    return raw.strip('"')


def _with_etag(response: Response, rental: RentalOrder) -> Response:
    response["ETag"] = f'"{rental.version}"'
    return response


class ActionResultSerializer(serializers.Serializer):
    rental = RentalOrderSerializer()
    message = serializers.CharField()
    action = serializers.CharField()
    previous_status = serializers.CharField()
    timestamp = serializers.DateTimeField()


# ==========================================================
# VIEWSET
# ==========================================================

class RentalViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    serializer_class = RentalOrderSerializer
    permission_classes = [IsAuthenticated, HasActionCapability]

    lookup_field = "reference"
    lookup_value_regex = r"[A-Za-z0-9_-]+"

    filterset_fields = ["status"]

    action_capabilities = {
        "default": CAP_RENTALS_VIEW,
        "create": CAP_RENTALS_EDIT,
        "update": CAP_RENTALS_EDIT,
        "partial_update": CAP_RENTALS_EDIT,
        "destroy": CAP_RENTALS_DELETE,
        "perform_action": CAP_RENTALS_TRANSITION,
        "recompute": CAP_RENTALS_EDIT,
        "order_lines:post": CAP_RENTALS_EDIT,
        "order_line_detail:put": CAP_RENTALS_EDIT,
        "order_line_detail:patch": CAP_RENTALS_EDIT,
        "order_line_detail:delete": CAP_RENTALS_EDIT,
    }

    # ======================================================
    # QUERYSET
    # ======================================================

    def get_queryset(self):
        qs = RentalOrder.objects.all().prefetch_related("order_lines").order_by("-created_at")

        q = (self.request.query_params.get("q") or "").strip()
        if q:
            qs = qs.filter(Q(reference__icontains=q) | Q(customer__icontains=q))

        return qs

    # ======================================================
    # DETAIL
    # GET /api/rentals/rentals/{reference}/
    # ======================================================

    @extend_schema(
        responses={
            200: OpenApiResponse(description="{rental, order_lines, totals, allowed_actions}"),
            404: OpenApiResponse(description="Rental not found"),
        },
    )
    def retrieve(self, request, reference=None):
        try:
            rental = rental_service.get_rental(reference=reference)
        except RentalLifecycleError as exc:
            return _error_response(exc)

        return _with_etag(Response(RentalDetailSerializer(rental).data), rental)

    # ======================================================
    # CREATE
    # ======================================================

    @extend_schema(request=RentalWriteSerializer, responses={201: RentalOrderSerializer})
    def create(self, request):
        ser = RentalWriteSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        data = dict(ser.validated_data)
        data.pop("version", None)
        lines = [
            {k: v for k, v in line.items() if k != "version"}
            for line in data.pop("lines", None) or []
        ]

        try:
            rental = rental_service.create_rental(lines=lines, **data)
        except RentalLifecycleError as exc:
            return _error_response(exc)

        rental = rental_service.get_rental(reference=rental.reference)
        return _with_etag(
            Response(RentalDetailSerializer(rental).data, status=status.HTTP_201_CREATED),
            rental,
        )

    # ======================================================
    # HEADER EDITS
    # ======================================================

    def _update(self, request, reference, *, partial):
        ser = RentalWriteSerializer(data=request.data, partial=partial)
        ser.is_valid(raise_exception=True)

        data = dict(ser.validated_data)
        if "lines" in data:
            return Response(
                {"detail": "Use the order-lines endpoints to change lines."},
                status=status.HTTP_400_BAD_REQUEST,
            )

        expected_version = _expected_version(request, data)
        data.pop("version", None)

        if not partial:
            # PUT replaces the whole header: omitted fields are cleared
            data = {name: data.get(name, "") for name in RentalOrder.EDITABLE_FIELDS}

        try:
            rental = rental_service.update_fields(
                reference=reference,
                changes=data,
                expected_version=expected_version,
            )
        except RentalLifecycleError as exc:
            return _error_response(exc)

        return _with_etag(Response(RentalOrderSerializer(rental).data), rental)

    @extend_schema(request=RentalWriteSerializer, responses={200: RentalOrderSerializer})
    def update(self, request, reference=None):
        return self._update(request, reference, partial=False)

    @extend_schema(request=RentalWriteSerializer, responses={200: RentalOrderSerializer})
    def partial_update(self, request, reference=None):
        return self._update(request, reference, partial=True)

    # ======================================================
    # DELETE
    # ======================================================

    def destroy(self, request, reference=None):
        try:
            rental_service.delete_rental(
                reference=reference,
                expected_version=_expected_version(request),
            )
        except RentalLifecycleError as exc:
            return _error_response(exc)

        return Response(status=status.HTTP_204_NO_CONTENT)

    # ======================================================
    # STATUS ACTIONS
    # POST /api/rentals/rentals/{reference}/actions/  {"action": "confirm"}
    # ======================================================

    @extend_schema(
        request=RentalActionInputSerializer,
        responses={
            200: ActionResultSerializer,
            400: OpenApiResponse(description="Invalid action or transition rejected"),
            404: OpenApiResponse(description="Rental not found"),
            409: OpenApiResponse(description="Version conflict"),
        },
    )
    @action(detail=True, methods=["post"], url_path="actions")
    def perform_action(self, request, reference=None):
        ser = RentalActionInputSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        try:
            result = rental_service.perform_action(
                reference=reference,
                action=ser.validated_data["action"],
                expected_version=_expected_version(request, ser.validated_data),
            )
        except RentalLifecycleError as exc:
            return _error_response(exc)

        return _with_etag(Response(ActionResultSerializer(result).data), result.rental)

    # ======================================================
    # TOTALS
    # ======================================================

    @extend_schema(request=None, responses={200: RentalOrderSerializer})
    @action(detail=True, methods=["post"], url_path="recompute")
    def recompute(self, request, reference=None):
        try:
            rental = rental_service.recompute_totals(reference=reference)
        except RentalLifecycleError as exc:
            return _error_response(exc)

        return _with_etag(
            Response({"rental": RentalOrderSerializer(rental).data, "totals": totals_payload(rental)}),
            rental,
        )

    # ======================================================
    # ORDER LINES
    # ======================================================

    def _line_response(self, line, rental, *, code=status.HTTP_200_OK):
        return _with_etag(
            Response(
                {
                    "order_line": OrderLineSerializer(line).data,
                    "totals": totals_payload(rental),
                    "version": rental.version,
                },
                status=code,
            ),
            rental,
        )

    @extend_schema(
        request=OrderLineInputSerializer,
        responses={200: OrderLineSerializer(many=True), 201: OrderLineSerializer},
    )
    @action(detail=True, methods=["get", "post"], url_path="order-lines")
    def order_lines(self, request, reference=None):
        if request.method == "GET":
            try:
                lines = rental_service.list_order_lines(reference=reference)
            except RentalLifecycleError as exc:
                return _error_response(exc)

            data = OrderLineSerializer(lines, many=True).data
            return Response({"count": len(data), "results": data})

        ser = OrderLineInputSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        data = dict(ser.validated_data)
        expected_version = _expected_version(request, data)
        data.pop("version", None)

        try:
            line = rental_service.add_order_line(
                reference=reference,
                expected_version=expected_version,
                **data,
            )
        except RentalLifecycleError as exc:
            return _error_response(exc)

        return self._line_response(line, line.rental, code=status.HTTP_201_CREATED)

    @extend_schema(request=OrderLineInputSerializer, responses={200: OrderLineSerializer})
    @action(
        detail=True,
        methods=["get", "put", "patch", "delete"],
        url_path=r"order-lines/(?P<line_id>[^/.]+)",
    )
    def order_line_detail(self, request, reference=None, line_id=None):
        try:
            if request.method == "GET":
                line = rental_service.get_order_line(reference=reference, line_id=line_id)
                return Response(OrderLineSerializer(line).data)

            if request.method == "DELETE":
                rental = rental_service.remove_order_line(
                    reference=reference,
                    line_id=line_id,
                    expected_version=_expected_version(request),
                )
                return _with_etag(
                    Response({"totals": totals_payload(rental), "version": rental.version}),
                    rental,
                )

            ser = OrderLineInputSerializer(data=request.data, partial=request.method == "PATCH")
            ser.is_valid(raise_exception=True)

            data = dict(ser.validated_data)
            expected_version = _expected_version(request, data)
            data.pop("version", None)

            line = rental_service.update_order_line(
                reference=reference,
                line_id=line_id,
                expected_version=expected_version,
                **data,
            )
        except RentalLifecycleError as exc:
            return _error_response(exc)

        return self._line_response(line, line.rental)
