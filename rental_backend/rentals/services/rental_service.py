"""
======================================================
PATH: rentals/services/rental_service.py
======================================================
RENTAL LIFECYCLE SERVICE

The only rental component that touches the database.
Composes the pure pieces:
- rental_lifecycle.resolve_transition  (status changes)
- totals.compute_totals                (derived money fields)

Rules:
- Every mutation runs in ONE transaction with the rental row locked
  (select_for_update), so concurrent actions on one rental serialize.
- expected_version (optional) turns a stale write into RentalConflictError.
- Order lines are mutable only while the rental is draft / quotation_sent,
  and every line mutation recomputes totals in the same transaction.
- django DatabaseError surfaces as RentalPersistenceError; nothing is swallowed.
======================================================
"""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Iterable, Mapping, Optional

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError, transaction
from django.db.models import Max
from django.utils import timezone

from products.services.catalog import ProductNotFoundError, get_product
from rentals.models import OrderLine, RentalOrder, RentalStatus
from rentals.services.exceptions import (
    InvalidRentalFieldError,
    OrderLineNotFoundError,
    RentalConflictError,
    RentalLockedError,
    RentalNotFoundError,
    RentalPersistenceError,
    RentalTransitionRejected,
)
from rentals.services.rental_lifecycle import parse_action, resolve_transition
from rentals.services.totals import RentalTotals, compute_totals

logger = logging.getLogger(__name__)


LINE_FIELDS = ("product", "product_name", "quantity", "unit_price", "tax", "position")


@dataclass(frozen=True)
class ActionResult:
    rental: RentalOrder
    message: str
    action: str
    previous_status: str
    timestamp: datetime

    @property
    def status_changed(self) -> bool:
        return self.previous_status != self.rental.status


# ============================================================
# HELPERS
# ============================================================


def _persistence_guard(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except DatabaseError as exc:
            logger.exception(
                "Rental persistence failure",
                extra={"operation": func.__name__, "reference": kwargs.get("reference")},
            )
            raise RentalPersistenceError("Rental storage is unavailable, try again later") from exc

    return wrapper


def _strict_send() -> bool:
    return bool(getattr(settings, "RENTAL_STRICT_SEND", True))


def _locked_rental(reference: str) -> RentalOrder:
    try:
        return RentalOrder.objects.select_for_update().get(reference=reference)
    except RentalOrder.DoesNotExist:
        raise RentalNotFoundError(f"Rental {reference} not found") from None


def _check_version(rental: RentalOrder, expected_version) -> None:
    if expected_version is None or expected_version == "":
        return

    try:
        expected = int(expected_version)
    except (TypeError, ValueError):
        raise InvalidRentalFieldError("version must be an integer") from None

    if expected != rental.version:
        logger.warning(
            "Rental version conflict",
            extra={
                "reference": rental.reference,
                "expected_version": expected,
                "current_version": rental.version,
            },
        )
        raise RentalConflictError(
            f"Rental {rental.reference} has changed (version {rental.version}, "
            f"expected {expected}). Reload and try again."
        )


def _require_lines_editable(rental: RentalOrder) -> None:
    if not rental.lines_editable:
        raise RentalLockedError(
            f"Order lines cannot be changed while rental {rental.reference} is {rental.status}"
        )


def _save(rental: RentalOrder, fields: Iterable[str]) -> None:
    rental.version += 1
    rental.save(update_fields=[*fields, "version", "updated_at"])


def _apply_totals(rental: RentalOrder) -> RentalTotals:
    totals = compute_totals(rental.order_lines.all()).quantized()

    rental.untaxed_total = totals.untaxed_total
    rental.tax_total = totals.total_tax
    rental.total = totals.total
    _save(rental, RentalOrder.DERIVED_FIELDS)

    logger.info(
        "Rental totals recomputed",
        extra={"reference": rental.reference, **totals.as_dict()},
    )
    return totals


def _clean_header_changes(changes: Mapping[str, Any]) -> dict[str, str]:
    unknown = [name for name in changes if name not in RentalOrder.EDITABLE_FIELDS]
    if unknown:
        raise InvalidRentalFieldError(f"Field(s) not editable: {', '.join(sorted(unknown))}")

    return {name: "" if value is None else str(value) for name, value in changes.items()}


def _get_line(rental: RentalOrder, line_id) -> OrderLine:
    try:
        return rental.order_lines.get(pk=line_id)
    except (OrderLine.DoesNotExist, DjangoValidationError, ValueError):
        raise OrderLineNotFoundError(
            f"Order line {line_id} not found on rental {rental.reference}"
        ) from None


def _resolve_product(product):
    if product is None or product == "":
        return None
    if hasattr(product, "pk"):
        return product
    try:
        return get_product(product)
    except ProductNotFoundError as exc:
        raise InvalidRentalFieldError(str(exc)) from exc


def _validate_line(line: OrderLine) -> None:
    try:
        line.full_clean(exclude=["rental", "product", "sub_total"])
    except DjangoValidationError as exc:
        raise InvalidRentalFieldError("; ".join(exc.messages)) from exc


def _next_position(rental: RentalOrder) -> int:
    current = rental.order_lines.aggregate(m=Max("position"))["m"]
    return 0 if current is None else current + 1


def _next_reference() -> str:
    prefix = getattr(settings, "RENTAL_REFERENCE_PREFIX", "R")

    highest = 0
    existing = RentalOrder.objects.filter(reference__startswith=prefix).values_list(
        "reference", flat=True
    )
    for ref in existing:
        suffix = ref[len(prefix):]
        if suffix.isdigit():
            highest = max(highest, int(suffix))

    return f"{prefix}{highest + 1:04d}"


def _build_line(rental: RentalOrder, data: Mapping[str, Any]) -> OrderLine:
    unknown = [name for name in data if name not in LINE_FIELDS]
    if unknown:
        raise InvalidRentalFieldError(f"Unknown order line field(s): {', '.join(sorted(unknown))}")

    product = _resolve_product(data.get("product"))

    product_name = (data.get("product_name") or "").strip()
    if not product_name and product is not None:
        product_name = product.name

    unit_price = data.get("unit_price")
    if unit_price is None:
        unit_price = product.price if product is not None else 0

    position = data.get("position")
    if position is None:
        position = _next_position(rental)

    line = OrderLine(
        rental=rental,
        product=product,
        product_name=product_name,
        quantity=data.get("quantity", 1),
        unit_price=unit_price,
        tax=data.get("tax") or 0,
        position=position,
    )
    _validate_line(line)
    return line


# ============================================================
# READS
# ============================================================


@_persistence_guard
def get_rental(*, reference: str) -> RentalOrder:
    try:
        return RentalOrder.objects.prefetch_related("order_lines").get(reference=reference)
    except RentalOrder.DoesNotExist:
        raise RentalNotFoundError(f"Rental {reference} not found") from None


@_persistence_guard
def list_order_lines(*, reference: str) -> list[OrderLine]:
    rental = get_rental(reference=reference)
    return list(rental.order_lines.all())


@_persistence_guard
def get_order_line(*, reference: str, line_id) -> OrderLine:
    rental = get_rental(reference=reference)
    return _get_line(rental, line_id)


# ============================================================
# HEADER FIELDS
# ============================================================


@_persistence_guard
@transaction.atomic
def update_fields(
    *,
    reference: str,
    changes: Mapping[str, Any],
    expected_version=None,
) -> RentalOrder:
    """
    Apply free-text header edits. Status and derived totals are not
    editable here; a cancelled rental is read-only.
    """
    cleaned = _clean_header_changes(changes)

    rental = _locked_rental(reference)
    _check_version(rental, expected_version)

    if not cleaned:
        return rental

    if rental.status == RentalStatus.CANCELLED:
        raise RentalLockedError(f"Rental {reference} is cancelled and cannot be edited")

    for name, value in cleaned.items():
        setattr(rental, name, value)
    _save(rental, cleaned.keys())

    logger.info(
        "Rental fields updated",
        extra={"reference": reference, "fields": sorted(cleaned), "version": rental.version},
    )
    return rental


def update_field(*, reference: str, field: str, value, expected_version=None) -> RentalOrder:
    return update_fields(
        reference=reference,
        changes={field: value},
        expected_version=expected_version,
    )


# ============================================================
# STATUS ACTIONS
# ============================================================


@_persistence_guard
@transaction.atomic
def perform_action(
    *,
    reference: str,
    action,
    expected_version=None,
    notify: Optional[Callable[[ActionResult], None]] = None,
) -> ActionResult:
    """
    Run `action` through the transition table and persist the new status.

    - The token is validated before the rental row is touched.
    - Status is written only when it actually changes (print / resend are no-ops).
    - notify(result) is called once the transaction commits.
    """
    action = parse_action(action)

    rental = _locked_rental(reference)
    _check_version(rental, expected_version)

    previous_status = rental.status

    try:
        transition = resolve_transition(previous_status, action, strict_send=_strict_send())
    except RentalTransitionRejected as exc:
        logger.info(
            "Rental action rejected",
            extra={
                "reference": reference,
                "action": action.value,
                "status": previous_status,
                "reason": str(exc),
            },
        )
        raise

    if transition.changed:
        rental.status = transition.new_status
        _save(rental, ["status"])

    result = ActionResult(
        rental=rental,
        message=transition.message,
        action=action.value,
        previous_status=previous_status,
        timestamp=timezone.now(),
    )

    logger.info(
        "Rental action performed",
        extra={
            "reference": reference,
            "action": action.value,
            "from_status": previous_status,
            "to_status": rental.status,
        },
    )

    if notify is not None:
        transaction.on_commit(lambda: notify(result))

    return result


# ============================================================
# TOTALS
# ============================================================


@_persistence_guard
@transaction.atomic
def recompute_totals(*, reference: str) -> RentalOrder:
    rental = _locked_rental(reference)
    _apply_totals(rental)
    return rental


# ============================================================
# ORDER LINES
# ============================================================


@_persistence_guard
@transaction.atomic
def add_order_line(*, reference: str, expected_version=None, **line_data) -> OrderLine:
    """
    Add a line. When `product` is given, product_name and unit_price
    default to the catalog values.
    """
    rental = _locked_rental(reference)
    _check_version(rental, expected_version)
    _require_lines_editable(rental)

    line = _build_line(rental, line_data)
    line.save()

    _apply_totals(rental)

    logger.info(
        "Order line added",
        extra={"reference": reference, "line_id": str(line.pk), "product_name": line.product_name},
    )
    return line


@_persistence_guard
@transaction.atomic
def update_order_line(
    *,
    reference: str,
    line_id,
    expected_version=None,
    **changes,
) -> OrderLine:
    unknown = [name for name in changes if name not in LINE_FIELDS]
    if unknown:
        raise InvalidRentalFieldError(f"Unknown order line field(s): {', '.join(sorted(unknown))}")

    rental = _locked_rental(reference)
    _check_version(rental, expected_version)
    _require_lines_editable(rental)

    line = _get_line(rental, line_id)

    if "product" in changes:
        line.product = _resolve_product(changes.pop("product"))
        if not changes.get("product_name") and line.product is not None:
            changes["product_name"] = line.product.name

    for name, value in changes.items():
        setattr(line, name, value)

    _validate_line(line)
    line.save()
    line.rental = rental

    _apply_totals(rental)

    logger.info(
        "Order line updated",
        extra={"reference": reference, "line_id": str(line.pk), "fields": sorted(changes)},
    )
    return line


@_persistence_guard
@transaction.atomic
def remove_order_line(*, reference: str, line_id, expected_version=None) -> RentalOrder:
    rental = _locked_rental(reference)
    _check_version(rental, expected_version)
    _require_lines_editable(rental)

    line = _get_line(rental, line_id)
    line.delete()

    _apply_totals(rental)

    logger.info("Order line removed", extra={"reference": reference, "line_id": str(line_id)})
    return rental


# ============================================================
# CREATE / DELETE
# ============================================================


@_persistence_guard
@transaction.atomic
def create_rental(*, lines: Optional[Iterable[Mapping[str, Any]]] = None, **fields) -> RentalOrder:
    """
    Create a draft rental with the next sequential reference.
    Optional `lines` are added and totals computed in the same transaction.
    """
    cleaned = _clean_header_changes(fields)
    cleaned.setdefault("terms_and_conditions", getattr(settings, "RENTAL_DEFAULT_TERMS", ""))

    rental = RentalOrder.objects.create(
        reference=_next_reference(),
        status=RentalStatus.DRAFT,
        **cleaned,
    )

    lines = list(lines or ())
    for data in lines:
        _build_line(rental, data).save()

    if lines:
        _apply_totals(rental)

    logger.info("Rental created", extra={"reference": rental.reference})
    return rental


@_persistence_guard
@transaction.atomic
def delete_rental(*, reference: str, expected_version=None) -> None:
    rental = _locked_rental(reference)
    _check_version(rental, expected_version)

    rental.delete()

    logger.info("Rental deleted", extra={"reference": reference})
