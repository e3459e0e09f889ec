from decimal import Decimal
from unittest import mock

from django.conf import settings
from django.db import DatabaseError
from django.test import TestCase, override_settings

from products.models import Product
from rentals.models import OrderLine, RentalOrder, RentalStatus
from rentals.services import rental_service
from rentals.services.exceptions import (
    InvalidRentalActionError,
    InvalidRentalFieldError,
    OrderLineNotFoundError,
    RentalConflictError,
    RentalLockedError,
    RentalNotFoundError,
    RentalPersistenceError,
    RentalTransitionRejected,
)

R0001_LINES = [
    {"product_name": "Office Chair Premium", "quantity": 5, "unit_price": "200.00", "tax": "0.00"},
    {"product_name": "Standing Desk Adjustable", "quantity": 3, "unit_price": "495.00", "tax": "135.00"},
    {"product_name": "Monitor Arm Dual", "quantity": 8, "unit_price": "132.00", "tax": "96.00"},
]


def _create_r0001():
    return rental_service.create_rental(customer="Acme Corporation", lines=R0001_LINES)


class RentalCreationTests(TestCase):
    """
    GUARANTEES:
    - new rentals start in draft with sequential references
    - totals are derived from the initial lines
    - only header fields are accepted
    """

    def test_create_assigns_sequential_references(self):
        first = rental_service.create_rental(customer="Acme Corporation")
        second = rental_service.create_rental(customer="Tech Solutions Ltd")

        self.assertEqual(first.reference, "R0001")
        self.assertEqual(second.reference, "R0002")
        self.assertEqual(first.status, RentalStatus.DRAFT)

    def test_create_with_lines_computes_totals(self):
        rental = _create_r0001()
        rental.refresh_from_db()

        self.assertEqual(
            [line.sub_total for line in rental.order_lines.all()],
            [Decimal("1000.00"), Decimal("1485.00"), Decimal("1056.00")],
        )
        self.assertEqual(rental.untaxed_total, Decimal("3541.00"))
        self.assertEqual(rental.tax_total, Decimal("231.00"))
        self.assertEqual(rental.total, Decimal("3772.00"))

    def test_stock_terms_used_without_override(self):
        rental = rental_service.create_rental(customer="Acme Corporation")

        self.assertEqual(rental.terms_and_conditions, settings.RENTAL_DEFAULT_TERMS)
        self.assertTrue(rental.terms_and_conditions.startswith("1. All rental equipment"))
        self.assertEqual(len(rental.terms_and_conditions.splitlines()), 5)

    @override_settings(RENTAL_DEFAULT_TERMS="Return in good condition.")
    def test_default_terms_applied(self):
        rental = rental_service.create_rental(customer="Acme Corporation")
        self.assertEqual(rental.terms_and_conditions, "Return in good condition.")

    def test_status_is_not_a_creatable_field(self):
        with self.assertRaises(InvalidRentalFieldError):
            rental_service.create_rental(customer="Acme", status="confirmed")

        self.assertFalse(RentalOrder.objects.exists())


class RentalActionTests(TestCase):
    """
    GUARANTEES:
    - R0001 happy path: send -> quotation_sent, confirm -> confirmed, confirm again rejected
    - cancel is terminal; second cancel rejected with "already cancelled"
    - unknown action never reaches the database
    - missing rental is NotFound
    """

    def setUp(self):
        self.rental = _create_r0001()

    def _status(self):
        return RentalOrder.objects.get(pk=self.rental.pk).status

    def test_happy_path(self):
        result = rental_service.perform_action(reference="R0001", action="send")
        self.assertEqual(result.rental.status, RentalStatus.QUOTATION_SENT)
        self.assertEqual(result.message, "Quotation sent successfully")
        self.assertEqual(result.previous_status, RentalStatus.DRAFT)

        result = rental_service.perform_action(reference="R0001", action="confirm")
        self.assertEqual(result.rental.status, RentalStatus.CONFIRMED)
        self.assertEqual(result.message, "Rental confirmed successfully")

        with self.assertRaisesMessage(RentalTransitionRejected, "Cannot confirm rental in current status"):
            rental_service.perform_action(reference="R0001", action="confirm")

        self.assertEqual(self._status(), RentalStatus.CONFIRMED)

    def test_cancel_then_retry(self):
        rental_service.perform_action(reference="R0001", action="send")

        result = rental_service.perform_action(reference="R0001", action="cancel")
        self.assertEqual(result.rental.status, RentalStatus.CANCELLED)
        self.assertEqual(result.message, "Rental cancelled successfully")

        with self.assertRaisesMessage(RentalTransitionRejected, "Rental is already cancelled"):
            rental_service.perform_action(reference="R0001", action="cancel")

        self.assertEqual(self._status(), RentalStatus.CANCELLED)

    def test_print_is_pure(self):
        version = RentalOrder.objects.get(pk=self.rental.pk).version

        result = rental_service.perform_action(reference="R0001", action="print")

        self.assertEqual(result.message, "Rental document prepared for printing")
        self.assertFalse(result.status_changed)
        refreshed = RentalOrder.objects.get(pk=self.rental.pk)
        self.assertEqual(refreshed.status, RentalStatus.DRAFT)
        self.assertEqual(refreshed.version, version)

    def test_unknown_action_writes_nothing(self):
        version = RentalOrder.objects.get(pk=self.rental.pk).version

        with mock.patch.object(RentalOrder, "save") as save:
            with self.assertRaises(InvalidRentalActionError):
                rental_service.perform_action(reference="R0001", action="launch")

        save.assert_not_called()
        refreshed = RentalOrder.objects.get(pk=self.rental.pk)
        self.assertEqual(refreshed.status, RentalStatus.DRAFT)
        self.assertEqual(refreshed.version, version)

    def test_unknown_action_on_missing_rental_is_still_validation_error(self):
        with self.assertRaises(InvalidRentalActionError):
            rental_service.perform_action(reference="R9999", action="launch")

    def test_missing_rental(self):
        with self.assertRaises(RentalNotFoundError):
            rental_service.get_rental(reference="R9999")

        with self.assertRaises(RentalNotFoundError):
            rental_service.perform_action(reference="R9999", action="send")

    def test_send_rejected_after_confirm_in_strict_mode(self):
        rental_service.perform_action(reference="R0001", action="confirm")

        with self.assertRaisesMessage(
            RentalTransitionRejected, "Cannot send quotation for a confirmed rental"
        ):
            rental_service.perform_action(reference="R0001", action="send")

    @override_settings(RENTAL_STRICT_SEND=False)
    def test_legacy_send_reopens_confirmed_rental(self):
        rental_service.perform_action(reference="R0001", action="confirm")

        result = rental_service.perform_action(reference="R0001", action="send")

        self.assertEqual(result.rental.status, RentalStatus.QUOTATION_SENT)
        self.assertEqual(result.message, "Quotation resent successfully")

    def test_notify_called_after_commit(self):
        received = []

        with self.captureOnCommitCallbacks(execute=True):
            rental_service.perform_action(
                reference="R0001", action="send", notify=received.append
            )

        self.assertEqual(len(received), 1)
        self.assertEqual(received[0].message, "Quotation sent successfully")

    def test_notify_not_called_on_rejection(self):
        received = []
        rental_service.perform_action(reference="R0001", action="cancel")

        with self.captureOnCommitCallbacks(execute=True):
            with self.assertRaises(RentalTransitionRejected):
                rental_service.perform_action(
                    reference="R0001", action="cancel", notify=received.append
                )

        self.assertEqual(received, [])

    def test_stale_version_conflicts(self):
        version = RentalOrder.objects.get(pk=self.rental.pk).version
        rental_service.perform_action(reference="R0001", action="send", expected_version=version)

        with self.assertRaises(RentalConflictError):
            rental_service.perform_action(reference="R0001", action="confirm", expected_version=version)

        self.assertEqual(self._status(), RentalStatus.QUOTATION_SENT)

    def test_database_error_surfaces_as_persistence_error(self):
        with mock.patch.object(RentalOrder, "save", side_effect=DatabaseError("down")):
            with self.assertRaises(RentalPersistenceError):
                rental_service.perform_action(reference="R0001", action="send")


class RentalTotalsAndLinesTests(TestCase):
    """
    GUARANTEES:
    - every line mutation recomputes totals in the same call
    - recompute is idempotent
    - lines are frozen once confirmed / cancelled
    - catalog products fill name and price
    """

    def setUp(self):
        self.rental = _create_r0001()

    def _rental(self):
        return RentalOrder.objects.get(pk=self.rental.pk)

    def test_recompute_is_idempotent(self):
        first = rental_service.recompute_totals(reference="R0001")
        first_totals = (first.untaxed_total, first.tax_total, first.total)

        second = rental_service.recompute_totals(reference="R0001")

        self.assertEqual(first_totals, (second.untaxed_total, second.tax_total, second.total))
        self.assertEqual(second.total, Decimal("3772.00"))

    def test_add_line_updates_totals(self):
        line = rental_service.add_order_line(
            reference="R0001", product_name="Projector", quantity=2, unit_price="100.00", tax="20.00"
        )

        self.assertEqual(line.sub_total, Decimal("200.00"))
        self.assertEqual(line.position, 3)
        rental = self._rental()
        self.assertEqual(rental.untaxed_total, Decimal("3741.00"))
        self.assertEqual(rental.tax_total, Decimal("251.00"))
        self.assertEqual(rental.total, Decimal("3992.00"))

    def test_update_line_rederives_sub_total(self):
        line = self.rental.order_lines.get(product_name="Office Chair Premium")

        updated = rental_service.update_order_line(reference="R0001", line_id=line.pk, quantity=10)

        self.assertEqual(updated.sub_total, Decimal("2000.00"))
        self.assertEqual(self._rental().untaxed_total, Decimal("4541.00"))

    def test_remove_line_updates_totals(self):
        line = self.rental.order_lines.get(product_name="Monitor Arm Dual")

        rental = rental_service.remove_order_line(reference="R0001", line_id=line.pk)

        self.assertEqual(rental.untaxed_total, Decimal("2485.00"))
        self.assertEqual(rental.tax_total, Decimal("135.00"))
        self.assertEqual(rental.total, Decimal("2620.00"))
        self.assertEqual(OrderLine.objects.filter(rental=self.rental).count(), 2)

    def test_missing_line(self):
        with self.assertRaises(OrderLineNotFoundError):
            rental_service.get_order_line(reference="R0001", line_id="not-a-uuid")

    def test_lines_frozen_after_confirm(self):
        rental_service.perform_action(reference="R0001", action="confirm")

        with self.assertRaises(RentalLockedError):
            rental_service.add_order_line(reference="R0001", product_name="Chair", quantity=1)

        self.assertEqual(self._rental().order_lines.count(), 3)

    def test_invalid_line_rejected(self):
        with self.assertRaises(InvalidRentalFieldError):
            rental_service.add_order_line(reference="R0001", product_name="Chair", quantity=0)

        with self.assertRaises(InvalidRentalFieldError):
            rental_service.add_order_line(reference="R0001", quantity=1)

    def test_product_fills_name_and_price(self):
        product = Product.objects.create(
            sku="LAP-PRO", name="Laptop Pro", price=Decimal("800.00"), quantity=5
        )

        line = rental_service.add_order_line(reference="R0001", product=product.pk, quantity=2)

        self.assertEqual(line.product_name, "Laptop Pro")
        self.assertEqual(line.unit_price, Decimal("800.00"))
        self.assertEqual(line.sub_total, Decimal("1600.00"))

    def test_malformed_product_id_is_field_error(self):
        with self.assertRaises(InvalidRentalFieldError):
            rental_service.add_order_line(reference="R0001", product="not-a-uuid", quantity=1)

        line = self.rental.order_lines.get(product_name="Monitor Arm Dual")
        with self.assertRaises(InvalidRentalFieldError):
            rental_service.update_order_line(
                reference="R0001", line_id=line.pk, product="not-a-uuid"
            )

        self.assertEqual(self._rental().order_lines.count(), 3)


class RentalFieldTests(TestCase):
    """
    GUARANTEES:
    - header fields are editable; status / totals are not
    - cancelled rentals are read-only
    - each write bumps version
    """

    def setUp(self):
        self.rental = rental_service.create_rental(customer="Acme Corporation")

    def test_update_field(self):
        rental = rental_service.update_field(
            reference="R0001", field="delivery_address", value="1 New Road"
        )

        self.assertEqual(rental.delivery_address, "1 New Road")
        self.assertEqual(rental.version, self.rental.version + 1)

    def test_derived_and_status_fields_rejected(self):
        for field in ("status", "total", "untaxed_total", "reference"):
            with self.assertRaises(InvalidRentalFieldError):
                rental_service.update_field(reference="R0001", field=field, value="x")

    def test_cancelled_rental_is_read_only(self):
        rental_service.perform_action(reference="R0001", action="cancel")

        with self.assertRaises(RentalLockedError):
            rental_service.update_field(reference="R0001", field="customer", value="Other")

    def test_missing_rental(self):
        with self.assertRaises(RentalNotFoundError):
            rental_service.update_field(reference="R9999", field="customer", value="x")

    def test_delete(self):
        rental_service.delete_rental(reference="R0001")
        self.assertFalse(RentalOrder.objects.filter(reference="R0001").exists())
