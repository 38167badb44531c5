# recharges/tests/test_recharge_service.py

from __future__ import annotations

from decimal import Decimal

from django.test import TestCase
from django.utils import timezone

from core.exceptions import InsufficientBalanceError, NotFoundError, ServiceValidationError
from plateformes.models import BalanceMovement, BalanceType, Plateforme
from plateformes.services.ledger import get_balance, recompute_balance
from recharges.models import Recharge
from recharges.services.recharge_service import (
    compute_balance_adjustment,
    create_recharge,
    delete_recharge,
    update_recharge,
)

PAYE = Recharge.Statut.PAYE
EN_ATTENTE = Recharge.Statut.EN_ATTENTE
ANNULE = Recharge.Statut.ANNULE


class BalanceAdjustmentRuleTests(TestCase):
    """
    Four-way rule mapping a recharge change to a balance delta.
    """

    def test_paid_to_other_subtracts_old_amount(self):
        self.assertEqual(compute_balance_adjustment(PAYE, 500, EN_ATTENTE, 500), Decimal("-500"))
        self.assertEqual(compute_balance_adjustment(PAYE, 500, ANNULE, 700), Decimal("-500"))

    def test_other_to_paid_adds_new_amount(self):
        self.assertEqual(compute_balance_adjustment(EN_ATTENTE, 500, PAYE, 800), Decimal("800"))
        self.assertEqual(compute_balance_adjustment(ANNULE, 500, PAYE, 500), Decimal("500"))

    def test_paid_amount_change_adds_difference(self):
        self.assertEqual(compute_balance_adjustment(PAYE, 500, PAYE, 650), Decimal("150"))
        self.assertEqual(compute_balance_adjustment(PAYE, 500, PAYE, 200), Decimal("-300"))

    def test_unpaid_changes_do_nothing(self):
        self.assertEqual(compute_balance_adjustment(EN_ATTENTE, 500, ANNULE, 900), Decimal("0"))
        self.assertEqual(compute_balance_adjustment(PAYE, 500, PAYE, 500), Decimal("0"))


class RechargeServiceTests(TestCase):
    """
    Recharge lifecycle against a real platform balance.

    GUARANTEES:
    - balance == solde_initial + sum(paid recharges)
    - every balance change is journaled
    """

    def setUp(self):
        self.plateforme = Plateforme.objects.create(nom="Panel", solde_initial=Decimal("1000.00"))

    def _balance(self):
        return get_balance(self.plateforme.pk)

    def _create(self, montant="500.00", statut=PAYE):
        return create_recharge(
            plateforme_id=self.plateforme.pk,
            montant=Decimal(montant),
            statut=statut,
            date_recharge=timezone.now(),
        ).recharge

    # =====================================================
    # CREATE
    # =====================================================

    def test_paid_recharge_credits_balance(self):
        recharge = self._create()
        self.assertEqual(self._balance(), Decimal("1500.00"))
        self.assertEqual(recharge.devise, "DZD")

        movement = BalanceMovement.objects.get()
        self.assertEqual(movement.reason, BalanceMovement.Reason.RECHARGE_PAYEE)
        self.assertEqual(movement.source_type, BalanceMovement.SourceType.RECHARGE)
        self.assertEqual(movement.source_id, recharge.pk)

    def test_pending_recharge_leaves_balance(self):
        self._create(statut=EN_ATTENTE)
        self.assertEqual(self._balance(), Decimal("1000.00"))
        self.assertEqual(BalanceMovement.objects.count(), 0)

    def test_create_validation(self):
        with self.assertRaises(ServiceValidationError) as ctx:
            self._create(montant="0")
        self.assertEqual(str(ctx.exception), "montant must be greater than 0")

        with self.assertRaises(ServiceValidationError) as ctx:
            self._create(montant="10.005")
        self.assertEqual(str(ctx.exception), "montant must have at most 2 decimal places")

        with self.assertRaises(ServiceValidationError):
            self._create(statut="Rembourse")

        with self.assertRaises(NotFoundError):
            create_recharge(plateforme_id=999999, montant=Decimal("10"), statut=PAYE)

        self.assertEqual(Recharge.objects.count(), 0)

    # =====================================================
    # UPDATE
    # =====================================================

    def test_paid_to_pending_and_back_with_new_amount(self):
        recharge = self._create(montant="500.00")
        self.assertEqual(self._balance(), Decimal("1500.00"))

        update_recharge(recharge.pk, statut=EN_ATTENTE)
        self.assertEqual(self._balance(), Decimal("1000.00"))

        update_recharge(recharge.pk, statut=PAYE, montant=Decimal("800.00"))
        self.assertEqual(self._balance(), Decimal("1800.00"))

        reasons = list(BalanceMovement.objects.values_list("reason", flat=True))
        self.assertEqual(
            reasons,
            [
                BalanceMovement.Reason.RECHARGE_PAYEE,
                BalanceMovement.Reason.RECHARGE_ANNULEE,
                BalanceMovement.Reason.RECHARGE_PAYEE,
            ],
        )

    def test_paid_amount_change(self):
        recharge = self._create(montant="500.00")
        result = update_recharge(recharge.pk, montant=Decimal("650.00"))

        self.assertEqual(result.balance_adjustment, Decimal("150.00"))
        self.assertEqual(self._balance(), Decimal("1650.00"))
        self.assertEqual(
            BalanceMovement.objects.last().reason,
            BalanceMovement.Reason.RECHARGE_MODIFIEE,
        )

    def test_notes_only_update_keeps_balance(self):
        recharge = self._create()
        update_recharge(recharge.pk, notes="receipt checked")
        self.assertEqual(self._balance(), Decimal("1500.00"))
        self.assertEqual(BalanceMovement.objects.count(), 1)

    def test_update_without_fields(self):
        recharge = self._create()
        with self.assertRaises(ServiceValidationError) as ctx:
            update_recharge(recharge.pk, devise="EUR")
        self.assertEqual(str(ctx.exception), "No valid fields to update")

    def test_update_unknown(self):
        with self.assertRaises(NotFoundError):
            update_recharge(999999, notes="x")

    # =====================================================
    # DELETE
    # =====================================================

    def test_delete_paid_recharge_debits(self):
        recharge = self._create(montant="500.00")
        delete_recharge(recharge.pk)

        self.assertEqual(self._balance(), Decimal("1000.00"))
        self.assertFalse(Recharge.objects.exists())
        self.assertEqual(
            BalanceMovement.objects.last().reason,
            BalanceMovement.Reason.RECHARGE_SUPPRIMEE,
        )

    def test_delete_pending_recharge_keeps_balance(self):
        recharge = self._create(statut=EN_ATTENTE)
        delete_recharge(recharge.pk)
        self.assertEqual(self._balance(), Decimal("1000.00"))

    def test_ledger_matches_balance_after_lifecycle(self):
        first = self._create(montant="300.00")
        second = self._create(montant="200.00", statut=EN_ATTENTE)
        update_recharge(second.pk, statut=PAYE)
        update_recharge(first.pk, montant=Decimal("350.00"))
        delete_recharge(second.pk)

        self.plateforme.refresh_from_db()
        self.assertEqual(self.plateforme.balance, Decimal("1350.00"))
        self.assertEqual(recompute_balance(self.plateforme), self.plateforme.balance)


class PointsPlatformRechargeTests(TestCase):
    def setUp(self):
        self.plateforme = Plateforme.objects.create(
            nom="Points Panel",
            solde_initial=Decimal("0.00"),
            balance_type=BalanceType.POINTS,
            balance_unit="pts",
        )

    def test_delete_that_would_go_negative_is_rolled_back(self):
        recharge = create_recharge(
            plateforme_id=self.plateforme.pk,
            montant=Decimal("100.00"),
            statut=PAYE,
        ).recharge

        # Spend part of the credited points.
        Plateforme.objects.filter(pk=self.plateforme.pk).update(balance=Decimal("40.00"))

        with self.assertRaises(InsufficientBalanceError):
            delete_recharge(recharge.pk)

        self.assertTrue(Recharge.objects.filter(pk=recharge.pk).exists())
        self.assertEqual(get_balance(self.plateforme.pk), Decimal("40.00"))
