# plateformes/services/ledger.py

"""
BALANCE LEDGER (AUTHORITATIVE)

SINGLE WRITE PATH for Plateforme.balance.

Responsibilities:
- Read the current balance of a platform
- Apply signed adjustments as ONE relational update expression
  (UPDATE ... SET balance = balance + delta), never read-then-write
- Conditional debit (UPDATE ... WHERE balance >= amount) so a stale
  pre-check can never push a balance below zero
- Journal every mutation in BalanceMovement (same transaction)
- Recompute / reconcile the materialised balance on demand

RULES:
- Callers validate first, then call the ledger inside their own
  transaction.atomic block; the ledger joins that transaction.
- adjust_balance does NOT enforce non-negativity by default. Points-typed
  platforms are the exception when PLATEFORMES_POINTS_NON_NEGATIVE is on.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from django.apps import apps
from django.conf import settings
from django.db import transaction
from django.db.models import F, Sum
from django.db.models.functions import Coalesce
from django.utils import timezone

from core.exceptions import InsufficientBalanceError, NotFoundError
from plateformes.models import BalanceMovement, BalanceType, Plateforme

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")


def _to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _points_non_negative() -> bool:
    return bool(getattr(settings, "PLATEFORMES_POINTS_NON_NEGATIVE", True))


# ============================================================
# READS
# ============================================================

def get_plateforme(plateforme_id) -> Plateforme:
    plateforme = Plateforme.objects.filter(pk=plateforme_id).first()
    if plateforme is None:
        raise NotFoundError("Plateforme not found")
    return plateforme


def lock_plateforme(plateforme_id) -> Plateforme:
    """
    Row-lock a platform for the rest of the current transaction.
    Concurrent sales against the same platform serialize here.
    """
    plateforme = Plateforme.objects.select_for_update().filter(pk=plateforme_id).first()
    if plateforme is None:
        raise NotFoundError("Plateforme not found")
    return plateforme


def get_balance(plateforme_id) -> Decimal:
    balance = (
        Plateforme.objects
        .filter(pk=plateforme_id)
        .values_list("balance", flat=True)
        .first()
    )
    if balance is None:
        raise NotFoundError("Plateforme not found")
    return balance


# ============================================================
# WRITES
# ============================================================

@transaction.atomic
def adjust_balance(
    plateforme_id,
    delta,
    *,
    reason: str,
    source_type: str,
    source_id=None,
    note: str = "",
    enforce_non_negative: bool | None = None,
) -> Decimal:
    """
    Apply balance += delta and journal it.

    enforce_non_negative:
    - True  -> a negative delta only applies if balance >= -delta
    - False -> unconditional
    - None  -> enforced for points platforms when PLATEFORMES_POINTS_NON_NEGATIVE
    """
    delta = _to_decimal(delta)

    if delta == 0:
        return get_balance(plateforme_id)

    qs = Plateforme.objects.filter(pk=plateforme_id)

    if enforce_non_negative is None:
        balance_type = qs.values_list("balance_type", flat=True).first()
        if balance_type is None:
            raise NotFoundError("Plateforme not found")
        enforce_non_negative = (
            balance_type == BalanceType.POINTS and _points_non_negative()
        )

    if enforce_non_negative and delta < 0:
        qs = qs.filter(balance__gte=-delta)

    updated = qs.update(balance=F("balance") + delta, updated_at=timezone.now())

    if not updated:
        plateforme = get_plateforme(plateforme_id)
        logger.warning(
            "Balance debit refused",
            extra={
                "plateforme_id": plateforme.pk,
                "balance": str(plateforme.balance),
                "delta": str(delta),
                "reason": reason,
            },
        )
        raise InsufficientBalanceError(
            available=plateforme.balance,
            required=-delta,
            unit=plateforme.balance_unit,
        )

    balance_after = get_balance(plateforme_id)

    BalanceMovement.objects.create(
        plateforme_id=plateforme_id,
        delta=delta,
        balance_after=balance_after,
        reason=reason,
        source_type=source_type,
        source_id=source_id,
        note=note or "",
    )

    logger.info(
        "Platform balance adjusted",
        extra={
            "plateforme_id": plateforme_id,
            "delta": str(delta),
            "balance_after": str(balance_after),
            "reason": reason,
            "source_type": source_type,
            "source_id": source_id,
        },
    )

    return balance_after


def debit_balance(plateforme_id, amount, *, reason, source_type, source_id=None, note="") -> Decimal:
    """
    Conditional atomic debit: applies only if balance >= amount.
    Zero rows affected -> InsufficientBalanceError.
    """
    amount = _to_decimal(amount)
    return adjust_balance(
        plateforme_id,
        -amount,
        reason=reason,
        source_type=source_type,
        source_id=source_id,
        note=note,
        enforce_non_negative=True,
    )


def credit_balance(plateforme_id, amount, *, reason, source_type, source_id=None, note="") -> Decimal:
    amount = _to_decimal(amount)
    return adjust_balance(
        plateforme_id,
        amount,
        reason=reason,
        source_type=source_type,
        source_id=source_id,
        note=note,
    )


# ============================================================
# AUDIT / RECONCILIATION
# ============================================================

def recompute_balance(plateforme: Plateforme) -> Decimal:
    """solde_initial + sum of journaled deltas."""
    total = (
        BalanceMovement.objects
        .filter(plateforme=plateforme)
        .aggregate(total=Coalesce(Sum("delta"), ZERO))
        .get("total")
    )
    return (plateforme.solde_initial or ZERO) + (total or ZERO)


def historical_balance(plateforme: Plateforme) -> Decimal:
    """
    solde_initial + paid recharges - sale purchase costs.

    Matches the ledger only while no sale was deleted with reversal
    and no manual adjustment was made.
    """
    Recharge = apps.get_model("recharges", "Recharge")
    Vente = apps.get_model("ventes", "Vente")

    paid = (
        Recharge.objects
        .filter(plateforme=plateforme, statut=Recharge.Statut.PAYE)
        .aggregate(total=Coalesce(Sum("montant"), ZERO))
        .get("total")
    )
    consumed = (
        Vente.objects
        .filter(plateforme=plateforme)
        .aggregate(total=Coalesce(Sum("purchase_cost"), ZERO))
        .get("total")
    )
    return (plateforme.solde_initial or ZERO) + (paid or ZERO) - (consumed or ZERO)


@transaction.atomic
def reconcile_plateforme(plateforme: Plateforme, *, fix: bool = False) -> dict:
    """
    Compare the materialised balance with the journal.

    With fix=True a drifted balance is reset to the journal value.
    """
    plateforme = lock_plateforme(plateforme.pk)

    ledger_value = recompute_balance(plateforme)
    drift = plateforme.balance - ledger_value

    report = {
        "plateforme_id": plateforme.pk,
        "nom": plateforme.nom,
        "balance": plateforme.balance,
        "ledger_balance": ledger_value,
        "historical_balance": historical_balance(plateforme),
        "drift": drift,
        "fixed": False,
    }

    if drift != 0:
        logger.warning(
            "Platform balance drift detected",
            extra={
                "plateforme_id": plateforme.pk,
                "balance": str(plateforme.balance),
                "ledger_balance": str(ledger_value),
                "drift": str(drift),
            },
        )
        if fix:
            Plateforme.objects.filter(pk=plateforme.pk).update(
                balance=ledger_value,
                updated_at=timezone.now(),
            )
            report["fixed"] = True

    return report
