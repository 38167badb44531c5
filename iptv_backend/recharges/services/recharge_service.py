# recharges/services/recharge_service.py

"""
RECHARGE SERVICE (AUTHORITATIVE)

Keeps platform balances consistent with recharge payments.

RULES:
- Only PAYE recharges count in the balance
- create: PAYE -> +montant
- update (four-way rule, see compute_balance_adjustment):
    PAYE -> other         : -old_montant
    other -> PAYE         : +new_montant
    PAYE -> PAYE, changed : new_montant - old_montant
    otherwise             : 0
- delete: PAYE -> -montant

GUARANTEES:
- The recharge write and its balance adjustment are ONE transaction
- Balance changes go through the ledger (journaled, F() expressions)
- A refused adjustment (points platform going negative) rolls the write back
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from django.db import transaction

from core.exceptions import NotFoundError, ServiceValidationError
from plateformes.models import BalanceMovement, Plateforme
from plateformes.services.ledger import adjust_balance
from recharges.models import Recharge

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("montant", "statut", "date_recharge", "preuve_paiement", "notes")

_INVALID_STATUT = 'Invalid statut. Must be "En attente", "Payé", or "Annulé"'


@dataclass(frozen=True)
class RechargeResult:
    recharge: Recharge
    balance_adjustment: Decimal
    balance_after: Decimal | None


# ============================================================
# VALIDATION
# ============================================================

def _validate_montant(value) -> Decimal:
    try:
        montant = Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        raise ServiceValidationError("montant must be a valid number")
    if not montant.is_finite() or montant <= 0:
        raise ServiceValidationError("montant must be greater than 0")
    if montant.as_tuple().exponent < -2:
        raise ServiceValidationError("montant must have at most 2 decimal places")
    return montant


def _validate_statut(value) -> str:
    if value not in Recharge.Statut.values:
        raise ServiceValidationError(_INVALID_STATUT)
    return value


# ============================================================
# BALANCE RULE
# ============================================================

def compute_balance_adjustment(old_statut, old_montant, new_statut, new_montant) -> Decimal:
    """
    Signed balance change implied by moving a recharge
    from (old_statut, old_montant) to (new_statut, new_montant).
    """
    paye = Recharge.Statut.PAYE
    old_montant = Decimal(str(old_montant))
    new_montant = Decimal(str(new_montant))

    if old_statut == paye and new_statut != paye:
        return -old_montant
    if old_statut != paye and new_statut == paye:
        return new_montant
    if old_statut == paye and new_statut == paye:
        return new_montant - old_montant
    return Decimal("0.00")


def _adjustment_reason(old_statut, new_statut) -> str:
    paye = Recharge.Statut.PAYE
    if old_statut == paye and new_statut != paye:
        return BalanceMovement.Reason.RECHARGE_ANNULEE
    if old_statut != paye and new_statut == paye:
        return BalanceMovement.Reason.RECHARGE_PAYEE
    return BalanceMovement.Reason.RECHARGE_MODIFIEE


# ============================================================
# WRITES
# ============================================================

@transaction.atomic
def create_recharge(
    *,
    plateforme_id,
    montant,
    statut,
    date_recharge=None,
    preuve_paiement: str = "",
    notes: str = "",
) -> RechargeResult:
    if not Plateforme.objects.filter(pk=plateforme_id).exists():
        raise NotFoundError("Plateforme not found")

    montant = _validate_montant(montant)
    statut = _validate_statut(statut)

    fields = {
        "plateforme_id": plateforme_id,
        "montant": montant,
        "statut": statut,
        "preuve_paiement": preuve_paiement or "",
        "notes": notes or "",
    }
    if date_recharge is not None:
        fields["date_recharge"] = date_recharge

    recharge = Recharge.objects.create(**fields)

    balance_after = None
    adjustment = Decimal("0.00")
    if recharge.is_paid:
        adjustment = montant
        balance_after = adjust_balance(
            plateforme_id,
            montant,
            reason=BalanceMovement.Reason.RECHARGE_PAYEE,
            source_type=BalanceMovement.SourceType.RECHARGE,
            source_id=recharge.pk,
        )

    logger.info(
        "Recharge created",
        extra={
            "recharge_id": recharge.pk,
            "plateforme_id": plateforme_id,
            "montant": str(montant),
            "statut": statut,
        },
    )
    return RechargeResult(recharge=recharge, balance_adjustment=adjustment, balance_after=balance_after)


def _lock_recharge(recharge_id) -> Recharge:
    recharge = Recharge.objects.select_for_update().filter(pk=recharge_id).first()
    if recharge is None:
        raise NotFoundError("Recharge not found")
    return recharge


@transaction.atomic
def update_recharge(recharge_id, **changes) -> RechargeResult:
    """
    Apply the supplied fields (unknown keys are ignored) and mirror the
    statut/montant change in the platform balance.
    """
    recharge = _lock_recharge(recharge_id)

    changes = {k: v for k, v in changes.items() if k in UPDATABLE_FIELDS}
    if not changes:
        raise ServiceValidationError("No valid fields to update")

    if "montant" in changes:
        changes["montant"] = _validate_montant(changes["montant"])
    if "statut" in changes:
        changes["statut"] = _validate_statut(changes["statut"])

    old_statut, old_montant = recharge.statut, recharge.montant
    new_statut = changes.get("statut", old_statut)
    new_montant = changes.get("montant", old_montant)

    for field, value in changes.items():
        if field in ("preuve_paiement", "notes") and value is None:
            value = ""
        setattr(recharge, field, value)
    recharge.save(update_fields=[*changes.keys(), "updated_at"])

    adjustment = compute_balance_adjustment(old_statut, old_montant, new_statut, new_montant)

    balance_after = None
    if adjustment != 0:
        balance_after = adjust_balance(
            recharge.plateforme_id,
            adjustment,
            reason=_adjustment_reason(old_statut, new_statut),
            source_type=BalanceMovement.SourceType.RECHARGE,
            source_id=recharge.pk,
        )

    logger.info(
        "Recharge updated",
        extra={
            "recharge_id": recharge.pk,
            "old_statut": old_statut,
            "new_statut": new_statut,
            "balance_adjustment": str(adjustment),
        },
    )
    return RechargeResult(recharge=recharge, balance_adjustment=adjustment, balance_after=balance_after)


@transaction.atomic
def delete_recharge(recharge_id) -> RechargeResult:
    recharge = _lock_recharge(recharge_id)

    plateforme_id = recharge.plateforme_id
    source_id = recharge.pk
    was_paid = recharge.is_paid
    montant = recharge.montant

    recharge.delete()

    adjustment = Decimal("0.00")
    balance_after = None
    if was_paid:
        adjustment = -montant
        balance_after = adjust_balance(
            plateforme_id,
            adjustment,
            reason=BalanceMovement.Reason.RECHARGE_SUPPRIMEE,
            source_type=BalanceMovement.SourceType.RECHARGE,
            source_id=source_id,
        )

    logger.info(
        "Recharge deleted",
        extra={
            "recharge_id": source_id,
            "plateforme_id": plateforme_id,
            "balance_adjustment": str(adjustment),
        },
    )
    return RechargeResult(recharge=recharge, balance_adjustment=adjustment, balance_after=balance_after)
