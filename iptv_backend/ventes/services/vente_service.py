# ventes/services/vente_service.py

"""
SALE SERVICE (AUTHORITATIVE)

PURPOSE:
- Record a sale, take the units out of stock and debit the purchase
  cost from the platform balance, as ONE transaction

CREATE SEQUENCE:
1) validate values (quantite, prix_unitaire, purchase_cost, enums)
2) resolve Client -> Produit -> Plateforme (404 in that order)
3) lock Plateforme row, then Produit row (select_for_update)
4) stock_actuel >= quantite         else InsufficientStockError
5) balance >= purchase_cost         else InsufficientBalanceError
6) persist the sale with the balance snapshot
7) conditional stock decrement      (produits.services.stock)
8) conditional balance debit        (plateformes.services.ledger)

RULES:
- update only touches descriptive fields; stock and balance never move
- delete leaves stock and balance alone unless the reversal policy is on
  (VENTES_REVERSE_ON_DELETE or reverse=True), in which case the
  purchase cost is credited back and the units return to stock
- lock order is always Plateforme before Produit
"""

from __future__ import annotations

import logging
from collections import defaultdict
from decimal import Decimal, InvalidOperation

from django.conf import settings
from django.db import transaction

from clients.models import Client
from core.exceptions import (
    InsufficientBalanceError,
    InsufficientStockError,
    NotFoundError,
    ServiceValidationError,
)
from plateformes.models import BalanceMovement, Plateforme
from plateformes.services.ledger import credit_balance, debit_balance, lock_plateforme
from produits.models import CostType, Produit
from produits.services.stock import decrement_stock, lock_produit, restore_stock
from ventes.models import Vente

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = (
    "quantite",
    "prix_unitaire",
    "date_vente",
    "methode_paiement",
    "statut_paiement",
    "notes",
)

_INVALID_METHODE = 'Invalid methode_paiement. Must be "Espèce", "CCP", "BaridiMob", or "Autre"'
_INVALID_STATUT = 'Invalid statut_paiement. Must be "Payé" or "En attente"'
_INVALID_COST_TYPE = 'Invalid cost_type_vente. Must be "currency" or "points"'


# ============================================================
# VALIDATION
# ============================================================

def _positive_int(name: str, value) -> int:
    if isinstance(value, bool):
        raise ServiceValidationError(f"{name} must be an integer")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ServiceValidationError(f"{name} must be an integer")
    if number <= 0:
        raise ServiceValidationError(f"{name} must be greater than 0")
    return number


def _positive_decimal(name: str, value) -> Decimal:
    try:
        number = Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        raise ServiceValidationError(f"{name} must be a valid number")
    if not number.is_finite() or number <= 0:
        raise ServiceValidationError(f"{name} must be greater than 0")
    if number.as_tuple().exponent < -2:
        raise ServiceValidationError(f"{name} must have at most 2 decimal places")
    return number


def _choice(value, choices, message: str) -> str:
    if value not in choices:
        raise ServiceValidationError(message)
    return value


def _reverse_on_delete(reverse) -> bool:
    if reverse is None:
        return bool(getattr(settings, "VENTES_REVERSE_ON_DELETE", False))
    return bool(reverse)


def _with_relations(vente_id) -> Vente:
    return Vente.objects.select_related("client", "produit", "plateforme").get(pk=vente_id)


# ============================================================
# CREATE
# ============================================================

@transaction.atomic
def create_vente(
    *,
    client_id,
    produit_id,
    plateforme_id,
    quantite,
    prix_unitaire,
    purchase_cost,
    methode_paiement,
    statut_paiement,
    date_vente=None,
    notes: str = "",
    cost_type_vente: str = CostType.CURRENCY,
) -> Vente:
    quantite = _positive_int("quantite", quantite)
    prix_unitaire = _positive_decimal("prix_unitaire", prix_unitaire)
    purchase_cost = _positive_decimal("purchase_cost", purchase_cost)
    methode_paiement = _choice(methode_paiement, Vente.MethodePaiement.values, _INVALID_METHODE)
    statut_paiement = _choice(statut_paiement, Vente.StatutPaiement.values, _INVALID_STATUT)
    cost_type_vente = _choice(
        cost_type_vente or CostType.CURRENCY, CostType.values, _INVALID_COST_TYPE
    )

    if not Client.objects.filter(pk=client_id).exists():
        raise NotFoundError("Client not found")
    if not Produit.objects.filter(pk=produit_id).exists():
        raise NotFoundError("Produit not found")
    if not Plateforme.objects.filter(pk=plateforme_id).exists():
        raise NotFoundError("Plateforme not found")

    plateforme = lock_plateforme(plateforme_id)
    produit = lock_produit(produit_id)

    if produit.stock_actuel < quantite:
        raise InsufficientStockError(available=produit.stock_actuel, requested=quantite)

    if plateforme.balance < purchase_cost:
        raise InsufficientBalanceError(
            available=plateforme.balance,
            required=purchase_cost,
            unit=plateforme.balance_unit,
        )

    balance_before = plateforme.balance
    balance_after = balance_before - purchase_cost

    fields = {
        "client_id": client_id,
        "produit_id": produit.pk,
        "plateforme_id": plateforme.pk,
        "quantite": quantite,
        "prix_unitaire": prix_unitaire,
        "methode_paiement": methode_paiement,
        "statut_paiement": statut_paiement,
        "notes": notes or "",
        "purchase_cost": purchase_cost,
        "cost_type_vente": cost_type_vente,
        "panel_balance_before": balance_before,
        "panel_balance_after": balance_after,
    }
    if date_vente is not None:
        fields["date_vente"] = date_vente

    vente = Vente.objects.create(**fields)

    decrement_stock(produit.pk, quantite)
    debit_balance(
        plateforme.pk,
        purchase_cost,
        reason=BalanceMovement.Reason.VENTE,
        source_type=BalanceMovement.SourceType.VENTE,
        source_id=vente.pk,
    )

    logger.info(
        "Sale recorded",
        extra={
            "vente_id": vente.pk,
            "client_id": client_id,
            "produit_id": produit.pk,
            "plateforme_id": plateforme.pk,
            "quantite": quantite,
            "total": str(vente.total),
            "purchase_cost": str(purchase_cost),
            "panel_balance_after": str(balance_after),
        },
    )

    return _with_relations(vente.pk)


# ============================================================
# UPDATE
# ============================================================

def _lock_vente(vente_id) -> Vente:
    vente = Vente.objects.select_for_update().filter(pk=vente_id).first()
    if vente is None:
        raise NotFoundError("Vente not found")
    return vente


@transaction.atomic
def update_vente(vente_id, **changes) -> Vente:
    """
    Descriptive update only. Unknown keys are ignored; total is recomputed.
    """
    vente = _lock_vente(vente_id)

    changes = {k: v for k, v in changes.items() if k in UPDATABLE_FIELDS}
    if not changes:
        raise ServiceValidationError("No valid fields to update")

    if "quantite" in changes:
        changes["quantite"] = _positive_int("quantite", changes["quantite"])
    if "prix_unitaire" in changes:
        changes["prix_unitaire"] = _positive_decimal("prix_unitaire", changes["prix_unitaire"])
    if "methode_paiement" in changes:
        _choice(changes["methode_paiement"], Vente.MethodePaiement.values, _INVALID_METHODE)
    if "statut_paiement" in changes:
        _choice(changes["statut_paiement"], Vente.StatutPaiement.values, _INVALID_STATUT)
    if "notes" in changes and changes["notes"] is None:
        changes["notes"] = ""

    for field, value in changes.items():
        setattr(vente, field, value)
    vente.save(update_fields=list(changes.keys()))

    logger.info(
        "Sale updated",
        extra={"vente_id": vente.pk, "fields": sorted(changes.keys())},
    )
    return _with_relations(vente.pk)


# ============================================================
# DELETE
# ============================================================

def _refund_vente(vente: Vente) -> None:
    credit_balance(
        vente.plateforme_id,
        vente.purchase_cost,
        reason=BalanceMovement.Reason.VENTE_ANNULEE,
        source_type=BalanceMovement.SourceType.VENTE,
        source_id=vente.pk,
    )


def _reverse_vente(vente: Vente) -> None:
    # Plateforme before Produit, same order as create_vente.
    _refund_vente(vente)
    restore_stock(vente.produit_id, vente.quantite)


@transaction.atomic
def delete_vente(vente_id, *, reverse: bool | None = None) -> None:
    vente = _lock_vente(vente_id)
    reverse = _reverse_on_delete(reverse)

    if reverse:
        _reverse_vente(vente)

    vente_pk = vente.pk
    vente.delete()

    logger.info("Sale deleted", extra={"vente_id": vente_pk, "reversed": reverse})


@transaction.atomic
def bulk_delete_ventes(*, reverse: bool | None = None) -> int:
    """
    Delete every sale. Returns the number of rows removed.
    """
    reverse = _reverse_on_delete(reverse)

    if reverse:
        ventes = list(Vente.objects.select_for_update().order_by("id"))

        # Every Plateforme row, then every Produit row, each in id order.
        for vente in sorted(ventes, key=lambda v: (v.plateforme_id, v.pk)):
            _refund_vente(vente)

        restock = defaultdict(int)
        for vente in ventes:
            restock[vente.produit_id] += vente.quantite
        for produit_id in sorted(restock):
            restore_stock(produit_id, restock[produit_id])

        deleted = len(ventes)
        Vente.objects.filter(pk__in=[v.pk for v in ventes]).delete()
    else:
        deleted, _ = Vente.objects.all().delete()

    logger.warning("Sales bulk deleted", extra={"deleted": deleted, "reversed": reverse})
    return deleted
