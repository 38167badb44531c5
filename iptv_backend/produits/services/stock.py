# produits/services/stock.py

"""
PRODUCT STOCK SERVICE

SINGLE WRITE PATH for Produit.stock_actuel from sales.

Rules:
- decrement is a conditional update (WHERE stock_actuel >= quantite);
  zero rows affected -> InsufficientStockError, nothing written
- restore adds the quantity back (sale reversal)
- both join the caller's transaction
"""

from __future__ import annotations

import logging

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from core.exceptions import InsufficientStockError, NotFoundError, ServiceValidationError
from produits.models import Produit

logger = logging.getLogger(__name__)


def _to_quantity(value) -> int:
    if isinstance(value, bool):
        raise ServiceValidationError("quantite must be an integer")
    try:
        quantite = int(value)
    except (TypeError, ValueError):
        raise ServiceValidationError("quantite must be an integer")
    if quantite <= 0:
        raise ServiceValidationError("quantite must be greater than 0")
    return quantite


def get_produit(produit_id) -> Produit:
    produit = Produit.objects.select_related("plateforme").filter(pk=produit_id).first()
    if produit is None:
        raise NotFoundError("Produit not found")
    return produit


def lock_produit(produit_id) -> Produit:
    produit = Produit.objects.select_for_update().filter(pk=produit_id).first()
    if produit is None:
        raise NotFoundError("Produit not found")
    return produit


@transaction.atomic
def decrement_stock(produit_id, quantite) -> int:
    """
    stock_actuel -= quantite, only if enough stock remains.
    Returns the new stock level.
    """
    quantite = _to_quantity(quantite)

    updated = (
        Produit.objects
        .filter(pk=produit_id, stock_actuel__gte=quantite)
        .update(stock_actuel=F("stock_actuel") - quantite, updated_at=timezone.now())
    )

    if not updated:
        available = (
            Produit.objects.filter(pk=produit_id).values_list("stock_actuel", flat=True).first()
        )
        if available is None:
            raise NotFoundError("Produit not found")
        logger.warning(
            "Stock decrement refused",
            extra={"produit_id": produit_id, "available": available, "requested": quantite},
        )
        raise InsufficientStockError(available=available, requested=quantite)

    remaining = Produit.objects.filter(pk=produit_id).values_list("stock_actuel", flat=True).get()

    logger.info(
        "Stock decremented",
        extra={"produit_id": produit_id, "quantite": quantite, "stock_actuel": remaining},
    )
    return remaining


@transaction.atomic
def restore_stock(produit_id, quantite) -> int:
    quantite = _to_quantity(quantite)

    updated = (
        Produit.objects
        .filter(pk=produit_id)
        .update(stock_actuel=F("stock_actuel") + quantite, updated_at=timezone.now())
    )
    if not updated:
        raise NotFoundError("Produit not found")

    remaining = Produit.objects.filter(pk=produit_id).values_list("stock_actuel", flat=True).get()

    logger.info(
        "Stock restored",
        extra={"produit_id": produit_id, "quantite": quantite, "stock_actuel": remaining},
    )
    return remaining
