# plateformes/tests/test_api.py

from __future__ import annotations

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient

from clients.models import Client
from plateformes.models import BalanceMovement, Plateforme
from plateformes.services.ledger import reconcile_plateforme
from produits.models import Produit
from ventes.models import Vente
from ventes.services.vente_service import create_vente

User = get_user_model()


class PlateformeApiTests(TestCase):
    """
    /api/plateformes endpoints.

    GUARANTEES:
    - Envelope on every answer
    - balance is never writable through CRUD
    - manual adjustments are journaled
    - delete is blocked while produits/recharges/ventes exist
    """

    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(username="staff", password="pass")
        self.client.force_authenticate(self.user)

        self.plateforme = Plateforme.objects.create(
            nom="Panel Alpha",
            solde_initial=Decimal("1000.00"),
        )

    def _detail(self, pk):
        return reverse("plateformes-detail", args=[pk])

    # --------------------------------------------------
    # Auth
    # --------------------------------------------------

    def test_anonymous_is_rejected(self):
        anon = APIClient()
        res = anon.get(reverse("plateformes-list"))
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertFalse(res.data["success"])

    # --------------------------------------------------
    # CRUD
    # --------------------------------------------------

    def test_create_seeds_balance_from_opening_balance(self):
        res = self.client.post(
            reverse("plateformes-list"),
            {"nom": "Panel Beta", "solde_initial": "250.00"},
            format="json",
        )
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertTrue(res.data["success"])
        self.assertEqual(res.data["data"]["balance"], "250.00")
        self.assertEqual(res.data["data"]["balance_unit"], "DZD")
        self.assertEqual(res.data["data"]["nb_produits"], 0)

    def test_create_points_platform_defaults_unit(self):
        res = self.client.post(
            reverse("plateformes-list"),
            {"nom": "Panel Points", "solde_initial": "40", "balance_type": "points"},
            format="json",
        )
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["data"]["balance_unit"], "pts")

    def test_create_requires_opening_balance(self):
        res = self.client.post(reverse("plateformes-list"), {"nom": "X"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(res.data["success"])

    def test_duplicate_name_is_conflict(self):
        res = self.client.post(
            reverse("plateformes-list"),
            {"nom": "panel alpha", "solde_initial": "0"},
            format="json",
        )
        self.assertEqual(res.status_code, status.HTTP_409_CONFLICT)

    def test_update_ignores_balance(self):
        res = self.client.put(
            self._detail(self.plateforme.pk),
            {"description": "main panel", "balance": "99999.00"},
            format="json",
        )
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["data"]["description"], "main panel")
        self.assertEqual(res.data["data"]["balance"], "1000.00")

    def test_balance_type_is_fixed_after_creation(self):
        res = self.client.put(
            self._detail(self.plateforme.pk),
            {"balance_type": "points"},
            format="json",
        )
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_retrieve_unknown(self):
        res = self.client.get(self._detail(999999))
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(res.data["error"], "Plateforme not found")

    def test_list_is_paginated(self):
        res = self.client.get(reverse("plateformes-list"), {"limit": 1})
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        pagination = res.data["data"]["pagination"]
        self.assertEqual(pagination["total"], 1)
        self.assertEqual(pagination["limit"], 1)
        self.assertEqual(pagination["pages"], 1)
        self.assertEqual(len(res.data["data"]["items"]), 1)

    def test_search_filter(self):
        Plateforme.objects.create(nom="Other", solde_initial=Decimal("0"))
        res = self.client.get(reverse("plateformes-list"), {"search": "alpha"})
        names = [row["nom"] for row in res.data["data"]["items"]]
        self.assertEqual(names, ["Panel Alpha"])

    def test_delete_blocked_by_produit(self):
        Produit.objects.create(
            plateforme=self.plateforme,
            nom="IPTV 12 mois",
            duree_mois=12,
        )
        res = self.client.delete(self._detail(self.plateforme.pk))
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(
            res.data["error"],
            "Cannot delete plateforme with existing recharges or produits",
        )

    def test_delete_blocked_by_sale_debiting_another_panel(self):
        other = Plateforme.objects.create(nom="Panel Beta", solde_initial=Decimal("0.00"))
        produit = Produit.objects.create(
            plateforme=other, nom="IPTV 12 mois", duree_mois=12, stock_actuel=5
        )
        customer = Client.objects.create(nom="Benali", telephone="0550000001", wilaya="Alger")
        create_vente(
            client_id=customer.pk,
            produit_id=produit.pk,
            plateforme_id=self.plateforme.pk,
            quantite=1,
            prix_unitaire=Decimal("2500.00"),
            purchase_cost=Decimal("300.00"),
            methode_paiement=Vente.MethodePaiement.ESPECE,
            statut_paiement=Vente.StatutPaiement.PAYE,
            date_vente=timezone.now(),
        )
        movements = BalanceMovement.objects.filter(plateforme=self.plateforme).count()

        res = self.client.delete(self._detail(self.plateforme.pk))
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(
            res.data,
            {"success": False, "error": "Cannot delete plateforme with existing ventes"},
        )

        self.plateforme.refresh_from_db()
        self.assertEqual(self.plateforme.balance, Decimal("700.00"))
        self.assertEqual(
            BalanceMovement.objects.filter(plateforme=self.plateforme).count(), movements
        )
        self.assertEqual(reconcile_plateforme(self.plateforme)["drift"], Decimal("0.00"))

    def test_delete_removes_platform_and_journal(self):
        self.client.post(
            reverse("plateformes-ajustement", args=[self.plateforme.pk]),
            {"delta": "5.00"},
            format="json",
        )
        res = self.client.delete(self._detail(self.plateforme.pk))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertFalse(Plateforme.objects.filter(pk=self.plateforme.pk).exists())
        self.assertEqual(BalanceMovement.objects.count(), 0)

    # --------------------------------------------------
    # Ledger endpoints
    # --------------------------------------------------

    def test_manual_adjustment_is_journaled(self):
        res = self.client.post(
            reverse("plateformes-ajustement", args=[self.plateforme.pk]),
            {"delta": "-150.00", "note": "correction"},
            format="json",
        )
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["data"]["balance"], "850.00")

        res = self.client.get(reverse("plateformes-mouvements", args=[self.plateforme.pk]))
        items = res.data["data"]["items"]
        self.assertEqual(len(items), 1)
        self.assertEqual(items[0]["delta"], "-150.00")
        self.assertEqual(items[0]["reason"], BalanceMovement.Reason.AJUSTEMENT)
        self.assertEqual(items[0]["note"], "correction")

    def test_zero_adjustment_is_rejected(self):
        res = self.client.post(
            reverse("plateformes-ajustement", args=[self.plateforme.pk]),
            {"delta": "0"},
            format="json",
        )
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_reconciliation_report(self):
        res = self.client.get(reverse("plateformes-reconciliation", args=[self.plateforme.pk]))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["data"]["drift"], "0.00")
        self.assertEqual(res.data["data"]["ledger_balance"], "1000.00")
