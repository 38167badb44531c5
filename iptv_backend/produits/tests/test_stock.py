# produits/tests/test_stock.py

from decimal import Decimal

from django.test import TestCase

from core.exceptions import InsufficientStockError, NotFoundError, ServiceValidationError
from plateformes.models import Plateforme
from produits.models import Produit
from produits.services.stock import decrement_stock, restore_stock


class ProduitStockTests(TestCase):
    """
    Stock service tests.

    GUARANTEES:
    - stock_actuel never goes below zero
    - a refused decrement writes nothing
    """

    def setUp(self):
        self.plateforme = Plateforme.objects.create(nom="Panel", solde_initial=Decimal("0"))
        self.produit = Produit.objects.create(
            plateforme=self.plateforme,
            nom="IPTV 12 mois",
            duree_mois=12,
            stock_actuel=3,
        )

    def _stock(self):
        self.produit.refresh_from_db()
        return self.produit.stock_actuel

    def test_decrement_within_stock(self):
        remaining = decrement_stock(self.produit.pk, 2)
        self.assertEqual(remaining, 1)
        self.assertEqual(self._stock(), 1)

    def test_decrement_to_exactly_zero(self):
        self.assertEqual(decrement_stock(self.produit.pk, 3), 0)

    def test_oversell_is_refused(self):
        with self.assertRaises(InsufficientStockError) as ctx:
            decrement_stock(self.produit.pk, 5)

        self.assertEqual(ctx.exception.available, 3)
        self.assertEqual(ctx.exception.requested, 5)
        self.assertEqual(str(ctx.exception), "Insufficient stock. Available: 3, Requested: 5")
        self.assertEqual(self._stock(), 3)

    def test_non_positive_quantity_is_refused(self):
        with self.assertRaises(ServiceValidationError):
            decrement_stock(self.produit.pk, 0)

    def test_unknown_product(self):
        with self.assertRaises(NotFoundError):
            decrement_stock(999999, 1)

    def test_restore_adds_back(self):
        decrement_stock(self.produit.pk, 2)
        self.assertEqual(restore_stock(self.produit.pk, 2), 3)


class ProduitModelTests(TestCase):
    def setUp(self):
        self.plateforme = Plateforme.objects.create(nom="Panel", solde_initial=Decimal("0"))

    def test_selling_price_is_derived_from_cost_and_margin(self):
        produit = Produit.objects.create(
            plateforme=self.plateforme,
            nom="Netflix 1 mois",
            categorie="Netflix",
            duree_mois=1,
            prix_achat_moyen=Decimal("1000.00"),
            marge=Decimal("12.50"),
        )
        self.assertEqual(produit.prix_vente_calcule, Decimal("1125.00"))

        produit.marge = Decimal("33.33")
        produit.save()
        produit.refresh_from_db()
        self.assertEqual(produit.prix_vente_calcule, Decimal("1333.30"))

    def test_price_rounds_half_up(self):
        produit = Produit.objects.create(
            plateforme=self.plateforme,
            nom="Rounding",
            duree_mois=1,
            prix_achat_moyen=Decimal("0.10"),
            marge=Decimal("5.00"),
        )
        # 0.105 -> 0.11
        self.assertEqual(produit.prix_vente_calcule, Decimal("0.11"))

    def test_duration_weeks_defaults_from_months(self):
        produit = Produit.objects.create(plateforme=self.plateforme, nom="IPTV", duree_mois=3)
        self.assertEqual(produit.duration_weeks, 12)

    def test_low_stock_flag(self):
        produit = Produit.objects.create(
            plateforme=self.plateforme,
            nom="IPTV",
            duree_mois=1,
            stock_actuel=5,
            seuil_alerte=5,
        )
        self.assertTrue(produit.stock_faible)
