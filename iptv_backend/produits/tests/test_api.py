# produits/tests/test_api.py

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from plateformes.models import Plateforme
from produits.models import Produit

User = get_user_model()


class ProduitApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.client.force_authenticate(User.objects.create_user(username="staff", password="pass"))

        self.plateforme = Plateforme.objects.create(nom="Panel", solde_initial=Decimal("0"))
        self.payload = {
            "id_plateforme": self.plateforme.pk,
            "nom": "IPTV 12 mois",
            "categorie": "IPTV",
            "duree_mois": 12,
            "prix_achat_moyen": "2000.00",
            "marge": "25",
            "stock_actuel": 10,
        }

    def test_create_applies_defaults(self):
        res = self.client.post(reverse("produits-list"), self.payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)

        data = res.data["data"]
        self.assertEqual(data["prix_vente_calcule"], "2500.00")
        self.assertEqual(data["default_cost"], "2000.00")
        self.assertEqual(data["duration_weeks"], 48)
        self.assertEqual(data["cost_type"], "currency")
        self.assertEqual(data["plateforme_nom"], "Panel")
        self.assertEqual(data["total_ventes"], 0)
        self.assertEqual(res.data["message"], "Produit created successfully")

    def test_create_with_unknown_platform(self):
        self.payload["id_plateforme"] = 999999
        res = self.client.post(reverse("produits-list"), self.payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(res.data["error"], "Plateforme not found")

    def test_create_with_invalid_categorie(self):
        self.payload["categorie"] = "Spotify"
        res = self.client.post(reverse("produits-list"), self.payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("Invalid categorie", res.data["error"])

    def test_create_with_zero_duration(self):
        self.payload["duree_mois"] = 0
        res = self.client.post(reverse("produits-list"), self.payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("duree_mois must be greater than 0", res.data["error"])

    def test_missing_required_fields(self):
        res = self.client.post(reverse("produits-list"), {"nom": "X"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertTrue(res.data["error"].startswith("Missing required fields"))

    def test_update_recomputes_price(self):
        produit = Produit.objects.create(
            plateforme=self.plateforme,
            nom="IPTV",
            duree_mois=1,
            prix_achat_moyen=Decimal("100.00"),
            marge=Decimal("10"),
        )
        res = self.client.put(
            reverse("produits-detail", args=[produit.pk]),
            {"marge": "50"},
            format="json",
        )
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["data"]["prix_vente_calcule"], "150.00")

    def test_stock_status_filter(self):
        Produit.objects.create(plateforme=self.plateforme, nom="Empty", duree_mois=1, stock_actuel=0)
        Produit.objects.create(
            plateforme=self.plateforme, nom="Low", duree_mois=1, stock_actuel=2, seuil_alerte=5
        )
        Produit.objects.create(
            plateforme=self.plateforme, nom="Plenty", duree_mois=1, stock_actuel=50, seuil_alerte=5
        )

        def names(stock_status):
            res = self.client.get(reverse("produits-list"), {"stock_status": stock_status})
            return [row["nom"] for row in res.data["data"]["items"]]

        self.assertEqual(names("out_of_stock"), ["Empty"])
        self.assertEqual(names("low_stock"), ["Low"])
        self.assertEqual(names("in_stock"), ["Plenty"])

    def test_delete_unknown(self):
        res = self.client.delete(reverse("produits-detail", args=[424242]))
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(res.data["error"], "Produit not found")

    def test_delete_without_sales(self):
        produit = Produit.objects.create(plateforme=self.plateforme, nom="IPTV", duree_mois=1)
        res = self.client.delete(reverse("produits-detail", args=[produit.pk]))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertFalse(Produit.objects.filter(pk=produit.pk).exists())
