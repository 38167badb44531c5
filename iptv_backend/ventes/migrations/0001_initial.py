"""
======================================================
PATH: ventes/migrations/0001_initial.py
======================================================
MIGRATION: CREATE Vente
"""

from __future__ import annotations

from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("clients", "0001_initial"),
        ("plateformes", "0001_initial"),
        ("produits", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Vente",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("quantite", models.PositiveIntegerField()),
                ("prix_unitaire", models.DecimalField(decimal_places=2, max_digits=14)),
                ("total", models.DecimalField(decimal_places=2, editable=False, max_digits=14)),
                ("date_vente", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "methode_paiement",
                    models.CharField(
                        choices=[
                            ("Espèce", "Espèce"),
                            ("CCP", "CCP"),
                            ("BaridiMob", "BaridiMob"),
                            ("Autre", "Autre"),
                        ],
                        max_length=16,
                    ),
                ),
                (
                    "statut_paiement",
                    models.CharField(
                        choices=[("Payé", "Payé"), ("En attente", "En attente")],
                        max_length=16,
                    ),
                ),
                ("notes", models.TextField(blank=True, default="")),
                ("purchase_cost", models.DecimalField(decimal_places=2, max_digits=14)),
                (
                    "cost_type_vente",
                    models.CharField(
                        choices=[("currency", "Currency"), ("points", "Points")],
                        default="currency",
                        max_length=10,
                    ),
                ),
                (
                    "panel_balance_before",
                    models.DecimalField(decimal_places=2, editable=False, max_digits=14),
                ),
                (
                    "panel_balance_after",
                    models.DecimalField(decimal_places=2, editable=False, max_digits=14),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "client",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="ventes",
                        to="clients.client",
                    ),
                ),
                (
                    "plateforme",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="ventes",
                        to="plateformes.plateforme",
                    ),
                ),
                (
                    "produit",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="ventes",
                        to="produits.produit",
                    ),
                ),
            ],
            options={
                "ordering": ["-date_vente", "-id"],
                "indexes": [
                    models.Index(fields=["date_vente"], name="vente_date_idx"),
                    models.Index(fields=["plateforme", "date_vente"], name="vente_plat_date_idx"),
                    models.Index(fields=["statut_paiement"], name="vente_statut_idx"),
                ],
            },
        ),
    ]
