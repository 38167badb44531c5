"""
======================================================
PATH: produits/migrations/0001_initial.py
======================================================
MIGRATION: CREATE Produit
"""

from __future__ import annotations

from decimal import Decimal

from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("plateformes", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Produit",
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
                ("nom", models.CharField(max_length=150)),
                ("description", models.TextField(blank=True, default="")),
                (
                    "categorie",
                    models.CharField(
                        choices=[("IPTV", "IPTV"), ("Netflix", "Netflix"), ("Autre", "Autre")],
                        default="IPTV",
                        max_length=16,
                    ),
                ),
                ("duree_mois", models.PositiveIntegerField()),
                ("duration_weeks", models.PositiveIntegerField(blank=True, null=True)),
                ("is_multi_panel", models.BooleanField(default=False)),
                ("stock_actuel", models.PositiveIntegerField(default=0)),
                ("seuil_alerte", models.PositiveIntegerField(default=5)),
                (
                    "prix_achat_moyen",
                    models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14),
                ),
                (
                    "marge",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        help_text="Margin in percent.",
                        max_digits=7,
                    ),
                ),
                (
                    "prix_vente_calcule",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        editable=False,
                        max_digits=14,
                    ),
                ),
                (
                    "cost_type",
                    models.CharField(
                        choices=[("currency", "Currency"), ("points", "Points")],
                        default="currency",
                        max_length=10,
                    ),
                ),
                (
                    "default_cost",
                    models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "plateforme",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="produits",
                        to="plateformes.plateforme",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(
                        fields=["plateforme", "categorie"],
                        name="produit_plat_categorie_idx",
                    ),
                    models.Index(fields=["nom"], name="produit_nom_idx"),
                ],
            },
        ),
    ]
