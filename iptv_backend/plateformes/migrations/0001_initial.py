"""
======================================================
PATH: plateformes/migrations/0001_initial.py
======================================================
MIGRATION: CREATE Plateforme + BalanceMovement

Purpose:
- Upstream panels with a materialised balance
- Append-only balance journal (one row per signed change)
"""

from __future__ import annotations

from decimal import Decimal

from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Plateforme",
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
                ("nom", models.CharField(max_length=150, unique=True)),
                ("description", models.TextField(blank=True, default="")),
                ("url", models.CharField(blank=True, default="", max_length=255)),
                (
                    "solde_initial",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        help_text="Opening balance at creation.",
                        max_digits=14,
                    ),
                ),
                (
                    "balance",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        help_text="Current credit. Mutated only through the balance ledger.",
                        max_digits=14,
                    ),
                ),
                (
                    "balance_type",
                    models.CharField(
                        choices=[("currency", "Currency"), ("points", "Points")],
                        default="currency",
                        max_length=10,
                    ),
                ),
                ("balance_unit", models.CharField(default="DZD", max_length=20)),
                (
                    "point_conversion_rate",
                    models.DecimalField(
                        blank=True,
                        decimal_places=4,
                        max_digits=12,
                        null=True,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["nom"], name="plateforme_nom_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="BalanceMovement",
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
                ("delta", models.DecimalField(decimal_places=2, max_digits=14)),
                ("balance_after", models.DecimalField(decimal_places=2, max_digits=14)),
                (
                    "reason",
                    models.CharField(
                        choices=[
                            ("RECHARGE_PAYEE", "Recharge payée"),
                            ("RECHARGE_ANNULEE", "Recharge sortie du statut payé"),
                            ("RECHARGE_MODIFIEE", "Montant de recharge modifié"),
                            ("RECHARGE_SUPPRIMEE", "Recharge payée supprimée"),
                            ("VENTE", "Vente"),
                            ("VENTE_ANNULEE", "Vente supprimée (reversement)"),
                            ("AJUSTEMENT", "Ajustement manuel"),
                        ],
                        max_length=32,
                    ),
                ),
                (
                    "source_type",
                    models.CharField(
                        choices=[
                            ("RECHARGE", "Recharge"),
                            ("VENTE", "Vente"),
                            ("MANUEL", "Manuel"),
                        ],
                        max_length=16,
                    ),
                ),
                ("source_id", models.PositiveBigIntegerField(blank=True, null=True)),
                ("note", models.CharField(blank=True, default="", max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "plateforme",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="mouvements",
                        to="plateformes.plateforme",
                    ),
                ),
            ],
            options={
                "ordering": ["created_at", "id"],
                "indexes": [
                    models.Index(
                        fields=["plateforme", "created_at"],
                        name="mouvement_plat_created_idx",
                    ),
                    models.Index(
                        fields=["source_type", "source_id"],
                        name="mouvement_source_idx",
                    ),
                ],
            },
        ),
    ]
