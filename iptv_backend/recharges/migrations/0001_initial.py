"""
======================================================
PATH: recharges/migrations/0001_initial.py
======================================================
MIGRATION: CREATE Recharge
"""

from __future__ import annotations

from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("plateformes", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Recharge",
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
                ("montant", models.DecimalField(decimal_places=2, max_digits=14)),
                ("devise", models.CharField(default="DZD", editable=False, max_length=8)),
                (
                    "statut",
                    models.CharField(
                        choices=[
                            ("En attente", "En attente"),
                            ("Payé", "Payé"),
                            ("Annulé", "Annulé"),
                        ],
                        default="En attente",
                        max_length=16,
                    ),
                ),
                ("date_recharge", models.DateTimeField(default=django.utils.timezone.now)),
                ("preuve_paiement", models.CharField(blank=True, default="", max_length=500)),
                ("notes", models.TextField(blank=True, default="")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "plateforme",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="recharges",
                        to="plateformes.plateforme",
                    ),
                ),
            ],
            options={
                "ordering": ["-date_recharge", "-id"],
                "indexes": [
                    models.Index(fields=["plateforme", "statut"], name="recharge_plat_statut_idx"),
                    models.Index(fields=["date_recharge"], name="recharge_date_idx"),
                ],
            },
        ),
    ]
