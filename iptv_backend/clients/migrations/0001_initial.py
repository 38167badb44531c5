"""
======================================================
PATH: clients/migrations/0001_initial.py
======================================================
MIGRATION: CREATE Client
"""

from __future__ import annotations

from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Client",
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
                ("prenom", models.CharField(blank=True, default="", max_length=150)),
                ("telephone", models.CharField(max_length=32, unique=True)),
                ("email", models.EmailField(blank=True, max_length=254, null=True)),
                ("wilaya", models.CharField(max_length=100)),
                ("adresse", models.TextField(blank=True, default="")),
                ("facebook", models.CharField(blank=True, default="", max_length=255)),
                ("instagram", models.CharField(blank=True, default="", max_length=255)),
                ("notes", models.TextField(blank=True, default="")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["wilaya"], name="client_wilaya_idx"),
                    models.Index(fields=["nom", "prenom"], name="client_nom_prenom_idx"),
                ],
            },
        ),
    ]
