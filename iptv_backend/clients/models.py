# clients/models.py

from django.db import models


class Client(models.Model):
    """
    End customer of the reseller. `telephone` identifies the client.
    """

    nom = models.CharField(max_length=150)
    prenom = models.CharField(max_length=150, blank=True, default="")
    telephone = models.CharField(max_length=32, unique=True)
    email = models.EmailField(max_length=254, null=True, blank=True)
    wilaya = models.CharField(max_length=100)
    adresse = models.TextField(blank=True, default="")
    facebook = models.CharField(max_length=255, blank=True, default="")
    instagram = models.CharField(max_length=255, blank=True, default="")
    notes = models.TextField(blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["wilaya"], name="client_wilaya_idx"),
            models.Index(fields=["nom", "prenom"], name="client_nom_prenom_idx"),
        ]

    def __str__(self):
        return f"{self.nom_complet} ({self.telephone})"

    @property
    def nom_complet(self) -> str:
        return f"{self.nom} {self.prenom}".strip()
