# produits/models/__init__.py

from .produit import Categorie, CostType, Produit

__all__ = [
    "Categorie",
    "CostType",
    "Produit",
]
