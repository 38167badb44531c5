# plateformes/admin.py

from django.contrib import admin

from plateformes.models import BalanceMovement, Plateforme

# ============================================================
# PLATEFORME
# ============================================================


@admin.register(Plateforme)
class PlateformeAdmin(admin.ModelAdmin):
    list_display = (
        "nom",
        "balance",
        "balance_unit",
        "balance_type",
        "solde_initial",
        "updated_at",
    )
    list_filter = ("balance_type",)
    search_fields = ("nom", "description")
    ordering = ("nom",)

    # Balance moves only through the ledger.
    readonly_fields = ("balance", "created_at", "updated_at")

    fieldsets = (
        (
            "Identity",
            {
                "fields": ("nom", "description", "url"),
            },
        ),
        (
            "Balance",
            {
                "fields": (
                    "solde_initial",
                    "balance",
                    "balance_type",
                    "balance_unit",
                    "point_conversion_rate",
                ),
            },
        ),
        (
            "System Fields",
            {
                "fields": ("created_at", "updated_at"),
            },
        ),
    )


# ============================================================
# BALANCE MOVEMENT (STRICTLY IMMUTABLE)
# ============================================================


@admin.register(BalanceMovement)
class BalanceMovementAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "plateforme",
        "reason",
        "delta",
        "balance_after",
        "source_type",
        "source_id",
        "created_at",
    )
    list_filter = ("reason", "source_type", "plateforme")
    search_fields = ("plateforme__nom", "note")
    ordering = ("-created_at",)

    readonly_fields = (
        "plateforme",
        "delta",
        "balance_after",
        "reason",
        "source_type",
        "source_id",
        "note",
        "created_at",
    )

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
