# clients/admin.py

from django.contrib import admin

from clients.models import Client


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    list_display = ("nom", "prenom", "telephone", "wilaya", "email", "created_at")
    list_filter = ("wilaya",)
    search_fields = ("nom", "prenom", "telephone", "email")
    ordering = ("nom", "prenom")
    readonly_fields = ("created_at", "updated_at")
