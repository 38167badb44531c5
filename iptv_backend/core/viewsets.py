# core/viewsets.py

"""
ENVELOPED MODEL VIEWSET

Base viewset for every domain app:
- list/retrieve/create/update/destroy answer with the success envelope
- PUT is a partial update (only the supplied fields change)
- missing rows raise NotFoundError("<Label> not found")

Subclasses that route writes through a service override perform_create,
perform_update or perform_destroy and keep the envelope for free.
"""

from __future__ import annotations

from django.http import Http404
from rest_framework import status, viewsets
from rest_framework.permissions import IsAuthenticated

from core.exceptions import NotFoundError
from core.pagination import EnvelopePagination
from core.responses import success_response


class EnvelopeModelViewSet(viewsets.ModelViewSet):
    permission_classes = [IsAuthenticated]
    pagination_class = EnvelopePagination
    http_method_names = ["get", "post", "put", "delete", "head", "options"]
    lookup_value_regex = r"\d+"

    not_found_label = "Resource"
    created_message = None
    updated_message = None
    deleted_message = None

    # Serializer used to render the object returned by a write.
    read_serializer_class = None

    def get_object(self):
        try:
            return super().get_object()
        except Http404 as exc:
            raise NotFoundError(f"{self.not_found_label} not found") from exc

    def get_read_serializer(self, *args, **kwargs):
        serializer_class = self.read_serializer_class or self.get_serializer_class()
        kwargs.setdefault("context", self.get_serializer_context())
        return serializer_class(*args, **kwargs)

    def retrieve(self, request, *args, **kwargs):
        instance = self.get_object()
        return success_response(self.get_read_serializer(instance).data)

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(queryset)
        if page is not None:
            data = self.get_read_serializer(page, many=True).data
            return self.get_paginated_response(data)
        return success_response(self.get_read_serializer(queryset, many=True).data)

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        instance = self.perform_create(serializer)
        if instance is None:
            instance = serializer.instance
        return success_response(
            self.get_read_serializer(instance).data,
            message=self.created_message,
            status=status.HTTP_201_CREATED,
        )

    def perform_create(self, serializer):
        return serializer.save()

    def update(self, request, *args, **kwargs):
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        updated = self.perform_update(serializer)
        if updated is None:
            updated = serializer.instance
        return success_response(
            self.get_read_serializer(updated).data,
            message=self.updated_message,
        )

    def perform_update(self, serializer):
        return serializer.save()

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        self.perform_destroy(instance)
        return success_response(None, message=self.deleted_message)
