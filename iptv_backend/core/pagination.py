# core/pagination.py

import math

from django.conf import settings
from rest_framework.pagination import PageNumberPagination

from core.responses import success_response


class EnvelopePagination(PageNumberPagination):
    """
    Page/limit pagination wrapped in the success envelope:

        {"success": true, "data": {"items": [...],
         "pagination": {"total": n, "page": p, "limit": l, "pages": k}}}
    """

    page_size = getattr(settings, "PAGE_SIZE", 50)
    page_query_param = "page"
    page_size_query_param = "limit"
    max_page_size = getattr(settings, "MAX_PAGE_SIZE", 500)

    def get_paginated_response(self, data):
        total = self.page.paginator.count
        limit = self.page.paginator.per_page
        return success_response(
            {
                "items": data,
                "pagination": {
                    "total": total,
                    "page": self.page.number,
                    "limit": limit,
                    "pages": math.ceil(total / limit) if limit else 0,
                },
            }
        )

    def get_paginated_response_schema(self, schema):
        return {
            "type": "object",
            "properties": {
                "success": {"type": "boolean"},
                "data": {
                    "type": "object",
                    "properties": {
                        "items": schema,
                        "pagination": {
                            "type": "object",
                            "properties": {
                                "total": {"type": "integer"},
                                "page": {"type": "integer"},
                                "limit": {"type": "integer"},
                                "pages": {"type": "integer"},
                            },
                        },
                    },
                },
            },
        }
