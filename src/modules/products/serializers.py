"""Product DRF serializers for API output.

Input never goes through a serializer: the views build a ``ProductInput``
DTO and the Service Layer validates it.  These serializers only shape
responses (camelCase keys, prices as exact decimal strings).
"""

from __future__ import annotations

from rest_framework import serializers

from modules.products.models import Product


class ProductSerializer(serializers.ModelSerializer):
    """Wire representation of a Product."""

    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "description",
            "price",
            "createdAt",
        ]
        read_only_fields = ["id", "createdAt"]


class SortSerializer(serializers.Serializer):
    property = serializers.CharField(source="sort_key")
    direction = serializers.CharField(source="sort_direction")


class ProductPageSerializer(serializers.Serializer):
    """Page envelope for ``GET /products``."""

    content = ProductSerializer(many=True)
    totalElements = serializers.IntegerField(source="total_elements")
    totalPages = serializers.IntegerField(source="total_pages")
    size = serializers.IntegerField(source="page_size")
    number = serializers.IntegerField(source="page_number")
    numberOfElements = serializers.SerializerMethodField()
    first = serializers.BooleanField(source="is_first")
    last = serializers.BooleanField(source="is_last")
    empty = serializers.SerializerMethodField()
    sort = serializers.SerializerMethodField()

    def get_numberOfElements(self, page) -> int:
        return len(page.content)

    def get_empty(self, page) -> bool:
        return not page.content

    def get_sort(self, page) -> dict | None:
        if page.sort_key is None:
            return None
        return SortSerializer(page).data
