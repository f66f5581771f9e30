"""Product domain constants.

Defines the fixed set of fields ``GET /products`` can be sorted by and the
model column each one maps to.
"""

from django.db import models


class ProductSortField(models.TextChoices):
    ID = "id", "Id"
    NAME = "name", "Name"
    DESCRIPTION = "description", "Description"
    PRICE = "price", "Price"
    CREATED_AT = "createdAt", "Created at"


SORT_COLUMNS: dict[str, str] = {
    ProductSortField.ID: "id",
    ProductSortField.NAME: "name",
    ProductSortField.DESCRIPTION: "description",
    ProductSortField.PRICE: "price",
    ProductSortField.CREATED_AT: "created_at",
}
