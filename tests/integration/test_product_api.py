"""Integration tests for the Product API endpoints."""

from decimal import Decimal

import pytest

from modules.products.models import Product

pytestmark = pytest.mark.integration

PRODUCTS_URL = "/products"


def _detail_url(product_id) -> str:
    return f"{PRODUCTS_URL}/{product_id}"


def _payload(**overrides) -> dict:
    payload = {
        "name": "Laptop",
        "description": "High-performance laptop with 16GB RAM",
        "price": 999.99,
    }
    payload.update(overrides)
    return payload


# ===========================================================================
# POST /products
# ===========================================================================


class TestCreateProduct:
    def test_create_returns_201(self, api_client):
        response = api_client.post(PRODUCTS_URL, _payload(), format="json")

        assert response.status_code == 201
        data = response.json()
        assert isinstance(data["id"], int)
        assert data["name"] == "Laptop"
        assert data["description"] == "High-performance laptop with 16GB RAM"
        assert data["price"] == "999.99"
        assert data["createdAt"] is not None

    def test_create_persists(self, api_client):
        response = api_client.post(PRODUCTS_URL, _payload(), format="json")

        product = Product.objects.get(pk=response.json()["id"])
        assert product.price == Decimal("999.99")

    def test_trailing_slash_is_accepted(self, api_client):
        response = api_client.post(f"{PRODUCTS_URL}/", _payload(), format="json")
        assert response.status_code == 201

    def test_price_as_text(self, api_client):
        response = api_client.post(
            PRODUCTS_URL, _payload(price="10.50"), format="json"
        )
        assert response.status_code == 201
        assert response.json()["price"] == "10.50"

    def test_description_optional(self, api_client):
        payload = _payload()
        del payload["description"]

        response = api_client.post(PRODUCTS_URL, payload, format="json")

        assert response.status_code == 201
        assert response.json()["description"] is None

    def test_client_supplied_id_and_created_at_ignored(self, api_client, make_product):
        existing = make_product()

        response = api_client.post(
            PRODUCTS_URL,
            _payload(id=existing.id, createdAt="2000-01-01T00:00:00Z"),
            format="json",
        )

        assert response.status_code == 201
        data = response.json()
        assert data["id"] != existing.id
        assert not data["createdAt"].startswith("2000")
        assert Product.objects.count() == 2

    def test_validation_errors_are_field_map(self, api_client):
        response = api_client.post(
            PRODUCTS_URL, {"name": "", "price": 0}, format="json"
        )

        assert response.status_code == 400
        assert response.json() == {
            "name": "Name is required",
            "price": "Price must be greater than 0",
        }
        assert not Product.objects.exists()

    def test_short_name(self, api_client):
        response = api_client.post(PRODUCTS_URL, _payload(name="ab"), format="json")

        assert response.status_code == 400
        assert response.json() == {"name": "Name must be at least 3 characters"}

    def test_empty_object_reports_required_fields(self, api_client):
        response = api_client.post(PRODUCTS_URL, {}, format="json")

        assert response.status_code == 400
        assert response.json() == {
            "name": "Name is required",
            "price": "Price is required",
        }

    def test_malformed_price(self, api_client):
        response = api_client.post(
            PRODUCTS_URL, _payload(price="abc"), format="json"
        )

        assert response.status_code == 400
        assert response.json() == {"message": "Invalid number format: abc"}
        assert not Product.objects.exists()

    def test_digit_group_underscores_are_malformed(self, api_client):
        response = api_client.post(
            PRODUCTS_URL, _payload(price="1_000"), format="json"
        )

        assert response.status_code == 400
        assert response.json() == {"message": "Invalid number format: 1_000"}
        assert not Product.objects.exists()

    def test_price_rounding_past_the_column_is_a_field_error(self, api_client):
        response = api_client.post(
            PRODUCTS_URL, _payload(price="99999999999999999.999"), format="json"
        )

        assert response.status_code == 400
        assert response.json() == {
            "price": "Price must be less than 100000000000000000"
        }
        assert not Product.objects.exists()

    def test_numeric_description_stored_as_text(self, api_client):
        response = api_client.post(
            PRODUCTS_URL, _payload(price="10", description=5), format="json"
        )

        assert response.status_code == 201
        assert response.json()["description"] == "5"

    @pytest.mark.parametrize("field", ["name", "description"])
    def test_container_text_field_is_malformed_body(self, api_client, field):
        response = api_client.post(
            PRODUCTS_URL, _payload(**{field: ["Laptop"]}), format="json"
        )

        assert response.status_code == 400
        assert response.json() == {
            "message": f"Invalid request body: '{field}' must be a text value"
        }
        assert not Product.objects.exists()


# ===========================================================================
# GET /products/{id}
# ===========================================================================


class TestRetrieveProduct:
    def test_retrieve(self, api_client, make_product):
        product = make_product(name="Laptop", price=Decimal("999.99"))

        response = api_client.get(_detail_url(product.id))

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == product.id
        assert data["name"] == "Laptop"
        assert data["price"] == "999.99"

    def test_not_found(self, api_client):
        response = api_client.get(_detail_url(999))

        assert response.status_code == 404
        assert response.json() == {"message": "Product not found with id: 999"}

    def test_non_integer_id(self, api_client):
        response = api_client.get(_detail_url("abc"))

        assert response.status_code == 400
        assert response.json() == {
            "message": "Invalid parameter 'id': 'abc' is not a valid integer"
        }

    def test_fractional_id(self, api_client):
        response = api_client.get(_detail_url("1.5"))
        assert response.status_code == 400

    def test_id_beyond_64_bits(self, api_client):
        response = api_client.get(_detail_url("9223372036854775808"))
        assert response.status_code == 400


# ===========================================================================
# PUT /products/{id}
# ===========================================================================


class TestUpdateProduct:
    def test_update(self, api_client, make_product):
        product = make_product()

        response = api_client.put(
            _detail_url(product.id),
            {"name": "Gaming Laptop", "description": None, "price": "1299.00"},
            format="json",
        )

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == product.id
        assert data["name"] == "Gaming Laptop"
        assert data["description"] is None
        assert data["price"] == "1299.00"

    def test_update_keeps_created_at(self, api_client, make_product):
        product = make_product()
        before = api_client.get(_detail_url(product.id)).json()["createdAt"]

        response = api_client.put(_detail_url(product.id), _payload(), format="json")

        assert response.json()["createdAt"] == before

    def test_update_missing_is_404_and_creates_nothing(self, api_client):
        response = api_client.put(_detail_url(42), _payload(), format="json")

        assert response.status_code == 404
        assert response.json() == {"message": "Product not found with id: 42"}
        assert not Product.objects.exists()

    def test_update_missing_with_invalid_payload_is_still_404(self, api_client):
        response = api_client.put(
            _detail_url(42), {"name": "", "price": "abc"}, format="json"
        )
        assert response.status_code == 404

    def test_update_invalid_payload_changes_nothing(self, api_client, make_product):
        product = make_product(name="Widget", price=Decimal("19.99"))

        response = api_client.put(
            _detail_url(product.id), {"name": "Gadget", "price": -1}, format="json"
        )

        assert response.status_code == 400
        assert response.json() == {"price": "Price must be greater than 0"}
        product.refresh_from_db()
        assert product.name == "Widget"
        assert product.price == Decimal("19.99")

    def test_patch_not_allowed(self, api_client, make_product):
        product = make_product()

        response = api_client.patch(
            _detail_url(product.id), {"name": "Other"}, format="json"
        )

        assert response.status_code == 405
        assert "message" in response.json()


# ===========================================================================
# DELETE /products/{id}
# ===========================================================================


class TestDeleteProduct:
    def test_delete(self, api_client, make_product):
        product = make_product()

        response = api_client.delete(_detail_url(product.id))

        assert response.status_code == 204
        assert not Product.objects.filter(pk=product.id).exists()

    def test_get_after_delete_is_404(self, api_client, make_product):
        product = make_product()
        api_client.delete(_detail_url(product.id))

        response = api_client.get(_detail_url(product.id))

        assert response.status_code == 404

    def test_delete_missing(self, api_client):
        response = api_client.delete(_detail_url(999))

        assert response.status_code == 404
        assert response.json() == {"message": "Product not found with id: 999"}
