"""
Product catalogue integration tests.

Verifies:
- Filtered listing with equality, set membership and comparisons
- Ordering by path parameters
- Client errors for malformed search expressions
- Admin-only product maintenance
"""
from fastapi.testclient import TestClient

FILTERED = "/api/products/filtered::orderBy:{order_by}::sortingDirection:{direction}/"


def filtered(client: TestClient, search: str | None, order_by: str = "id", direction: str = "DESC"):
    url = FILTERED.format(order_by=order_by, direction=direction)
    params = {"search": search} if search is not None else None
    return client.get(url, params=params)


class TestFilteredListing:
    """Filtered listing against the demo catalogue."""

    def test_name_and_quantity_greater_than(self, client: TestClient):
        response = client.get(
            "/api/products/filtered::orderBy:id::sortingDirection:DESC/?search=name:ORCL;quantity>1500"
        )

        assert response.status_code == 200
        products = response.json()["data"]
        assert len(products) == 1
        for product in products:
            assert product["title"] == "ORCL"
            assert product["quantity"] > 1500

    def test_category_set_and_quantity_less_than(self, client: TestClient):
        response = filtered(client, "category:[1,2];quantity<2000")

        assert response.status_code == 200
        products = response.json()["data"]
        assert len(products) == 3
        for product in products:
            assert product["category"]["id"] in [1, 2]
            assert product["quantity"] < 2000
        assert [product["id"] for product in products] == [4, 3, 2]

    def test_name_and_price_greater_than(self, client: TestClient):
        response = filtered(client, "name:ETH;price>200")

        assert response.status_code == 200
        products = response.json()["data"]
        assert len(products) == 1
        assert products[0]["title"] == "ETH"
        assert products[0]["price"] > 200

    def test_category_set_and_price_greater_than(self, client: TestClient):
        response = filtered(client, "category:[1,2];price>70")

        assert response.status_code == 200
        products = response.json()["data"]
        assert len(products) == 2
        for product in products:
            assert product["category"]["id"] in [1, 2]
            assert product["price"] > 70

    def test_without_trailing_slash(self, client: TestClient):
        response = client.get(
            "/api/products/filtered::orderBy:id::sortingDirection:ASC",
            params={"search": "name:GOLD"}
        )

        assert response.status_code == 200
        assert [product["title"] for product in response.json()["data"]] == ["GOLD"]

    def test_no_search_returns_everything(self, client: TestClient):
        response = filtered(client, None, direction="ASC")

        assert response.status_code == 200
        assert [product["id"] for product in response.json()["data"]] == [1, 2, 3, 4, 5, 6, 7]

    def test_order_by_price_ascending(self, client: TestClient):
        response = filtered(client, "", order_by="price", direction="asc")

        assert response.status_code == 200
        prices = [product["price"] for product in response.json()["data"]]
        assert prices == sorted(prices)

    def test_title_alias_and_trailing_separator(self, client: TestClient):
        response = filtered(client, "title:ORCL;")

        assert response.status_code == 200
        assert [product["id"] for product in response.json()["data"]] == [5, 1]

    def test_envelope(self, client: TestClient):
        body = filtered(client, "name:BTC").json()

        assert body["status"] == "success"
        assert body["data"][0] == {
            "id": 3,
            "title": "BTC",
            "description": "Bitcoin",
            "price": 41000.0,
            "quantity": 3,
            "image": None,
            "category": {"id": 2, "name": "crypto"},
        }


class TestFilteredListingErrors:
    """Malformed requests are client errors with a fail envelope."""

    def test_unknown_field(self, client: TestClient):
        response = filtered(client, "colour:red")

        assert response.status_code == 400
        body = response.json()
        assert body["status"] == "fail"
        assert "colour" in body["message"]

    def test_comparison_on_text_field(self, client: TestClient):
        assert filtered(client, "name>ORCL").status_code == 400

    def test_value_of_wrong_type(self, client: TestClient):
        assert filtered(client, "quantity>many").status_code == 400

    def test_list_with_comparison(self, client: TestClient):
        assert filtered(client, "category>[1,2]").status_code == 400

    def test_malformed_criterion(self, client: TestClient):
        assert filtered(client, "justtext").status_code == 400

    def test_unknown_sort_field(self, client: TestClient):
        assert filtered(client, None, order_by="colour").status_code == 400

    def test_unknown_sort_direction(self, client: TestClient):
        assert filtered(client, None, direction="UP").status_code == 400

    def test_non_finite_number(self, client: TestClient):
        for search in ("price<nan", "price>inf", "quantity>1_000"):
            response = filtered(client, search)
            assert response.status_code == 400, search
            assert response.json()["status"] == "fail"

    def test_integer_beyond_storage_range(self, client: TestClient):
        response = filtered(client, "id:99999999999999999999999")

        assert response.status_code == 400
        assert response.json()["status"] == "fail"

    def test_values_never_reach_sql(self, client: TestClient):
        response = filtered(client, "name:x' OR '1'='1")

        assert response.status_code == 200
        assert response.json()["data"] == []


class TestProductReads:
    """Public product reads."""

    def test_list_products(self, client: TestClient):
        response = client.get("/api/products")

        assert response.status_code == 200
        assert len(response.json()["data"]) == 7

    def test_get_product(self, client: TestClient):
        response = client.get("/api/products/7")

        assert response.status_code == 200
        assert response.json()["data"]["title"] == "GOLD"

    def test_get_unknown_product(self, client: TestClient):
        response = client.get("/api/products/99")

        assert response.status_code == 404
        assert response.json()["status"] == "fail"


    def test_id_beyond_storage_range(self, client: TestClient):
        response = client.get("/api/products/99999999999999999999999")

        assert response.status_code == 422
        assert response.json()["status"] == "fail"


class TestProductMaintenance:
    """Admin-only product changes."""

    NEW_PRODUCT = {
        "title": "AAPL",
        "description": "Apple Inc.",
        "price": 190.5,
        "quantity": 300,
        "category_id": 1,
    }

    def test_admin_creates_product(self, admin_client: TestClient):
        response = admin_client.post("/api/admin/products", json=self.NEW_PRODUCT)

        assert response.status_code == 201
        product = response.json()["data"]
        assert product["title"] == "AAPL"
        assert product["category"]["name"] == "stocks"

        found = filtered(admin_client, "name:AAPL").json()["data"]
        assert [p["id"] for p in found] == [product["id"]]

    def test_create_in_unknown_category(self, admin_client: TestClient):
        response = admin_client.post(
            "/api/admin/products",
            json={**self.NEW_PRODUCT, "category_id": 99}
        )

        assert response.status_code == 400

    def test_create_with_invalid_price(self, admin_client: TestClient):
        response = admin_client.post(
            "/api/admin/products",
            json={**self.NEW_PRODUCT, "price": 0}
        )

        assert response.status_code == 422

    def test_user_cannot_create_product(self, user_client: TestClient):
        response = user_client.post("/api/admin/products", json=self.NEW_PRODUCT)

        assert response.status_code == 403

    def test_anonymous_cannot_create_product(self, client: TestClient):
        response = client.post("/api/admin/products", json=self.NEW_PRODUCT)

        assert response.status_code == 401

    def test_admin_updates_product(self, admin_client: TestClient):
        response = admin_client.patch(
            "/api/admin/products/1",
            json={"quantity": 10, "title": None}
        )

        assert response.status_code == 200
        product = response.json()["data"]
        assert product["quantity"] == 10
        assert product["title"] == "ORCL"

    def test_quantity_beyond_storage_range(self, admin_client: TestClient):
        response = admin_client.patch("/api/admin/products/1", json={"quantity": 2 ** 63})

        assert response.status_code == 422

    def test_update_unknown_product(self, admin_client: TestClient):
        response = admin_client.patch("/api/admin/products/99", json={"quantity": 1})

        assert response.status_code == 404

    def test_admin_deletes_product(self, admin_client: TestClient):
        response = admin_client.delete("/api/admin/products/7")

        assert response.status_code == 204
        assert admin_client.get("/api/products/7").status_code == 404
