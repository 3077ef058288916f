# tests/test_sdk.py
import pytest
import requests

from sdk.products_client import ProductsAPIError, ProductsClient


@pytest.fixture
def sdk(client):
    return ProductsClient(base_url="http://testserver", api_key="test-key", session=client)


def test_crud_round_trip(sdk):
    created = sdk.create_product("Lamp", "Desk lamp", 12.5, "lighting", True)
    assert sdk.get_product(created["id"]) == created

    updated = sdk.update_product(created["id"], "Lamp", "Desk lamp", 10.0, "lighting", False)
    assert updated["price"] == 10.0
    assert updated["inStock"] is False

    deleted = sdk.delete_product(created["id"])
    assert deleted["product"]["id"] == created["id"]

    with pytest.raises(ProductsAPIError) as exc:
        sdk.get_product(created["id"])
    assert exc.value.status == 404


def test_list_passes_filters(sdk):
    page = sdk.list_products(category="GADGETS", search="b", page=1, limit=5)
    assert page["total"] == 1
    assert page["data"][0]["name"] == "Widget B"


def test_stats(sdk):
    assert sdk.stats()["byCategory"] == {"gadgets": 2, "electronics": 1}


def test_validation_error_carries_details(sdk):
    with pytest.raises(ProductsAPIError) as exc:
        sdk.create_product("", "d", 1.0, "c", True)
    assert exc.value.status == 400
    assert exc.value.details == "name (string) is required"


def test_wrong_key_raises_401(client):
    bad = ProductsClient(base_url="http://testserver", api_key="wrong", session=client)
    with pytest.raises(ProductsAPIError) as exc:
        bad.stats()
    assert exc.value.status == 401
    assert exc.value.message == "Invalid or missing API key"


def test_non_object_error_body_still_raises_api_error():
    r = requests.Response()
    r.status_code = 502
    r._content = b'["bad gateway"]'
    with pytest.raises(ProductsAPIError) as exc:
        ProductsClient()._handle(r)
    assert exc.value.status == 502
    assert exc.value.message == '["bad gateway"]'
    assert exc.value.details is None
