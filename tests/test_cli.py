# tests/test_cli.py
from rich.console import Console

import cli
from sdk.products_client import ProductsAPIError


def _console():
    return Console(record=True, width=200, color_system=None)


def test_show_page_lists_every_product():
    out = _console()
    page = {
        "page": 1, "limit": 10, "total": 2,
        "data": [
            {"id": "p1", "name": "Widget A", "description": "A nice widget", "price": 19.99,
             "category": "gadgets", "inStock": True},
            {"id": "p2", "name": "Gizmo C", "description": "A useful gizmo", "price": 49.99,
             "category": "electronics", "inStock": False},
        ],
    }
    cli.show_page(page, out=out)
    text = out.export_text()
    assert "Widget A" in text
    assert "$49.99" in text
    assert "2 matching" in text


def test_show_products_empty():
    out = _console()
    cli.show_products([], out=out)
    assert "No products found" in out.export_text()


def test_show_stats():
    out = _console()
    cli.show_stats({"total": 3, "byCategory": {"gadgets": 2, "electronics": 1}}, out=out)
    text = out.export_text()
    assert "3 products" in text
    assert "gadgets" in text


def test_try_api_turns_api_errors_into_none():
    def failing():
        raise ProductsAPIError(404, "Product not found")

    assert cli.try_api(failing) is None
    assert "Product not found" in cli.status_message
    assert cli.try_api(lambda: {"ok": True}, success_msg="done") == {"ok": True}
    assert cli.status_message == "done"
