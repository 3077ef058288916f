# tests/test_validation.py
import math

import pytest

from app.errors import ErrorKind
from app.result import Err, Ok
from app.validation import validate_product

VALID = {"name": "X", "description": "Y", "price": 10, "category": "z", "inStock": True}


def test_valid_payload_is_normalized():
    outcome = validate_product(dict(VALID, extra="dropped"))
    assert isinstance(outcome, Ok)
    product = outcome.value
    assert product.name == "X"
    assert product.price == 10
    assert product.in_stock is True
    assert "extra" not in product.model_dump()


def test_every_invalid_field_is_reported():
    outcome = validate_product({})
    assert isinstance(outcome, Err)
    err = outcome.error
    assert err.kind is ErrorKind.VALIDATION
    assert err.status_code == 400
    assert err.message == (
        "name (string) is required; description (string) is required; "
        "price (number) is required; category (string) is required; "
        "inStock (boolean) is required"
    )
    assert err.details == err.message


@pytest.mark.parametrize("price", ["10", None, math.nan, math.inf, True, 10**400])
def test_bad_price_is_rejected(price):
    outcome = validate_product(dict(VALID, price=price))
    assert isinstance(outcome, Err)
    assert outcome.error.message == "price (number) is required"


def test_errors_accumulate_for_several_fields():
    outcome = validate_product(dict(VALID, name="", inStock="yes"))
    assert isinstance(outcome, Err)
    assert outcome.error.message == "name (string) is required; inStock (boolean) is required"


def test_non_object_payload_fails_every_check():
    outcome = validate_product(["not", "an", "object"])
    assert isinstance(outcome, Err)
    assert outcome.error.message.count("is required") == 5
