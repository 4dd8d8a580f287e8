"""Tests for product stock normalization."""

import pytest

from src.integrations.policy.stock_normalizer import normalize_stock


def test_none_is_returned_unchanged():
    assert normalize_stock(None) is None


def test_missing_quantity_defaults_to_zero():
    out = normalize_stock({"id": 1, "stock_status": "outofstock"})
    assert out["stock_quantity"] == 0


def test_instock_without_quantity_reports_one():
    assert normalize_stock({"stock_status": "instock"})["stock_quantity"] == 1
    assert normalize_stock({"stock_status": "instock", "stock_quantity": None})["stock_quantity"] == 1
    assert normalize_stock({"stock_status": "instock", "stock_quantity": "0"})["stock_quantity"] == 1


def test_numeric_strings_are_coerced():
    assert normalize_stock({"stock_quantity": "7", "stock_status": "instock"})["stock_quantity"] == 7
    assert normalize_stock({"stock_quantity": " 12 "})["stock_quantity"] == 12
    assert normalize_stock({"stock_quantity": "2.5"})["stock_quantity"] == 2.5
    assert normalize_stock({"stock_quantity": "3.0"})["stock_quantity"] == 3


@pytest.mark.parametrize("quantity", ["abc", "", True, [], {}, float("nan"), float("inf"), -4, "-2"])
def test_unusable_quantities_become_zero(quantity):
    out = normalize_stock({"stock_quantity": quantity, "stock_status": "onbackorder"})
    assert out["stock_quantity"] == 0


def test_out_of_stock_zero_stays_zero():
    out = normalize_stock({"stock_quantity": 0, "stock_status": "outofstock"})
    assert out["stock_quantity"] == 0


def test_other_fields_untouched_and_input_not_mutated():
    product = {"id": 5, "name": "Scarf", "stock_quantity": "3", "stock_status": "instock"}
    out = normalize_stock(product)
    assert out == {"id": 5, "name": "Scarf", "stock_quantity": 3, "stock_status": "instock"}
    assert product["stock_quantity"] == "3"


def test_empty_record_still_gets_a_quantity():
    assert normalize_stock({}) == {"stock_quantity": 0}


@pytest.mark.parametrize(
    "product",
    [
        {},
        {"stock_status": "instock"},
        {"stock_quantity": "9", "stock_status": "instock"},
        {"stock_quantity": "x", "stock_status": "instock"},
        {"stock_quantity": 1.75},
        {"stock_quantity": -1, "stock_status": "outofstock"},
    ],
)
def test_normalize_is_idempotent(product):
    once = normalize_stock(product)
    assert normalize_stock(once) == once
