"""Unit tests for PIX charge validation and normalization."""

import pytest

from pixgate.common.errors import BadRequest
from pixgate.services.gerar_pix.service import (
    INCOMPLETE_CUSTOMER,
    INVALID_AMOUNT,
    NO_ITEMS,
    digits_only,
    validate_charge_request,
)


def _rejection(body) -> str:
    with pytest.raises(BadRequest) as excinfo:
        validate_charge_request(body)
    assert excinfo.value.status_code == 400
    return excinfo.value.message


@pytest.mark.parametrize("items", [None, [], {}, "item", 3])
def test_missing_or_empty_items_rejected_first(items):
    """Items are checked before anything else, so other fields do not matter."""

    assert _rejection({"items": items, "amount": -5}) == NO_ITEMS


@pytest.mark.parametrize("body", [None, [], "text", 42])
def test_non_object_body_fails_on_items(body):
    assert _rejection(body) == NO_ITEMS


@pytest.mark.parametrize("amount", [None, 0, -5, -0.01, "100", True, float("inf"), float("nan"), 10**400])
def test_invalid_amount_rejected(charge_body, amount):
    charge_body["amount"] = amount

    assert _rejection(charge_body) == INVALID_AMOUNT


def test_amount_checked_before_customer():
    assert _rejection({"items": [{"title": "x"}], "amount": -5}) == INVALID_AMOUNT


@pytest.mark.parametrize(
    "customer",
    [
        None,
        "Maria",
        {"email": "m@example.com", "document": "12345678909"},
        {"name": "Maria", "document": "12345678909"},
        {"name": "Maria", "email": "m@example.com"},
        {"name": "", "email": "m@example.com", "document": "12345678909"},
        {"name": "Maria", "email": "m@example.com", "document": {}},
        {"name": "Maria", "email": "m@example.com", "document": {"type": "CPF"}},
        {"name": "Maria", "email": "m@example.com", "document": "abc"},
    ],
)
def test_incomplete_customer_rejected(charge_body, customer):
    charge_body["customer"] = customer

    assert _rejection(charge_body) == INCOMPLETE_CUSTOMER


def test_phone_and_document_are_reduced_to_digits(charge_body):
    payload = validate_charge_request(charge_body).to_payevo_payload()

    assert payload["customer"]["phone"] == "11988887777"
    assert payload["customer"]["document"] == {"number": "12345678909", "type": "CPF"}


def test_raw_document_gets_default_type(charge_body):
    charge_body["customer"]["document"] = "987.654.321-00"

    payload = validate_charge_request(charge_body).to_payevo_payload()

    assert payload["customer"]["document"] == {"number": "98765432100", "type": "CPF"}


def test_explicit_document_type_is_kept(charge_body):
    charge_body["customer"]["document"] = {"number": "12.345.678/0001-95", "type": "CNPJ"}

    payload = validate_charge_request(charge_body).to_payevo_payload()

    assert payload["customer"]["document"] == {"number": "12345678000195", "type": "CNPJ"}


def test_missing_phone_is_omitted(charge_body):
    del charge_body["customer"]["phone"]

    payload = validate_charge_request(charge_body).to_payevo_payload()

    assert "phone" not in payload["customer"]


def test_defaults_for_payment_method_and_pix(charge_body):
    payload = validate_charge_request(charge_body).to_payevo_payload()

    assert payload["paymentMethod"] == "PIX"
    assert payload["pix"] == {"expiresInDays": 30}
    assert payload["amount"] == 15000
    assert isinstance(payload["amount"], int)


def test_caller_overrides_and_extras_pass_through(charge_body):
    charge_body["pix"] = {"expiresInDays": 1}
    charge_body["paymentMethod"] = "pix"
    charge_body["customer"]["address"] = {"city": "São Paulo"}

    payload = validate_charge_request(charge_body).to_payevo_payload()

    assert payload["pix"] == {"expiresInDays": 1}
    assert payload["paymentMethod"] == "pix"
    assert payload["customer"]["address"] == {"city": "São Paulo"}
    assert payload["items"] == charge_body["items"]


@pytest.mark.parametrize(
    ("value", "expected"),
    [("(11) 98888-7777", "11988887777"), ("abc", ""), (12345, "12345"), (None, None), (True, None), ({}, None)],
)
def test_digits_only(value, expected):
    assert digits_only(value) == expected
