"""Charge validation and forwarding to PayEvo."""

import math
import re
from typing import Any

from starlette.responses import Response

from pixgate.common.errors import BadRequest
from pixgate.common.logging import logger, transaction_id_ctx
from pixgate.common.payevo import PayEvoClient, parse_body, relay
from pixgate.services.gerar_pix.schemas import DEFAULT_DOCUMENT_TYPE, Customer, Document, PixChargeRequest


NO_ITEMS = "Nenhum item informado"
INVALID_AMOUNT = "Valor total inválido"
INCOMPLETE_CUSTOMER = "Dados do cliente incompletos"
UPSTREAM_FALLBACK = "Erro ao gerar PIX"

_NON_DIGITS = re.compile(r"[^0-9]")


def digits_only(value: Any) -> str | None:
    """Strip everything but ASCII digits; None for values that are not str/int."""

    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        value = str(value)
    if not isinstance(value, str):
        return None
    return _NON_DIGITS.sub("", value)


def _is_valid_amount(amount: Any) -> bool:
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        return False
    try:
        return math.isfinite(amount) and amount > 0
    except OverflowError:
        # ints beyond float range
        return False


def _filled(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def normalize_document(raw: Any) -> Document | None:
    """Accept `"123.456.789-00"` or `{"number": ..., "type": ...}`."""

    if isinstance(raw, dict):
        number, doc_type = raw.get("number"), raw.get("type")
    else:
        number, doc_type = raw, None
    digits = digits_only(number)
    if not digits:
        return None
    if not isinstance(doc_type, str) or not doc_type:
        doc_type = DEFAULT_DOCUMENT_TYPE
    return Document(number=digits, type=doc_type)


def validate_charge_request(body: Any) -> PixChargeRequest:
    """Check a raw charge body in order and return the normalized request.

    Raises `BadRequest` with the first failing rule: items, then amount,
    then customer data.
    """

    if not isinstance(body, dict):
        body = {}

    items = body.get("items")
    if not isinstance(items, list) or not items:
        raise BadRequest(NO_ITEMS)

    amount = body.get("amount")
    if not _is_valid_amount(amount):
        raise BadRequest(INVALID_AMOUNT)

    raw_customer = body.get("customer")
    if not isinstance(raw_customer, dict):
        raise BadRequest(INCOMPLETE_CUSTOMER)
    if not _filled(raw_customer.get("name")) or not _filled(raw_customer.get("email")):
        raise BadRequest(INCOMPLETE_CUSTOMER)
    document = normalize_document(raw_customer.get("document"))
    if document is None:
        raise BadRequest(INCOMPLETE_CUSTOMER)

    extras = {k: v for k, v in raw_customer.items() if k not in ("name", "email", "document", "phone")}
    customer = Customer(
        name=raw_customer["name"],
        email=raw_customer["email"],
        document=document,
        phone=digits_only(raw_customer.get("phone")) or None,
        **extras,
    )
    optional = {key: body[key] for key in ("paymentMethod", "pix") if key in body}
    return PixChargeRequest(items=items, amount=amount, customer=customer, **optional)


class ChargeService:
    """Creates PIX charges at PayEvo on behalf of the browser."""

    def __init__(self, client: PayEvoClient) -> None:
        self.client = client

    async def create_charge(self, body: Any) -> Response:
        charge = validate_charge_request(body)
        logger.info("creating pix charge amount=%s items=%s", charge.amount, len(charge.items))
        response = await self.client.create_transaction(charge.to_payevo_payload())
        data = parse_body(response)
        if isinstance(data, dict) and data.get("id") is not None:
            transaction_id_ctx.set(str(data["id"]))
            logger.info("pix charge created status=%s", data.get("status"))
        return relay(response, data, UPSTREAM_FALLBACK)
