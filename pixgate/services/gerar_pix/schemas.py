"""Request schemas for PIX charge creation."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PositiveFloat, PositiveInt


DEFAULT_DOCUMENT_TYPE = "CPF"


class Document(BaseModel):
    """Customer tax document, digits only."""

    number: str = Field(min_length=1, pattern=r"^[0-9]+$")
    type: str = DEFAULT_DOCUMENT_TYPE


class Customer(BaseModel):
    """Paying customer. Keys PayEvo understands beyond these pass through."""

    model_config = ConfigDict(extra="allow")

    name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    document: Document
    phone: str | None = None


class PixChargeRequest(BaseModel):
    """Validated charge, ready to be forwarded to PayEvo."""

    model_config = ConfigDict(populate_by_name=True)

    items: list[Any] = Field(min_length=1)
    amount: PositiveInt | PositiveFloat
    customer: Customer
    payment_method: Any = Field(default="PIX", alias="paymentMethod")
    pix: Any = Field(default_factory=lambda: {"expiresInDays": 30})

    def to_payevo_payload(self) -> dict[str, Any]:
        """Body for `POST /transactions`, omitting an absent phone."""

        customer = self.customer.model_dump()
        if customer.get("phone") is None:
            customer.pop("phone", None)
        return {
            "items": self.items,
            "paymentMethod": self.payment_method,
            "pix": self.pix,
            "amount": self.amount,
            "customer": customer,
        }
