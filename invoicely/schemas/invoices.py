"""Invoice request/response schemas for API contracts."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class InvoiceItemRequest(BaseModel):
    description: str = Field(default="", max_length=2000)
    quantity: Decimal = Field(ge=0)
    unit_price: Decimal = Field(ge=0, validation_alias=AliasChoices("unit_price", "price"))


class InvoiceCreateRequest(BaseModel):
    # Blank customer and empty items are rejected by the service, not here.
    customer: str = Field(default="", max_length=500)
    customer_email: str | None = Field(
        default=None,
        max_length=320,
        validation_alias=AliasChoices("customer_email", "customerEmail"),
    )
    items: list[InvoiceItemRequest] = Field(default_factory=list)
    notes: str | None = Field(default=None, max_length=10000)
    status: str | None = Field(default=None, max_length=40)


class InvoiceItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    description: str
    quantity: Decimal
    unit_price: Decimal


class InvoiceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    owner: str
    customer: str
    customer_email: str
    items: list[InvoiceItemResponse]
    notes: str
    total: Decimal
    status: str
    date: datetime


class InvoiceSentResponse(BaseModel):
    message: str = "Invoice sent"
    invoice: InvoiceResponse
